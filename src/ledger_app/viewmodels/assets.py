"""Household assets (property, vehicles, valuables) and their attached files."""
from collections import defaultdict
from typing import Dict, List

from shared.schemas import Asset, AssetDetailResponse, AssetsResponse
from ..services import endpoints
from .base import ResourceViewModel


class AssetsViewModel(ResourceViewModel):
    parse_error_message = "Failed to parse asset data"

    def __init__(self, api, dispatcher=None):
        super().__init__(api, dispatcher)
        self.total_value = 0.0
        self.formatted_total_value = "$0"
        self.files = []

    @property
    def assets(self) -> List[Asset]:
        return self.items

    def _fetch_list(self):
        return self.api.request(endpoints.assets(), model=AssetsResponse)

    def _apply_list(self, response: AssetsResponse):
        self.items = response.assets or []
        self.total_value = response.total_value or 0.0
        self.formatted_total_value = response.formatted_total_value or f"${int(self.total_value)}"

    def load_assets(self, scope=None):
        return self.run_load(self._fetch_list, self._apply_list, lambda e: f"Failed to load assets: {e}",
                             scope=scope, show_loading=not self.items)

    def refresh_assets(self, scope=None):
        return self.run_refresh(self._fetch_list, self._apply_list, scope=scope)

    def load_asset(self, asset_id, scope=None):
        def fetch():
            return self.api.request(endpoints.asset(asset_id), model=AssetDetailResponse)

        def apply(response: AssetDetailResponse):
            self.selected = response.asset
            self.files = response.files or []

        return self.run_load(fetch, apply, "Failed to load asset details", scope=scope,
                             show_loading=self.selected is None)

    def load_assets_by_category(self, category, scope=None):
        """Server-side category filter; the response is a bare array."""
        def fetch():
            return self.api.request(endpoints.assets_by_category(category), model=Asset, many=True)

        def apply(assets):
            self.items = assets

        return self.run_load(fetch, apply, "Failed to load assets", scope=scope)

    def download(self, file, dest_dir=None):
        """Save one of the selected asset's files; returns the saved path."""
        url = file.download_url or file.view_url
        if not url:
            raise ValueError(f"File {file.name} has no download link")
        return self.api.download_file(url, dest_dir=dest_dir)

    # Local queries
    @property
    def assets_by_category(self) -> Dict[str, List[Asset]]:
        grouped = defaultdict(list)
        for asset in self.items:
            grouped[asset.category_key].append(asset)
        return dict(grouped)

    def filter_assets(self, category) -> List[Asset]:
        return [a for a in self.items if a.category_key == category]

    def filter_assets_by_status(self, status) -> List[Asset]:
        return [a for a in self.items if a.status == status]

    def search_assets(self, query) -> List[Asset]:
        query = (query or '').strip().lower()
        if not query:
            return list(self.items)
        return [
            a for a in self.items
            if any(query in (text or '').lower() for text in (a.name, a.asset_type, a.description))
        ]
