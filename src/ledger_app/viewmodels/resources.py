"""Household resources (emergency plans, warranties, rental agreements...)."""
from typing import List, Optional

from shared.enums import ResourceType
from shared.schemas import FamilyResource, ResourceDetailResponse, ResourceRequest, ResourcesResponse
from ..services import endpoints
from .base import ResourceViewModel


class ResourcesViewModel(ResourceViewModel):
    parse_error_message = "Failed to parse resource data"

    def __init__(self, api, dispatcher=None):
        super().__init__(api, dispatcher)
        self.counts = None
        self.files = []
        self.type_filter: Optional[ResourceType] = None

    @property
    def resources(self) -> List[FamilyResource]:
        return self.items

    def _fetch_list(self):
        if self.type_filter is not None:
            endpoint = endpoints.resources_by_type(self.type_filter)
        else:
            endpoint = endpoints.resources()
        return self.api.request(endpoint, model=ResourcesResponse)

    def _apply_list(self, response: ResourcesResponse):
        self.items = response.resources or []
        if response.counts is not None:
            self.counts = response.counts

    def load_resources(self, resource_type: Optional[ResourceType] = None, scope=None):
        self.type_filter = resource_type
        return self.run_load(self._fetch_list, self._apply_list, "Failed to load resources",
                             scope=scope, show_loading=not self.items)

    def refresh_resources(self, scope=None):
        return self.run_refresh(self._fetch_list, self._apply_list, scope=scope)

    def load_resource(self, resource_id, scope=None):
        def fetch():
            return self.api.request(endpoints.resource(resource_id), model=ResourceDetailResponse)

        def apply(response: ResourceDetailResponse):
            self.selected = response.resource
            self.files = response.files or (response.resource.files if response.resource else None) or []

        return self.run_load(fetch, apply, "Failed to load resource details", scope=scope)

    def create_resource(self, request: ResourceRequest, scope=None):
        def fetch():
            return self.api.request(endpoints.create_resource(), json=request)

        def apply(_):
            self.load_resources(self.type_filter, scope=scope)

        return self.run_mutation(fetch, apply, "Failed to create resource", scope=scope,
                                 success_message="Resource created")

    def update_resource(self, resource_id, request: ResourceRequest, scope=None):
        def fetch():
            return self.api.request(endpoints.update_resource(resource_id), json=request)

        def apply(_):
            self.load_resource(resource_id, scope=scope)

        return self.run_mutation(fetch, apply, "Failed to update resource", scope=scope,
                                 success_message="Resource updated")

    def delete_resource(self, resource_id, scope=None):
        def fetch():
            self.api.request_empty(endpoints.delete_resource(resource_id))

        def apply(_):
            self.items = [r for r in self.items if r.id != resource_id]
            if self.selected is not None and self.selected.id == resource_id:
                self.selected = None
                self.files = []

        return self.run_mutation(fetch, apply, "Failed to delete resource", scope=scope)

    def filter_by_type(self, resource_type: ResourceType) -> List[FamilyResource]:
        return [r for r in self.items if r.document_type == resource_type]

    def download(self, file, dest_dir=None):
        """Save one attachment of the selected resource; returns the saved path."""
        url = file.download_url or file.view_url
        if not url:
            raise ValueError(f"File {file.display_name} has no download link")
        return self.api.download_file(url, dest_dir=dest_dir)
