"""Wills, trusts, powers of attorney and medical directives."""
from typing import List

from shared.enums import LegalDocumentStatus
from shared.schemas import LegalDocument, LegalDocumentDetailResponse, LegalDocumentsResponse
from ..services import endpoints
from .base import ResourceViewModel


class LegalDocumentsViewModel(ResourceViewModel):
    parse_error_message = "Failed to parse legal document data"

    def __init__(self, api, dispatcher=None):
        super().__init__(api, dispatcher)
        self.files = []
        self.family_circle = None

    @property
    def documents(self) -> List[LegalDocument]:
        return self.items

    def _fetch_list(self):
        return self.api.request(endpoints.legal_documents(), model=LegalDocumentsResponse)

    def _apply_list(self, response: LegalDocumentsResponse):
        self.items = response.legal_documents or []

    def load_documents(self, scope=None):
        return self.run_load(self._fetch_list, self._apply_list, "Failed to load legal documents",
                             scope=scope, show_loading=not self.items)

    def refresh_documents(self, scope=None):
        return self.run_refresh(self._fetch_list, self._apply_list, scope=scope)

    def load_document(self, document_id, scope=None):
        def fetch():
            return self.api.request(endpoints.legal_document(document_id), model=LegalDocumentDetailResponse)

        def apply(response: LegalDocumentDetailResponse):
            self.selected = response.legal_document
            self.files = response.files or []
            self.family_circle = response.family_circle

        return self.run_load(fetch, apply, "Failed to load document details", scope=scope)

    @property
    def expiring_soon(self) -> List[LegalDocument]:
        return [d for d in self.items if d.is_expiring_soon]

    def active_documents(self) -> List[LegalDocument]:
        return [d for d in self.items if d.status == LegalDocumentStatus.ACTIVE]
