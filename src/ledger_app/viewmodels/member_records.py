"""Sub-records owned by one family member: identity documents, medical and school data."""
from typing import List, Optional

from shared.enums import MemberDocumentType, MemberRecordKind
from shared.schemas import FamilyMember, MedicalInfoRequest, MemberDocumentRequest
from shared.utils import blood_type_display_name, mask_ssn
from ..services import endpoints
from .base import ResourceViewModel

# Where each kind of record lives on the decoded member
RECORD_ATTRIBUTES = {
    MemberRecordKind.ALLERGY: 'allergies',
    MemberRecordKind.CONDITION: 'medical_conditions',
    MemberRecordKind.EMERGENCY_CONTACT: 'contacts',
    MemberRecordKind.MEDICATION: 'medications',
    MemberRecordKind.PROVIDER: 'healthcare_providers',
    MemberRecordKind.SCHOOL_RECORD: 'school_records',
    MemberRecordKind.VACCINATION: 'vaccinations',
}


class MemberRecordsViewModel(ResourceViewModel):
    """Member detail plus CRUD on its nested records.

    Every successful write reloads the member, so ``selected`` always
    reflects the server's copy.
    """

    parse_error_message = "Failed to parse member data"

    def __init__(self, api, circle_id, member_id, dispatcher=None):
        super().__init__(api, dispatcher)
        self.circle_id = circle_id
        self.member_id = member_id

    @property
    def member(self) -> Optional[FamilyMember]:
        return self.selected

    def load_member(self, scope=None):
        def fetch():
            payload = self.api.request(endpoints.family_member(self.circle_id, self.member_id))
            return self.decode_keyed(FamilyMember, payload, 'member')

        def apply(member):
            self.selected = member

        return self.run_load(fetch, apply, "Failed to load member details", scope=scope)

    def refresh_member(self, scope=None):
        def fetch():
            payload = self.api.request(endpoints.family_member(self.circle_id, self.member_id))
            return self.decode_keyed(FamilyMember, payload, 'member')

        def apply(member):
            self.selected = member

        return self.run_refresh(fetch, apply, scope=scope)

    def _write(self, fetch, fallback, success_message, scope):
        def apply(_):
            self.load_member(scope=scope)

        return self.run_mutation(fetch, apply, fallback, scope=scope, success_message=success_message)

    def save_document(self, request: MemberDocumentRequest, scope=None):
        """Create or replace the member's document of ``request.document_type``."""
        def fetch():
            return self.api.request(
                endpoints.create_member_record(self.circle_id, self.member_id, MemberRecordKind.DOCUMENT),
                json=request,
            )

        return self._write(fetch, "Failed to create document", "Document saved", scope)

    def delete_document(self, document_type: MemberDocumentType, scope=None):
        def fetch():
            self.api.request_empty(endpoints.delete_member_document(self.circle_id, self.member_id, document_type))

        return self._write(fetch, "Failed to delete document", None, scope)

    def save_medical_info(self, request: MedicalInfoRequest, scope=None):
        def fetch():
            return self.api.request(endpoints.member_medical_info(self.circle_id, self.member_id), json=request)

        return self._write(fetch, "Failed to update medical information", "Medical information updated", scope)

    def create_record(self, kind: MemberRecordKind, request, scope=None):
        def fetch():
            return self.api.request(endpoints.create_member_record(self.circle_id, self.member_id, kind),
                                    json=request)

        return self._write(fetch, f"Failed to add {kind.label}", f"{kind.label.capitalize()} added", scope)

    def update_record(self, kind: MemberRecordKind, record_id, request, scope=None):
        def fetch():
            return self.api.request(
                endpoints.update_member_record(self.circle_id, self.member_id, kind, record_id), json=request)

        return self._write(fetch, f"Failed to update {kind.label}", f"{kind.label.capitalize()} updated", scope)

    def delete_record(self, kind: MemberRecordKind, record_id, scope=None):
        def fetch():
            self.api.request_empty(endpoints.delete_member_record(self.circle_id, self.member_id, kind, record_id))

        return self._write(fetch, f"Failed to delete {kind.label}", None, scope)

    # Display values
    def records(self, kind: MemberRecordKind) -> List:
        if self.selected is None or kind not in RECORD_ATTRIBUTES:
            return []
        return getattr(self.selected, RECORD_ATTRIBUTES[kind]) or []

    def document(self, document_type: MemberDocumentType):
        if self.selected is None:
            return None
        return self.selected.document_for(document_type)

    @property
    def masked_ssn(self) -> str:
        ssn = self.document(MemberDocumentType.SOCIAL_SECURITY)
        return mask_ssn(ssn.document_number if ssn else None)

    @property
    def blood_type(self) -> Optional[str]:
        if self.selected is None or self.selected.medical_info is None:
            return None
        info = self.selected.medical_info
        return blood_type_display_name(info.blood_type) or info.blood_type
