"""Family circles, their members and the circle's document tabs."""
from dataclasses import dataclass
from typing import List, Optional

from shared.schemas import (
    CreateFamilyCircleRequest, FamilyCircle, FamilyCircleDetailResponse, FamilyCirclesResponse,
    FamilyMember, FamilyMemberBasic, FamilyMemberRequest, FamilyMembersResponse, FamilyResource,
    LegalDocument,
)
from shared.validation import ValidationError, Validator
from ..services import endpoints
from ..services.network_queue import gather
from .base import ResourceViewModel


@dataclass
class MemberForm:
    first_name: str = ''
    last_name: str = ''
    email: str = ''
    phone: str = ''
    phone_country_code: str = ''
    date_of_birth: str = ''
    relationship: str = ''
    father_name: str = ''
    mother_name: str = ''
    is_minor: bool = False
    co_parenting_enabled: bool = False
    immigration_status: str = ''
    profile_image: Optional[str] = None

    @classmethod
    def from_member(cls, member: FamilyMemberBasic):
        return cls(
            first_name=member.first_name or '',
            last_name=member.last_name or '',
            email=member.email or '',
            phone=member.phone or '',
            date_of_birth=(member.date_of_birth or '')[:10],
            relationship=member.relationship or '',
            is_minor=bool(member.is_minor),
            co_parenting_enabled=bool(member.co_parenting_enabled),
            immigration_status=member.immigration_status or '',
        )

    def to_request(self) -> FamilyMemberRequest:
        if not self.first_name.strip() or not self.last_name.strip():
            raise ValidationError("Please enter first and last name")
        Validator.validate_required(self.date_of_birth, "Date of birth")
        Validator.validate_required(self.relationship, "Relationship")
        email = Validator.validate_email(self.email) if self.email.strip() else None

        return FamilyMemberRequest(
            first_name=self.first_name.strip(),
            last_name=self.last_name.strip(),
            email=email,
            phone=self.phone.strip() or None,
            phone_country_code=self.phone_country_code or None,
            date_of_birth=self.date_of_birth,
            relationship=self.relationship,
            father_name=self.father_name.strip() or None,
            mother_name=self.mother_name.strip() or None,
            is_minor=self.is_minor,
            co_parenting_enabled=self.co_parenting_enabled,
            immigration_status=self.immigration_status or None,
            profile_image=self.profile_image,
        )


class FamilyViewModel(ResourceViewModel):
    """Circles are ``items``; the selected circle's members and documents hang off it."""

    parse_error_message = "Failed to parse family data"

    def __init__(self, api, dispatcher=None):
        super().__init__(api, dispatcher)
        self.members: List[FamilyMemberBasic] = []
        self.selected_member: Optional[FamilyMember] = None
        self.family_resources: List[FamilyResource] = []
        self.legal_documents: List[LegalDocument] = []
        self.member_form = MemberForm()

    @property
    def circles(self) -> List[FamilyCircle]:
        return self.items

    # Circles
    def _fetch_circles(self):
        return self.api.request(endpoints.family_circles(), model=FamilyCirclesResponse)

    def _apply_circles(self, response: FamilyCirclesResponse):
        self.items = response.family_circles or []

    def load_circles(self, scope=None):
        return self.run_load(self._fetch_circles, self._apply_circles, "Failed to load family circles",
                             scope=scope, show_loading=not self.items)

    def refresh_circles(self, scope=None):
        return self.run_refresh(self._fetch_circles, self._apply_circles, scope=scope)

    def create_circle(self, name, description=None, include_me=True, scope=None):
        try:
            name = Validator.validate_required((name or '').strip(), "Circle name")
        except ValidationError as e:
            return self.fail_validation(e)
        body = CreateFamilyCircleRequest(name=name, description=description or None, include_me=include_me)

        def fetch():
            payload = self.api.request(endpoints.create_family_circle(), json=body)
            return self.decode_keyed(FamilyCircle, payload, 'family_circle')

        def apply(circle):
            self.items.insert(0, circle)

        return self.run_mutation(fetch, apply, "Failed to create family circle", scope=scope,
                                 success_message="Family circle created")

    def load_circle(self, circle_id, scope=None):
        def fetch():
            return self.api.request(endpoints.family_circle(circle_id), model=FamilyCircleDetailResponse)

        def apply(response: FamilyCircleDetailResponse):
            self.selected = response.family_circle
            if response.family_circle.members is not None:
                self.members = response.family_circle.members

        return self.run_load(fetch, apply, "Failed to load family circle", scope=scope)

    # Members
    def _fetch_members(self, circle_id):
        return self.api.request(endpoints.family_members(circle_id), model=FamilyMembersResponse)

    def _apply_members(self, response: FamilyMembersResponse):
        self.members = response.members or []

    def load_members(self, circle_id, scope=None):
        return self.run_load(lambda: self._fetch_members(circle_id), self._apply_members,
                             "Failed to load family members", scope=scope, show_loading=not self.members)

    def refresh_members(self, circle_id, scope=None):
        return self.run_refresh(lambda: self._fetch_members(circle_id), self._apply_members, scope=scope)

    def load_member(self, circle_id, member_id, scope=None):
        def fetch():
            payload = self.api.request(endpoints.family_member(circle_id, member_id))
            return self.decode_keyed(FamilyMember, payload, 'member')

        def apply(member):
            self.selected_member = member

        return self.run_load(fetch, apply, "Failed to load member details", scope=scope)

    def create_member(self, circle_id, scope=None):
        try:
            body = self.member_form.to_request()
        except ValidationError as e:
            return self.fail_validation(e)

        def fetch():
            return self.api.request(endpoints.create_family_member(circle_id), json=body)

        def apply(_):
            self.member_form = MemberForm()
            self.load_members(circle_id, scope=scope)

        return self.run_mutation(fetch, apply, "Failed to add family member", scope=scope,
                                 success_message="Family member added")

    def update_member(self, circle_id, member_id, scope=None):
        try:
            body = self.member_form.to_request()
        except ValidationError as e:
            return self.fail_validation(e)

        def fetch():
            return self.api.request(endpoints.update_family_member(circle_id, member_id), json=body)

        def apply(_):
            self.load_member(circle_id, member_id, scope=scope)

        return self.run_mutation(fetch, apply, "Failed to update family member", scope=scope,
                                 success_message="Family member updated")

    def delete_member(self, circle_id, member_id, scope=None):
        def fetch():
            self.api.request_empty(endpoints.delete_family_member(circle_id, member_id))

        def apply(_):
            self.members = [m for m in self.members if m.id != member_id]
            if self.selected_member is not None and self.selected_member.id == member_id:
                self.selected_member = None

        return self.run_mutation(fetch, apply, "Failed to delete family member", scope=scope)

    # Circle document tabs
    def load_family_resources(self, circle_id, scope=None):
        def fetch():
            payload = self.api.request(endpoints.family_circle_resources(circle_id))
            return self.decode_keyed(FamilyResource, payload, 'family_resources', many=True)

        def apply(resources):
            self.family_resources = resources

        def reset():
            self.family_resources = []

        return self.run_secondary(fetch, apply, scope=scope, on_failure=reset)

    def load_legal_documents(self, circle_id, scope=None):
        def fetch():
            payload = self.api.request(endpoints.family_circle_legal_documents(circle_id))
            return self.decode_keyed(LegalDocument, payload, 'legal_documents', many=True)

        def apply(documents):
            self.legal_documents = documents

        def reset():
            self.legal_documents = []

        return self.run_secondary(fetch, apply, scope=scope, on_failure=reset)

    def load_circle_documents(self, circle_id, scope=None):
        """Fetch resources and legal documents concurrently; resolves when both land."""
        return gather([
            self.load_family_resources(circle_id, scope=scope),
            self.load_legal_documents(circle_id, scope=scope),
        ])

    def edit_member(self, member: FamilyMemberBasic):
        self.member_form = MemberForm.from_member(member)

    # Local queries
    def filter_members(self, minors_only=False, relationship=None) -> List[FamilyMemberBasic]:
        members = self.members
        if minors_only:
            members = [m for m in members if m.is_minor]
        if relationship:
            members = [m for m in members if m.relationship == relationship]
        return list(members)

    def search_members(self, query) -> List[FamilyMemberBasic]:
        query = (query or '').strip().lower()
        if not query:
            return list(self.members)
        return [
            m for m in self.members
            if query in m.display_name.lower() or query in (m.email or '').lower()
        ]
