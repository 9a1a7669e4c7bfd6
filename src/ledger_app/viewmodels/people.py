"""Contacts: people the family knows outside its own circles."""
from typing import Dict, List

from shared.schemas import PeopleResponse, Person, PersonDetailResponse
from ..services import endpoints
from .base import ResourceViewModel, resolved


class PeopleViewModel(ResourceViewModel):
    parse_error_message = "Failed to parse contact data"

    def __init__(self, api, dispatcher=None):
        super().__init__(api, dispatcher)
        self.total = 0
        self.by_relationship: Dict[str, int] = {}
        self.detail = None
        self.search_results: List[Person] = []

    @property
    def people(self) -> List[Person]:
        return self.items

    def _fetch_list(self):
        return self.api.request(endpoints.people(), model=PeopleResponse)

    def _apply_list(self, response: PeopleResponse):
        self.items = response.people or []
        self.total = response.total if response.total is not None else len(self.items)
        self.by_relationship = response.by_relationship or {}

    def load_people(self, scope=None):
        return self.run_load(self._fetch_list, self._apply_list, "Failed to load contacts",
                             scope=scope, show_loading=not self.items)

    def refresh_people(self, scope=None):
        return self.run_refresh(self._fetch_list, self._apply_list, scope=scope)

    def load_person(self, person_id, scope=None):
        """Contact plus emails, phones, addresses, dates, links and attachments."""
        def fetch():
            return self.api.request(endpoints.person(person_id), model=PersonDetailResponse)

        def apply(response: PersonDetailResponse):
            self.detail = response
            self.selected = response.person

        return self.run_load(fetch, apply, "Failed to load contact", scope=scope)

    def load_by_relationship(self, relationship, scope=None):
        def fetch():
            payload = self.api.request(endpoints.people_by_relationship(relationship))
            return self.decode_wrapped_or_list(PeopleResponse, 'people', Person, payload)

        def apply(people):
            self.items = people

        return self.run_load(fetch, apply, "Failed to load contacts", scope=scope)

    def search(self, query, scope=None):
        """Server-side search; an empty query clears the results without a request."""
        query = (query or '').strip()
        if not query:
            self.search_results = []
            self.notify()
            return resolved(True)

        def fetch():
            payload = self.api.request(endpoints.search_people(query))
            return self.decode_wrapped_or_list(PeopleResponse, 'people', Person, payload)

        def apply(people):
            self.search_results = people

        return self.run_secondary(fetch, apply, scope=scope)

    def delete_person(self, person_id, scope=None):
        def fetch():
            self.api.request_empty(endpoints.delete_person(person_id))

        def apply(_):
            self.items = [p for p in self.items if p.id != person_id]
            if self.selected is not None and self.selected.id == person_id:
                self.selected = None
                self.detail = None

        return self.run_mutation(fetch, apply, "Failed to delete contact", scope=scope)

    # Local queries
    def filter_by_relationship(self, relationship) -> List[Person]:
        return [p for p in self.items if p.relationship == relationship]

    def filter_by_tag(self, tag) -> List[Person]:
        tag = tag.lower()
        return [p for p in self.items if any(t.lower() == tag for t in p.tags or [])]
