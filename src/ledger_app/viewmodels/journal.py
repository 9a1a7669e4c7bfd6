"""Family journal entries, with pinning and a compose form."""
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from shared.schemas import JournalEntry, JournalEntryDetailResponse, JournalEntryRequest, JournalResponse
from shared.validation import ValidationError, Validator
from ..services import endpoints
from .base import ResourceViewModel


@dataclass
class JournalForm:
    title: str = ''
    content: str = ''
    type: str = 'journal'
    mood: Optional[str] = None
    date: str = field(default_factory=lambda: date.today().isoformat())
    time: Optional[str] = None
    visibility: str = 'family'
    is_draft: bool = False
    tags: List[str] = field(default_factory=list)

    def to_request(self) -> JournalEntryRequest:
        content = Validator.validate_required(self.content, "Content")
        tags = [t.strip() for t in self.tags if t and t.strip()]
        return JournalEntryRequest(
            title=self.title.strip() or None,
            content=content.strip(),
            type=self.type,
            mood=self.mood,
            date=self.date,
            time=self.time,
            visibility=self.visibility,
            is_draft=self.is_draft,
            tags=tags or None,
        )


class JournalViewModel(ResourceViewModel):
    """``items`` holds the regular entries; pinned ones are kept apart as the server sends them."""

    parse_error_message = "Failed to parse journal data"

    def __init__(self, api, dispatcher=None):
        super().__init__(api, dispatcher)
        self.pinned_entries: List[JournalEntry] = []
        self.stats = None
        self.tags = []
        self.form = JournalForm()

    @property
    def entries(self) -> List[JournalEntry]:
        return self.items

    @property
    def all_entries(self) -> List[JournalEntry]:
        pinned = set(self.pinned_entries)
        return list(self.pinned_entries) + [e for e in self.items if e not in pinned]

    def _fetch_list(self):
        return self.api.request(endpoints.journal(), model=JournalResponse)

    def _apply_list(self, response: JournalResponse):
        self.items = response.entries or []
        self.pinned_entries = response.pinned_entries or []
        self.stats = response.stats
        self.tags = response.tags or []

    def load_entries(self, scope=None):
        return self.run_load(self._fetch_list, self._apply_list, "Failed to load entries",
                             scope=scope, show_loading=not self.items and not self.pinned_entries)

    def refresh_entries(self, scope=None):
        return self.run_refresh(self._fetch_list, self._apply_list, scope=scope)

    def load_entry(self, entry_id, scope=None):
        def fetch():
            return self.api.request(endpoints.journal_entry(entry_id), model=JournalEntryDetailResponse).entry

        def apply(entry):
            self.selected = entry

        return self.run_load(fetch, apply, lambda e: f"Failed to load entry: {e}", scope=scope)

    def create_entry(self, scope=None):
        try:
            body = self.form.to_request()
        except ValidationError as e:
            return self.fail_validation(e)

        def fetch():
            return self.api.request(endpoints.create_journal_entry(), json=body)

        def apply(_):
            self.form = JournalForm()
            self.load_entries(scope=scope)

        return self.run_mutation(fetch, apply, "Failed to save entry", scope=scope,
                                 success_message="Entry saved")

    def update_entry(self, entry_id, scope=None):
        try:
            body = self.form.to_request()
        except ValidationError as e:
            return self.fail_validation(e)

        def fetch():
            return self.api.request(endpoints.update_journal_entry(entry_id), json=body)

        def apply(_):
            self.form = JournalForm()
            self.load_entry(entry_id, scope=scope)
            self.load_entries(scope=scope)

        return self.run_mutation(fetch, apply, "Failed to update entry", scope=scope,
                                 success_message="Entry updated")

    def delete_entry(self, entry_id, scope=None):
        def fetch():
            self.api.request_empty(endpoints.delete_journal_entry(entry_id))

        def apply(_):
            self.items = [e for e in self.items if e.id != entry_id]
            self.pinned_entries = [e for e in self.pinned_entries if e.id != entry_id]
            if self.selected is not None and self.selected.id == entry_id:
                self.selected = None

        return self.run_mutation(fetch, apply, "Failed to delete entry", scope=scope)

    def toggle_pin(self, entry_id, scope=None):
        """Pinning reloads the list, since the server decides which section an entry is in."""
        def fetch():
            self.api.request_empty(endpoints.toggle_pin_journal_entry(entry_id))

        def apply(_):
            self.load_entries(scope=scope)

        return self.run_secondary(fetch, apply, scope=scope)

    def edit(self, entry: JournalEntry):
        self.form = JournalForm(
            title=entry.title or '',
            content=entry.content or '',
            type=entry.type or 'journal',
            mood=entry.mood,
            date=(entry.date or date.today().isoformat())[:10],
            time=entry.time,
            visibility=entry.visibility or 'family',
            is_draft=bool(entry.is_draft),
            tags=[tag.name for tag in entry.tags or []],
        )

    # Local queries
    def entries_with_tag(self, name) -> List[JournalEntry]:
        return [e for e in self.all_entries if e.has_tag(name)]

    def filter_by_mood(self, mood) -> List[JournalEntry]:
        return [e for e in self.all_entries if e.mood == mood]

    def search(self, query) -> List[JournalEntry]:
        query = (query or '').strip().lower()
        if not query:
            return self.all_entries
        return [
            e for e in self.all_entries
            if query in (e.title or '').lower() or query in (e.content_text or '').lower()
        ]
