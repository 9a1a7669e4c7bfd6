"""Home dashboard: overview stats, quick actions and reminders."""
from typing import List

from shared.schemas import DashboardOverview, Reminder, RemindersResponse
from ..services import endpoints
from .base import ResourceViewModel


class DashboardViewModel(ResourceViewModel):
    """The overview is the primary load; reminders are secondary and never surface errors."""

    parse_error_message = "Failed to parse dashboard data"

    def __init__(self, api, dispatcher=None):
        super().__init__(api, dispatcher)
        self.stats = None
        self.quick_actions = []
        self.user = None
        self.overdue_reminders: List[Reminder] = []
        self.today_reminders: List[Reminder] = []
        self.upcoming_reminders: List[Reminder] = []

    def _fetch_overview(self):
        return self.api.request(endpoints.dashboard(), model=DashboardOverview)

    def _apply_overview(self, overview: DashboardOverview):
        self.selected = overview
        self.stats = overview.stats
        self.quick_actions = overview.quick_actions or []
        self.user = overview.user

    def load_dashboard(self, scope=None):
        def apply(overview):
            self._apply_overview(overview)
            self.load_reminders(scope=scope)

        return self.run_load(self._fetch_overview, apply, "Failed to load dashboard", scope=scope)

    def load_reminders(self, scope=None):
        def fetch():
            return self.api.request(endpoints.reminders(), model=RemindersResponse)

        def apply(response: RemindersResponse):
            self.overdue_reminders = response.overdue or []
            self.today_reminders = response.today or []
            self.upcoming_reminders = (response.tomorrow or []) + (response.this_week or [])
            self.items = self.overdue_reminders + self.today_reminders + self.upcoming_reminders

        return self.run_secondary(fetch, apply, scope=scope)

    def complete_reminder(self, reminder_id, scope=None):
        def fetch():
            self.api.request_empty(endpoints.complete_reminder(reminder_id))

        def apply(_):
            self.load_reminders(scope=scope)

        return self.run_mutation(fetch, apply, "Failed to complete reminder", scope=scope)

    def refresh(self, scope=None):
        def apply(overview):
            self._apply_overview(overview)
            self.load_reminders(scope=scope)

        return self.run_refresh(self._fetch_overview, apply, scope=scope)

    @property
    def reminder_count(self) -> int:
        return len(self.overdue_reminders) + len(self.today_reminders) + len(self.upcoming_reminders)
