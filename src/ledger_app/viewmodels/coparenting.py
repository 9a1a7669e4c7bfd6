"""Co-parenting: children, schedule, activities and messaging between co-parents."""
from typing import List, Optional

from shared.schemas import (
    CoparentActivity, CoparentChild, CoparentConversation, CoparentMessage, CoparentingDashboardResponse,
    CoparentingSchedule, SendMessageRequest,
)
from shared.validation import ValidationError
from ..services import endpoints
from .base import ResourceViewModel


class CoParentingViewModel(ResourceViewModel):
    parse_error_message = "Failed to parse co-parenting data"

    def __init__(self, api, dispatcher=None):
        super().__init__(api, dispatcher)
        self.dashboard: Optional[CoparentingDashboardResponse] = None
        self.coparents = []
        self.pending_invites = []
        self.stats = None
        self.schedules: List[CoparentingSchedule] = []
        self.activities: List[CoparentActivity] = []
        self.conversations: List[CoparentConversation] = []
        self.selected_conversation: Optional[CoparentConversation] = None
        self.messages: List[CoparentMessage] = []

    @property
    def children(self) -> List[CoparentChild]:
        return self.items

    def load_dashboard(self, scope=None):
        def fetch():
            return self.api.request(endpoints.coparenting_dashboard(), model=CoparentingDashboardResponse)

        def apply(response: CoparentingDashboardResponse):
            self.dashboard = response
            self.items = response.children or []
            self.coparents = response.coparents or []
            self.pending_invites = response.pending_invites or []
            self.stats = response.stats
            self.activities = response.upcoming_activities or []

        return self.run_load(fetch, apply, "Failed to load co-parenting data", scope=scope,
                             show_loading=self.dashboard is None)

    def load_children(self, scope=None):
        def fetch():
            payload = self.api.request(endpoints.coparenting_children())
            return self.decode_keyed(CoparentChild, payload, 'children', many=True)

        def apply(children):
            self.items = children

        return self.run_load(fetch, apply, "Failed to load children", scope=scope, show_loading=not self.items)

    def load_child(self, child_id, scope=None):
        def fetch():
            payload = self.api.request(endpoints.coparenting_child(child_id))
            return self.decode_keyed(CoparentChild, payload, 'child')

        def apply(child):
            self.selected = child

        return self.run_load(fetch, apply, "Failed to load child", scope=scope)

    def load_schedule(self, scope=None):
        def fetch():
            payload = self.api.request(endpoints.coparenting_schedule())
            return self.decode_keyed(CoparentingSchedule, payload, 'schedules', many=True)

        def apply(schedules):
            self.schedules = schedules

        return self.run_load(fetch, apply, "Failed to load schedule", scope=scope)

    def load_activities(self, scope=None):
        def fetch():
            payload = self.api.request(endpoints.coparenting_activities())
            return self.decode_keyed(CoparentActivity, payload, 'activities', many=True)

        def apply(activities):
            self.activities = activities

        return self.run_load(fetch, apply, "Failed to load activities", scope=scope)

    def load_conversations(self, scope=None):
        def fetch():
            payload = self.api.request(endpoints.coparenting_conversations())
            return self.decode_keyed(CoparentConversation, payload, 'conversations', many=True)

        def apply(conversations):
            self.conversations = conversations

        return self.run_load(fetch, apply, "Failed to load conversations", scope=scope)

    def load_messages(self, conversation_id, scope=None):
        def fetch():
            payload = self.api.request(endpoints.coparenting_conversation(conversation_id))
            return self.decode_keyed(CoparentConversation, payload, 'conversation')

        def apply(conversation: CoparentConversation):
            self.selected_conversation = conversation
            self.messages = conversation.messages or []

        return self.run_load(fetch, apply, "Failed to load messages", scope=scope)

    def send_message(self, conversation_id, content, category='general', scope=None):
        if not content or not content.strip():
            return self.fail_validation(ValidationError("Please enter a message"))
        body = SendMessageRequest(content=content.strip(), category=category)

        def fetch():
            payload = self.api.request(endpoints.send_coparenting_message(conversation_id), json=body)
            return self.decode_keyed(CoparentMessage, payload, 'message')

        def apply(message):
            self.messages.append(message)

        return self.run_mutation(fetch, apply, "Failed to send message", scope=scope)

    @property
    def unread_count(self) -> int:
        return sum(c.unread_count for c in self.conversations)
