"""Dashboard, documents and co-parenting screens."""
from .base import Screen


class DashboardScreen(Screen):

    def load(self):
        return self.view_model.load_dashboard(scope=self.scope)

    def refresh(self):
        return self.view_model.refresh(scope=self.scope)

    def on_complete_reminder(self, reminder_id):
        return self.view_model.complete_reminder(reminder_id, scope=self.scope)


class DocumentsScreen(Screen):
    """Insurance and tax return tabs."""

    def load(self):
        return self.view_model.load_documents(scope=self.scope)

    def refresh(self):
        return self.view_model.refresh_documents(scope=self.scope)


class CoParentingScreen(Screen):

    def load(self):
        return self.view_model.load_dashboard(scope=self.scope)

    def on_open_conversation(self, conversation_id):
        return self.view_model.load_messages(conversation_id, scope=self.scope)

    def on_send(self, conversation_id, content, category='general'):
        return self.view_model.send_message(conversation_id, content, category, scope=self.scope)
