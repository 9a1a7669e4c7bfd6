"""Family circle and member screens."""
from shared.utils import flow_layout
from ..services.network_queue import gather
from .base import Screen


class FamilyCircleDetailScreen(Screen):
    """Circle header, member grid, and resource/legal document tabs."""

    def __init__(self, view_model, circle_id):
        super().__init__(view_model)
        self.circle_id = circle_id

    def load(self):
        return gather([
            self.view_model.load_circle(self.circle_id, scope=self.scope),
            self.view_model.load_circle_documents(self.circle_id, scope=self.scope),
        ])

    def refresh(self):
        return gather([
            self.view_model.refresh_members(self.circle_id, scope=self.scope),
            self.view_model.load_circle_documents(self.circle_id, scope=self.scope),
        ])

    def on_delete_member(self, member_id):
        return self.view_model.delete_member(self.circle_id, member_id, scope=self.scope)


class MemberDetailScreen(Screen):
    """Member profile backed by a ``MemberRecordsViewModel``."""

    CHIP_SPACING = 8.0

    def load(self):
        return self.view_model.load_member(scope=self.scope)

    def refresh(self):
        return self.view_model.refresh_member(scope=self.scope)

    @property
    def masked_ssn(self):
        return self.view_model.masked_ssn

    @property
    def blood_type(self):
        return self.view_model.blood_type

    def allergy_chips(self, chip_sizes, max_width):
        """Positions for the allergy chips laid out in wrapping rows."""
        return flow_layout(chip_sizes, max_width, spacing=self.CHIP_SPACING)
