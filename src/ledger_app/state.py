"""Application-wide session state for the ledger client."""
from dataclasses import dataclass
from typing import Optional


@dataclass
class SessionState:
    """State shared across screens that does not belong to any one view-model."""
    current_user: Optional[dict] = None
    current_circle_id: Optional[int] = None
    session_expired: bool = False

    def reset(self):
        """Forget everything tied to the signed-in user."""
        self.current_user = None
        self.current_circle_id = None
