"""Headless screen controllers.

A screen binds lifecycle events to view-model operations and owns the
cancellation scope for everything it starts. Rendering is left to whatever
toolkit hosts it; hosts subscribe to the view-model for changes.
"""

import logging

from ..services.network_queue import ScreenScope


class Screen:
    """Lifecycle wiring shared by every screen.

    Subclasses implement ``load()`` and may override ``refresh()``.
    """

    def __init__(self, view_model):
        self.view_model = view_model
        self.scope = ScreenScope(self.__class__.__name__)
        self.logger = logging.getLogger(self.__class__.__name__)
        self.visible = False

    @property
    def state(self):
        return self.view_model.view_state

    @property
    def error_message(self):
        return self.view_model.error_message

    def load(self):
        raise NotImplementedError

    def refresh(self):
        return self.load()

    def on_appear(self):
        if self.scope.closed:
            self.scope = ScreenScope(self.__class__.__name__)
        self.visible = True
        self.logger.debug("Screen appeared")
        return self.load()

    def on_refresh(self):
        return self.refresh()

    def on_retry(self):
        """Retry button on the error view."""
        self.view_model.error_message = None
        return self.load()

    def on_dismiss(self):
        """Leaving the screen cancels its outstanding work."""
        self.visible = False
        self.scope.close()
        self.logger.debug("Screen dismissed")
