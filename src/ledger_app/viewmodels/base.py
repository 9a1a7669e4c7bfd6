"""Common machinery for resource view-models.

A view-model owns the observable state of one screen family (list, detail,
form) and exposes one operation per backend call. Operations return a
``concurrent.futures.Future`` resolving to True on success and False on
failure; state is only changed inside completions, which the dispatcher runs
on the UI thread.
"""

import logging
from concurrent.futures import Future
from typing import Any, Callable, List, Optional

from shared.enums import ViewState
from shared.schemas import parse_list, parse_model
from shared.validation import ValidationError
from ..services.errors import APIError, DecodingError
from ..services.network_queue import InlineDispatcher, ScreenScope


def resolved(value) -> Future:
    """Already-finished future, for operations that fail before any I/O."""
    future = Future()
    future.set_result(value)
    return future


class ResourceViewModel:
    """Base class holding the shared loading/error state.

    Attributes:
        items: Primary list for the screen
        selected: Detail record, if one is loaded
        is_loading: A primary load or mutation is in flight
        is_refreshing: A pull-to-refresh is in flight
        error_message: User-facing text of the last primary failure
        success_message: User-facing text of the last successful mutation
    """

    parse_error_message = "Failed to parse response data"

    def __init__(self, api, dispatcher=None):
        self.api = api
        self.dispatcher = dispatcher or InlineDispatcher()
        self.logger = logging.getLogger(self.__class__.__name__)
        self.items: List[Any] = []
        self.selected = None
        self.is_loading = False
        self.is_refreshing = False
        self.error_message: Optional[str] = None
        self.success_message: Optional[str] = None
        self._listeners: List[Callable] = []

    @property
    def view_state(self) -> ViewState:
        if self.is_loading and not self.items and self.selected is None:
            return ViewState.LOADING
        if self.error_message and not self.items and self.selected is None:
            return ViewState.ERROR
        if not self.items and self.selected is None:
            return ViewState.EMPTY
        return ViewState.LOADED

    def subscribe(self, listener: Callable):
        """Register ``listener(view_model)``; called after every state change."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Callable):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify(self):
        for listener in list(self._listeners):
            listener(self)

    def clear_messages(self):
        self.error_message = None
        self.success_message = None
        self.notify()

    def describe_error(self, error, fallback) -> str:
        """Typed API errors carry their own text; anything else gets ``fallback``.

        Schema mismatches are reported with the view-model's ``parse_error_message``
        rather than the decoder's field paths.
        """
        if isinstance(error, DecodingError):
            return self.parse_error_message
        if isinstance(error, (APIError, ValidationError)):
            return getattr(error, 'description', None) or str(error)
        if callable(fallback):
            return fallback(error)
        return fallback

    # Decoding helpers, safe to call from fetch functions on worker threads
    def decode(self, model, payload, many=False):
        result = parse_list(model, payload) if many else parse_model(model, payload)
        if not result.ok:
            raise DecodingError("; ".join(result.errors), result.errors)
        if result.errors:
            self.logger.warning(f"Dropped malformed sections decoding {model.__name__}: {result.errors}")
        return result.value

    def decode_keyed(self, model, payload, key, many=False):
        """Decode ``payload[key]`` when the payload is wrapped, else the payload itself."""
        if isinstance(payload, dict) and key in payload:
            payload = payload[key]
        if many and payload is None:
            return []
        return self.decode(model, payload, many=many)

    def decode_wrapped_or_list(self, wrapper, attr, model, payload):
        """Try the wrapped response shape first, then a bare JSON array."""
        wrapped = parse_model(wrapper, payload)
        if wrapped.ok:
            return getattr(wrapped.value, attr) or []
        return self.decode(model, payload, many=True)

    # Operation runners
    def run_load(self, fetch: Callable, apply: Callable, fallback, scope: Optional[ScreenScope] = None,
                 show_loading=True) -> Future:
        """Primary load: failures surface in ``error_message`` and keep prior data."""
        if show_loading:
            self.is_loading = True
        self.error_message = None
        self.notify()

        def complete(value, error):
            if show_loading:
                self.is_loading = False
            if error is not None:
                self.error_message = self.describe_error(error, fallback)
                self.logger.error(f"{self.error_message} ({error!r})")
                self.notify()
                return False
            apply(value)
            self.notify()
            return True

        def cancelled():
            if show_loading:
                self.is_loading = False

        return self._on_cancel(self.dispatcher.submit(fetch, complete, scope), cancelled)

    def run_mutation(self, fetch: Callable, apply: Callable, fallback, scope: Optional[ScreenScope] = None,
                     success_message: Optional[str] = None) -> Future:
        """Create/update/delete: always shows the loading state."""
        self.success_message = None

        def applied(value):
            apply(value)
            if success_message:
                self.success_message = success_message

        return self.run_load(fetch, applied, fallback, scope=scope, show_loading=True)

    def run_refresh(self, fetch: Callable, apply: Callable, scope: Optional[ScreenScope] = None) -> Future:
        """Pull-to-refresh: failures are logged only; data and errors stay as they were."""
        self.is_refreshing = True
        self.notify()

        def complete(value, error):
            self.is_refreshing = False
            if error is not None:
                self.logger.warning(f"Refresh failed: {error!r}")
                self.notify()
                return False
            apply(value)
            self.notify()
            return True

        def cancelled():
            self.is_refreshing = False

        return self._on_cancel(self.dispatcher.submit(fetch, complete, scope), cancelled)

    def run_secondary(self, fetch: Callable, apply: Callable, scope: Optional[ScreenScope] = None,
                      on_failure: Optional[Callable] = None) -> Future:
        """Supporting load (pickers, side lists): never touches loading or error state."""

        def complete(value, error):
            if error is not None:
                self.logger.warning(f"Secondary load failed: {error!r}")
                if on_failure:
                    on_failure()
                    self.notify()
                return False
            apply(value)
            self.notify()
            return True

        return self.dispatcher.submit(fetch, complete, scope)

    def fail_validation(self, error: ValidationError) -> Future:
        """Report a local form error without touching the network."""
        self.error_message = str(error)
        self.notify()
        return resolved(False)

    def _on_cancel(self, future: Future, reset: Callable) -> Future:
        """Run ``reset`` if ``future`` is cancelled before its completion applies.

        A closed scope drops the completion, so in-flight flags are cleared here.
        """
        def done(f):
            if f.cancelled():
                reset()
                self.notify()

        future.add_done_callback(done)
        return future
