"""Dispatch of network work off the UI thread.

View-models hand a dispatcher two callables: ``fetch`` does the blocking
network call, ``complete(value, error)`` applies the outcome to view-model
state and returns the operation's result. Completions always run on the UI
thread, so view-model state is never touched concurrently.

``InlineDispatcher`` runs both immediately on the calling thread (scripts and
tests). ``NetworkQueue`` runs fetches on a thread pool and queues the
outcomes for ``process_results()``, which the UI loop calls.
"""

import logging
import queue
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Iterable, List, Optional


logger = logging.getLogger(__name__)


class ScreenScope:
    """Cancellation scope tied to a screen's lifetime.

    Futures submitted under a scope are cancelled when it closes, and any
    completion that arrives afterwards is dropped without being applied.
    """

    def __init__(self, name='screen'):
        self.name = name
        self.closed = False
        self._futures = set()
        self._lock = threading.Lock()

    def track(self, future: Future):
        with self._lock:
            if self.closed:
                future.cancel()
                return
            self._futures.add(future)
        future.add_done_callback(self._forget)

    def _forget(self, future):
        with self._lock:
            self._futures.discard(future)

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._futures)

    def close(self):
        """Cancel every outstanding future; later completions are discarded."""
        with self._lock:
            self.closed = True
            futures = list(self._futures)
            self._futures.clear()
        for future in futures:
            future.cancel()
        if futures:
            logger.debug(f"Scope {self.name} closed, cancelled {len(futures)} pending operation(s)")


def _finish(future: Future, complete: Callable, value: Any, error: Optional[BaseException],
            scope: Optional[ScreenScope]):
    """Apply a completion unless the operation was cancelled meanwhile."""
    if future.cancelled() or (scope is not None and scope.closed):
        future.cancel()
        return
    try:
        outcome = complete(value, error)
    except Exception as e:
        logger.error(f"Error applying completion: {e}", exc_info=True)
        future.set_exception(e)
        return
    future.set_result(outcome)


def _run_fetch(fetch: Callable):
    try:
        return fetch(), None
    except Exception as e:
        return None, e


class InlineDispatcher:
    """Runs fetch and completion synchronously; returned futures are already resolved."""

    def submit(self, fetch: Callable, complete: Callable, scope: Optional[ScreenScope] = None) -> Future:
        future = Future()
        if scope is not None:
            scope.track(future)
            if future.cancelled():
                return future
        value, error = _run_fetch(fetch)
        _finish(future, complete, value, error, scope)
        return future


class NetworkQueue:
    """Thread-pool dispatcher whose completions are applied on the owner thread.

    The thread that constructs the queue owns it; only that thread may call
    ``process_results``.
    """

    def __init__(self, max_workers=4):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix='network')
        self.result_queue = queue.Queue()
        self.owner_thread = threading.get_ident()
        self.running = True
        self.logger.info(f"Network queue started with {max_workers} worker(s)")

    def submit(self, fetch: Callable, complete: Callable, scope: Optional[ScreenScope] = None) -> Future:
        """Schedule ``fetch`` on the pool; returns a future for the completion's result."""
        if not self.running:
            raise RuntimeError("Network queue has been stopped")

        future = Future()
        if scope is not None:
            scope.track(future)
            if future.cancelled():
                return future

        def run():
            if future.cancelled():
                return
            value, error = _run_fetch(fetch)
            self.result_queue.put((future, complete, value, error, scope))

        self.executor.submit(run)
        return future

    def process_results(self) -> int:
        """Apply every queued completion; returns how many were handled.

        Raises:
            RuntimeError: When called from any thread other than the owner
        """
        if threading.get_ident() != self.owner_thread:
            raise RuntimeError("process_results must be called from the thread that owns the network queue")

        handled = 0
        while True:
            try:
                future, complete, value, error, scope = self.result_queue.get_nowait()
            except queue.Empty:
                break
            _finish(future, complete, value, error, scope)
            handled += 1
        return handled

    def wait_for(self, future: Future, timeout=10.0, poll_interval=0.01):
        """Pump completions on the owner thread until ``future`` is done.

        Returns the future's result.

        Raises:
            TimeoutError: If the future does not finish within ``timeout``
        """
        deadline = time.monotonic() + timeout
        while not future.done():
            self.process_results()
            if future.done():
                break
            if time.monotonic() > deadline:
                raise TimeoutError("Timed out waiting for network operation")
            time.sleep(poll_interval)
        return future.result()

    def stop(self):
        """Stop accepting work and wait for in-flight fetches to finish."""
        self.running = False
        self.executor.shutdown(wait=True)
        self.logger.info("Network queue stopped")


def gather(futures: Iterable[Future]) -> Future:
    """Future that resolves once every input has finished.

    The result lists each input's result in order, with None for inputs that
    were cancelled. The first input exception becomes the combined exception.
    """
    futures = list(futures)
    combined = Future()
    if not futures:
        combined.set_result([])
        return combined

    lock = threading.Lock()
    remaining = [len(futures)]

    def on_done(_):
        with lock:
            remaining[0] -= 1
            if remaining[0]:
                return
        results: List[Any] = []
        for f in futures:
            if f.cancelled():
                results.append(None)
                continue
            exc = f.exception()
            if exc is not None:
                combined.set_exception(exc)
                return
            results.append(f.result())
        combined.set_result(results)

    for f in futures:
        f.add_done_callback(on_done)
    return combined
