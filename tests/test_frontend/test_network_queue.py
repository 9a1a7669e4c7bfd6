"""Tests for dispatchers, screen scopes and gather."""
import threading
from concurrent.futures import Future

import pytest

from src.ledger_app.services.network_queue import InlineDispatcher, NetworkQueue, ScreenScope, gather


class TestInlineDispatcher:

    def test_success_passes_value(self):
        seen = []

        def complete(value, error):
            seen.append((value, error))
            return True

        future = InlineDispatcher().submit(lambda: 42, complete)
        assert future.done()
        assert future.result() is True
        assert seen == [(42, None)]

    def test_fetch_error_passed_to_completion(self):
        boom = RuntimeError('boom')

        def fetch():
            raise boom

        future = InlineDispatcher().submit(fetch, lambda value, error: error is boom)
        assert future.result() is True

    def test_completion_error_sets_exception(self):
        def complete(value, error):
            raise ValueError('bad state')

        future = InlineDispatcher().submit(lambda: 1, complete)
        with pytest.raises(ValueError):
            future.result()

    def test_closed_scope_skips_everything(self):
        scope = ScreenScope()
        scope.close()
        calls = []

        future = InlineDispatcher().submit(lambda: calls.append('fetch'), lambda v, e: calls.append('complete'), scope)

        assert future.cancelled()
        assert calls == []


class TestNetworkQueue:

    @pytest.fixture
    def queue(self):
        network_queue = NetworkQueue(max_workers=2)
        yield network_queue
        network_queue.stop()

    def test_completion_runs_on_owner_thread(self, queue):
        fetch_threads = []
        complete_threads = []

        def fetch():
            fetch_threads.append(threading.get_ident())
            return 'data'

        def complete(value, error):
            complete_threads.append(threading.get_ident())
            return value

        future = queue.submit(fetch, complete)
        assert queue.wait_for(future) == 'data'
        assert fetch_threads[0] != threading.get_ident()
        assert complete_threads == [threading.get_ident()]

    def test_completion_waits_for_process_results(self, queue):
        started = threading.Event()
        release = threading.Event()

        def fetch():
            started.set()
            release.wait(5)
            return 1

        future = queue.submit(fetch, lambda v, e: v)
        started.wait(5)
        assert not future.done()
        release.set()
        assert queue.wait_for(future) == 1

    def test_process_results_from_other_thread_rejected(self, queue):
        errors = []

        def worker():
            try:
                queue.process_results()
            except RuntimeError as e:
                errors.append(e)

        thread = threading.Thread(target=worker)
        thread.start()
        thread.join(5)
        assert len(errors) == 1

    def test_scope_close_discards_late_completion(self, queue):
        scope = ScreenScope()
        release = threading.Event()
        applied = []

        def fetch():
            release.wait(5)
            return 'late'

        future = queue.submit(fetch, lambda v, e: applied.append(v), scope)
        scope.close()
        release.set()
        queue.executor.shutdown(wait=True)
        queue.process_results()

        assert future.cancelled()
        assert applied == []

    def test_submit_after_stop(self, queue):
        queue.stop()
        with pytest.raises(RuntimeError):
            queue.submit(lambda: 1, lambda v, e: v)


class TestScreenScope:

    def test_tracks_and_forgets(self):
        scope = ScreenScope()
        future = Future()
        scope.track(future)
        assert scope.pending == 1
        future.set_result(True)
        assert scope.pending == 0

    def test_close_cancels_pending(self):
        scope = ScreenScope()
        futures = [Future(), Future()]
        for f in futures:
            scope.track(f)
        scope.close()
        assert all(f.cancelled() for f in futures)
        assert scope.closed


class TestGather:

    def test_waits_for_all(self):
        a, b = Future(), Future()
        combined = gather([a, b])
        a.set_result(True)
        assert not combined.done()
        b.set_result(False)
        assert combined.result() == [True, False]

    def test_empty(self):
        assert gather([]).result() == []

    def test_cancelled_inputs_become_none(self):
        a, b = Future(), Future()
        combined = gather([a, b])
        a.cancel()
        b.set_result(True)
        assert combined.result() == [None, True]

    def test_exception_propagates(self):
        a = Future()
        combined = gather([a])
        a.set_exception(KeyError('x'))
        with pytest.raises(KeyError):
            combined.result()
