import threading

import pytest

from postboard.errors import ValidationError
from postboard.retrieval.fetcher import FetchResult
from postboard.state import view_state
from postboard.state.store import RecordStore


class StubFetcher:
    def __init__(self, records=None, error=None, gate=None):
        self.records = list(records or [])
        self.error = error
        self.gate = gate
        self.calls = 0

    def fetch_all(self):
        self.calls += 1
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if self.error:
            return FetchResult(
                url="https://example.com/posts",
                fetched_at_utc="2026-01-01T00:00:00Z",
                status="FAILURE",
                error=self.error,
            )
        return FetchResult(
            url="https://example.com/posts",
            fetched_at_utc="2026-01-01T00:00:00Z",
            status="SUCCESS",
            status_code=200,
            records=self.records,
        )


def test_load_success_populates_state(twenty_five):
    store = RecordStore()

    result = store.load(StubFetcher(twenty_five))

    assert result.ok
    assert store.state.original == twenty_five
    assert store.state.displayed == twenty_five
    assert store.state.page_state.current_page == 1


def test_load_failure_leaves_empty_collections(caplog):
    store = RecordStore()
    fetcher = StubFetcher(error="boom")

    with caplog.at_level("WARNING", logger="postboard"):
        result = store.load(fetcher)

    assert not result.ok
    assert store.state.original == ()
    assert store.state.displayed == ()
    assert view_state.total_pages(store.state) == 0
    assert fetcher.calls == 1
    assert [rec.levelname for rec in caplog.records if "boom" in rec.message] == ["WARNING"]


def test_dispatch_notifies_subscribers(twenty_five):
    store = RecordStore()
    seen = []
    store.subscribe(seen.append)

    store.load(StubFetcher(twenty_five))
    store.dispatch(view_state.sort_by_title)

    assert len(seen) == 2
    assert seen[-1] is store.state


def test_unsubscribe_stops_notifications(twenty_five):
    store = RecordStore()
    seen = []
    unsubscribe = store.subscribe(seen.append)
    unsubscribe()

    store.load(StubFetcher(twenty_five))

    assert seen == []


def test_failed_transition_keeps_state_and_skips_notification(twenty_five):
    store = RecordStore()
    store.load(StubFetcher(twenty_five))
    before = store.state
    seen = []
    store.subscribe(seen.append)

    with pytest.raises(ValidationError):
        store.dispatch(view_state.apply_filters, "", "")

    assert store.state is before
    assert seen == []


def test_load_in_background_keeps_store_usable_until_fetch_completes(twenty_five):
    gate = threading.Event()
    store = RecordStore()
    future = store.load_in_background(StubFetcher(twenty_five, gate=gate))

    # interface still responds while the fetch is outstanding
    store.dispatch(view_state.go_to_page, 2)
    assert store.state.displayed == ()

    gate.set()
    result = future.result(timeout=5)

    assert result.ok
    assert store.state.displayed == twenty_five
    assert store.state.page_state.current_page == 1


def test_load_in_background_only_once(twenty_five):
    store = RecordStore()
    store.load_in_background(StubFetcher(twenty_five)).result(timeout=5)

    with pytest.raises(RuntimeError):
        store.load_in_background(StubFetcher(twenty_five))


def test_load_in_background_logs_worker_exceptions(twenty_five, caplog):
    gate = threading.Event()
    finished = threading.Event()
    store = RecordStore()

    def failing_render(_state):
        raise RuntimeError("render failed")

    store.subscribe(failing_render)

    with caplog.at_level("ERROR", logger="postboard"):
        future = store.load_in_background(StubFetcher(twenty_five, gate=gate))
        future.add_done_callback(lambda _f: finished.set())
        gate.set()
        assert finished.wait(timeout=5)

    assert isinstance(future.exception(), RuntimeError)
    assert any("render failed" in rec.message for rec in caplog.records)
