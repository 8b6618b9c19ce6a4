"""Session record store: holds the current ViewState and announces replacements."""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, List, Optional

from ..records.models import ViewState
from ..retrieval.fetcher import FetchResult, RecordFetcher
from ..utils.logging import get_logger
from . import view_state

logger = get_logger(__name__)

Subscriber = Callable[[ViewState], None]


def _log_load_failure(future: Future) -> None:
    exc = future.exception()
    if exc is not None:
        logger.error(f"Background load failed: {exc}", exc_info=exc)


class RecordStore:
    """
    Owns the single current ViewState of a session.

    Transitions are the pure functions in ``view_state``; the store applies
    them under a lock, swaps in the result and notifies subscribers.
    """

    def __init__(self, state: Optional[ViewState] = None):
        self._state = state if state is not None else view_state.initial_state()
        self._lock = threading.RLock()
        self._subscribers: List[Subscriber] = []
        self._executor: Optional[ThreadPoolExecutor] = None
        self._load_future: Optional[Future] = None

    @property
    def state(self) -> ViewState:
        return self._state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` for state replacements; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _replace(self, new_state: ViewState) -> ViewState:
        self._state = new_state
        for callback in list(self._subscribers):
            callback(new_state)
        return new_state

    def dispatch(self, transition: Callable[..., ViewState], *args) -> ViewState:
        """
        Apply a transition and replace the state.

        Exceptions raised by the transition propagate and leave the state as it was.
        """
        with self._lock:
            new_state = transition(self._state, *args)
            return self._replace(new_state)

    def load(self, fetcher: RecordFetcher) -> FetchResult:
        """
        Run the startup fetch.

        On failure the collections stay empty and the error is only logged.
        """
        result = fetcher.fetch_all()
        if result.ok:
            self.dispatch(view_state.load_collection, result.records)
        else:
            logger.warning(f"Startup fetch failed; showing an empty collection ({result.error})")
        return result

    def load_in_background(self, fetcher: RecordFetcher) -> Future:
        """Start ``load`` on a worker thread so the caller can keep handling input."""
        if self._load_future is not None:
            raise RuntimeError("Startup fetch already started for this store")
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="postboard-fetch")
        self._load_future = self._executor.submit(self.load, fetcher)
        self._load_future.add_done_callback(_log_load_failure)
        self._executor.shutdown(wait=False)
        return self._load_future
