"""View state transitions.

Each handler takes the current ViewState and returns a new one. Nothing here
performs I/O, so every transition can be tested without a terminal.
"""

from typing import Iterable, Optional, Union

from ..errors import NO_FILTER_CRITERIA, ValidationError
from ..query import engine, paginator
from ..records.models import Collection, FilterSpec, PageState, SortSpec, ViewState


def initial_state() -> ViewState:
    return ViewState()


def _with_page(state: ViewState, page_number: int) -> PageState:
    return state.page_state.model_copy(update={"current_page": page_number})


def load_collection(state: ViewState, records: Iterable) -> ViewState:
    """Install a freshly fetched collection as both original and displayed."""
    collection: Collection = tuple(records)
    return state.model_copy(
        update={
            "original": collection,
            "displayed": collection,
            "filter_spec": FilterSpec(),
            "sort_spec": SortSpec.NONE,
            "page_state": _with_page(state, 1),
        }
    )


def apply_filters(
    state: ViewState,
    user_id_input: Union[str, int, None],
    text_input: Optional[str],
) -> ViewState:
    """
    Handle the "Apply Filters" action.

    Filtering always starts from the original collection, so an earlier sort
    is dropped. The page goes back to 1.

    Args:
        state: Current view state
        user_id_input: Raw value of the user id control
        text_input: Raw value of the text control

    Returns:
        New view state

    Raises:
        ValidationError: If neither control holds a usable value
    """
    spec = engine.build_filter_spec(user_id_input, text_input)
    if spec.is_empty:
        raise ValidationError(NO_FILTER_CRITERIA)

    return state.model_copy(
        update={
            "displayed": engine.apply_filter(state.original, spec),
            "filter_spec": spec,
            "sort_spec": SortSpec.NONE,
            "page_state": _with_page(state, 1),
        }
    )


def sort_by_title(state: ViewState) -> ViewState:
    """Handle "Sort by Title". The current page number is kept as is."""
    return state.model_copy(
        update={
            "displayed": engine.sort_by_title(state.displayed),
            "sort_spec": SortSpec.BY_TITLE_ASCENDING,
        }
    )


def reset_filters(state: ViewState) -> ViewState:
    """Handle "Reset Filters": show the original collection from page 1."""
    return state.model_copy(
        update={
            "displayed": engine.reset(state.original),
            "filter_spec": FilterSpec(),
            "sort_spec": SortSpec.NONE,
            "page_state": _with_page(state, 1),
        }
    )


def go_to_page(state: ViewState, page_number: int) -> ViewState:
    # Page numbers below 1 cannot be represented; pages past the end render empty
    if page_number < 1:
        return state
    return state.model_copy(update={"page_state": _with_page(state, page_number)})


def current_page_records(state: ViewState) -> Collection:
    return paginator.page(
        state.displayed,
        state.page_state.page_size,
        state.page_state.current_page,
    )


def total_pages(state: ViewState) -> int:
    return paginator.page_count(state.displayed, state.page_state.page_size)
