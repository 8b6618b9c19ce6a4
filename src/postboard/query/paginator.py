"""Fixed-size page slicing."""

from typing import List

from ..records.models import PAGE_SIZE, Collection

__all__ = ["PAGE_SIZE", "page", "page_count", "page_numbers"]


def _check_page_size(page_size: int) -> None:
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")


def page_count(collection: Collection, page_size: int = PAGE_SIZE) -> int:
    """Number of pages needed for ``collection``; an empty collection has 0 pages."""
    _check_page_size(page_size)
    return -(-len(collection) // page_size)


def page(collection: Collection, page_size: int, page_number: int) -> Collection:
    """
    Return one page of ``collection``.

    Page numbers start at 1. A page number outside ``1..page_count`` yields
    an empty tuple instead of an error.
    """
    if page_number < 1 or page_number > page_count(collection, page_size):
        return ()
    start = (page_number - 1) * page_size
    return tuple(collection[start:start + page_size])


def page_numbers(collection: Collection, page_size: int = PAGE_SIZE) -> List[int]:
    return list(range(1, page_count(collection, page_size) + 1))
