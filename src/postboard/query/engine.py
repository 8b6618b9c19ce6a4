"""Filter and sort operations over record collections."""

import re
from typing import Optional, Tuple, Union

from pyuca import Collator

from ..records.models import Collection, FilterSpec, Record

_INTEGER_RE = re.compile(r"^[+-]?\d+$")

# Default Unicode collation table; loaded once per process
_COLLATOR = Collator()


def parse_user_id(raw: Union[str, int, None]) -> Optional[int]:
    """
    Convert the numeric filter input into a user id.

    Empty, blank or non-numeric input means "no userId filter" rather than
    a filter that matches nothing.

    Args:
        raw: Value typed into the user id control (or an int)

    Returns:
        The user id, or None when the input does not name one
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    candidate = str(raw).strip()
    if not _INTEGER_RE.match(candidate):
        return None
    return int(candidate)


def build_filter_spec(user_id_input: Union[str, int, None], text_input: Optional[str]) -> FilterSpec:
    """Build a FilterSpec from the raw values of the two filter controls."""
    text = text_input if text_input else None
    return FilterSpec(user_id=parse_user_id(user_id_input), text=text)


def apply_filter(original: Collection, spec: FilterSpec) -> Collection:
    """
    Keep records matching every criterion present in ``spec``.

    Args:
        original: Collection to filter (left untouched)
        spec: Filter criteria; at least one must be set

    Returns:
        New collection in the input order, possibly empty

    Raises:
        ValueError: If spec carries no criteria
    """
    if spec.is_empty:
        raise ValueError("apply_filter requires at least one criterion")

    needle = spec.text.casefold() if spec.text is not None else None

    def matches(record: Record) -> bool:
        if spec.user_id is not None and record.user_id != spec.user_id:
            return False
        if needle is not None:
            return needle in record.title.casefold() or needle in record.body.casefold()
        return True

    return tuple(record for record in original if matches(record))


def title_collation_key(title: str) -> Tuple[int, ...]:
    """
    Collation key following the Unicode Collation Algorithm.

    Punctuation and symbols sort before digits, digits before letters; letters
    compare by base form first, then accents, then case with lowercase ahead
    of uppercase.
    """
    return _COLLATOR.sort_key(title)


def sort_by_title(collection: Collection) -> Collection:
    # sorted() is stable, so equal titles keep their input order
    return tuple(sorted(collection, key=lambda record: title_collation_key(record.title)))


def reset(original: Collection) -> Collection:
    """Discard any filter or sort and return the original collection."""
    return original
