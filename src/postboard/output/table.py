"""Page rendering (plain text, markdown and JSON).

This module is renderer-only. All query/transform logic lives in query/ and
state/view_state.py.
"""

import json
from typing import Dict, List

from ..query.paginator import page_numbers
from ..records.models import Record, ViewState
from ..state.view_state import current_page_records, total_pages

TITLE_WIDTH = 40
BODY_WIDTH = 60


def _one_line(text: str) -> str:
    return " ".join(text.split())


def _clip(text: str, width: int) -> str:
    text = _one_line(text)
    if len(text) <= width:
        return text
    return text[: width - 3] + "..."


def _escape_md(text: str) -> str:
    return _one_line(text).replace("|", "\\|")


def render_pager(state: ViewState) -> str:
    """Page-number controls with the current page in brackets."""
    current = state.page_state.current_page
    parts = [f"[{n}]" if n == current else str(n) for n in page_numbers(state.displayed, state.page_state.page_size)]
    return " ".join(parts)


def _status_line(state: ViewState, rows: List[Record]) -> str:
    total = len(state.displayed)
    if not rows:
        return f"No records. (page {state.page_state.current_page} of {total_pages(state)}, {total} records)"
    return f"Page {state.page_state.current_page} of {total_pages(state)} · {total} records"


def render_text(state: ViewState) -> str:
    """Render the current page as a fixed-width table."""
    rows = list(current_page_records(state))
    lines = []
    lines.append(f"{'User ID':<8} {'ID':<5} {'Title':<{TITLE_WIDTH}} {'Body':<{BODY_WIDTH}}")
    lines.append("-" * (8 + 5 + TITLE_WIDTH + BODY_WIDTH + 3))
    for record in rows:
        lines.append(
            f"{record.user_id:<8} {record.id:<5} "
            f"{_clip(record.title, TITLE_WIDTH):<{TITLE_WIDTH}} "
            f"{_clip(record.body, BODY_WIDTH)}"
        )
    lines.append("")
    pager = render_pager(state)
    if pager:
        lines.append(f"Pages: {pager}")
    lines.append(_status_line(state, rows))
    return "\n".join(lines)


def render_markdown(state: ViewState) -> str:
    """Render the current page as a markdown table."""
    rows = list(current_page_records(state))
    lines = [
        "| User ID | ID | Title | Body |",
        "|---|---|---|---|",
    ]
    for record in rows:
        lines.append(
            f"| {record.user_id} | {record.id} | {_escape_md(record.title)} | {_escape_md(record.body)} |"
        )
    lines.append("")
    pager = render_pager(state)
    if pager:
        lines.append(f"**Pages:** {pager}")
        lines.append("")
    lines.append(_status_line(state, rows))
    return "\n".join(lines)


def to_page_document(state: ViewState) -> Dict:
    rows = current_page_records(state)
    return {
        "page": state.page_state.current_page,
        "page_size": state.page_state.page_size,
        "total_pages": total_pages(state),
        "total_records": len(state.displayed),
        "filter": {
            "userId": state.filter_spec.user_id,
            "text": state.filter_spec.text,
        },
        "sort": state.sort_spec.value,
        "records": [record.model_dump(by_alias=True) for record in rows],
    }


def render_json(state: ViewState) -> str:
    """Render the current page as JSON."""
    return json.dumps(to_page_document(state), indent=2, ensure_ascii=False)
