"""Tests for the page renderers, including the renderer-only rule."""

import ast
import json
from pathlib import Path

from postboard.output.table import render_json, render_markdown, render_pager, render_text
from postboard.query.paginator import page_numbers
from postboard.state import view_state

from conftest import make_record

RENDERER_FILE = Path(__file__).resolve().parents[1] / "src" / "postboard" / "output" / "table.py"


def test_table_module_is_renderer_only():
    """output/table.py must not reach the network or the store."""
    source = RENDERER_FILE.read_text(encoding="utf-8")
    tree = ast.parse(source, filename=str(RENDERER_FILE))

    violations = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.name.split(".")[0] in ("requests", "urllib", "http"):
                    violations.append(f"Import of '{alias.name}'")
        elif isinstance(node, ast.ImportFrom) and node.module:
            if "retrieval" in node.module or node.module.endswith("store"):
                violations.append(f"Import from '{node.module}'")
            if node.module.split(".")[0] in ("requests", "urllib", "http"):
                violations.append(f"Import from '{node.module}'")

    assert not violations, "Renderer-only violations:\n" + "\n".join(violations)


def _state(twenty_five, page=1):
    state = view_state.load_collection(view_state.initial_state(), twenty_five)
    return view_state.go_to_page(state, page)


def test_render_text_shows_current_page_and_pager(twenty_five):
    output = render_text(_state(twenty_five, page=2))

    assert "User ID" in output
    assert "title 11" in output
    assert "title 20" in output
    assert "title 21" not in output
    assert "Pages: 1 [2] 3" in output
    assert "Page 2 of 3 · 25 records" in output


def test_render_text_empty_collection():
    output = render_text(view_state.initial_state())

    assert "No records." in output
    assert "Pages:" not in output


def test_render_text_clips_long_values():
    record = make_record(1, title="t" * 100, body="line one\nline two " + "b" * 200)
    state = view_state.load_collection(view_state.initial_state(), [record])

    output = render_text(state)

    assert "t" * 100 not in output
    assert "line one line two" in output
    assert "..." in output


def test_render_pager_marks_page_beyond_end(twenty_five):
    assert render_pager(_state(twenty_five, page=4)) == "1 2 3"


def test_render_markdown_escapes_pipes():
    record = make_record(1, title="a | b", body="c")
    state = view_state.load_collection(view_state.initial_state(), [record])

    output = render_markdown(state)

    assert "| User ID | ID | Title | Body |" in output
    assert "a \\| b" in output
    assert "**Pages:** [1]" in output


def test_render_json_document(twenty_five):
    state = view_state.apply_filters(_state(twenty_five), "2", "")
    state = view_state.sort_by_title(state)

    document = json.loads(render_json(state))

    assert document["page"] == 1
    assert document["page_size"] == 10
    assert document["total_pages"] == 1
    assert document["total_records"] == 9
    assert document["filter"] == {"userId": 2, "text": None}
    assert document["sort"] == "title"
    assert set(document["records"][0]) == {"id", "userId", "title", "body"}


def test_render_pager_lists_every_page_number(twenty_five):
    state = _state(twenty_five)

    assert render_pager(state).replace("[", "").replace("]", "").split() == [str(n) for n in page_numbers(twenty_five)]
    assert render_pager(view_state.initial_state()) == ""
