"""Pytest configuration and fixtures."""

import json

import pytest
import requests

from postboard.records.models import Record


def make_record(record_id, user_id=1, title=None, body=None):
    return Record(
        id=record_id,
        userId=user_id,
        title=title if title is not None else f"title {record_id}",
        body=body if body is not None else f"body {record_id}",
    )


@pytest.fixture
def records():
    """Small mixed collection used across query and state tests."""
    return (
        make_record(1, user_id=1, title="sunt aut facere", body="quia et suscipit"),
        make_record(2, user_id=1, title="qui est esse", body="est rerum tempore Vitae"),
        make_record(3, user_id=2, title="ea molestias quasi", body="et iusto sed quo"),
        make_record(4, user_id=2, title="Eum et est", body="ullam et saepe vitae"),
        make_record(5, user_id=3, title="nesciunt quas odio", body="repudiandae veniam"),
    )


@pytest.fixture
def twenty_five():
    return tuple(make_record(i, user_id=(i % 3) + 1) for i in range(1, 26))


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload=None, status_code=200, text=None):
        self.status_code = status_code
        if text is None:
            text = json.dumps(payload)
        self.text = text
        self.content = text.encode("utf-8")

    def json(self):
        return json.loads(self.text)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def config():
    return {
        "source": {
            "url": "https://example.com/posts",
            "timeout_seconds": 5,
            "user_agent": "postboard-test",
        },
        "logging": {"level": "WARNING"},
    }
