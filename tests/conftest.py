"""Shared fixtures: a fake Blinko server behind httpx.MockTransport."""

import json
from typing import Any, Optional

import httpx
import pytest

from core.blinko import BlinkoClient
from core.models import Credentials
from tools.dispatcher import NoteToolDispatcher

CREDENTIALS = Credentials(domain="blinko.test", api_key="secret-key")


def make_note(**overrides: Any) -> dict[str, Any]:
    note = {
        "id": 1,
        "type": 0,
        "content": "buy milk",
        "isArchived": False,
        "isRecycle": False,
        "isShare": False,
        "isTop": False,
        "isReviewed": False,
        "createdAt": "2025-03-03T10:00:00.000Z",
        "updatedAt": "2025-03-03T11:30:00.000Z",
    }
    note.update(overrides)
    return note


class FakeBlinko:
    """Answers every request with one canned response and records requests."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.json_body: Any = {}
        self.text: Optional[str] = None
        self.error: Optional[Exception] = None

    def respond(self, status_code: int = 200, json: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self.json_body = json
        self.text = text

    def fail_with(self, error: Exception) -> None:
        self.error = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    @property
    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture
def note_payload():
    """Factory for note JSON as the service sends it."""
    return make_note


@pytest.fixture
def fake_blinko() -> FakeBlinko:
    return FakeBlinko()


@pytest.fixture
def client(fake_blinko: FakeBlinko) -> BlinkoClient:
    return BlinkoClient(CREDENTIALS, transport=httpx.MockTransport(fake_blinko))


@pytest.fixture
def dispatcher(client: BlinkoClient) -> NoteToolDispatcher:
    return NoteToolDispatcher(client)
