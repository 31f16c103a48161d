"""Tests for the Blinko HTTP client."""

import httpx
import pytest

from core.blinko import BlinkoClient, base_url_for
from core.errors import RemoteError, ValidationError
from core.models import Acknowledgement, Credentials, NoteType, SearchQuery, ShareResult


class TestBaseUrl:
    def test_bare_domain_gets_https(self):
        assert base_url_for("blinko.test") == "https://blinko.test"

    def test_explicit_scheme_is_kept(self):
        assert base_url_for("http://localhost:1111/") == "http://localhost:1111"


class TestUpsertNote:
    @pytest.mark.asyncio
    async def test_flash_note_request(self, client, fake_blinko, note_payload):
        fake_blinko.respond(json=note_payload(id=7, content="buy milk"))

        note = await client.upsert_note("buy milk", NoteType.FLASH)

        request = fake_blinko.last_request
        assert request.method == "POST"
        assert str(request.url) == "https://blinko.test/api/v1/note/upsert"
        assert request.headers["Authorization"] == "Bearer secret-key"
        assert request.headers["Content-Type"] == "application/json"
        assert fake_blinko.last_json == {"content": "buy milk", "type": 0}
        assert note.id == 7
        assert note.content == "buy milk"

    @pytest.mark.asyncio
    async def test_note_fields_are_parsed(self, client, fake_blinko, note_payload):
        fake_blinko.respond(json=note_payload(id=3, type=2, isTop=True, isArchived=True))

        note = await client.upsert_note("ship it", NoteType.TODO)

        assert fake_blinko.last_json["type"] == 2
        assert note.type == NoteType.TODO
        assert note.type_label == "Todo Note"
        assert note.is_top is True
        assert note.is_archived is True
        assert note.created_at == "2025-03-03T10:00:00.000Z"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "\n\t"])
    async def test_blank_content_sends_nothing(self, client, fake_blinko, content):
        with pytest.raises(ValidationError) as excinfo:
            await client.upsert_note(content)

        assert excinfo.value.field == "content"
        assert fake_blinko.requests == []

    @pytest.mark.asyncio
    async def test_unknown_type_rejected(self, client, fake_blinko):
        with pytest.raises(ValidationError):
            await client.upsert_note("hello", 5)
        assert fake_blinko.requests == []

    @pytest.mark.asyncio
    async def test_repeated_upserts_are_separate_requests(self, client, fake_blinko, note_payload):
        fake_blinko.respond(json=note_payload())

        await client.upsert_note("same text")
        await client.upsert_note("same text")

        assert len(fake_blinko.requests) == 2


class TestSearchNotes:
    @pytest.mark.asyncio
    async def test_defaults_are_transmitted(self, client, fake_blinko):
        fake_blinko.respond(json=[])

        await client.search_notes(SearchQuery(search_text="project"))

        assert str(fake_blinko.last_request.url) == "https://blinko.test/api/v1/note/list"
        assert fake_blinko.last_json == {
            "size": 5,
            "type": -1,
            "isArchived": False,
            "isRecycle": False,
            "searchText": "project",
            "isUseAiQuery": True,
            "startDate": None,
            "endDate": None,
            "hasTodo": False,
        }

    @pytest.mark.asyncio
    async def test_service_order_is_kept(self, client, fake_blinko, note_payload):
        fake_blinko.respond(json=[note_payload(id=9), note_payload(id=2), note_payload(id=5)])

        notes = await client.search_notes(SearchQuery(search_text="x"))

        assert [n.id for n in notes] == [9, 2, 5]

    @pytest.mark.asyncio
    async def test_unexpected_body_is_a_remote_error(self, client, fake_blinko):
        fake_blinko.respond(json={"items": []})

        with pytest.raises(RemoteError) as excinfo:
            await client.search_notes(SearchQuery(search_text="x"))

        assert excinfo.value.status == 200


class TestDailyReview:
    @pytest.mark.asyncio
    async def test_get_without_body(self, client, fake_blinko, note_payload):
        fake_blinko.respond(json=[note_payload(id=4)])

        notes = await client.get_daily_review_notes()

        request = fake_blinko.last_request
        assert request.method == "GET"
        assert str(request.url) == "https://blinko.test/api/v1/note/daily-review-list"
        assert request.content == b""
        assert [n.id for n in notes] == [4]


class TestClearRecycleBin:
    @pytest.mark.asyncio
    async def test_success_acknowledgement(self, client, fake_blinko):
        fake_blinko.respond(json={"success": True})

        ack = await client.clear_recycle_bin()

        assert fake_blinko.last_request.method == "POST"
        assert str(fake_blinko.last_request.url) == (
            "https://blinko.test/api/v1/note/clear-recycle-bin"
        )
        assert ack == Acknowledgement(success=True)

    @pytest.mark.asyncio
    async def test_failed_acknowledgement_is_returned(self, client, fake_blinko):
        fake_blinko.respond(json={"success": False})

        ack = await client.clear_recycle_bin()

        assert ack.success is False

    @pytest.mark.asyncio
    async def test_server_error_keeps_status_and_body(self, client, fake_blinko):
        fake_blinko.respond(status_code=500, text="database is down")

        with pytest.raises(RemoteError) as excinfo:
            await client.clear_recycle_bin()

        assert excinfo.value.status == 500
        assert excinfo.value.body == "database is down"
        assert str(excinfo.value) == "request failed with status 500: database is down"


class TestShareNote:
    @pytest.mark.asyncio
    async def test_share_request_and_result(self, client, fake_blinko):
        fake_blinko.respond(json={
            "id": 42,
            "isShare": True,
            "sharePassword": "123456",
            "shareEncryptedUrl": "abc123",
        })

        result = await client.share_note(42, password="123456")

        assert str(fake_blinko.last_request.url) == "https://blinko.test/api/v1/note/share"
        assert fake_blinko.last_json == {"id": 42, "password": "123456", "isCancel": False}
        assert result == ShareResult(id=42, is_share=True, share_password="123456", share_url="abc123")

    @pytest.mark.asyncio
    async def test_absent_password_sent_empty(self, client, fake_blinko):
        fake_blinko.respond(json={"id": 42, "isShare": False})

        result = await client.share_note(42, is_cancel=True)

        assert fake_blinko.last_json == {"id": 42, "password": "", "isCancel": True}
        assert result.is_share is False
        assert result.share_password is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("password", ["12345", "1234567", "abcdef", "12 456", "١٢٣٤٥٦"])
    async def test_bad_password_sends_nothing(self, client, fake_blinko, password):
        with pytest.raises(ValidationError) as excinfo:
            await client.share_note(42, password=password)

        assert excinfo.value.field == "password"
        assert fake_blinko.requests == []


class TestFailures:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "call",
        [
            lambda c: c.upsert_note("hello"),
            lambda c: c.search_notes(SearchQuery(search_text="hello")),
            lambda c: c.get_daily_review_notes(),
            lambda c: c.clear_recycle_bin(),
            lambda c: c.share_note(1),
        ],
        ids=["upsert", "search", "daily-review", "clear", "share"],
    )
    @pytest.mark.parametrize("status", [400, 401, 404, 503])
    async def test_non_success_status(self, client, fake_blinko, call, status):
        fake_blinko.respond(status_code=status, text='{"message":"nope"}')

        with pytest.raises(RemoteError) as excinfo:
            await call(client)

        assert excinfo.value.status == status
        assert excinfo.value.body == '{"message":"nope"}'
        assert len(fake_blinko.requests) == 1

    @pytest.mark.asyncio
    async def test_invalid_json_on_success(self, client, fake_blinko):
        fake_blinko.respond(status_code=200, text="<html>login</html>")

        with pytest.raises(RemoteError) as excinfo:
            await client.upsert_note("hello")

        assert excinfo.value.status == 200
        assert excinfo.value.body == "<html>login</html>"

    @pytest.mark.asyncio
    async def test_connection_failure(self, client, fake_blinko):
        fake_blinko.fail_with(httpx.ConnectError("connection refused"))

        with pytest.raises(RemoteError) as excinfo:
            await client.get_daily_review_notes()

        assert excinfo.value.status is None
        assert "connection refused" in excinfo.value.body


def test_credentials_repr_hides_key():
    assert "secret" not in repr(Credentials(domain="blinko.test", api_key="secret"))
