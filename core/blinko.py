# =============================================================================
# core/blinko.py  -  Blinko HTTP Client (the Remote API Adapter)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Translates typed note operations into HTTP calls against a Blinko server
#   and the JSON answers back into core/models dataclasses.
#
# ENDPOINTS (all JSON, all "Authorization: Bearer <api key>"):
#   POST /api/v1/note/upsert              {content, type}
#   POST /api/v1/note/list                SearchQuery.to_api()
#   GET  /api/v1/note/daily-review-list
#   POST /api/v1/note/clear-recycle-bin
#   POST /api/v1/note/share               {id, password, isCancel}
#
# CONTRACT:
#   - Exactly one round-trip per call.  No retries, no caching.
#   - Anything but a 2xx answer raises RemoteError(status, body) with the
#     service's response text untouched.
#   - Argument problems the service would reject anyway (empty content, a
#     malformed share password) raise ValidationError before any request.
# =============================================================================

import logging
import re
from typing import Any, Optional

import httpx

from core.errors import RemoteError, ValidationError
from core.models import (
    Acknowledgement,
    Credentials,
    Note,
    NoteType,
    SearchQuery,
    ShareResult,
)

logger = logging.getLogger(__name__)

SHARE_PASSWORD_PATTERN = re.compile(r"[0-9]{6}")


def base_url_for(domain: str) -> str:
    """Build the service root from a bare domain or a full URL."""
    domain = domain.strip().rstrip("/")
    if domain.startswith(("http://", "https://")):
        return domain
    return f"https://{domain}"


class BlinkoClient:
    """Async client for the Blinko note API.

    Args:
        credentials: Service domain and API key.
        timeout: Per-request deadline in seconds; None waits indefinitely.
        transport: Optional httpx transport (tests inject httpx.MockTransport).
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.credentials = credentials
        self.base_url = base_url_for(credentials.domain)
        self._timeout = timeout
        self._transport = transport

    # ── Operations ───────────────────────────────────────

    async def upsert_note(self, content: str, note_type: int = NoteType.FLASH) -> Note:
        """Create (or update) a note.  Not idempotent: the service decides."""
        if not isinstance(content, str) or not content.strip():
            raise ValidationError("Content is required", field="content")
        try:
            note_type = NoteType(note_type)
        except ValueError:
            raise ValidationError(
                f"Invalid note type: {note_type!r}", field="type"
            ) from None

        response = await self._request(
            "POST",
            "/api/v1/note/upsert",
            {"content": content, "type": int(note_type)},
        )
        return Note.from_api(_json_object(response))

    async def search_notes(self, query: SearchQuery) -> list[Note]:
        """Search notes; the result keeps the service's order."""
        response = await self._request("POST", "/api/v1/note/list", query.to_api())
        return [Note.from_api(item) for item in _json_list(response)]

    async def get_daily_review_notes(self) -> list[Note]:
        response = await self._request("GET", "/api/v1/note/daily-review-list")
        return [Note.from_api(item) for item in _json_list(response)]

    async def clear_recycle_bin(self) -> Acknowledgement:
        """Permanently delete recycled notes.

        A ``success=False`` acknowledgement is returned as-is; callers must
        treat it as a failure.
        """
        response = await self._request("POST", "/api/v1/note/clear-recycle-bin")
        return Acknowledgement.from_api(_json_object(response))

    async def share_note(
        self,
        note_id: int,
        password: Optional[str] = None,
        is_cancel: bool = False,
    ) -> ShareResult:
        """Share a note publicly (optionally password protected) or revoke it."""
        password = password or ""
        if password and not SHARE_PASSWORD_PATTERN.fullmatch(password):
            raise ValidationError("Password must be exactly 6 digits", field="password")

        response = await self._request(
            "POST",
            "/api/v1/note/share",
            {"id": note_id, "password": password, "isCancel": bool(is_cancel)},
        )
        return ShareResult.from_api(_json_object(response))

    # ── HTTP plumbing ────────────────────────────────────

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.credentials.api_key}",
        }

    async def _request(
        self,
        method: str,
        path: str,
        payload: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                headers=self._headers(),
            ) as client:
                response = await client.request(method, url, json=payload)
        except httpx.HTTPError as e:
            logger.debug("%s %s failed: %s", method, url, e)
            raise RemoteError(None, str(e) or type(e).__name__) from e

        logger.debug("%s %s -> %s", method, url, response.status_code)
        if not response.is_success:
            raise RemoteError(response.status_code, response.text)
        return response


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise RemoteError(response.status_code, response.text) from e


def _json_object(response: httpx.Response) -> dict[str, Any]:
    data = _json_body(response)
    if not isinstance(data, dict):
        raise RemoteError(response.status_code, response.text)
    return data


def _json_list(response: httpx.Response) -> list[dict[str, Any]]:
    data = _json_body(response)
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise RemoteError(response.status_code, response.text)
    return data
