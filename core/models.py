# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of every piece of information that
# crosses the Blinko boundary.  They carry no HTTP or MCP knowledge; the
# adapter (core/blinko.py) builds them from JSON and the tools/ layer renders
# them as text.
#
# WIRE NAMES:
#   Blinko speaks camelCase JSON (isArchived, createdAt, ...).  The models use
#   snake_case attributes and own the translation in from_api() / to_api().
# =============================================================================

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional


# -----------------------------------------------------------------------------
# NoteType - the numeric discriminator Blinko stores on every note
# -----------------------------------------------------------------------------
class NoteType(IntEnum):
    FLASH = 0
    NORMAL = 1
    TODO = 2

    @property
    def label(self) -> str:
        return _NOTE_TYPE_LABELS[self]


_NOTE_TYPE_LABELS = {
    NoteType.FLASH: "Flash Note",
    NoteType.NORMAL: "Normal Note",
    NoteType.TODO: "Todo Note",
}

# Search filter value meaning "every type".
ALL_NOTE_TYPES = -1


def note_type_label(value: Any) -> str:
    """Human-readable label for a raw type value; "Unknown" if unrecognized."""
    try:
        return NoteType(value).label
    except (ValueError, TypeError):
        return "Unknown"


# -----------------------------------------------------------------------------
# Credentials - the (domain, API key) pair supplied once at startup
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Credentials:
    domain: str                        # "blinko.example.com" or "https://..."
    api_key: str                       # Sent as "Authorization: Bearer <key>"

    def __repr__(self) -> str:
        return f"Credentials(domain={self.domain!r}, api_key='***')"


# -----------------------------------------------------------------------------
# Note - one record owned by the Blinko service
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Note:
    """A note exactly as the service returned it."""

    id: Optional[int]                  # Server-assigned; absent on bare acks
    type: int                          # NoteType value (kept raw for unknowns)
    content: str
    is_archived: bool = False
    is_recycle: bool = False
    is_share: bool = False
    is_top: bool = False               # Pinned
    is_reviewed: bool = False
    created_at: Optional[str] = None   # ISO-8601, as delivered
    updated_at: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Note":
        return cls(
            id=data.get("id"),
            type=data.get("type", NoteType.FLASH),
            content=data.get("content") or "",
            is_archived=bool(data.get("isArchived", False)),
            is_recycle=bool(data.get("isRecycle", False)),
            is_share=bool(data.get("isShare", False)),
            is_top=bool(data.get("isTop", False)),
            is_reviewed=bool(data.get("isReviewed", False)),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    @property
    def type_label(self) -> str:
        return note_type_label(self.type)


# -----------------------------------------------------------------------------
# SearchQuery - filters for POST /api/v1/note/list
# -----------------------------------------------------------------------------
# Every optional field carries the default the service expects when a caller
# leaves it out, so SearchQuery(search_text="x").to_api() is the full
# default-filled body.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SearchQuery:
    search_text: str
    size: int = 5
    type: int = ALL_NOTE_TYPES
    is_archived: bool = False
    is_recycle: bool = False
    is_use_ai_query: bool = True
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    has_todo: bool = False

    def to_api(self) -> dict[str, Any]:
        return {
            "size": self.size,
            "type": self.type,
            "isArchived": self.is_archived,
            "isRecycle": self.is_recycle,
            "searchText": self.search_text,
            "isUseAiQuery": self.is_use_ai_query,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "hasTodo": self.has_todo,
        }


# -----------------------------------------------------------------------------
# ShareResult - answer to a share / unshare request
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ShareResult:
    id: Optional[int]
    is_share: bool
    share_password: Optional[str] = None
    share_url: Optional[str] = None    # Wire name: shareEncryptedUrl

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ShareResult":
        return cls(
            id=data.get("id"),
            is_share=bool(data.get("isShare", False)),
            share_password=data.get("sharePassword") or None,
            share_url=data.get("shareEncryptedUrl") or None,
        )


# -----------------------------------------------------------------------------
# Acknowledgement - bare {"success": bool} answers
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Acknowledgement:
    success: bool

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Acknowledgement":
        return cls(success=bool(data.get("success", False)))
