# =============================================================================
# tools/arguments.py  -  Per-tool argument models
# =============================================================================
#
# MCP hosts send tool arguments as loose JSON objects: numbers arrive as
# strings, booleans as "true", optional fields as null.  Each tool gets one
# pydantic model here that:
#   - names the required and optional fields (camelCase aliases on the wire)
#   - coerces loose input the permissive way (e.g. "false" -> False)
#   - rejects unknown keys and malformed required values
#
# The same models generate the JSON schema advertised in the tool catalog.
# Pydantic's errors are converted to core.errors.ValidationError so the
# dispatcher only ever raises this package's exceptions.
# =============================================================================

import math
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from core.blinko import SHARE_PASSWORD_PATTERN
from core.errors import ValidationError
from core.models import ALL_NOTE_TYPES, NoteType, SearchQuery

DEFAULT_SEARCH_SIZE = 5

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off"}


def coerce_flag(value: Any, default: bool = False) -> bool:
    """Permissive truthiness for loosely-typed booleans.

    None and blank strings mean "not given".  Recognized words map to their
    boolean; any other non-empty string is truthy.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if not text:
            return default
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        return True
    return bool(value)


def _required_text(value: Any, message: str) -> str:
    text = "" if value is None else str(value)
    if not text.strip():
        raise ValueError(message)
    return text


class ToolArguments(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class NoArguments(ToolArguments):
    pass


# -----------------------------------------------------------------------------
# upsert_blinko_flash_note / upsert_blinko_note / upsert_blinko_todo
# -----------------------------------------------------------------------------
class NoteContentArguments(ToolArguments):
    content: str = Field(description="Text content of the note")

    @field_validator("content", mode="before")
    @classmethod
    def _content_required(cls, value: Any) -> str:
        return _required_text(value, "Content is required")


# -----------------------------------------------------------------------------
# share_blinko_note
# -----------------------------------------------------------------------------
class ShareNoteArguments(ToolArguments):
    note_id: int = Field(
        alias="noteId",
        description=(
            "ID of the note to share. Use the ID from search results or note "
            "creation responses."
        ),
    )
    password: str = Field(
        default="",
        description=(
            "Optional six-digit password for sharing protection (e.g., '123456'). "
            "If provided, viewers will need this password to access the shared note."
        ),
        json_schema_extra={"pattern": "^\\d{6}$"},
    )
    is_cancel: bool = Field(
        default=False,
        alias="isCancel",
        description=(
            "Set to true to cancel/disable sharing for this note (default: false). "
            "Use this to revoke public access to a previously shared note."
        ),
    )

    @field_validator("note_id", mode="before")
    @classmethod
    def _finite_note_id(cls, value: Any) -> int:
        if isinstance(value, bool) or value is None:
            raise ValueError("Valid note ID is required")
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValueError("Valid note ID is required") from None
        if not math.isfinite(number) or number == 0 or not number.is_integer():
            raise ValueError("Valid note ID is required")
        return int(number)

    @field_validator("password", mode="before")
    @classmethod
    def _six_digit_password(cls, value: Any) -> str:
        password = "" if value is None else str(value)
        if password and not SHARE_PASSWORD_PATTERN.fullmatch(password):
            raise ValueError("Password must be exactly 6 digits")
        return password

    @field_validator("is_cancel", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        return coerce_flag(value)


# -----------------------------------------------------------------------------
# search_blinko_notes
# -----------------------------------------------------------------------------
class SearchNotesArguments(ToolArguments):
    search_text: str = Field(
        alias="searchText",
        description=(
            "Search keyword or phrase. Use this to find notes containing specific "
            "text content."
        ),
    )
    size: int = Field(
        default=DEFAULT_SEARCH_SIZE,
        description=(
            "Number of results to return (default: 5). Use larger values when you "
            "need more comprehensive search results."
        ),
    )
    note_type: int = Field(
        default=ALL_NOTE_TYPES,
        alias="type",
        description=(
            "Note type filter: -1 for all types (default), 0 for flash notes, "
            "1 for normal notes, 2 for todo notes."
        ),
        json_schema_extra={"enum": [ALL_NOTE_TYPES] + [int(t) for t in NoteType]},
    )
    is_archived: bool = Field(
        default=False,
        alias="isArchived",
        description="Search in archived notes (default: false).",
    )
    is_recycle: bool = Field(
        default=False,
        alias="isRecycle",
        description="Search in recycled/deleted notes (default: false).",
    )
    is_use_ai_query: bool = Field(
        default=True,
        alias="isUseAiQuery",
        description=(
            "Use AI-powered semantic search (default: true). Set to false for "
            "exact text matching only."
        ),
    )
    start_date: Optional[str] = Field(
        default=None,
        alias="startDate",
        description=(
            "Start date for time-based filtering in ISO format "
            "(e.g. 2025-03-03T00:00:00.000Z)."
        ),
    )
    end_date: Optional[str] = Field(
        default=None,
        alias="endDate",
        description=(
            "End date for time-based filtering in ISO format "
            "(e.g. 2025-03-03T00:00:00.000Z)."
        ),
    )
    has_todo: bool = Field(
        default=False,
        alias="hasTodo",
        description="Search only in notes containing todo items (default: false).",
    )

    @field_validator("search_text", mode="before")
    @classmethod
    def _search_text_required(cls, value: Any) -> str:
        return _required_text(value, "Search text is required")

    @field_validator("size", mode="before")
    @classmethod
    def _positive_size(cls, value: Any) -> int:
        if isinstance(value, bool):
            return DEFAULT_SEARCH_SIZE
        try:
            number = float(value)
        except (TypeError, ValueError):
            return DEFAULT_SEARCH_SIZE
        if not math.isfinite(number) or number < 1:
            return DEFAULT_SEARCH_SIZE
        return int(number)

    @field_validator("note_type", mode="before")
    @classmethod
    def _known_type_or_all(cls, value: Any) -> int:
        if isinstance(value, bool):
            return ALL_NOTE_TYPES
        try:
            number = float(value)
            if not number.is_integer():
                return ALL_NOTE_TYPES
            return int(NoteType(int(number)))
        except (TypeError, ValueError):
            return ALL_NOTE_TYPES

    @field_validator("is_archived", "is_recycle", "has_todo", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        return coerce_flag(value)

    @field_validator("is_use_ai_query", mode="before")
    @classmethod
    def _flag_default_on(cls, value: Any) -> bool:
        return coerce_flag(value, default=True)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _optional_date(cls, value: Any) -> Optional[str]:
        if value is None or not str(value).strip():
            return None
        return str(value)

    def to_query(self) -> SearchQuery:
        return SearchQuery(
            search_text=self.search_text,
            size=self.size,
            type=self.note_type,
            is_archived=self.is_archived,
            is_recycle=self.is_recycle,
            is_use_ai_query=self.is_use_ai_query,
            start_date=self.start_date,
            end_date=self.end_date,
            has_todo=self.has_todo,
        )


# -----------------------------------------------------------------------------
# Parsing entry point
# -----------------------------------------------------------------------------
def parse_arguments(
    model: type[ToolArguments],
    arguments: Optional[Mapping[str, Any]],
) -> ToolArguments:
    """Validate raw tool arguments against ``model``.

    Raises:
        ValidationError: naming the first offending field.
    """
    try:
        raw = dict(arguments or {})
    except (TypeError, ValueError):
        raise ValidationError("Tool arguments must be an object") from None
    try:
        return model.model_validate(raw)
    except PydanticValidationError as e:
        raise _to_validation_error(e) from e


def _to_validation_error(error: PydanticValidationError) -> ValidationError:
    detail = error.errors()[0]
    field = ".".join(str(part) for part in detail["loc"]) or None
    kind = detail["type"]
    if kind == "missing":
        message = f"Missing required argument: {field}"
    elif kind == "extra_forbidden":
        message = f"Unexpected argument: {field}"
    elif kind == "value_error":
        message = str(detail["ctx"]["error"])
    else:
        message = f"Invalid argument {field}: {detail['msg']}"
    return ValidationError(message, field=field)
