# =============================================================================
# tools/dispatcher.py  -  Tool catalog and call dispatch
# =============================================================================
#
# HOW A CALL FLOWS:
#   1. The host names a tool and passes a loose argument object
#   2. The catalog entry's argument model validates it (tools/arguments.py)
#   3. Exactly one BlinkoClient method is awaited (core/blinko.py)
#   4. The result is rendered as text blocks (tools/formatting.py)
#
# Any failure (unknown tool, bad argument, remote error, failed
# acknowledgement) is raised to the caller; nothing is retried or turned into
# a soft "success" message.
# =============================================================================

from dataclasses import dataclass
from functools import partial
from typing import Any, Awaitable, Callable, Mapping, Optional

from core.blinko import BlinkoClient
from core.errors import OperationFailedError, UnknownToolError
from core.models import NoteType
from tools.arguments import (
    NoArguments,
    NoteContentArguments,
    SearchNotesArguments,
    ShareNoteArguments,
    ToolArguments,
    parse_arguments,
)
from tools.formatting import (
    format_clear_recycle_bin,
    format_daily_review,
    format_search_results,
    format_share_result,
    format_upsert_result,
)

UPSERT_FLASH_NOTE = "upsert_blinko_flash_note"
UPSERT_NOTE = "upsert_blinko_note"
UPSERT_TODO = "upsert_blinko_todo"
SHARE_NOTE = "share_blinko_note"
SEARCH_NOTES = "search_blinko_notes"
REVIEW_DAILY_NOTES = "review_blinko_daily_notes"
CLEAR_RECYCLE_BIN = "clear_blinko_recycle_bin"


@dataclass(frozen=True)
class ToolSpec:
    """One catalog entry: what the host sees in a tool listing."""

    name: str
    title: str
    description: str
    arguments: type[ToolArguments]
    read_only: bool = False
    destructive: bool = False

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.arguments.model_json_schema(by_alias=True)

    @property
    def required(self) -> list[str]:
        return list(self.input_schema.get("required", []))


TOOL_CATALOG: tuple[ToolSpec, ...] = (
    ToolSpec(
        name=UPSERT_FLASH_NOTE,
        title="Upsert flash note",
        description=(
            "Create or update a flash note (type 0) in Blinko. Flash notes are "
            "designed for quick thoughts, ideas, or brief observations that you "
            "want to capture rapidly."
        ),
        arguments=NoteContentArguments,
    ),
    ToolSpec(
        name=UPSERT_NOTE,
        title="Upsert normal note",
        description=(
            "Create or update a normal note (type 1) in Blinko. Normal notes are "
            "suitable for detailed content, longer thoughts, documentation, or "
            "structured information."
        ),
        arguments=NoteContentArguments,
    ),
    ToolSpec(
        name=UPSERT_TODO,
        title="Upsert todo note",
        description=(
            "Create or update a todo note (type 2) in Blinko. Todo notes are "
            "designed for task management, checklists, and action items that "
            "need to be tracked and completed."
        ),
        arguments=NoteContentArguments,
    ),
    ToolSpec(
        name=SHARE_NOTE,
        title="Share note",
        description=(
            "Share a note publicly or cancel an existing share. Creates a public "
            "link that others can access, optionally protected with a password."
        ),
        arguments=ShareNoteArguments,
    ),
    ToolSpec(
        name=SEARCH_NOTES,
        title="Search notes",
        description=(
            "Search for notes in Blinko. Returns notes with content, timestamps, "
            "and metadata."
        ),
        arguments=SearchNotesArguments,
        read_only=True,
    ),
    ToolSpec(
        name=REVIEW_DAILY_NOTES,
        title="Review daily notes",
        description=(
            "Retrieve today's notes for daily review and reflection. This helps "
            "with reviewing recent thoughts, tasks, and ideas to maintain "
            "productivity and mindfulness."
        ),
        arguments=NoArguments,
        read_only=True,
    ),
    ToolSpec(
        name=CLEAR_RECYCLE_BIN,
        title="Clear recycle bin",
        description=(
            "Permanently delete all notes in the recycle bin. WARNING: This action "
            "cannot be undone. Use only when you're certain you want to "
            "permanently remove all deleted notes."
        ),
        arguments=NoArguments,
        destructive=True,
    ),
)

_CATALOG_BY_NAME = {spec.name: spec for spec in TOOL_CATALOG}


def get_tool_spec(name: str) -> ToolSpec:
    try:
        return _CATALOG_BY_NAME[name]
    except KeyError:
        raise UnknownToolError(name) from None


class NoteToolDispatcher:
    """Maps named tool calls onto BlinkoClient operations."""

    def __init__(self, client: BlinkoClient):
        self.client = client
        self._handlers: dict[str, Callable[[Any], Awaitable[list[str]]]] = {
            UPSERT_FLASH_NOTE: partial(self._upsert, NoteType.FLASH),
            UPSERT_NOTE: partial(self._upsert, NoteType.NORMAL),
            UPSERT_TODO: partial(self._upsert, NoteType.TODO),
            SHARE_NOTE: self._share,
            SEARCH_NOTES: self._search,
            REVIEW_DAILY_NOTES: self._review_daily,
            CLEAR_RECYCLE_BIN: self._clear_recycle_bin,
        }

    def list_tools(self) -> list[ToolSpec]:
        return list(TOOL_CATALOG)

    async def call_tool(
        self,
        name: str,
        arguments: Optional[Mapping[str, Any]] = None,
    ) -> list[str]:
        """Validate ``arguments`` for tool ``name``, run it, return text blocks.

        Raises:
            UnknownToolError: ``name`` is not in the catalog.
            ValidationError: arguments are missing or malformed (no request sent).
            RemoteError: the service answered with a non-success status.
            OperationFailedError: the service acknowledged but reported failure.
        """
        spec = get_tool_spec(name)
        args = parse_arguments(spec.arguments, arguments)
        return await self._handlers[name](args)

    # ── Handlers ─────────────────────────────────────────

    async def _upsert(self, note_type: NoteType, args: NoteContentArguments) -> list[str]:
        note = await self.client.upsert_note(args.content, note_type)
        return format_upsert_result(note)

    async def _share(self, args: ShareNoteArguments) -> list[str]:
        result = await self.client.share_note(
            args.note_id,
            password=args.password,
            is_cancel=args.is_cancel,
        )
        return format_share_result(result)

    async def _search(self, args: SearchNotesArguments) -> list[str]:
        notes = await self.client.search_notes(args.to_query())
        return format_search_results(notes)

    async def _review_daily(self, args: NoArguments) -> list[str]:
        notes = await self.client.get_daily_review_notes()
        return format_daily_review(notes)

    async def _clear_recycle_bin(self, args: NoArguments) -> list[str]:
        ack = await self.client.clear_recycle_bin()
        if not ack.success:
            raise OperationFailedError("Failed to clear recycle bin")
        return format_clear_recycle_bin()
