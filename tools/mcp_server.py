# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Registers the seven Blinko tools on a FastMCP server.  Each tool is a thin
#   wrapper: it hands its arguments to NoteToolDispatcher, which validates
#   them, calls core/blinko.py and renders text blocks.
#
# HOW IT WORKS (the flow):
#   1. The host lists tools; FastMCP answers from the functions below
#      (names and descriptions come from the dispatcher's catalog)
#   2. The host calls a tool by name, e.g. "search_blinko_notes"
#   3. FastMCP routes the call to the decorated function
#   4. The function forwards to the dispatcher and returns TextContent blocks
#   5. Any BlinkoError becomes a ToolError, i.e. a failed tool-call result
#      carrying the error message
#
# RUNNING THIS SERVER:
#   a) Via the entry point:  mcp-server-blinko --blinko_domain=... --blinko_api_key=...
#   b) Standalone:           python -m tools.mcp_server
#   Both serve MCP over stdio.
# =============================================================================

import json
import logging
import sys
from typing import Annotated, Any, Optional, Union

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from mcp.types import TextContent, ToolAnnotations
from pydantic import Field

from core.errors import BlinkoError
from tools.arguments import (
    NoteContentArguments,
    SearchNotesArguments,
    ShareNoteArguments,
    ToolArguments,
)
from tools.dispatcher import (
    CLEAR_RECYCLE_BIN,
    REVIEW_DAILY_NOTES,
    SEARCH_NOTES,
    SHARE_NOTE,
    UPSERT_FLASH_NOTE,
    UPSERT_NOTE,
    UPSERT_TODO,
    NoteToolDispatcher,
    get_tool_spec,
)

SERVER_NAME = "mcp-server-blinko"

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: stdout carries the MCP JSON stream, and anything else
# written there would corrupt it.
#
# ANSI colour codes:
#   CYAN   incoming tool calls with their parameters
#   GREEN  responses
#   YELLOW status / failures
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

_REDACTED_PARAMS = {"password"}


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(
        f"{k}={'***' if k in _REDACTED_PARAMS and v else repr(v)}"
        for k, v in params.items()
    )
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, blocks: list[str]) -> list[str]:
    """Log the text blocks as compact JSON in GREEN, then return them."""
    payload = json.dumps(blocks, ensure_ascii=False)
    logging.info(f"{_GREEN}  ← {tool_name} response: {payload}{_RESET}")
    return blocks


def _describe(model: type[ToolArguments], field_name: str) -> Optional[str]:
    return model.model_fields[field_name].description


# Hosts send loosely-typed JSON ("5", "true", null).  The wrapper parameters
# accept any of those shapes and leave coercion to tools/arguments.py.
LooseNumber = Optional[Union[int, float, bool, str]]
LooseFlag = Optional[Union[bool, int, float, str]]
LooseText = Optional[Union[str, int, float]]


def _provided(**arguments: Any) -> dict[str, Any]:
    """Drop arguments the host left out (or sent as null)."""
    return {key: value for key, value in arguments.items() if value is not None}


async def _dispatch(
    dispatcher: NoteToolDispatcher,
    tool_name: str,
    arguments: dict[str, Any],
) -> list[TextContent]:
    _log_request(tool_name, **arguments)
    try:
        blocks = await dispatcher.call_tool(tool_name, arguments)
    except BlinkoError as e:
        _log_status(f"{type(e).__name__}: {e}")
        raise ToolError(str(e)) from e
    _log_response(tool_name, blocks)
    return [TextContent(type="text", text=block) for block in blocks]


# =============================================================================
# Server factory
# =============================================================================
def create_server(dispatcher: NoteToolDispatcher) -> FastMCP:
    """Build the FastMCP server with every catalog tool bound to ``dispatcher``."""
    mcp = FastMCP(SERVER_NAME)

    def register(tool_name: str):
        spec = get_tool_spec(tool_name)
        return mcp.tool(
            name=spec.name,
            description=spec.description,
            annotations=ToolAnnotations(
                title=spec.title,
                readOnlyHint=spec.read_only,
                destructiveHint=spec.destructive,
                idempotentHint=spec.read_only,
                openWorldHint=True,
            ),
        )

    content_description = _describe(NoteContentArguments, "content")

    # -------------------------------------------------------------------------
    # Upserts: one tool per note type
    # -------------------------------------------------------------------------
    # Required arguments are always forwarded, null included, so the
    # dispatcher reports them with its own message.
    @register(UPSERT_FLASH_NOTE)
    async def upsert_blinko_flash_note(
        content: Annotated[LooseText, Field(description=content_description)],
    ):
        return await _dispatch(dispatcher, UPSERT_FLASH_NOTE, {"content": content})

    @register(UPSERT_NOTE)
    async def upsert_blinko_note(
        content: Annotated[LooseText, Field(description=content_description)],
    ):
        return await _dispatch(dispatcher, UPSERT_NOTE, {"content": content})

    @register(UPSERT_TODO)
    async def upsert_blinko_todo(
        content: Annotated[LooseText, Field(description=content_description)],
    ):
        return await _dispatch(dispatcher, UPSERT_TODO, {"content": content})

    # -------------------------------------------------------------------------
    # Sharing
    # -------------------------------------------------------------------------
    # Parameter names are the wire names hosts already use (noteId, isCancel).
    @register(SHARE_NOTE)
    async def share_blinko_note(
        noteId: Annotated[
            LooseNumber,
            Field(description=_describe(ShareNoteArguments, "note_id")),
        ],
        password: Annotated[
            LooseText,
            Field(description=_describe(ShareNoteArguments, "password")),
        ] = None,
        isCancel: Annotated[
            LooseFlag,
            Field(description=_describe(ShareNoteArguments, "is_cancel")),
        ] = None,
    ):
        return await _dispatch(
            dispatcher,
            SHARE_NOTE,
            {"noteId": noteId, **_provided(password=password, isCancel=isCancel)},
        )

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------
    @register(SEARCH_NOTES)
    async def search_blinko_notes(
        searchText: Annotated[
            LooseText,
            Field(description=_describe(SearchNotesArguments, "search_text")),
        ],
        size: Annotated[
            LooseNumber,
            Field(description=_describe(SearchNotesArguments, "size")),
        ] = None,
        type: Annotated[
            LooseNumber,
            Field(description=_describe(SearchNotesArguments, "note_type")),
        ] = None,
        isArchived: Annotated[
            LooseFlag,
            Field(description=_describe(SearchNotesArguments, "is_archived")),
        ] = None,
        isRecycle: Annotated[
            LooseFlag,
            Field(description=_describe(SearchNotesArguments, "is_recycle")),
        ] = None,
        isUseAiQuery: Annotated[
            LooseFlag,
            Field(description=_describe(SearchNotesArguments, "is_use_ai_query")),
        ] = None,
        startDate: Annotated[
            Optional[str],
            Field(description=_describe(SearchNotesArguments, "start_date")),
        ] = None,
        endDate: Annotated[
            Optional[str],
            Field(description=_describe(SearchNotesArguments, "end_date")),
        ] = None,
        hasTodo: Annotated[
            LooseFlag,
            Field(description=_describe(SearchNotesArguments, "has_todo")),
        ] = None,
    ):
        return await _dispatch(
            dispatcher,
            SEARCH_NOTES,
            {
                "searchText": searchText,
                **_provided(
                    size=size,
                    type=type,
                    isArchived=isArchived,
                    isRecycle=isRecycle,
                    isUseAiQuery=isUseAiQuery,
                    startDate=startDate,
                    endDate=endDate,
                    hasTodo=hasTodo,
                ),
            },
        )

    # -------------------------------------------------------------------------
    # No-argument tools
    # -------------------------------------------------------------------------
    @register(REVIEW_DAILY_NOTES)
    async def review_blinko_daily_notes():
        return await _dispatch(dispatcher, REVIEW_DAILY_NOTES, {})

    @register(CLEAR_RECYCLE_BIN)
    async def clear_blinko_recycle_bin():
        return await _dispatch(dispatcher, CLEAR_RECYCLE_BIN, {})

    return mcp


# =============================================================================
# Server entry point
# =============================================================================
# python -m tools.mcp_server reads its settings from flags / the environment
# exactly like the installed console script.
# =============================================================================
if __name__ == "__main__":
    from main import main

    main()
