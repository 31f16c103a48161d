# =============================================================================
# tools/formatting.py  -  Text rendering for tool results
# =============================================================================
#
# Every tool answers with an ordered list of text blocks: one summary line,
# then one block per note (or per notable field for share results).
# =============================================================================

from datetime import datetime
from typing import Any, Optional

from core.models import Note, ShareResult


def format_timestamp(value: Optional[Any]) -> str:
    """Render an ISO-8601 timestamp in local time.

    Falls back to the raw value when it cannot be parsed, so one odd date
    never breaks a whole listing.
    """
    if value is None or value == "":
        return "N/A"
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        return parsed.astimezone().strftime("%Y-%m-%d %H:%M:%S")
    except (ValueError, OverflowError, OSError):
        return str(value)


def format_note(note: Note) -> str:
    return (
        f"- [ID: {note.id}] [{note.type_label}] {note.content}\n"
        f"  Created: {format_timestamp(note.created_at)} | "
        f"Updated: {format_timestamp(note.updated_at)}"
    )


def format_note_list(notes: list[Note], heading: str) -> list[str]:
    return [heading] + [format_note(note) for note in notes]


def format_search_results(notes: list[Note]) -> list[str]:
    return format_note_list(notes, f"Found {len(notes)} note(s):")


def format_daily_review(notes: list[Note]) -> list[str]:
    return format_note_list(notes, f"Found {len(notes)} note(s) for today's review:")


def format_upsert_result(note: Note) -> list[str]:
    if note.id is None:
        return ["Successfully wrote note to Blinko."]
    return [f"Successfully wrote note to Blinko. Note ID: {note.id}"]


def format_share_result(result: ShareResult) -> list[str]:
    if not result.is_share:
        return [f"Successfully cancelled sharing for note (ID: {result.id})"]

    blocks = [f"Successfully shared note (ID: {result.id})"]
    if result.share_password:
        blocks.append(f"Share password: {result.share_password}")
    blocks.append(f"Share link: {result.share_url or 'N/A'}")
    return blocks


def format_clear_recycle_bin() -> list[str]:
    return ["Successfully cleared Blinko recycle bin."]
