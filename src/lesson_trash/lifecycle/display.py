"""
Display helpers for the trash list.

Joins lessons to student and instructor names. Broken references never
block rendering; they show up as "Unknown Student" / "Unknown Instructor".
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, Mapping, Optional

from ..models.trash import TrashView


logger = logging.getLogger(__name__)

UNKNOWN_STUDENT = "Unknown Student"
UNKNOWN_INSTRUCTOR = "Unknown Instructor"


def build_lookup(entities: Iterable[Mapping[str, Any]]) -> Dict[str, Mapping[str, Any]]:
    """
    Map identifier -> entity, built once per snapshot.

    Entities without an id are left out.
    """
    return {entity["id"]: entity for entity in entities if entity.get("id")}


def resolve_name(
    lookup: Mapping[str, Mapping[str, Any]],
    entity_id: Optional[str],
    fallback: str
) -> str:
    """
    Resolve an identifier to a display name.

    Args:
        lookup: Map built by build_lookup
        entity_id: Identifier to resolve
        fallback: Label used when the id does not resolve or has no name

    Returns:
        The entity name, or fallback
    """
    entity = lookup.get(entity_id) if entity_id else None
    name = entity.get("name") if entity else None
    if not name:
        logger.debug(f"Unresolved reference {entity_id!r}, showing {fallback!r}")
        return fallback
    return name


def format_day(date_str: str) -> str:
    """
    Short day label for an ISO date, e.g. "Mon, Jan 15".

    Unparseable dates are returned as they are.
    """
    try:
        day = datetime.strptime(date_str, "%Y-%m-%d")
    except (TypeError, ValueError):
        return date_str or ""
    return f"{day:%a}, {day:%b} {day.day}"


def format_when(date_str: str, time_str: str, instructor_name: str) -> str:
    """Label such as "Mon, Jan 15 at 09:00 with Ana Cruz"."""
    return f"{format_day(date_str)} at {time_str} with {instructor_name}"


def render_trash_text(view: TrashView) -> str:
    """
    Plain-text rendering of a trash view, one lesson per line.

    An empty view renders its empty-state message.
    """
    if view.is_empty:
        return f"{view.empty_title}\n{view.empty_hint}"

    lines = []
    for idx, entry in enumerate(view, 1):
        lines.append(f"{idx:2d}. {entry.student_name} | {entry.label} | id={entry.lesson_id}")
        if entry.notes:
            lines.append(f"    Note: {entry.notes}")
    return "\n".join(lines)
