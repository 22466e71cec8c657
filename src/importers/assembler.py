"""Result assembler for import attempts.

This module builds the final collection from validated cards. A
collection is only constructed once every card has passed validation,
so callers never observe a partially built result.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Sequence

from core.constants import CSV_EXTENSION, DEFAULT_TITLE, JSON_EXTENSION, SOURCE_PREFIX
from core.types import Card, Collection, Payload, PayloadFormat

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current UTC instant."""
    return datetime.now(timezone.utc)


def assemble_collection(
    payload: Payload,
    cards: Sequence[Card],
    declared_title: str | None = None,
    clock: Clock = utc_now,
) -> Collection:
    """Build a collection from validated cards.

    Args:
        payload: Payload the cards were parsed from.
        cards: Validated cards in input order.
        declared_title: Title carried by the payload itself, if any.
        clock: Source of the creation timestamp.

    Returns:
        Immutable collection.
    """
    return Collection(
        title=declared_title or fallback_title(payload.origin_name, payload.payload_format),
        source=f"{SOURCE_PREFIX}{payload.origin_name}",
        cards=tuple(cards),
        created_at=clock(),
    )


def fallback_title(origin_name: str, payload_format: PayloadFormat) -> str:
    """Derive a title from the origin name minus its format extension.

    Args:
        origin_name: Origin file name.
        payload_format: Declared payload format.

    Returns:
        Origin name without a trailing ``.json`` or ``.csv``; the origin
        name itself when stripping would leave nothing, and a default
        title when the origin name is empty.
    """
    extension = JSON_EXTENSION if payload_format is PayloadFormat.JSON else CSV_EXTENSION
    if origin_name.lower().endswith(extension):
        stripped = origin_name[: -len(extension)]
        if stripped:
            return stripped
    return origin_name or DEFAULT_TITLE
