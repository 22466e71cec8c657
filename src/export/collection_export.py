"""Collection serialization into the import file formats.

JSON exports follow the import schema exactly, so question and answer
text round-trips through export and re-import unchanged. CSV exports
write a ``question,answer`` header and quote each field; like the import
dialect they do not escape commas, so text containing commas does not
re-import cleanly from CSV.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.constants import (
    ANSWER_FIELD,
    CARDS_FIELD,
    CSV_DELIMITER,
    CSV_EXTENSION,
    CSV_QUOTE,
    ID_FIELD,
    JSON_EXTENSION,
    QUESTION_FIELD,
    TITLE_FIELD,
)
from core.errors import FormatError
from core.logging_config import get_logger
from core.types import Collection

_LOGGER = get_logger(__name__)


def collection_to_payload(collection: Collection) -> dict[str, object]:
    """Serialize a collection into a JSON-safe payload.

    Args:
        collection: Collection to serialize.

    Returns:
        Dictionary matching the JSON import schema plus provenance fields.
    """
    return {
        TITLE_FIELD: collection.title,
        "source": collection.source,
        "createdAt": collection.created_at.isoformat(),
        CARDS_FIELD: [
            {ID_FIELD: card.card_id, QUESTION_FIELD: card.question, ANSWER_FIELD: card.answer}
            for card in collection.cards
        ],
    }


def export_collection_json(collection: Collection) -> str:
    """Render a collection as importable JSON text."""
    return json.dumps(collection_to_payload(collection), ensure_ascii=False, indent=2) + "\n"


def export_collection_csv(collection: Collection) -> str:
    """Render a collection as CSV text with a ``question,answer`` header.

    Line breaks inside fields are replaced by spaces so each card stays
    on one row.
    """
    lines = [f"{QUESTION_FIELD}{CSV_DELIMITER}{ANSWER_FIELD}"]
    for card in collection.cards:
        lines.append(_quote(card.question) + CSV_DELIMITER + _quote(card.answer))
    return "\n".join(lines) + "\n"


def write_collection(collection: Collection, output_path: str | Path) -> Path:
    """Write a collection to disk in the format implied by the extension.

    Args:
        collection: Collection to export.
        output_path: Target ``.json`` or ``.csv`` path.

    Returns:
        Resolved output path.

    Raises:
        FormatError: If the extension is not supported.
    """
    target = Path(output_path).expanduser().resolve()
    suffix = target.suffix.lower()
    if suffix == JSON_EXTENSION:
        content = export_collection_json(collection)
    elif suffix == CSV_EXTENSION:
        content = export_collection_csv(collection)
    else:
        raise FormatError(
            f"Unsupported export file '{target.name}'. "
            f"Supported extensions: {JSON_EXTENSION}, {CSV_EXTENSION}."
        )
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    _LOGGER.info(
        "collection_exported",
        output_path=str(target),
        card_count=len(collection.cards),
    )
    return target


def _quote(value: str) -> str:
    flattened = " ".join(value.splitlines())
    return f"{CSV_QUOTE}{flattened}{CSV_QUOTE}"
