"""JSON importer.

This module deserializes JSON payload text and checks its structure:
a top-level object whose ``cards`` property is an array of objects with
string ``question`` and ``answer`` fields and an optional string ``id``.
Nothing about the incoming structure is assumed before it is checked.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from core.constants import (
    ANSWER_FIELD,
    CARDS_FIELD,
    ID_FIELD,
    JSON_ID_PREFIX,
    JSON_SCHEMA_MESSAGE,
    QUESTION_FIELD,
    TITLE_FIELD,
)
from core.errors import ParseError, SchemaError
from core.types import CandidateRecord
from importers.record_checks import ParsedDocument, RecordCheck


def parse_json_document(text: str) -> ParsedDocument:
    """Parse JSON payload text into per-record checks.

    Args:
        text: Raw payload text.

    Returns:
        Parsed document with one check per ``cards`` element.

    Raises:
        ParseError: If the text is not valid JSON.
        SchemaError: If the top level is not an object with a ``cards`` array.
    """
    root = _load_json(text)
    if not isinstance(root, dict) or not isinstance(root.get(CARDS_FIELD), list):
        raise SchemaError(JSON_SCHEMA_MESSAGE)
    checks = tuple(
        check_json_record(position, element)
        for position, element in enumerate(root[CARDS_FIELD])
    )
    return ParsedDocument(checks=checks, id_prefix=JSON_ID_PREFIX, title=_declared_title(root))


def check_json_record(position: int, element: object) -> RecordCheck:
    """Check one ``cards`` element for field presence and types.

    Args:
        position: Zero-based index of the element.
        element: Decoded JSON value.

    Returns:
        A passed check holding the candidate, or a failed check.
    """
    if (
        not isinstance(element, dict)
        or QUESTION_FIELD not in element
        or ANSWER_FIELD not in element
    ):
        return RecordCheck.failed(
            position,
            f"Invalid card at index {position}. "
            "Each card must have 'question' and 'answer' fields.",
        )
    question = element[QUESTION_FIELD]
    answer = element[ANSWER_FIELD]
    if not isinstance(question, str) or not isinstance(answer, str):
        return RecordCheck.failed(
            position,
            f"Invalid card at index {position}. Question and answer must be strings.",
        )
    return RecordCheck.passed(
        CandidateRecord(
            position=position,
            question=question,
            answer=answer,
            record_id=_declared_id(element),
        )
    )


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as error:
        raise ParseError(
            f"Invalid JSON syntax at line {error.lineno} column {error.colno}: {error.msg}."
        ) from error
    except RecursionError as error:
        raise ParseError("Invalid JSON: nesting is too deep.") from error


def _declared_title(root: Mapping[str, object]) -> str | None:
    title = root.get(TITLE_FIELD)
    if isinstance(title, str) and title:
        return title
    return None


def _declared_id(element: Mapping[str, object]) -> str | None:
    record_id = element.get(ID_FIELD)
    if isinstance(record_id, str) and record_id:
        return record_id
    return None
