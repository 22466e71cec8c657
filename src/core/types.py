"""Shared typed models.

This module defines immutable data models used by payload sources,
importers, the assembler and the export layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class PayloadFormat(str, Enum):
    """Declared textual format of an import payload."""

    JSON = "json"
    CSV = "csv"


class ImportState(str, Enum):
    """Lifecycle state of one import attempt."""

    IDLE = "idle"
    READING = "reading"
    PARSING = "parsing"
    VALIDATING = "validating"
    ASSEMBLED = "assembled"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Payload:
    """Raw import input acquired once per attempt.

    Attributes:
        text: Full raw text content.
        payload_format: Declared format of the text.
        origin_name: Origin name, usually a filename, for title and provenance.
    """

    text: str
    payload_format: PayloadFormat
    origin_name: str


@dataclass(frozen=True)
class CandidateRecord:
    """Unvalidated record produced by a parser.

    Attributes:
        position: Index used for diagnostics and id synthesis.
        question: Question text when present.
        answer: Answer text when present.
        record_id: Caller-supplied id when present.
    """

    position: int
    question: str | None
    answer: str | None
    record_id: str | None = None


@dataclass(frozen=True)
class Card:
    """Validated question/answer record.

    Attributes:
        card_id: Identifier unique within its collection.
        question: Non-empty question text.
        answer: Non-empty answer text.
    """

    card_id: str
    question: str
    answer: str


@dataclass(frozen=True)
class Collection:
    """Fully validated, ordered set of cards.

    Attributes:
        title: Non-empty display title.
        source: Human-readable provenance string.
        cards: Cards in input order.
        created_at: UTC instant of assembly.
    """

    title: str
    source: str
    cards: tuple[Card, ...]
    created_at: datetime


@dataclass(frozen=True)
class ImportOutcome:
    """Terminal result of one import attempt.

    Attributes:
        state: Either ``ASSEMBLED`` or ``REJECTED``.
        collection: Assembled collection on success.
        error_kind: Error kind on rejection.
        error_message: User-facing error message on rejection.
    """

    state: ImportState
    collection: Collection | None = None
    error_kind: str | None = None
    error_message: str | None = None

    @property
    def succeeded(self) -> bool:
        """Return whether the attempt produced a collection."""
        return self.state is ImportState.ASSEMBLED
