"""Shared record validation and normalization.

Parsers describe each raw record as a tagged ``RecordCheck`` that either
holds a candidate or a failure message, without assuming presence or
type of any field. The validator then rejects the batch on the first
failure, or turns candidates into cards with synthesized ids.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from core.errors import FieldError
from core.id_generation import synthesize_card_id
from core.types import CandidateRecord, Card


@dataclass(frozen=True)
class RecordCheck:
    """Outcome of checking one raw record.

    Attributes:
        position: Record index in encounter order.
        candidate: Candidate record when the check passed.
        error_message: Failure description when the check failed.
    """

    position: int
    candidate: CandidateRecord | None = None
    error_message: str | None = None

    @classmethod
    def passed(cls, candidate: CandidateRecord) -> "RecordCheck":
        return cls(position=candidate.position, candidate=candidate)

    @classmethod
    def failed(cls, position: int, error_message: str) -> "RecordCheck":
        return cls(position=position, error_message=error_message)

    @property
    def ok(self) -> bool:
        return self.candidate is not None


def collect_candidates(checks: Iterable[RecordCheck]) -> list[CandidateRecord]:
    """Return all candidates, or raise on the first failed check.

    Args:
        checks: Record checks in encounter order.

    Returns:
        Candidates in encounter order.

    Raises:
        FieldError: For the first failed check, carrying its position.
    """
    candidates: list[CandidateRecord] = []
    for check in checks:
        if check.candidate is None:
            raise FieldError(check.error_message or "Invalid card.", index=check.position)
        candidates.append(check.candidate)
    return candidates


def build_cards(
    candidates: Sequence[CandidateRecord],
    id_prefix: str,
    token: str,
) -> list[Card]:
    """Normalize candidates into cards.

    Supplied ids are kept when they are non-empty strings; otherwise an id
    is synthesized from the prefix, the attempt token and the position.
    A synthesized id never takes a value supplied elsewhere in the batch;
    on collision it gets a numeric suffix.

    Args:
        candidates: Checked candidates in input order.
        id_prefix: Prefix for synthesized ids.
        token: Per-attempt id token.

    Returns:
        Cards in input order; duplicate question/answer text is kept.

    Raises:
        FieldError: If a record lacks text or reuses a supplied id already seen.
    """
    cards: list[Card] = []
    seen_ids: set[str] = set()
    supplied_ids = {candidate.record_id for candidate in candidates if candidate.record_id}
    for candidate in candidates:
        if not isinstance(candidate.question, str) or not isinstance(candidate.answer, str):
            raise FieldError(
                f"Invalid card at index {candidate.position}. "
                "Question and answer must be strings.",
                index=candidate.position,
            )
        card_id = candidate.record_id or _unclaimed_id(
            synthesize_card_id(id_prefix, token, candidate.position), supplied_ids, seen_ids
        )
        if card_id in seen_ids:
            raise FieldError(
                f"Invalid card at index {candidate.position}. "
                f"Duplicate card id '{card_id}'.",
                index=candidate.position,
            )
        seen_ids.add(card_id)
        cards.append(Card(card_id=card_id, question=candidate.question, answer=candidate.answer))
    return cards


@dataclass(frozen=True)
class ParsedDocument:
    """Parser output handed to the validator.

    Attributes:
        checks: Per-record checks in encounter order.
        id_prefix: Prefix for ids synthesized from this document.
        title: Title declared inside the payload, if any.
        skipped_count: Rows dropped by format-level filtering.
    """

    checks: tuple[RecordCheck, ...]
    id_prefix: str
    title: str | None = None
    skipped_count: int = 0


def _unclaimed_id(base_id: str, supplied_ids: set[str], seen_ids: set[str]) -> str:
    card_id = base_id
    suffix = 1
    while card_id in supplied_ids or card_id in seen_ids:
        card_id = f"{base_id}-{suffix}"
        suffix += 1
    return card_id
