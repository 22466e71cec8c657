"""Unit tests for shared record validation."""

from __future__ import annotations

import pytest

from core.errors import FieldError
from core.types import CandidateRecord, Card
from importers.record_checks import RecordCheck, build_cards, collect_candidates


def test_collect_candidates_raises_first_failure() -> None:
    """The first failed check should abort with its index."""
    checks = [
        RecordCheck.passed(CandidateRecord(position=0, question="Q", answer="A")),
        RecordCheck.failed(1, "first problem"),
        RecordCheck.failed(2, "second problem"),
    ]

    with pytest.raises(FieldError, match="first problem") as error_info:
        collect_candidates(checks)

    assert error_info.value.index == 1


def test_build_cards_synthesizes_missing_ids() -> None:
    """Candidates without ids should get prefix-token-position ids."""
    candidates = [
        CandidateRecord(position=0, question="Q0", answer="A0"),
        CandidateRecord(position=1, question="Q1", answer="A1", record_id="given"),
    ]

    cards = build_cards(candidates, "imported", "555")

    assert cards == [
        Card(card_id="imported-555-0", question="Q0", answer="A0"),
        Card(card_id="given", question="Q1", answer="A1"),
    ]


def test_build_cards_rejects_duplicate_ids() -> None:
    """Reusing an id inside one payload should fail at the later index."""
    candidates = [
        CandidateRecord(position=0, question="Q0", answer="A0", record_id="same"),
        CandidateRecord(position=1, question="Q1", answer="A1", record_id="same"),
    ]

    with pytest.raises(FieldError, match="index 1") as error_info:
        build_cards(candidates, "imported", "1")

    assert error_info.value.index == 1


def test_build_cards_rejects_missing_text() -> None:
    """Candidates without text cannot become cards."""
    candidates = [CandidateRecord(position=4, question=None, answer="A")]

    with pytest.raises(FieldError, match="must be strings"):
        build_cards(candidates, "imported", "1")


def test_build_cards_avoids_supplied_ids_when_synthesizing() -> None:
    """A synthesized id matching a supplied one should get a suffix instead of failing."""
    candidates = [
        CandidateRecord(position=0, question="Q0", answer="A0", record_id="imported-1-1"),
        CandidateRecord(position=1, question="Q1", answer="A1"),
    ]

    cards = build_cards(candidates, "imported", "1")

    assert [card.card_id for card in cards] == ["imported-1-1", "imported-1-1-1"]


def test_build_cards_reserves_later_supplied_ids() -> None:
    """An id supplied later in the batch should not be taken by an earlier card."""
    candidates = [
        CandidateRecord(position=0, question="Q0", answer="A0"),
        CandidateRecord(position=1, question="Q1", answer="A1", record_id="imported-1-0"),
    ]

    cards = build_cards(candidates, "imported", "1")

    assert [card.card_id for card in cards] == ["imported-1-0-1", "imported-1-0"]
