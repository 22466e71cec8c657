"""Integration tests for file import and export workflows."""

from __future__ import annotations

import asyncio
from pathlib import Path

from cardsmith import CardsmithClient, CardsmithConfig, CounterIdGenerator, PayloadFormat
from tests.fixture_paths import fixture_path


def _client() -> CardsmithClient:
    return CardsmithClient(CardsmithConfig(id_strategy="counter"), CounterIdGenerator())


def test_import_json_fixture_keeps_text_and_ids() -> None:
    """JSON fixture import should keep declared ids and exact text."""
    outcome = asyncio.run(_client().import_file(fixture_path("imports/biology.json")))

    collection = outcome.collection
    assert collection is not None
    assert collection.title == "Cell Biology"
    assert collection.source == "Imported from biology.json"
    assert [card.card_id for card in collection.cards] == ["cell-1", "imported-1-1", "imported-1-2"]
    assert collection.cards[1].question == "Où se trouve l'ADN ?"
    assert collection.cards[1].answer == "Dans le noyau — surtout."


def test_import_untitled_json_uses_file_name() -> None:
    """Untitled JSON should be titled after its file name."""
    outcome = asyncio.run(_client().import_file(fixture_path("imports/untitled.json")))

    assert outcome.collection is not None
    assert outcome.collection.title == "untitled"


def test_import_csv_fixture_filters_rows() -> None:
    """CSV fixture import should keep valid rows in file order."""
    outcome = asyncio.run(_client().import_file(fixture_path("imports/capitals.csv")))

    collection = outcome.collection
    assert collection is not None
    assert collection.title == "capitals"
    assert [(card.card_id, card.question, card.answer) for card in collection.cards] == [
        ("imported-csv-1-1", "Capital of France?", "Paris"),
        ("imported-csv-1-4", "Capital of Italy?", "Rome"),
    ]


def test_import_failures_are_distinct_messages() -> None:
    """Header-only CSV and malformed JSON should fail with distinct messages."""
    client = _client()

    header_only = asyncio.run(client.import_file(fixture_path("imports/header_only.csv")))
    truncated = asyncio.run(client.import_file(fixture_path("imports/truncated.json")))

    assert header_only.error_message == (
        "Error reading CSV file: "
        "CSV file must contain at least a header row and one data row"
    )
    assert truncated.error_kind == "parse"
    assert truncated.error_message.startswith("Error reading JSON file: Invalid JSON syntax")
    assert client.session.loading is False


def test_json_export_reimport_round_trips_text(tmp_path: Path) -> None:
    """Exported JSON should re-import with identical ids and text."""
    client = _client()
    original = asyncio.run(client.import_file(fixture_path("imports/biology.json"))).collection
    assert original is not None

    exported_path = client.export_file(original, tmp_path / "biology-export.json")
    reimported = asyncio.run(client.import_file(exported_path)).collection

    assert reimported is not None
    assert reimported.title == original.title
    assert reimported.cards == original.cards


def test_csv_export_reimport_keeps_simple_cards() -> None:
    """Comma-free cards should survive a CSV export and re-import."""
    client = _client()
    collection = client.import_text(
        '{"cards":[{"question":"Q1","answer":"A1"},{"question":"Q2","answer":"A2"}]}',
        PayloadFormat.JSON,
        "pairs.json",
    )

    reimported = client.import_text(client.export_csv(collection), PayloadFormat.CSV, "pairs.csv")

    assert [(card.question, card.answer) for card in reimported.cards] == [
        ("Q1", "A1"),
        ("Q2", "A2"),
    ]
