"""Unit tests for payload sources."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from core.errors import FormatError, ReadError
from core.types import PayloadFormat
from importers.payload_source import (
    FilePayloadSource,
    InMemoryPayloadSource,
    detect_payload_format,
)
from tests.fixture_paths import fixture_path


def test_file_payload_source_reads_file_and_detects_format() -> None:
    """File sources should read text and infer format from the extension."""
    source = FilePayloadSource(fixture_path("imports/biology.json"))

    payload = asyncio.run(source.acquire())

    assert payload.payload_format is PayloadFormat.JSON
    assert payload.origin_name == "biology.json"
    assert '"Cell Biology"' in payload.text


def test_file_payload_source_raises_for_missing_path(tmp_path: Path) -> None:
    """Missing files should fail with a read error."""
    missing_path = tmp_path / "does-not-exist.csv"
    source = FilePayloadSource(missing_path)

    with pytest.raises(ReadError, match="Error reading file"):
        asyncio.run(source.acquire())

    assert missing_path.exists() is False


def test_file_payload_source_raises_for_undecodable_text() -> None:
    """Bytes invalid in the configured encoding should fail as a read error."""
    source = FilePayloadSource(fixture_path("imports/latin1.csv"))

    with pytest.raises(ReadError, match="Failed to read file content"):
        asyncio.run(source.acquire())


def test_file_payload_source_honours_encoding() -> None:
    """A matching encoding should decode the same file."""
    source = FilePayloadSource(fixture_path("imports/latin1.csv"), encoding="latin-1")

    payload = asyncio.run(source.acquire())

    assert "café" in payload.text


def test_file_payload_source_accepts_declared_format() -> None:
    """A declared format should bypass extension detection."""
    source = FilePayloadSource(fixture_path("imports/deck.tsv"), PayloadFormat.CSV)

    assert source.payload_format is PayloadFormat.CSV


def test_file_payload_source_rejects_unknown_extension() -> None:
    """Undeclared unknown extensions should fail before reading."""
    with pytest.raises(FormatError, match="deck.tsv"):
        FilePayloadSource(fixture_path("imports/deck.tsv"))


def test_in_memory_payload_source_decodes_bytes() -> None:
    """Byte content should be decoded with the given encoding."""
    source = InMemoryPayloadSource("Q,A".encode("utf-8"), PayloadFormat.CSV, "deck.csv")

    payload = asyncio.run(source.acquire())

    assert payload.text == "Q,A"


def test_in_memory_payload_source_rejects_invalid_bytes() -> None:
    """Invalid bytes should surface as a read error."""
    source = InMemoryPayloadSource(b"\xff\xfe\xfa", PayloadFormat.JSON, "deck.json")

    with pytest.raises(ReadError):
        asyncio.run(source.acquire())


@pytest.mark.parametrize(
    ("origin_name", "expected"),
    [("a.json", PayloadFormat.JSON), ("B.JSON", PayloadFormat.JSON), ("c.Csv", PayloadFormat.CSV)],
)
def test_detect_payload_format_is_case_insensitive(
    origin_name: str,
    expected: PayloadFormat,
) -> None:
    """Extension detection should ignore case."""
    assert detect_payload_format(origin_name) is expected
