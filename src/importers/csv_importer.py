"""CSV importer for a simplified comma-delimited dialect.

The first non-blank line is a header row. The question and answer
columns are the first headers containing ``question`` and ``answer``
(case-insensitive substring match, any order, extra columns ignored).

Dialect limits: rows are split on every raw comma and each field only
loses one leading and one trailing double quote. Quoted fields holding
commas or escaped quotes are therefore mis-split; this is part of the
format contract and is not upgraded to full RFC 4180 parsing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from core.constants import (
    ANSWER_FIELD,
    CSV_DELIMITER,
    CSV_ID_PREFIX,
    CSV_MISSING_COLUMNS_MESSAGE,
    CSV_NO_VALID_ROWS_MESSAGE,
    CSV_QUOTE,
    CSV_TOO_FEW_LINES_MESSAGE,
    QUESTION_FIELD,
)
from core.errors import FormatError
from core.types import CandidateRecord
from importers.record_checks import ParsedDocument, RecordCheck


@dataclass(frozen=True)
class HeaderColumns:
    """Resolved column indexes for question and answer fields."""

    question_index: int
    answer_index: int

    @property
    def min_width(self) -> int:
        return max(self.question_index, self.answer_index) + 1


def parse_csv_document(text: str) -> ParsedDocument:
    """Parse CSV payload text into checked candidates.

    Rows too short to hold both columns, and rows whose question or
    answer is empty after trimming, are skipped without error.

    Args:
        text: Raw payload text.

    Returns:
        Parsed document; candidate positions are 1-based data line numbers.

    Raises:
        FormatError: If there is no data row, required columns are missing,
            or no row survives filtering.
    """
    lines = split_nonblank_lines(text)
    if len(lines) < 2:
        raise FormatError(CSV_TOO_FEW_LINES_MESSAGE)
    columns = resolve_header_columns(lines[0])
    checks: list[RecordCheck] = []
    for line_number, line in enumerate(lines[1:], 1):
        candidate = _row_candidate(line_number, split_row(line), columns)
        if candidate is not None:
            checks.append(RecordCheck.passed(candidate))
    if not checks:
        raise FormatError(CSV_NO_VALID_ROWS_MESSAGE)
    return ParsedDocument(
        checks=tuple(checks),
        id_prefix=CSV_ID_PREFIX,
        skipped_count=len(lines) - 1 - len(checks),
    )


def split_nonblank_lines(text: str) -> list[str]:
    """Split on newlines and drop whitespace-only lines."""
    return [line for line in text.split("\n") if line.strip()]


def resolve_header_columns(header_line: str) -> HeaderColumns:
    """Locate the question and answer columns in a header row.

    Args:
        header_line: Raw header line.

    Returns:
        Column indexes of the first matching headers.

    Raises:
        FormatError: If either column cannot be found.
    """
    headers = [header.strip().lower() for header in header_line.split(CSV_DELIMITER)]
    question_index = _first_header_containing(headers, QUESTION_FIELD)
    answer_index = _first_header_containing(headers, ANSWER_FIELD)
    if question_index is None or answer_index is None:
        raise FormatError(CSV_MISSING_COLUMNS_MESSAGE)
    return HeaderColumns(question_index=question_index, answer_index=answer_index)


def split_row(line: str) -> list[str]:
    """Split a data line on raw commas and clean each field."""
    return [_clean_field(field) for field in line.split(CSV_DELIMITER)]


def _first_header_containing(headers: Sequence[str], needle: str) -> int | None:
    for index, header in enumerate(headers):
        if needle in header:
            return index
    return None


def _clean_field(raw_field: str) -> str:
    value = raw_field.strip()
    if value.startswith(CSV_QUOTE):
        value = value[1:]
    if value.endswith(CSV_QUOTE):
        value = value[:-1]
    return value.strip()


def _row_candidate(
    line_number: int,
    fields: Sequence[str],
    columns: HeaderColumns,
) -> CandidateRecord | None:
    if len(fields) < columns.min_width:
        return None
    question = fields[columns.question_index]
    answer = fields[columns.answer_index]
    if not question or not answer:
        return None
    return CandidateRecord(position=line_number, question=question, answer=answer)
