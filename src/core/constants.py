"""Core constants used across Cardsmith modules.

This module centralizes id prefixes, user-facing messages and defaults.
Keeping values here avoids magic literals in import logic.
"""

from __future__ import annotations

DEFAULT_ENCODING = "utf-8"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_ID_STRATEGY = "timestamp"
SUPPORTED_ID_STRATEGIES = ("timestamp", "counter", "uuid")
SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ENV_ID_STRATEGY = "CARDSMITH_ID_STRATEGY"
ENV_ENCODING = "CARDSMITH_ENCODING"
ENV_LOG_LEVEL = "CARDSMITH_LOG_LEVEL"

JSON_EXTENSION = ".json"
CSV_EXTENSION = ".csv"

JSON_ID_PREFIX = "imported"
CSV_ID_PREFIX = "imported-csv"
SOURCE_PREFIX = "Imported from "
DEFAULT_TITLE = "Imported Flashcards"

QUESTION_FIELD = "question"
ANSWER_FIELD = "answer"
ID_FIELD = "id"
TITLE_FIELD = "title"
CARDS_FIELD = "cards"
CSV_DELIMITER = ","
CSV_QUOTE = '"'

JSON_SCHEMA_MESSAGE = 'Invalid JSON format. Expected structure: { "title": ..., "cards": [...] }'
CSV_TOO_FEW_LINES_MESSAGE = "CSV file must contain at least a header row and one data row"
CSV_MISSING_COLUMNS_MESSAGE = (
    'CSV file must contain columns with "question" and "answer" in their names'
)
CSV_NO_VALID_ROWS_MESSAGE = "No valid flashcards found in CSV file"
READ_FAILURE_MESSAGE = "Error reading file"
NON_TEXT_CONTENT_MESSAGE = "Failed to read file content"
JSON_FAILURE_PREFIX = "Error reading JSON file: "
CSV_FAILURE_PREFIX = "Error reading CSV file: "
