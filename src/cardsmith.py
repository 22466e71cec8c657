"""Public SDK surface for Cardsmith.

This module provides a stable import path for embedding callers.
It exposes the client facade plus the typed models and errors.
"""

from __future__ import annotations

from pathlib import Path

from core.config import CardsmithConfig
from core.errors import (
    CardsmithConfigError,
    CardsmithError,
    FieldError,
    FormatError,
    ParseError,
    ReadError,
    SchemaError,
)
from core.id_generation import (
    CounterIdGenerator,
    IdGenerator,
    TimestampIdGenerator,
    UuidIdGenerator,
    build_id_generator,
)
from core.logging_config import configure_logging
from core.types import Card, Collection, ImportOutcome, ImportState, Payload, PayloadFormat
from export.collection_export import (
    export_collection_csv,
    export_collection_json,
    write_collection,
)
from importers.assembler import Clock, utc_now
from importers.payload_source import (
    FilePayloadSource,
    InMemoryPayloadSource,
    PayloadSource,
    detect_payload_format,
)
from importers.pipeline import ImportSession, import_payload


class CardsmithClient:
    """Primary SDK entry point for importing and exporting collections."""

    def __init__(
        self,
        config: CardsmithConfig | None = None,
        id_generator: IdGenerator | None = None,
        clock: Clock = utc_now,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration; read from env if omitted.
            id_generator: Optional token source overriding the configured strategy.
            clock: Source of collection timestamps.
        """
        self._config = config or CardsmithConfig.from_env()
        configure_logging(self._config.log_level)
        self._id_generator = id_generator or build_id_generator(self._config.id_strategy)
        self._clock = clock
        self._session = ImportSession(self._id_generator, clock)

    @property
    def session(self) -> ImportSession:
        """Return the session tracking progress of the current attempt."""
        return self._session

    async def import_file(
        self,
        file_path: str | Path,
        payload_format: PayloadFormat | None = None,
    ) -> ImportOutcome:
        """Import a local JSON or CSV file.

        Args:
            file_path: File to read.
            payload_format: Declared format; detected from the extension if omitted.

        Returns:
            Terminal import outcome.

        Raises:
            FormatError: If no format is given and the extension is unsupported.
        """
        source = FilePayloadSource(file_path, payload_format, self._config.encoding)
        return await self._session.run(source)

    async def import_source(self, source: PayloadSource) -> ImportOutcome:
        """Import from any payload source."""
        return await self._session.run(source)

    def import_text(
        self,
        text: str,
        payload_format: PayloadFormat,
        origin_name: str,
    ) -> Collection:
        """Import already-acquired text synchronously.

        Raises:
            CardsmithError: The first parse, schema, field or format failure.
        """
        payload = Payload(text=text, payload_format=payload_format, origin_name=origin_name)
        return import_payload(payload, self._id_generator, self._clock)

    def export_json(self, collection: Collection) -> str:
        return export_collection_json(collection)

    def export_csv(self, collection: Collection) -> str:
        return export_collection_csv(collection)

    def export_file(self, collection: Collection, output_path: str | Path) -> Path:
        return write_collection(collection, output_path)


__all__ = [
    "Card",
    "CardsmithClient",
    "CardsmithConfig",
    "CardsmithConfigError",
    "CardsmithError",
    "Collection",
    "CounterIdGenerator",
    "FieldError",
    "FilePayloadSource",
    "FormatError",
    "IdGenerator",
    "ImportOutcome",
    "ImportSession",
    "ImportState",
    "InMemoryPayloadSource",
    "ParseError",
    "Payload",
    "PayloadFormat",
    "PayloadSource",
    "ReadError",
    "SchemaError",
    "TimestampIdGenerator",
    "UuidIdGenerator",
    "detect_payload_format",
    "import_payload",
]
