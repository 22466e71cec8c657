"""Payload sources for import attempts.

This module models payload acquisition as an injected source with one
asynchronous ``acquire`` operation. Reading is the only suspension point
of an import attempt; every acquisition failure becomes a ``ReadError``.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Protocol

from core.constants import (
    CSV_EXTENSION,
    DEFAULT_ENCODING,
    JSON_EXTENSION,
    NON_TEXT_CONTENT_MESSAGE,
    READ_FAILURE_MESSAGE,
)
from core.errors import FormatError, ReadError
from core.types import Payload, PayloadFormat


class PayloadSource(Protocol):
    """Asynchronous provider of one import payload."""

    @property
    def origin_name(self) -> str:
        """Return the origin name used for title and provenance."""
        ...

    async def acquire(self) -> Payload:
        """Return the full payload or raise ``ReadError``."""
        ...


class FilePayloadSource:
    """Reads a payload from a local file without blocking the event loop."""

    def __init__(
        self,
        file_path: str | Path,
        payload_format: PayloadFormat | None = None,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        """Create a file-backed payload source.

        Args:
            file_path: File to read.
            payload_format: Declared format; detected from the extension if omitted.
            encoding: Text encoding of the file.

        Raises:
            FormatError: If no format is given and the extension is unsupported.
        """
        self._file_path = Path(file_path).expanduser()
        self._encoding = encoding
        self._payload_format = payload_format or detect_payload_format(self._file_path.name)

    @property
    def origin_name(self) -> str:
        return self._file_path.name

    @property
    def payload_format(self) -> PayloadFormat:
        return self._payload_format

    async def acquire(self) -> Payload:
        """Read the file on a worker thread.

        Returns:
            Payload holding the file text.

        Raises:
            ReadError: If the file is missing, unreadable or not valid text.
        """
        try:
            text = await asyncio.to_thread(self._file_path.read_text, encoding=self._encoding)
        except UnicodeDecodeError as error:
            raise ReadError(NON_TEXT_CONTENT_MESSAGE) from error
        except OSError as error:
            raise ReadError(READ_FAILURE_MESSAGE) from error
        return Payload(text=text, payload_format=self._payload_format, origin_name=self.origin_name)


class InMemoryPayloadSource:
    """Serves a payload from memory, for tests and embedded callers."""

    def __init__(
        self,
        content: str | bytes,
        payload_format: PayloadFormat,
        origin_name: str,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        self._content = content
        self._payload_format = payload_format
        self._origin_name = origin_name
        self._encoding = encoding

    @property
    def origin_name(self) -> str:
        return self._origin_name

    async def acquire(self) -> Payload:
        text = self._content
        if isinstance(text, bytes):
            try:
                text = text.decode(self._encoding)
            except UnicodeDecodeError as error:
                raise ReadError(NON_TEXT_CONTENT_MESSAGE) from error
        return Payload(
            text=text, payload_format=self._payload_format, origin_name=self._origin_name
        )


def detect_payload_format(origin_name: str) -> PayloadFormat:
    """Detect the payload format from a file extension.

    Args:
        origin_name: File name with extension.

    Returns:
        Matching payload format.

    Raises:
        FormatError: If the extension is neither ``.json`` nor ``.csv``.
    """
    suffix = Path(origin_name).suffix.lower()
    if suffix == JSON_EXTENSION:
        return PayloadFormat.JSON
    if suffix == CSV_EXTENSION:
        return PayloadFormat.CSV
    raise FormatError(
        f"Unsupported import file '{origin_name}'. "
        f"Supported extensions: {JSON_EXTENSION}, {CSV_EXTENSION}."
    )
