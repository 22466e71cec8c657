"""Identifier token sources for synthesized card ids.

An import attempt requests one token and combines it with each record
position, so synthesized ids are distinct within one collection. Tokens
are best-effort unique across attempts and must not be used as
deduplication keys between imports.
"""

from __future__ import annotations

import itertools
import threading
import time
from typing import Callable, Protocol
from uuid import uuid4

from core.constants import SUPPORTED_ID_STRATEGIES
from core.errors import CardsmithConfigError


class IdGenerator(Protocol):
    """Source of per-attempt id tokens."""

    def new_token(self) -> str:
        """Return a token shared by all ids synthesized in one attempt."""
        ...


class TimestampIdGenerator:
    """Millisecond wall-clock tokens."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock

    def new_token(self) -> str:
        return str(int(self._clock() * 1000))


class CounterIdGenerator:
    """Monotonic integer tokens, deterministic for tests."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def new_token(self) -> str:
        with self._lock:
            return str(next(self._counter))


class UuidIdGenerator:
    """Random UUID4 hex tokens."""

    def new_token(self) -> str:
        return uuid4().hex


def build_id_generator(strategy: str) -> IdGenerator:
    """Build an id generator for a configured strategy name.

    Args:
        strategy: One of ``timestamp``, ``counter`` or ``uuid``.

    Returns:
        Id generator instance.

    Raises:
        CardsmithConfigError: If the strategy is unknown.
    """
    if strategy == "timestamp":
        return TimestampIdGenerator()
    if strategy == "counter":
        return CounterIdGenerator()
    if strategy == "uuid":
        return UuidIdGenerator()
    raise CardsmithConfigError(
        f"Unsupported id strategy '{strategy}'. "
        f"Supported strategies: {', '.join(SUPPORTED_ID_STRATEGIES)}."
    )


def synthesize_card_id(prefix: str, token: str, position: int) -> str:
    """Combine prefix, attempt token and record position into an id."""
    return f"{prefix}-{token}-{position}"
