"""Import orchestration.

This module runs one import attempt through read, parse, validate and
assemble stages. ``import_payload`` is the synchronous core that raises
on the first failure; ``ImportSession`` drives an asynchronous attempt
from a payload source, tracks its state and converts a terminal error
into a user-facing outcome.
"""

from __future__ import annotations

from core.constants import CSV_FAILURE_PREFIX, JSON_FAILURE_PREFIX
from core.errors import CardsmithError, ReadError
from core.id_generation import IdGenerator, TimestampIdGenerator
from core.logging_config import get_logger
from core.types import Card, Collection, ImportOutcome, ImportState, Payload, PayloadFormat
from importers.assembler import Clock, assemble_collection, utc_now
from importers.csv_importer import parse_csv_document
from importers.json_importer import parse_json_document
from importers.payload_source import PayloadSource
from importers.record_checks import ParsedDocument, build_cards, collect_candidates

_LOGGER = get_logger(__name__)


def parse_payload(payload: Payload) -> ParsedDocument:
    """Dispatch payload text to the parser for its declared format.

    Raises:
        ParseError: If JSON syntax is malformed.
        SchemaError: If the JSON top-level shape is wrong.
        FormatError: If CSV structure is invalid.
    """
    if payload.payload_format is PayloadFormat.JSON:
        return parse_json_document(payload.text)
    document = parse_csv_document(payload.text)
    if document.skipped_count:
        _LOGGER.info(
            "csv_rows_skipped",
            origin_name=payload.origin_name,
            skipped_count=document.skipped_count,
        )
    return document


def validate_document(document: ParsedDocument, id_generator: IdGenerator) -> list[Card]:
    """Turn parser checks into cards.

    One id token is drawn per call and shared by every synthesized id.

    Raises:
        FieldError: If any record failed its checks.
    """
    candidates = collect_candidates(document.checks)
    return build_cards(candidates, document.id_prefix, id_generator.new_token())


def import_payload(
    payload: Payload,
    id_generator: IdGenerator | None = None,
    clock: Clock = utc_now,
) -> Collection:
    """Parse, validate and assemble a payload into a collection.

    Args:
        payload: Acquired payload.
        id_generator: Token source for synthesized ids.
        clock: Source of the creation timestamp.

    Returns:
        Fully validated collection.

    Raises:
        CardsmithError: The first parse, schema, field or format failure.
    """
    document = parse_payload(payload)
    cards = validate_document(document, id_generator or TimestampIdGenerator())
    return assemble_collection(payload, cards, document.title, clock)


class ImportSession:
    """Runs import attempts and exposes caller-facing progress state.

    A session holds only the state of the attempt in flight. Running two
    attempts on one session at the same time is not serialized here.
    """

    def __init__(self, id_generator: IdGenerator | None = None, clock: Clock = utc_now) -> None:
        self._id_generator = id_generator or TimestampIdGenerator()
        self._clock = clock
        self._state = ImportState.IDLE
        self._transitions: list[ImportState] = []
        self._loading = False
        self._error: str | None = None

    @property
    def state(self) -> ImportState:
        return self._state

    @property
    def loading(self) -> bool:
        """Return whether an attempt is currently in progress.

        The flag is shared by every ``run`` on this session. Overlapping
        runs are not serialized, so the first one to finish clears it while
        another may still be running; callers must await one attempt before
        starting the next.
        """
        return self._loading

    @property
    def error(self) -> str | None:
        """Return the error message of the last rejected attempt."""
        return self._error

    @property
    def transitions(self) -> tuple[ImportState, ...]:
        """Return states entered during the most recent attempt."""
        return tuple(self._transitions)

    async def run(self, source: PayloadSource) -> ImportOutcome:
        """Run one attempt to a terminal outcome.

        Args:
            source: Payload source to acquire from.

        Returns:
            Assembled or rejected outcome. The session is idle afterwards.
        """
        self._transitions = []
        self._error = None
        self._loading = True
        _LOGGER.info("import_started", origin_name=source.origin_name)
        try:
            outcome = await self._run_attempt(source)
        finally:
            self._loading = False
            self._enter(ImportState.IDLE)
        return outcome

    async def _run_attempt(self, source: PayloadSource) -> ImportOutcome:
        self._enter(ImportState.READING)
        try:
            payload = await source.acquire()
        except ReadError as error:
            return self._reject(error, str(error), source.origin_name)
        _LOGGER.info(
            "import_payload_acquired",
            origin_name=payload.origin_name,
            payload_format=payload.payload_format.value,
            char_count=len(payload.text),
        )
        try:
            self._enter(ImportState.PARSING)
            document = parse_payload(payload)
            self._enter(ImportState.VALIDATING)
            cards = validate_document(document, self._id_generator)
        except CardsmithError as error:
            message = _failure_prefix(payload.payload_format) + str(error)
            return self._reject(error, message, payload.origin_name)
        collection = assemble_collection(payload, cards, document.title, self._clock)
        self._enter(ImportState.ASSEMBLED)
        _LOGGER.info(
            "import_assembled",
            origin_name=payload.origin_name,
            card_count=len(collection.cards),
        )
        return ImportOutcome(state=ImportState.ASSEMBLED, collection=collection)

    def _reject(self, error: CardsmithError, message: str, origin_name: str) -> ImportOutcome:
        self._enter(ImportState.REJECTED)
        self._error = message
        _LOGGER.warning(
            "import_rejected",
            origin_name=origin_name,
            error_kind=error.kind,
            error=str(error),
        )
        return ImportOutcome(
            state=ImportState.REJECTED,
            error_kind=error.kind,
            error_message=message,
        )

    def _enter(self, state: ImportState) -> None:
        self._state = state
        self._transitions.append(state)


def _failure_prefix(payload_format: PayloadFormat) -> str:
    if payload_format is PayloadFormat.JSON:
        return JSON_FAILURE_PREFIX
    return CSV_FAILURE_PREFIX
