"""Re-run extraction over stored AI responses in batches.

Each record is extracted independently. The sink (the caller's store) is
only written for records that yielded something worth persisting. Batching
and the pause between batches exist to bound load on the sink.
"""

import asyncio
import inspect
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable

from pydantic import BaseModel

from config import settings
from models.schemas.extracted_record import ExtractedRecord
from models.schemas.field_alias import ExtractionConfig
from services.extraction.assembler import assemble_traced
from services.extraction.normalizer import normalize

logger = logging.getLogger(__name__)

Sink = Callable[[str, ExtractedRecord], Awaitable[None] | None]


class ParsingStatus(str, Enum):
    COMPLETE = "complete"
    EMPTY = "empty"
    UNPARSEABLE = "unparseable"
    NO_DATA = "no_data"
    FAILED = "failed"


class StoredRecord(BaseModel):
    id: str
    raw_response: Any = None
    fallback_score: float | None = None


class SyncOutcome(BaseModel):
    id: str
    status: ParsingStatus
    record: ExtractedRecord
    field_sources: dict[str, str] = {}
    error: str = ""


class ResyncSummary(BaseModel):
    total: int = 0
    processed: int = 0
    skipped: int = 0
    failed: int = 0
    cancelled: bool = False
    outcomes: list[SyncOutcome] = []


def sync_record(stored: StoredRecord, config: ExtractionConfig | None = None) -> SyncOutcome:
    """Extract one stored record and classify the result."""
    if stored.raw_response is None:
        return SyncOutcome(
            id=stored.id,
            status=ParsingStatus.NO_DATA,
            record=ExtractedRecord(score=stored.fallback_score),
        )

    payload = normalize(stored.raw_response)
    record, sources = assemble_traced(payload, stored.fallback_score, config)

    if payload is None:
        status = ParsingStatus.UNPARSEABLE
    elif record.has_content:
        status = ParsingStatus.COMPLETE
    else:
        status = ParsingStatus.EMPTY
    return SyncOutcome(id=stored.id, status=status, record=record, field_sources=sources)


async def resync(
    records: Iterable[StoredRecord],
    sink: Sink | None = None,
    *,
    batch_size: int | None = None,
    pause_seconds: float | None = None,
    cancel_event: asyncio.Event | None = None,
    config: ExtractionConfig | None = None,
) -> ResyncSummary:
    """Extract ``records`` batch by batch, writing complete ones to ``sink``.

    ``batch_size`` and ``pause_seconds`` default to the configured values.
    A sink error marks that record failed and processing continues. Without a
    sink there is nothing to throttle, so ``pause_seconds`` is ignored. Setting
    ``cancel_event`` stops further records from being issued.
    """
    if batch_size is None:
        batch_size = settings.resync_batch_size
    if pause_seconds is None:
        pause_seconds = settings.resync_pause_seconds
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")
    # The pause only bounds load on the sink
    if sink is None:
        pause_seconds = 0.0

    summary = ResyncSummary()
    batch: list[StoredRecord] = []
    batch_no = 0

    for stored in records:
        batch.append(stored)
        if len(batch) < batch_size:
            continue
        if batch_no and pause_seconds > 0:
            await asyncio.sleep(pause_seconds)
        batch_no += 1
        if not await _run_batch(batch, batch_no, sink, summary, cancel_event, config):
            return summary
        batch = []

    if batch:
        if batch_no and pause_seconds > 0:
            await asyncio.sleep(pause_seconds)
        batch_no += 1
        await _run_batch(batch, batch_no, sink, summary, cancel_event, config)

    logger.info(
        "Resync finished: total=%d processed=%d skipped=%d failed=%d",
        summary.total,
        summary.processed,
        summary.skipped,
        summary.failed,
    )
    return summary


async def _run_batch(
    batch: list[StoredRecord],
    batch_no: int,
    sink: Sink | None,
    summary: ResyncSummary,
    cancel_event: asyncio.Event | None,
    config: ExtractionConfig | None,
) -> bool:
    """Process one batch into ``summary``. Returns False once cancelled."""
    logger.info("Resync batch %d: %d records", batch_no, len(batch))

    for stored in batch:
        if cancel_event is not None and cancel_event.is_set():
            logger.info("Resync cancelled after %d records", summary.total)
            summary.cancelled = True
            return False

        outcome = sync_record(stored, config)
        summary.total += 1

        if outcome.status is ParsingStatus.COMPLETE:
            if sink is not None:
                try:
                    result = sink(stored.id, outcome.record)
                    if inspect.isawaitable(result):
                        await result
                except Exception as e:
                    logger.error("Failed to store record %s: %s", stored.id, e)
                    outcome.status = ParsingStatus.FAILED
                    outcome.error = str(e)
        if outcome.status is ParsingStatus.COMPLETE:
            summary.processed += 1
        elif outcome.status is ParsingStatus.FAILED:
            summary.failed += 1
        else:
            summary.skipped += 1
        summary.outcomes.append(outcome)

    return True
