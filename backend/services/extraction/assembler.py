"""Assemble the canonical ExtractedRecord from a normalized payload.

Each field is located and coerced independently; a failure in one field
leaves that field at its default and does not affect the others.
"""

import logging
from typing import Any

from models.schemas.extracted_record import ExtractedRecord
from models.schemas.field_alias import ExtractionConfig
from services.extraction.aliases import default_config
from services.extraction.coercer import coerce
from services.extraction.locator import Found, locate
from services.extraction.normalizer import normalize

logger = logging.getLogger(__name__)

# ExtractionConfig field name -> ExtractedRecord attribute
RECORD_FIELDS: dict[str, str] = {
    "skills": "skills",
    "workHistory": "work_history",
    "redFlags": "red_flags",
    "summary": "summary",
    "score": "score",
}

_default_config: ExtractionConfig | None = None


def get_default_config() -> ExtractionConfig:
    global _default_config
    if _default_config is None:
        _default_config = default_config()
    return _default_config


def assemble(
    payload: dict[str, Any] | None,
    fallback_score: float | None = None,
    config: ExtractionConfig | None = None,
) -> ExtractedRecord:
    record, _ = assemble_traced(payload, fallback_score, config)
    return record


def assemble_traced(
    payload: dict[str, Any] | None,
    fallback_score: float | None = None,
    config: ExtractionConfig | None = None,
) -> tuple[ExtractedRecord, dict[str, str]]:
    """Like :func:`assemble`, also returning where each field was found.

    The second element maps field name (``skills``, ``workHistory``...) to the
    locator path of the value used. Fields left at their default are absent.
    """
    if payload is None:
        return ExtractedRecord(score=fallback_score), {}

    config = config or get_default_config()
    values: dict[str, Any] = {}
    sources: dict[str, str] = {}

    for name, attr in RECORD_FIELDS.items():
        alias = config.aliases.get(name)
        if alias is None:
            continue
        try:
            found = locate(payload, alias)
            if not isinstance(found, Found):
                continue
            coerced = coerce(found.value, alias.shape, config.score_scale)
        except Exception as e:
            logger.warning("Extraction of %s failed, using default: %s", name, e)
            continue

        if coerced is None:
            continue
        values[attr] = coerced
        sources[name] = found.path

    if values.get("score") is None:
        values["score"] = fallback_score

    record = ExtractedRecord(**values)

    logger.debug(
        "Extracted skills=%d work_history=%d red_flags=%d summary=%s score=%s",
        len(record.skills),
        len(record.work_history),
        len(record.red_flags),
        bool(record.summary),
        record.score,
    )
    return record, sources


def extract(
    raw: Any,
    fallback_score: float | None = None,
    config: ExtractionConfig | None = None,
) -> ExtractedRecord:
    """Normalize ``raw`` and assemble its record in one step."""
    return assemble(normalize(raw), fallback_score, config)

