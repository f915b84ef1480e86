"""Pydantic contracts shared by the extraction core and the API."""

from models.schemas.extracted_record import ExtractedRecord, WorkHistoryEntry
from models.schemas.field_alias import (
    Candidate,
    ExtractionConfig,
    FieldAlias,
    ScoreScale,
)

__all__ = [
    "Candidate",
    "ExtractedRecord",
    "ExtractionConfig",
    "FieldAlias",
    "ScoreScale",
    "WorkHistoryEntry",
]
