from pydantic import BaseModel

from models.schemas.extracted_record import ExtractedRecord
from services.resync import ParsingStatus, SyncOutcome


class ExtractionResponse(BaseModel):
    record: ExtractedRecord = ExtractedRecord()
    status: ParsingStatus = ParsingStatus.NO_DATA
    field_sources: dict[str, str] = {}


class BatchExtractResponse(BaseModel):
    total: int = 0
    processed: int = 0
    skipped: int = 0
    failed: int = 0
    outcomes: list[SyncOutcome] = []


class AnalysisResponse(BaseModel):
    record: ExtractedRecord = ExtractedRecord()
    field_sources: dict[str, str] = {}
    degraded: bool = False
    raw_text: str = ""
