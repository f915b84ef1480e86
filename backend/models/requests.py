from typing import Any

from pydantic import BaseModel, Field

from services.resync import StoredRecord


class ExtractRequest(BaseModel):
    raw_response: Any = Field(None, description="AI response as returned or stored: object, text or null")
    fallback_score: float | None = Field(None, description="Previously computed score used when none is found")


class BatchExtractRequest(BaseModel):
    records: list[StoredRecord] = Field(..., max_length=500)
    batch_size: int | None = Field(None, ge=1, le=500)


class QuickAnalyzeRequest(BaseModel):
    resume_text: str = Field(..., max_length=50000, description="Plain text resume content")
    job_description: str = Field(..., max_length=10000, description="Job description text")
    fallback_score: float | None = None
