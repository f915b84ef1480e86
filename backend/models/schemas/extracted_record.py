"""Canonical output of the extraction core: one record per AI response."""

from pydantic import BaseModel, Field


class WorkHistoryEntry(BaseModel):
    """A single job, normalized from whatever keys the model used."""
    title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""
    is_current_role: bool = False
    duration_months: int | None = Field(default=None, ge=0)

    @property
    def is_valid(self) -> bool:
        return bool(self.title or self.company)


class ExtractedRecord(BaseModel):
    """Skills, work history, red flags, summary and score for one resume/job pair.

    Lists and summary are never null. ``score`` is None only when neither the
    payload nor the caller's fallback supplied one.
    """
    skills: list[str] = []
    work_history: list[WorkHistoryEntry] = []
    red_flags: list[str] = []
    summary: str = ""
    score: float | None = None

    @property
    def has_content(self) -> bool:
        return bool(self.skills or self.work_history or self.red_flags or self.summary)
