"""Coerce located values into the shapes the canonical record expects.

Every function here returns the shape's empty value when the input is
unusable; none of them raise for bad model output.
"""

import json
import math
import re
from typing import Any

from models.schemas.extracted_record import WorkHistoryEntry
from models.schemas.field_alias import ScoreScale, Shape
from services.extraction.normalizer import loads_lenient, parse_json_text

# Keys that hold the human-readable text of an object-shaped skill or red flag
LABEL_KEYS: tuple[str, ...] = (
    "name",
    "Name",
    "skill",
    "Skill",
    "description",
    "Description",
    "issue",
    "Issue",
    "text",
    "title",
    "Title",
    "flag",
)

# WorkHistoryEntry field -> accepted spellings, in priority order
ENTRY_KEYS: dict[str, tuple[str, ...]] = {
    "title": ("title", "Title", "job_title", "jobTitle", "Job Title", "position", "Position", "role", "Role"),
    "company": ("company", "Company", "employer", "Employer", "organization", "Organization", "company_name"),
    "location": ("location", "Location"),
    "start_date": ("startDate", "start_date", "StartDate", "Start Date", "Start_Date", "from"),
    "end_date": ("endDate", "end_date", "EndDate", "End Date", "End_Date", "to"),
    "description": ("description", "Description", "responsibilities", "Responsibilities", "summary"),
    "is_current_role": ("isCurrentRole", "is_current_role", "IsCurrentRole", "Is Current Role", "isCurrent", "current"),
    "duration_months": ("durationMonths", "duration_months", "DurationMonths", "Duration Months", "Duration_Months"),
}

SUMMARY_TEXT_KEYS: tuple[str, ...] = ("text", "summary", "Summary", "content")

_TRUE_STRINGS = {"true", "yes", "y", "1", "current", "present"}
_PRESENT_RE = re.compile(r"^\s*(present|current|now|ongoing)\b", re.IGNORECASE)


def coerce(value: Any, shape: Shape, score_scale: ScoreScale | None = None) -> Any:
    if shape == "stringArray":
        return to_string_list(value)
    if shape == "recordArray":
        return to_work_history(value)
    if shape == "scalarString":
        return to_text(value)
    if shape == "scalarNumber":
        return to_score(value, score_scale or ScoreScale())
    raise ValueError(f"Unknown shape: {shape}")


def to_string_list(value: Any) -> list[str]:
    """Arrays keep their non-empty elements; strings are JSON or comma lists."""
    if isinstance(value, list):
        out: list[str] = []
        for item in value:
            text = _item_to_text(item)
            if text:
                out.append(text)
        return out

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        try:
            parsed = loads_lenient(text)
        except ValueError:
            return [part.strip() for part in text.split(",") if part.strip()]
        # Decoded JSON is treated exactly like the same value passed directly
        if isinstance(parsed, (list, str, dict)):
            return to_string_list(parsed)
        item = _item_to_text(parsed)
        return [item] if item else []

    return []


def to_work_history(value: Any) -> list[WorkHistoryEntry]:
    """Map job objects to WorkHistoryEntry, dropping ones without title or company.

    Free text is never decomposed into jobs: a string either parses as JSON
    or yields nothing.
    """
    if isinstance(value, str):
        value = _parse_records_text(value)
    if isinstance(value, dict):
        value = [value]
    if not isinstance(value, list):
        return []

    entries: list[WorkHistoryEntry] = []
    for item in value:
        if not isinstance(item, dict):
            continue
        entry = _to_entry(item)
        if entry.is_valid:
            entries.append(entry)
    return entries


def to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return json.dumps(value)
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, dict):
        for key in SUMMARY_TEXT_KEYS:
            if isinstance(value.get(key), str):
                return value[key]
    if isinstance(value, list) and value and all(isinstance(v, str) for v in value):
        return "\n".join(value)
    return json.dumps(value, sort_keys=True, default=str)


def to_score(value: Any, scale: ScoreScale) -> float | None:
    """Parse a score and bring it onto 0-100.

    With rescaling enabled, values in [0, unit_max] are treated as fractions
    and values in (unit_max, tenth_max] as out-of-ten.
    """
    number = _to_number(value)
    if number is None or number < 0:
        return None

    if scale.enabled:
        if number <= scale.unit_max:
            number *= 100
        elif number <= scale.tenth_max:
            number *= 10

    return round(min(number, scale.ceiling), 2)


def _to_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().rstrip("%").strip()
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _item_to_text(item: Any) -> str:
    if item is None or item is False:
        return ""
    if isinstance(item, str):
        return item.strip()
    if isinstance(item, dict):
        for key in LABEL_KEYS:
            label = item.get(key)
            if isinstance(label, str) and label.strip():
                return label.strip()
        return json.dumps(item, sort_keys=True, default=str) if item else ""
    if isinstance(item, (int, float)) and not item:
        return ""
    return json.dumps(item, sort_keys=True, default=str)


def _parse_records_text(text: str) -> Any:
    text = text.strip()
    if not text:
        return None
    try:
        return loads_lenient(text)
    except ValueError:
        pass
    if text.startswith("["):
        return None
    return parse_json_text(text)


def _to_entry(item: dict[str, Any]) -> WorkHistoryEntry:
    def pick(field: str) -> Any:
        for key in ENTRY_KEYS[field]:
            if item.get(key) is not None:
                return item[key]
        return None

    end_date = _entry_text(pick("end_date"))
    current = _to_bool(pick("is_current_role"))
    if current is None:
        current = bool(end_date and _PRESENT_RE.match(end_date))

    return WorkHistoryEntry(
        title=_entry_text(pick("title")),
        company=_entry_text(pick("company")),
        location=_entry_text(pick("location")),
        start_date=_entry_text(pick("start_date")),
        end_date=end_date,
        description=_entry_text(pick("description")),
        is_current_role=current,
        duration_months=_to_months(pick("duration_months")),
    )


def _entry_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return "\n".join(str(v).strip() for v in value if v is not None and str(v).strip())
    return to_text(value).strip()


def _to_bool(value: Any) -> bool | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return None


def _to_months(value: Any) -> int | None:
    number = _to_number(value)
    if number is None:
        return None
    return max(0, int(round(number)))
