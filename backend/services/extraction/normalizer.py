"""Turn a raw AI response into a JSON object, best effort.

Models return bare JSON, JSON wrapped in markdown fences, JSON preceded by
"Here is the JSON..." prose, or Python-flavoured near-JSON. ``normalize`` tries
progressively looser strategies and gives up with None rather than raising.
"""

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

# Lowercase markers that usually precede the real JSON object
TEXT_MARKERS: tuple[str, ...] = (
    "```json",
    "```",
    "here is the json",
    "here's the json",
    "json output",
    "json response",
    "json:",
)

_TRAILING_COMMA_RE = re.compile(r",\s*([\]}])")
_PY_LITERAL_RE = re.compile(r"(?<=[:\[,\s])(True|False|None)(?=\s*[,\]}])")
_PY_LITERALS = {"True": "true", "False": "false", "None": "null"}


def normalize(raw: Any) -> dict[str, Any] | None:
    """Return a JSON object for ``raw``, or None if none can be recovered.

    Dicts are returned unchanged. Strings (and bytes) go through
    :func:`parse_json_text`. Everything else, lists included, yields None.
    String-valued properties of the result are not parsed here.
    """
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        raw = bytes(raw).decode("utf-8", errors="replace")
    if isinstance(raw, str):
        return parse_json_text(raw)
    return None


def parse_json_text(text: str) -> dict[str, Any] | None:
    """Find a JSON object inside ``text``.

    Order: the whole string, first ``{`` to last ``}``, then the object that
    follows each known marker. Text that is valid JSON as a whole but not an
    object (an array, a scalar) yields None without any fallback.
    """
    text = text.strip()
    if not text:
        return None

    try:
        whole = loads_lenient(text)
    except ValueError:
        pass
    else:
        return whole if isinstance(whole, dict) else None

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None

    parsed = _loads_object(text[start : end + 1])
    if parsed is not None:
        return parsed

    lowered = text.lower()
    for marker in TEXT_MARKERS:
        pos = lowered.find(marker)
        while pos != -1:
            parsed = _parse_from(text, pos + len(marker))
            if parsed is not None:
                logger.debug("Recovered JSON after marker %r", marker)
                return parsed
            pos = lowered.find(marker, pos + 1)

    return None


def loads_lenient(text: str) -> Any:
    """json.loads, retried once after repairing common model mistakes.

    Raises ValueError when both attempts fail.
    """
    try:
        return json.loads(text)
    except RecursionError as e:
        raise ValueError("JSON nested too deeply") from e
    except ValueError:
        pass

    repaired = _repair(text)
    if repaired == text:
        raise ValueError("Not valid JSON")
    try:
        return json.loads(repaired)
    except RecursionError as e:
        raise ValueError("JSON nested too deeply") from e


def _loads_object(text: str) -> dict[str, Any] | None:
    try:
        value = loads_lenient(text)
    except ValueError:
        return None
    return value if isinstance(value, dict) else None


def _parse_from(text: str, offset: int) -> dict[str, Any] | None:
    """Parse the object starting at the first ``{`` at or after ``offset``."""
    start = text.find("{", offset)
    if start == -1:
        return None

    end = _matching_brace(text, start)
    if end != -1:
        parsed = _loads_object(text[start : end + 1])
        if parsed is not None:
            return parsed

    last = text.rfind("}")
    if last > start:
        return _loads_object(text[start : last + 1])
    return None


def _matching_brace(text: str, start: int) -> int:
    """Index of the brace closing the one at ``start``, ignoring braces in strings."""
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return -1


def _repair(text: str) -> str:
    repaired = _PY_LITERAL_RE.sub(lambda m: _PY_LITERALS[m.group(1)], text)
    return _TRAILING_COMMA_RE.sub(r"\1", repaired)
