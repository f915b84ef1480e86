"""Find a semantic field inside a normalized payload.

Candidates are probed strictly in the order the alias lists them; the first
key that is present with a non-null value wins, even if it is empty. No values
are merged across candidates.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from models.schemas.field_alias import FieldAlias
from services.extraction.normalizer import normalize

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_MISSING = object()


@dataclass(frozen=True)
class Found:
    path: str
    value: Any


class NotFound:
    """Sentinel result: no candidate matched. Use the NOT_FOUND instance."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = NotFound()

LocateResult = Found | NotFound


def locate(payload: dict[str, Any] | None, field: FieldAlias) -> LocateResult:
    """Return the first candidate of ``field`` present in ``payload``."""
    if not isinstance(payload, dict):
        return NOT_FOUND

    roots: dict[tuple[str, ...], dict[str, Any] | None] = {}
    for candidate in field.candidates:
        if candidate.path not in roots:
            roots[candidate.path] = resolve_root(payload, candidate.path)
        container = roots[candidate.path]
        if container is None:
            continue

        value = container.get(candidate.key, _MISSING)
        if value is _MISSING or value is None:
            continue

        path = format_path(candidate.path, candidate.key)
        logger.debug("Field %s found at %s", field.name, path)
        return Found(path=path, value=value)

    return NOT_FOUND


def resolve_root(payload: dict[str, Any], path: tuple[str, ...]) -> dict[str, Any] | None:
    """Walk ``path`` down from ``payload``.

    String values met along the way (including the final one) are
    re-normalized, so ``rawResponse.rawText`` holding a JSON string resolves
    to the parsed object.
    """
    current: Any = payload
    for segment in path:
        if isinstance(current, str):
            current = normalize(current)
        if not isinstance(current, dict):
            return None
        current = current.get(segment)
    if isinstance(current, str):
        current = normalize(current)
    return current if isinstance(current, dict) else None


def format_path(path: tuple[str, ...], key: str) -> str:
    """Human readable location, e.g. ``rawResponse.rawText["Work History"]``."""
    base = ".".join(path)
    if _IDENTIFIER_RE.match(key):
        return f"{base}.{key}" if base else key
    return f"{base}[{json.dumps(key)}]"
