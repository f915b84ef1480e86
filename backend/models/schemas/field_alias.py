"""Declarative lookup tables that drive field location and coercion."""

from typing import Literal

from pydantic import BaseModel, Field

FieldName = Literal["skills", "workHistory", "redFlags", "summary", "score"]
Shape = Literal["stringArray", "recordArray", "scalarString", "scalarNumber"]

FIELD_NAMES: tuple[str, ...] = ("skills", "workHistory", "redFlags", "summary", "score")


class Candidate(BaseModel):
    """One place a field may live: a key spelling under a nesting path."""
    key: str
    path: tuple[str, ...] = ()


class FieldAlias(BaseModel):
    """A semantic field and the candidates to probe for it, in priority order."""
    name: FieldName
    shape: Shape
    candidates: list[Candidate] = []

    @classmethod
    def build(
        cls,
        name: str,
        shape: str,
        keys: list[str],
        roots: list[tuple[str, ...]],
    ) -> "FieldAlias":
        """Expand keys x roots into a root-major candidate list."""
        candidates = [Candidate(key=key, path=root) for root in roots for key in keys]
        return cls(name=name, shape=shape, candidates=candidates)


class ScoreScale(BaseModel):
    """Thresholds used to bring 0-1 and 0-10 scores onto a 0-100 scale."""
    enabled: bool = True
    unit_max: float = 1.0
    tenth_max: float = 10.0
    ceiling: float = 100.0


class ExtractionConfig(BaseModel):
    aliases: dict[str, FieldAlias] = Field(default_factory=dict)
    score_scale: ScoreScale = ScoreScale()

    def alias(self, name: str) -> FieldAlias:
        return self.aliases[name]
