"""Default field alias tables and config loading.

Key spellings are the variants observed across Claude, OpenAI, Mistral and
Gemini responses. Roots are the wrappers earlier pipeline versions stored the
model output under. Both lists are in priority order.
"""

import logging
from pathlib import Path

from models.schemas.field_alias import (
    ExtractionConfig,
    FieldAlias,
    ScoreScale,
)

logger = logging.getLogger(__name__)

DEFAULT_ROOTS: list[tuple[str, ...]] = [
    (),
    ("parsedJson",),
    ("extractedSections",),
    ("extractedSections", "parsedJson"),
    ("analysis",),
    ("rawText",),
    ("rawResponse",),
    ("rawResponse", "parsedJson"),
    ("rawResponse", "extractedSections"),
    ("rawResponse", "extractedSections", "parsedJson"),
    ("rawResponse", "rawText"),
    ("rawResponse", "rawResponse"),
    ("rawResponse", "rawResponse", "parsedJson"),
    ("rawResponse", "rawResponse", "rawText"),
]

SKILLS_KEYS = [
    "Skills",
    "skills",
    "skill_list",
    "skillList",
    "key_skills",
    "keySkills",
    "technical_skills",
    "candidate_skills",
]

WORK_HISTORY_KEYS = [
    "Work History",
    "Work_History",
    "WorkHistory",
    "workHistory",
    "work_history",
    "employment_history",
    "work_experience",
    "workExperience",
    "recentRoles",
]

RED_FLAGS_KEYS = [
    "Red Flags",
    "Red_Flags",
    "RedFlags",
    "redFlags",
    "red_flags",
    "potentialRedFlags",
    "potential_red_flags",
]

SUMMARY_KEYS = [
    "Summary",
    "summary",
    "candidate_summary",
    "executive_summary",
    "overview",
]

SCORE_KEYS = [
    "matching_score",
    "matchingScore",
    "MatchingScore",
    "Matching Score",
    "match_score",
    "overallScore",
    "overall_score",
    "score",
    "Score",
]

_FIELD_TABLE: dict[str, tuple[str, list[str]]] = {
    "skills": ("stringArray", SKILLS_KEYS),
    "workHistory": ("recordArray", WORK_HISTORY_KEYS),
    "redFlags": ("stringArray", RED_FLAGS_KEYS),
    "summary": ("scalarString", SUMMARY_KEYS),
    "score": ("scalarNumber", SCORE_KEYS),
}


def default_aliases(roots: list[tuple[str, ...]] | None = None) -> dict[str, FieldAlias]:
    roots = DEFAULT_ROOTS if roots is None else roots
    return {
        name: FieldAlias.build(name, shape, keys, roots)
        for name, (shape, keys) in _FIELD_TABLE.items()
    }


def default_config() -> ExtractionConfig:
    return ExtractionConfig(aliases=default_aliases(), score_scale=ScoreScale())


def load_extraction_config(path: str | Path | None = None) -> ExtractionConfig:
    """Load an ExtractionConfig override from JSON, filling gaps from the defaults.

    Fields missing from the override keep their default alias. A missing or
    invalid file raises: a broken override must not silently fall back.
    """
    if not path:
        return default_config()

    text = Path(path).read_text(encoding="utf-8")
    override = ExtractionConfig.model_validate_json(text)

    for key, alias in override.aliases.items():
        if key != alias.name:
            raise ValueError(f"Alias key {key!r} does not match field name {alias.name!r}")

    aliases = default_aliases()
    aliases.update(override.aliases)

    logger.info("Loaded field alias override from %s (%d fields)", path, len(override.aliases))
    return ExtractionConfig(aliases=aliases, score_scale=override.score_scale)
