"""Shared dependencies for API routes."""

from functools import lru_cache

from config import settings
from models.schemas.field_alias import ExtractionConfig
from services.extraction.aliases import load_extraction_config


@lru_cache(maxsize=1)
def get_extraction_config() -> ExtractionConfig:
    return load_extraction_config(settings.field_aliases_path or None)
