"""Resume-vs-job analysis: one provider call, then the extraction core.

The provider's text is never trusted to be clean JSON; whatever comes back
is handed to the normalizer and assembler like any stored raw response.
"""

import logging

from models.responses import AnalysisResponse
from models.schemas.extracted_record import ExtractedRecord
from models.schemas.field_alias import ExtractionConfig
from services import gemini_client, prompt_builder
from services.extraction.assembler import assemble_traced
from services.extraction.normalizer import normalize

logger = logging.getLogger(__name__)


async def analyze(
    resume_text: str,
    job_description: str,
    fallback_score: float | None = None,
    config: ExtractionConfig | None = None,
) -> AnalysisResponse:
    prompt = prompt_builder.build_match_prompt(resume_text, job_description)
    raw_text = await gemini_client.generate_text(prompt)

    if raw_text is None:
        logger.warning("AI analysis unavailable, returning fallback record")
        return AnalysisResponse(
            record=ExtractedRecord(score=fallback_score),
            degraded=True,
        )

    payload = normalize(raw_text)
    if payload is None:
        logger.warning("AI response contained no JSON object (%d chars)", len(raw_text))
    record, sources = assemble_traced(payload, fallback_score, config)

    return AnalysisResponse(
        record=record,
        field_sources=sources,
        degraded=payload is None,
        raw_text=raw_text,
    )
