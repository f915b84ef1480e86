from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_extraction_config
from config import settings
from models.requests import BatchExtractRequest, ExtractRequest, QuickAnalyzeRequest
from models.responses import AnalysisResponse, BatchExtractResponse, ExtractionResponse
from models.schemas.field_alias import ExtractionConfig
from services import resume_analyzer, resync

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


def _check_raw_size(raw_response) -> None:
    if isinstance(raw_response, str) and len(raw_response) > settings.max_raw_response_chars:
        raise HTTPException(
            status_code=413,
            detail=f"Raw response too long (max {settings.max_raw_response_chars} chars)",
        )


@router.get("/health")
async def health(config: ExtractionConfig = Depends(get_extraction_config)):
    return {
        "status": "ok",
        "gemini_configured": bool(settings.gemini_api_key),
        "aliases_loaded": len(config.aliases),
    }


@router.post("/extract", response_model=ExtractionResponse)
@limiter.limit("60/minute")
async def extract(
    request: Request,
    body: ExtractRequest,
    config: ExtractionConfig = Depends(get_extraction_config),
):
    _check_raw_size(body.raw_response)
    outcome = resync.sync_record(
        resync.StoredRecord(id="", raw_response=body.raw_response, fallback_score=body.fallback_score),
        config,
    )
    return ExtractionResponse(
        record=outcome.record,
        status=outcome.status,
        field_sources=outcome.field_sources,
    )


@router.post("/extract/batch", response_model=BatchExtractResponse)
@limiter.limit("10/minute")
async def extract_batch(
    request: Request,
    body: BatchExtractRequest,
    config: ExtractionConfig = Depends(get_extraction_config),
):
    for stored in body.records:
        _check_raw_size(stored.raw_response)

    # No sink: the caller persists the returned outcomes.
    summary = await resync.resync(
        body.records,
        batch_size=body.batch_size,
        config=config,
    )
    return BatchExtractResponse(
        total=summary.total,
        processed=summary.processed,
        skipped=summary.skipped,
        failed=summary.failed,
        outcomes=summary.outcomes,
    )


@router.post("/analyze/quick", response_model=AnalysisResponse)
@limiter.limit("10/minute")
async def analyze_quick(
    request: Request,
    body: QuickAnalyzeRequest,
    config: ExtractionConfig = Depends(get_extraction_config),
):
    return await resume_analyzer.analyze(
        body.resume_text,
        body.job_description,
        fallback_score=body.fallback_score,
        config=config,
    )
