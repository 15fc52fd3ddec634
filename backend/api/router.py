import logging
from contextlib import contextmanager
from datetime import datetime, timezone

from fastapi import APIRouter, File, UploadFile
from starlette.concurrency import run_in_threadpool

from config import settings
from models.requests import AnalyzeRequest, RewriteSectionRequest
from models.responses import (
    AnalysisResult,
    ErrorResponse,
    HealthResponse,
    ParsedResume,
    RewriteResult,
)
from services import pdf_parser, resume_analyzer
from services.errors import ParseError, TransportError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid input"},
    500: {"model": ErrorResponse, "description": "PDF, Gemini or response parsing failure"},
}


@contextmanager
def _failure_prefix(prefix: str):
    """Tag upstream failures with the operation that hit them."""
    try:
        yield
    except (TransportError, ParseError) as e:
        logger.error("%s: %s", prefix, e.message)
        e.prefix = prefix
        raise


@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        timestamp=datetime.now(timezone.utc).isoformat(),
        gemini_configured=bool(settings.gemini_api_key),
    )


@router.post("/parse-resume", response_model=ParsedResume, responses=ERROR_RESPONSES)
async def parse_resume(resume: UploadFile | None = File(None)):
    if resume is None:
        raise ValidationError("No PDF file uploaded")

    # Validate file type before reading anything
    if resume.content_type != pdf_parser.PDF_CONTENT_TYPE:
        raise ValidationError("Only PDF files are allowed")

    content = await resume.read()
    if len(content) > settings.max_upload_bytes:
        raise ValidationError(f"File too large. Max size: {settings.max_upload_size_mb}MB")

    parsed = await run_in_threadpool(pdf_parser.extract_document, content)
    logger.info("Parsed %s: %d pages, %d chars", resume.filename, parsed.pages, len(parsed.text))
    return parsed


@router.post("/analyze", response_model=AnalysisResult, responses=ERROR_RESPONSES)
async def analyze(body: AnalyzeRequest):
    with _failure_prefix("Analysis failed"):
        return await resume_analyzer.analyze(body.resume_text, body.job_description)


@router.post("/rewrite-section", response_model=RewriteResult, responses=ERROR_RESPONSES)
async def rewrite_section(body: RewriteSectionRequest):
    with _failure_prefix("Rewrite failed"):
        rewritten = await resume_analyzer.rewrite_section(
            body.section_text, body.job_description, body.section_type
        )
    return RewriteResult(rewritten=rewritten)
