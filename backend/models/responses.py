import logging
from typing import Literal

from pydantic import Field, StrictInt, StrictStr, field_validator

from models.requests import CamelModel

logger = logging.getLogger(__name__)

Level = Literal["high", "medium", "low"]


def _normalize_level(value):
    if isinstance(value, str):
        return value.strip().lower()
    return value


class SkillGap(CamelModel):
    skill: StrictStr
    importance: Level
    suggestion: StrictStr

    @field_validator("importance", mode="before")
    @classmethod
    def lower_importance(cls, value):
        return _normalize_level(value)


class AtsFlag(CamelModel):
    issue: StrictStr
    severity: Level
    fix: StrictStr

    @field_validator("severity", mode="before")
    @classmethod
    def lower_severity(cls, value):
        return _normalize_level(value)


class AnalysisResult(CamelModel):
    """Full résumé analysis as returned by Gemini.

    Every field is required; a missing or mistyped field fails validation.
    """

    match_score: StrictInt
    match_score_reason: StrictStr
    optimized_resume: StrictStr
    key_changes: list[StrictStr]
    skill_gaps: list[SkillGap]
    ats_flags: list[AtsFlag]
    cover_letter: StrictStr
    top_keywords: list[StrictStr]
    missing_keywords: list[StrictStr]

    @field_validator("match_score")
    @classmethod
    def clamp_score(cls, value: int) -> int:
        if not 0 <= value <= 100:
            logger.warning("matchScore %d outside 0-100, clamping", value)
            return min(100, max(0, value))
        return value


class ParsedResume(CamelModel):
    text: str
    pages: int


class RewriteResult(CamelModel):
    rewritten: str


class HealthResponse(CamelModel):
    status: str = "ok"
    timestamp: str
    gemini_configured: bool = False


class ErrorResponse(CamelModel):
    error: str = Field(..., description="Human-readable failure message")
