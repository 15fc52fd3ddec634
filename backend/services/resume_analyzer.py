"""Analysis service: prompt -> Gemini -> parsed result.

Operations:
1. analyze: full match analysis, returns a validated AnalysisResult
2. rewrite_section: targeted rewrite of one résumé section, returns plain text

Each call makes exactly one Gemini request. Nothing is cached or retried.
"""

import logging

from models.responses import AnalysisResult
from services import gemini_client, prompt_builder, response_parser
from services.errors import ValidationError

logger = logging.getLogger(__name__)


def _present(value: str | None) -> bool:
    return bool(value and value.strip())


async def analyze(resume_text: str, job_description: str) -> AnalysisResult:
    """Run the full analysis for one résumé/job-description pair."""
    if not (_present(resume_text) and _present(job_description)):
        raise ValidationError("resumeText and jobDescription are required")

    prompt = prompt_builder.build_analysis_prompt(resume_text, job_description)
    raw = await gemini_client.generate_text(prompt)
    result = response_parser.parse_analysis(raw)

    logger.info(
        "Analysis complete: score=%d gaps=%d ats_flags=%d",
        result.match_score,
        len(result.skill_gaps),
        len(result.ats_flags),
    )
    return result


async def rewrite_section(
    section_text: str,
    job_description: str,
    section_type: str | None = None,
) -> str:
    """Rewrite a single résumé section for the given job description."""
    if not (_present(section_text) and _present(job_description)):
        raise ValidationError("sectionText and jobDescription are required")

    prompt = prompt_builder.build_rewrite_prompt(section_text, job_description, section_type)
    rewritten = await gemini_client.generate_text(prompt)
    return rewritten.strip()
