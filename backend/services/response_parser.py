"""Turn a raw Gemini completion into a validated AnalysisResult."""

import json
import logging

from pydantic import ValidationError as SchemaError

from models.responses import AnalysisResult
from services.errors import ParseError

logger = logging.getLogger(__name__)

FENCE_MARKERS = ("```json", "```")


def strip_fences(text: str) -> str:
    """Remove markdown code-fence markers the model may wrap around JSON."""
    for marker in FENCE_MARKERS:
        text = text.replace(marker, "")
    return text.strip()


def parse_json(text: str) -> dict:
    cleaned = strip_fences(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse Gemini response as JSON: %s", e)
        raise ParseError(f"Model returned invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def _describe(error: SchemaError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc} ({err['msg']})")
    return ", ".join(parts)


def parse_analysis(text: str) -> AnalysisResult:
    """Strip fences, decode JSON and check it against the result schema.

    No repair is attempted: any missing or mistyped field is a ParseError.
    """
    data = parse_json(text)
    try:
        return AnalysisResult.model_validate(data)
    except SchemaError as e:
        logger.error("Gemini response does not match schema: %s", e)
        raise ParseError(f"Model response failed validation: {_describe(e)}") from e
