"""Google Gemini API wrapper.

One attempt per prompt: no retry, no backoff, transport-default timeouts.
"""

import logging

from google import genai
from google.genai import types

from config import settings
from services.errors import TransportError

logger = logging.getLogger(__name__)

_client: genai.Client | None = None


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - Gemini features disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


async def generate_text(prompt: str) -> str:
    """Send a prompt to Gemini and return the raw completion text."""
    client = get_client()
    if client is None:
        raise TransportError("GEMINI_API_KEY is not configured")

    try:
        response = await client.aio.models.generate_content(
            model=settings.gemini_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=settings.gemini_temperature,
            ),
        )
    except Exception as e:
        logger.error("Gemini API error: %s", e)
        raise TransportError(str(e) or type(e).__name__) from e

    text = response.text
    if not text:
        raise TransportError("Gemini returned an empty completion")
    return text
