"""Google Gemini API wrapper returning the model's raw text."""

import logging

from google import genai
from google.genai import types

from config import settings

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


async def generate_text(prompt: str) -> str | None:
    """Send a prompt to Gemini and return the response text untouched.

    Parsing is left to the extraction core, which copes with fences and
    surrounding prose. Returns None when the client is unavailable or the
    call fails.
    """
    client = get_client()
    if client is None:
        return None

    try:
        response = await client.aio.models.generate_content(
            model=settings.gemini_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=0.2,
                max_output_tokens=4096,
                response_mime_type="application/json",
            ),
        )
        return response.text
    except Exception as e:
        logger.error("Gemini API error: %s", e)
        return None
