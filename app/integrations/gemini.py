"""
Google Gemini ``generateContent`` client.
"""

import httpx
import structlog

from app.config import settings
from app.core.exceptions import ExternalServiceError
from app.integrations.http import request_external

logger = structlog.get_logger(__name__)

SERVICE = "gemini"

PLACEHOLDER_RESPONSE = (
    "AI service is not configured. [Placeholder Answer 1]\n"
    "AI service is not configured. [Placeholder Answer 2]"
)

GENERATION_CONFIG = {
    "temperature": 0.5,
    "topK": 1,
    "topP": 1,
    "maxOutputTokens": 8192,
}


async def generate_content(prompt: str) -> str:
    """
    Send ``prompt`` to the configured model and return the first candidate's text.

    Without an API key no call is made and placeholder text is returned.

    Raises:
        ExternalServiceError: the call failed or the response had no text
    """
    if not settings.gemini_api_key:
        logger.warning("gemini_not_configured")
        return PLACEHOLDER_RESPONSE

    url = f"{settings.gemini_base_url}/{settings.gemini_model}:generateContent"
    payload = {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": GENERATION_CONFIG,
    }

    try:
        response = await request_external(
            SERVICE, "POST", url, params={"key": settings.gemini_api_key}, json=payload
        )
        body = response.json()
    except (httpx.HTTPError, ValueError) as e:
        raise ExternalServiceError(SERVICE, "The AI service failed to generate a response.") from e

    try:
        return body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        logger.error("gemini_invalid_response", body=body)
        raise ExternalServiceError(SERVICE, "The AI service failed to generate a response.") from e
