"""
Google Cloud Translation v3 client.
"""

import httpx

from app.config import settings
from app.core.exceptions import ExternalServiceError, ValidationError
from app.integrations.http import request_external

SERVICE = "google_translate"


async def translate_texts(texts: list[str], target_lang: str) -> list[str]:
    """
    Translate ``texts`` to ``target_lang``, preserving order.

    Raises:
        ValidationError: translation is not configured for a project
        ExternalServiceError: the API call failed
    """
    if not settings.google_project_id:
        raise ValidationError("Translation is not configured: missing Google project id")

    url = (
        f"{settings.translate_base_url}/projects/{settings.google_project_id}"
        "/locations/global:translateText"
    )
    headers = {}
    if settings.google_access_token:
        headers["Authorization"] = f"Bearer {settings.google_access_token}"
        headers["x-goog-user-project"] = settings.google_project_id

    try:
        response = await request_external(
            SERVICE,
            "POST",
            url,
            headers=headers,
            json={
                "contents": texts,
                "targetLanguageCode": target_lang,
                "mimeType": "text/plain",
            },
        )
        body = response.json()
        return [t["translatedText"] for t in body["translations"]]
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
        raise ExternalServiceError(SERVICE, "Translation failed") from e
