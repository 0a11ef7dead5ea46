"""
Translation endpoint.
"""

from fastapi import APIRouter

from app.features.auth.dependencies import CurrentUser
from app.features.translation.schemas import TranslateRequest, TranslateResponse
from app.integrations.translate import translate_texts

router = APIRouter(prefix="/translate", tags=["Translation"])


@router.post("", response_model=TranslateResponse)
async def translate(data: TranslateRequest, current_user: CurrentUser) -> TranslateResponse:
    """Batch-translate UI strings; order is preserved."""
    translated = await translate_texts(data.texts, data.target_lang)
    return TranslateResponse(translated_texts=translated)
