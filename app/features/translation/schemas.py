"""
Translation schemas.
"""

from pydantic import Field

from app.schemas.common import BaseSchema


class TranslateRequest(BaseSchema):
    texts: list[str] = Field(..., min_length=1)
    target_lang: str = Field(..., min_length=2, max_length=10)


class TranslateResponse(BaseSchema):
    translated_texts: list[str]
