"""Standalone translation endpoint, used by the inbox to preview replies."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.adapters.base import BaseTranslator
from app.core.errors import TranslationError
from app.infra.logging_config import get_logger
from app.routers.utils.dependencies import get_translator
from app.schemas.relay import TranslateRequest, TranslateResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/translate", tags=["translate"])


@router.post("", response_model=TranslateResponse)
async def translate_text(
    body: TranslateRequest,
    translator: BaseTranslator = Depends(get_translator),
) -> TranslateResponse:
    """Translate text between the relay languages."""
    if body.from_ == body.to:
        return TranslateResponse(translated=body.text)
    try:
        translated = await translator.translate(body.text, body.from_, body.to)
    except TranslationError as e:
        logger.error("Translation error: %s", e.message)
        raise HTTPException(status_code=502, detail="Translation failed") from e
    return TranslateResponse(translated=translated)
