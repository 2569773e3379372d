"""Knowledge base API routes.

Serves the firm profile used to ground generated copy and the preset
pain-point library shown in the generator.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from case_insight.api.schemas import KnowledgeResponse, PresetCategory, PresetPainPoint
from case_insight.content.markdown import render_markdown
from case_insight.content.prompts import PRESET_PAIN_POINTS
from case_insight.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/knowledge", tags=["knowledge"])


@router.get("", response_model=KnowledgeResponse)
async def get_knowledge_base(
    settings: Settings = Depends(get_settings),
) -> KnowledgeResponse:
    """Return the firm knowledge base as Markdown and rendered HTML."""
    try:
        markdown = settings.load_knowledge_base()
        return KnowledgeResponse(markdown=markdown, html=render_markdown(markdown))
    except OSError as e:
        logger.error(f"Failed to read knowledge base: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to read knowledge base: {str(e)}",
        ) from e


@router.get("/presets", response_model=list[PresetCategory])
async def get_presets() -> list[PresetCategory]:
    """Return the preset pain-point library, grouped by category."""
    return [
        PresetCategory(
            category=category,
            items=[PresetPainPoint(**item) for item in items],
        )
        for category, items in PRESET_PAIN_POINTS.items()
    ]
