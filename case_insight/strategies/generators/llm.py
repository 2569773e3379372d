"""LLM-based marketing copy generator."""

import logging

from openai import OpenAIError

from case_insight.content.models import ContentType
from case_insight.content.prompts import FIRM_KNOWLEDGE_BASE, build_generation_prompt
from case_insight.interfaces.generator import BaseContentGenerator, GenerationError
from case_insight.strategies.openai_chat import OpenAIChatClient

logger = logging.getLogger(__name__)


class LLMContentGenerator(BaseContentGenerator):
    """Writes articles, video scripts and Q&A answers grounded in the firm knowledge base."""

    def __init__(
        self,
        client: OpenAIChatClient,
        knowledge_base: str = FIRM_KNOWLEDGE_BASE,
        default_marketing_direction: str = "Beijing construction-dispute legal solutions",
        language: str = "Simplified Chinese",
    ) -> None:
        self._client = client
        self._knowledge_base = knowledge_base
        self._default_marketing_direction = default_marketing_direction
        self._language = language

    async def generate(
        self,
        content_type: ContentType,
        issue_tags: list[str],
        quotes: list[str],
        legal_concepts: list[str],
        marketing_direction: str | None = None,
    ) -> str:
        prompt = build_generation_prompt(
            content_type,
            issue_tags,
            quotes,
            legal_concepts,
            marketing_direction,
            knowledge_base=self._knowledge_base,
            default_marketing_direction=self._default_marketing_direction,
            language=self._language,
        )

        logger.info(
            f"Generating {content_type.value}: {len(issue_tags)} tags, "
            f"{len(quotes)} quotes, {len(legal_concepts)} concepts"
        )

        try:
            content = await self._client.complete(prompt)
        except OpenAIError as e:
            logger.error(f"Generation API call failed: {e}")
            raise GenerationError(f"Content generation failed: {e}") from e

        if not content.strip():
            logger.warning(f"Empty {content_type.value} generation response")
            raise GenerationError("Content generation failed: the service returned an empty response")

        return content
