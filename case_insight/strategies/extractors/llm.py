"""LLM-based pain-point extractor.

Sends the transcript to the generative-AI service in JSON mode and maps
the reply onto ExtractionResult.
"""

import json
import logging
import re

from openai import OpenAIError
from pydantic import ValidationError

from case_insight.content.models import ExtractionResult
from case_insight.content.prompts import build_extraction_prompt
from case_insight.interfaces.extractor import BasePainPointExtractor, ExtractionError
from case_insight.strategies.openai_chat import OpenAIChatClient, strip_code_fences

logger = logging.getLogger(__name__)


class LLMPainPointExtractor(BasePainPointExtractor):
    """Extracts legal pain points with a single JSON-mode completion."""

    def __init__(
        self,
        client: OpenAIChatClient,
        temperature: float = 0.1,
    ) -> None:
        """Initialize the extractor.

        Args:
            client: Chat client bound to the configured model.
            temperature: Low temperature keeps the JSON shape stable.
        """
        self._client = client
        self._temperature = temperature

    async def extract(self, transcript: str) -> ExtractionResult:
        """Extract the legal situation from a transcript.

        Args:
            transcript: The full transcript text.

        Returns:
            The parsed ExtractionResult.

        Raises:
            ExtractionError: On API failure, empty reply or unparseable JSON.
        """
        prompt = build_extraction_prompt(transcript)
        logger.info(f"Starting extraction for transcript of {len(transcript)} chars")

        try:
            content = await self._client.complete(
                prompt,
                json_mode=True,
                temperature=self._temperature,
            )
        except OpenAIError as e:
            logger.error(f"Extraction API call failed: {e}")
            raise ExtractionError(f"Legal analysis failed: {e}") from e

        data = self._parse_json(content)

        try:
            result = ExtractionResult.model_validate(data)
        except ValidationError as e:
            logger.error(f"Extraction payload has an unexpected shape: {e}")
            raise ExtractionError(f"Legal analysis failed: unexpected response shape ({e.error_count()} errors)") from e

        logger.info(
            f"Extraction complete: case_type={result.case_type!r}, "
            f"issues={len(result.detected_issues)}, concepts={len(result.legal_concepts)}"
        )
        return result

    def _parse_json(self, content: str) -> dict:
        """Parse the reply into a JSON object, tolerating fences and preambles."""
        text = strip_code_fences(content or "")
        if not text:
            raise ExtractionError("Legal analysis failed: the service returned an empty response")

        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            # Try to find a JSON object in the output
            match = re.search(r"\{.*\}", text, re.DOTALL)
            if not match:
                logger.error(f"No JSON object in extraction reply: {text[:200]!r}")
                raise ExtractionError("Legal analysis failed: the response was not JSON")
            try:
                data = json.loads(match.group())
            except json.JSONDecodeError as e:
                logger.error(f"Failed to parse extraction JSON: {e}")
                raise ExtractionError(f"Legal analysis failed: invalid JSON ({e.msg})") from e

        if not isinstance(data, dict):
            raise ExtractionError("Legal analysis failed: expected a JSON object")
        return data
