"""Thin wrapper around the OpenAI-compatible chat completions API.

Gemini, OpenRouter and OpenAI all accept the same request shape, so the
service is selected purely through ``base_url`` and ``model``.
"""

import logging
import re

from openai import AsyncOpenAI

logger = logging.getLogger(__name__)

_FENCE_START = re.compile(r"^```\w*\n?")
_FENCE_END = re.compile(r"\n?```$")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence, if present."""
    text = text.strip()
    if text.startswith("```"):
        text = _FENCE_START.sub("", text)
        text = _FENCE_END.sub("", text)
    return text.strip()


class OpenAIChatClient:
    """Single-prompt chat completion client."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        timeout: float = 60.0,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: API key for the service.
            model: Model name to use.
            base_url: Optional OpenAI-compatible endpoint.
            timeout: Request timeout in seconds.
        """
        if not api_key:
            raise ValueError("LLM API key is missing. Set LLM_API_KEY, GEMINI_API_KEY or API_KEY.")

        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
        )
        self._model = model

    async def complete(
        self,
        prompt: str,
        json_mode: bool = False,
        temperature: float | None = None,
    ) -> str:
        """Send one user prompt and return the text of the reply.

        Args:
            prompt: The full prompt.
            json_mode: Ask the service for a JSON object response.
            temperature: Optional sampling temperature.

        Returns:
            The reply text, or an empty string if the service sent none.

        Raises:
            OpenAIError: If the API call fails.
        """
        kwargs: dict = {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        if temperature is not None:
            kwargs["temperature"] = temperature

        logger.info(f"Calling {self._model} (json_mode={json_mode}, prompt={len(prompt)} chars)")

        response = await self._client.chat.completions.create(**kwargs)
        content = response.choices[0].message.content or ""

        logger.info(f"LLM response received: {len(content)} chars")
        return content

    @property
    def model(self) -> str:
        """Return the model name."""
        return self._model
