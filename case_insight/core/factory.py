"""Component Factory for strategy instantiation.

The Factory Pattern allows the application to instantiate
different strategy implementations at runtime based on
configuration or environment variables.
"""

import logging

from case_insight.core.config import Settings, get_settings
from case_insight.interfaces.extractor import BasePainPointExtractor
from case_insight.interfaces.generator import BaseContentGenerator
from case_insight.interfaces.parser import (
    AUDIO_EXTENSIONS,
    AudioNotSupportedError,
    BaseParser,
    UnsupportedFileError,
)
from case_insight.strategies.extractors import LLMPainPointExtractor
from case_insight.strategies.generators import LLMContentGenerator
from case_insight.strategies.openai_chat import OpenAIChatClient
from case_insight.strategies.parsers import DocxParser, SimpleTextParser

logger = logging.getLogger(__name__)


class ComponentFactory:
    """Factory for creating component instances based on configuration.

    Example:
        ```python
        settings = get_settings()
        factory = ComponentFactory(settings)

        parser = factory.get_parser_for("hearing.docx")
        extractor = factory.get_extractor()
        generator = factory.get_generator()
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the factory with optional settings.

        Args:
            settings: Application settings. If None, uses global settings.
        """
        self._settings = settings or get_settings()
        self._parsers_cache: list[BaseParser] | None = None
        self._chat_client_cache: OpenAIChatClient | None = None
        self._extractor_cache: BasePainPointExtractor | None = None
        self._generator_cache: BaseContentGenerator | None = None

    def get_parsers(self) -> list[BaseParser]:
        """Get the enabled parser instances.

        Returns:
            Parsers in the order configured by ``parser_types``.

        Raises:
            ValueError: If a parser type is unknown.
        """
        if self._parsers_cache is None:
            parsers: list[BaseParser] = []
            for parser_type in self._settings.parser_types:
                logger.info(f"Instantiating parser: {parser_type}")

                match parser_type:
                    case "text":
                        parsers.append(SimpleTextParser())
                    case "docx":
                        parsers.append(DocxParser())
                    case _:
                        raise ValueError(
                            f"Unknown parser type: {parser_type}. "
                            f"Valid options: 'text', 'docx'"
                        )
            self._parsers_cache = parsers

        return self._parsers_cache

    def get_parser_for(self, filename: str) -> BaseParser:
        """Pick the parser that handles ``filename``.

        Raises:
            AudioNotSupportedError: For audio recordings.
            UnsupportedFileError: If no enabled parser supports the extension.
        """
        lowered = filename.lower()
        if any(lowered.endswith(ext) for ext in AUDIO_EXTENSIONS):
            raise AudioNotSupportedError(
                "Only Word (.docx) or text (.txt, .md) transcripts can be analyzed. "
                "Direct audio analysis is not available yet."
            )

        for parser in self.get_parsers():
            if parser.supports_file(filename):
                return parser

        supported = sorted({ext for p in self.get_parsers() for ext in p.supported_extensions})
        raise UnsupportedFileError(
            f"Unsupported file type: {filename}. Supported: {', '.join(supported)}"
        )

    def get_chat_client(self) -> OpenAIChatClient:
        """Get the shared chat client.

        Raises:
            ValueError: If no LLM API key is configured.
        """
        if self._chat_client_cache is None:
            logger.info(f"Instantiating chat client for model {self._settings.llm_chat_model}")
            self._chat_client_cache = OpenAIChatClient(
                api_key=self._settings.llm_api_key,
                model=self._settings.llm_chat_model,
                base_url=self._settings.llm_base_url,
                timeout=self._settings.llm_timeout,
            )
        return self._chat_client_cache

    def get_extractor(self, extractor_type: str | None = None) -> BasePainPointExtractor:
        """Get a pain-point extractor instance.

        Args:
            extractor_type: The extractor type to instantiate. If None, uses settings.

        Raises:
            ValueError: If the type is unknown or the API key is missing.
        """
        if self._extractor_cache is None or extractor_type is not None:
            extractor_type = extractor_type or self._settings.extractor_type

            logger.info(f"Instantiating extractor: {extractor_type}")

            match extractor_type:
                case "llm":
                    self._extractor_cache = LLMPainPointExtractor(client=self.get_chat_client())
                case _:
                    raise ValueError(
                        f"Unknown extractor type: {extractor_type}. "
                        f"Valid options: 'llm'"
                    )

        return self._extractor_cache

    def get_generator(self, generator_type: str | None = None) -> BaseContentGenerator:
        """Get a content generator instance.

        Args:
            generator_type: The generator type to instantiate. If None, uses settings.

        Raises:
            ValueError: If the type is unknown or the API key is missing.
        """
        if self._generator_cache is None or generator_type is not None:
            generator_type = generator_type or self._settings.generator_type

            logger.info(f"Instantiating generator: {generator_type}")

            match generator_type:
                case "llm":
                    self._generator_cache = LLMContentGenerator(
                        client=self.get_chat_client(),
                        knowledge_base=self._settings.load_knowledge_base(),
                        default_marketing_direction=self._settings.default_marketing_direction,
                        language=self._settings.content_language,
                    )
                case _:
                    raise ValueError(
                        f"Unknown generator type: {generator_type}. "
                        f"Valid options: 'llm'"
                    )

        return self._generator_cache

    def clear_cache(self) -> None:
        """Clear all cached component instances.

        This forces new instances to be created on next access.
        Useful for testing or when settings change.
        """
        self._parsers_cache = None
        self._chat_client_cache = None
        self._extractor_cache = None
        self._generator_cache = None
        logger.debug("Component factory cache cleared")


# Global factory instance
_factory: ComponentFactory | None = None


def get_factory() -> ComponentFactory:
    """Get or create the global ComponentFactory instance.

    Returns:
        The singleton ComponentFactory instance.
    """
    global _factory
    if _factory is None:
        _factory = ComponentFactory()
    return _factory
