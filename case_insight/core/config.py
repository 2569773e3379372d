"""Application configuration using Pydantic v2 Settings.

Centralized configuration that loads from environment variables
and provides type-safe access throughout the application.
"""

import logging
import sys
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

LOG_HANDLER_PREFIX = "case_insight."


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults and can be overridden via
    environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # LLM
    llm_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("llm_api_key", "gemini_api_key", "api_key"),
        description="API key for the generative-AI service (LLM_API_KEY, GEMINI_API_KEY or API_KEY).",
    )
    llm_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/openai/",
        description="OpenAI-compatible endpoint of the generative-AI service.",
    )
    llm_chat_model: str = Field(
        default="gemini-3-flash-preview",
        description="Model used for extraction and content generation.",
    )
    llm_timeout: float = Field(
        default=60.0,
        description="Timeout in seconds for a single LLM call.",
    )

    # Strategy Selection
    parser_types: list[str] = Field(
        default=["text", "docx"],
        description="Transcript parsers to enable: 'text', 'docx'.",
    )
    extractor_type: str = Field(
        default="llm",
        description="Pain-point extractor strategy: 'llm'.",
    )
    generator_type: str = Field(
        default="llm",
        description="Content generator strategy: 'llm'.",
    )

    # Uploads
    min_transcript_chars: int = Field(
        default=5,
        description="Minimum number of non-blank characters a transcript must contain.",
    )
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Largest accepted upload in bytes.",
    )

    # Content
    default_marketing_direction: str = Field(
        default="Beijing construction-dispute legal solutions",
        description="Marketing direction used when the extraction did not suggest one.",
    )
    content_language: str = Field(
        default="Simplified Chinese",
        description="Language the generated marketing copy is written in.",
    )
    knowledge_base_path: Path | None = Field(
        default=None,
        description="Optional Markdown file overriding the built-in firm knowledge base.",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR.",
    )
    log_dir: Path = Field(
        default=Path("./logs"),
        description="Directory for info.log and error.log.",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.upper()

    @field_validator("knowledge_base_path")
    @classmethod
    def check_knowledge_base_path(cls, v: Path | None) -> Path | None:
        """Ensure an explicitly configured knowledge base file exists."""
        if v is not None and not v.is_file():
            raise ValueError(f"Knowledge base file not found: {v}")
        return v

    def load_knowledge_base(self) -> str:
        """Return the firm knowledge base Markdown.

        Reads ``knowledge_base_path`` when configured, otherwise the
        built-in profile.
        """
        from case_insight.content.prompts import FIRM_KNOWLEDGE_BASE

        if self.knowledge_base_path is None:
            return FIRM_KNOWLEDGE_BASE
        return self.knowledge_base_path.read_text(encoding="utf-8")

    def configure_logging(self) -> None:
        """Configure structlog and the stdlib handlers it renders through.

        Records from ``logging.getLogger`` and ``structlog.get_logger`` share
        one processor chain. ``info.log`` (INFO and above) and ``error.log``
        (ERROR and above) under ``log_dir`` receive JSON lines; the console
        receives the same events in key=value form. Calling it again replaces
        the handlers installed by the previous call and leaves others alone.
        """
        import structlog

        level = getattr(logging, self.log_level, logging.INFO)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        shared_processors = [
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                *shared_processors,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        json_formatter = structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(ensure_ascii=False),
            ],
        )
        console_formatter = structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.dev.ConsoleRenderer(colors=False),
            ],
        )

        info_handler = logging.FileHandler(self.log_dir / "info.log", encoding="utf-8")
        info_handler.setLevel(logging.INFO)
        info_handler.setFormatter(json_formatter)

        error_handler = logging.FileHandler(self.log_dir / "error.log", encoding="utf-8")
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(json_formatter)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(console_formatter)

        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            if (handler.get_name() or "").startswith(LOG_HANDLER_PREFIX):
                root_logger.removeHandler(handler)
                handler.close()
        for name, handler in (
            ("info", info_handler),
            ("error", error_handler),
            ("console", console_handler),
        ):
            handler.set_name(f"{LOG_HANDLER_PREFIX}{name}")
            root_logger.addHandler(handler)
        root_logger.setLevel(level)

        logger.info(f"Logging configured at {self.log_level}, files in {self.log_dir}")


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global Settings instance.

    Returns:
        The singleton Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.configure_logging()
    return _settings
