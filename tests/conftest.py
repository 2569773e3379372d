"""Shared fixtures for unit tests."""

import pytest

from case_insight.content.models import ContentType, ExtractionResult
from case_insight.core.config import Settings
from case_insight.interfaces.extractor import BasePainPointExtractor, ExtractionError
from case_insight.interfaces.generator import BaseContentGenerator, GenerationError


SAMPLE_EXTRACTION = {
    "status": "success",
    "legal_concepts": ["Construction price priority", "Apparent agency"],
    "case_type": "Construction contract dispute",
    "key_elements": {
        "timeline": "Handed over March 2023",
        "dispute_amount": "1.2 million",
        "contract_status": "Signed by project manager",
        "payment_status": "40% unpaid",
    },
    "evidence_analysis": {
        "keywords": ["WeChat records", "site photos"],
        "strength": "Medium",
        "description": "Chat records show the owner ordered the extra work.",
    },
    "user_persona": {
        "tags": ["Subcontractor", "Cash-flow pressure"],
        "explicit_pain": ["Owner refuses to pay"],
        "implicit_needs": ["Fast recovery"],
    },
    "detected_issues": [
        {
            "tag_id": "PAY-01",
            "tag_name": "Final account refused",
            "original_text": "They still will not settle the final account.",
            "confidence": "High",
        },
        {
            "tag_id": "SITE-01",
            "tag_name": "Unsigned visas",
            "original_text": "Nobody signed the visa but we did the work.",
            "confidence": "Medium",
        },
    ],
    "problem_summary": "Subcontractor owed 1.2 million after handover.",
    "urgency_level": "High",
    "marketing_direction": "How to recover unpaid construction fees in Beijing",
    "recommended_follow_up": "Collect chat records and the handover certificate.",
}


class FakeExtractor(BasePainPointExtractor):
    """Returns a canned result, or raises when ``error`` is set."""

    def __init__(self, result: dict | None = None, error: Exception | None = None):
        self.result = SAMPLE_EXTRACTION if result is None else result
        self.error = error
        self.calls: list[str] = []

    async def extract(self, transcript: str) -> ExtractionResult:
        self.calls.append(transcript)
        if self.error is not None:
            raise self.error
        return ExtractionResult.model_validate(self.result)


class FakeGenerator(BaseContentGenerator):
    """Echoes its inputs as Markdown, or raises when ``error`` is set."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[dict] = []

    async def generate(
        self,
        content_type: ContentType,
        issue_tags: list[str],
        quotes: list[str],
        legal_concepts: list[str],
        marketing_direction: str | None = None,
    ) -> str:
        self.calls.append(
            {
                "content_type": content_type,
                "issue_tags": issue_tags,
                "quotes": quotes,
                "legal_concepts": legal_concepts,
                "marketing_direction": marketing_direction,
            }
        )
        if self.error is not None:
            raise self.error
        return f"# {content_type.value}\n**Tags:** {', '.join(issue_tags)}\n- {'; '.join(quotes)}"


@pytest.fixture
def settings(tmp_path):
    """Settings isolated from the environment and .env file."""
    return Settings(
        _env_file=None,
        llm_api_key="test-key",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def sample_extraction():
    return ExtractionResult.model_validate(SAMPLE_EXTRACTION)


@pytest.fixture
def fake_extractor():
    return FakeExtractor()


@pytest.fixture
def failing_extractor():
    return FakeExtractor(error=ExtractionError("Legal analysis failed: quota exceeded"))


@pytest.fixture
def fake_generator():
    return FakeGenerator()


@pytest.fixture
def failing_generator():
    return FakeGenerator(error=GenerationError("Content generation failed: timeout"))


@pytest.fixture
def sample_payload():
    """The raw JSON payload behind ``sample_extraction``."""
    return SAMPLE_EXTRACTION
