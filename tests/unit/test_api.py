"""Unit tests for the HTTP API."""

import asyncio
import io

import httpx
import pytest
from docx import Document as DocxDocument
from fastapi import FastAPI
from fastapi.testclient import TestClient

from case_insight.api.deps import (
    get_analysis_store,
    get_extractor,
    get_generator,
    get_scenario_store,
)
from case_insight.content.models import AnalysisRecord, AnalysisStatus, ContentType
from case_insight.content.prompts import INITIAL_LEGAL_SCENARIOS, PRESET_PAIN_POINTS
from case_insight.core.config import get_settings
from case_insight.core.factory import ComponentFactory, get_factory
from case_insight.interfaces.generator import BaseContentGenerator
from case_insight.main import create_app
from case_insight.store import AnalysisStore, ScenarioStore

TRANSCRIPT = "Lawyer: What happened?\nClient: They still will not settle the final account."


@pytest.fixture
def analyses():
    return AnalysisStore()


@pytest.fixture
def scenarios():
    return ScenarioStore()


def _build_app(settings, analyses, scenarios, extractor, generator) -> FastAPI:
    app = create_app(settings)
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_factory] = lambda: ComponentFactory(settings)
    app.dependency_overrides[get_analysis_store] = lambda: analyses
    app.dependency_overrides[get_scenario_store] = lambda: scenarios
    app.dependency_overrides[get_extractor] = lambda: extractor
    app.dependency_overrides[get_generator] = lambda: generator
    return app


def _build_client(settings, analyses, scenarios, extractor, generator) -> TestClient:
    return TestClient(_build_app(settings, analyses, scenarios, extractor, generator))


def _client_without_key(settings, analyses, scenarios) -> TestClient:
    settings.llm_api_key = ""
    app = create_app(settings)
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_factory] = lambda: ComponentFactory(settings)
    app.dependency_overrides[get_analysis_store] = lambda: analyses
    app.dependency_overrides[get_scenario_store] = lambda: scenarios
    return TestClient(app)


class SlowGenerator(BaseContentGenerator):
    """Yields to the event loop before answering, like a real LLM call."""

    async def generate(
        self,
        content_type: ContentType,
        issue_tags: list[str],
        quotes: list[str],
        legal_concepts: list[str],
        marketing_direction: str | None = None,
    ) -> str:
        await asyncio.sleep(0.1)
        return f"# {content_type.value}"


@pytest.fixture
def client(settings, analyses, scenarios, fake_extractor, fake_generator):
    return _build_client(settings, analyses, scenarios, fake_extractor, fake_generator)


def _upload(client, name: str, data: bytes, content_type: str = "text/plain"):
    return client.post("/analyses/upload", files={"file": (name, data, content_type)})


# =============================================================================
# Upload Tests
# =============================================================================


class TestUpload:
    """Test suite for transcript intake."""

    def test_upload_text_file(self, client, analyses, scenarios):
        """Test that one upload yields one completed record and one scenario."""
        response = _upload(client, "zhang-call.txt", TRANSCRIPT.encode("utf-8"))

        assert response.status_code == 202
        body = response.json()
        assert body["status"] == "processing"
        assert body["filename"] == "zhang-call.txt"

        records = analyses.all()
        assert len(records) == 1
        assert records[0].status.value == "completed"
        assert records[0].raw_text == TRANSCRIPT

        assert len(scenarios.all()) == len(INITIAL_LEGAL_SCENARIOS) + 1
        assert scenarios.all()[0].case_name == "zhang-call"

    def test_upload_docx(self, client, analyses):
        doc = DocxDocument()
        doc.add_paragraph("Client: the owner refuses the final account.")
        buffer = io.BytesIO()
        doc.save(buffer)

        response = _upload(
            client,
            "hearing.docx",
            buffer.getvalue(),
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        )

        assert response.status_code == 202
        assert analyses.all()[0].raw_text == "Client: the owner refuses the final account."

    @pytest.mark.parametrize("data", [b"", b"   \n\t ", b"ab c"])
    def test_empty_or_short_file(self, client, analyses, data):
        response = _upload(client, "empty.txt", data)
        assert response.status_code == 422
        assert analyses.all() == []

    def test_audio_rejected(self, client, analyses):
        response = _upload(client, "call.mp3", b"ID3...", "audio/mpeg")
        assert response.status_code == 415
        assert "audio" in response.json()["detail"].lower()
        assert analyses.all() == []

    def test_unsupported_type(self, client):
        response = _upload(client, "scan.pdf", b"%PDF-1.7", "application/pdf")
        assert response.status_code == 415

    def test_broken_docx(self, client, analyses):
        response = _upload(client, "broken.docx", b"not a word file")
        assert response.status_code == 422
        assert analyses.all() == []

    def test_oversize_file(self, client, settings):
        settings.max_upload_bytes = 10
        response = _upload(client, "long.txt", b"x" * 11)
        assert response.status_code == 413

    def test_extraction_failure(self, settings, analyses, scenarios, failing_extractor, fake_generator):
        client = _build_client(settings, analyses, scenarios, failing_extractor, fake_generator)

        response = _upload(client, "call.txt", TRANSCRIPT.encode("utf-8"))

        assert response.status_code == 202
        record = analyses.all()[0]
        assert record.status.value == "failed"
        assert "quota exceeded" in record.error_message
        assert len(scenarios.all()) == len(INITIAL_LEGAL_SCENARIOS)

    def test_missing_api_key(self, settings, analyses, scenarios):
        client = _client_without_key(settings, analyses, scenarios)

        response = _upload(client, "call.txt", TRANSCRIPT.encode("utf-8"))

        assert response.status_code == 503
        assert "API key" in response.json()["detail"]
        assert analyses.all() == []

    @pytest.mark.parametrize(
        "name,content_type",
        [("call.mp3", "audio/mpeg"), ("scan.pdf", "application/pdf")],
    )
    def test_file_type_checked_before_api_key(self, settings, analyses, scenarios, name, content_type):
        client = _client_without_key(settings, analyses, scenarios)

        response = _upload(client, name, b"binary", content_type)

        assert response.status_code == 415
        assert analyses.all() == []

    def test_pasted_text(self, client, analyses):
        response = client.post("/analyses/text", json={"text": TRANSCRIPT})

        assert response.status_code == 202
        assert response.json()["filename"] == "Pasted transcript.txt"
        assert analyses.all()[0].status.value == "completed"

    def test_pasted_blank_text(self, client):
        response = client.post("/analyses/text", json={"text": "    "})
        assert response.status_code == 422


# =============================================================================
# Record and Generation Tests
# =============================================================================


class TestAnalyses:
    """Test suite for listing, generating and exporting."""

    @pytest.fixture
    def record_id(self, client):
        return _upload(client, "call.txt", TRANSCRIPT.encode("utf-8")).json()["id"]

    def test_list_and_get(self, client, record_id):
        listing = client.get("/analyses").json()
        assert listing["total"] == 1
        assert listing["records"][0]["id"] == record_id

        detail = client.get(f"/analyses/{record_id}").json()
        assert detail["status"] == "completed"
        assert detail["result"]["detected_issues"][0]["tag_name"] == "Final account refused"

    def test_get_missing(self, client):
        assert client.get("/analyses/nope").status_code == 404

    def test_generate_and_export(self, client, record_id, fake_generator):
        response = client.post(
            f"/analyses/{record_id}/generate",
            json={
                "content_type": "ARTICLE",
                "issue_tags": ["Unsigned visas"],
                "quotes": ["Nobody signed the visa."],
            },
        )

        assert response.status_code == 200
        content = response.json()["content"]
        assert content.startswith("# ARTICLE")

        call = fake_generator.calls[0]
        assert call["legal_concepts"] == ["Construction price priority", "Apparent agency"]
        assert call["marketing_direction"] == "How to recover unpaid construction fees in Beijing"

        stored = client.get(f"/analyses/{record_id}").json()["generated_content"]
        assert stored == {"ARTICLE": content}

        markdown = client.get(f"/analyses/{record_id}/content/ARTICLE").json()
        assert markdown["format"] == "markdown"
        assert markdown["content"] == content

        text = client.get(f"/analyses/{record_id}/content/ARTICLE", params={"format": "text"}).json()
        assert text["content"].startswith("ARTICLE\nTags: Unsigned visas")

        html = client.get(f"/analyses/{record_id}/content/ARTICLE", params={"format": "html"}).json()
        assert '<h1 class="md-h1">ARTICLE</h1>' in html["content"]

    def test_generate_replaces_same_type_only(self, client, record_id):
        for tags in (["first"], ["second"]):
            client.post(
                f"/analyses/{record_id}/generate",
                json={"content_type": "VIDEO", "issue_tags": tags},
            )
        client.post(
            f"/analyses/{record_id}/generate",
            json={"content_type": "ZHIHU", "quotes": ["q"]},
        )

        stored = client.get(f"/analyses/{record_id}").json()["generated_content"]
        assert set(stored) == {"VIDEO", "ZHIHU"}
        assert "second" in stored["VIDEO"]

    def test_concurrent_generation_keeps_every_type(self, settings, analyses, scenarios, fake_extractor, sample_extraction):
        analyses.add(
            AnalysisRecord(
                id="rec-1",
                filename="call.txt",
                raw_text=TRANSCRIPT,
                status=AnalysisStatus.COMPLETED,
                result=sample_extraction,
            )
        )
        app = _build_app(settings, analyses, scenarios, fake_extractor, SlowGenerator())

        async def generate_both():
            transport = httpx.ASGITransport(app=app)
            async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
                return await asyncio.gather(
                    *(
                        client.post(
                            "/analyses/rec-1/generate",
                            json={"content_type": content_type, "issue_tags": ["x"]},
                        )
                        for content_type in ("ARTICLE", "VIDEO")
                    )
                )

        responses = asyncio.run(generate_both())

        assert [r.status_code for r in responses] == [200, 200]
        assert analyses.get("rec-1").generated_content == {
            ContentType.ARTICLE: "# ARTICLE",
            ContentType.VIDEO: "# VIDEO",
        }

    def test_generate_requires_selection(self, client, record_id):
        response = client.post(
            f"/analyses/{record_id}/generate",
            json={"content_type": "ARTICLE", "issue_tags": [], "quotes": []},
        )
        assert response.status_code == 422

    def test_generate_unknown_type(self, client, record_id):
        response = client.post(
            f"/analyses/{record_id}/generate",
            json={"content_type": "PODCAST", "issue_tags": ["x"]},
        )
        assert response.status_code == 422

    def test_generate_on_failed_record(self, settings, analyses, scenarios, failing_extractor, fake_generator):
        client = _build_client(settings, analyses, scenarios, failing_extractor, fake_generator)
        record_id = _upload(client, "call.txt", TRANSCRIPT.encode("utf-8")).json()["id"]

        response = client.post(
            f"/analyses/{record_id}/generate",
            json={"content_type": "ARTICLE", "issue_tags": ["x"]},
        )

        assert response.status_code == 422
        assert fake_generator.calls == []

    def test_generation_failure(self, settings, analyses, scenarios, fake_extractor, failing_generator):
        client = _build_client(settings, analyses, scenarios, fake_extractor, failing_generator)
        record_id = _upload(client, "call.txt", TRANSCRIPT.encode("utf-8")).json()["id"]

        response = client.post(
            f"/analyses/{record_id}/generate",
            json={"content_type": "ARTICLE", "issue_tags": ["x"]},
        )

        assert response.status_code == 502
        assert analyses.get(record_id).generated_content == {}

    def test_export_before_generation(self, client, record_id):
        assert client.get(f"/analyses/{record_id}/content/VIDEO").status_code == 404


# =============================================================================
# Scenario Tests
# =============================================================================


class TestScenarios:
    """Test suite for the scenario library endpoints."""

    def test_list(self, client):
        body = client.get("/scenarios").json()
        assert body["total"] == len(INITIAL_LEGAL_SCENARIOS)

    def test_search(self, client):
        body = client.get("/scenarios", params={"q": "con-01"}).json()
        assert [s["id"] for s in body["scenarios"]] == ["CON-01"]

    def test_create(self, client):
        response = client.post(
            "/scenarios",
            json={"pain_point": "Material supplier unpaid", "triggers": ["They owe us for rebar."]},
        )

        assert response.status_code == 201
        created = response.json()
        assert created["id"].startswith("CASE-")
        assert created["is_custom"] is True
        assert client.get("/scenarios").json()["scenarios"][0]["id"] == created["id"]

    def test_create_duplicate(self, client):
        response = client.post("/scenarios", json={"id": "CON-01", "pain_point": "Duplicate"})
        assert response.status_code == 409

    def test_update(self, client):
        response = client.put(
            "/scenarios/PAY-01",
            json={"pain_point": "Edited", "triggers": ["line one", "line two"]},
        )

        assert response.status_code == 200
        updated = client.get("/scenarios/PAY-01").json()
        assert updated["pain_point"] == "Edited"
        assert updated["triggers"] == ["line one", "line two"]
        assert updated["follow_up"] == INITIAL_LEGAL_SCENARIOS[2]["follow_up"]

    def test_update_rejects_null_pain_point(self, client):
        response = client.put("/scenarios/PAY-01", json={"pain_point": None})
        assert response.status_code == 422
        assert client.get("/scenarios/PAY-01").json()["pain_point"] == INITIAL_LEGAL_SCENARIOS[2]["pain_point"]

    def test_update_missing(self, client):
        assert client.put("/scenarios/NOPE-1", json={"pain_point": "x"}).status_code == 404

    def test_delete(self, client):
        assert client.delete("/scenarios/LIT-01").status_code == 204
        assert client.get("/scenarios/LIT-01").status_code == 404
        assert client.delete("/scenarios/LIT-01").status_code == 404


# =============================================================================
# Knowledge and Health Tests
# =============================================================================


class TestKnowledge:
    """Test suite for the knowledge base endpoints."""

    def test_knowledge_base(self, client):
        body = client.get("/knowledge").json()
        assert body["markdown"].startswith("# ")
        assert body["html"].startswith('<div class="md-body">')

    def test_presets(self, client):
        body = client.get("/knowledge/presets").json()
        assert [c["category"] for c in body] == list(PRESET_PAIN_POINTS)
        assert body[0]["items"][0]["tag"] == PRESET_PAIN_POINTS[body[0]["category"]][0]["tag"]

    def test_health(self, client):
        body = client.get("/health").json()
        assert body["status"] == "healthy"
        assert body["llm_configured"] is True
