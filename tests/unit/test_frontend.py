"""Unit tests for the Streamlit generator panel."""

from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

APP_PATH = str(Path(__file__).resolve().parents[2] / "frontend" / "app.py")

RECORD = {
    "id": "rec-1",
    "filename": "call.txt",
    "status": "completed",
    "result": {
        "marketing_direction": "How to recover unpaid construction fees in Beijing",
        "detected_issues": [
            {"tag_name": "Final account refused", "original_text": "They will not settle."},
            {"tag_name": "Final account refused", "original_text": "The audit keeps slipping."},
            {"tag_name": "Unsigned visas", "original_text": "Nobody signed the visa."},
        ],
    },
}

PRESETS = [
    {
        "category": "Payment",
        "items": [
            {"tag": "Final account refused", "desc": "Owner will not settle"},
            {"tag": "Retention withheld", "desc": "Warranty money kept"},
        ],
    },
    {
        "category": "Site",
        "items": [{"tag": "Unsigned visas", "desc": "Change orders never signed"}],
    },
]


def _selection_panel_app(app_path: str, record: dict, presets: list) -> None:
    import importlib.util

    spec = importlib.util.spec_from_file_location("studio_frontend", app_path)
    frontend = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(frontend)

    class PresetClient:
        def get_presets(self):
            return presets

    frontend.init_session_state()
    frontend._init_selection(record)
    frontend.render_selection_panel(PresetClient(), record)


@pytest.fixture
def app():
    at = AppTest.from_function(
        _selection_panel_app,
        kwargs={"app_path": APP_PATH, "record": RECORD, "presets": PRESETS},
        default_timeout=30,
    )
    return at.run()


# =============================================================================
# Selection Panel Tests
# =============================================================================


class TestSelectionPanel:
    """Test suite for the tag and quote selection panel."""

    def test_repeated_tag_renders_once(self, app):
        """Test that two issues sharing a tag name get a single checkbox."""
        assert not app.exception

        keys = [cb.key for cb in app.checkbox]
        assert keys.count("tag::extracted::Final account refused") == 1
        assert "tag::extracted::Unsigned visas" in keys
        assert [k for k in keys if k.startswith("quote::")] == ["quote::0", "quote::1", "quote::2"]

    def test_everything_selected_on_open(self, app):
        assert app.session_state["selected_tags"] == {"Final account refused", "Unsigned visas"}
        assert all(cb.value for cb in app.checkbox if cb.key.startswith(("tag::extracted::", "quote::")))

    def test_preset_checkbox_follows_extracted_tag(self, app):
        app.checkbox(key="tag::extracted::Final account refused").uncheck().run()

        assert not app.exception
        assert "Final account refused" not in app.session_state["selected_tags"]
        assert app.checkbox(key="tag::preset0::Final account refused").value is False
        assert app.checkbox(key="tag::preset1::Unsigned visas").value is True
