"""Streamlit frontend for Case Insight Studio.

Provides a UI for uploading consultation transcripts, reviewing extracted
pain points, generating marketing copy and curating the scenario library.
"""

import logging
import os
import time
from datetime import datetime
from typing import Any

import httpx
import streamlit as st
from streamlit.runtime.uploaded_file_manager import UploadedFile

from case_insight.content.scenarios import (
    evidence_strength_level,
    format_scenario_id,
    parse_triggers,
)

# Configuration
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
POLL_INTERVAL_SECONDS = 2.0

CONTENT_TYPE_LABELS = {
    "ARTICLE": "📰 Long-form article",
    "VIDEO": "🎬 Short video script",
    "ZHIHU": "💬 Q&A answer",
}

# Page config
st.set_page_config(
    page_title="Case Insight Studio",
    page_icon="⚖️",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# =============================================================================
# API Client
# =============================================================================


class APIClient:
    """Thin HTTP client for the Case Insight API."""

    def __init__(self, base_url: str):
        """Initialize the API client.

        Args:
            base_url: Base URL of the API.
        """
        self.base_url = base_url.rstrip("/")

    def _error(self, action: str, e: Exception) -> None:
        if isinstance(e, httpx.HTTPStatusError):
            code = e.response.status_code
            try:
                detail = e.response.json().get("detail", e.response.text)
            except ValueError:
                detail = e.response.text
            logger.error(f"{action} failed: {code} - {detail}")
            if code == 503:
                st.error(f"{action} failed: API key missing on the server. {detail}")
            else:
                st.error(f"{action} failed: {detail}")
        else:
            logger.error(f"{action} error: {e}")
            st.error(f"{action} error: {e}")

    def upload_transcript(self, file: UploadedFile) -> dict[str, Any]:
        """Upload a transcript file for analysis."""
        files = {"file": (file.name, file.getvalue(), file.type or "application/octet-stream")}
        try:
            response = httpx.post(f"{self.base_url}/analyses/upload", files=files, timeout=60.0)
            response.raise_for_status()
            return response.json()
        except Exception as e:
            self._error("Upload", e)
            return {}

    def submit_text(self, text: str) -> dict[str, Any]:
        """Submit pasted transcript text for analysis."""
        try:
            response = httpx.post(
                f"{self.base_url}/analyses/text", json={"text": text}, timeout=30.0
            )
            response.raise_for_status()
            return response.json()
        except Exception as e:
            self._error("Analysis", e)
            return {}

    def list_analyses(self) -> list[dict[str, Any]]:
        """Get all analysis records, newest first."""
        try:
            response = httpx.get(f"{self.base_url}/analyses", timeout=10.0)
            response.raise_for_status()
            return response.json().get("records", [])
        except Exception as e:
            logger.error(f"Analysis list fetch error: {e}")
            return []

    def get_analysis(self, record_id: str) -> dict[str, Any]:
        """Get one analysis record."""
        try:
            response = httpx.get(f"{self.base_url}/analyses/{record_id}", timeout=10.0)
            response.raise_for_status()
            return response.json()
        except Exception as e:
            self._error("Loading the analysis", e)
            return {}

    def generate(
        self, record_id: str, content_type: str, issue_tags: list[str], quotes: list[str]
    ) -> str | None:
        """Generate marketing copy; returns the Markdown or None on failure."""
        payload = {"content_type": content_type, "issue_tags": issue_tags, "quotes": quotes}
        try:
            response = httpx.post(
                f"{self.base_url}/analyses/{record_id}/generate", json=payload, timeout=120.0
            )
            response.raise_for_status()
            return response.json()["content"]
        except Exception as e:
            self._error("Generation", e)
            return None

    def export_content(self, record_id: str, content_type: str, fmt: str) -> str:
        """Export stored content as markdown, text or html."""
        try:
            response = httpx.get(
                f"{self.base_url}/analyses/{record_id}/content/{content_type}",
                params={"format": fmt},
                timeout=10.0,
            )
            response.raise_for_status()
            return response.json()["content"]
        except Exception as e:
            logger.error(f"Content export error: {e}")
            return ""

    def list_scenarios(self, query: str = "") -> list[dict[str, Any]]:
        """Get scenarios, optionally filtered."""
        params = {"q": query} if query else None
        try:
            response = httpx.get(f"{self.base_url}/scenarios", params=params, timeout=10.0)
            response.raise_for_status()
            return response.json().get("scenarios", [])
        except Exception as e:
            logger.error(f"Scenario fetch error: {e}")
            return []

    def update_scenario(self, scenario_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        """Save edits to a scenario."""
        try:
            response = httpx.put(
                f"{self.base_url}/scenarios/{scenario_id}", json=changes, timeout=10.0
            )
            response.raise_for_status()
            return response.json()
        except Exception as e:
            self._error("Saving the scenario", e)
            return {}

    def delete_scenario(self, scenario_id: str) -> bool:
        """Delete a scenario."""
        try:
            response = httpx.delete(f"{self.base_url}/scenarios/{scenario_id}", timeout=10.0)
            response.raise_for_status()
            return True
        except Exception as e:
            self._error("Deleting the scenario", e)
            return False

    def get_knowledge(self) -> dict[str, Any]:
        """Get the firm knowledge base."""
        try:
            response = httpx.get(f"{self.base_url}/knowledge", timeout=10.0)
            response.raise_for_status()
            return response.json()
        except Exception as e:
            self._error("Loading the knowledge base", e)
            return {}

    def get_presets(self) -> list[dict[str, Any]]:
        """Get the preset pain-point library."""
        try:
            response = httpx.get(f"{self.base_url}/knowledge/presets", timeout=10.0)
            response.raise_for_status()
            return response.json()
        except Exception as e:
            logger.error(f"Preset fetch error: {e}")
            return []

    def health_check(self) -> bool:
        """Check if the API is healthy.

        Returns:
            True if API is healthy, False otherwise.
        """
        try:
            response = httpx.get(f"{self.base_url}/health", timeout=5.0)
            return response.status_code == 200
        except httpx.HTTPError:
            return False


# =============================================================================
# Helpers
# =============================================================================


def status_badge(status: str | None) -> str:
    """Return a status badge with emoji."""
    badges = {
        "processing": "⏳ Analyzing",
        "completed": "✅ Ready",
        "failed": "❌ Failed",
    }
    return badges.get((status or "").lower(), f"❓ {status}")


def strength_badge(strength: str | None) -> str:
    """Return a colored badge for an evidence strength label."""
    if not strength:
        return "-"
    icons = {"strong": "🟢", "medium": "🟡", "weak": "🔴"}
    return f"{icons[evidence_strength_level(strength)]} {strength}"


def _format_date(value: str | None) -> str:
    if not value:
        return ""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%Y-%m-%d %H:%M")
    except ValueError:
        return value


def open_generator(record_id: str) -> None:
    """Switch to the generator view for a record."""
    st.session_state.view = "generator"
    st.session_state.active_record_id = record_id
    st.session_state.selection_record_id = None


def back_to_dashboard() -> None:
    st.session_state.view = "dashboard"
    st.session_state.active_record_id = None


# =============================================================================
# UI Components
# =============================================================================


def render_sidebar(client: APIClient) -> None:
    """Render navigation and connection status.

    Args:
        client: The API client instance.
    """
    with st.sidebar:
        st.title("⚖️ Case Insight")

        st.divider()

        pages = {
            "dashboard": "📊 Dashboard",
            "knowledge": "📚 Brand knowledge base",
            "scenarios": "🗂️ Scenario library",
        }
        for view, label in pages.items():
            active = st.session_state.view == view or (
                view == "dashboard" and st.session_state.view == "generator"
            )
            if st.button(label, use_container_width=True, type="primary" if active else "secondary"):
                st.session_state.view = view
                st.session_state.active_record_id = None
                st.rerun()

        st.divider()

        if client.health_check():
            st.success("✅ API Connected")
        else:
            st.error("❌ API Disconnected")
            st.info(f"API URL: {API_BASE_URL}")

        st.caption(f"API: `{API_BASE_URL}`")


def render_upload_section(client: APIClient) -> None:
    """Render the upload and paste tabs.

    Args:
        client: The API client instance.
    """
    st.subheader("📥 Case intake")

    upload_tab, paste_tab = st.tabs(["Upload file", "Paste text"])

    with upload_tab:
        uploaded_file = st.file_uploader(
            "Choose a transcript",
            type=["docx", "txt", "md", "mp3", "wav", "m4a"],
            help="Word or text transcripts. Audio files are not analyzed yet.",
        )
        if st.button("Analyze file", type="primary", disabled=uploaded_file is None):
            with st.spinner("Uploading transcript..."):
                result = client.upload_transcript(uploaded_file)
            if result:
                st.success(f"Analyzing {result['filename']}...")
                st.rerun()

    with paste_tab:
        text = st.text_area(
            "Transcript text",
            height=220,
            placeholder="Paste a call transcript, a case description or text copied from a PDF...",
            key="pasted_text",
        )
        if st.button("Analyze text", type="primary", disabled=not text.strip()):
            with st.spinner("Submitting transcript..."):
                result = client.submit_text(text)
            if result:
                st.success("Analyzing pasted transcript...")
                st.rerun()


def render_records_table(client: APIClient) -> None:
    """Render the recent analyses with their extracted insights.

    Args:
        client: The API client instance.
    """
    st.subheader("🗒️ Recent analyses")

    records = client.list_analyses()
    if not records:
        st.info("No transcripts yet. Upload or paste one to get started.")
        return

    header = st.columns([2, 2, 2, 1.2, 3, 2, 1.3])
    for col, title in zip(
        header,
        ["Source", "Persona", "Legal concepts", "Evidence", "Summary", "Direction", "Action"],
    ):
        col.markdown(f"**{title}**")

    for record in records:
        result = record.get("result") or {}
        cols = st.columns([2, 2, 2, 1.2, 3, 2, 1.3])

        with cols[0]:
            st.write(record["filename"])
            st.caption(_format_date(record.get("upload_date")))
        with cols[1]:
            tags = (result.get("user_persona") or {}).get("tags") or []
            st.write(" ".join(f"`{t}`" for t in tags) or "-")
        with cols[2]:
            st.write(" · ".join(result.get("legal_concepts") or []) or "-")
        with cols[3]:
            st.write(strength_badge((result.get("evidence_analysis") or {}).get("strength")))
        with cols[4]:
            st.write(result.get("problem_summary") or "-")
        with cols[5]:
            st.write(result.get("marketing_direction") or "-")
        with cols[6]:
            status = record.get("status")
            if status == "completed":
                st.button(
                    "Generate",
                    key=f"open_{record['id']}",
                    on_click=open_generator,
                    args=(record["id"],),
                )
            else:
                st.write(status_badge(status))
                if status == "failed" and record.get("error_message"):
                    st.caption(record["error_message"])

    if any(r.get("status") == "processing" for r in records):
        time.sleep(POLL_INTERVAL_SECONDS)
        st.rerun()


def render_dashboard(client: APIClient) -> None:
    st.title("Case intake dashboard")
    render_upload_section(client)
    st.divider()
    render_records_table(client)


def _init_selection(record: dict[str, Any]) -> None:
    """Select every extracted tag and quote the first time a record is opened."""
    if st.session_state.get("selection_record_id") == record["id"]:
        return
    result = record.get("result") or {}
    issues = result.get("detected_issues") or []
    st.session_state.selected_tags = {i["tag_name"] for i in issues if i.get("tag_name")}
    st.session_state.selected_quotes = {i["original_text"] for i in issues if i.get("original_text")}
    for key in [k for k in st.session_state.keys() if str(k).startswith(("tag::", "quote::"))]:
        del st.session_state[key]
    st.session_state.selection_record_id = record["id"]


def _toggle_tag(tag: str, source_key: str) -> None:
    selected: set[str] = st.session_state.selected_tags
    if st.session_state[source_key]:
        selected.add(tag)
    else:
        selected.discard(tag)
    # Keep every checkbox for the same tag in sync.
    for key in list(st.session_state.keys()):
        if str(key).startswith("tag::") and str(key).endswith(f"::{tag}"):
            st.session_state[key] = tag in selected


def _tag_checkbox(tag: str, scope: str, help_text: str | None = None) -> None:
    key = f"tag::{scope}::{tag}"
    if key not in st.session_state:
        st.session_state[key] = tag in st.session_state.selected_tags
    st.checkbox(tag, key=key, help=help_text, on_change=_toggle_tag, args=(tag, key))


def _toggle_quote(quote: str, key: str) -> None:
    if st.session_state[key]:
        st.session_state.selected_quotes.add(quote)
    else:
        st.session_state.selected_quotes.discard(quote)


def render_selection_panel(client: APIClient, record: dict[str, Any]) -> None:
    """Render quotes, extracted tags and the preset library.

    Args:
        client: The API client instance.
        record: The completed analysis record.
    """
    result = record.get("result") or {}
    issues = result.get("detected_issues") or []

    st.subheader("🎯 Content strategy")

    if result.get("marketing_direction"):
        st.info(f"✨ **Long-tail keyword suggestion:** {result['marketing_direction']}")

    st.markdown("**Client quotes (source material)**")
    quotes = [i["original_text"] for i in issues if i.get("original_text")]
    if not quotes:
        st.caption("No clear pain-point quotes were detected.")
    for idx, quote in enumerate(quotes):
        key = f"quote::{idx}"
        if key not in st.session_state:
            st.session_state[key] = quote in st.session_state.selected_quotes
        st.checkbox(f"“{quote}”", key=key, on_change=_toggle_quote, args=(quote, key))

    st.markdown("**Extracted pain points**")
    # One checkbox per tag; the first quote filed under it becomes the help text.
    extracted: dict[str, str | None] = {}
    for issue in issues:
        if issue.get("tag_name"):
            extracted.setdefault(issue["tag_name"], issue.get("original_text"))
    if not extracted:
        st.caption("No pain points were tagged.")
    for tag, quote in extracted.items():
        _tag_checkbox(tag, "extracted", help_text=quote)

    st.markdown("**Preset pain-point library**")
    for idx, category in enumerate(client.get_presets()):
        with st.expander(category["category"], expanded=idx == 0):
            for item in category["items"]:
                _tag_checkbox(item["tag"], f"preset{idx}", help_text=item["desc"])


def render_result_panel(client: APIClient, record: dict[str, Any]) -> None:
    """Render the content-type selector, the Generate button and the result.

    Args:
        client: The API client instance.
        record: The completed analysis record.
    """
    content_type = st.radio(
        "Content type",
        options=list(CONTENT_TYPE_LABELS),
        format_func=CONTENT_TYPE_LABELS.get,
        horizontal=True,
        key="content_type",
    )

    tags = sorted(st.session_state.selected_tags)
    issues = (record.get("result") or {}).get("detected_issues") or []
    # Keep quotes in transcript order.
    quotes = [
        i["original_text"]
        for i in issues
        if i.get("original_text") in st.session_state.selected_quotes
    ]
    nothing_selected = not tags and not quotes

    if st.button(
        f"Generate {CONTENT_TYPE_LABELS[content_type]}",
        type="primary",
        use_container_width=True,
        disabled=nothing_selected,
    ):
        with st.spinner("Writing..."):
            content = client.generate(record["id"], content_type, tags, quotes)
        if content is not None:
            st.rerun()

    if nothing_selected:
        st.caption("Select at least one quote or pain point.")

    content = (record.get("generated_content") or {}).get(content_type)
    if not content:
        st.info("Nothing generated yet for this content type.")
        return

    st.divider()
    html = client.export_content(record["id"], content_type, "html")
    st.markdown(html, unsafe_allow_html=True)

    with st.expander("📋 Copy or download"):
        markdown_tab, text_tab = st.tabs(["Markdown source", "Plain text"])
        plain = client.export_content(record["id"], content_type, "text")
        with markdown_tab:
            st.code(content, language="markdown")
            st.download_button(
                "Download .md",
                data=content,
                file_name=f"{content_type.lower()}.md",
                mime="text/markdown",
            )
        with text_tab:
            st.code(plain, language="text")
            st.download_button(
                "Download .txt",
                data=plain,
                file_name=f"{content_type.lower()}.txt",
                mime="text/plain",
            )


def render_generator(client: APIClient) -> None:
    """Render the content generator for the active record."""
    st.button("← Back to dashboard", on_click=back_to_dashboard)

    record_id = st.session_state.get("active_record_id")
    record = client.get_analysis(record_id) if record_id else {}
    if not record:
        st.warning("The selected analysis is no longer available.")
        return
    if record.get("status") != "completed":
        st.warning(f"{record['filename']} is not ready: {status_badge(record.get('status'))}")
        return

    st.title(f"Content studio: {record['filename']}")
    _init_selection(record)

    left, right = st.columns([1, 2])
    with left:
        render_selection_panel(client, record)
    with right:
        render_result_panel(client, record)


def render_knowledge_base(client: APIClient) -> None:
    """Render the firm profile."""
    st.title("Brand knowledge base")
    st.caption("Every generated piece is grounded in this profile.")
    knowledge = client.get_knowledge()
    if knowledge:
        st.markdown(knowledge["html"], unsafe_allow_html=True)


def _render_scenario_editor(client: APIClient, scenario: dict[str, Any]) -> None:
    sid = scenario["id"]
    with st.form(key=f"edit_{sid}"):
        case_name = st.text_input("Case name", value=scenario.get("case_name") or "")
        pain_point = st.text_input("Core pain point", value=scenario.get("pain_point") or "")
        triggers = st.text_area(
            "Client triggers (one per line)",
            value="\n".join(scenario.get("triggers") or []),
        )
        case_summary = st.text_area("Case summary", value=scenario.get("case_summary") or "")
        ai_logic = st.text_area("Legal logic", value=scenario.get("ai_logic") or "")
        follow_up = st.text_area("Follow-up", value=scenario.get("follow_up") or "")
        marketing_action = st.text_area(
            "Marketing action", value=scenario.get("marketing_action") or ""
        )

        save_col, cancel_col = st.columns(2)
        save = save_col.form_submit_button("💾 Save", type="primary")
        cancel = cancel_col.form_submit_button("✖ Cancel")

    if save:
        changes = {
            "case_name": case_name or None,
            "pain_point": pain_point,
            "triggers": parse_triggers(triggers),
            "case_summary": case_summary or None,
            "ai_logic": ai_logic,
            "follow_up": follow_up,
            "marketing_action": marketing_action,
        }
        if client.update_scenario(sid, changes):
            st.session_state.editing_scenario_id = None
            st.rerun()
    elif cancel:
        st.session_state.editing_scenario_id = None
        st.rerun()


def _render_scenario_detail(client: APIClient, scenario: dict[str, Any]) -> None:
    sid = scenario["id"]
    if scenario.get("case_summary"):
        st.markdown(f"**Case summary:** {scenario['case_summary']}")
    st.markdown("**Client triggers**")
    for trigger in scenario.get("triggers") or []:
        st.markdown(f"> {trigger}")
    st.markdown(f"**Legal logic:** {scenario.get('ai_logic') or '-'}")
    st.markdown(f"**Follow-up:** {scenario.get('follow_up') or '-'}")
    st.markdown(f"**Marketing action:** {scenario.get('marketing_action') or '-'}")
    if scenario.get("created_at"):
        st.caption(f"Added {scenario['created_at']}")

    edit_col, delete_col, _ = st.columns([1, 1, 4])
    if edit_col.button("✏️ Edit", key=f"edit_btn_{sid}"):
        st.session_state.editing_scenario_id = sid
        st.rerun()

    if st.session_state.get("confirm_delete_id") == sid:
        st.warning("Delete this scenario? This cannot be undone.")
        yes_col, no_col, _ = st.columns([1, 1, 4])
        if yes_col.button("Delete", key=f"confirm_{sid}", type="primary"):
            if client.delete_scenario(sid):
                st.session_state.confirm_delete_id = None
                st.rerun()
        if no_col.button("Keep", key=f"keep_{sid}"):
            st.session_state.confirm_delete_id = None
            st.rerun()
    elif delete_col.button("🗑️ Delete", key=f"delete_btn_{sid}"):
        st.session_state.confirm_delete_id = sid
        st.rerun()


def render_scenario_library(client: APIClient) -> None:
    """Render the searchable, editable scenario library."""
    st.title("Construction-law scenario library")

    query = st.text_input(
        "Search",
        placeholder="Search case name, pain point or id...",
        label_visibility="collapsed",
    )
    scenarios = client.list_scenarios(query.strip())
    if not scenarios:
        st.info("No scenarios match your search.")
        return

    for scenario in scenarios:
        marker = "🆕 " if scenario.get("is_custom") else ""
        title = f"{marker}{format_scenario_id(scenario['id'])} · {scenario.get('case_name') or scenario['pain_point']}"
        editing = st.session_state.get("editing_scenario_id") == scenario["id"]
        with st.expander(title, expanded=editing):
            st.markdown(f"**{scenario['pain_point']}**")
            if editing:
                _render_scenario_editor(client, scenario)
            else:
                _render_scenario_detail(client, scenario)


# =============================================================================
# Main App
# =============================================================================


def init_session_state() -> None:
    """Initialize session state variables."""
    if "view" not in st.session_state:
        st.session_state.view = "dashboard"
    if "active_record_id" not in st.session_state:
        st.session_state.active_record_id = None
    if "selection_record_id" not in st.session_state:
        st.session_state.selection_record_id = None
    if "selected_tags" not in st.session_state:
        st.session_state.selected_tags = set()
    if "selected_quotes" not in st.session_state:
        st.session_state.selected_quotes = set()
    if "editing_scenario_id" not in st.session_state:
        st.session_state.editing_scenario_id = None
    if "confirm_delete_id" not in st.session_state:
        st.session_state.confirm_delete_id = None


def main() -> None:
    """Main application entry point."""
    init_session_state()

    client = APIClient(API_BASE_URL)

    render_sidebar(client)

    match st.session_state.view:
        case "generator":
            render_generator(client)
        case "knowledge":
            render_knowledge_base(client)
        case "scenarios":
            render_scenario_library(client)
        case _:
            render_dashboard(client)


if __name__ == "__main__":
    main()
