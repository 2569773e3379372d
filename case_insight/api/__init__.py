"""FastAPI routers and dependencies."""

from case_insight.api.analyses import router as analyses_router
from case_insight.api.deps import (
    get_analysis_store,
    get_extractor,
    get_generator,
    get_scenario_store,
    get_upload_parser,
)
from case_insight.api.knowledge import router as knowledge_router
from case_insight.api.scenarios import router as scenarios_router

__all__ = [
    "get_analysis_store",
    "get_extractor",
    "get_generator",
    "get_scenario_store",
    "get_upload_parser",
    "analyses_router",
    "knowledge_router",
    "scenarios_router",
]
