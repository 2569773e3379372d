"""In-memory state for analyses and the scenario library."""

from case_insight.store.memory import AnalysisStore, RecordNotFoundError, ScenarioStore

__all__ = [
    "AnalysisStore",
    "ScenarioStore",
    "RecordNotFoundError",
]
