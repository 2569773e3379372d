"""In-memory repositories for analyses and scenarios.

State lives for the lifetime of the process. Each repository serializes
access to its list with a lock because request handlers and background
tasks run on different threads.
"""

import logging
import threading

from case_insight.content.models import AnalysisRecord, ContentType, LegalScenario
from case_insight.content.prompts import INITIAL_LEGAL_SCENARIOS
from case_insight.content.scenarios import filter_scenarios

logger = logging.getLogger(__name__)


class RecordNotFoundError(KeyError):
    """Raised when an id does not exist in a repository."""

    pass


class AnalysisStore:
    """Analysis records, newest first."""

    def __init__(self) -> None:
        self._records: list[AnalysisRecord] = []
        self._lock = threading.Lock()

    def add(self, record: AnalysisRecord) -> AnalysisRecord:
        with self._lock:
            self._records.insert(0, record)
        logger.info(f"Added analysis record {record.id} ({record.filename})")
        return record

    def get(self, record_id: str) -> AnalysisRecord:
        with self._lock:
            for record in self._records:
                if record.id == record_id:
                    return record
        raise RecordNotFoundError(record_id)

    def all(self) -> list[AnalysisRecord]:
        with self._lock:
            return list(self._records)

    def update(self, record_id: str, **changes) -> AnalysisRecord:
        """Replace a record with a copy carrying ``changes``."""
        with self._lock:
            for i, record in enumerate(self._records):
                if record.id == record_id:
                    updated = record.model_copy(update=changes)
                    self._records[i] = updated
                    return updated
        raise RecordNotFoundError(record_id)

    def set_content(self, record_id: str, content_type: ContentType, content: str) -> AnalysisRecord:
        """Store generated copy under its type, keeping copy of the other types.

        The merge is made against the current record while holding the lock.
        """
        with self._lock:
            for i, record in enumerate(self._records):
                if record.id == record_id:
                    generated = {**record.generated_content, content_type: content}
                    updated = record.model_copy(update={"generated_content": generated})
                    self._records[i] = updated
                    return updated
        raise RecordNotFoundError(record_id)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


class ScenarioStore:
    """The scenario library, seeded with the built-in scenarios."""

    def __init__(self, seed: list[dict] | None = None) -> None:
        seed = INITIAL_LEGAL_SCENARIOS if seed is None else seed
        self._scenarios: list[LegalScenario] = [LegalScenario.model_validate(s) for s in seed]
        self._lock = threading.Lock()
        logger.info(f"Scenario library initialized with {len(self._scenarios)} scenarios")

    def add(self, scenario: LegalScenario) -> LegalScenario:
        """Add a scenario at the top of the library.

        Raises:
            ValueError: If a scenario with the same id already exists.
        """
        with self._lock:
            if any(s.id == scenario.id for s in self._scenarios):
                raise ValueError(f"Scenario {scenario.id} already exists")
            self._scenarios.insert(0, scenario)
        logger.info(f"Added scenario {scenario.id}")
        return scenario

    def get(self, scenario_id: str) -> LegalScenario:
        with self._lock:
            for scenario in self._scenarios:
                if scenario.id == scenario_id:
                    return scenario
        raise RecordNotFoundError(scenario_id)

    def all(self) -> list[LegalScenario]:
        with self._lock:
            return list(self._scenarios)

    def search(self, term: str | None) -> list[LegalScenario]:
        return filter_scenarios(self.all(), term)

    def update(self, scenario: LegalScenario) -> LegalScenario:
        """Replace the scenario with the same id."""
        with self._lock:
            for i, existing in enumerate(self._scenarios):
                if existing.id == scenario.id:
                    self._scenarios[i] = scenario
                    logger.info(f"Updated scenario {scenario.id}")
                    return scenario
        raise RecordNotFoundError(scenario.id)

    def delete(self, scenario_id: str) -> None:
        with self._lock:
            remaining = [s for s in self._scenarios if s.id != scenario_id]
            if len(remaining) == len(self._scenarios):
                raise RecordNotFoundError(scenario_id)
            self._scenarios = remaining
        logger.info(f"Deleted scenario {scenario_id}")

    def ids(self) -> set[str]:
        with self._lock:
            return {s.id for s in self._scenarios}
