"""Scenario library API routes.

CRUD and search over the in-memory template library.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError

from case_insight.api.deps import get_scenario_store
from case_insight.api.schemas import ScenarioCreate, ScenarioListResponse, ScenarioUpdate
from case_insight.content.models import LegalScenario
from case_insight.content.scenarios import new_case_id
from case_insight.store import RecordNotFoundError, ScenarioStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scenarios", tags=["scenarios"])


def _get_scenario_or_404(scenarios: ScenarioStore, scenario_id: str) -> LegalScenario:
    try:
        return scenarios.get(scenario_id)
    except RecordNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Scenario {scenario_id} not found",
        ) from e


@router.get("", response_model=ScenarioListResponse)
async def list_scenarios(
    q: str | None = Query(default=None, description="Search pain point, id or case name"),
    scenarios: ScenarioStore = Depends(get_scenario_store),
) -> ScenarioListResponse:
    """List the library, optionally filtered by a search term."""
    results = scenarios.search(q)
    return ScenarioListResponse(scenarios=results, total=len(results))


@router.post("", response_model=LegalScenario, status_code=status.HTTP_201_CREATED)
async def create_scenario(
    request: ScenarioCreate,
    scenarios: ScenarioStore = Depends(get_scenario_store),
) -> LegalScenario:
    """Add a custom scenario at the top of the library.

    Raises:
        HTTPException: 409 if the id is already taken.
    """
    try:
        scenario = LegalScenario(
            **request.model_dump(exclude={"id"}),
            id=request.id or new_case_id(),
            is_custom=True,
        )
        return scenarios.add(scenario)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e


@router.get("/{scenario_id}", response_model=LegalScenario)
async def get_scenario(
    scenario_id: str,
    scenarios: ScenarioStore = Depends(get_scenario_store),
) -> LegalScenario:
    """Get one scenario."""
    return _get_scenario_or_404(scenarios, scenario_id)


@router.put("/{scenario_id}", response_model=LegalScenario)
async def update_scenario(
    scenario_id: str,
    request: ScenarioUpdate,
    scenarios: ScenarioStore = Depends(get_scenario_store),
) -> LegalScenario:
    """Apply edits to a scenario. Fields left out of the body keep their value."""
    existing = _get_scenario_or_404(scenarios, scenario_id)
    try:
        updated = LegalScenario.model_validate(
            {**existing.model_dump(), **request.model_dump(exclude_unset=True)}
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid scenario: {e.error_count()} error(s)",
        ) from e

    try:
        return scenarios.update(updated)
    except RecordNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Scenario {scenario_id} not found",
        ) from e


@router.delete("/{scenario_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_scenario(
    scenario_id: str,
    scenarios: ScenarioStore = Depends(get_scenario_store),
) -> None:
    """Remove a scenario from the library."""
    try:
        scenarios.delete(scenario_id)
    except RecordNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Scenario {scenario_id} not found",
        ) from e
