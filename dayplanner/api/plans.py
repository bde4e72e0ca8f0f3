"""
Plan API endpoints.

Thin HTTP wrappers around plan_day, the what-if engine and block explanation.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from dayplanner.core.exceptions import (
    BusinessLogicError,
    IntervalOrderingError,
    NotFoundError,
    PlannerError,
    ValidationError,
)
from dayplanner.models.plan import Plan
from dayplanner.models.planner_input import PlannerInput, PlannerOptions
from dayplanner.models.what_if import WhatIfResult, WhatIfScenario
from dayplanner.services.planner_service import explain_block, plan_day
from dayplanner.services.what_if_service import run_what_if_scenario

router = APIRouter()


class PlanRequest(BaseModel):
    """Request body for planning a day."""

    input: PlannerInput
    options: Optional[PlannerOptions] = None


class WhatIfRequest(BaseModel):
    """Request body for a what-if run; the baseline is computed when omitted."""

    input: PlannerInput
    scenario: WhatIfScenario
    baseline: Optional[Plan] = None
    options: Optional[PlannerOptions] = None


class ExplainRequest(BaseModel):
    """Request body for explaining one block of a plan."""

    plan: Plan
    block_id: str


class ExplainResponse(BaseModel):
    block_id: str
    explanations: list[str]


def _to_http_error(exc: PlannerError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, (ValidationError, IntervalOrderingError)):
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
    elif isinstance(exc, BusinessLogicError):
        code = status.HTTP_400_BAD_REQUEST
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = {"message": exc.message}
    if exc.details is not None:
        detail["details"] = exc.details
    return HTTPException(status_code=code, detail=detail)


@router.post("", response_model=Plan)
async def create_plan(payload: PlanRequest):
    """Plan a day."""
    try:
        return plan_day(payload.input, payload.options)
    except PlannerError as exc:
        raise _to_http_error(exc) from exc


@router.post("/what-if", response_model=WhatIfResult)
async def simulate_scenario(payload: WhatIfRequest):
    """Replay the planner with one hypothetical change."""
    try:
        baseline = payload.baseline or plan_day(payload.input, payload.options)
        return run_what_if_scenario(payload.input, baseline, payload.scenario, payload.options)
    except PlannerError as exc:
        raise _to_http_error(exc) from exc


@router.post("/explain", response_model=ExplainResponse)
async def explain_plan_block(payload: ExplainRequest):
    """Explain why a block was placed."""
    try:
        explanations = explain_block(payload.plan, payload.block_id)
    except PlannerError as exc:
        raise _to_http_error(exc) from exc
    return ExplainResponse(block_id=payload.block_id, explanations=explanations)
