"""
Boundary validation for planner records.

Each validate_* function returns a tagged ValidationResult; the parse_*
counterparts raise ValidationError instead. Model instances are re-validated
from their dumped form, so the returned value is always a fresh copy.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from dayplanner.core.exceptions import ValidationError
from dayplanner.models.plan import Plan
from dayplanner.models.planner_input import PlannerInput, PlannerOptions
from dayplanner.models.what_if import WhatIfScenario

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class ValidationResult(Generic[ModelT]):
    """Outcome of validating one boundary record."""

    success: bool
    data: Optional[ModelT] = None
    errors: list[dict[str, Any]] = field(default_factory=list)


def _validate(model: type[ModelT], raw: Any) -> ValidationResult[ModelT]:
    payload = raw.model_dump() if isinstance(raw, BaseModel) else raw
    try:
        return ValidationResult(success=True, data=model.model_validate(payload))
    except PydanticValidationError as exc:
        errors = [
            {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
            for error in exc.errors()
        ]
        return ValidationResult(success=False, errors=errors)


def _parse(model: type[ModelT], raw: Any, label: str) -> ModelT:
    result = _validate(model, raw)
    if not result.success:
        raise ValidationError(f"Invalid {label}", details=result.errors)
    return result.data


def validate_planner_input(raw: Any) -> ValidationResult[PlannerInput]:
    return _validate(PlannerInput, raw)


def validate_planner_options(raw: Any) -> ValidationResult[PlannerOptions]:
    return _validate(PlannerOptions, raw if raw is not None else {})


def validate_plan(raw: Any) -> ValidationResult[Plan]:
    return _validate(Plan, raw)


def validate_scenario(raw: Any) -> ValidationResult[WhatIfScenario]:
    return _validate(WhatIfScenario, raw)


def parse_planner_input(raw: Any) -> PlannerInput:
    return _parse(PlannerInput, raw, "planner input")


def parse_planner_options(raw: Any) -> PlannerOptions:
    return _parse(PlannerOptions, raw if raw is not None else {}, "planner options")


def parse_plan(raw: Any) -> Plan:
    return _parse(Plan, raw, "plan")


def parse_scenario(raw: Any) -> WhatIfScenario:
    return _parse(WhatIfScenario, raw, "what-if scenario")
