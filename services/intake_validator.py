"""Per-step validation for the intake wizard."""

from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError

from core.exceptions import ValidationError
from schemas.intake_schema import INTAKE_STEPS, IntakeStepInfo, StepValidationResult


def list_steps():
    return [
        IntakeStepInfo(step=i, key=key, title=title, fields=list(schema.model_fields))
        for i, (key, title, schema) in enumerate(INTAKE_STEPS)
    ]


def validate_intake_step(step: int, data: Dict[str, Any]) -> StepValidationResult:
    """Validate the fields of one wizard step.

    Only the step's own fields are checked; anything else in `data` is
    ignored, so the client can send the whole partial form each time.

    Raises:
        ValidationError: If `step` is not a known step number.
    """
    if step < 0 or step >= len(INTAKE_STEPS):
        raise ValidationError(f"Invalid step number: {step}", field="step")

    schema = INTAKE_STEPS[step][2]
    try:
        schema.model_validate(data)
    except PydanticValidationError as exc:
        errors = {}
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else "__root__"
            # first message per field, as the wizard shows one line per input
            errors.setdefault(field, error["msg"])
        return StepValidationResult(valid=False, step=step, errors=errors)

    next_step = step + 1 if step + 1 < len(INTAKE_STEPS) else None
    return StepValidationResult(valid=True, step=step, next_step=next_step)
