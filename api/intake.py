"""Intake API router.

Step-by-step validation for the wizard and the final submission, which
stores the form, opens a PENDING generation job and schedules the plan
generation as a background task.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, BackgroundTasks, Body, Depends
from sqlalchemy.orm import Session

from core.logger import get_logger
from database import models
from database.deps import get_current_user, get_db_write
from schemas.intake_schema import IntakeFormRequest, IntakeStepInfo, IntakeSubmitResponse, StepValidationResult
from services.fitness_coach import FitnessCoachAI, get_fitness_coach
from services.intake_validator import list_steps, validate_intake_step
from services.plan_jobs import run_plan_generation, submit_intake

logger = get_logger("api.intake")
router = APIRouter(prefix="/api/intake", tags=["intake"])


@router.get("/steps", response_model=List[IntakeStepInfo])
def get_steps():
    """Return the ordered wizard topics and the fields each one collects."""
    return list_steps()


@router.post("/steps/{step}/validate", response_model=StepValidationResult)
def validate_step(step: int, data: Dict[str, Any] = Body(...)):
    """Validate one wizard step; the client may only advance when `valid` is true.

    Raises:
        ValidationError: If the step number is unknown.
    """
    return validate_intake_step(step, data)


@router.post("", response_model=IntakeSubmitResponse, status_code=202)
def submit_intake_form(
    payload: IntakeFormRequest,
    background_tasks: BackgroundTasks,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_write),
    coach: FitnessCoachAI = Depends(get_fitness_coach),
):
    """Store the intake form and start plan generation.

    Consent is enforced by `IntakeFormRequest`, so a form without medical
    consent or accepted terms is rejected before anything is written.
    """
    logger.info("Starting intake form submission for user %s", user.id)
    intake, job = submit_intake(db, user, payload)
    background_tasks.add_task(run_plan_generation, job.id, coach)
    return IntakeSubmitResponse(
        job_id=job.id,
        intake_form_id=intake.id,
        message="Intake form submitted successfully. Generating your personalized plan...",
    )
