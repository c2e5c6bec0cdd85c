"""Plan generation jobs: intake submission, state machine and plan persistence.

A job moves PENDING -> IN_PROGRESS -> COMPLETED | FAILED and never back.
The plan, its workout and meal rows and the archiving of the previous active
plan are written in a single transaction, so a failed generation leaves no
partial plan behind.
"""

import json
from datetime import date, datetime, timedelta
from typing import Tuple

from sqlalchemy.orm import Session

from core import config
from core.exceptions import InvalidJobTransitionError, NotFoundError
from core.logger import get_logger
from core.repository import unit_of_work
from database import models
from database.database import WriteSessionLocal
from schemas.intake_schema import IntakeFormRequest
from schemas.job_schema import JobStatus
from services.fitness_coach import FitnessCoachAI, PlanResult
from services.nutrition_calculator import nutrition_calculator

logger = get_logger("services.plan_jobs")

ALLOWED_TRANSITIONS = {
    JobStatus.PENDING: {JobStatus.IN_PROGRESS},
    JobStatus.IN_PROGRESS: {JobStatus.COMPLETED, JobStatus.FAILED},
    JobStatus.COMPLETED: set(),
    JobStatus.FAILED: set(),
}


def transition_job(job: models.PlanGenerationJob, new_status: JobStatus) -> models.PlanGenerationJob:
    """Move `job` to `new_status`, stamping started/completed times.

    Does not commit.

    Raises:
        InvalidJobTransitionError: If `new_status` is not a successor of the current state.
    """
    current = JobStatus(job.status)
    new_status = JobStatus(new_status)
    if new_status not in ALLOWED_TRANSITIONS[current]:
        raise InvalidJobTransitionError(job.id, current.value, new_status.value)
    job.status = new_status.value
    now = datetime.utcnow()
    if new_status == JobStatus.IN_PROGRESS:
        job.started_at = now
    else:
        job.completed_at = now
    return job


def submit_intake(db: Session, user: models.User, payload: IntakeFormRequest) -> Tuple[models.IntakeForm, models.PlanGenerationJob]:
    """Persist a validated intake form and its PENDING generation job.

    Both rows commit together; if either insert fails neither is kept.
    """
    targets = nutrition_calculator.calculate_targets(payload)
    data = payload.model_dump(mode="json")
    intake = models.IntakeForm(
        user_id=user.id,
        age=data["age"],
        sex=data["sex"],
        height_cm=data["height_cm"],
        weight_kg=data["weight_kg"],
        goal_weight_kg=data["goal_weight_kg"],
        target_date=data["target_date"],
        activity_level=data["activity_level"],
        training_styles=json.dumps(data["training_styles"]),
        days_per_week=data["days_per_week"],
        session_minutes=data["session_minutes"],
        equipment=json.dumps(data["equipment"]),
        fitness_level=data["fitness_level"],
        injuries_limitations=data["injuries_limitations"],
        diet_preferences=json.dumps(data["diet_preferences"]),
        food_allergies=data["food_allergies"],
        cuisine_preferences=json.dumps(data["cuisine_preferences"]) if data["cuisine_preferences"] is not None else None,
        foods_to_avoid=data["foods_to_avoid"],
        primary_goal=data["primary_goal"],
        motivation_style=data["motivation_style"],
        photo_permission=data["photo_permission"],
        medical_consent=data["medical_consent"],
        terms_accepted=data["terms_accepted"],
        calculated_bmr=targets.bmr,
        calculated_tdee=targets.tdee,
    )
    job = models.PlanGenerationJob(
        user_id=user.id,
        status=JobStatus.PENDING.value,
        estimated_completion=datetime.utcnow() + timedelta(seconds=config.JOB_ESTIMATED_COMPLETION_SECONDS),
    )
    with unit_of_work(db) as tx:
        tx.add(intake)
        tx.flush()
        job.intake_form_id = intake.id
        tx.add(job)
    db.refresh(intake)
    db.refresh(job)
    logger.info("Intake form %s submitted by user %s (job %s)", intake.id, user.id, job.id)
    return intake, job


def _plan_rows(job: models.PlanGenerationJob, result: PlanResult, start: date):
    plan_data = result.plan.model_dump(mode="json")
    targets = result.targets
    plan = models.Plan(
        user_id=job.user_id,
        intake_form_id=job.intake_form_id,
        plan_type="WEEKLY",
        status="ACTIVE",
        start_date=start,
        end_date=start + timedelta(days=7),
        daily_calorie_target=targets.daily_target,
        calorie_calculation=json.dumps(targets.to_dict()),
        plan_data=json.dumps(plan_data),
        generation_prompt_hash=result.cache_key,
        llm_response_cached=result.cached,
    )

    workouts = []
    for i, workout in enumerate(plan_data["weekly_workouts"]):
        workouts.append(models.Workout(
            user_id=job.user_id,
            workout_date=start + timedelta(days=i),
            title=workout["title"],
            duration_min=workout["duration_min"],
            difficulty_level=workout["difficulty"],
            workout_data=json.dumps(workout),
            status="SCHEDULED",
            estimated_calories_burned=workout["estimated_calories"],
        ))

    meals = []
    for i, day in enumerate(plan_data["meal_plan"]):
        for meal in day["meals"]:
            meals.append(models.Meal(
                user_id=job.user_id,
                meal_date=start + timedelta(days=i),
                meal_type=meal["type"].upper(),
                name=meal["name"],
                calories=meal["calories"],
                macros=json.dumps({"protein": meal["protein"], "carbs": meal["carbs"], "fat": meal["fat"]}),
                ingredients=json.dumps(meal["ingredients"]),
                prep_time_min=meal["prep_time_min"],
                recipe_instructions=meal["instructions"],
                status="PLANNED",
            ))
    return plan, workouts, meals


def persist_plan(db: Session, job: models.PlanGenerationJob, result: PlanResult, start: date = None) -> models.Plan:
    """Write the plan with its workout and meal rows and complete the job atomically."""
    start = start or date.today()
    plan, workouts, meals = _plan_rows(job, result, start)
    with unit_of_work(db) as tx:
        tx.query(models.Plan).filter(
            models.Plan.user_id == job.user_id, models.Plan.status == "ACTIVE"
        ).update({"status": "ARCHIVED"}, synchronize_session=False)
        tx.add(plan)
        tx.flush()
        for row in workouts + meals:
            row.plan_id = plan.id
        tx.add_all(workouts + meals)
        tx.flush()
        transition_job(job, JobStatus.COMPLETED)
        job.result_plan_id = plan.id
    db.refresh(plan)
    return plan


def _fail_job(db: Session, job_id: int, error: Exception) -> None:
    job = db.get(models.PlanGenerationJob, job_id)
    if job is None:
        return
    transition_job(job, JobStatus.FAILED)
    job.error_message = getattr(error, "message", None) or str(error) or type(error).__name__
    db.commit()


def generate_plan(db: Session, job_id: int, coach: FitnessCoachAI) -> models.Plan:
    """Run a PENDING job to completion.

    On any error after the job has started, the pending writes are rolled
    back, the job is marked FAILED with the error text and the error is
    re-raised.

    Raises:
        NotFoundError: If the job does not exist.
        InvalidJobTransitionError: If the job is not PENDING.
    """
    job = db.get(models.PlanGenerationJob, job_id)
    if job is None:
        raise NotFoundError("PlanGenerationJob", job_id)

    transition_job(job, JobStatus.IN_PROGRESS)
    db.commit()

    try:
        intake = IntakeFormRequest(**job.intake_form.to_dict())
        result = coach.generate_weekly_plan(intake)
        plan = persist_plan(db, job, result)
    except Exception as exc:
        logger.error("Plan generation failed for job %s: %s", job_id, exc)
        db.rollback()
        _fail_job(db, job_id, exc)
        raise

    logger.info("Job %s completed with plan %s (cached=%s)", job_id, plan.id, result.cached)
    return plan


def run_plan_generation(job_id: int, coach: FitnessCoachAI) -> None:
    """Background-task entry point: own a session and never raise into the server."""
    db = WriteSessionLocal()
    try:
        generate_plan(db, job_id, coach)
    except Exception:
        logger.exception("Background plan generation failed for job %s", job_id)
    finally:
        db.close()
