"""Plan, workout and meal API router.

Reads the caller's active plan and today's workout, and records workout
completions, modification requests and meal logs.
"""

import json
from datetime import date, datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.logger import get_logger
from core.repository import get_owned_or_404, save
from database import models
from database.deps import get_current_user, get_db_read, get_db_write
from schemas.plan_schema import (
    ActionResponse,
    CurrentPlanResponse,
    MealLogRequest,
    MealOut,
    PlanOut,
    TodaysWorkoutResponse,
    WorkoutCompletionRequest,
    WorkoutModifyRequest,
    WorkoutModifyResponse,
    WorkoutOut,
)
from services.fitness_coach import FitnessCoachAI, get_fitness_coach
from services.nutrition_calculator import nutrition_calculator

logger = get_logger("api.plans")
router = APIRouter(prefix="/api", tags=["plans"])


def _iso(value):
    return value.isoformat() if value else None


def workout_to_out(workout: models.Workout) -> WorkoutOut:
    return WorkoutOut(
        id=workout.id,
        plan_id=workout.plan_id,
        workout_date=workout.workout_date.isoformat(),
        title=workout.title,
        duration_min=workout.duration_min,
        difficulty_level=workout.difficulty_level,
        status=workout.status,
        estimated_calories_burned=workout.estimated_calories_burned,
        actual_duration_min=workout.actual_duration_min,
        calories_burned=workout.calories_burned,
        user_rating=workout.user_rating,
        user_notes=workout.user_notes,
        completed_at=_iso(workout.completed_at),
        workout_data=json.loads(workout.workout_data),
    )


def meal_to_out(meal: models.Meal) -> MealOut:
    return MealOut(
        id=meal.id,
        plan_id=meal.plan_id,
        meal_date=meal.meal_date.isoformat(),
        meal_type=meal.meal_type,
        name=meal.name,
        calories=meal.calories,
        macros=json.loads(meal.macros),
        ingredients=json.loads(meal.ingredients),
        prep_time_min=meal.prep_time_min,
        recipe_instructions=meal.recipe_instructions,
        status=meal.status,
        user_rating=meal.user_rating,
        user_notes=meal.user_notes,
        consumed_at=_iso(meal.consumed_at),
    )


def plan_to_out(db: Session, plan: models.Plan) -> PlanOut:
    intake = db.get(models.IntakeForm, plan.intake_form_id)
    diet_preferences = intake.to_dict()["diet_preferences"] if intake else []
    return PlanOut(
        id=plan.id,
        intake_form_id=plan.intake_form_id,
        plan_type=plan.plan_type,
        status=plan.status,
        start_date=plan.start_date.isoformat(),
        end_date=plan.end_date.isoformat(),
        daily_calorie_target=plan.daily_calorie_target,
        calorie_calculation=plan.calorie_json,
        target_macros=nutrition_calculator.calculate_macros(plan.daily_calorie_target, diet_preferences),
        llm_response_cached=plan.llm_response_cached,
        plan_data=plan.plan_json,
        workouts=[workout_to_out(w) for w in plan.workouts],
        meals=[meal_to_out(m) for m in plan.meals],
        created_at=plan.created_at.isoformat(),
    )


@router.get("/plans/current", response_model=CurrentPlanResponse)
def get_current_plan(user: models.User = Depends(get_current_user), db: Session = Depends(get_db_read)):
    """Return the most recent ACTIVE plan with its workouts and meals, or `plan: null`."""
    plan = db.query(models.Plan).filter(
        models.Plan.user_id == user.id, models.Plan.status == "ACTIVE"
    ).order_by(models.Plan.created_at.desc(), models.Plan.id.desc()).first()
    if plan is None:
        return CurrentPlanResponse(plan=None)
    return CurrentPlanResponse(plan=plan_to_out(db, plan))


@router.get("/workouts/today", response_model=TodaysWorkoutResponse)
def get_todays_workout(user: models.User = Depends(get_current_user), db: Session = Depends(get_db_read)):
    workout = db.query(models.Workout).join(models.Plan, models.Plan.id == models.Workout.plan_id).filter(
        models.Workout.user_id == user.id,
        models.Workout.workout_date == date.today(),
        models.Plan.status == "ACTIVE",
    ).order_by(models.Workout.id.desc()).first()
    return TodaysWorkoutResponse(workout=workout_to_out(workout) if workout else None)


@router.post("/workouts/{workout_id}/complete", response_model=ActionResponse)
def complete_workout(
    workout_id: int,
    payload: WorkoutCompletionRequest,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_write),
):
    """Mark a workout COMPLETED with the user's actuals.

    Raises:
        NotFoundError: If the workout does not exist or belongs to someone else.
    """
    workout = get_owned_or_404(db, models.Workout, workout_id, user.id, "Workout")
    workout.status = "COMPLETED"
    workout.actual_duration_min = payload.actual_duration_min
    workout.calories_burned = payload.calories_burned
    workout.user_rating = payload.user_rating
    workout.user_notes = payload.user_notes
    workout.completed_at = datetime.utcnow()
    save(db, workout)
    logger.info("Workout %s completed by user %s", workout.id, user.id)
    return ActionResponse(message="Workout completed successfully!")


@router.post("/workouts/{workout_id}/modify", response_model=WorkoutModifyResponse)
def modify_workout(
    workout_id: int,
    payload: WorkoutModifyRequest,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_read),
    coach: FitnessCoachAI = Depends(get_fitness_coach),
):
    """Ask the coach how to adapt a workout. The stored workout is left unchanged.

    Raises:
        NotFoundError: If the workout does not exist or belongs to someone else.
        AIServiceError: If the model call fails.
    """
    workout = get_owned_or_404(db, models.Workout, workout_id, user.id, "Workout")
    equipment = payload.available_equipment
    if equipment is None:
        intake = db.query(models.IntakeForm).join(
            models.Plan, models.Plan.intake_form_id == models.IntakeForm.id
        ).filter(models.Plan.id == workout.plan_id).first()
        equipment = intake.to_dict()["equipment"] if intake else []

    suggestions = coach.modify_workout(json.loads(workout.workout_data), payload.feedback, equipment)
    logger.info("Workout %s modification suggested for user %s", workout.id, user.id)
    return WorkoutModifyResponse(
        workout_id=workout.id,
        suggestions=suggestions,
        user_notes=f"Modified based on feedback: {payload.feedback}",
    )


@router.post("/meals/{meal_id}/log", response_model=ActionResponse)
def log_meal(
    meal_id: int,
    payload: MealLogRequest,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_write),
):
    """Mark a planned meal CONSUMED.

    Raises:
        NotFoundError: If the meal does not exist or belongs to someone else.
    """
    meal = get_owned_or_404(db, models.Meal, meal_id, user.id, "Meal")
    meal.status = "CONSUMED"
    meal.user_rating = payload.user_rating
    meal.user_notes = payload.user_notes
    meal.actual_portions = payload.actual_portions
    meal.consumed_at = datetime.utcnow()
    save(db, meal)
    return ActionResponse(message="Meal logged successfully!")
