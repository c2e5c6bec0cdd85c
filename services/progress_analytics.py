"""Progress analytics computed from workout, meal and body-measurement history.

Rows are loaded into pandas frames so streaks, adherence and weight change
are simple vectorised expressions.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

import pandas as pd
from sqlalchemy.orm import Session

from core.logger import get_logger
from database import models
from schemas.progress_schema import UserAnalytics

logger = get_logger("services.progress_analytics")


def _workouts_frame(db: Session, user_id: int) -> pd.DataFrame:
    rows = db.query(
        models.Workout.plan_id,
        models.Workout.workout_date,
        models.Workout.status,
        models.Workout.user_rating,
        models.Workout.completed_at,
    ).filter(models.Workout.user_id == user_id).all()
    return pd.DataFrame([tuple(r) for r in rows], columns=["plan_id", "workout_date", "status", "user_rating", "completed_at"])


def _weights_frame(db: Session, user_id: int) -> pd.DataFrame:
    rows = db.query(models.ProgressEntry.entry_date, models.ProgressEntry.weight_kg).filter(
        models.ProgressEntry.user_id == user_id,
        models.ProgressEntry.weight_kg.isnot(None),
    ).all()
    df = pd.DataFrame([tuple(r) for r in rows], columns=["entry_date", "weight_kg"])
    return df.sort_values("entry_date")


def _completion_days(completed: pd.DataFrame) -> list:
    """Calendar day each completed workout was actually done.

    Rows without a `completed_at` stamp fall back to their scheduled date.
    """
    return [
        done.date() if not pd.isna(done) else scheduled
        for done, scheduled in zip(completed["completed_at"], completed["workout_date"])
    ]


def streak_days(completed_dates, today: date) -> int:
    """Count consecutive days with a completed workout ending today (or yesterday).

    A streak survives until the end of the day after the last workout, so a
    user who trained yesterday but not yet today still has it.
    """
    days = set(completed_dates)
    if not days:
        return 0
    cursor = today if today in days else today - timedelta(days=1)
    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def compute_analytics(db: Session, user_id: int, today: Optional[date] = None) -> UserAnalytics:
    """Summarise a user's training, logging and weight history."""
    today = today or date.today()
    workouts = _workouts_frame(db, user_id)
    completed = workouts[workouts["status"] == "COMPLETED"]

    meals_logged = db.query(models.Meal).filter(
        models.Meal.user_id == user_id, models.Meal.status == "CONSUMED"
    ).count()

    done_days = _completion_days(completed)
    streak = streak_days(done_days, today)

    adherence = None
    active_plan = db.query(models.Plan.id).filter(
        models.Plan.user_id == user_id, models.Plan.status == "ACTIVE"
    ).order_by(models.Plan.created_at.desc()).first()
    if active_plan is not None:
        due = workouts[(workouts["plan_id"] == active_plan.id) & (workouts["workout_date"] <= today)]
        if len(due):
            done = (due["status"] == "COMPLETED").sum()
            adherence = round(float(done) / len(due) * 100, 1)

    ratings = pd.to_numeric(completed["user_rating"], errors="coerce").dropna()
    average_rating = round(float(ratings.mean()), 2) if len(ratings) else None

    weights = _weights_frame(db, user_id)
    weight_change = None
    if len(weights) >= 2:
        weight_change = round(float(weights["weight_kg"].iloc[-1] - weights["weight_kg"].iloc[0]), 2)

    activity_dates = done_days + list(weights["entry_date"])
    last_active = max(activity_dates).isoformat() if activity_dates else None

    analytics = UserAnalytics(
        total_workouts_completed=int(len(completed)),
        total_meals_logged=int(meals_logged),
        streak_days=streak,
        weight_change_kg=weight_change,
        plan_adherence_percentage=adherence,
        average_workout_rating=average_rating,
        last_active_date=last_active,
    )
    logger.debug("Analytics for user %s: %s", user_id, analytics)
    return analytics


def completed_this_week(db: Session, user_id: int, today: Optional[date] = None) -> int:
    """Number of workouts completed since Monday of the current week."""
    today = today or date.today()
    monday = today - timedelta(days=today.weekday())
    workouts = _workouts_frame(db, user_id)
    done_days = _completion_days(workouts[workouts["status"] == "COMPLETED"])
    return sum(1 for day in done_days if monday <= day <= today)
