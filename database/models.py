"""SQLAlchemy ORM models for the coaching service.

Tables mirror the hosted schema: users, intake_forms, plan_generation_jobs,
plans, workouts, meals, progress_entries, chat_history and message_feedback.
List and object fields are stored as JSON-encoded text. Models stay
behavior-free apart from small JSON accessors.
"""

import json
from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _loads(value, default):
    if not value:
        return default
    return json.loads(value)


class User(Base):
    """Application user profile. Identity itself lives with the auth provider."""

    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    timezone = Column(String, nullable=False, default="UTC")
    created_at = Column(DateTime, default=datetime.utcnow)


class IntakeForm(Base):
    """One questionnaire submission. Written once, never updated."""

    __tablename__ = "intake_forms"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    age = Column(Integer, nullable=False)
    sex = Column(String, nullable=False)
    height_cm = Column(Float, nullable=False)
    weight_kg = Column(Float, nullable=False)
    goal_weight_kg = Column(Float, nullable=True)
    target_date = Column(String, nullable=True)

    activity_level = Column(String, nullable=False)
    training_styles = Column(Text, nullable=False)
    days_per_week = Column(Integer, nullable=False)
    session_minutes = Column(Integer, nullable=False)
    equipment = Column(Text, nullable=False)
    fitness_level = Column(String, nullable=False)

    injuries_limitations = Column(Text, nullable=True)
    diet_preferences = Column(Text, nullable=False)
    food_allergies = Column(Text, nullable=True)
    cuisine_preferences = Column(Text, nullable=True)
    foods_to_avoid = Column(Text, nullable=True)

    primary_goal = Column(String, nullable=False)
    motivation_style = Column(String, nullable=False)

    photo_permission = Column(Boolean, nullable=False, default=False)
    medical_consent = Column(Boolean, nullable=False)
    terms_accepted = Column(Boolean, nullable=False)

    calculated_bmr = Column(Float, nullable=True)
    calculated_tdee = Column(Float, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self) -> dict:
        """Return the intake as plain values with list fields decoded."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "age": self.age,
            "sex": self.sex,
            "height_cm": self.height_cm,
            "weight_kg": self.weight_kg,
            "goal_weight_kg": self.goal_weight_kg,
            "target_date": self.target_date,
            "activity_level": self.activity_level,
            "training_styles": _loads(self.training_styles, []),
            "days_per_week": self.days_per_week,
            "session_minutes": self.session_minutes,
            "equipment": _loads(self.equipment, []),
            "fitness_level": self.fitness_level,
            "injuries_limitations": self.injuries_limitations,
            "diet_preferences": _loads(self.diet_preferences, []),
            "food_allergies": self.food_allergies,
            "cuisine_preferences": _loads(self.cuisine_preferences, None),
            "foods_to_avoid": self.foods_to_avoid,
            "primary_goal": self.primary_goal,
            "motivation_style": self.motivation_style,
            "photo_permission": self.photo_permission,
            "medical_consent": self.medical_consent,
            "terms_accepted": self.terms_accepted,
        }


class PlanGenerationJob(Base):
    """Tracked unit of work turning an intake form into a plan.

    status: PENDING -> IN_PROGRESS -> COMPLETED | FAILED
    """

    __tablename__ = "plan_generation_jobs"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    intake_form_id = Column(Integer, ForeignKey("intake_forms.id"), nullable=False)
    status = Column(String, nullable=False, default="PENDING")
    error_message = Column(Text, nullable=True)
    result_plan_id = Column(Integer, ForeignKey("plans.id"), nullable=True)
    estimated_completion = Column(DateTime, nullable=True)
    started_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    intake_form = relationship("IntakeForm")


class Plan(Base):
    """Generated weekly plan. Replaced as a whole, never partially updated."""

    __tablename__ = "plans"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    intake_form_id = Column(Integer, ForeignKey("intake_forms.id"), nullable=False)
    plan_type = Column(String, nullable=False, default="WEEKLY")
    status = Column(String, nullable=False, default="ACTIVE")
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    daily_calorie_target = Column(Float, nullable=False)
    calorie_calculation = Column(Text, nullable=False)
    plan_data = Column(Text, nullable=False)
    generation_prompt_hash = Column(String, nullable=True)
    llm_response_cached = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    workouts = relationship("Workout", order_by="Workout.workout_date")
    meals = relationship("Meal", order_by="Meal.meal_date")

    @property
    def plan_json(self) -> dict:
        return _loads(self.plan_data, {})

    @property
    def calorie_json(self) -> dict:
        return _loads(self.calorie_calculation, {})


class Workout(Base):
    """One scheduled workout, copied out of the plan JSON at creation time."""

    __tablename__ = "workouts"
    id = Column(Integer, primary_key=True, index=True)
    plan_id = Column(Integer, ForeignKey("plans.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    workout_date = Column(Date, nullable=False)
    title = Column(String, nullable=False)
    duration_min = Column(Integer, nullable=False)
    difficulty_level = Column(String, nullable=False)
    workout_data = Column(Text, nullable=False)
    status = Column(String, nullable=False, default="SCHEDULED")
    estimated_calories_burned = Column(Float, nullable=True)
    actual_duration_min = Column(Integer, nullable=True)
    calories_burned = Column(Float, nullable=True)
    user_rating = Column(Integer, nullable=True)
    user_notes = Column(Text, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class Meal(Base):
    """One planned meal, copied out of the plan JSON at creation time."""

    __tablename__ = "meals"
    id = Column(Integer, primary_key=True, index=True)
    plan_id = Column(Integer, ForeignKey("plans.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    meal_date = Column(Date, nullable=False)
    meal_type = Column(String, nullable=False)
    name = Column(String, nullable=False)
    calories = Column(Float, nullable=False)
    macros = Column(Text, nullable=False)
    ingredients = Column(Text, nullable=False)
    prep_time_min = Column(Integer, nullable=True)
    recipe_instructions = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="PLANNED")
    user_rating = Column(Integer, nullable=True)
    user_notes = Column(Text, nullable=True)
    actual_portions = Column(Float, nullable=True)
    consumed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class ProgressEntry(Base):
    """Body measurements for one user on one calendar date."""

    __tablename__ = "progress_entries"
    __table_args__ = (UniqueConstraint("user_id", "entry_date", name="uq_progress_user_date"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    entry_date = Column(Date, nullable=False)
    weight_kg = Column(Float, nullable=True)
    body_fat_percentage = Column(Float, nullable=True)
    muscle_mass_kg = Column(Float, nullable=True)
    waist_circumference = Column(Float, nullable=True)
    chest_circumference = Column(Float, nullable=True)
    arm_circumference = Column(Float, nullable=True)
    thigh_circumference = Column(Float, nullable=True)
    photo_urls = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    mood_rating = Column(Integer, nullable=True)
    energy_level = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class ChatMessage(Base):
    """Append-only coach conversation log."""

    __tablename__ = "chat_history"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    message_type = Column(String, nullable=False)  # USER | ASSISTANT
    message_content = Column(Text, nullable=False)
    context_data = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class MessageFeedback(Base):
    """Thumbs up/down left by a user on an assistant reply."""

    __tablename__ = "message_feedback"
    id = Column(Integer, primary_key=True, index=True)
    message_id = Column(Integer, ForeignKey("chat_history.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    feedback_type = Column(String, nullable=False)  # positive | negative
    feedback_text = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
