"""Shared fixtures.

The suite runs against a throwaway SQLite file and a fake language model;
the environment is set before any application module reads `core.config`.
"""
import os
import tempfile
from uuid import uuid4

_TMP_DIR = tempfile.mkdtemp(prefix="fitforge-tests-")
_DB_URL = "sqlite:///" + os.path.join(_TMP_DIR, "test.db")
os.environ["WRITE_DATABASE_URL"] = _DB_URL
os.environ["READ_DATABASE_URL"] = _DB_URL
os.environ["LOG_DIR"] = os.path.join(_TMP_DIR, "logs")
os.environ["PHOTO_STORAGE_DIR"] = os.path.join(_TMP_DIR, "photos")
os.environ["OPENAI_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient

from core.repository import save
from database import init_db, models
from database.database import WriteSessionLocal
from main import app
from schemas.plan_schema import FitnessPlan
from services.fitness_coach import FitnessCoachAI, get_fitness_coach
from services.plan_cache import PlanCache

DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def make_plan() -> FitnessPlan:
    """A minimal but complete 7-day plan, as the model would return it."""
    stretch = {
        "name": "Hamstring Stretch",
        "reps": "30 seconds",
        "instructions": "Hinge at the hips and reach for your toes.",
        "target_muscles": ["hamstrings"],
    }
    squat = {
        "name": "Goblet Squat",
        "sets": 3,
        "reps": "10-12",
        "rest_seconds": 60,
        "instructions": "Hold a dumbbell at chest height and squat to parallel.",
        "modifications": "Bodyweight squat to a box",
        "target_muscles": ["quads", "glutes"],
    }
    meals = [
        {"type": "breakfast", "name": "Greek Yogurt Bowl", "calories": 450, "protein": 30, "carbs": 50,
         "fat": 12, "prep_time_min": 5, "ingredients": ["greek yogurt", "berries", "oats"],
         "instructions": "Layer everything in a bowl."},
        {"type": "lunch", "name": "Chicken Rice Bowl", "calories": 650, "protein": 45, "carbs": 70,
         "fat": 18, "prep_time_min": 20, "ingredients": ["chicken breast", "rice", "broccoli"],
         "instructions": "Grill the chicken and serve over rice."},
        {"type": "dinner", "name": "Salmon and Potatoes", "calories": 700, "protein": 42, "carbs": 60,
         "fat": 28, "prep_time_min": 30, "ingredients": ["salmon", "potatoes", "asparagus"],
         "instructions": "Roast everything on one tray."},
    ]
    return FitnessPlan.model_validate({
        "user_summary": "30 year old male aiming to lose 5 kg.",
        "calorie_calculation": {"bmr": 1780, "tdee": 2759, "daily_target": 2459, "deficit_or_surplus": -300},
        "weekly_workouts": [
            {"day": day, "title": f"{day} Full Body", "duration_min": 45, "difficulty": "INTERMEDIATE",
             "warmup": [stretch], "exercises": [squat], "cooldown": [stretch], "estimated_calories": 320}
            for day in DAYS
        ],
        "meal_plan": [
            {"day": day, "meals": meals, "daily_calories": 1800,
             "daily_macros": {"protein": 117, "carbs": 180, "fat": 58}}
            for day in DAYS
        ],
        "grocery_list": {
            "produce": ["berries", "broccoli", "asparagus", "potatoes"],
            "proteins": ["chicken breast", "salmon"],
            "grains": ["rice", "oats"],
            "pantry": ["olive oil"],
            "dairy": ["greek yogurt"],
            "other": [],
        },
        "weekly_tips": ["Sleep 7-9 hours", "Drink water before meals", "Walk after dinner"],
        "check_in_questions": ["How was your energy?", "Any pain?", "Which meal did you enjoy most?"],
        "important_notes": "Stop any exercise that causes sharp pain.",
    })


class FakeLLM:
    """Stands in for `LLMClient`; records prompts and replays canned answers."""

    def __init__(self, plan=None, text="Great question! Keep your core braced.", error=None,
                 configured=True, reachable=True):
        self.plan = plan
        self.text = text
        self.error = error
        self.configured = configured
        self.reachable = reachable
        self.object_prompts = []
        self.text_prompts = []

    def generate_object(self, system, prompt, schema, temperature=None, max_tokens=None):
        self.object_prompts.append(prompt)
        if self.error:
            raise self.error
        return self.plan

    def generate_text(self, system, prompt, temperature=None, max_tokens=None):
        self.text_prompts.append(prompt)
        if self.error:
            raise self.error
        return self.text

    def ping(self):
        return self.reachable


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    """Initialize database before tests."""
    init_db()


@pytest.fixture
def db():
    session = WriteSessionLocal()
    try:
        yield session
    finally:
        session.close()


def _new_user(db):
    return save(db, models.User(email=f"user-{uuid4().hex[:10]}@example.com", name="Test User"))


@pytest.fixture
def user(db):
    return _new_user(db)


@pytest.fixture
def other_user(db):
    return _new_user(db)


@pytest.fixture
def auth(user):
    return {"X-User-Id": str(user.id)}


@pytest.fixture
def fake_llm():
    return FakeLLM(plan=make_plan())


@pytest.fixture
def coach(fake_llm):
    return FitnessCoachAI(llm=fake_llm, cache=PlanCache())


@pytest.fixture
def client(coach):
    app.dependency_overrides[get_fitness_coach] = lambda: coach
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def intake_payload():
    return {
        "age": 30,
        "sex": "MALE",
        "height_cm": 180,
        "weight_kg": 80,
        "goal_weight_kg": 75,
        "target_date": "2027-03-01",
        "activity_level": "MODERATE",
        "training_styles": ["STRENGTH", "HIIT"],
        "days_per_week": 4,
        "session_minutes": 45,
        "equipment": ["DUMBBELLS", "BENCH"],
        "fitness_level": "INTERMEDIATE",
        "injuries_limitations": None,
        "diet_preferences": ["NO_RESTRICTIONS"],
        "food_allergies": None,
        "cuisine_preferences": ["Mediterranean"],
        "foods_to_avoid": "liver",
        "primary_goal": "LOSE_WEIGHT",
        "motivation_style": "DATA_DRIVEN",
        "photo_permission": False,
        "medical_consent": True,
        "terms_accepted": True,
    }
