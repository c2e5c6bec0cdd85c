"""Tests for the current plan, today's workout, workout actions and meal logging."""
from datetime import date

import pytest

from core.exceptions import AIServiceError, NotFoundError
from database import models
from schemas.intake_schema import IntakeFormRequest
from schemas.plan_schema import WorkoutCompletionRequest
from services.plan_jobs import generate_plan, submit_intake
from api.plans import complete_workout


@pytest.fixture
def plan(db, user, coach, intake_payload):
    _, job = submit_intake(db, user, IntakeFormRequest(**intake_payload))
    return generate_plan(db, job.id, coach)


def test_current_plan_is_null_without_plan(client, auth):
    res = client.get("/api/plans/current", headers=auth)
    assert res.status_code == 200
    assert res.json() == {"success": True, "plan": None}


def test_current_plan_includes_workouts_meals_and_macros(client, auth, plan):
    body = client.get("/api/plans/current", headers=auth).json()["plan"]
    assert body["id"] == plan.id
    assert body["status"] == "ACTIVE"
    assert len(body["workouts"]) == 7
    assert len(body["meals"]) == 21
    assert body["target_macros"] == {"protein": 184, "carbs": 246, "fat": 82}
    assert body["plan_data"]["grocery_list"]["proteins"] == ["chicken breast", "salmon"]
    assert body["workouts"][0]["workout_data"]["exercises"][0]["name"] == "Goblet Squat"


def test_todays_workout(client, auth, plan):
    workout = client.get("/api/workouts/today", headers=auth).json()["workout"]
    assert workout["workout_date"] == date.today().isoformat()
    assert workout["plan_id"] == plan.id
    assert workout["status"] == "SCHEDULED"


def test_complete_workout(client, db, auth, plan):
    workout_id = plan.workouts[0].id
    res = client.post(
        f"/api/workouts/{workout_id}/complete",
        json={"actual_duration_min": 40, "calories_burned": 310, "user_rating": 4, "user_notes": "Felt strong"},
        headers=auth,
    )
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "Workout completed successfully!"}

    db.expire_all()
    workout = db.get(models.Workout, workout_id)
    assert workout.status == "COMPLETED"
    assert workout.actual_duration_min == 40
    assert workout.completed_at is not None


def test_complete_workout_validates_rating(client, auth, plan):
    res = client.post(
        f"/api/workouts/{plan.workouts[0].id}/complete",
        json={"actual_duration_min": 40, "user_rating": 6},
        headers=auth,
    )
    assert res.status_code == 422
    assert "user_rating" in res.json()["error"]


def test_other_users_workout_is_not_found(db, plan, other_user):
    with pytest.raises(NotFoundError) as exc_info:
        complete_workout(
            workout_id=plan.workouts[0].id,
            payload=WorkoutCompletionRequest(actual_duration_min=30, user_rating=3),
            user=other_user,
            db=db,
        )
    assert exc_info.value.status_code == 404
    assert "Workout" in exc_info.value.message


def test_modify_workout_returns_suggestions(client, db, auth, plan, fake_llm):
    fake_llm.text = "Swap lunges for glute bridges."
    workout_id = plan.workouts[0].id
    res = client.post(f"/api/workouts/{workout_id}/modify", json={"feedback": "My knee hurts on lunges"}, headers=auth)
    assert res.status_code == 200
    body = res.json()
    assert body["suggestions"] == "Swap lunges for glute bridges."
    assert body["user_notes"] == "Modified based on feedback: My knee hurts on lunges"

    prompt = fake_llm.text_prompts[-1]
    assert "My knee hurts on lunges" in prompt
    assert "DUMBBELLS" in prompt

    db.expire_all()
    assert db.get(models.Workout, workout_id).user_notes is None


def test_modify_workout_surfaces_ai_errors(client, auth, plan, fake_llm):
    fake_llm.error = AIServiceError("AI provider error: overloaded", operation="chat.completions")
    res = client.post(f"/api/workouts/{plan.workouts[0].id}/modify", json={"feedback": "Too hard"}, headers=auth)
    assert res.status_code == 502
    assert res.json()["error"] == "AI provider error: overloaded"


def test_log_meal(client, db, auth, plan):
    meal_id = plan.meals[0].id
    res = client.post(f"/api/meals/{meal_id}/log", json={"user_rating": 5, "actual_portions": 1.5}, headers=auth)
    assert res.status_code == 200

    db.expire_all()
    meal = db.get(models.Meal, meal_id)
    assert meal.status == "CONSUMED"
    assert meal.actual_portions == 1.5
    assert meal.consumed_at is not None


def test_log_meal_rejects_portion_out_of_range(client, auth, plan):
    res = client.post(f"/api/meals/{plan.meals[0].id}/log", json={"actual_portions": 5}, headers=auth)
    assert res.status_code == 422
