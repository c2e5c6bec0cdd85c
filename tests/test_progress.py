"""Tests for progress entries and analytics."""
from datetime import date, datetime, time, timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from core.repository import save
from database import models
from schemas.intake_schema import IntakeFormRequest
from services.plan_jobs import generate_plan, submit_intake
from services.progress_analytics import compute_analytics, completed_this_week, streak_days


def test_progress_upsert_replaces_same_day(client, db, user, auth):
    day = "2026-10-01"
    first = client.post("/api/progress", json={"entry_date": day, "weight_kg": 80.5, "mood_rating": 3}, headers=auth)
    assert first.status_code == 200
    second = client.post(
        "/api/progress",
        json={"entry_date": day, "weight_kg": 80.1, "photo_urls": ["https://cdn.example.com/p/1.jpg"]},
        headers=auth,
    )
    assert second.json()["entry"]["id"] == first.json()["entry"]["id"]
    assert second.json()["entry"]["photo_urls"] == ["https://cdn.example.com/p/1.jpg"]

    db.expire_all()
    rows = db.query(models.ProgressEntry).filter(models.ProgressEntry.user_id == user.id).all()
    assert len(rows) == 1
    assert rows[0].weight_kg == 80.1
    assert rows[0].mood_rating is None


def test_store_rejects_duplicate_day(db, user):
    save(db, models.ProgressEntry(user_id=user.id, entry_date=date(2026, 9, 1), weight_kg=70))
    with pytest.raises(IntegrityError):
        save(db, models.ProgressEntry(user_id=user.id, entry_date=date(2026, 9, 1), weight_kg=71))
    db.rollback()


def test_progress_validates_ranges(client, auth):
    res = client.post("/api/progress", json={"entry_date": "2026-10-02", "weight_kg": 10}, headers=auth)
    assert res.status_code == 422
    assert res.json()["success"] is False


def test_progress_history_newest_first(client, auth):
    for day in ("2026-10-03", "2026-10-05", "2026-10-04"):
        client.post("/api/progress", json={"entry_date": day, "weight_kg": 79}, headers=auth)
    entries = client.get("/api/progress?limit=2", headers=auth).json()["entries"]
    assert [e["entry_date"] for e in entries] == ["2026-10-05", "2026-10-04"]


def test_streak_counts_back_from_today_or_yesterday():
    today = date(2026, 10, 19)
    run = [today - timedelta(days=i) for i in range(3)]
    assert streak_days(run, today) == 3
    assert streak_days([d - timedelta(days=1) for d in run], today) == 3
    assert streak_days([today - timedelta(days=2)], today) == 0
    assert streak_days([], today) == 0


def test_analytics_without_history(db, user):
    analytics = compute_analytics(db, user.id)
    assert analytics.total_workouts_completed == 0
    assert analytics.streak_days == 0
    assert analytics.weight_change_kg is None
    assert analytics.plan_adherence_percentage is None
    assert analytics.last_active_date is None


def test_analytics_from_plan_and_measurements(db, user, coach, intake_payload):
    _, job = submit_intake(db, user, IntakeFormRequest(**intake_payload))
    plan = generate_plan(db, job.id, coach)
    start = plan.start_date

    for workout, rating in zip(plan.workouts[:2], (4, 5)):
        workout.status = "COMPLETED"
        workout.user_rating = rating
        workout.completed_at = datetime.combine(workout.workout_date, time(7, 30))
    plan.meals[0].status = "CONSUMED"
    db.commit()

    save(db, models.ProgressEntry(user_id=user.id, entry_date=start - timedelta(days=7), weight_kg=80))
    save(db, models.ProgressEntry(user_id=user.id, entry_date=start, weight_kg=79.2))

    analytics = compute_analytics(db, user.id, today=start + timedelta(days=1))
    assert analytics.total_workouts_completed == 2
    assert analytics.total_meals_logged == 1
    assert analytics.streak_days == 2
    assert analytics.weight_change_kg == pytest.approx(-0.8)
    assert analytics.plan_adherence_percentage == 100.0
    assert analytics.average_workout_rating == 4.5
    assert analytics.last_active_date == (start + timedelta(days=1)).isoformat()

    # Third day scheduled but not done.
    later = compute_analytics(db, user.id, today=start + timedelta(days=2))
    assert later.plan_adherence_percentage == pytest.approx(66.7)

    assert completed_this_week(db, user.id, today=start + timedelta(days=1)) == (
        2 if (start + timedelta(days=1)).weekday() >= 1 else 1
    )


def test_early_completion_counts_on_the_day_it_was_done(db, user, coach, intake_payload):
    _, job = submit_intake(db, user, IntakeFormRequest(**intake_payload))
    plan = generate_plan(db, job.id, coach)
    start = plan.start_date

    # Fourth day's session done on the first day.
    workout = plan.workouts[3]
    workout.status = "COMPLETED"
    workout.completed_at = datetime.combine(start, time(18, 0))
    db.commit()

    analytics = compute_analytics(db, user.id, today=start)
    assert analytics.last_active_date == start.isoformat()
    assert analytics.streak_days == 1
    assert completed_this_week(db, user.id, today=start) == 1


def test_analytics_endpoint(client, auth):
    res = client.get("/api/progress/analytics", headers=auth)
    assert res.status_code == 200
    assert res.json()["analytics"]["total_workouts_completed"] == 0
