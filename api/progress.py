"""Progress API router: body measurements and derived analytics."""

import json

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.logger import get_logger
from core.repository import save
from database import models
from database.deps import get_current_user, get_db_read, get_db_write
from schemas.progress_schema import (
    AnalyticsResponse,
    ProgressEntryOut,
    ProgressEntryRequest,
    ProgressListResponse,
    ProgressSaveResponse,
)
from services.progress_analytics import compute_analytics

logger = get_logger("api.progress")
router = APIRouter(prefix="/api/progress", tags=["progress"])

MEASUREMENT_FIELDS = (
    "weight_kg",
    "body_fat_percentage",
    "muscle_mass_kg",
    "waist_circumference",
    "chest_circumference",
    "arm_circumference",
    "thigh_circumference",
    "notes",
    "mood_rating",
    "energy_level",
)


def entry_to_out(entry: models.ProgressEntry) -> ProgressEntryOut:
    values = {field: getattr(entry, field) for field in MEASUREMENT_FIELDS}
    return ProgressEntryOut(
        id=entry.id,
        entry_date=entry.entry_date.isoformat(),
        photo_urls=json.loads(entry.photo_urls) if entry.photo_urls else [],
        **values,
    )


@router.post("", response_model=ProgressSaveResponse)
def save_progress_entry(
    payload: ProgressEntryRequest,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_write),
):
    """Create or replace the caller's entry for `entry_date`."""
    entry = db.query(models.ProgressEntry).filter(
        models.ProgressEntry.user_id == user.id,
        models.ProgressEntry.entry_date == payload.entry_date,
    ).first()
    if entry is None:
        entry = models.ProgressEntry(user_id=user.id, entry_date=payload.entry_date)

    for field in MEASUREMENT_FIELDS:
        setattr(entry, field, getattr(payload, field))
    entry.photo_urls = json.dumps(payload.photo_urls) if payload.photo_urls else None

    save(db, entry)
    logger.info("Progress entry saved for user %s on %s", user.id, payload.entry_date)
    return ProgressSaveResponse(message="Progress saved successfully!", entry=entry_to_out(entry))


@router.get("", response_model=ProgressListResponse)
def get_progress_history(
    limit: int = Query(30, ge=1, le=365),
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_read),
):
    entries = db.query(models.ProgressEntry).filter(
        models.ProgressEntry.user_id == user.id
    ).order_by(models.ProgressEntry.entry_date.desc()).limit(limit).all()
    return ProgressListResponse(entries=[entry_to_out(e) for e in entries])


@router.get("/analytics", response_model=AnalyticsResponse)
def get_user_analytics(user: models.User = Depends(get_current_user), db: Session = Depends(get_db_read)):
    return AnalyticsResponse(analytics=compute_analytics(db, user.id))
