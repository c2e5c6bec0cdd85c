"""Schemas for body-progress entries and derived analytics."""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


class ProgressEntryRequest(BaseModel):
    """Measurements for one day. Re-posting the same date replaces the entry."""

    entry_date: date = Field(..., examples=["2026-10-19"])
    weight_kg: Optional[float] = Field(None, ge=30, le=300)
    body_fat_percentage: Optional[float] = Field(None, ge=0, le=50)
    muscle_mass_kg: Optional[float] = Field(None, ge=10, le=100)
    waist_circumference: Optional[float] = Field(None, ge=50, le=200)
    chest_circumference: Optional[float] = Field(None, ge=60, le=200)
    arm_circumference: Optional[float] = Field(None, ge=15, le=60)
    thigh_circumference: Optional[float] = Field(None, ge=30, le=100)
    photo_urls: Optional[List[str]] = None
    notes: Optional[str] = None
    mood_rating: Optional[int] = Field(None, ge=1, le=5)
    energy_level: Optional[int] = Field(None, ge=1, le=5)


class ProgressEntryOut(ProgressEntryRequest):
    id: int
    entry_date: str
    photo_urls: List[str] = []


class ProgressSaveResponse(BaseModel):
    success: bool = True
    message: str
    entry: ProgressEntryOut


class ProgressListResponse(BaseModel):
    success: bool = True
    entries: List[ProgressEntryOut]


class UserAnalytics(BaseModel):
    total_workouts_completed: int
    total_meals_logged: int
    streak_days: int
    weight_change_kg: Optional[float] = None
    plan_adherence_percentage: Optional[float] = None
    average_workout_rating: Optional[float] = None
    last_active_date: Optional[str] = None


class AnalyticsResponse(BaseModel):
    success: bool = True
    analytics: UserAnalytics
