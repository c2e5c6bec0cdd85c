"""Schemas for plan generation job polling."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class JobStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class JobDetail(BaseModel):
    id: int
    status: JobStatus
    intake_form_id: int
    plan_id: Optional[int] = None
    error_message: Optional[str] = None
    estimated_completion: Optional[str] = None
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    created_at: str


class JobStatusResponse(BaseModel):
    success: bool = True
    job: JobDetail
