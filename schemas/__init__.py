"""Pydantic schema package for request and response models."""

from .intake_schema import IntakeFormRequest, IntakeSubmitResponse
from .job_schema import JobStatus, JobStatusResponse
from .plan_schema import FitnessPlan, CurrentPlanResponse
from .user_schema import UserCreateRequest, UserResponse

__all__ = [
    "IntakeFormRequest",
    "IntakeSubmitResponse",
    "JobStatus",
    "JobStatusResponse",
    "FitnessPlan",
    "CurrentPlanResponse",
    "UserCreateRequest",
    "UserResponse",
]
