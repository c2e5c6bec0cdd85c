"""Plan generation job polling."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.repository import get_owned_or_404
from database import models
from database.deps import get_current_user, get_db_read
from schemas.job_schema import JobDetail, JobStatusResponse

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


def _iso(value):
    return value.isoformat() if value else None


def job_to_detail(job: models.PlanGenerationJob) -> JobDetail:
    return JobDetail(
        id=job.id,
        status=job.status,
        intake_form_id=job.intake_form_id,
        plan_id=job.result_plan_id,
        error_message=job.error_message,
        estimated_completion=_iso(job.estimated_completion),
        started_at=_iso(job.started_at),
        completed_at=_iso(job.completed_at),
        created_at=job.created_at.isoformat(),
    )


@router.get("/{job_id}", response_model=JobStatusResponse)
def check_plan_generation_status(
    job_id: int,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_read),
):
    """Return the current state of a job owned by the caller.

    Raises:
        NotFoundError: If the job does not exist or belongs to someone else.
    """
    job = get_owned_or_404(db, models.PlanGenerationJob, job_id, user.id, "PlanGenerationJob")
    return JobStatusResponse(job=job_to_detail(job))
