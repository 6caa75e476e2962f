"""
Job Routes

GET /jobs - List all jobs, active first (token optional, adds hasApplied)
GET /jobs/active - Same listing, kept for older clients
GET /jobs/hr/my-jobs - Jobs posted by the caller (HR only)
POST /jobs - Create job posting (HR only)
PATCH /jobs/{job_id}/expire - Mark own job as expired (HR only), emits "job-expired"
POST /jobs/{job_id}/apply - Apply to an active job (USER only), emits "new-application"
"""

import logging
from fastapi import APIRouter, Depends
from typing import Optional

from app.core.auth import Principal, get_current_hr, get_current_job_seeker, get_optional_user
from app.core.errors import AuthorizationError, BusinessRuleError, DuplicateApplicationError, NotFoundError
from app.realtime.notifier import JobEventNotifier, get_notifier
from app.services import application_service, job_service
from app.schemas.schemas import (
    JobCreate, JobEnvelope, JobListResponse, JobResponse, PublicJobListResponse,
    ApplyResponse, ApplicationResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.get("", response_model=PublicJobListResponse)
@router.get("/active", response_model=PublicJobListResponse, include_in_schema=False)
async def list_jobs(user: Optional[Principal] = Depends(get_optional_user)):
    """List active and expired jobs. With a token, each job says whether the caller applied."""
    records = job_service.list_jobs(user_id=user.id if user else None)
    jobs = [JobResponse.model_validate(r) for r in records]
    active = sum(1 for r in records if r.is_active)

    return PublicJobListResponse(
        message="Jobs retrieved successfully",
        data=jobs,
        count=len(jobs),
        active_count=active,
        expired_count=len(jobs) - active,
    )


@router.get("/hr/my-jobs", response_model=JobListResponse)
async def get_hr_jobs(hr: Principal = Depends(get_current_hr)):
    """Jobs posted by this HR user, with application counts."""
    jobs = [JobResponse.model_validate(r) for r in job_service.find_jobs_by_hr(hr.id)]
    return JobListResponse(message="Jobs retrieved successfully", data=jobs, count=len(jobs))


@router.post("", response_model=JobEnvelope, status_code=201)
async def create_job(job: JobCreate, hr: Principal = Depends(get_current_hr)):
    """Create a new job posting. Only HR users can create jobs."""
    record = job_service.create_job(job.title, job.description, job.salary, job.location, posted_by=hr.id)
    logger.info("HR %s created job %s", hr.id, record.id)
    return JobEnvelope(message="Job created successfully", data=JobResponse.model_validate(record))


@router.patch("/{job_id}/expire", response_model=JobEnvelope)
async def expire_job(
    job_id: int,
    hr: Principal = Depends(get_current_hr),
    notifier: JobEventNotifier = Depends(get_notifier),
):
    """
    Mark a job as expired. Only the HR user who posted it may do this.

    Expiring an already-expired job succeeds again but does not repeat
    the notification.
    """
    job = job_service.find_job_by_id(job_id)
    if job is None:
        raise NotFoundError("Job not found")
    if job.posted_by != hr.id:
        raise AuthorizationError("You can only expire your own jobs")

    updated, changed = job_service.expire_job(job_id)
    response = JobEnvelope(message="Job marked as expired", data=JobResponse.model_validate(updated))

    if changed:
        notifier.on_job_expired(updated)
    return response


@router.post("/{job_id}/apply", response_model=ApplyResponse, status_code=201)
async def apply_to_job(
    job_id: int,
    user: Principal = Depends(get_current_job_seeker),
    notifier: JobEventNotifier = Depends(get_notifier),
):
    """Apply to a job. USER role only. Cannot apply twice to the same job."""
    job = job_service.find_job_by_id(job_id)
    if job is None:
        raise NotFoundError("Job not found")
    if not job.is_active:
        raise BusinessRuleError("Cannot apply to an expired job")

    # Early answer only; create_application enforces uniqueness
    if application_service.has_applied(job_id, user.id):
        raise DuplicateApplicationError()

    application = application_service.create_application(job_id, user.id)
    response = ApplyResponse(
        message="Application submitted successfully",
        data=ApplicationResponse.model_validate(application),
    )

    notifier.on_application_created(application, job)
    return response
