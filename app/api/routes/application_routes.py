"""
Application Routes

GET /applications - HR: applications to their jobs; USER: their own
GET /applications/hr/all - All applications to the caller's jobs (HR only)
GET /applications/job/{job_id} - Applications for one owned job (HR only)
GET /applications/my-applications - The caller's applications (USER only)
"""

from fastapi import APIRouter, Depends

from app.core.auth import Principal, get_current_user, get_current_hr, get_current_job_seeker
from app.core.errors import AuthorizationError, NotFoundError
from app.services import application_service, job_service
from app.schemas.schemas import ApplicationListResponse, ApplicationResponse, UserRole

router = APIRouter(prefix="/applications", tags=["Applications"])


def _hr_applications(hr_id: int) -> ApplicationListResponse:
    records = application_service.find_applications_for_hr(hr_id)
    data = [ApplicationResponse.model_validate(r) for r in records]
    message = "Applications retrieved successfully" if data else "No applications found"
    return ApplicationListResponse(message=message, data=data, count=len(data))


def _user_applications(user_id: int) -> ApplicationListResponse:
    records = application_service.find_applications_by_user(user_id)
    data = [ApplicationResponse.model_validate(r) for r in records]
    return ApplicationListResponse(message="Your applications retrieved successfully", data=data, count=len(data))


@router.get("", response_model=ApplicationListResponse)
async def get_applications(user: Principal = Depends(get_current_user)):
    """Applications visible to the caller, depending on role."""
    if user.role == UserRole.hr:
        return _hr_applications(user.id)
    return _user_applications(user.id)


@router.get("/hr/all", response_model=ApplicationListResponse)
async def get_hr_applications(hr: Principal = Depends(get_current_hr)):
    return _hr_applications(hr.id)


@router.get("/job/{job_id}", response_model=ApplicationListResponse)
async def get_job_applications(job_id: int, hr: Principal = Depends(get_current_hr)):
    """Applications for one job. Only the HR user who posted it may look."""
    job = job_service.find_job_by_id(job_id)
    if job is None:
        raise NotFoundError("Job not found")
    if job.posted_by != hr.id:
        raise AuthorizationError("You can only view applications for your own jobs")

    data = [ApplicationResponse.model_validate(r) for r in application_service.find_applications_by_job(job_id)]
    return ApplicationListResponse(message="Applications retrieved successfully", data=data, count=len(data))


@router.get("/my-applications", response_model=ApplicationListResponse)
async def get_my_applications(user: Principal = Depends(get_current_job_seeker)):
    return _user_applications(user.id)
