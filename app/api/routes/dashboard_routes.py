"""
Dashboard Routes

GET /dashboard - HR analytics (jobs, applications, resumes)
GET /dashboard/stats - Alias of /dashboard
GET /stats - Alias of /dashboard for older clients
"""

from fastapi import APIRouter, Depends

from app.core.auth import Principal, get_current_hr
from app.models.records import DashboardStats
from app.services import application_service, job_service, resume_service
from app.schemas.schemas import DashboardAnalytics, DashboardResponse

router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard", response_model=DashboardResponse)
@router.get("/dashboard/stats", response_model=DashboardResponse)
@router.get("/stats", response_model=DashboardResponse)
async def get_dashboard(hr: Principal = Depends(get_current_hr)):
    """totalJobs always equals totalActiveJobs + totalExpired."""
    stats = DashboardStats.from_rows(
        job_service.get_job_stats(hr.id),
        application_service.get_application_stats(hr.id),
        resume_service.get_resume_stats(hr.id),
    )
    return DashboardResponse(
        message="Dashboard analytics retrieved successfully",
        data=DashboardAnalytics.model_validate(stats),
    )
