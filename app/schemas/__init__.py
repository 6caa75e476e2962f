"""
Schemas module - Request/Response schemas for API endpoints.

Difference from models:
- Models: Internal records built from database rows
- Schemas: API contract (what client sends/receives)
"""

from app.schemas.schemas import UserRole, JobStatus, ApplicationStatus, ResumeStatus

__all__ = ["UserRole", "JobStatus", "ApplicationStatus", "ResumeStatus"]
