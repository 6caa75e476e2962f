"""
Models module - typed internal records built from database rows.

These records are used for:
- Passing rows between services, routes and the notification hooks
- Building API responses (see app.schemas)
"""

from app.models.records import (
    UserRecord, JobRecord, ApplicationRecord, ResumeRecord, DashboardStats
)

__all__ = ["UserRecord", "JobRecord", "ApplicationRecord", "ResumeRecord", "DashboardStats"]
