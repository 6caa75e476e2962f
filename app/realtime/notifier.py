"""
Post-commit notification hooks for job write operations.

Route handlers call these after the database write has succeeded and the
response has been built. The hooks never raise: a missing bus is a no-op and
any failure is logged and swallowed, so the HTTP response is identical with
or without real-time delivery.
"""

import logging
from typing import Optional

from fastapi import Request

from app.core.config import get_settings
from app.models.records import ApplicationRecord, JobRecord
from app.realtime.bus import EventBus, JOB_EXPIRED, NEW_APPLICATION
from app.schemas.schemas import UserRole

logger = logging.getLogger(__name__)


class JobEventNotifier:
    """
    Turns committed job changes into bus events.

    By default every event is broadcast to all connections. With
    `targeted=True`, new applications go only to the owning HR user and
    expired jobs go to the HR and USER role groups.
    """

    def __init__(self, bus: Optional[EventBus], targeted: bool = False):
        self.bus = bus
        self.targeted = targeted

    def on_job_expired(self, job: JobRecord) -> int:
        if self.bus is None:
            return 0
        try:
            payload = {
                "jobId": job.id,
                "jobTitle": job.title,
                "message": f'Job "{job.title}" has been marked as expired',
            }
            if self.targeted:
                return sum(
                    self.bus.publish_to(role.value, JOB_EXPIRED, payload)
                    for role in (UserRole.hr, UserRole.user)
                )
            return self.bus.publish(JOB_EXPIRED, payload)
        except Exception:
            logger.exception("Failed to publish %s for job %s", JOB_EXPIRED, getattr(job, "id", None))
            return 0

    def on_application_created(self, application: ApplicationRecord, job: JobRecord) -> int:
        if self.bus is None:
            return 0
        try:
            payload = {
                "applicationId": application.id,
                "jobId": job.id,
                "jobTitle": job.title,
                "userId": application.user_id,
                "message": f"New application received for job: {job.title}",
            }
            if self.targeted:
                return self.bus.publish_to(f"user-{job.posted_by}", NEW_APPLICATION, payload)
            return self.bus.publish(NEW_APPLICATION, payload)
        except Exception:
            logger.exception("Failed to publish %s for application %s",
                             NEW_APPLICATION, getattr(application, "id", None))
            return 0


def get_notifier(request: Request) -> JobEventNotifier:
    """FastAPI dependency - notifier bound to this app's bus (None when real-time is off)."""
    bus = getattr(request.app.state, "event_bus", None)
    return JobEventNotifier(bus, targeted=get_settings().realtime_targeted_delivery)
