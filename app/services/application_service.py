"""
Application Service - persistence for job applications.

Duplicate detection:
- has_applied() is a cheap pre-check that lets the route answer early
- the UNIQUE(job_id, user_id) constraint is the real guard; a concurrent
  insert that slips past the pre-check surfaces as DuplicateApplicationError
"""

import logging
from typing import List
from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError

from app.core.errors import DuplicateApplicationError
from app.db.database import get_db_session, execute_raw_sql
from app.db.tables import applications
from app.models.records import ApplicationRecord
from app.schemas.schemas import ApplicationStatus

logger = logging.getLogger(__name__)


def has_applied(job_id: int, user_id: int) -> bool:
    rows = execute_raw_sql(
        "SELECT id FROM applications WHERE job_id = :job_id AND user_id = :user_id",
        {"job_id": job_id, "user_id": user_id}
    )
    return bool(rows)


def create_application(job_id: int, user_id: int,
                       status: ApplicationStatus = ApplicationStatus.pending) -> ApplicationRecord:
    """
    Insert an application.

    Raises:
        DuplicateApplicationError: (job_id, user_id) already exists
    """
    try:
        with get_db_session() as db:
            result = db.execute(
                insert(applications).values(job_id=job_id, user_id=user_id, status=status.value)
            )
            application_id = result.inserted_primary_key[0]
    except IntegrityError:
        logger.info("Duplicate application rejected for job %s by user %s", job_id, user_id)
        raise DuplicateApplicationError()

    rows = execute_raw_sql("SELECT * FROM applications WHERE id = :id", {"id": application_id})
    return ApplicationRecord.from_row(rows[0])


def find_applications_by_job(job_id: int) -> List[ApplicationRecord]:
    rows = execute_raw_sql("""
        SELECT a.*,
            u.name AS user_name,
            u.email AS user_email
        FROM applications a
        JOIN users u ON a.user_id = u.id
        WHERE a.job_id = :job_id
        ORDER BY a.created_at DESC, a.id DESC
    """, {"job_id": job_id})
    return [ApplicationRecord.from_row(r) for r in rows]


def find_applications_by_user(user_id: int) -> List[ApplicationRecord]:
    rows = execute_raw_sql("""
        SELECT a.*,
            j.title AS job_title,
            j.description AS job_description,
            j.location AS job_location,
            j.salary AS job_salary
        FROM applications a
        JOIN jobs j ON a.job_id = j.id
        WHERE a.user_id = :user_id
        ORDER BY a.created_at DESC, a.id DESC
    """, {"user_id": user_id})
    return [ApplicationRecord.from_row(r) for r in rows]


def find_applications_for_hr(hr_id: int) -> List[ApplicationRecord]:
    """All applications to jobs posted by this HR user, in one query."""
    rows = execute_raw_sql("""
        SELECT a.*,
            j.title AS job_title,
            u.name AS user_name,
            u.email AS user_email
        FROM applications a
        JOIN jobs j ON a.job_id = j.id
        JOIN users u ON a.user_id = u.id
        WHERE j.posted_by = :hr_id
        ORDER BY a.created_at DESC, a.id DESC
    """, {"hr_id": hr_id})
    return [ApplicationRecord.from_row(r) for r in rows]


def get_application_stats(hr_id: int) -> dict:
    rows = execute_raw_sql("""
        SELECT COUNT(*) AS total_applications
        FROM applications a
        JOIN jobs j ON a.job_id = j.id
        WHERE j.posted_by = :hr_id
    """, {"hr_id": hr_id})
    return rows[0]
