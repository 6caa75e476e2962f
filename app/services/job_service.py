"""
Job Service - persistence for job listings.

Jobs are either 'active' (accepting applications) or 'expired'.
Listing queries optionally join the caller's own application so the
frontend can show "Applied" without a second request.
"""

from typing import List, Optional, Tuple
from sqlalchemy import insert, text

from app.db.database import get_db_session, execute_raw_sql
from app.db.tables import jobs
from app.models.records import JobRecord
from app.schemas.schemas import JobStatus


def create_job(title: str, description: str, salary: str, location: str, posted_by: int) -> JobRecord:
    with get_db_session() as db:
        result = db.execute(
            insert(jobs).values(
                title=title, description=description, salary=salary,
                location=location, expiry_status=JobStatus.active.value, posted_by=posted_by
            )
        )
        job_id = result.inserted_primary_key[0]
    return find_job_by_id(job_id)


def find_job_by_id(job_id: int) -> Optional[JobRecord]:
    rows = execute_raw_sql("SELECT * FROM jobs WHERE id = :id", {"id": job_id})
    return JobRecord.from_row(rows[0]) if rows else None


def expire_job(job_id: int) -> Tuple[JobRecord, bool]:
    """
    Move an active job to 'expired'.

    Returns the job and whether this call made the transition. Only one of
    several concurrent calls sees True.
    """
    with get_db_session() as db:
        result = db.execute(
            text("UPDATE jobs SET expiry_status = :expired WHERE id = :id AND expiry_status = :active"),
            {"expired": JobStatus.expired.value, "active": JobStatus.active.value, "id": job_id}
        )
        changed = result.rowcount == 1
    return find_job_by_id(job_id), changed


def list_jobs(user_id: Optional[int] = None, active_only: bool = False) -> List[JobRecord]:
    """
    List jobs, active first then newest.

    When user_id is given, each row carries has_applied / application_status
    for that user.
    """
    params = {}
    if user_id is not None:
        sql = """
            SELECT j.*,
                u.name AS posted_by_name,
                CASE WHEN a.id IS NOT NULL THEN 1 ELSE 0 END AS has_applied,
                a.status AS application_status
            FROM jobs j
            LEFT JOIN users u ON j.posted_by = u.id
            LEFT JOIN applications a ON j.id = a.job_id AND a.user_id = :user_id
        """
        params["user_id"] = user_id
    else:
        sql = """
            SELECT j.*, u.name AS posted_by_name
            FROM jobs j
            LEFT JOIN users u ON j.posted_by = u.id
        """

    if active_only:
        sql += " WHERE j.expiry_status = 'active'"

    sql += " ORDER BY j.expiry_status ASC, j.created_at DESC, j.id DESC"
    return [JobRecord.from_row(r) for r in execute_raw_sql(sql, params)]


def find_jobs_by_hr(hr_id: int) -> List[JobRecord]:
    rows = execute_raw_sql("""
        SELECT j.*,
            (SELECT COUNT(*) FROM applications WHERE job_id = j.id) AS application_count
        FROM jobs j
        WHERE j.posted_by = :hr_id
        ORDER BY j.created_at DESC, j.id DESC
    """, {"hr_id": hr_id})
    return [JobRecord.from_row(r) for r in rows]


def get_job_stats(hr_id: int) -> dict:
    rows = execute_raw_sql("""
        SELECT
            COUNT(*) AS total_jobs,
            SUM(CASE WHEN expiry_status = 'active' THEN 1 ELSE 0 END) AS total_active,
            SUM(CASE WHEN expiry_status = 'expired' THEN 1 ELSE 0 END) AS total_expired
        FROM jobs
        WHERE posted_by = :hr_id
    """, {"hr_id": hr_id})
    return rows[0]
