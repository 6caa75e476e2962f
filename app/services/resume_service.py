"""
Resume Service - persistence for uploaded resume metadata.

The file itself lives on local disk or the remote object store
(see app.utils.file_upload); this table only records where.
"""

from typing import List, Optional
from sqlalchemy import insert, text

from app.db.database import get_db_session, execute_raw_sql
from app.db.tables import resumes
from app.models.records import ResumeRecord
from app.schemas.schemas import ResumeStatus


def create_resume(hr_id: int, filename: str, file_path: str, job_id: Optional[int] = None,
                  status: ResumeStatus = ResumeStatus.uploaded) -> ResumeRecord:
    with get_db_session() as db:
        result = db.execute(
            insert(resumes).values(
                job_id=job_id, hr_id=hr_id, filename=filename,
                file_path=file_path, status=status.value
            )
        )
        resume_id = result.inserted_primary_key[0]
    return find_resume_by_id(resume_id)


def find_resume_by_id(resume_id: int) -> Optional[ResumeRecord]:
    rows = execute_raw_sql("SELECT * FROM resumes WHERE id = :id", {"id": resume_id})
    return ResumeRecord.from_row(rows[0]) if rows else None


def find_resumes_by_hr(hr_id: int) -> List[ResumeRecord]:
    rows = execute_raw_sql("""
        SELECT r.*, j.title AS job_title
        FROM resumes r
        LEFT JOIN jobs j ON r.job_id = j.id
        WHERE r.hr_id = :hr_id
        ORDER BY r.created_at DESC, r.id DESC
    """, {"hr_id": hr_id})
    return [ResumeRecord.from_row(r) for r in rows]


def delete_resume_for_hr(hr_id: int, resume_id: int) -> bool:
    """Delete only if this HR user owns the resume. Returns False otherwise."""
    with get_db_session() as db:
        result = db.execute(
            text("DELETE FROM resumes WHERE id = :id AND hr_id = :hr_id"),
            {"id": resume_id, "hr_id": hr_id}
        )
        return result.rowcount > 0


def get_resume_stats(hr_id: int) -> dict:
    rows = execute_raw_sql("""
        SELECT
            COUNT(*) AS total_resumes,
            SUM(CASE WHEN status = 'uploaded' THEN 1 ELSE 0 END) AS uploaded_count,
            SUM(CASE WHEN status = 'failed' THEN 1 ELSE 0 END) AS failed_count
        FROM resumes
        WHERE hr_id = :hr_id
    """, {"hr_id": hr_id})
    return rows[0]
