"""Row to record conversion."""

from datetime import datetime

from app.models.records import DashboardStats, JobRecord, ResumeRecord, UserRecord


def test_job_record_from_sqlite_row():
    job = JobRecord.from_row({
        "id": 3, "title": "QA", "description": "Tests", "salary": "50000", "location": "Remote",
        "expiry_status": "active", "posted_by": "1", "created_at": "2024-05-01 10:20:30",
        "has_applied": 1, "application_status": "pending", "application_count": "4",
    })

    assert job.created_at == datetime(2024, 5, 1, 10, 20, 30)
    assert job.posted_by == 1
    assert job.has_applied is True
    assert job.application_count == 4
    assert job.is_active


def test_job_record_defaults():
    job = JobRecord.from_row({
        "id": 3, "title": "QA", "description": "Tests", "expiry_status": "expired", "posted_by": 1,
    })

    assert job.has_applied is False
    assert job.application_count is None
    assert not job.is_active


def test_user_role_upper_cased():
    assert UserRecord.from_row({"id": 1, "name": "A", "email": "a@acme.io", "role": "hr"}).role == "HR"


def test_resume_without_job():
    resume = ResumeRecord.from_row({
        "id": 1, "job_id": None, "hr_id": 2, "filename": "cv.pdf", "file_path": "/x/cv.pdf", "status": "uploaded",
    })
    assert resume.job_id is None


def test_dashboard_stats_treat_null_sums_as_zero():
    stats = DashboardStats.from_rows(
        {"total_jobs": 0, "total_active": None, "total_expired": None},
        {"total_applications": 0},
        {"total_resumes": 0, "uploaded_count": None, "failed_count": None},
    )

    assert stats == DashboardStats(0, 0, 0, 0, 0, 0, 0)
