"""
Internal records - the one place database rows are turned into typed objects.

Every service passes raw row mappings through `<Record>.from_row()` exactly
once. Past this boundary nothing re-guesses column names, integer booleans
or driver-specific timestamp formats.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional


def _as_datetime(value: Any) -> Optional[datetime]:
    """SQLite returns text timestamps for raw SQL; PostgreSQL returns datetimes."""
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _as_int(value: Any, default: int = 0) -> int:
    if value is None:
        return default
    return int(value)


def _as_optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(value)


def _as_bool(value: Any) -> bool:
    return value in (1, True, "1", "true", "t")


@dataclass(frozen=True)
class UserRecord:
    id: int
    name: str
    email: str
    role: str
    created_at: Optional[datetime] = None
    password: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "UserRecord":
        return cls(
            id=int(row["id"]),
            name=row["name"],
            email=row["email"],
            role=str(row["role"]).upper(),
            created_at=_as_datetime(row.get("created_at")),
            password=row.get("password"),
        )


@dataclass(frozen=True)
class JobRecord:
    id: int
    title: str
    description: str
    salary: Optional[str]
    location: Optional[str]
    expiry_status: str
    posted_by: int
    created_at: Optional[datetime] = None
    posted_by_name: Optional[str] = None
    application_count: Optional[int] = None
    has_applied: bool = False
    application_status: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.expiry_status == "active"

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "JobRecord":
        count = row.get("application_count")
        return cls(
            id=int(row["id"]),
            title=row["title"],
            description=row["description"],
            salary=row.get("salary"),
            location=row.get("location"),
            expiry_status=row["expiry_status"],
            posted_by=int(row["posted_by"]),
            created_at=_as_datetime(row.get("created_at")),
            posted_by_name=row.get("posted_by_name"),
            application_count=None if count is None else int(count),
            has_applied=_as_bool(row.get("has_applied")),
            application_status=row.get("application_status"),
        )


@dataclass(frozen=True)
class ApplicationRecord:
    id: int
    job_id: int
    user_id: int
    status: str
    created_at: Optional[datetime] = None
    job_title: Optional[str] = None
    job_description: Optional[str] = None
    job_location: Optional[str] = None
    job_salary: Optional[str] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ApplicationRecord":
        return cls(
            id=int(row["id"]),
            job_id=int(row["job_id"]),
            user_id=int(row["user_id"]),
            status=row["status"],
            created_at=_as_datetime(row.get("created_at")),
            job_title=row.get("job_title"),
            job_description=row.get("job_description"),
            job_location=row.get("job_location"),
            job_salary=row.get("job_salary"),
            user_name=row.get("user_name"),
            user_email=row.get("user_email"),
        )


@dataclass(frozen=True)
class ResumeRecord:
    id: int
    job_id: Optional[int]
    hr_id: int
    filename: str
    file_path: str
    status: str
    created_at: Optional[datetime] = None
    job_title: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ResumeRecord":
        return cls(
            id=int(row["id"]),
            job_id=_as_optional_int(row.get("job_id")),
            hr_id=int(row["hr_id"]),
            filename=row["filename"],
            file_path=row["file_path"],
            status=row["status"],
            created_at=_as_datetime(row.get("created_at")),
            job_title=row.get("job_title"),
        )


@dataclass(frozen=True)
class DashboardStats:
    total_jobs: int
    total_active_jobs: int
    total_expired: int
    total_applications: int
    total_resumes_uploaded: int
    uploaded_resumes: int
    failed_resumes: int

    @classmethod
    def from_rows(cls, job_row: Mapping[str, Any], application_row: Mapping[str, Any],
                  resume_row: Mapping[str, Any]) -> "DashboardStats":
        return cls(
            total_jobs=_as_int(job_row.get("total_jobs")),
            total_active_jobs=_as_int(job_row.get("total_active")),
            total_expired=_as_int(job_row.get("total_expired")),
            total_applications=_as_int(application_row.get("total_applications")),
            total_resumes_uploaded=_as_int(resume_row.get("total_resumes")),
            uploaded_resumes=_as_int(resume_row.get("uploaded_count")),
            failed_resumes=_as_int(resume_row.get("failed_count")),
        )
