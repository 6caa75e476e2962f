"""
Relational schema - users, jobs, applications, resumes.

Tables are declared with SQLAlchemy Core so the same definition creates the
schema on PostgreSQL in production and on SQLite in tests. Queries elsewhere
stay as plain SQL through app.db.database.

The UNIQUE(job_id, user_id) constraint on applications is the authoritative
duplicate-application check.
"""

import logging

from sqlalchemy import (
    CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, MetaData,
    String, Table, Text, UniqueConstraint, func,
)

from app.db.database import engine

logger = logging.getLogger(__name__)

metadata = MetaData()


users = Table(
    "users", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("email", String(100), nullable=False, unique=True),
    Column("password", String(255), nullable=False),
    Column("role", String(10), nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
    CheckConstraint("role IN ('HR', 'USER')", name="ck_users_role"),
)

jobs = Table(
    "jobs", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(200), nullable=False),
    Column("description", Text, nullable=False),
    Column("salary", String(50)),
    Column("location", String(100)),
    Column("expiry_status", String(10), nullable=False, server_default="active"),
    Column("posted_by", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
    CheckConstraint("expiry_status IN ('active', 'expired')", name="ck_jobs_expiry_status"),
    Index("idx_jobs_posted_by", "posted_by"),
    Index("idx_jobs_expiry_status", "expiry_status"),
)

applications = Table(
    "applications", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("job_id", Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
    UniqueConstraint("job_id", "user_id", name="unique_application"),
    CheckConstraint("status IN ('pending', 'accepted', 'rejected')", name="ck_applications_status"),
    Index("idx_applications_job_id", "job_id"),
    Index("idx_applications_user_id", "user_id"),
)

resumes = Table(
    "resumes", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("job_id", Integer, ForeignKey("jobs.id", ondelete="SET NULL")),
    Column("hr_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("filename", String(255), nullable=False),
    Column("file_path", String(500), nullable=False),
    Column("status", String(20), nullable=False, server_default="uploaded"),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
    CheckConstraint("status IN ('uploaded', 'failed')", name="ck_resumes_status"),
    Index("idx_resumes_hr_id", "hr_id"),
)


def init_db() -> None:
    """
    Create any missing tables and indexes.
    Call this once during app startup.
    """
    metadata.create_all(engine)
    logger.info("Database tables ready")


def drop_db() -> None:
    """Drop every table. Used by the test-suite between tests."""
    metadata.drop_all(engine)
