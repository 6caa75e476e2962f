"""
User Service - persistence for user accounts.
"""

from typing import Optional
from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError

from app.core.errors import ConflictError
from app.db.database import get_db_session, execute_raw_sql
from app.db.tables import users
from app.models.records import UserRecord


def create_user(name: str, email: str, password_hash: str, role: str) -> UserRecord:
    """Insert a user. Raises ConflictError when the email is taken."""
    try:
        with get_db_session() as db:
            result = db.execute(
                insert(users).values(name=name, email=email, password=password_hash, role=role.upper())
            )
            user_id = result.inserted_primary_key[0]
    except IntegrityError:
        raise ConflictError("User with this email already exists")
    return find_user_by_id(user_id)


def find_user_by_email(email: str) -> Optional[UserRecord]:
    """Includes the password hash; only the auth service should call this."""
    rows = execute_raw_sql("SELECT * FROM users WHERE email = :email", {"email": email})
    return UserRecord.from_row(rows[0]) if rows else None


def find_user_by_id(user_id: int) -> Optional[UserRecord]:
    rows = execute_raw_sql(
        "SELECT id, name, email, role, created_at FROM users WHERE id = :id",
        {"id": user_id}
    )
    return UserRecord.from_row(rows[0]) if rows else None
