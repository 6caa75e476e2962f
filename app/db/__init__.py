"""
Database module - SQLAlchemy engine, sessions and schema.
"""
from app.db.database import get_db_session, execute_raw_sql, check_database_connection
from app.db.tables import init_db

__all__ = [
    "get_db_session",
    "execute_raw_sql",
    "check_database_connection",
    "init_db",
]
