#!/usr/bin/env python3
"""
Database Initialization Script

Creates all tables and the two sample accounts:
- HR:   hr@example.com / password123
- USER: user@example.com / password123

Run: python scripts/init_database.py
"""
import sys
sys.path.insert(0, '.')

from app.core.auth import hash_password
from app.core.config import get_settings
from app.db.database import check_database_connection
from app.db.tables import init_db
from app.services import user_service

SAMPLE_USERS = [
    ("HR Manager", "hr@example.com", "HR"),
    ("Test User", "user@example.com", "USER"),
]


def main():
    settings = get_settings()
    print("=" * 50)
    print("JOB PORTAL - DATABASE INITIALIZATION")
    print("=" * 50)

    print(f"\n[1] Connecting to {settings.sqlalchemy_url.split('@')[-1]}...")
    if not check_database_connection():
        print("    ❌ Database: FAILED")
        sys.exit(1)
    print("    ✅ Database: CONNECTED")

    print("\n[2] Creating tables...")
    init_db()
    print("    ✅ users, jobs, applications, resumes ready")

    print("\n[3] Creating sample users...")
    for name, email, role in SAMPLE_USERS:
        if user_service.find_user_by_email(email):
            print(f"    ⚠️  {email} already exists")
            continue
        user_service.create_user(name, email, hash_password("password123"), role)
        print(f"    ✅ {role}: {email} / password123")

    print("\n⚠️  Change these passwords in production!")
    print("=" * 50)


if __name__ == "__main__":
    main()
