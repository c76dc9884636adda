#!/usr/bin/env python3
"""
Script to create a camp admin account.
Run this after the database migration has been completed.

Usage:
    python create_admin.py <email> <password> <name>

Example:
    python create_admin.py admin@example.com mypassword123 "Camp Admin"
"""

import sys
from pathlib import Path

# Add the apps/api directory to the path so we can import from app
api_dir = Path(__file__).parent / "apps" / "api"
sys.path.insert(0, str(api_dir))

from sqlalchemy import select  # noqa: E402

from app.core.database import SessionLocal  # noqa: E402
from app.models.admin import Admin  # noqa: E402
from app.routers.auth import get_password_hash  # noqa: E402


def create_admin(email: str, password: str, name: str) -> bool:
    """Create an admin account in the database."""
    db = SessionLocal()

    try:
        existing = db.execute(select(Admin).where(Admin.email == email.lower())).scalar_one_or_none()
        if existing:
            print(f"❌ Admin with email {email} already exists!")
            return False

        admin = Admin(
            name=name,
            email=email.lower(),
            password_hash=get_password_hash(password),
            is_active=True,
        )

        db.add(admin)
        db.commit()
        db.refresh(admin)

        print("✅ Admin created successfully!")
        print(f"   Admin ID: {admin.admin_id}")
        print(f"   Name: {admin.name}")
        print(f"   Email: {admin.email}")

        return True
    except Exception as e:
        db.rollback()
        print(f"❌ Error creating admin: {e}")
        return False
    finally:
        db.close()

if __name__ == "__main__":
    if len(sys.argv) != 4:
        print("Usage: python create_admin.py <email> <password> <name>")
        print('Example: python create_admin.py admin@example.com mypassword123 "Camp Admin"')
        sys.exit(1)

    email, password, name = sys.argv[1], sys.argv[2], sys.argv[3]

    if not email or not password or not name:
        print("❌ Email, password, and name are required!")
        sys.exit(1)

    success = create_admin(email, password, name)
    sys.exit(0 if success else 1)
