import os

os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient

from app.core.database import Base, SessionLocal, engine
from app.main import app as fastapi_app
from app.models.admin import Admin
from app.models.member import Member
from app.routers.auth import ADMIN_ROLE, create_access_token, get_password_hash
from app.schemas.kitchen_shifts import KitchenShiftRegister
from app.services.shift_registry import ShiftRegistry


@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    ShiftRegistry(session).ensure_slots()
    session.commit()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    with TestClient(fastapi_app) as c:
        yield c


@pytest.fixture
def admin(db):
    a = Admin(name="Camp Admin", email="admin@example.com", password_hash=get_password_hash("s3cret!"), is_active=True)
    db.add(a)
    db.commit()
    db.refresh(a)
    return a


@pytest.fixture
def admin_headers(admin):
    token = create_access_token({"sub": str(admin.admin_id), "role": ADMIN_ROLE})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_member(db):
    def _make(first_name: str, approved: bool = True, last_name: str = "Camper") -> Member:
        m = Member(
            first_name=first_name,
            last_name=last_name,
            email=f"{first_name.lower()}.{last_name.lower()}@example.com",
            is_approved=approved,
        )
        db.add(m)
        db.commit()
        db.refresh(m)
        return m

    return _make


def shift_request(member: Member, day: str, shift_time: str, role: str) -> KitchenShiftRegister:
    return KitchenShiftRegister(
        member_id=member.member_id,
        member_name=member.full_name,
        member_email=member.email,
        day=day,
        shift_time=shift_time,
        role=role,
    )


def shift_body(member: Member, day: str, shift_time: str, role: str) -> dict:
    return {
        "memberId": str(member.member_id),
        "memberName": member.full_name,
        "memberEmail": member.email,
        "day": day,
        "shiftTime": shift_time,
        "role": role,
    }
