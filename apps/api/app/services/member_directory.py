from typing import List, Optional, Tuple
from uuid import UUID

from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.member import Member


def require_member(db: Session, member_id: UUID) -> Member:
    member = db.get(Member, member_id)
    if not member:
        raise HTTPException(status_code=404, detail="Member not found")
    return member


def require_approved_member(db: Session, member_id: UUID) -> Member:
    """Only approved members may sign up for kitchen shifts."""
    member = require_member(db, member_id)
    if not member.is_approved:
        raise HTTPException(status_code=400, detail="Member is not approved yet")
    return member


def find_by_email(db: Session, email: str) -> Optional[Member]:
    return db.execute(select(Member).where(Member.email == email.lower())).scalar_one_or_none()


def list_approved(db: Session) -> List[Member]:
    stmt = (
        select(Member)
        .where(Member.is_approved == True)  # noqa: E712
        .order_by(Member.last_name.asc(), Member.first_name.asc())
    )
    return list(db.execute(stmt).scalars().all())


def list_members(db: Session, page: int, limit: int, approved: Optional[bool] = None) -> Tuple[List[Member], int]:
    stmt = select(Member)
    count_stmt = select(func.count()).select_from(Member)
    if approved is not None:
        stmt = stmt.where(Member.is_approved == approved)
        count_stmt = count_stmt.where(Member.is_approved == approved)

    total = db.execute(count_stmt).scalar_one()
    rows = db.execute(
        stmt.order_by(Member.created_at.desc(), Member.last_name.asc()).offset((page - 1) * limit).limit(limit)
    ).scalars().all()
    return list(rows), int(total)
