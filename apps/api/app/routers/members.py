from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.http import ok
from app.models.admin import Admin
from app.models.member import Member
from app.routers.auth import get_current_admin
from app.schemas.common import paginate
from app.schemas.members import ApprovedMemberOut, MemberCreate, MemberOut, MemberUpdate
from app.services import member_directory

router = APIRouter()


def _member_out(m: Member) -> dict:
    return jsonable_encoder(MemberOut.model_validate(m), by_alias=True)


# --- Public ---
@router.post("", status_code=201)
def register_member(payload: MemberCreate, db: Session = Depends(get_db)):
    """Public sign-up. New members start unapproved."""
    if member_directory.find_by_email(db, str(payload.email)):
        raise HTTPException(status_code=409, detail="A member with this email is already registered")

    m = Member(
        first_name=payload.first_name.strip(),
        last_name=payload.last_name.strip(),
        email=str(payload.email).lower(),
        phone=payload.phone,
        camp_role=payload.camp_role,
        is_approved=False,
    )
    db.add(m)
    db.commit()
    db.refresh(m)
    return ok(_member_out(m), message="Registration submitted successfully", status=201)


@router.get("/approved")
def list_approved_members(db: Session = Depends(get_db)):
    """Approved members for the kitchen shift form's member picker."""
    members = member_directory.list_approved(db)
    data = [ApprovedMemberOut(id=str(m.member_id), name=m.full_name, email=m.email) for m in members]
    return ok(jsonable_encoder(data, by_alias=True), total=len(data))


# --- Admin ---
@router.get("")
def list_members(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=500),
    approved: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    members, total = member_directory.list_members(db, page, limit, approved=approved)
    return ok(
        [_member_out(m) for m in members],
        pagination=paginate(page, limit, total).model_dump(),
    )


@router.get("/{member_id}")
def get_member(
    member_id: UUID,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return ok(_member_out(member_directory.require_member(db, member_id)))


@router.put("/{member_id}")
def update_member(
    member_id: UUID,
    payload: MemberUpdate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Update or approve a member. Existing kitchen shift registrations keep their snapshot."""
    m = member_directory.require_member(db, member_id)

    if payload.email is not None:
        existing = member_directory.find_by_email(db, str(payload.email))
        if existing and existing.member_id != member_id:
            raise HTTPException(status_code=400, detail="Email already in use by another member")
        m.email = str(payload.email).lower()
    if payload.first_name is not None:
        m.first_name = payload.first_name.strip()
    if payload.last_name is not None:
        m.last_name = payload.last_name.strip()
    if payload.phone is not None:
        m.phone = payload.phone
    if payload.camp_role is not None:
        m.camp_role = payload.camp_role
    if payload.is_approved is not None:
        m.is_approved = payload.is_approved

    db.commit()
    db.refresh(m)
    return ok(_member_out(m), message="Member updated successfully")


@router.delete("/{member_id}")
def delete_member(
    member_id: UUID,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Delete a member. Their kitchen shift registrations are left in place."""
    m = member_directory.require_member(db, member_id)
    db.delete(m)
    db.commit()
    return ok(message="Member deleted successfully")
