from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.encoders import jsonable_encoder
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.http import ok
from app.models.admin import Admin
from app.routers.auth import get_current_admin, security
from app.schemas.common import paginate
from app.schemas.kitchen_shifts import KitchenShiftOut, KitchenShiftRegister
from app.services.member_directory import require_approved_member
from app.services.shift_allocator import ShiftAllocator
from app.services.shift_registry import ShiftRegistry

router = APIRouter()

DEFAULT_LIMIT = 100
MAX_LIMIT = 500


@router.post("", status_code=201)
def register_shift(payload: KitchenShiftRegister, db: Session = Depends(get_db)):
    """
    Sign a member up for one kitchen shift.

    The body is shape-validated before anything touches the database. The
    member must exist and be approved; the allocator then applies the
    duplicate, capacity and manager-first rules (409 on rejection).
    """
    require_approved_member(db, payload.member_id)

    result = ShiftAllocator(db).register(payload)

    return ok(
        jsonable_encoder(result, by_alias=True),
        message=f"Successfully registered as {payload.role.value} for {payload.day.value} {payload.shift_time.value} shift",
        status=201,
    )


@router.get("")
def list_shifts(
    availability: bool = Query(False),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
):
    """
    `?availability=true` returns the public 10-slot availability matrix.
    Without it, the raw registration list (admin only, paginated).
    """
    if availability:
        slots = ShiftAllocator(db).get_availability()
        return ok(jsonable_encoder(slots, by_alias=True))

    get_current_admin(credentials, db)

    shifts, total = ShiftRegistry(db).list_page(page, limit)
    data = [KitchenShiftOut.model_validate(s) for s in shifts]
    return ok(
        jsonable_encoder(data, by_alias=True),
        pagination=paginate(page, limit, total).model_dump(),
    )


@router.delete("/clear-member")
def clear_member_shifts(
    member_id: UUID = Query(..., alias="memberId"),
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Remove every kitchen shift a member holds (admin only)."""
    deleted = ShiftAllocator(db).clear_member(member_id)
    return ok(
        message=f"Successfully cleared {deleted} kitchen shift registration(s)",
        deletedCount=deleted,
    )


@router.delete("/{shift_id}")
def delete_shift(
    shift_id: UUID,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Delete one registration (admin only). Other registrations in the slot are untouched."""
    result = ShiftAllocator(db).remove(shift_id)
    return ok(
        message="Kitchen shift registration deleted successfully",
        orphanedVolunteers=result["orphaned_volunteers"],
    )
