from __future__ import annotations

import logging
from typing import List
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.kitchen_shift import KitchenShift
from app.scheduling.kitchen_shifts import ShiftRole, ShiftTime, Weekday, all_slots, capacity_for
from app.schemas.kitchen_shifts import (
    KitchenShiftRegister,
    RegisteredMember,
    RegistrationOut,
    SlotAvailability,
)
from app.services.errors import (
    DuplicateRegistration,
    ManagerRequiredFirst,
    ManagerSlotTaken,
    RegistrationNotFound,
    ShiftRejection,
    SlotFull,
)
from app.services.shift_registry import ShiftRegistry

logger = logging.getLogger(__name__)


# ---------- helpers ----------
def _count_role(shifts: List[KitchenShift], role: ShiftRole) -> int:
    return sum(1 for s in shifts if s.role == role)


def check_slot_rules(shifts: List[KitchenShift], role: ShiftRole, capacity: int) -> int:
    """
    Capacity and role-ordering rules for one slot, in order. Returns the
    current head count when the request may be accepted.
    """
    total = len(shifts)
    managers = _count_role(shifts, ShiftRole.manager)

    if total >= capacity:
        raise SlotFull(capacity)

    if role == ShiftRole.manager:
        if managers >= 1:
            raise ManagerSlotTaken()
    elif managers < 1:
        raise ManagerRequiredFirst()

    return total


# ---------- core ----------
class ShiftAllocator:
    """
    Accepts or rejects kitchen shift registrations.

    Every decision is made on a fresh read of the slot while holding the
    slot's row lock, so two accepted writes can never jointly break the
    capacity or single-manager rules. The unique constraint and the partial
    manager index back this up at the database level.
    """

    def __init__(self, db: Session):
        self.db = db
        self.registry = ShiftRegistry(db)

    def _evaluate(self, req: KitchenShiftRegister, capacity: int) -> int:
        if self.registry.find_duplicate(req.member_id, req.day, req.shift_time) is not None:
            raise DuplicateRegistration()

        shifts = self.registry.list_for_slot(req.day, req.shift_time)
        return check_slot_rules(shifts, req.role, capacity)

    def _log_rejection(self, req: KitchenShiftRegister, rej: ShiftRejection) -> None:
        logger.info(
            "kitchen shift rejected member=%s slot=%s/%s role=%s code=%s",
            req.member_id, req.day.value, req.shift_time.value, req.role.value, rej.code,
        )

    def register(self, req: KitchenShiftRegister) -> RegistrationOut:
        capacity = capacity_for(req.shift_time)

        try:
            self.registry.lock_slot(req.day, req.shift_time)
            total = self._evaluate(req, capacity)
            shift = self.registry.insert(
                member_id=req.member_id,
                member_name=req.member_name,
                member_email=str(req.member_email),
                day=req.day,
                shift_time=req.shift_time,
                role=req.role,
            )
            shift_id = shift.shift_id
            self.db.commit()
        except ShiftRejection as rej:
            self.db.rollback()
            self._log_rejection(req, rej)
            raise
        except IntegrityError:
            # A concurrent writer committed first; the fresh state says why we lost
            self.db.rollback()
            logger.warning(
                "kitchen shift insert hit a constraint member=%s slot=%s/%s, re-evaluating",
                req.member_id, req.day.value, req.shift_time.value,
            )
            try:
                self._evaluate(req, capacity)
            except ShiftRejection as rej:
                self._log_rejection(req, rej)
                raise
            raise

        remaining = capacity - total - 1
        logger.info(
            "kitchen shift registered id=%s member=%s slot=%s/%s role=%s remaining=%s",
            shift_id, req.member_id, req.day.value, req.shift_time.value, req.role.value, remaining,
        )
        return RegistrationOut(
            id=shift_id,
            day=req.day,
            shift_time=req.shift_time,
            role=req.role,
            remaining_spots=remaining,
        )

    def slot_availability(self, day: Weekday, shift_time: ShiftTime) -> SlotAvailability:
        shifts = self.registry.list_for_slot(day, shift_time)
        capacity = capacity_for(shift_time)

        manager_count = _count_role(shifts, ShiftRole.manager)
        volunteer_count = _count_role(shifts, ShiftRole.volunteer)
        total = len(shifts)
        available = capacity - total

        return SlotAvailability(
            day=day,
            shift_time=shift_time,
            capacity=capacity,
            manager_count=manager_count,
            volunteer_count=volunteer_count,
            total_registered=total,
            available_spots=available,
            needs_manager=manager_count == 0,
            can_register_volunteer=manager_count > 0 and available > 0,
            can_register_manager=manager_count == 0 and available > 0,
            registered_members=[RegisteredMember(name=s.member_name, role=s.role) for s in shifts],
        )

    def get_availability(self) -> List[SlotAvailability]:
        return [self.slot_availability(day, shift_time) for day, shift_time in all_slots()]

    def remove(self, shift_id: UUID) -> dict:
        shift = self.registry.get(shift_id)
        if shift is None:
            raise RegistrationNotFound()

        day, shift_time, role = shift.day, shift.shift_time, shift.role
        self.registry.lock_slot(day, shift_time)
        # Re-read under the lock; a concurrent remove may have won
        shift = self.registry.get(shift_id, refresh=True)
        if shift is None:
            self.db.rollback()
            raise RegistrationNotFound()
        self.registry.delete(shift)

        # Volunteers stay when their manager leaves; report how many are now unmanaged
        orphaned = 0
        if role == ShiftRole.manager:
            orphaned = _count_role(self.registry.list_for_slot(day, shift_time), ShiftRole.volunteer)

        self.db.commit()

        if orphaned:
            logger.warning(
                "manager removed from %s/%s, %s volunteer(s) left without a manager",
                day.value, shift_time.value, orphaned,
            )
        logger.info("kitchen shift removed id=%s", shift_id)
        return {"shift_id": shift_id, "orphaned_volunteers": orphaned}

    def clear_member(self, member_id: UUID) -> int:
        deleted = self.registry.delete_for_member(member_id)
        if deleted == 0:
            self.db.rollback()
            raise RegistrationNotFound("No kitchen shifts found for this member")

        self.db.commit()
        logger.info("cleared %s kitchen shift(s) for member=%s", deleted, member_id)
        return deleted
