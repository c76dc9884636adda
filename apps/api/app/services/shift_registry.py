from __future__ import annotations

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import case, delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.kitchen_shift import KitchenShift
from app.models.kitchen_shift_slot import KitchenShiftSlot
from app.scheduling.kitchen_shifts import SHIFT_DAYS, SHIFT_TIMES, ShiftRole, ShiftTime, Weekday, all_slots


# Weekday order, morning before evening, managers first
_DAY_ORDER = case({d.name: i for i, d in enumerate(SHIFT_DAYS)}, value=KitchenShift.day)
_TIME_ORDER = case({t.name: i for i, t in enumerate(SHIFT_TIMES)}, value=KitchenShift.shift_time)
_ROLE_ORDER = case({ShiftRole.manager.name: 0, ShiftRole.volunteer.name: 1}, value=KitchenShift.role)


class ShiftRegistry:
    """Persistence for kitchen shift registrations. Never commits; callers own the transaction."""

    def __init__(self, db: Session):
        self.db = db

    # ---------- slot locks ----------
    def ensure_slots(self) -> None:
        existing = {(s.day, s.shift_time) for s in self.db.execute(select(KitchenShiftSlot)).scalars()}
        for day, shift_time in all_slots():
            if (day, shift_time) not in existing:
                self.db.add(KitchenShiftSlot(day=day, shift_time=shift_time))
        self.db.flush()

    def _touch_slot(self, day: Weekday, shift_time: ShiftTime) -> int:
        # A no-op UPDATE is a write on every backend: a row lock on Postgres,
        # the database RESERVED lock on SQLite (where FOR UPDATE is ignored).
        stmt = (
            update(KitchenShiftSlot)
            .where(KitchenShiftSlot.day == day, KitchenShiftSlot.shift_time == shift_time)
            .values(day=KitchenShiftSlot.day)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount

    def lock_slot(self, day: Weekday, shift_time: ShiftTime) -> None:
        """
        Take the per-slot write lock, held until commit/rollback.

        Must run before any read of the slot. Creates the lock row on first
        use; a concurrent creator losing the insert race just locks the
        winner's row.
        """
        if self._touch_slot(day, shift_time):
            return

        try:
            with self.db.begin_nested():
                self.db.add(KitchenShiftSlot(day=day, shift_time=shift_time))
        except IntegrityError:
            pass
        self._touch_slot(day, shift_time)

    # ---------- reads ----------
    def find_duplicate(self, member_id: UUID, day: Weekday, shift_time: ShiftTime) -> Optional[KitchenShift]:
        stmt = select(KitchenShift).where(
            KitchenShift.member_id == member_id,
            KitchenShift.day == day,
            KitchenShift.shift_time == shift_time,
        )
        return self.db.execute(stmt).scalars().first()

    def list_for_slot(self, day: Weekday, shift_time: ShiftTime) -> List[KitchenShift]:
        stmt = (
            select(KitchenShift)
            .where(KitchenShift.day == day, KitchenShift.shift_time == shift_time)
            .order_by(KitchenShift.registered_at.asc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def get(self, shift_id: UUID, refresh: bool = False) -> Optional[KitchenShift]:
        return self.db.get(KitchenShift, shift_id, populate_existing=refresh)

    def list_page(self, page: int, limit: int) -> Tuple[List[KitchenShift], int]:
        total = self.db.execute(select(func.count()).select_from(KitchenShift)).scalar_one()
        stmt = (
            select(KitchenShift)
            .order_by(_DAY_ORDER, _TIME_ORDER, _ROLE_ORDER, KitchenShift.registered_at.asc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all()), int(total)

    # ---------- writes ----------
    def insert(
        self,
        member_id: UUID,
        member_name: str,
        member_email: str,
        day: Weekday,
        shift_time: ShiftTime,
        role: ShiftRole,
    ) -> KitchenShift:
        shift = KitchenShift(
            member_id=member_id,
            member_name=member_name.strip(),
            member_email=member_email.strip().lower(),
            day=day,
            shift_time=shift_time,
            role=role,
        )
        self.db.add(shift)
        self.db.flush()
        return shift

    def delete(self, shift: KitchenShift) -> None:
        self.db.delete(shift)
        self.db.flush()

    def delete_for_member(self, member_id: UUID) -> int:
        res = self.db.execute(delete(KitchenShift).where(KitchenShift.member_id == member_id))
        return int(getattr(res, "rowcount", 0) or 0)
