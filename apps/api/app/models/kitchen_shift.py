import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Enum, Index, UniqueConstraint, Uuid, text

from app.core.database import Base
from app.scheduling.kitchen_shifts import ShiftRole, ShiftTime, Weekday


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class KitchenShift(Base):
    """One member's seat on one (day, shift_time) slot. Never updated after insert."""

    __tablename__ = "kitchen_shifts"

    shift_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Weak reference: no FK, deleting a member keeps the registration
    member_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    member_name = Column(String(100), nullable=False)
    member_email = Column(String, nullable=False)

    day = Column(Enum(Weekday, name="weekday"), nullable=False)
    shift_time = Column(Enum(ShiftTime, name="shift_time"), nullable=False)
    role = Column(Enum(ShiftRole, name="shift_role"), nullable=False)

    # Python-side default so commit order survives sub-second inserts
    registered_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        UniqueConstraint("member_id", "day", "shift_time", name="uq_kitchen_shifts_member_slot"),
        Index("ix_kitchen_shifts_day_shift_time", "day", "shift_time"),
        Index(
            "uq_kitchen_shifts_one_manager",
            "day",
            "shift_time",
            unique=True,
            postgresql_where=text("role = 'manager'"),
            sqlite_where=text("role = 'manager'"),
        ),
    )
