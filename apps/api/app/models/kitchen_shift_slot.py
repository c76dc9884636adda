from sqlalchemy import Column, Enum

from app.core.database import Base
from app.scheduling.kitchen_shifts import ShiftTime, Weekday


class KitchenShiftSlot(Base):
    """
    Lock row for one (day, shift_time) slot.

    Holds no counts: writers take a row write lock on it so that the
    read-check-insert sequence in the allocator runs one at a time per slot.
    """

    __tablename__ = "kitchen_shift_slots"

    day = Column(Enum(Weekday, name="weekday"), primary_key=True)
    shift_time = Column(Enum(ShiftTime, name="shift_time"), primary_key=True)
