from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import ConfigDict, EmailStr, Field, StringConstraints
from pydantic.alias_generators import to_camel

from app.scheduling.kitchen_shifts import ShiftRole, ShiftTime, Weekday
from app.schemas.common import CamelModel


class KitchenShiftRegister(CamelModel):
    member_id: UUID
    member_name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
    member_email: EmailStr
    day: Weekday
    shift_time: ShiftTime
    role: ShiftRole


class RegistrationOut(CamelModel):
    id: UUID
    day: Weekday
    shift_time: ShiftTime
    role: ShiftRole
    remaining_spots: int


class RegisteredMember(CamelModel):
    name: str
    role: ShiftRole


class SlotAvailability(CamelModel):
    day: Weekday
    shift_time: ShiftTime
    capacity: int
    manager_count: int
    volunteer_count: int
    total_registered: int
    available_spots: int
    needs_manager: bool
    can_register_volunteer: bool
    can_register_manager: bool
    registered_members: list[RegisteredMember]


class KitchenShiftOut(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: UUID = Field(validation_alias="shift_id")
    member_id: UUID
    member_name: str
    member_email: str
    day: Weekday
    shift_time: ShiftTime
    role: ShiftRole
    registered_at: datetime
