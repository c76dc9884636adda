from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from app.schemas.common import CamelModel


class MemberCreate(CamelModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    camp_role: Optional[str] = None


class MemberUpdate(CamelModel):
    first_name: Optional[str] = Field(default=None, min_length=1)
    last_name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    camp_role: Optional[str] = None
    is_approved: Optional[bool] = None


class MemberOut(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    member_id: UUID
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    camp_role: Optional[str] = None
    is_approved: bool
    created_at: Optional[datetime] = None


class ApprovedMemberOut(CamelModel):
    id: str
    name: str
    email: str
