import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Uuid
from sqlalchemy.sql import func

from app.core.database import Base

class Member(Base):
    __tablename__ = "members"

    member_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    phone = Column(String, nullable=True)
    camp_role = Column(String, nullable=True)

    # Only approved members can take kitchen shifts
    is_approved = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
