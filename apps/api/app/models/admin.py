import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Uuid
from sqlalchemy.sql import func

from app.core.database import Base

class Admin(Base):
    __tablename__ = "admins"

    admin_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)

    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
