import uuid

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from config import DEFAULT_SIMULTANEOUS_COURSES
from .base import Base


class DepartmentModel(Base):
    __tablename__ = "departments"

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, unique=True, index=True, nullable=False)
    access_all_courses = Column(Boolean, nullable=False, default=True)
    access_all_tracks = Column(Boolean, nullable=False, default=True)
    certificate_permission = Column(Boolean, nullable=False, default=True)
    simultaneous_courses = Column(
        Integer, nullable=False, default=DEFAULT_SIMULTANEOUS_COURSES
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    users = relationship("UserModel", back_populates="department")
