"""User database model.

This module defines the User database model using SQLAlchemy.
"""

import uuid

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .base import Base
from .enums import UserRole, UserStatus


class UserModel(Base):
    """User database model."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)  # bcrypt hash, never serialized
    role = Column(
        Enum(UserRole, native_enum=False, length=16),
        nullable=False,
        default=UserRole.USER,
    )
    status = Column(
        Enum(UserStatus, native_enum=False, length=16),
        nullable=False,
        default=UserStatus.ACTIVE,
    )
    department_id = Column(
        String, ForeignKey("departments.id"), index=True, nullable=False
    )
    completed_courses = Column(Integer, nullable=False, default=0)
    last_login = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    department = relationship("DepartmentModel", back_populates="users")
    user_courses = relationship(
        "UserCourseModel",
        back_populates="user",
        cascade="all, delete-orphan",
    )
