import uuid

from sqlalchemy import Column, DateTime, Enum, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .base import Base
from .enums import CourseStatus


class CourseModel(Base):
    __tablename__ = "courses"

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    title = Column(String, index=True, nullable=False)
    description = Column(Text, nullable=True)
    status = Column(
        Enum(CourseStatus, native_enum=False, length=16),
        nullable=False,
        default=CourseStatus.ACTIVE,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    user_courses = relationship("UserCourseModel", back_populates="course")
