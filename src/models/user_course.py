"""Enrollment (user-course) database model."""

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .base import Base


class UserCourseModel(Base):
    """Links one user to one course with progress and completion state."""

    __tablename__ = "user_courses"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "course_id",
            name="uq_user_courses_user_course",
        ),
    )

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(
        String,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    course_id = Column(
        String,
        ForeignKey("courses.id"),
        index=True,
        nullable=False,
    )
    progress = Column(Integer, nullable=False, default=0)  # 0-100
    completed = Column(Boolean, nullable=False, default=False)
    grade = Column(Float, nullable=True)  # 0-10
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=True)

    user = relationship("UserModel", back_populates="user_courses")
    course = relationship("CourseModel", back_populates="user_courses")
