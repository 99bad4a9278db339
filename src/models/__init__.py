"""Database models."""

from .base import Base
from .enums import CourseStatus, UserRole, UserStatus
from .department import DepartmentModel
from .user import UserModel
from .course import CourseModel
from .user_course import UserCourseModel
from .system_config import SystemConfigModel
from .metrics import MetricsSnapshotModel

__all__ = [
    "Base",
    "CourseStatus",
    "UserRole",
    "UserStatus",
    "DepartmentModel",
    "UserModel",
    "CourseModel",
    "UserCourseModel",
    "SystemConfigModel",
    "MetricsSnapshotModel",
]
