"""Dependency injection module for FastAPI.

This module provides dependency injection functions for FastAPI routes,
following Google Python Style Guide and FastAPI best practices. Every manager
is built around the request-scoped database session from ``get_db``.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from core.database import get_db
from utils import course_manager
from utils import department_manager
from utils import metrics_manager
from utils import system_config_manager
from utils import user_course_manager
from utils import user_manager


def get_user_manager(db: Session = Depends(get_db)) -> user_manager.UserManager:
    """Get UserManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        UserManager instance.
    """
    return user_manager.UserManager(db)


def get_department_manager(
    db: Session = Depends(get_db),
) -> department_manager.DepartmentManager:
    """Get DepartmentManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        DepartmentManager instance.
    """
    return department_manager.DepartmentManager(db)


def get_course_manager(db: Session = Depends(get_db)) -> course_manager.CourseManager:
    """Get CourseManager instance with request-scoped DB session."""
    return course_manager.CourseManager(db)


def get_user_course_manager(
    db: Session = Depends(get_db),
) -> user_course_manager.UserCourseManager:
    """Get UserCourseManager instance with request-scoped DB session."""
    return user_course_manager.UserCourseManager(db)


def get_system_config_manager(
    db: Session = Depends(get_db),
) -> system_config_manager.SystemConfigManager:
    """Get SystemConfigManager instance with request-scoped DB session."""
    return system_config_manager.SystemConfigManager(db)


def get_metrics_manager(
    db: Session = Depends(get_db),
) -> metrics_manager.MetricsManager:
    """Get MetricsManager instance with request-scoped DB session."""
    return metrics_manager.MetricsManager(db)


# Type aliases for dependency injection
UserManagerDep = Annotated[
    user_manager.UserManager, Depends(get_user_manager)
]
DepartmentManagerDep = Annotated[
    department_manager.DepartmentManager, Depends(get_department_manager)
]
CourseManagerDep = Annotated[
    course_manager.CourseManager, Depends(get_course_manager)
]
UserCourseManagerDep = Annotated[
    user_course_manager.UserCourseManager, Depends(get_user_course_manager)
]
SystemConfigManagerDep = Annotated[
    system_config_manager.SystemConfigManager, Depends(get_system_config_manager)
]
MetricsManagerDep = Annotated[
    metrics_manager.MetricsManager, Depends(get_metrics_manager)
]
