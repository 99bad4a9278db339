"""Metrics routes (admin only).

All figures are aggregated from the live tables on every request.
"""

from typing import List

from fastapi import APIRouter

from api.routes.auth import AdminUser
from core.dependencies import MetricsManagerDep
from schemas.metrics import CourseMetrics, DashboardMetrics, DepartmentMetrics, UserMetrics

router = APIRouter(prefix="/api/metrics", tags=["Metrics"])


@router.get("/dashboard", response_model=DashboardMetrics, summary="Dashboard")
def get_dashboard(
    admin: AdminUser, metrics_manager: MetricsManagerDep
) -> DashboardMetrics:
    """Summary figures, monthly engagement and users per department.

    Each call also records a snapshot of the summary.
    """
    return metrics_manager.dashboard()


@router.get("/users", response_model=UserMetrics, summary="User metrics")
def get_user_metrics(admin: AdminUser, metrics_manager: MetricsManagerDep) -> UserMetrics:
    return metrics_manager.user_metrics()


@router.get("/courses", response_model=CourseMetrics, summary="Course metrics")
def get_course_metrics(
    admin: AdminUser, metrics_manager: MetricsManagerDep
) -> CourseMetrics:
    return metrics_manager.course_metrics()


@router.get(
    "/departments",
    response_model=List[DepartmentMetrics],
    summary="Department metrics",
)
def get_department_metrics(
    admin: AdminUser, metrics_manager: MetricsManagerDep
) -> List[DepartmentMetrics]:
    return metrics_manager.department_metrics()
