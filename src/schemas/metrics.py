"""Metrics response schemas.

The dashboard, user, course and department breakdowns are computed on demand
by ``utils.metrics_manager.MetricsManager``.
"""

from typing import List, Optional

from models.enums import CourseStatus
from schemas.common import CamelModel


class DashboardSummary(CamelModel):
    total_users: int
    active_users: int
    total_courses: int
    active_courses: int
    completion_rate: float
    average_grade: float


class MonthlyEngagement(CamelModel):
    month: str
    year: int
    active_users: int


class DepartmentUserCount(CamelModel):
    department: str
    users: int


class DashboardMetrics(CamelModel):
    summary: DashboardSummary
    user_engagement: List[MonthlyEngagement]
    department_distribution: List[DepartmentUserCount]


class StatusBreakdown(CamelModel):
    active: int
    inactive: int


class RoleBreakdown(CamelModel):
    admin: int
    user: int


class DepartmentName(CamelModel):
    name: str


class TopUser(CamelModel):
    id: str
    name: str
    email: str
    completed_courses: int
    department: Optional[DepartmentName] = None


class UserMetrics(CamelModel):
    total_users: int
    by_status: StatusBreakdown
    by_role: RoleBreakdown
    by_department: List[DepartmentUserCount]
    top_users: List[TopUser]


class PopularCourse(CamelModel):
    id: str
    title: str
    status: CourseStatus
    enrollments: int


class CourseCompletion(CamelModel):
    id: str
    title: str
    total_enrollments: int
    completed_enrollments: int
    completion_rate: float


class CourseMetrics(CamelModel):
    total_courses: int
    by_status: StatusBreakdown
    popular_courses: List[PopularCourse]
    top_completion_rate: List[CourseCompletion]


class DepartmentMetrics(CamelModel):
    id: str
    name: str
    users_count: int
    completed_courses_count: int
    avg_completed_courses: float
    active_users_count: int
    active_users_percentage: float
