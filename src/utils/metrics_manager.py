"""Dashboard and analytics aggregation.

All figures are computed from the live tables on every call. Computing the
dashboard also appends one row to the ``metrics`` history table.
"""

import calendar
import logging
from datetime import datetime, timedelta
from typing import List, Optional

import pytz
from sqlalchemy import desc, func
from sqlalchemy.orm import Session, joinedload, selectinload

from config import ACTIVE_USER_WINDOW_DAYS, ENGAGEMENT_MONTHS, TOP_N
from models.course import CourseModel
from models.department import DepartmentModel
from models.enums import CourseStatus, UserRole, UserStatus
from models.metrics import MetricsSnapshotModel
from models.user import UserModel
from models.user_course import UserCourseModel
from schemas.metrics import (
    CourseCompletion,
    CourseMetrics,
    DashboardMetrics,
    DashboardSummary,
    DepartmentMetrics,
    DepartmentName,
    DepartmentUserCount,
    MonthlyEngagement,
    PopularCourse,
    RoleBreakdown,
    StatusBreakdown,
    TopUser,
    UserMetrics,
)

logger = logging.getLogger(__name__)


def percentage(part: int, total: int) -> float:
    """Return ``part`` as a percentage of ``total``; 0 when total is 0."""
    return (part / total) * 100 if total > 0 else 0.0


def month_start(reference: datetime, months_back: int) -> datetime:
    """First instant (UTC) of the calendar month ``months_back`` before ``reference``."""
    index = reference.year * 12 + (reference.month - 1) - months_back
    return datetime(index // 12, index % 12 + 1, 1, tzinfo=pytz.utc)


class MetricsManager:
    """Computes administrative metrics."""

    def __init__(self, db: Session, now: Optional[datetime] = None):
        """Initialize MetricsManager.

        Args:
            db: SQLAlchemy Session.
            now: Reference time; defaults to the current UTC time.
        """
        self.db = db
        self.now = now or datetime.now(pytz.utc)

    @property
    def active_since(self) -> datetime:
        return self.now - timedelta(days=ACTIVE_USER_WINDOW_DAYS)

    def _department_user_counts(self) -> List[DepartmentUserCount]:
        rows = (
            self.db.query(DepartmentModel.name, func.count(UserModel.id))
            .outerjoin(UserModel, UserModel.department_id == DepartmentModel.id)
            .group_by(DepartmentModel.id, DepartmentModel.name)
            .order_by(DepartmentModel.name.asc())
            .all()
        )
        return [DepartmentUserCount(department=name, users=count) for name, count in rows]

    def _user_engagement(self) -> List[MonthlyEngagement]:
        series = []
        for months_back in range(ENGAGEMENT_MONTHS - 1, -1, -1):
            start = month_start(self.now, months_back)
            end = month_start(self.now, months_back - 1)
            active = (
                self.db.query(UserModel)
                .filter(UserModel.last_login >= start, UserModel.last_login < end)
                .count()
            )
            series.append(
                MonthlyEngagement(
                    month=calendar.month_name[start.month],
                    year=start.year,
                    active_users=active,
                )
            )
        return series

    def dashboard(self) -> DashboardMetrics:
        """Compute the dashboard and record a snapshot of its summary.

        Returns:
            DashboardMetrics with the summary, the monthly engagement series
            (oldest month first) and the users-per-department distribution.
        """
        total_users = self.db.query(UserModel).count()
        active_users = (
            self.db.query(UserModel)
            .filter(UserModel.last_login >= self.active_since)
            .count()
        )
        total_courses = self.db.query(CourseModel).count()
        active_courses = (
            self.db.query(CourseModel)
            .filter(CourseModel.status == CourseStatus.ACTIVE)
            .count()
        )
        total_enrollments = self.db.query(UserCourseModel).count()
        completed_enrollments = (
            self.db.query(UserCourseModel)
            .filter(UserCourseModel.completed.is_(True))
            .count()
        )
        average_grade = (
            self.db.query(func.avg(UserCourseModel.grade))
            .filter(UserCourseModel.grade.isnot(None))
            .scalar()
        )

        summary = DashboardSummary(
            total_users=total_users,
            active_users=active_users,
            total_courses=total_courses,
            active_courses=active_courses,
            completion_rate=percentage(completed_enrollments, total_enrollments),
            average_grade=float(average_grade or 0),
        )

        self.db.add(
            MetricsSnapshotModel(
                total_users=summary.total_users,
                active_users=summary.active_users,
                total_courses=summary.total_courses,
                active_courses=summary.active_courses,
                completion_rate=summary.completion_rate,
                average_grade=summary.average_grade,
            )
        )
        self.db.commit()
        logger.info("Recorded metrics snapshot: %s", summary.model_dump())

        return DashboardMetrics(
            summary=summary,
            user_engagement=self._user_engagement(),
            department_distribution=self._department_user_counts(),
        )

    def user_metrics(self) -> UserMetrics:
        def count_where(*criteria) -> int:
            return self.db.query(UserModel).filter(*criteria).count()

        top_users = (
            self.db.query(UserModel)
            .options(joinedload(UserModel.department))
            .order_by(UserModel.completed_courses.desc(), UserModel.name.asc())
            .limit(TOP_N)
            .all()
        )
        return UserMetrics(
            total_users=self.db.query(UserModel).count(),
            by_status=StatusBreakdown(
                active=count_where(UserModel.status == UserStatus.ACTIVE),
                inactive=count_where(UserModel.status == UserStatus.INACTIVE),
            ),
            by_role=RoleBreakdown(
                admin=count_where(UserModel.role == UserRole.ADMIN),
                user=count_where(UserModel.role == UserRole.USER),
            ),
            by_department=self._department_user_counts(),
            top_users=[
                TopUser(
                    id=user.id,
                    name=user.name,
                    email=user.email,
                    completed_courses=user.completed_courses,
                    department=DepartmentName(name=user.department.name)
                    if user.department
                    else None,
                )
                for user in top_users
            ],
        )

    def course_metrics(self) -> CourseMetrics:
        """Course breakdowns.

        The completion-rate ranking loads every course with its enrollments
        and ranks them in memory.
        """
        def count_where(*criteria) -> int:
            return self.db.query(CourseModel).filter(*criteria).count()

        enrollments = func.count(UserCourseModel.id).label("enrollments")
        popular = (
            self.db.query(CourseModel, enrollments)
            .outerjoin(UserCourseModel, UserCourseModel.course_id == CourseModel.id)
            .group_by(CourseModel.id)
            .order_by(desc("enrollments"), CourseModel.title.asc())
            .limit(TOP_N)
            .all()
        )

        completion = []
        for course in self.db.query(CourseModel).options(selectinload(CourseModel.user_courses)):
            total = len(course.user_courses)
            completed = sum(1 for enrollment in course.user_courses if enrollment.completed)
            completion.append(
                CourseCompletion(
                    id=course.id,
                    title=course.title,
                    total_enrollments=total,
                    completed_enrollments=completed,
                    completion_rate=percentage(completed, total),
                )
            )
        completion.sort(key=lambda item: item.completion_rate, reverse=True)

        return CourseMetrics(
            total_courses=self.db.query(CourseModel).count(),
            by_status=StatusBreakdown(
                active=count_where(CourseModel.status == CourseStatus.ACTIVE),
                inactive=count_where(CourseModel.status == CourseStatus.INACTIVE),
            ),
            popular_courses=[
                PopularCourse(
                    id=course.id,
                    title=course.title,
                    status=course.status,
                    enrollments=count,
                )
                for course, count in popular
            ],
            top_completion_rate=completion[:TOP_N],
        )

    def department_metrics(self) -> List[DepartmentMetrics]:
        results = []
        departments = self.db.query(DepartmentModel).order_by(DepartmentModel.name.asc()).all()
        for department in departments:
            in_department = UserModel.department_id == department.id
            users_count = self.db.query(UserModel).filter(in_department).count()
            completed_sum = int(
                self.db.query(func.sum(UserModel.completed_courses))
                .filter(in_department)
                .scalar()
                or 0
            )
            active_count = (
                self.db.query(UserModel)
                .filter(in_department, UserModel.last_login >= self.active_since)
                .count()
            )
            results.append(
                DepartmentMetrics(
                    id=department.id,
                    name=department.name,
                    users_count=users_count,
                    completed_courses_count=completed_sum,
                    avg_completed_courses=completed_sum / users_count if users_count else 0.0,
                    active_users_count=active_count,
                    active_users_percentage=percentage(active_count, users_count),
                )
            )
        return results
