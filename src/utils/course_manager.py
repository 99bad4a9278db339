"""Course management utilities."""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from core.exceptions import CourseNotFoundError, DependentRecordsError
from models.course import CourseModel
from models.enums import CourseStatus
from models.user import UserModel
from models.user_course import UserCourseModel
from utils.pagination import paginate

logger = logging.getLogger(__name__)

# Fields that may be explicitly cleared with null on update
NULLABLE_FIELDS = {"description"}


class CourseManager:
    """Manages course records and their enrollment listings."""

    def __init__(self, db: Session):
        self.db = db

    def get_course(self, course_id: str) -> CourseModel:
        model = self.db.query(CourseModel).filter(CourseModel.id == course_id).first()
        if not model:
            raise CourseNotFoundError(course_id)
        return model

    def list_courses(
        self,
        page: int,
        limit: int,
        search: Optional[str] = None,
        status: Optional[CourseStatus] = None,
    ) -> Tuple[List[CourseModel], int]:
        """List courses ordered by title.

        Args:
            page: Page number, starting at 1.
            limit: Page size.
            search: Case-insensitive substring of title or description.
            status: Exact status.

        Returns:
            Tuple of (courses on the page, total matches).
        """
        query = self.db.query(CourseModel)
        if search:
            query = query.filter(
                or_(
                    CourseModel.title.icontains(search, autoescape=True),
                    CourseModel.description.icontains(search, autoescape=True),
                )
            )
        if status:
            query = query.filter(CourseModel.status == status)
        return paginate(query, page, limit, order_by=(CourseModel.title.asc(),))

    def create_course(
        self,
        title: str,
        description: Optional[str] = None,
        status: CourseStatus = CourseStatus.ACTIVE,
    ) -> CourseModel:
        model = CourseModel(title=title, description=description, status=status)
        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)
        logger.info("Created course: %s (%s)", model.id, title)
        return model

    def update_course(self, course_id: str, updates: Dict[str, Any]) -> CourseModel:
        model = self.get_course(course_id)
        updates = {
            key: value
            for key, value in updates.items()
            if value is not None or key in NULLABLE_FIELDS
        }
        for key, value in updates.items():
            setattr(model, key, value)
        self.db.commit()
        self.db.refresh(model)
        logger.info("Updated course %s: %s", course_id, sorted(updates))
        return model

    def delete_course(self, course_id: str) -> None:
        """Delete a course nobody is enrolled in.

        Raises:
            CourseNotFoundError: If the course does not exist.
            DependentRecordsError: If enrollments still reference it.
        """
        model = self.get_course(course_id)
        enrollments = (
            self.db.query(UserCourseModel)
            .filter(UserCourseModel.course_id == course_id)
            .count()
        )
        if enrollments > 0:
            logger.info(
                "Refused to delete course %s with %d enrollments", course_id, enrollments
            )
            raise DependentRecordsError(
                "Não é possível excluir o curso pois existem usuários matriculados nele"
            )
        self.db.delete(model)
        self.db.commit()
        logger.info("Deleted course: %s", course_id)

    def list_course_enrollments(
        self, course_id: str, page: int, limit: int
    ) -> Tuple[List[UserCourseModel], int]:
        """List enrollments of a course with their users, newest first."""
        self.get_course(course_id)
        query = self.db.query(UserCourseModel).filter(UserCourseModel.course_id == course_id)
        return paginate(
            query,
            page,
            limit,
            order_by=(UserCourseModel.start_date.desc(),),
            options=(
                joinedload(UserCourseModel.user).joinedload(UserModel.department),
            ),
        )
