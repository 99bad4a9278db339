"""Enrollment lifecycle management.

An enrollment is Active (``completed`` false, progress 0-99) until it reaches
progress 100 or is explicitly completed, at which point it becomes Completed
(``completed`` true, progress 100, ``end_date`` set).

The owning user's ``completed_courses`` counter follows the transitions only:
it is incremented when an enrollment moves from Active to Completed and
decremented when a Completed enrollment is deleted. The prior persisted state
is read before every mutation to decide this, so repeated completions never
count twice.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

import pytz
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from core.exceptions import (
    CourseNotFoundError,
    DuplicateEntityError,
    EnrollmentLimitError,
    UserCourseNotFoundError,
    UserNotFoundError,
)
from models.course import CourseModel
from models.user import UserModel
from models.user_course import UserCourseModel
from utils.pagination import paginate

logger = logging.getLogger(__name__)

COMPLETE_PROGRESS = 100

ALREADY_ENROLLED_MESSAGE = "Usuário já está matriculado neste curso"


def _enrollment_options():
    return (
        joinedload(UserCourseModel.user).joinedload(UserModel.department),
        joinedload(UserCourseModel.course),
    )


class UserCourseManager:
    """Creates, progresses, completes and deletes enrollments."""

    def __init__(self, db: Session):
        """Initialize UserCourseManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def _adjust_completed_courses(self, user_id: str, delta: int) -> None:
        # Arithmetic happens in SQL so concurrent adjustments do not overwrite
        # each other
        self.db.query(UserModel).filter(UserModel.id == user_id).update(
            {UserModel.completed_courses: UserModel.completed_courses + delta},
            synchronize_session=False,
        )

    def get_user_course(self, user_course_id: str) -> UserCourseModel:
        """Get an enrollment with its user (and department) and course.

        Raises:
            UserCourseNotFoundError: If the enrollment does not exist.
        """
        model = (
            self.db.query(UserCourseModel)
            .options(*_enrollment_options())
            .filter(UserCourseModel.id == user_course_id)
            .first()
        )
        if not model:
            raise UserCourseNotFoundError(user_course_id)
        return model

    def list_user_courses(
        self,
        page: int,
        limit: int,
        user_id: Optional[str] = None,
        course_id: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> Tuple[List[UserCourseModel], int]:
        """List enrollments, newest first.

        Args:
            page: Page number, starting at 1.
            limit: Page size.
            user_id: Only enrollments of this user.
            course_id: Only enrollments in this course.
            completed: Only completed (True) or active (False) enrollments.

        Returns:
            Tuple of (enrollments on the page, total matches).
        """
        query = self.db.query(UserCourseModel)
        if user_id:
            query = query.filter(UserCourseModel.user_id == user_id)
        if course_id:
            query = query.filter(UserCourseModel.course_id == course_id)
        if completed is not None:
            query = query.filter(UserCourseModel.completed.is_(completed))
        return paginate(
            query,
            page,
            limit,
            order_by=(UserCourseModel.start_date.desc(),),
            options=_enrollment_options(),
        )

    def count_active_enrollments(self, user_id: str) -> int:
        return (
            self.db.query(UserCourseModel)
            .filter(
                UserCourseModel.user_id == user_id,
                UserCourseModel.completed.is_(False),
            )
            .count()
        )

    def enroll(self, user_id: str, course_id: str) -> UserCourseModel:
        """Enroll a user in a course.

        Args:
            user_id: ID of the user to enroll.
            course_id: ID of the course.

        Returns:
            The new, active enrollment.

        Raises:
            UserNotFoundError: If the user does not exist.
            CourseNotFoundError: If the course does not exist.
            DuplicateEntityError: If the user is already enrolled in the course.
            EnrollmentLimitError: If the user's active enrollments reached the
                department's simultaneous course limit.
        """
        user = (
            self.db.query(UserModel)
            .options(joinedload(UserModel.department))
            .filter(UserModel.id == user_id)
            .first()
        )
        if not user:
            raise UserNotFoundError(user_id)

        course = self.db.query(CourseModel).filter(CourseModel.id == course_id).first()
        if not course:
            raise CourseNotFoundError(course_id)

        existing = (
            self.db.query(UserCourseModel.id)
            .filter(
                UserCourseModel.user_id == user_id,
                UserCourseModel.course_id == course_id,
            )
            .first()
        )
        if existing:
            raise DuplicateEntityError(ALREADY_ENROLLED_MESSAGE)

        limit = user.department.simultaneous_courses
        active = self.count_active_enrollments(user_id)
        if active >= limit:
            logger.info(
                "User %s reached the limit of %d simultaneous courses", user_id, limit
            )
            raise EnrollmentLimitError(limit)

        model = UserCourseModel(
            user_id=user_id,
            course_id=course_id,
            progress=0,
            completed=False,
            start_date=datetime.now(pytz.utc),
        )
        try:
            self.db.add(model)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateEntityError(ALREADY_ENROLLED_MESSAGE) from e

        logger.info("Enrolled user %s in course %s (%s)", user_id, course_id, model.id)
        return self.get_user_course(model.id)

    def update_progress(self, user_course_id: str, progress: int) -> UserCourseModel:
        """Set the progress of an enrollment.

        Progress 100 completes the enrollment. A completed enrollment stays
        completed whatever progress is set afterwards.

        Args:
            user_course_id: ID of the enrollment.
            progress: New progress, 0-100.

        Returns:
            The updated enrollment.

        Raises:
            UserCourseNotFoundError: If the enrollment does not exist.
        """
        model = self.get_user_course(user_course_id)
        was_completed = model.completed

        model.progress = progress
        if progress == COMPLETE_PROGRESS:
            model.completed = True
            model.end_date = datetime.now(pytz.utc)
            if not was_completed:
                self._adjust_completed_courses(model.user_id, 1)
                logger.info("Enrollment %s completed through progress", user_course_id)
        self.db.commit()

        return self.get_user_course(user_course_id)

    def complete(self, user_course_id: str, grade: Optional[float] = None) -> UserCourseModel:
        """Mark an enrollment as completed, optionally with a grade.

        Args:
            user_course_id: ID of the enrollment.
            grade: Optional grade, 0-10. Leaves the stored grade untouched
                when omitted.

        Returns:
            The completed enrollment.

        Raises:
            UserCourseNotFoundError: If the enrollment does not exist.
        """
        model = self.get_user_course(user_course_id)
        was_completed = model.completed

        model.progress = COMPLETE_PROGRESS
        model.completed = True
        model.end_date = datetime.now(pytz.utc)
        if grade is not None:
            model.grade = grade
        if not was_completed:
            self._adjust_completed_courses(model.user_id, 1)
        self.db.commit()

        logger.info("Enrollment %s marked as completed", user_course_id)
        return self.get_user_course(user_course_id)

    def delete(self, user_course_id: str) -> None:
        """Delete an enrollment, giving back its completion if it had one.

        Raises:
            UserCourseNotFoundError: If the enrollment does not exist.
        """
        model = self.get_user_course(user_course_id)
        user_id, was_completed = model.user_id, model.completed

        self.db.delete(model)
        if was_completed:
            self._adjust_completed_courses(user_id, -1)
        self.db.commit()
        logger.info("Deleted enrollment: %s", user_course_id)
