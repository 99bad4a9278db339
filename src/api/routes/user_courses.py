"""Enrollment (user-course) routes.

Enrolling and deleting require an admin. Progress updates and completion are
open to any authenticated user.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from api.routes.auth import AdminUser, CurrentUser
from config import DEFAULT_PAGE_SIZE
from core.dependencies import UserCourseManagerDep
from core.exceptions import (
    CourseNotFoundError,
    DuplicateEntityError,
    EnrollmentLimitError,
    UserCourseNotFoundError,
    UserNotFoundError,
)
from schemas.common import Page
from schemas.user_course import (
    CompleteUserCourseRequest,
    CreateUserCourseRequest,
    UpdateProgressRequest,
    UserCourse,
)


router = APIRouter(prefix="/api/user-courses", tags=["User Courses"])


@router.get("", response_model=Page[UserCourse], summary="List enrollments")
def list_user_courses(
    current_user: CurrentUser,
    user_course_manager: UserCourseManagerDep,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    user_id: Optional[str] = Query(None, alias="userId"),
    course_id: Optional[str] = Query(None, alias="courseId"),
    completed: Optional[bool] = None,
) -> Page[UserCourse]:
    """List enrollments, newest first.

    Args:
        current_user: Authenticated user.
        user_course_manager: Injected UserCourseManager instance.
        page: Page number, starting at 1.
        limit: Page size.
        user_id: Only enrollments of this user.
        course_id: Only enrollments in this course.
        completed: Only completed (true) or active (false) enrollments.

    Returns:
        One page of enrollments with their user and course.
    """
    items, total = user_course_manager.list_user_courses(
        page, limit, user_id=user_id, course_id=course_id, completed=completed
    )
    return Page[UserCourse].of(UserCourse, items, total, page, limit)


@router.get("/{user_course_id}", response_model=UserCourse, summary="Get enrollment")
def get_user_course(
    user_course_id: str,
    current_user: CurrentUser,
    user_course_manager: UserCourseManagerDep,
) -> UserCourse:
    try:
        return UserCourse.model_validate(
            user_course_manager.get_user_course(user_course_id)
        )
    except UserCourseNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post(
    "",
    response_model=UserCourse,
    status_code=status.HTTP_201_CREATED,
    summary="Enroll user",
)
def create_user_course(
    req: CreateUserCourseRequest,
    admin: AdminUser,
    user_course_manager: UserCourseManagerDep,
) -> UserCourse:
    """Enroll a user in a course.

    Unknown user or course, an existing enrollment and a reached department
    limit are all reported as 400.
    """
    try:
        enrollment = user_course_manager.enroll(req.user_id, req.course_id)
    except (
        UserNotFoundError,
        CourseNotFoundError,
        DuplicateEntityError,
        EnrollmentLimitError,
    ) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return UserCourse.model_validate(enrollment)


@router.put(
    "/{user_course_id}/progress",
    response_model=UserCourse,
    summary="Update progress",
)
def update_progress(
    user_course_id: str,
    req: UpdateProgressRequest,
    current_user: CurrentUser,
    user_course_manager: UserCourseManagerDep,
) -> UserCourse:
    try:
        enrollment = user_course_manager.update_progress(user_course_id, req.progress)
    except UserCourseNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return UserCourse.model_validate(enrollment)


@router.put(
    "/{user_course_id}/complete",
    response_model=UserCourse,
    summary="Complete enrollment",
)
def complete_user_course(
    user_course_id: str,
    current_user: CurrentUser,
    user_course_manager: UserCourseManagerDep,
    req: Optional[CompleteUserCourseRequest] = None,
) -> UserCourse:
    """Mark an enrollment completed, optionally recording a grade."""
    grade = req.grade if req else None
    try:
        enrollment = user_course_manager.complete(user_course_id, grade=grade)
    except UserCourseNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return UserCourse.model_validate(enrollment)


@router.delete(
    "/{user_course_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete enrollment",
)
def delete_user_course(
    user_course_id: str,
    admin: AdminUser,
    user_course_manager: UserCourseManagerDep,
) -> Response:
    try:
        user_course_manager.delete(user_course_id)
    except UserCourseNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
