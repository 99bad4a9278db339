"""Course routes."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from api.routes.auth import AdminUser, CurrentUser
from config import DEFAULT_PAGE_SIZE
from core.dependencies import CourseManagerDep
from core.exceptions import CourseNotFoundError, DependentRecordsError
from models.enums import CourseStatus
from schemas.common import Page
from schemas.course import Course, CreateCourseRequest, UpdateCourseRequest
from schemas.user_course import UserCourse


router = APIRouter(prefix="/api/courses", tags=["Courses"])


@router.get("", response_model=Page[Course], summary="List courses")
def list_courses(
    current_user: CurrentUser,
    course_manager: CourseManagerDep,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    search: Optional[str] = None,
    course_status: Optional[CourseStatus] = Query(None, alias="status"),
) -> Page[Course]:
    """List courses ordered by title.

    Args:
        current_user: Authenticated user.
        course_manager: Injected CourseManager instance.
        page: Page number, starting at 1.
        limit: Page size.
        search: Case-insensitive substring of title or description.
        course_status: Exact status.

    Returns:
        One page of courses.
    """
    items, total = course_manager.list_courses(
        page, limit, search=search, status=course_status
    )
    return Page[Course].of(Course, items, total, page, limit)


@router.get("/{course_id}", response_model=Course, summary="Get course")
def get_course(
    course_id: str, current_user: CurrentUser, course_manager: CourseManagerDep
) -> Course:
    try:
        return Course.model_validate(course_manager.get_course(course_id))
    except CourseNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get(
    "/{course_id}/users",
    response_model=Page[UserCourse],
    summary="List course enrollments",
)
def list_course_users(
    course_id: str,
    current_user: CurrentUser,
    course_manager: CourseManagerDep,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
) -> Page[UserCourse]:
    """List the course's enrollments with their users, newest first."""
    try:
        items, total = course_manager.list_course_enrollments(course_id, page, limit)
    except CourseNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Page[UserCourse].of(UserCourse, items, total, page, limit)


@router.post(
    "",
    response_model=Course,
    status_code=status.HTTP_201_CREATED,
    summary="Create course",
)
def create_course(
    req: CreateCourseRequest, admin: AdminUser, course_manager: CourseManagerDep
) -> Course:
    course = course_manager.create_course(
        title=req.title, description=req.description, status=req.status
    )
    return Course.model_validate(course)


@router.put("/{course_id}", response_model=Course, summary="Update course")
def update_course(
    course_id: str,
    req: UpdateCourseRequest,
    admin: AdminUser,
    course_manager: CourseManagerDep,
) -> Course:
    """Partially update a course; an explicit null clears the description."""
    try:
        course = course_manager.update_course(
            course_id, req.model_dump(exclude_unset=True)
        )
    except CourseNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Course.model_validate(course)


@router.delete(
    "/{course_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete course"
)
def delete_course(
    course_id: str, admin: AdminUser, course_manager: CourseManagerDep
) -> Response:
    """Delete a course nobody is enrolled in."""
    try:
        course_manager.delete_course(course_id)
    except CourseNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DependentRecordsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
