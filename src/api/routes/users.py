"""User routes.

This module handles HTTP endpoints for listing, searching and managing users.
Reads are open to any authenticated user; writes require an admin.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from api.routes.auth import AdminUser, CurrentUser
from config import DEFAULT_PAGE_SIZE
from core.dependencies import UserManagerDep
from core.exceptions import (
    DepartmentNotFoundError,
    DuplicateEntityError,
    UserNotFoundError,
    ValidationError,
)
from models.enums import UserStatus
from schemas.common import Page
from schemas.user import CreateUserRequest, UpdateUserRequest, User
from schemas.user_course import UserCourse


router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=Page[User], summary="List users")
def list_users(
    current_user: CurrentUser,
    user_manager: UserManagerDep,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    search: Optional[str] = None,
    department: Optional[str] = Query(None, description="Department ID."),
    user_status: Optional[UserStatus] = Query(None, alias="status"),
) -> Page[User]:
    """List users ordered by name.

    Args:
        current_user: Authenticated user.
        user_manager: Injected UserManager instance.
        page: Page number, starting at 1.
        limit: Page size.
        search: Case-insensitive substring of name or email.
        department: Exact department ID.
        user_status: Exact status.

    Returns:
        One page of users.
    """
    items, total = user_manager.list_users(
        page, limit, search=search, department_id=department, status=user_status
    )
    return Page[User].of(User, items, total, page, limit)


@router.get("/search", response_model=List[User], summary="Search users")
def search_users(
    current_user: CurrentUser,
    user_manager: UserManagerDep,
    q: Optional[str] = None,
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
) -> List[User]:
    """Unpaginated search on name or email."""
    try:
        users = user_manager.search_users(q, limit)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return [User.model_validate(user) for user in users]


@router.get("/{user_id}", response_model=User, summary="Get user")
def get_user(
    user_id: str, current_user: CurrentUser, user_manager: UserManagerDep
) -> User:
    try:
        return User.model_validate(user_manager.get_user(user_id))
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get(
    "/{user_id}/courses", response_model=Page[UserCourse], summary="List user courses"
)
def list_user_courses(
    user_id: str,
    current_user: CurrentUser,
    user_manager: UserManagerDep,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
) -> Page[UserCourse]:
    """List the user's enrollments, newest first, each with its course."""
    try:
        items, total = user_manager.list_user_courses(user_id, page, limit)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Page[UserCourse].of(UserCourse, items, total, page, limit)


@router.post(
    "",
    response_model=User,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
)
def create_user(
    req: CreateUserRequest, admin: AdminUser, user_manager: UserManagerDep
) -> User:
    """Create a new active user.

    Args:
        req: User fields, password in plain text.
        admin: Authenticated admin.
        user_manager: Injected UserManager instance.

    Returns:
        The created user.

    Raises:
        HTTPException: 400 if the email is taken or the department is unknown.
    """
    try:
        user = user_manager.create_user(
            name=req.name,
            email=req.email,
            password=req.password,
            department_id=req.department_id,
            role=req.role,
        )
    except (DuplicateEntityError, DepartmentNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return User.model_validate(user)


@router.put("/{user_id}", response_model=User, summary="Update user")
def update_user(
    user_id: str,
    req: UpdateUserRequest,
    admin: AdminUser,
    user_manager: UserManagerDep,
) -> User:
    try:
        user = user_manager.update_user(user_id, req.model_dump(exclude_unset=True))
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (DuplicateEntityError, DepartmentNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return User.model_validate(user)


@router.delete(
    "/{user_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete user"
)
def delete_user(
    user_id: str, admin: AdminUser, user_manager: UserManagerDep
) -> Response:
    """Delete a user together with its enrollments."""
    try:
        user_manager.delete_user(user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
