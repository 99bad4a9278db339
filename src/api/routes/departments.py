"""Department routes."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from api.routes.auth import AdminUser, CurrentUser
from config import DEFAULT_PAGE_SIZE
from core.dependencies import DepartmentManagerDep
from core.exceptions import (
    DependentRecordsError,
    DepartmentNotFoundError,
    DuplicateEntityError,
)
from schemas.common import Page
from schemas.department import (
    CreateDepartmentRequest,
    Department,
    UpdateDepartmentRequest,
)
from schemas.user import User


router = APIRouter(prefix="/api/departments", tags=["Departments"])


@router.get("", response_model=Page[Department], summary="List departments")
def list_departments(
    current_user: CurrentUser,
    department_manager: DepartmentManagerDep,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    search: Optional[str] = None,
) -> Page[Department]:
    """List departments ordered by name, optionally filtered by name."""
    items, total = department_manager.list_departments(page, limit, search=search)
    return Page[Department].of(Department, items, total, page, limit)


@router.get("/{department_id}", response_model=Department, summary="Get department")
def get_department(
    department_id: str,
    current_user: CurrentUser,
    department_manager: DepartmentManagerDep,
) -> Department:
    try:
        return Department.model_validate(department_manager.get_department(department_id))
    except DepartmentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get(
    "/{department_id}/users",
    response_model=Page[User],
    summary="List department users",
)
def list_department_users(
    department_id: str,
    current_user: CurrentUser,
    department_manager: DepartmentManagerDep,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
) -> Page[User]:
    try:
        items, total = department_manager.list_department_users(
            department_id, page, limit
        )
    except DepartmentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Page[User].of(User, items, total, page, limit)


@router.post(
    "",
    response_model=Department,
    status_code=status.HTTP_201_CREATED,
    summary="Create department",
)
def create_department(
    req: CreateDepartmentRequest,
    admin: AdminUser,
    department_manager: DepartmentManagerDep,
) -> Department:
    """Create a department.

    Args:
        req: Department fields; only ``name`` is required.
        admin: Authenticated admin.
        department_manager: Injected DepartmentManager instance.

    Returns:
        The created department.

    Raises:
        HTTPException: 400 if the name is already taken.
    """
    try:
        department = department_manager.create_department(**req.model_dump())
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return Department.model_validate(department)


@router.put("/{department_id}", response_model=Department, summary="Update department")
def update_department(
    department_id: str,
    req: UpdateDepartmentRequest,
    admin: AdminUser,
    department_manager: DepartmentManagerDep,
) -> Department:
    try:
        department = department_manager.update_department(
            department_id, req.model_dump(exclude_unset=True)
        )
    except DepartmentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return Department.model_validate(department)


@router.delete(
    "/{department_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete department",
)
def delete_department(
    department_id: str,
    admin: AdminUser,
    department_manager: DepartmentManagerDep,
) -> Response:
    """Delete a department that has no users."""
    try:
        department_manager.delete_department(department_id)
    except DepartmentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DependentRecordsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
