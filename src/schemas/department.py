"""Department schema definitions."""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from config import DEFAULT_SIMULTANEOUS_COURSES
from schemas.common import CamelModel

_SIMULTANEOUS_COURSES_MESSAGE = (
    "Limite de cursos simultâneos deve ser um número inteiro positivo"
)


def _check_simultaneous_courses(value: Optional[int]) -> Optional[int]:
    if value is not None and value < 1:
        raise ValueError(_SIMULTANEOUS_COURSES_MESSAGE)
    return value


class Department(CamelModel):
    id: str
    name: str
    access_all_courses: bool
    access_all_tracks: bool
    certificate_permission: bool
    simultaneous_courses: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateDepartmentRequest(CamelModel):
    name: str
    access_all_courses: bool = True
    access_all_tracks: bool = True
    certificate_permission: bool = True
    simultaneous_courses: int = DEFAULT_SIMULTANEOUS_COURSES

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Nome é obrigatório")
        return value.strip()

    @field_validator("simultaneous_courses")
    @classmethod
    def simultaneous_courses_positive(cls, value):
        return _check_simultaneous_courses(value)


class UpdateDepartmentRequest(CamelModel):
    name: Optional[str] = None
    access_all_courses: Optional[bool] = None
    access_all_tracks: Optional[bool] = None
    certificate_permission: Optional[bool] = None
    simultaneous_courses: Optional[int] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("Nome não pode ser vazio")
        return value.strip() if value is not None else value

    @field_validator("simultaneous_courses")
    @classmethod
    def simultaneous_courses_positive(cls, value):
        return _check_simultaneous_courses(value)
