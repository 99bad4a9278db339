"""Course schema definitions."""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from models.enums import CourseStatus
from schemas.common import CamelModel


class Course(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    status: CourseStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateCourseRequest(CamelModel):
    title: str
    description: Optional[str] = None
    status: CourseStatus = CourseStatus.ACTIVE

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Título é obrigatório")
        return value.strip()


class UpdateCourseRequest(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[CourseStatus] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("Título não pode ser vazio")
        return value.strip() if value is not None else value
