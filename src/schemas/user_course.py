"""Enrollment (user-course) schema definitions."""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from schemas.common import CamelModel
from schemas.course import Course
from schemas.user import User

MIN_PROGRESS = 0
MAX_PROGRESS = 100
MIN_GRADE = 0.0
MAX_GRADE = 10.0

PROGRESS_MESSAGE = (
    f"Progresso deve ser um número inteiro entre {MIN_PROGRESS} e {MAX_PROGRESS}"
)
GRADE_MESSAGE = "Nota deve ser um número entre 0 e 10"


class UserCourse(CamelModel):
    id: str
    user_id: str
    course_id: str
    progress: int
    completed: bool
    grade: Optional[float] = None
    start_date: datetime
    end_date: Optional[datetime] = None
    user: Optional[User] = None
    course: Optional[Course] = None


class CreateUserCourseRequest(CamelModel):
    user_id: str
    course_id: str

    @field_validator("user_id")
    @classmethod
    def user_id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("ID do usuário é obrigatório")
        return value.strip()

    @field_validator("course_id")
    @classmethod
    def course_id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("ID do curso é obrigatório")
        return value.strip()


class UpdateProgressRequest(CamelModel):
    progress: int

    @field_validator("progress", mode="before")
    @classmethod
    def progress_not_boolean(cls, value):
        # JSON true/false would otherwise be coerced to 1/0
        if isinstance(value, bool):
            raise ValueError(PROGRESS_MESSAGE)
        return value

    @field_validator("progress")
    @classmethod
    def progress_in_range(cls, value: int) -> int:
        if not MIN_PROGRESS <= value <= MAX_PROGRESS:
            raise ValueError(PROGRESS_MESSAGE)
        return value


class CompleteUserCourseRequest(CamelModel):
    grade: Optional[float] = None

    @field_validator("grade", mode="before")
    @classmethod
    def grade_not_boolean(cls, value):
        if isinstance(value, bool):
            raise ValueError(GRADE_MESSAGE)
        return value

    @field_validator("grade")
    @classmethod
    def grade_in_range(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and not MIN_GRADE <= value <= MAX_GRADE:
            raise ValueError(GRADE_MESSAGE)
        return value
