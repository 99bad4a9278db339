"""User schema definitions.

None of the response models here declare a password field, so a password
hash can never reach a response body regardless of what the ORM row holds.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, field_validator

from models.enums import UserRole, UserStatus
from schemas.common import CamelModel
from schemas.department import Department

MIN_PASSWORD_LENGTH = 6


class User(CamelModel):
    """Public representation of a user."""

    id: str
    name: str
    email: str
    role: UserRole
    status: UserStatus
    department_id: str
    department: Optional[Department] = None
    completed_courses: int = 0
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateUserRequest(CamelModel):
    name: str
    email: EmailStr
    password: str
    department_id: str
    role: UserRole = UserRole.USER

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Nome é obrigatório")
        return value.strip()

    @field_validator("password")
    @classmethod
    def password_long_enough(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Senha deve ter pelo menos {MIN_PASSWORD_LENGTH} caracteres"
            )
        return value

    @field_validator("department_id")
    @classmethod
    def department_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Departamento é obrigatório")
        return value.strip()


class UpdateUserRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    department_id: Optional[str] = None
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("Nome não pode ser vazio")
        return value.strip() if value is not None else value

    @field_validator("department_id")
    @classmethod
    def department_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("Departamento não pode ser vazio")
        return value.strip() if value is not None else value


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(CamelModel):
    token: str
    user: User


class TokenResponse(BaseModel):
    token: str
