"""System configuration schema definitions."""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from schemas.common import CamelModel


class SystemConfig(CamelModel):
    id: int
    auto_register: bool
    manual_approval: bool
    inactivity_block_days: int
    inactivity_block_enabled: bool
    user_limit: int
    user_limit_enabled: bool
    updated_at: Optional[datetime] = None


class UpdateSystemConfigRequest(CamelModel):
    auto_register: Optional[bool] = None
    manual_approval: Optional[bool] = None
    inactivity_block_days: Optional[int] = None
    inactivity_block_enabled: Optional[bool] = None
    user_limit: Optional[int] = None
    user_limit_enabled: Optional[bool] = None

    @field_validator("inactivity_block_days")
    @classmethod
    def inactivity_days_positive(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise ValueError("Dias de inatividade deve ser um número inteiro positivo")
        return value

    @field_validator("user_limit")
    @classmethod
    def user_limit_positive(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise ValueError("Limite de usuários deve ser um número inteiro positivo")
        return value
