"""System configuration routes (admin only)."""

from fastapi import APIRouter

from api.routes.auth import AdminUser
from core.dependencies import SystemConfigManagerDep
from schemas.system_config import SystemConfig, UpdateSystemConfigRequest

router = APIRouter(prefix="/api/system-config", tags=["System Config"])


@router.get("", response_model=SystemConfig, summary="Get system configuration")
def get_system_config(
    admin: AdminUser, system_config_manager: SystemConfigManagerDep
) -> SystemConfig:
    """Return the configuration, creating it with defaults on first access."""
    return SystemConfig.model_validate(system_config_manager.get_config())


@router.put("", response_model=SystemConfig, summary="Update system configuration")
def update_system_config(
    req: UpdateSystemConfigRequest,
    admin: AdminUser,
    system_config_manager: SystemConfigManagerDep,
) -> SystemConfig:
    config = system_config_manager.update_config(req.model_dump(exclude_unset=True))
    return SystemConfig.model_validate(config)
