"""System configuration management.

The configuration is a single row created with defaults on first access.
"""

import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from config import SYSTEM_CONFIG_DEFAULTS
from models.system_config import SystemConfigModel

logger = logging.getLogger(__name__)


class SystemConfigManager:
    """Reads and updates the singleton system configuration."""

    def __init__(self, db: Session):
        self.db = db

    def get_config(self) -> SystemConfigModel:
        """Return the configuration row, creating it with defaults if missing."""
        model = self.db.query(SystemConfigModel).order_by(SystemConfigModel.id).first()
        if model is None:
            model = SystemConfigModel(**SYSTEM_CONFIG_DEFAULTS)
            self.db.add(model)
            self.db.commit()
            self.db.refresh(model)
            logger.info("Created default system configuration")
        return model

    def update_config(self, updates: Dict[str, Any]) -> SystemConfigModel:
        """Apply a partial update; ``None`` values are ignored."""
        model = self.get_config()
        updates = {key: value for key, value in updates.items() if value is not None}
        for key, value in updates.items():
            setattr(model, key, value)
        self.db.commit()
        self.db.refresh(model)
        logger.info("Updated system configuration: %s", sorted(updates))
        return model
