from sqlalchemy import Boolean, Column, DateTime, Integer
from sqlalchemy.sql import func

from .base import Base


class SystemConfigModel(Base):
    """Singleton row holding global administrative toggles."""

    __tablename__ = "system_config"

    id = Column(Integer, primary_key=True, index=True)
    auto_register = Column(Boolean, nullable=False, default=False)
    manual_approval = Column(Boolean, nullable=False, default=True)
    inactivity_block_days = Column(Integer, nullable=False, default=30)
    inactivity_block_enabled = Column(Boolean, nullable=False, default=False)
    user_limit = Column(Integer, nullable=False, default=2000)
    user_limit_enabled = Column(Boolean, nullable=False, default=True)

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )
