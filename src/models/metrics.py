from sqlalchemy import Column, DateTime, Float, Integer
from sqlalchemy.sql import func

from .base import Base


class MetricsSnapshotModel(Base):
    """Append-only record written every time the dashboard is computed."""

    __tablename__ = "metrics"

    id = Column(Integer, primary_key=True, index=True)
    total_users = Column(Integer, nullable=False)
    active_users = Column(Integer, nullable=False)
    total_courses = Column(Integer, nullable=False)
    active_courses = Column(Integer, nullable=False)
    completion_rate = Column(Float, nullable=False)
    average_grade = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
