"""Key/value settings model"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text

from app.database import Base


class Setting(Base):
    """Runtime credentials editable from the dashboard"""
    __tablename__ = "settings"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False, default="")
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
