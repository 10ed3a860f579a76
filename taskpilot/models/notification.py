"""Notification model"""

from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from taskpilot.core.database import Base


class Notification(Base):
    __tablename__ = "notifications"

    # id déterministe: "today:<task_id>" ou "overdue:<task_id>"
    id = Column(String, primary_key=True, index=True)
    task_id = Column(String, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)

    message = Column(String, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    task = relationship("Task", back_populates="notifications")

    def __repr__(self) -> str:
        return f"<Notification id={self.id!r} is_read={self.is_read!r}>"
