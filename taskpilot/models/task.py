"""Task model"""

import enum
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import relationship
from datetime import datetime
from taskpilot.core.database import Base


class TaskStatus(str, enum.Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class TaskPriority(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String, primary_key=True, index=True)
    position = Column(Integer, nullable=False, index=True)  # ordre d'insertion

    title = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    due_date = Column(DateTime, nullable=True, index=True)
    status = Column(String, nullable=False, default=TaskStatus.PENDING.value)
    priority = Column(String, nullable=False, default=TaskPriority.MEDIUM.value)
    category = Column(String, nullable=False, index=True)

    created_at = Column(DateTime, nullable=False, default=datetime.now)

    notifications = relationship(
        "Notification",
        back_populates="task",
        cascade="all, delete-orphan",
    )

    @hybrid_property
    def completed(self):
        # Dérivé du statut, jamais stocké
        return self.status == TaskStatus.COMPLETED.value

    def __repr__(self) -> str:
        return f"<Task id={self.id!r} title={self.title!r} status={self.status!r}>"
