from pydantic import BaseModel
from typing import Literal, Optional

EventKind = Literal[
    "task_added",
    "task_updated",
    "task_completed",
    "task_deleted",
    "notification_read",
]


class StoreEvent(BaseModel):
    """Événement envoyé aux abonnés après chaque mutation appliquée"""
    kind: EventKind
    task_id: Optional[str] = None
    notification_id: Optional[str] = None
    version: int
