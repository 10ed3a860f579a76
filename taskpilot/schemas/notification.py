from pydantic import BaseModel, ConfigDict
from datetime import datetime

# Schemas notifications

class NotificationResponse(BaseModel):
    id: str
    task_id: str
    message: str
    is_read: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NotificationCreate(BaseModel):
    """Notification produite par la dérivation, avant fusion"""
    id: str
    task_id: str
    message: str
    created_at: datetime
