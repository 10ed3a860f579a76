"""
Dérivation des notifications à partir des échéances.

La dérivation est pure (build_due_notifications) et la fusion idempotente
(merge_notifications): un id déjà présent n'est jamais recréé, son is_read est
conservé. Aucune notification n'est supprimée ici, seule la suppression d'une
tâche les efface (cascade).
"""

import logging
from datetime import date, datetime
from typing import Iterable, List
from sqlalchemy.orm import Session
from taskpilot.models.notification import Notification
from taskpilot.models.task import Task
from taskpilot.schemas.notification import NotificationCreate

logger = logging.getLogger(__name__)

TODAY = "today"
OVERDUE = "overdue"


def notification_id(reason: str, task_id: str) -> str:
    return f"{reason}:{task_id}"


MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_due_date(value: date) -> str:
    # ex: "October 18th, 2026" (indépendant de la locale)
    return f"{MONTHS[value.month - 1]} {ordinal(value.day)}, {value.year}"


def build_due_notifications(tasks: Iterable[Task], now: datetime) -> List[NotificationCreate]:
    today = now.date()
    drafts = []

    for task in tasks:
        if task.due_date is None or task.completed:
            continue

        due = task.due_date.date()

        if due == today:
            drafts.append(NotificationCreate(
                id=notification_id(TODAY, task.id),
                task_id=task.id,
                message=f'Task "{task.title}" is due today!',
                created_at=now,
            ))
        elif due < today:
            drafts.append(NotificationCreate(
                id=notification_id(OVERDUE, task.id),
                task_id=task.id,
                message=f'Task "{task.title}" is overdue! It was due on {format_due_date(due)}.',
                created_at=now,
            ))

    return drafts


def merge_notifications(db: Session, drafts: Iterable[NotificationCreate]) -> List[Notification]:
    """Ajoute les notifications dont l'id n'existe pas encore (sans commit)"""
    existing_ids = {row.id for row in db.query(Notification.id).all()}

    added = []
    for draft in drafts:
        if draft.id in existing_ids:
            continue
        notification = Notification(**draft.model_dump(), is_read=False)
        db.add(notification)
        existing_ids.add(draft.id)
        added.append(notification)

    if added:
        logger.info(f"{len(added)} notification(s) generated: {[n.id for n in added]}")

    return added
