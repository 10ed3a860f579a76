"""
Store des tâches - état canonique en mémoire

Le store possède les tâches, la liste des catégories et les notifications.
Chaque mutation appliquée:
1. incrémente la version
2. relance la dérivation des notifications
3. commit
4. prévient les abonnés (StoreEvent)

Une tâche inconnue n'est pas une erreur: les opérations renvoient None/False.
Une saisie invalide lève pydantic.ValidationError avant toute modification.
"""

import enum
import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from pydantic import BaseModel
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskpilot.core.config import settings
from taskpilot.models.notification import Notification
from taskpilot.models.task import Task, TaskStatus
from taskpilot.schemas.event import StoreEvent
from taskpilot.schemas.notification import NotificationResponse
from taskpilot.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from taskpilot.services.notification_service import build_due_notifications, merge_notifications
from taskpilot.services.search_service import filter_tasks
from taskpilot.services.task_service import get_now

logger = logging.getLogger(__name__)

Listener = Callable[[StoreEvent], None]

# Champs obligatoires: un None explicite est ignoré
NON_NULLABLE_FIELDS = {"title", "status", "priority", "category"}


class TaskStore:
    def __init__(
        self,
        db: Session,
        categories: Optional[Iterable[str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.db = db
        self._categories = list(categories) if categories is not None else list(settings.TASK_CATEGORIES)
        self._clock = clock or get_now
        self._listeners: List[Listener] = []
        self._version = 0
        self._derived_version: Optional[int] = None
        logger.info(f"TaskStore ready categories={self._categories}")

    # ============ VUES ============

    @property
    def version(self) -> int:
        return self._version

    def now(self) -> datetime:
        return self._clock()

    @property
    def categories(self) -> List[str]:
        return list(self._categories)

    @property
    def tasks(self) -> List[Task]:
        return self.db.query(Task).order_by(Task.position).all()

    @property
    def notifications(self) -> List[Notification]:
        return self.db.query(Notification).order_by(Notification.created_at, Notification.id).all()

    @property
    def unread_notifications(self) -> List[Notification]:
        return [n for n in self.notifications if not n.is_read]

    @property
    def unread_count(self) -> int:
        return self.db.query(Notification).filter(Notification.is_read == False).count()

    def get_task_by_id(self, task_id: str) -> Optional[Task]:
        return self.db.get(Task, task_id)

    def get_notification_by_id(self, notification_id: str) -> Optional[Notification]:
        return self.db.get(Notification, notification_id)

    def filter_tasks(self, status=None, priority=None, category=None, search=None) -> List[Task]:
        return filter_tasks(self.tasks, status=status, priority=priority, category=category, search=search)

    def snapshot(self) -> Dict[str, Any]:
        """Vue lecture seule pour la couche de présentation"""
        return {
            "tasks": [TaskResponse.model_validate(t) for t in self.tasks],
            "notifications": [NotificationResponse.model_validate(n) for n in self.notifications],
            "unread_count": self.unread_count,
            "categories": self.categories,
        }

    # ============ ABONNEMENTS ============

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, kind: str, task_id: str = None, notification_id: str = None) -> None:
        event = StoreEvent(kind=kind, task_id=task_id, notification_id=notification_id, version=self._version)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(f"Store listener failed on {kind} task_id={task_id}")

    # ============ MUTATIONS ============

    def add_task(self, draft: Union[TaskCreate, Dict[str, Any]]) -> Task:
        draft = self._validate(TaskCreate, draft)

        task = Task(
            id=self._new_id(),
            position=self._next_position(),
            title=draft.title,
            description=draft.description,
            due_date=draft.due_date,
            status=draft.status.value,
            priority=draft.priority.value,
            category=draft.category,
            created_at=self._clock(),
        )
        self.db.add(task)
        self._apply("task_added", task.id)
        logger.info(f"Task added id={task.id} title={task.title!r} category={task.category}")
        return task

    def update_task(self, task_id: str, fields: Union[TaskUpdate, Dict[str, Any]]) -> Optional[Task]:
        task = self.get_task_by_id(task_id)
        if task is None:
            logger.debug(f"update_task: task {task_id} not found")
            return None

        update = self._validate(TaskUpdate, fields)

        update_data = update.model_dump(exclude_unset=True)

        # completed est dérivé du statut: on le traduit, le statut explicite gagne
        completed = update_data.pop("completed", None)
        if completed is not None and update_data.get("status") is None:
            if completed:
                update_data["status"] = TaskStatus.COMPLETED
            elif task.completed:
                update_data["status"] = TaskStatus.PENDING

        changes = {}
        for field, value in update_data.items():
            if field == "description" and value is None:
                value = ""
            if value is None and field in NON_NULLABLE_FIELDS:
                continue
            if isinstance(value, enum.Enum):
                value = value.value
            changes[field] = value

        if not changes:
            return task

        for field, value in changes.items():
            setattr(task, field, value)

        self._apply("task_updated", task.id)
        logger.info(f"Task updated id={task.id} fields={sorted(changes)}")
        return task

    def reschedule_task(self, task_id: str, due_date: Optional[datetime]) -> Optional[Task]:
        # Drag-and-drop du calendrier
        return self.update_task(task_id, {"due_date": due_date})

    def delete_task(self, task_id: str) -> bool:
        task = self.get_task_by_id(task_id)
        if task is None:
            logger.debug(f"delete_task: task {task_id} not found")
            return False

        # Les notifications suivent via la cascade de la relation
        self.db.delete(task)
        self._apply("task_deleted", task_id)
        logger.info(f"Task deleted id={task_id}")
        return True

    def mark_task_completed(self, task_id: str) -> Optional[Task]:
        task = self.get_task_by_id(task_id)
        if task is None:
            logger.debug(f"mark_task_completed: task {task_id} not found")
            return None

        if task.completed:
            return task

        task.status = TaskStatus.COMPLETED.value
        self._apply("task_completed", task.id)
        logger.info(f"Task completed id={task.id}")
        return task

    def mark_notification_as_read(self, notification_id: str) -> Optional[Notification]:
        notification = self.get_notification_by_id(notification_id)
        if notification is None:
            logger.debug(f"mark_notification_as_read: notification {notification_id} not found")
            return None

        if notification.is_read:
            return notification

        notification.is_read = True
        self._commit()
        self._emit("notification_read", task_id=notification.task_id, notification_id=notification.id)
        return notification

    # ============ DÉRIVATION ============

    def refresh_notifications(self, force: bool = False) -> List[Notification]:
        """
        Relance la dérivation des notifications.

        Sans force, rien n'est recalculé si aucune tâche n'a changé depuis la
        dernière passe. Il n'y a pas de minuterie: avec force=True l'appelant
        rattrape le passage à un nouveau jour.
        """
        derived_version = self._derived_version
        added = self._derive(force=force)
        if added:
            try:
                self._commit()
            except SQLAlchemyError:
                self._derived_version = derived_version
                raise
        return added

    def _derive(self, force: bool = False) -> List[Notification]:
        if not force and self._derived_version == self._version:
            return []

        drafts = build_due_notifications(self.tasks, self._clock())
        added = merge_notifications(self.db, drafts)
        self._derived_version = self._version
        return added

    # ============ HELPERS ============

    def _apply(self, kind: str, task_id: str) -> None:
        # En cas d'échec, rollback et compteurs restaurés: rien n'a changé
        version, derived_version = self._version, self._derived_version
        self._version += 1
        try:
            self.db.flush()
            self._derive()
            self.db.commit()
        except SQLAlchemyError:
            logger.exception(f"{kind} failed, rolling back task_id={task_id}")
            self.db.rollback()
            self._version, self._derived_version = version, derived_version
            raise
        self._emit(kind, task_id=task_id)

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            logger.exception("Commit failed, rolling back")
            self.db.rollback()
            raise

    def _validate(self, schema, data):
        # Revalide aussi un modèle déjà construit: la liste de catégories est celle du store
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=True)
        return schema.model_validate(data, context={"categories": self._categories})

    def _new_id(self) -> str:
        task_id = uuid.uuid4().hex
        while self.db.get(Task, task_id) is not None:
            task_id = uuid.uuid4().hex
        return task_id

    def _next_position(self) -> int:
        current = self.db.query(func.max(Task.position)).scalar()
        return (current or 0) + 1
