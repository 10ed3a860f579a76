"""Pydantic schemas for task drafts, partial updates and snapshots."""

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator, model_validator
from datetime import datetime
from typing import Optional, List, Dict, Any, Tuple, Iterable

from taskpilot.core.config import settings
from taskpilot.models.task import TaskStatus, TaskPriority


def _known_categories(info: ValidationInfo) -> List[str]:
    # La liste du store passe par le contexte de validation, sinon celle de la config
    if info.context and info.context.get("categories") is not None:
        return list(info.context["categories"])
    return settings.TASK_CATEGORIES


def _check_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Title is required")
    return value


def _check_category(value: str, info: ValidationInfo) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Category is required")
    if value not in _known_categories(info):
        raise ValueError(f"Unknown category '{value}'")
    return value


# Schemas tâches

class TaskCreate(BaseModel):
    """Draft of a new task: id and created_at are assigned by the store."""

    title: str
    description: str = ""
    due_date: Optional[datetime] = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    category: str
    # Champ de formulaire: converti en statut, jamais stocké
    completed: Optional[bool] = None

    @field_validator("title", "category", "description", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("title")
    @classmethod
    def title_required(cls, value: str) -> str:
        return _check_title(value)

    @field_validator("category")
    @classmethod
    def category_known(cls, value: str, info: ValidationInfo) -> str:
        return _check_category(value, info)

    @model_validator(mode="after")
    def status_from_completed(self) -> "TaskCreate":
        # Le statut explicite reste prioritaire sur le booléen
        if self.completed and "status" not in self.model_fields_set:
            self.status = TaskStatus.COMPLETED
        return self


class TaskUpdate(BaseModel):
    """Partial update: only explicitly-set fields are merged (exclude_unset)."""

    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    category: Optional[str] = None
    completed: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def title_required(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _check_title(value)

    @field_validator("category")
    @classmethod
    def category_known(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if value is None:
            return value
        return _check_category(value, info)


class TaskResponse(BaseModel):
    id: str
    title: str
    description: str
    due_date: Optional[datetime]
    status: TaskStatus
    priority: TaskPriority
    category: str
    completed: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


def validate_task_form(
    data: Dict[str, Any],
    categories: Optional[Iterable[str]] = None,
) -> Tuple[Optional[TaskCreate], Dict[str, str]]:
    """Valide un formulaire de tâche.

    Retourne (draft, {}) si valide, sinon (None, {champ: message}).
    Aucune exception n'est levée pour une erreur de saisie.
    """
    context = {"categories": list(categories)} if categories is not None else None
    try:
        return TaskCreate.model_validate(data, context=context), {}
    except ValidationError as exc:
        return None, field_errors(exc)


def field_errors(exc: ValidationError) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "__all__"
        if field in errors:
            continue
        if error["type"] == "missing":
            message = f"{field.replace('_', ' ').capitalize()} is required"
        else:
            message = error["msg"].removeprefix("Value error, ")
        errors[field] = message
    return errors
