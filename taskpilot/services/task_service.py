"""Task service"""

from datetime import date, datetime, time, timedelta
from typing import Iterable, List
from taskpilot.models.task import Task

# Fin de journée locale (23:59:59.999)
END_OF_DAY = time(23, 59, 59, 999000)


def get_now() -> datetime:
    return datetime.now()


def is_overdue(task: Task, now: datetime = None) -> bool:
    """
    En retard si: date d'échéance définie, tâche non terminée, et fin de
    journée de l'échéance strictement avant l'instant courant.

    Différent du calcul des notifications, qui compare des dates seules.
    """
    if task.due_date is None or task.completed:
        return False
    now = now or get_now()
    if now.tzinfo is not None:
        # Échéances stockées en heure locale naïve
        now = now.astimezone().replace(tzinfo=None)
    return datetime.combine(task.due_date.date(), END_OF_DAY) < now


def get_tasks_for_day(tasks: Iterable[Task], day: date) -> List[Task]:
    return [task for task in tasks if task.due_date is not None and task.due_date.date() == day]


def get_today_tasks(tasks: Iterable[Task], today: date = None) -> List[Task]:
    today = today or get_now().date()
    return get_tasks_for_day(tasks, today)


def get_overdue_tasks(tasks: Iterable[Task], now: datetime = None) -> List[Task]:
    now = now or get_now()
    return [task for task in tasks if is_overdue(task, now)]


def get_this_week_tasks(tasks: Iterable[Task], today: date = None) -> List[Task]:
    today = today or get_now().date()
    days_until_end = (6 - today.weekday()) % 7
    if days_until_end == 0:
        days_until_end = 7

    week_end = today + timedelta(days=days_until_end)

    return [
        task for task in tasks
        if task.due_date is not None and today <= task.due_date.date() <= week_end
    ]
