from typing import Iterable, List, Optional
from taskpilot.models.task import Task


def _value(criterion) -> Optional[str]:
    # Enum ou chaîne: on compare les valeurs
    if criterion is None:
        return None
    return getattr(criterion, "value", criterion)


def matches_search(task: Task, search: Optional[str]) -> bool:
    if not search:
        return True
    needle = search.lower()
    return needle in (task.title or "").lower() or needle in (task.description or "").lower()


def filter_tasks(
    tasks: Iterable[Task],
    status=None,
    priority=None,
    category: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Task]:
    """Filtre stable d'une collection de tâches.

    Un critère absent (None ou "") accepte tout. La recherche est une
    sous-chaîne insensible à la casse sur le titre ou la description.
    L'ordre d'origine est conservé et la collection n'est pas modifiée.
    """
    status = _value(status)
    priority = _value(priority)

    results = []
    for task in tasks:
        if status and task.status != status:
            continue
        if priority and task.priority != priority:
            continue
        if category and task.category != category:
            continue
        if not matches_search(task, search):
            continue
        results.append(task)

    return results
