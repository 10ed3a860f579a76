"""Tâches de démonstration chargées au démarrage"""

from datetime import datetime, timedelta
from typing import Any, Dict, List
from taskpilot.models.task import TaskPriority, TaskStatus


def generate_sample_tasks(now: datetime) -> List[Dict[str, Any]]:
    # Brouillons bruts: la validation se fait dans le store, avec ses catégories
    tomorrow = now + timedelta(days=1)
    next_week = now + timedelta(days=7)

    return [
        {
            "title": "Complete project proposal",
            "description": "Finish the draft and send for review",
            "due_date": tomorrow,
            "status": TaskStatus.PENDING,
            "priority": TaskPriority.HIGH,
            "category": "Work",
        },
        {
            "title": "Morning jog",
            "description": "Run for 30 minutes",
            "due_date": tomorrow,
            "status": TaskStatus.PENDING,
            "priority": TaskPriority.MEDIUM,
            "category": "Health",
        },
        {
            "title": "Read book",
            "description": "Read chapter 5",
            "due_date": next_week,
            "status": TaskStatus.IN_PROGRESS,
            "priority": TaskPriority.LOW,
            "category": "Personal",
        },
    ]


def seed_sample_tasks(store) -> list:
    drafts = generate_sample_tasks(store.now())
    return [store.add_task(draft) for draft in drafts if draft["category"] in store.categories]
