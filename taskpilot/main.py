import logging
from typing import Callable, Iterable, Optional
from datetime import datetime
from sqlalchemy.orm import Session

from taskpilot.core.config import settings
from taskpilot.core.database import SessionLocal, init_db
from taskpilot.core.logging_setup import setup_logging
from taskpilot.services.sample_data import seed_sample_tasks
from taskpilot.services.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_store(
    db: Optional[Session] = None,
    categories: Optional[Iterable[str]] = None,
    clock: Optional[Callable[[], datetime]] = None,
    seed: Optional[bool] = None,
) -> TaskStore:
    """Construit le store (base en mémoire) et charge les tâches de démo si demandé"""
    if db is None:
        init_db()
        db = SessionLocal()

    store = TaskStore(db, categories=categories, clock=clock)

    if settings.SEED_SAMPLE_TASKS if seed is None else seed:
        seed_sample_tasks(store)

    return store


def main() -> None:
    setup_logging(settings.LOG_LEVEL)
    store = create_store()
    logger.info(
        f"taskpilot started: {len(store.tasks)} task(s), "
        f"{store.unread_count} unread notification(s)"
    )


if __name__ == "__main__":
    main()
