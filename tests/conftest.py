import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from datetime import datetime, timedelta
from sqlalchemy.orm import sessionmaker

from taskpilot.core.database import Base, make_engine
import taskpilot.models.notification  # noqa: F401 (enregistre les tables)
import taskpilot.models.task  # noqa: F401
from taskpilot.services.task_store import TaskStore

# Base SQLite en mémoire pour les tests
test_engine = make_engine("sqlite://")
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

CATEGORIES = ["Work", "Personal", "Health", "Education", "Entertainment"]
FROZEN_NOW = datetime(2026, 10, 19, 10, 30)


class FrozenClock:
    """Horloge contrôlée par les tests"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture(autouse=True)
def setup_teardown():
    """Crée et nettoie la DB avant/après chaque test"""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db():
    """Session DB pour les tests"""
    db = TestingSessionLocal()
    yield db
    db.close()


@pytest.fixture
def clock():
    return FrozenClock(FROZEN_NOW)


@pytest.fixture
def store(db, clock):
    """Store vide avec horloge figée"""
    return TaskStore(db, categories=CATEGORIES, clock=clock)


@pytest.fixture
def make_task(store):
    """Raccourci: crée une tâche avec des valeurs par défaut"""
    def _make(**fields):
        data = {"title": "Tâche", "category": "Work"}
        data.update(fields)
        return store.add_task(data)
    return _make
