from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from taskpilot.core.config import settings

Base = declarative_base()


def make_engine(url: str = None):
    """Engine SQLite partagé: une seule connexion pour garder la base en mémoire"""
    url = url or settings.DATABASE_URL
    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, echo=False)


engine = make_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    # Import des modèles pour enregistrer les tables sur Base.metadata
    from taskpilot.models import notification, task  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)

