from os import getenv

DEFAULT_CATEGORIES = "Work,Personal,Health,Education,Entertainment"


def _parse_list(raw: str) -> list:
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    DATABASE_URL = getenv("DATABASE_URL", "sqlite://")  # en mémoire, perdu à la fermeture
    TASK_CATEGORIES = _parse_list(getenv("TASK_CATEGORIES", DEFAULT_CATEGORIES))
    SEED_SAMPLE_TASKS = getenv("SEED_SAMPLE_TASKS", "1").lower() not in ("0", "false", "no")
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")

settings = Settings()
