"""Settings read from the environment (with defaults good enough for local play)"""

import logging
import os

from src.core.shared_types import Difficulty


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


DATABASE_URL = os.environ.get("DAMA_DATABASE_URL", "sqlite:///dama.db")
SQL_ECHO = _env_flag("DAMA_SQL_ECHO")
LOG_LEVEL = os.environ.get("DAMA_LOG_LEVEL", "INFO").upper()
DEFAULT_DIFFICULTY = Difficulty(
    os.environ.get("DAMA_DEFAULT_DIFFICULTY", Difficulty.MEDIUM.value).lower()
)


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
