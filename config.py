"""Application configuration.

Environment variables (optionally from a .env file next to the app)
are read once at import time into a Settings object.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


@dataclass
class Settings:
    db_path: str = os.getenv("POMODORO_DB_PATH", "pomodoro.db")
    log_level: str = os.getenv("POMODORO_LOG_LEVEL", "INFO")
    # host tick period; 1000 in normal use
    tick_ms: int = int(os.getenv("POMODORO_TICK_MS", "1000"))


def get_settings() -> Settings:
    return Settings()
