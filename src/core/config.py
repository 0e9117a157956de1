"""Settings read from the environment (a .env file is picked up if present)."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Settings:
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///ludo.db")
    # Idle time after which a stored game disappears. Every save starts the countdown again.
    game_expiration_seconds: int = int(os.getenv("GAME_EXPIRATION_SECONDS", "3600"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def get_settings() -> Settings:
    return Settings()
