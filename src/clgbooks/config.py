from __future__ import annotations
import os
from typing import List

def _split_csv(env: str, default: str) -> List[str]:
    raw = os.getenv(env, default)
    return [x.strip() for x in raw.split(",") if x.strip()]

class Settings:
    BASE_DIR = os.path.dirname(__file__)
    DATA_DIR = os.path.join(BASE_DIR, "data")
    LOGS_DIR = os.path.join(BASE_DIR, "logs")
    DB_PATH = os.getenv("CLG_DB_PATH", os.path.join(DATA_DIR, "clgbooks.db"))
    LOG_PATH = os.getenv("CLG_LOG_PATH", os.path.join(LOGS_DIR, "app.log"))
    CORS_ORIGINS = _split_csv("CLG_CORS_ORIGINS", "http://localhost:5173")
    DEBUG = os.getenv("CLG_DEBUG", "0") == "1"
    ENV = os.getenv("CLG_ENV", "production")

    # Chat
    MAX_MESSAGE_LENGTH = int(os.getenv("CLG_MAX_MESSAGE_LENGTH", "4000"))
    SEED_SAMPLES = os.getenv("CLG_SEED_SAMPLES", "1") == "1"

    @classmethod
    def ensure_dirs(cls) -> None:
        os.makedirs(os.path.dirname(cls.DB_PATH), exist_ok=True)
        os.makedirs(os.path.dirname(cls.LOG_PATH), exist_ok=True)
