"""Application settings and validation."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE = Path(__file__).resolve().parent.parent


class Settings:
    ENV: str
    DATABASE_URL: str
    HOST: str
    PORT: int
    LOG_LEVEL: str
    ALLOW_DEV_CORS: bool
    SQL_ECHO: bool

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        # DB_KEY is the name older deployments used for the connection string
        self.DATABASE_URL = (
            os.getenv("DATABASE_URL")
            or os.getenv("DB_KEY")
            or f"sqlite:///{BASE / 'exercise_tracker.db'}"
        )
        self.HOST = os.getenv("HOST", "0.0.0.0")
        self.PORT = self._parse_port(os.getenv("PORT", "3000"))
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self.SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"

    @staticmethod
    def _parse_port(raw: str) -> int:
        try:
            port = int(raw)
        except ValueError:
            raise RuntimeError(f"PORT must be an integer, got {raw!r}")
        if not 0 < port < 65536:
            raise RuntimeError(f"PORT out of range: {port}")
        return port


settings = Settings()
