# jobtracker/config.py

from __future__ import annotations
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    # --- Core ---
    APP_NAME: str = "Job Application Tracker"
    DEBUG: bool = False
    LOG_LEVEL: str = Field("INFO", description="Root log level passed to logging.basicConfig")

    # --- Database ---
    DATABASE_URL: str = Field("sqlite:///./jobtracker.db")
    # Alembic reads DATABASE_URL from env itself (see alembic/env.py).

    # --- HTTP ---
    # Origins allowed to call the API from a browser (the Vite dev server by default)
    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"]
    )

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
