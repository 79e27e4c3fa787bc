# File: backend/app/core/config.py
# Version: v0.4.0
"""
Centralized application settings using Pydantic Settings.

Controls:
- App metadata and API prefix
- CORS origins
- Input caps for the pairwise tools (index sheet, primer panel, sequence length)
- ORF finder default minimum length
- Optional JSON file with extra restriction enzymes
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- App ---
    API_PREFIX: str = "/api"
    APP_NAME: str = "SeqToolkit"
    APP_VERSION: str = "0.1.0"

    # --- CORS ---
    CORS_ORIGINS: str = "*"  # comma-separated or '*' for all

    # --- Input limits ---
    MAX_INDEX_ENTRIES: int = 200
    MAX_PRIMERS: int = 50
    MAX_SEQUENCE_LENGTH: int = 1_000_000

    # --- Tool defaults ---
    ORF_MIN_LENGTH_DEFAULT: int = 30
    ENZYME_CATALOG_PATH: Optional[Path] = None  # extra enzymes merged over the built-ins

    # --- Server ---
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "info"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def cors_origins_list(self) -> list[str]:
        raw = self.CORS_ORIGINS.strip()
        if raw == "*":
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]


settings = Settings()
