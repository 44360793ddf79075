"""
Process configuration, read from the environment (``MIXOLOGY_*``) or a
``.env`` file.

Only the worker, the clients and the service layer read settings. Workflow
code never does: it must be deterministic on replay.
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MIXOLOGY_", env_file=".env", extra="ignore")

    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("MIXOLOGY_GEMINI_API_KEY", "GEMINI_API_KEY", "API_KEY"),
    )
    recipe_model: str = "gemini-2.5-flash"
    image_model: str = "gemini-2.5-flash-image"
    temporal_address: str = "localhost:7233"
    task_queue: str = "cocktail-sessions"
    inventory_path: Path = Path("~/.soul-spirits/inventory.json")
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)
