"""
Emitter defaults sourced from the environment and an optional .env file.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_env_file() -> Optional[Path]:
    cwd = Path.cwd().resolve()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / ".env"
        if candidate.exists():
            return candidate
    return None


_ENV_PATH = _find_env_file()
if _ENV_PATH is not None:
    load_dotenv(dotenv_path=_ENV_PATH, override=False)


class Settings(BaseSettings):
    """JSONSYSLOG_* environment settings used by the CLI."""

    model_config = SettingsConfigDict(
        env_prefix="JSONSYSLOG_",
        env_file=str(_ENV_PATH) if _ENV_PATH is not None else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: Optional[str] = None
    port: Optional[int] = Field(default=None, ge=1)
    service: Optional[str] = None
    process: Optional[str] = None
    category: Optional[str] = None
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    log_level: str = "INFO"

    def send_defaults(self) -> Dict[str, Any]:
        """Return the configured send options, omitting anything unset."""
        return self.model_dump(exclude_none=True, exclude={"log_level"})


@lru_cache()
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()
