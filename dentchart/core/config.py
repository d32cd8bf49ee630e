from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values
from pydantic import BaseModel, Field

from dentchart.core.schemas.dental import NumberingSystem

DEFAULT_BASE_URL = "http://localhost:3000/api"


def load_env_file(path: str | Path = ".env") -> dict[str, str]:
    """Fill unset environment variables from a ``.env`` file.

    Variables already present in the environment win. Returns only the
    variables this call set.
    """
    env_path = Path(path)
    if not env_path.is_file():
        return {}
    loaded: dict[str, str] = {}
    for key, value in dotenv_values(env_path).items():
        if value is None or key in os.environ:
            continue
        os.environ[key] = value
        loaded[key] = value
    return loaded


class Settings(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    token: Optional[str] = None
    clinic_id: Optional[str] = None
    timeout: float = Field(default=30, gt=0)
    max_retries: int = Field(default=3, ge=0)
    numbering_system: NumberingSystem = NumberingSystem.UNIVERSAL
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            base_url=(env.get("CLINIC_API_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
            token=env.get("CLINIC_API_TOKEN") or None,
            clinic_id=env.get("CLINIC_ID") or None,
            timeout=env.get("CLINIC_API_TIMEOUT") or 30,
            max_retries=env.get("CLINIC_API_MAX_RETRIES") or 3,
            numbering_system=(env.get("DENTCHART_NUMBERING_SYSTEM") or "universal").lower(),
            log_level=(env.get("DENTCHART_LOG_LEVEL") or "INFO").upper(),
        )


__all__ = ["DEFAULT_BASE_URL", "Settings", "load_env_file"]
