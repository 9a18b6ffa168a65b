"""
Configuration helpers for the todo API.

Routers/services never read os.environ directly; they go through
``get_settings()``, which is cached for the process lifetime. A ``.env``
file found from the working directory upwards is loaded first; variables
already set in the environment win over it.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

from dotenv import find_dotenv, load_dotenv


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    data_dir: str
    port: int
    api_path_prefix: str
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Load ``.env`` (if any), read the environment and build a Settings instance."""
    load_dotenv(find_dotenv(usecwd=True))

    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    prefix = (os.getenv("API_PATH_PREFIX") or "").strip().rstrip("/")
    if prefix and not prefix.startswith("/"):
        prefix = "/" + prefix

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        data_dir=os.getenv("DATA_DIR") or "data",
        port=_int(os.getenv("PORT", "3000"), 3000),
        api_path_prefix=prefix,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
