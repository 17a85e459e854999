"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without polluting the CLI.
- Lets the adapters (HTTP client, output writers) read config consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from dotenv import set_key
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "archiveis"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_13_5) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/67.0.3396.99 Safari/537.36"
)


def get_user_config_dir() -> Path:
    """Directory holding the user's `.env` (XDG first, then APPDATA on Windows)."""

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_DIR_NAME
    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA", str(Path.home()))) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Set `values` in the user's `.env`, keeping any other keys already there."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)
    env_path.touch(exist_ok=True)
    for key, value in values.items():
        set_key(env_path, key, value, quote_mode="never")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typing + validation at the edge (env vars) without leaking into the core.
    - A single configuration contract shared by the CLI and the adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="ARCHIVEIS_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default="https://archive.is",
        min_length=8,
        description="Origin of the archive.is capture service.",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        min_length=1,
        description="User-Agent sent with every request to the service.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    max_concurrency: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum number of in-flight capture requests in a batch.",
    )
    retries: int = Field(
        default=0,
        ge=0,
        le=20,
        description="Retry rounds for failed captures.",
    )

    @property
    def service_root(self) -> str:
        """Base URL with exactly one trailing slash (landing page)."""

        return self.base_url.rstrip("/") + "/"

    @property
    def submit_url(self) -> str:
        return self.service_root + "submit/"
