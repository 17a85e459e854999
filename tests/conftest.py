"""Shared fixtures: isolated environment and settings."""

from __future__ import annotations

import os

import pytest

from core.config import AppSettings
from tests.fakes import SERVICE


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep ARCHIVEIS_* variables and .env files of the host out of the tests."""

    for key in list(os.environ):
        if key.upper().startswith("ARCHIVEIS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        base_url=SERVICE,
        user_agent="archiveis-tests/1.0",
        http_timeout_seconds=5.0,
    )
