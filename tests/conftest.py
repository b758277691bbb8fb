"""Shared fixtures for lockfile parser tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from yarn_lockfile.config import CONFIG_PATH_ENV_VAR, YAML_FALLBACK_ENV_VAR

LOCKFILES = Path(__file__).parent / "lockfiles"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep developer environment settings out of the tests."""
    monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)
    monkeypatch.delenv(YAML_FALLBACK_ENV_VAR, raising=False)


@pytest.fixture
def lockfiles_dir() -> Path:
    return LOCKFILES


@pytest.fixture
def read_lockfile():
    """Return a loader for the files under tests/lockfiles."""

    def _read(name: str) -> str:
        return (LOCKFILES / name).read_text(encoding="utf-8")

    return _read
