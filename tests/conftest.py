"""Shared pytest configuration."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
TESTS_DIR = Path(__file__).resolve().parent
for path in (ROOT, TESTS_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from godservices.config import reset_settings_cache  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def appwrite_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Point the settings at a throwaway Appwrite project."""

    monkeypatch.setenv("APPWRITE_ENDPOINT", "https://appwrite.example.com/v1")
    monkeypatch.setenv("APPWRITE_PROJECT_ID", "test-project")
    monkeypatch.setenv("APPWRITE_DATABASE_ID", "test-db")
    monkeypatch.setenv("PREFERENCES_PATH", str(tmp_path / "preferences.json"))
    for name in (
        "APPWRITE_API_KEY",
        "APPWRITE_REALTIME_ENDPOINT",
        "APPWRITE_SESSION",
        "COLLECTION_BOOKINGS",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()
