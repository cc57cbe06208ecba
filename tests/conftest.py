"""Pytest configuration and test helpers."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

# Ensure the application package is importable when running tests without an
# editable install. This mirrors the expected runtime layout where ``app`` sits
# at the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.config import Settings  # noqa: E402


def build_settings(**overrides: Any) -> Settings:
    """Return a settings object with defaults suitable for tests."""

    base: dict[str, Any] = {
        "TMDB_API_KEY": "test-key",
        "TMDB_BASE_URL": "https://api.example.com/3",
        "TMDB_IMAGE_BASE_URL": "https://images.example.com/t/p",
        "USE_MOCK_DATA": False,
        "MOCK_LATENCY_SCALE": 0,
        "DATABASE_URL": "sqlite://",
    }
    base.update(overrides)
    return Settings(_env_file=None, **base)  # type: ignore[arg-type]


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO tests to run on asyncio without requiring trio."""

    return "asyncio"


@pytest.fixture
def live_settings() -> Settings:
    return build_settings()


@pytest.fixture
def mock_settings() -> Settings:
    return build_settings(USE_MOCK_DATA=True)
