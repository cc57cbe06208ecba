"""Distribution package exposing the MovieFinder FastAPI app."""

from __future__ import annotations

from importlib import import_module
from typing import Any

from app import __version__

__all__ = ["__version__", "app", "create_app"]


def __getattr__(name: str) -> Any:
    # Importing app.main builds the app, so defer it until asked for.
    if name in {"app", "create_app"}:
        return getattr(import_module("app.main"), name)
    raise AttributeError(f"module 'moviefinder' has no attribute {name}")
