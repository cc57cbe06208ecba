"""Module executed when running ``python -m moviefinder``."""

from __future__ import annotations

import logging

import uvicorn

from app.config import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Serve the API with uvicorn using the configured host and port."""

    settings = get_settings()
    logging.basicConfig(level=logging.INFO)
    logger.info(
        "Starting %s (%s catalog)",
        settings.app_name,
        "offline fixture" if settings.use_mock_data else "TMDB",
    )
    uvicorn.run(
        "app.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.environment == "development",
    )


if __name__ == "__main__":  # pragma: no cover - runtime entrypoint
    main()
