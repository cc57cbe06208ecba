"""Clients for The Movie Database (TMDB) catalog endpoints."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..errors import DecodeFailure, HttpError, NetworkFailure, NotFound
from ..models import MoviePage, RawMovie
from .fixtures import FixtureCatalog

logger = logging.getLogger(__name__)


class MovieCatalog(Protocol):
    """Operations every catalog backend provides."""

    async def search(self, query: str, page: int = 1) -> MoviePage: ...

    async def get_popular(self, page: int = 1) -> MoviePage: ...

    async def get_details(self, movie_id: int) -> RawMovie: ...


class TMDBClient:
    """Thin wrapper around the TMDB v3 HTTP API.

    Every call issues exactly one request; nothing is retried or cached.
    Failures surface as :class:`~app.errors.FetchFailed` subclasses.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        if not settings.tmdb_api_key:
            raise ValueError("TMDB API key is required when initialising TMDBClient")
        self._settings = settings
        self._client = http_client

    async def search(self, query: str, page: int = 1) -> MoviePage:
        """Search movies by title."""

        payload = await self._get("/search/movie", {"query": query, "page": page})
        return self._parse(MoviePage, payload, "/search/movie")

    async def get_popular(self, page: int = 1) -> MoviePage:
        """Return the current popular movies list."""

        payload = await self._get("/movie/popular", {"page": page})
        return self._parse(MoviePage, payload, "/movie/popular")

    async def get_details(self, movie_id: int) -> RawMovie:
        """Return a single movie together with its credits and videos."""

        endpoint = f"/movie/{movie_id}"
        try:
            payload = await self._get(
                endpoint, {"append_to_response": "credits,videos"}
            )
        except HttpError as exc:
            if exc.status_code == 404:
                raise NotFound(
                    f"Movie {movie_id} not found", status_code=404, cause=exc
                ) from exc
            raise
        return self._parse(RawMovie, payload, endpoint)

    async def _get(self, endpoint: str, params: dict[str, Any]) -> Any:
        query = {"api_key": self._settings.tmdb_api_key, **params}
        try:
            response = await self._client.get(endpoint, params=query)
        except httpx.HTTPError as exc:
            logger.warning("TMDB request to %s failed: %s", endpoint, exc)
            raise NetworkFailure(
                f"Request to {endpoint} failed: {exc}", cause=exc
            ) from exc

        if not response.is_success:
            logger.warning(
                "TMDB request to %s returned %s: %s",
                endpoint,
                response.status_code,
                response.text[:200],
            )
            raise HttpError(
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            logger.warning("Unexpected non-JSON TMDB response for %s", endpoint)
            raise DecodeFailure(
                f"Invalid JSON returned by {endpoint}",
                status_code=response.status_code,
                cause=exc,
            ) from exc

    @staticmethod
    def _parse(model: type[Any], payload: Any, endpoint: str) -> Any:
        if not isinstance(payload, dict):
            raise DecodeFailure(f"Unexpected response structure from {endpoint}")
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise DecodeFailure(
                f"Unexpected response structure from {endpoint}", cause=exc
            ) from exc


def build_catalog(
    settings: Settings, http_client: httpx.AsyncClient | None = None
) -> MovieCatalog:
    """Return the catalog backend selected by ``USE_MOCK_DATA``."""

    if settings.use_mock_data:
        logger.info("Serving movies from the offline fixture catalog")
        return FixtureCatalog(settings)
    if http_client is None:
        raise ValueError("An HTTP client is required for the live TMDB catalog")
    return TMDBClient(settings, http_client)
