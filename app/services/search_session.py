"""Result state for one movie list view, applying only the latest response."""

from __future__ import annotations

import logging
from typing import Any, Awaitable

from ..config import Settings
from ..errors import FetchFailed
from ..models import MoviePage, MovieRecord
from ..normalizer import normalize
from .tmdb import MovieCatalog

logger = logging.getLogger(__name__)

SEARCH_ERROR = "Failed to search movies. Please try again."
POPULAR_ERROR = "Failed to load popular movies. Please try again."


class SearchSession:
    """Holds the movies shown by a view and sequences its catalog requests.

    Each request is numbered. When an older request resolves after a newer one
    was issued, its outcome is discarded so the view always reflects the most
    recent query. After :meth:`close` no outcome is applied at all.
    """

    def __init__(self, catalog: MovieCatalog, *, settings: Settings | None = None):
        self._catalog = catalog
        self._settings = settings
        self._issued = 0
        self._closed = False
        self.query = ""
        self.movies: list[MovieRecord] = []
        self.page = 1
        self.total_pages = 0
        self.total_results = 0
        self.is_loading = False
        self.error: str | None = None

    @property
    def closed(self) -> bool:
        return self._closed

    async def search(self, query: str, page: int = 1) -> bool:
        """Show results for ``query``; a blank query shows popular movies.

        Returns ``True`` when the response was applied to the session.
        """

        if not query.strip():
            return await self.load_popular(page)
        self.query = query
        return await self._run(self._catalog.search(query, page), SEARCH_ERROR)

    async def load_popular(self, page: int = 1) -> bool:
        self.query = ""
        return await self._run(self._catalog.get_popular(page), POPULAR_ERROR)

    def to_payload(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "page": self.page,
            "results": [movie.to_payload() for movie in self.movies],
            "totalPages": self.total_pages,
            "totalResults": self.total_results,
        }

    def close(self) -> None:
        """Stop applying results; pending requests are left to finish."""

        self._closed = True

    async def _run(self, request: Awaitable[MoviePage], error_message: str) -> bool:
        self._issued += 1
        ticket = self._issued
        self.is_loading = True
        self.error = None
        try:
            page = await request
        except FetchFailed as exc:
            if not self._is_current(ticket):
                logger.debug("Discarding stale failure for request %s", ticket)
                return False
            logger.warning("Catalog request %s failed: %s", ticket, exc)
            self.error = error_message
            self.is_loading = False
            return False

        if not self._is_current(ticket):
            logger.debug("Discarding stale response for request %s", ticket)
            return False
        self.movies = [normalize(movie, settings=self._settings) for movie in page.results]
        self.page = page.page
        self.total_pages = page.total_pages
        self.total_results = page.total_results
        self.is_loading = False
        return True

    def _is_current(self, ticket: int) -> bool:
        return not self._closed and ticket == self._issued
