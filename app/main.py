"""Entry point for the FastAPI-powered movie discovery service."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any

import httpx
from fastapi import Body, Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from . import __version__
from .config import Settings, get_settings
from .database import Database
from .errors import FetchFailed, NotFound
from .normalizer import normalize
from .services.favorites import FavoritesStore
from .services.search_session import SearchSession
from .services.tmdb import MovieCatalog, build_catalog
from .storage import DatabaseStorage, KeyValueStorage, MemoryStorage

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DETAILS_ERROR = "Failed to load movie details. Please try again."


def _open_storage(
    app_settings: Settings,
) -> tuple[KeyValueStorage, Database | None]:
    database = Database(app_settings.database_url)
    try:
        database.create_all()
    except SQLAlchemyError:
        logger.exception(
            "Durable storage unavailable; favorites will only live in memory"
        )
        database.dispose()
        return MemoryStorage(), None
    return DatabaseStorage(database), database


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or get_settings()

    @asynccontextmanager
    async def lifespan(fastapi_app: FastAPI):
        exit_stack = AsyncExitStack()
        http_client = await exit_stack.enter_async_context(
            httpx.AsyncClient(base_url=app_settings.api_base_url, timeout=None)
        )
        storage, database = _open_storage(app_settings)
        favorites = FavoritesStore(
            storage, key=app_settings.favorites_key, settings=app_settings
        )
        favorites.hydrate()

        fastapi_app.state.settings = app_settings
        fastapi_app.state.catalog = build_catalog(app_settings, http_client)
        fastapi_app.state.favorites = favorites

        try:
            yield
        finally:  # pragma: no cover - teardown path exercised at runtime
            if database is not None:
                database.dispose()
            await exit_stack.aclose()

    fastapi_app = FastAPI(
        title=app_settings.app_name,
        description="Search TMDB and keep a list of favorite movies",
        version=__version__,
        lifespan=lifespan,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )

    register_routes(fastapi_app)
    return fastapi_app


def get_catalog(request: Request) -> MovieCatalog:
    catalog = getattr(request.app.state, "catalog", None)
    if catalog is None:
        raise RuntimeError("Movie catalog not initialised")
    return catalog


def get_favorites(request: Request) -> FavoritesStore:
    favorites = getattr(request.app.state, "favorites", None)
    if not isinstance(favorites, FavoritesStore):
        raise RuntimeError("Favorites store not initialised")
    return favorites


def get_app_settings(request: Request) -> Settings:
    app_settings = getattr(request.app.state, "settings", None)
    if isinstance(app_settings, Settings):
        return app_settings
    return get_settings()


def _favorites_payload(favorites: FavoritesStore) -> dict[str, Any]:
    return {
        "ids": list(favorites.favorite_ids),
        "movies": [record.to_payload() for record in favorites.favorite_records],
        "count": favorites.count(),
    }


def _validation_detail(exc: ValidationError) -> list[dict[str, Any]]:
    return exc.errors(include_url=False, include_context=False, include_input=False)


def register_routes(fastapi_app: FastAPI) -> None:
    @fastapi_app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    async def _list_movies(
        catalog: MovieCatalog,
        app_settings: Settings,
        query: str,
        page: int,
    ) -> dict[str, Any]:
        session = SearchSession(catalog, settings=app_settings)
        await session.search(query, page)
        if session.error:
            raise HTTPException(status_code=502, detail=session.error)
        return session.to_payload()

    @fastapi_app.get("/api/movies")
    async def search_movies(
        query: str = "",
        page: int = 1,
        catalog: MovieCatalog = Depends(get_catalog),
        app_settings: Settings = Depends(get_app_settings),
    ) -> dict[str, Any]:
        return await _list_movies(catalog, app_settings, query, page)

    @fastapi_app.get("/api/movies/popular")
    async def popular_movies(
        page: int = 1,
        catalog: MovieCatalog = Depends(get_catalog),
        app_settings: Settings = Depends(get_app_settings),
    ) -> dict[str, Any]:
        return await _list_movies(catalog, app_settings, "", page)

    @fastapi_app.get("/api/movies/{movie_id}")
    async def movie_details(
        movie_id: int,
        catalog: MovieCatalog = Depends(get_catalog),
        app_settings: Settings = Depends(get_app_settings),
    ) -> dict[str, Any]:
        try:
            movie = await catalog.get_details(movie_id)
        except NotFound as exc:
            raise HTTPException(status_code=404, detail="Movie not found") from exc
        except FetchFailed as exc:
            logger.warning("Error loading movie details for %s: %s", movie_id, exc)
            raise HTTPException(status_code=502, detail=DETAILS_ERROR) from exc
        return normalize(movie, settings=app_settings).to_payload()

    @fastapi_app.get("/api/favorites")
    async def list_favorites(
        favorites: FavoritesStore = Depends(get_favorites),
    ) -> dict[str, Any]:
        return _favorites_payload(favorites)

    @fastapi_app.post("/api/favorites")
    async def add_favorite(
        movie: dict[str, Any] = Body(...),
        favorites: FavoritesStore = Depends(get_favorites),
    ) -> dict[str, Any]:
        try:
            favorites.add(movie)
        except ValidationError as exc:
            raise HTTPException(
                status_code=422, detail=_validation_detail(exc)
            ) from exc
        return _favorites_payload(favorites)

    @fastapi_app.post("/api/favorites/toggle")
    async def toggle_favorite(
        movie: dict[str, Any] = Body(...),
        favorites: FavoritesStore = Depends(get_favorites),
    ) -> dict[str, Any]:
        try:
            is_favorite = favorites.toggle(movie)
        except ValidationError as exc:
            raise HTTPException(
                status_code=422, detail=_validation_detail(exc)
            ) from exc
        return {"isFavorite": is_favorite, **_favorites_payload(favorites)}

    @fastapi_app.get("/api/favorites/{movie_id}")
    async def favorite_status(
        movie_id: int,
        favorites: FavoritesStore = Depends(get_favorites),
    ) -> dict[str, Any]:
        return {"id": movie_id, "isFavorite": favorites.is_favorite(movie_id)}

    @fastapi_app.delete("/api/favorites/{movie_id}")
    async def remove_favorite(
        movie_id: int,
        favorites: FavoritesStore = Depends(get_favorites),
    ) -> dict[str, Any]:
        favorites.remove(movie_id)
        return _favorites_payload(favorites)

    @fastapi_app.delete("/api/favorites")
    async def clear_favorites(
        favorites: FavoritesStore = Depends(get_favorites),
    ) -> dict[str, Any]:
        favorites.clear()
        return _favorites_payload(favorites)


app = create_app()
