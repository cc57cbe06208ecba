"""Conversion of catalog payloads into canonical :class:`MovieRecord` objects."""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import quote

from .config import Settings, get_settings
from .models import YEAR_UNKNOWN, MovieRecord, RawMovie
from .utils import extract_year

IMAGE_SIZES: dict[str, str] = {
    "small": "w185",
    "medium": "w342",
    "large": "w500",
    "original": "original",
}

PLACEHOLDER_POSTER_URL = (
    "https://via.placeholder.com/342x513/1f2937/ffffff?text="
    + quote("Movie Poster", safe="")
)

_CANONICAL_ONLY_KEYS = ("posterUrl", "backdropUrl")


def image_url(
    path: str | None,
    size: str = IMAGE_SIZES["medium"],
    *,
    settings: Settings | None = None,
) -> str | None:
    """Return a renderable URL for a TMDB image path."""

    if not path:
        return None
    resolved = settings or get_settings()
    if resolved.use_mock_data:
        return PLACEHOLDER_POSTER_URL
    return f"{resolved.image_base_url}/{size}{path}"


def parse_movie(payload: Mapping[str, Any]) -> RawMovie | MovieRecord:
    """Classify a plain mapping as either a raw payload or a canonical record.

    A ``year`` key marks a canonical record even when its value is null.
    Raises :class:`pydantic.ValidationError` when the mapping has no usable
    ``id``.
    """

    if any(payload.get(key) for key in _CANONICAL_ONLY_KEYS) or "year" in payload:
        return MovieRecord.model_validate(payload)
    return RawMovie.model_validate(payload)


def normalize(
    movie: RawMovie | MovieRecord | Mapping[str, Any],
    *,
    settings: Settings | None = None,
) -> MovieRecord:
    """Return the canonical record for ``movie``.

    Canonical values are kept as they are; only fields that are missing on a
    canonical record are derived. Normalising a record twice yields an equal
    record.
    """

    resolved = settings or get_settings()
    if isinstance(movie, MovieRecord):
        return _complete_record(movie, resolved)
    if isinstance(movie, RawMovie):
        return _from_raw(movie, resolved)
    return normalize(parse_movie(movie), settings=resolved)


def _from_raw(movie: RawMovie, settings: Settings) -> MovieRecord:
    year = extract_year(movie.release_date)
    return MovieRecord(
        id=movie.id,
        title=movie.title,
        overview=movie.overview,
        release_date=movie.release_date,
        year=year if year is not None else YEAR_UNKNOWN,
        rating=movie.vote_average,
        vote_count=movie.vote_count,
        poster_path=movie.poster_path,
        backdrop_path=movie.backdrop_path,
        poster_url=image_url(movie.poster_path, settings=settings),
        backdrop_url=image_url(
            movie.backdrop_path, IMAGE_SIZES["large"], settings=settings
        ),
        genres=movie.genres,
        runtime=movie.runtime,
        popularity=movie.popularity,
        cast=movie.credits.cast if movie.credits else [],
        trailer=movie.trailer(),
    )


def _complete_record(record: MovieRecord, settings: Settings) -> MovieRecord:
    update: dict[str, Any] = {}
    if record.year == YEAR_UNKNOWN:
        year = extract_year(record.release_date)
        if year is not None:
            update["year"] = year
    if record.poster_url is None and record.poster_path:
        update["poster_url"] = image_url(record.poster_path, settings=settings)
    if record.backdrop_url is None and record.backdrop_path:
        update["backdrop_url"] = image_url(
            record.backdrop_path, IMAGE_SIZES["large"], settings=settings
        )
    return record.model_copy(update=update, deep=True)
