"""Pydantic models describing catalog payloads and canonical movie records."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field

from .utils import coerce_float, coerce_int, coerce_text

YEAR_UNKNOWN = "N/A"


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _identifier(value: Any) -> str | None:
    if value is None or isinstance(value, bool):
        return None
    return str(value)


def _year(value: Any) -> int | str:
    year = coerce_int(value)
    return year if year is not None else YEAR_UNKNOWN


def _rating(value: Any) -> float | None:
    rating = coerce_float(value)
    if rating is None or not 0 <= rating <= 10:
        return None
    return rating


def _count(value: Any) -> int | None:
    count = coerce_int(value)
    if count is None or count < 0:
        return None
    return count


def _entries(*required: str):
    """Build a validator keeping only list entries that carry ``required`` keys."""

    def _filter(value: Any) -> list[Any]:
        if not isinstance(value, (list, tuple)):
            return []
        return [
            entry
            for entry in value
            if isinstance(entry, BaseModel)
            or (
                isinstance(entry, dict)
                and all(entry.get(key) is not None for key in required)
            )
        ]

    return BeforeValidator(_filter)


OptionalInt = Annotated[int | None, BeforeValidator(coerce_int)]
OptionalFloat = Annotated[float | None, BeforeValidator(coerce_float)]
OptionalText = Annotated[str | None, BeforeValidator(coerce_text)]
Text = Annotated[str, BeforeValidator(_text)]
Year = Annotated[int | Literal["N/A"], BeforeValidator(_year)]
Rating = Annotated[float | None, BeforeValidator(_rating)]
Count = Annotated[int | None, BeforeValidator(_count)]


class Genre(BaseModel):
    """A catalog genre tag."""

    id: int
    name: Text = ""


class CastMember(BaseModel):
    """A credited cast member of a movie."""

    model_config = ConfigDict(populate_by_name=True)

    id: OptionalInt = None
    name: Text = ""
    character: OptionalText = None
    profile_path: OptionalText = Field(
        default=None,
        validation_alias=AliasChoices("profilePath", "profile_path"),
        serialization_alias="profilePath",
    )


class Video(BaseModel):
    """A video (trailer, teaser, clip) attached to a movie."""

    id: Annotated[str | None, BeforeValidator(_identifier)] = None
    key: str
    name: Text = ""
    type: Text = ""
    site: Text = ""

    @property
    def url(self) -> str | None:
        """Return a watchable URL for YouTube-hosted videos."""

        if self.site.casefold() == "youtube":
            return f"https://www.youtube.com/watch?v={self.key}"
        return None


Genres = Annotated[list[Genre], _entries("id")]
Cast = Annotated[list[CastMember], _entries()]


class Credits(BaseModel):
    cast: Cast = Field(default_factory=list)


class VideoList(BaseModel):
    results: Annotated[list[Video], _entries("key")] = Field(default_factory=list)


class RawMovie(BaseModel):
    """Movie payload as returned by TMDB (snake_case field names).

    The camelCase names of :class:`MovieRecord` are accepted too, and win
    over the TMDB spelling when a mapping carries both.
    """

    id: int
    title: Text = Field(default="", validation_alias=AliasChoices("title", "name"))
    overview: OptionalText = None
    release_date: OptionalText = Field(
        default=None, validation_alias=AliasChoices("releaseDate", "release_date")
    )
    vote_average: Rating = Field(
        default=None, validation_alias=AliasChoices("rating", "vote_average")
    )
    vote_count: Count = Field(
        default=None, validation_alias=AliasChoices("voteCount", "vote_count")
    )
    poster_path: OptionalText = Field(
        default=None, validation_alias=AliasChoices("posterPath", "poster_path")
    )
    backdrop_path: OptionalText = Field(
        default=None, validation_alias=AliasChoices("backdropPath", "backdrop_path")
    )
    genres: Genres = Field(default_factory=list)
    runtime: OptionalInt = None
    popularity: OptionalFloat = None
    credits: Credits | None = None
    videos: VideoList | None = None

    def trailer(self) -> Video | None:
        """Return the first YouTube trailer attached to the payload."""

        if self.videos is None:
            return None
        for video in self.videos.results:
            if video.type == "Trailer" and video.site.casefold() == "youtube":
                return video
        return None


class MovieRecord(BaseModel):
    """Canonical movie shape consumed by every presentation surface.

    Instances are produced by :func:`app.normalizer.normalize`. Field names are
    snake_case in Python and camelCase on the wire. When validated from a
    mapping, the camelCase key wins over its snake_case TMDB counterpart.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    title: Text = ""
    overview: OptionalText = None
    release_date: OptionalText = Field(default=None, alias="releaseDate")
    year: Year = YEAR_UNKNOWN
    rating: Rating = Field(
        default=None,
        validation_alias=AliasChoices("rating", "vote_average"),
    )
    vote_count: Count = Field(default=None, alias="voteCount")
    poster_path: OptionalText = Field(default=None, alias="posterPath")
    backdrop_path: OptionalText = Field(default=None, alias="backdropPath")
    poster_url: OptionalText = Field(default=None, alias="posterUrl")
    backdrop_url: OptionalText = Field(default=None, alias="backdropUrl")
    genres: Genres = Field(default_factory=list)
    runtime: OptionalInt = None
    popularity: OptionalFloat = None
    cast: Cast = Field(default_factory=list)
    trailer: Video | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON document served to clients."""

        return self.model_dump(mode="json", by_alias=True)


class MoviePage(BaseModel):
    """One page of catalog results."""

    page: int = 1
    results: Annotated[list[RawMovie], _entries("id")] = Field(default_factory=list)
    total_pages: int = 0
    total_results: int = 0
