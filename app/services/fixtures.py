"""Offline catalog serving a fixed set of movies with simulated latency."""

from __future__ import annotations

import asyncio
from typing import Any

from ..config import Settings
from ..errors import NotFound
from ..models import MoviePage, RawMovie

SEARCH_LATENCY_SECONDS = 0.5
POPULAR_LATENCY_SECONDS = 0.4
DETAILS_LATENCY_SECONDS = 0.3

FIXTURE_MOVIES: tuple[dict[str, Any], ...] = (
    {
        "id": 1,
        "title": "The Shawshank Redemption",
        "overview": (
            "Two imprisoned men bond over a number of years, finding solace and "
            "eventual redemption through acts of common decency."
        ),
        "release_date": "1994-09-23",
        "vote_average": 9.3,
        "vote_count": 2_500_000,
        "poster_path": "/q6y0Go1tsGEsmtFryDOJo3dEmqu.jpg",
        "backdrop_path": "/iNh3BivHyg5sQRPP1KOkzguEX0H.jpg",
        "genres": [{"id": 18, "name": "Drama"}, {"id": 80, "name": "Crime"}],
        "runtime": 142,
        "popularity": 95.5,
    },
    {
        "id": 2,
        "title": "The Godfather",
        "overview": (
            "The aging patriarch of an organized crime dynasty transfers control "
            "of his clandestine empire to his reluctant son."
        ),
        "release_date": "1972-03-24",
        "vote_average": 9.2,
        "vote_count": 1_800_000,
        "poster_path": "/3bhkrj58Vtu7enYsRolD1fZdja1.jpg",
        "backdrop_path": "/tmU7GeKVybMWFButWEGl2M4GeiP.jpg",
        "genres": [{"id": 18, "name": "Drama"}, {"id": 80, "name": "Crime"}],
        "runtime": 175,
        "popularity": 92.1,
    },
    {
        "id": 3,
        "title": "The Dark Knight",
        "overview": (
            "When the menace known as the Joker wreaks havoc and chaos on the "
            "people of Gotham, Batman must accept one of the greatest "
            "psychological and physical tests of his ability to fight injustice."
        ),
        "release_date": "2008-07-18",
        "vote_average": 9.0,
        "vote_count": 2_200_000,
        "poster_path": "/qJ2tW6WMUDux911r6m7haRef0WH.jpg",
        "backdrop_path": "/hqkIcbrOHL86UncnHIsHVcVmzue.jpg",
        "genres": [
            {"id": 28, "name": "Action"},
            {"id": 80, "name": "Crime"},
            {"id": 18, "name": "Drama"},
        ],
        "runtime": 152,
        "popularity": 98.7,
    },
    {
        "id": 4,
        "title": "Pulp Fiction",
        "overview": (
            "The lives of two mob hitmen, a boxer, a gangster and his wife, and a "
            "pair of diner bandits intertwine in four tales of violence and "
            "redemption."
        ),
        "release_date": "1994-10-14",
        "vote_average": 8.9,
        "vote_count": 1_900_000,
        "poster_path": "/d5iIlFn5s0ImszYzBPb8JPIfbXD.jpg",
        "backdrop_path": "/4cDFJr4HnXN5AdPw4AKrmLlMWdO.jpg",
        "genres": [{"id": 80, "name": "Crime"}, {"id": 18, "name": "Drama"}],
        "runtime": 154,
        "popularity": 89.3,
    },
    {
        "id": 5,
        "title": "Forrest Gump",
        "overview": (
            "The presidencies of Kennedy and Johnson, the events of Vietnam, "
            "Watergate and other historical events unfold from the perspective "
            "of an Alabama man with an IQ of 75."
        ),
        "release_date": "1994-07-06",
        "vote_average": 8.8,
        "vote_count": 2_100_000,
        "poster_path": "/arw2vcBveWOVZr6pxd9XTd1TdQa.jpg",
        "backdrop_path": "/7c8QeNjmJlmI5Tn3V5RjQu6Bm7O.jpg",
        "genres": [{"id": 18, "name": "Drama"}, {"id": 10749, "name": "Romance"}],
        "runtime": 142,
        "popularity": 87.9,
    },
)

FIXTURE_CREDITS: dict[str, Any] = {
    "cast": [
        {
            "id": 1,
            "name": "Actor One",
            "character": "Character One",
            "profile_path": "/actor1.jpg",
        },
        {
            "id": 2,
            "name": "Actor Two",
            "character": "Character Two",
            "profile_path": "/actor2.jpg",
        },
    ]
}

FIXTURE_VIDEOS: dict[str, Any] = {
    "results": [
        {
            "id": "1",
            "key": "dQw4w9WgXcQ",
            "name": "Official Trailer",
            "type": "Trailer",
            "site": "YouTube",
        }
    ]
}


class FixtureCatalog:
    """Catalog backend used when ``USE_MOCK_DATA`` is enabled."""

    def __init__(self, settings: Settings):
        self._latency_scale = settings.mock_latency_scale

    async def search(self, query: str, page: int = 1) -> MoviePage:
        """Return fixtures whose title contains ``query``, ignoring case."""

        await self._simulate_latency(SEARCH_LATENCY_SECONDS)
        needle = query.casefold()
        matches = [
            movie for movie in FIXTURE_MOVIES if needle in movie["title"].casefold()
        ]
        return self._page(matches, page)

    async def get_popular(self, page: int = 1) -> MoviePage:
        await self._simulate_latency(POPULAR_LATENCY_SECONDS)
        return self._page(list(FIXTURE_MOVIES), page)

    async def get_details(self, movie_id: int) -> RawMovie:
        await self._simulate_latency(DETAILS_LATENCY_SECONDS)
        for movie in FIXTURE_MOVIES:
            if movie["id"] == int(movie_id):
                return RawMovie.model_validate(
                    {**movie, "credits": FIXTURE_CREDITS, "videos": FIXTURE_VIDEOS}
                )
        raise NotFound("Movie not found", status_code=404)

    async def _simulate_latency(self, seconds: float) -> None:
        delay = seconds * self._latency_scale
        if delay > 0:
            await asyncio.sleep(delay)

    @staticmethod
    def _page(movies: list[dict[str, Any]], page: int) -> MoviePage:
        return MoviePage(
            page=page,
            results=movies,
            total_pages=1,
            total_results=len(movies),
        )
