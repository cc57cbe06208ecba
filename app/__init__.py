"""MovieFinder: TMDB movie search with a persisted favorites list."""

__version__ = "1.0.0"
