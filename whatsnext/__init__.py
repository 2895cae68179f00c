"""What's Next? - TMDB proxy backend."""

__version__ = "1.0.0"
