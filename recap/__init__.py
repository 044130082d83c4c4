"""Reading Recap: yearly statistics from a Goodreads-style reading history."""

__version__ = "1.0.0"
