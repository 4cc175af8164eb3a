"""Silver Brain: a personal knowledge store kept in SQLite, with search parsing and an HTTP API."""

__version__ = "0.1.0"