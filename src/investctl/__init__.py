"""investctl — investment management CLI and service layer."""

__version__ = "0.1.0"
