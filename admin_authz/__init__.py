"""Identity admin authorization synchronization engine."""

__version__ = "0.1.0"
