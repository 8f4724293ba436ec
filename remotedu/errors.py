"""
Exceptions raised by remotedu. Every one of them is fatal to a run.
"""
from typing import Optional


class DuError(Exception):
    """Base class for remotedu failures."""


class ConfigError(DuError):
    """The configuration could not be loaded or is invalid."""


class NoCredentialsError(ConfigError):
    """The configuration loaded fine but carries no credential material."""

    def __init__(self, message: str, config=None):
        super().__init__(message)
        self.config = config


class MissingArgumentError(DuError):
    """No path argument was supplied."""


class ListingError(DuError):
    """The directory server failed to list or glob a path."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class InvariantError(DuError):
    """Internal consistency check failed."""
