"""Exception types raised by map generation and configuration."""

from __future__ import annotations


class BackroomsError(Exception):
    """Base class for errors raised by the backrooms package."""


class InvalidDimensions(BackroomsError, ValueError):
    """Grid width or height too small to leave any interior."""

    def __init__(self, width: int, height: int) -> None:
        super().__init__(
            f"grid must be at least 3x3 to hold a border ring, got {width}x{height}"
        )
        self.width = width
        self.height = height


class InvalidConfiguration(BackroomsError, ValueError):
    """A configuration value is out of its allowed range."""
