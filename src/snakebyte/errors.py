"""Exception types raised by the SnakeByte core."""

from __future__ import annotations


class SnakeByteError(Exception):
    """Base class for recoverable game errors."""


class PlacementExhausted(SnakeByteError):
    """No free cell is left for a food or power-up placement."""


class PersistenceUnavailable(SnakeByteError):
    """The high score could not be read from or written to storage."""
