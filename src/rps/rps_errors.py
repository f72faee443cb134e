from __future__ import annotations


class RpsError(Exception):
    """Base class for every error raised by the game."""


class ConfigurationError(RpsError, ValueError):
    """The move list given at startup cannot be played."""


class InputValidationError(RpsError, ValueError):
    """A line typed during a round is not a menu choice."""

    def __init__(self, token: str, size: int) -> None:
        self.token = token
        self.size = size
        super().__init__(
            f"Invalid input {token!r}. "
            f"Enter a number from 1-{size} to move, 0 - to exit, ? - to help"
        )


class OutOfRange(RpsError, IndexError):
    """A 1-based move index outside [1, N] reached the rules engine."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"move index {index} is outside 1..{size}")


class InvalidLength(RpsError, ValueError):
    """Key length is not a positive multiple of 8 bits."""
