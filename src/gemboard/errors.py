"""Exception types raised by the gem board engine.

Gameplay rejections (swapping non-adjacent cells, swapping after game over) are
reported through return values and events, never through these exceptions.
"""


class GemBoardError(Exception):
    """Base class for engine errors."""


class ConfigurationError(GemBoardError, ValueError):
    """Board dimensions or palette cannot produce a playable, match-free board."""


class CascadeLimitExceeded(GemBoardError, RuntimeError):
    """A cascade ran for more passes than the board size allows."""

    def __init__(self, passes: int, limit: int):
        super().__init__(f"cascade did not settle after {passes} passes (limit {limit})")
        self.passes = passes
        self.limit = limit
