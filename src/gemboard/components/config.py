from dataclasses import dataclass

from gemboard.constants import (
    BASE_POINTS_PER_GEM,
    CASCADE_PASS_FACTOR,
    COLOR_COUNT,
    GRID_COLS,
    GRID_ROWS,
    INITIAL_LEVEL_THRESHOLD,
    LEVEL_THRESHOLD_FACTOR,
    MIN_COLOR_COUNT,
    MIN_GRID_EDGE,
)
from gemboard.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Per-game tuning, stored as a component on the world's config entity."""
    rows: int = GRID_ROWS
    cols: int = GRID_COLS
    color_count: int = COLOR_COUNT
    base_points: int = BASE_POINTS_PER_GEM
    initial_threshold: int = INITIAL_LEVEL_THRESHOLD
    threshold_factor: float = LEVEL_THRESHOLD_FACTOR
    pass_factor: int = CASCADE_PASS_FACTOR

    def validate(self) -> "GameConfig":
        validate_dimensions(self.rows, self.cols, self.color_count)
        if self.base_points <= 0:
            raise ConfigurationError(f"base_points must be positive, got {self.base_points}")
        if self.initial_threshold <= 0:
            raise ConfigurationError(f"initial_threshold must be positive, got {self.initial_threshold}")
        if self.threshold_factor < 1:
            raise ConfigurationError(f"threshold_factor must be >= 1, got {self.threshold_factor}")
        if self.pass_factor <= 0:
            raise ConfigurationError(f"pass_factor must be positive, got {self.pass_factor}")
        return self


def validate_dimensions(rows: int, cols: int, color_count: int) -> None:
    if rows < MIN_GRID_EDGE or cols < MIN_GRID_EDGE:
        raise ConfigurationError(
            f"board must be at least {MIN_GRID_EDGE}x{MIN_GRID_EDGE}, got {rows}x{cols}"
        )
    if color_count < MIN_COLOR_COUNT:
        raise ConfigurationError(
            f"at least {MIN_COLOR_COUNT} gem colours are required, got {color_count}"
        )
