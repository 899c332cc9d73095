"""Game constants and the tunable configuration for a Breakout session."""

from dataclasses import dataclass

# Colors
COLOR_BG = (0, 0, 0)
COLOR_BORDER = (255, 255, 255)
COLOR_PADDLE = (0, 191, 255)
COLOR_BALL = (255, 255, 255)
COLOR_TEXT = (255, 255, 255)

COLOR_YELLOW = (255, 255, 0)
COLOR_GREEN = (0, 128, 0)
COLOR_ORANGE = (255, 165, 0)
COLOR_RED = (255, 0, 0)

# One color per pair of rows, bottom to top
TIER_COLORS = (COLOR_YELLOW, COLOR_GREEN, COLOR_ORANGE, COLOR_RED)
MAX_ROWS = len(TIER_COLORS) * 2

BORDER_WIDTH = 16


@dataclass(frozen=True)
class BreakoutConfig:
    """Playfield geometry and pacing. Defaults match the classic layout."""

    ball_count: int = 3
    ball_size: int = 15
    initial_speed: int = 5

    brick_gap: int = 6
    brick_rows: int = 8
    bricks_per_row: int = 14
    brick_width: int = 50
    brick_height: int = 15
    top_bottom_padding: int = 150

    screen_height: int = 900
    tick_ms: int = 15
    clears_per_session: int = 2

    @property
    def game_width(self) -> int:
        return self.bricks_per_row * (self.brick_width + self.brick_gap)

    @property
    def paddle_width(self) -> int:
        return self.brick_width

    @property
    def paddle_height(self) -> int:
        return self.brick_height

    @property
    def paddle_y(self) -> int:
        return self.screen_height - self.top_bottom_padding

    @property
    def grid_bottom(self) -> int:
        return self.top_bottom_padding + self.brick_rows * (self.brick_height + self.brick_gap)

    @property
    def tick_rate(self) -> float:
        """Ticks per second derived from the tick interval"""
        return 1000.0 / self.tick_ms

    def validate(self) -> None:
        sizes = {
            "ball_count": self.ball_count,
            "ball_size": self.ball_size,
            "initial_speed": self.initial_speed,
            "bricks_per_row": self.bricks_per_row,
            "brick_width": self.brick_width,
            "brick_height": self.brick_height,
            "tick_ms": self.tick_ms,
            "clears_per_session": self.clears_per_session,
        }
        for name, value in sizes.items():
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

        if self.brick_gap < 0:
            raise ValueError(f"brick_gap must not be negative, got {self.brick_gap}")

        if not (1 <= self.brick_rows <= MAX_ROWS):
            raise ValueError(f"brick_rows must be 1-{MAX_ROWS}, got {self.brick_rows}")

        if self.grid_bottom >= self.paddle_y:
            raise ValueError(
                f"screen_height {self.screen_height} leaves no room between the bricks and the paddle"
            )
