"""Authoritative Breakout game state and the fixed-timestep update.

The engine knows nothing about windows, fonts or audio. Input reaches it
through ``pointer_move``, ``activate`` and ``cancel``; it reports sound cues
through the ``on_sound`` callback and exposes an immutable ``Snapshot`` for
whatever draws the frame.
"""

import enum
import logging
from dataclasses import dataclass

import pygame

from .config import BreakoutConfig, TIER_COLORS

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    NEW_GAME = "new_game"
    PLAYING = "playing"
    PAUSED = "paused"


class Sound(enum.Enum):
    WALL = "wall"
    PADDLE = "paddle"
    BRICK = "brick"


class Brick:
    """A single brick. Its row decides both its color tier and its value."""

    __slots__ = ("_rect", "_row")

    def __init__(self, rect, row):
        self._rect = pygame.Rect(rect)
        self._row = row

    @property
    def rect(self):
        return pygame.Rect(self._rect)

    @property
    def row(self):
        return self._row

    @property
    def point_value(self):
        return self._row // 2 * 2 + 1

    @property
    def color(self):
        if not (0 <= self._row < len(TIER_COLORS) * 2):
            raise ValueError(f"Brick row {self._row} has no color tier")
        return TIER_COLORS[self._row // 2]

    @property
    def is_orange(self):
        return self._row in (4, 5)

    @property
    def is_red(self):
        return self._row in (6, 7)

    def collides(self, rect):
        return self._rect.colliderect(rect)

    def __repr__(self):
        return f"Brick(row={self._row}, rect={tuple(self._rect)})"


def make_bricks(config):
    """Build the full grid in row-major order, row 0 at the bottom."""
    bricks = []
    for row in range(config.brick_rows):
        for col in range(config.bricks_per_row):
            x = col * (config.brick_width + config.brick_gap)
            y = config.top_bottom_padding + (config.brick_rows - row - 1) * (config.brick_height + config.brick_gap)
            bricks.append(Brick((x, y, config.brick_width, config.brick_height), row))
    return bricks


@dataclass(frozen=True)
class Snapshot:
    """Everything a renderer needs for one frame."""

    phase: Phase
    ball: tuple
    paddle: tuple
    bricks: tuple
    score: int
    balls: int
    game_width: int
    screen_height: int


class BreakoutEngine:
    def __init__(self, config=None, on_sound=None):
        self.config = config or BreakoutConfig()
        self.config.validate()
        self.on_sound = on_sound

        cfg = self.config
        self.phase = Phase.NEW_GAME

        self.ball_x = cfg.game_width // 2
        self.ball_y = cfg.game_width // 2
        self.ball_vel_x = cfg.initial_speed
        self.ball_vel_y = cfg.initial_speed

        self.paddle_x = (cfg.game_width - cfg.paddle_width) // 2

        self.bricks = make_bricks(cfg)
        self.score = 0
        self.balls = cfg.ball_count
        self.hit_count = 0
        self.hit_orange = False
        self.hit_red = False
        self.collided = False
        self.game_count = 0

        # Sound cues emitted during the most recent tick
        self.events = []

    # --- Commands ---

    def pointer_move(self, delta_x):
        cfg = self.config
        self.paddle_x = min(max(self.paddle_x + int(delta_x), 0), cfg.game_width - cfg.paddle_width)

    def activate(self):
        if self.phase is Phase.PLAYING:
            return
        self.start()

    def cancel(self):
        if self.phase is Phase.PLAYING:
            self.pause()
        elif self.phase is Phase.PAUSED:
            self.start()

    def start(self):
        if self.phase is Phase.NEW_GAME:
            self.score = 0
            self.hit_count = 0
            self.balls = self.config.ball_count
            logger.info("New game started")
        else:
            logger.debug("Game resumed")
        self.phase = Phase.PLAYING

    def pause(self):
        self.phase = Phase.PAUSED
        logger.debug("Game paused")

    # --- Update ---

    def speed(self):
        if self.phase is Phase.NEW_GAME:
            return 2.0
        if self.hit_count >= 12:
            if self.hit_orange and self.hit_red:
                return 1.75
            if self.hit_orange:
                return 1.5
            return 1.25
        if self.hit_count >= 4:
            return 1.0
        return 0.9

    def tick(self):
        """Advance the game by one fixed step. Paused games do not move."""
        if self.phase is Phase.PAUSED:
            return

        self.events = []

        self._update_ball_position()
        self._check_wall_collision()
        self._check_paddle_collision()
        self._check_brick_collision()

        if not self.bricks:
            self.reset_ball()
            self.bricks = make_bricks(self.config)
            self.game_count += 1
            logger.info(f"Board cleared ({self.game_count}/{self.config.clears_per_session})")

        if self.game_count >= self.config.clears_per_session or self.balls <= 0:
            self._end_session()

    update = tick

    def reset_ball(self):
        self.ball_x = self.config.game_width // 2
        self.ball_y = self.config.screen_height // 2

    def ball_rect(self):
        size = self.config.ball_size
        return pygame.Rect(self.ball_x, self.ball_y, size, size)

    def paddle_rect(self):
        cfg = self.config
        if self.phase is Phase.PLAYING:
            return pygame.Rect(self.paddle_x, cfg.paddle_y, cfg.paddle_width, cfg.paddle_height)
        # Outside of play the whole paddle line bounces the idle ball
        return pygame.Rect(0, cfg.paddle_y, cfg.game_width, cfg.paddle_height)

    def _update_ball_position(self):
        speed = self.speed()
        self.ball_x += int(self.ball_vel_x * speed)
        self.ball_y += int(self.ball_vel_y * speed)

        # Reaching the paddle line is a miss even if the paddle is underneath
        if self.ball_y >= self.config.paddle_y:
            self.balls -= 1
            logger.debug(f"Ball lost, {self.balls} remaining")
            self.reset_ball()

    def _check_wall_collision(self):
        if self.ball_x <= 0 or self.ball_x >= self.config.game_width - self.config.ball_size:
            self.ball_vel_x = -self.ball_vel_x
            self._emit(Sound.WALL)

        if self.ball_y <= 0:
            self.ball_vel_y = -self.ball_vel_y
            self._emit(Sound.WALL)

    def _check_paddle_collision(self):
        if self.paddle_rect().colliderect(self.ball_rect()):
            if not self.collided:
                self.ball_vel_y = -self.ball_vel_y
                self._emit(Sound.PADDLE)
            self.collided = True
        else:
            self.collided = False

    def _check_brick_collision(self):
        ball_rect = self.ball_rect()
        for index, brick in enumerate(self.bricks):
            if brick.collides(ball_rect):
                self._handle_brick_collision(index, brick)
                break

    def _handle_brick_collision(self, index, brick):
        if self.phase is Phase.PLAYING:
            del self.bricks[index]
            self.score += brick.point_value
            self.hit_orange = self.hit_orange or brick.is_orange
            self.hit_red = self.hit_red or brick.is_red
            self.hit_count += 1

        self.ball_vel_y = -self.ball_vel_y
        self._emit(Sound.BRICK)

    def _end_session(self):
        self.bricks = make_bricks(self.config)
        if self.phase is not Phase.NEW_GAME:
            logger.info(f"Session over with score {self.score}")
        self.phase = Phase.NEW_GAME
        self.game_count = 0

    def _emit(self, cue):
        self.events.append(cue)
        if self.on_sound is not None:
            self.on_sound(cue, self.phase)

    # --- Output ---

    def snapshot(self):
        cfg = self.config
        return Snapshot(
            phase=self.phase,
            ball=tuple(self.ball_rect()),
            paddle=tuple(self.paddle_rect()),
            bricks=tuple((tuple(brick.rect), brick.color) for brick in self.bricks),
            score=self.score,
            balls=self.balls,
            game_width=cfg.game_width,
            screen_height=cfg.screen_height,
        )
