import os

import gymnasium as gym
from gymnasium.spaces import MultiDiscrete
import numpy as np
import pygame

from .config import BORDER_WIDTH, BreakoutConfig
from .engine import BreakoutEngine, Phase
from .render import Renderer

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")


class GameEnv(gym.Env):
    """Headless Breakout: one engine tick per step, rendered frames as observations."""

    metadata = {"render_modes": ["rgb_array"]}

    user_guide = (
        "Controls: ←→ to move the paddle. Press space to start or resume, shift to pause."
    )

    game_description = (
        "Classic Breakout. Bounce the ball off the paddle to smash eight rows of bricks; "
        "higher rows score more and speed the ball up. Clear the wall twice or lose three balls to end the session."
    )

    auto_advance = True

    def __init__(self, render_mode="rgb_array", config=None):
        super().__init__()

        # --- Constants ---
        self.config = config or BreakoutConfig()
        self.WIDTH = self.config.game_width + 2 * BORDER_WIDTH
        self.HEIGHT = self.config.screen_height
        self.MAX_STEPS = 20000
        self.PADDLE_SPEED = 12
        self.MISS_PENALTY = 1.0

        # Spaces
        self.observation_space = gym.spaces.Box(
            low=0, high=255, shape=(self.HEIGHT, self.WIDTH, 3), dtype=np.uint8
        )
        self.action_space = MultiDiscrete([5, 2, 2])
        self.render_mode = render_mode

        # Pygame setup
        pygame.init()
        self.screen = pygame.Surface((self.WIDTH, self.HEIGHT))
        self.renderer = Renderer()

        # State variables (initialized in reset)
        self.engine = None
        self.steps = 0
        self.shift_was_held = False

        self.reset()

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)

        self.engine = BreakoutEngine(self.config)
        self.engine.activate()
        self.steps = 0
        self.shift_was_held = False

        return self._get_observation(), self._get_info()

    def step(self, action):
        if self.engine.phase is Phase.NEW_GAME:
            return self._get_observation(), 0, True, False, self._get_info()

        score_before = self.engine.score
        balls_before = self.engine.balls

        self._handle_input(action)
        self.engine.tick()
        self.steps += 1

        reward = self.engine.score - score_before
        if self.engine.balls < balls_before:
            reward -= self.MISS_PENALTY

        terminated = self.engine.phase is Phase.NEW_GAME
        truncated = self.steps >= self.MAX_STEPS

        return (
            self._get_observation(),
            reward,
            terminated,
            truncated,
            self._get_info()
        )

    def _handle_input(self, action):
        movement = action[0]
        space_held = action[1] == 1
        shift_held = action[2] == 1

        if movement == 3:  # Left
            self.engine.pointer_move(-self.PADDLE_SPEED)
        elif movement == 4:  # Right
            self.engine.pointer_move(self.PADDLE_SPEED)

        if space_held:
            self.engine.activate()

        # Pause toggles once per press, not every frame it is held
        if shift_held and not self.shift_was_held:
            self.engine.cancel()
        self.shift_was_held = shift_held

    def _get_observation(self):
        self.renderer.draw(self.screen, self.engine.snapshot())
        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2)).astype(np.uint8)

    def render(self):
        return self._get_observation()

    def _get_info(self):
        return {
            "score": self.engine.score,
            "steps": self.steps,
            "balls": self.engine.balls,
            "bricks_left": len(self.engine.bricks),
            "phase": self.engine.phase.value,
        }

    def close(self):
        pygame.quit()

    def validate_implementation(self):
        # Test action space
        assert self.action_space.shape == (3,)
        assert self.action_space.nvec.tolist() == [5, 2, 2]

        # Test observation space
        test_obs = self._get_observation()
        assert test_obs.shape == (self.HEIGHT, self.WIDTH, 3)
        assert test_obs.dtype == np.uint8

        # Test reset
        obs, info = self.reset()
        assert obs.shape == (self.HEIGHT, self.WIDTH, 3)
        assert isinstance(info, dict)
        assert info["phase"] == Phase.PLAYING.value

        # Test step
        obs, reward, term, trunc, info = self.step(np.array([0, 0, 0]))
        assert obs.shape == (self.HEIGHT, self.WIDTH, 3)
        assert isinstance(reward, (int, float))
        assert isinstance(term, bool)
        assert isinstance(trunc, bool)
        assert isinstance(info, dict)

        # Test specific game mechanics
        self.reset()
        start_x = self.engine.paddle_x
        self.step(np.array([3, 0, 0]))
        assert self.engine.paddle_x == start_x - self.PADDLE_SPEED, "Paddle did not move left"
        assert len(self.engine.bricks) == self.config.brick_rows * self.config.bricks_per_row
