import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from breakout.config import BreakoutConfig
from breakout.engine import BreakoutEngine


@pytest.fixture
def config():
    return BreakoutConfig()


@pytest.fixture
def cues():
    return []


@pytest.fixture
def engine(config, cues):
    return BreakoutEngine(config, on_sound=lambda cue, phase: cues.append((cue, phase)))
