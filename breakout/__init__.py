"""
Breakout - a single-screen brick-breaking game

The engine owns the game state and the per-tick update; rendering, sound
and the window loop sit around it and only talk to it through commands
and snapshots.
"""

from .config import BreakoutConfig
from .engine import BreakoutEngine, Brick, Phase, Snapshot, Sound, make_bricks

__all__ = [
    "BreakoutConfig",
    "BreakoutEngine",
    "Brick",
    "Phase",
    "Snapshot",
    "Sound",
    "make_bricks",
]
