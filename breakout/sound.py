"""
Sound board - plays the engine's sound cues through pygame.mixer
"""

import logging
from pathlib import Path

import pygame

from .engine import Phase, Sound

logger = logging.getLogger(__name__)

SOUNDS_FOLDER = "Resources"

SOUND_FILES = {
    Sound.PADDLE: "breakout_1.wav",
    Sound.WALL: "breakout_2.wav",
    Sound.BRICK: "breakout_3.wav",
}


class SoundBoard:
    """
    Maps sound cues to samples and plays them while a game is in progress.

    A missing sample or an unavailable audio device only silences the
    affected cues; nothing here raises into the game loop.
    """

    def __init__(self, sound_dir=SOUNDS_FOLDER, enabled=True):
        self.sound_dir = Path(sound_dir)
        self._sounds = {}

        if not enabled:
            logger.info("Sound disabled")
            return

        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
        except pygame.error as e:
            logger.warning(f"Audio device unavailable, playing without sound: {e}")
            return

        self._load_sounds()

    def _load_sounds(self):
        for cue, filename in SOUND_FILES.items():
            path = self.sound_dir / filename
            try:
                self._sounds[cue] = pygame.mixer.Sound(str(path))
            except (pygame.error, FileNotFoundError) as e:
                logger.warning(f"Could not load {cue.value} sound from {path}: {e}")

    def play(self, cue, phase):
        if phase is not Phase.PLAYING:
            return

        sound = self._sounds.get(cue)
        if sound is None:
            return

        try:
            sound.play()
        except pygame.error as e:
            logger.error(f"Failed to play {cue.value} sound: {e}")

    __call__ = play
