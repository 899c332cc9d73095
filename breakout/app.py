"""Play Breakout in a pygame window.

Usage:
    python -m breakout [--fullscreen] [--sounds DIR] [--font PATH]
"""

import argparse
import dataclasses
import logging
import sys

import pygame

from .config import BORDER_WIDTH, BreakoutConfig
from .engine import BreakoutEngine, Phase
from .render import Renderer
from .sound import SOUNDS_FOLDER, SoundBoard

logger = logging.getLogger(__name__)

WINDOW_MARGIN = 48


def window_size(config):
    return config.game_width + 2 * (BORDER_WIDTH + WINDOW_MARGIN), config.screen_height


def run(config, fullscreen=False, sound_dir=SOUNDS_FOLDER, font_path=None, mute=False):
    pygame.init()
    pygame.display.set_caption("Breakout!")

    if fullscreen:
        screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        # The playfield always spans the full display height
        config = dataclasses.replace(config, screen_height=screen.get_height())
        config.validate()
    else:
        screen = pygame.display.set_mode(window_size(config))

    clock = pygame.time.Clock()
    sounds = SoundBoard(sound_dir, enabled=not mute)
    engine = BreakoutEngine(config, on_sound=sounds.play)
    renderer = Renderer(font_path)

    logger.info(f"Window {screen.get_width()}x{screen.get_height()}, {config.tick_rate:.0f} ticks/s")

    running = True
    try:
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEMOTION:
                    engine.pointer_move(event.rel[0])
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    exit_button = renderer.exit_button_rect(screen.get_size(), config.game_width)
                    if engine.phase is Phase.PAUSED and exit_button.collidepoint(event.pos):
                        running = False
                    else:
                        engine.activate()
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    engine.cancel()

            # Grab the pointer during play so relative motion is not stopped by the window edge
            playing = engine.phase is Phase.PLAYING
            pygame.mouse.set_visible(not playing)
            pygame.event.set_grab(playing)

            engine.tick()

            renderer.draw(screen, engine.snapshot())
            pygame.display.flip()

            clock.tick(config.tick_rate)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        logger.info(f"Exiting with score {engine.score}")
        pygame.quit()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="breakout", description="Classic Breakout")
    parser.add_argument("--height", type=int, default=BreakoutConfig.screen_height,
                        help="playfield height in pixels (ignored with --fullscreen)")
    parser.add_argument("--fullscreen", action="store_true", help="use the whole display")
    parser.add_argument("--sounds", default=SOUNDS_FOLDER, help="directory holding breakout_1-3.wav")
    parser.add_argument("--font", default=None, help="TTF font for the score and messages")
    parser.add_argument("--mute", action="store_true", help="disable sound")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    args = parser.parse_args(argv)

    args.config = BreakoutConfig(screen_height=args.height)
    try:
        args.config.validate()
    except ValueError as e:
        parser.error(str(e))

    return args


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
    )

    run(args.config, fullscreen=args.fullscreen, sound_dir=args.sounds, font_path=args.font, mute=args.mute)
    return 0


if __name__ == "__main__":
    sys.exit(main())
