"""Draws engine snapshots onto pygame surfaces."""

import logging

import pygame

from .config import BORDER_WIDTH, COLOR_BG, COLOR_BALL, COLOR_BORDER, COLOR_PADDLE, COLOR_TEXT
from .engine import Phase

logger = logging.getLogger(__name__)

FONT_SIZE = 64
EXIT_BUTTON_HEIGHT = 100
EXIT_BUTTON_BOTTOM_OFFSET = 256

START_TEXT = "Click Anywhere to Start"
RESUME_TEXT = "Click Anywhere to Resume"
EXIT_TEXT = "Exit Game"


class Renderer:
    def __init__(self, font_path=None):
        pygame.font.init()
        self.font = self._load_font(font_path, bold=False)
        self.font_hud = self._load_font(font_path, bold=True)

    @staticmethod
    def _load_font(font_path, bold):
        if font_path is not None:
            try:
                font = pygame.font.Font(str(font_path), FONT_SIZE)
                font.set_bold(bold)
                return font
            except (pygame.error, FileNotFoundError, OSError) as e:
                logger.warning(f"Could not load font {font_path}, using system font: {e}")
        return pygame.font.SysFont("consolas", FONT_SIZE, bold=bold)

    @staticmethod
    def game_offset(surface_width, game_width):
        return (surface_width - game_width) // 2

    @staticmethod
    def exit_button_rect(surface_size, game_width):
        width, height = surface_size
        return pygame.Rect((width - game_width) // 2, height - EXIT_BUTTON_BOTTOM_OFFSET, game_width, EXIT_BUTTON_HEIGHT)

    def draw(self, surface, snapshot):
        surface.fill(COLOR_BG)

        if snapshot.phase is Phase.PAUSED:
            self._render_hud_text(surface, RESUME_TEXT)
            self._render_exit_button(surface, snapshot)
            return

        self._render_game(surface, snapshot)
        if snapshot.phase is Phase.NEW_GAME:
            self._render_hud_text(surface, START_TEXT)

    def _render_game(self, surface, snapshot):
        offset = self.game_offset(surface.get_width(), snapshot.game_width)
        game = surface.subsurface(pygame.Rect(offset, 0, snapshot.game_width, surface.get_height()))

        for rect, color in snapshot.bricks:
            pygame.draw.rect(game, color, rect)

        pygame.draw.rect(game, COLOR_PADDLE, snapshot.paddle)

        score_text = self.font.render(f"{snapshot.score:03d}", True, COLOR_TEXT)
        game.blit(score_text, (50, 32))
        balls_text = self.font.render(str(snapshot.balls), True, COLOR_TEXT)
        game.blit(balls_text, (snapshot.game_width - 200, 32))

        pygame.draw.rect(game, COLOR_BALL, snapshot.ball)

        # Border
        border = pygame.Rect(offset - BORDER_WIDTH, 0, snapshot.game_width + 2 * BORDER_WIDTH, surface.get_height())
        pygame.draw.rect(surface, COLOR_BORDER, border, BORDER_WIDTH)

    def _render_hud_text(self, surface, text):
        text_surf = self.font_hud.render(text, True, COLOR_TEXT)
        x = (surface.get_width() - text_surf.get_width()) // 2
        surface.blit(text_surf, (x, surface.get_height() // 2))

    def _render_exit_button(self, surface, snapshot):
        button = self.exit_button_rect(surface.get_size(), snapshot.game_width)
        pygame.draw.rect(surface, COLOR_BG, button)
        text_surf = self.font.render(EXIT_TEXT, True, COLOR_TEXT)
        surface.blit(text_surf, text_surf.get_rect(center=button.center))
