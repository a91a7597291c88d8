"""
Title Screen

Entry point for the game with buttons:
  PLAY  → Guessing game (GAME screen)
  QUIT  → Exit application
"""

import pygame
from typing import Optional
from .base_screen import BaseScreen
from .components import Button

HOW_TO_PLAY = (
    "A station is ringed in green on the map.",
    "Type its name and press Enter.",
    "Wrong guesses are revealed and coloured by how close they are.",
    "Give up at any time to see the whole network.",
)


class TitleScreen(BaseScreen):
    """
    Title screen: how to play, then PLAY or QUIT.
    """

    def __init__(self, state_manager=None):
        super().__init__("TITLE")
        self._state_manager = state_manager
        self._next_screen: Optional[str] = None
        self._buttons: dict[str, Button] = {
            'play': Button(0, 0, 220, 60, "PLAY", callback=lambda: self._navigate('GAME')),
            'quit': Button(0, 0, 220, 60, "QUIT", callback=self._quit),
        }

    def _layout(self, W: int, H: int) -> None:
        cx, cy = W // 2, H // 2 + 80
        self._buttons['play'].rect.midbottom = (cx, cy - 10)
        self._buttons['quit'].rect.midtop = (cx, cy + 10)

    def _navigate(self, screen: str) -> None:
        self._next_screen = screen

    def _quit(self) -> None:
        pygame.event.post(pygame.event.Event(pygame.QUIT))

    def on_enter(self) -> None:
        super().on_enter()
        self._next_screen = None

    def on_exit(self) -> None:
        super().on_exit()

    def handle_input(self, events: list) -> Optional[str]:
        mouse_pos = pygame.mouse.get_pos()
        for btn in self._buttons.values():
            btn.update(mouse_pos)

        for event in events:
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._quit()
                elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE):
                    self._navigate('GAME')

            for btn in self._buttons.values():
                if btn.handle_event(event):
                    break

        result, self._next_screen = self._next_screen, None
        return result

    def update(self, dt: float) -> None:
        pass

    def render(self, surface: pygame.Surface) -> None:
        W, H = surface.get_width(), surface.get_height()
        self._layout(W, H)
        colors = self.theme.colors
        surface.fill(colors.BG_DARK)

        self.theme.draw_text(surface, self.theme.fonts.title(), W // 2, H // 4,
                             "TUBETAG", colors.FG_PRIMARY, align='center', valign='center')

        y = H // 4 + 50
        if self._state_manager is not None:
            count = len(self._state_manager.catalog)
            self.theme.draw_text(surface, self.theme.fonts.small(), W // 2, y,
                                 f"{count} stations loaded", colors.FG_DIM, align='center')
            y += 30
        for line in HOW_TO_PLAY:
            self.theme.draw_text(surface, self.theme.fonts.normal(), W // 2, y,
                                 line, colors.FG_DIM, align='center')
            y += 26

        for btn in self._buttons.values():
            btn.draw(surface)

        footer = pygame.Rect(10, H - 50, W - 20, 40)
        self.draw_footer(surface, footer, "[ENTER] Play  [ESC/QUIT] Exit")
