"""
Base Screen

Every screen registered with the StateManager implements this lifecycle.
The manager forwards each frame's events, then update, then render, to the
active screen only.
"""

import pygame
from abc import ABC, abstractmethod
from typing import Optional
from .theme import get_theme


class BaseScreen(ABC):
    """Abstract screen; subclasses call super() in on_enter/on_exit."""

    def __init__(self, screen_name: str):
        self.screen_name = screen_name
        self.active = False
        self.theme = get_theme()

    @abstractmethod
    def on_enter(self):
        self.active = True

    @abstractmethod
    def on_exit(self):
        self.active = False

    @abstractmethod
    def handle_input(self, events: list[pygame.event.Event]) -> Optional[str]:
        """
        Process this frame's events.

        Returns:
            Name of the screen to switch to, 'BACK' for the previous
            screen, or None to stay
        """

    @abstractmethod
    def update(self, dt: float):
        """Advance by dt seconds"""

    @abstractmethod
    def render(self, surface: pygame.Surface):
        ...

    def draw_footer(self, surface: pygame.Surface, rect: pygame.Rect, controls: str):
        """Control hints, e.g. "[ENTER] Guess  [F5] New round" """
        self.theme.draw_text(surface, self.theme.fonts.small(),
                             rect.x + 12, rect.centery,
                             controls, self.theme.colors.FG_DIM, valign='center')

    def is_active(self) -> bool:
        return self.active
