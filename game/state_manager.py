"""
Game State Manager

Owns the shared game objects (station catalog, search index, current
round) and the registered screens. Handles screen lifecycle and
transitions.
"""

import random
import pygame
from typing import Optional, Dict

from core.search import SearchIndex
from core.stations import StationCatalog
from .config import GameConfig
from .round_state import RoundStateMachine


class StateManager:
    """
    Manages game state and screen navigation

    Responsibilities:
    - Station data and round state shared by all screens
    - Screen registration and lifecycle
    - Navigation between screens, with a stack for back navigation
    """

    def __init__(self, config: GameConfig, catalog: StationCatalog,
                 index: Optional[SearchIndex] = None):
        self.config = config
        self.catalog = catalog
        self.index = index or SearchIndex.build(catalog, threshold=config.match_threshold)
        self.game = RoundStateMachine(
            catalog, self.index,
            rng=random.Random(config.seed),
            guess_feedback_s=config.guess_feedback_s,
            win_feedback_s=config.win_feedback_s,
        )
        self.screens: Dict[str, 'BaseScreen'] = {}
        self.current_screen: Optional[str] = None
        self.screen_stack: list[str] = []

    def register_screen(self, name: str, screen: 'BaseScreen'):
        self.screens[name] = screen
        print(f"Registered screen: {name}")

    def switch_to(self, screen_name: str, push_stack: bool = True):
        """
        Switch to a screen

        Args:
            screen_name: Name of screen to switch to
            push_stack: If True, push current screen to stack (for back nav)
        """
        if screen_name not in self.screens:
            print(f"Warning: Screen '{screen_name}' not registered!")
            return

        if self.current_screen:
            if push_stack:
                self.screen_stack.append(self.current_screen)
            self.screens[self.current_screen].on_exit()

        self.current_screen = screen_name
        self.screens[screen_name].on_enter()

    def go_back(self) -> bool:
        """
        Go back to previous screen

        Returns:
            True if went back, False if no previous screen
        """
        if not self.screen_stack:
            return False
        self.switch_to(self.screen_stack.pop(), push_stack=False)
        return True

    def update(self, dt: float):
        if self.current_screen:
            self.screens[self.current_screen].update(dt)

    def render(self, surface: pygame.Surface):
        if self.current_screen:
            self.screens[self.current_screen].render(surface)

    def handle_input(self, events: list[pygame.event.Event]):
        if not self.current_screen:
            return
        next_screen = self.screens[self.current_screen].handle_input(events)
        if next_screen == 'BACK':
            self.go_back()
        elif next_screen:
            self.switch_to(next_screen)

    def get_round(self) -> RoundStateMachine:
        return self.game
