"""
Game Screen - guess the highlighted station

Layout
------
  [ guess input .................. ] [NEW ROUND] [GIVE UP] [FULL MAP]
  +----------------------------------------------------------------+
  |  map viewer + station overlay                                  |
  +----------------------------------------------------------------+
  footer: control hints and progress

Controls
--------
  Type / Enter          Guess a station
  Drag / Arrows         Pan
  Scroll / PgUp/PgDn    Zoom
  Tab                   Toggle full-map view
  F5                    New round
  ESC                   Clear input, then back to title
"""

import copy
import pygame
from typing import Optional

from game.round_state import RoundPhase
from .base_screen import BaseScreen
from .components import Button, TextInput
from .map_viewer import Interaction, MapViewer
from .render_overlay import RenderOverlay
from .station_overlay import StationOverlay

_CURSORS = {
    Interaction.IDLE: pygame.SYSTEM_CURSOR_ARROW,
    Interaction.GRAB: pygame.SYSTEM_CURSOR_HAND,
    Interaction.GRABBING: pygame.SYSTEM_CURSOR_SIZEALL,
}

TOP_BAR_H = 56
FOOTER_H = 32
MAX_SUGGESTIONS = 5


class GameScreen(BaseScreen):
    """Map, guess box and round controls."""

    def __init__(self, state_manager, map_image: pygame.Surface,
                 full_map_image: Optional[pygame.Surface] = None):
        super().__init__("GAME")
        self.state_manager = state_manager
        self.game = state_manager.get_round()
        cfg = state_manager.config

        self.map_image = map_image
        self.full_map_image = full_map_image
        self.full_map_mode = False
        self._saved_view = None

        self.viewer = MapViewer(map_image, background=self.theme.colors.BG_DARK)
        self.overlay = StationOverlay(
            state_manager.catalog, self.game, self.theme,
            label_font_size=cfg.label_font_size,
            marker_radius=cfg.marker_radius,
            clock=self.game.clock,
        )
        self.compositor = RenderOverlay(self.viewer, self.overlay)

        self.input = TextInput(12, 8, 600, self.theme.input_height,
                               placeholder="Name the highlighted station…",
                               on_change=self.game.set_input,
                               on_submit=self._submit,
                               sticky_focus=True)
        self.buttons = {
            'restart':  Button(0, 10, 130, self.theme.button_height, "NEW ROUND", callback=self._restart, hotkey=pygame.K_F5),
            'give_up':  Button(0, 10, 110, self.theme.button_height, "GIVE UP",   callback=self._give_up),
            'full_map': Button(0, 10, 120, self.theme.button_height, "FULL MAP",  callback=self._toggle_full_map, hotkey=pygame.K_TAB),
        }
        self.suggestion_buttons: list[Button] = []
        self._next_screen: Optional[str] = None
        self._cursor: Optional[Interaction] = None
        self._size = (0, 0)

    # -----------------------------------------------------------------------
    # Layout
    # -----------------------------------------------------------------------

    def _layout(self, W: int, H: int):
        if (W, H) == self._size:
            return
        self._size = (W, H)
        x = W - 12
        for key in ('full_map', 'give_up', 'restart'):
            btn = self.buttons[key]
            x -= btn.rect.width
            btn.rect.topleft = (x, 10)
            x -= 8
        self.input.rect.width = max(200, x - 12 - self.input.rect.x)
        self.compositor.layout(pygame.Rect(0, TOP_BAR_H, W, max(0, H - TOP_BAR_H - FOOTER_H)))
        self._refresh_suggestions()

    def _refresh_suggestions(self):
        self.suggestion_buttons = []
        if self.full_map_mode or not self.game.input_text:
            return
        names = self.game.index.suggest(self.game.input_text, limit=MAX_SUGGESTIONS)
        y = self.input.rect.bottom + 4
        for name in names:
            self.suggestion_buttons.append(Button(
                self.input.rect.x, y, min(self.input.rect.width, 360), 30, name,
                callback=lambda n=name: self._submit(n)))
            y += 34

    # -----------------------------------------------------------------------
    # Actions
    # -----------------------------------------------------------------------

    def _submit(self, text: Optional[str] = None):
        if self.full_map_mode:
            return
        self.game.submit_guess(text)
        self.input.set_text(self.game.input_text)
        self._refresh_suggestions()

    def _restart(self):
        if self.full_map_mode:
            self._toggle_full_map()
        self.game.restart()
        self.input.clear()
        self._refresh_suggestions()
        self.viewer.reset()

    def _give_up(self):
        if self.game.phase == RoundPhase.IN_PROGRESS:
            self.game.give_up()

    def _toggle_full_map(self):
        self.full_map_mode = not self.full_map_mode
        self.buttons['full_map'].active = self.full_map_mode
        if self.full_map_mode:
            self._saved_view = copy.copy(self.viewer.state)
            self.viewer.reset()
            if self.full_map_image is not None:
                self.viewer.set_image(self.full_map_image)
                self.compositor.overlay_visible = False
            else:
                self.overlay.show_all = True
        else:
            self.viewer.set_image(self.map_image)
            self.compositor.overlay_visible = True
            self.overlay.show_all = False
            if self._saved_view is not None:
                self.viewer.state = self._saved_view
        self.viewer.layout(self.viewer.bounds)
        self._refresh_suggestions()

    # -----------------------------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------------------------

    def on_enter(self):
        super().on_enter()
        self._next_screen = None
        if self.game.phase == RoundPhase.AWAITING_TARGET:
            self._restart()

    def on_exit(self):
        super().on_exit()
        self._set_cursor(Interaction.IDLE)

    # -----------------------------------------------------------------------
    # Input
    # -----------------------------------------------------------------------

    def handle_input(self, events) -> Optional[str]:
        mp = pygame.mouse.get_pos()
        for btn in (*self.buttons.values(), *self.suggestion_buttons):
            btn.update(mp)

        for event in events:
            cursor = getattr(event, 'pos', mp)
            if (event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE
                    and not self.input.text):
                self._next_screen = 'BACK'
                continue

            if any(b.handle_event(event) for b in list(self.suggestion_buttons)):
                continue
            if any(b.handle_event(event) for b in self.buttons.values()):
                continue
            if self.input.handle_event(event):
                if event.type == pygame.KEYDOWN:
                    self._refresh_suggestions()
                continue
            self.compositor.handle_event(event, cursor)

        self._set_cursor(self.compositor.mouse_interaction(mp))
        result, self._next_screen = self._next_screen, None
        return result

    def _set_cursor(self, interaction: Interaction):
        if interaction == self._cursor or pygame.display.get_surface() is None:
            return
        self._cursor = interaction
        pygame.mouse.set_cursor(_CURSORS[interaction])

    # -----------------------------------------------------------------------
    # Update / Render
    # -----------------------------------------------------------------------

    def update(self, dt: float):
        self.input.update(dt)
        self.buttons['give_up'].set_enabled(self.game.phase == RoundPhase.IN_PROGRESS)

    def render(self, surface: pygame.Surface):
        W, H = surface.get_width(), surface.get_height()
        self._layout(W, H)
        colors = self.theme.colors

        surface.fill(colors.BG_DARK)
        self.compositor.draw(surface)

        # Top bar
        pygame.draw.rect(surface, colors.BG_PANEL, pygame.Rect(0, 0, W, TOP_BAR_H))
        self.input.draw(surface)
        for btn in self.buttons.values():
            btn.draw(surface)

        # Suggestions drop down over the map
        for btn in self.suggestion_buttons:
            btn.draw(surface)

        footer = pygame.Rect(0, H - FOOTER_H, W, FOOTER_H)
        pygame.draw.rect(surface, colors.BG_PANEL, footer)
        self.draw_footer(surface, footer,
                         "[ENTER] Guess  [Drag/Arrows] Pan  [Scroll] Zoom  "
                         "[TAB] Full map  [F5] New round  [ESC] Back")

        total = len(self.state_manager.catalog)
        found = len(self.game.guessed)
        if self.full_map_mode:
            status = "FULL MAP"
        elif self.game.phase == RoundPhase.WON:
            status = "SOLVED"
        else:
            status = f"Revealed {found}/{total}"
        self.theme.draw_text(surface, self.theme.fonts.small(), W - 12, footer.centery,
                             status, colors.FG_DIM, align='right', valign='center')
