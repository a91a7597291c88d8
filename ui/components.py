"""
UI Components - Reusable UI Elements

- Button: Clickable button with hover/press states
- TextInput: Single-line guess box with change/submit callbacks
"""

import pygame
from typing import Optional, Callable, Tuple
from dataclasses import dataclass
from .theme import get_theme


@dataclass
class ButtonState:
    """Button state"""
    hovered: bool = False
    pressed: bool = False


class Button:
    """
    Clickable button, optionally bound to a key

    The callback fires on mouse release over the button when the press
    also started on it, or when the hotkey is pressed.
    """

    def __init__(self, x: int, y: int, width: int, height: int,
                 text: str, callback: Optional[Callable] = None,
                 hotkey: Optional[int] = None):
        self.rect = pygame.Rect(x, y, width, height)
        self.text = text
        self.callback = callback
        self.hotkey = hotkey
        self.state = ButtonState()
        self.enabled = True
        self.active = False     # toggle buttons draw highlighted while on
        self.theme = get_theme()

    def _fire(self):
        if self.callback:
            self.callback()

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Returns True if the event was consumed"""
        if not self.enabled:
            return False

        if event.type == pygame.KEYDOWN:
            if self.hotkey is not None and event.key == self.hotkey:
                self._fire()
                return True
            return False

        if getattr(event, 'button', None) != 1:
            return False
        over = self.rect.collidepoint(event.pos)

        if event.type == pygame.MOUSEBUTTONDOWN:
            self.state.pressed = over
            return over

        if event.type == pygame.MOUSEBUTTONUP:
            armed, self.state.pressed = self.state.pressed, False
            if armed and over:
                self._fire()
                return True
        return False

    def update(self, mouse_pos: Tuple[int, int]):
        self.state.hovered = self.enabled and self.rect.collidepoint(mouse_pos)

    def draw(self, surface: pygame.Surface):
        colors = self.theme.colors
        if not self.enabled:
            bg_color, fg_color, border_color = colors.BG_PANEL, colors.BUTTON_DISABLED, colors.BORDER_DISABLED
        elif self.state.pressed or self.active:
            bg_color, fg_color, border_color = colors.ACCENT_BLUE, colors.BUTTON_HOVER, colors.ACCENT_BLUE
        elif self.state.hovered:
            bg_color, fg_color, border_color = colors.BG_PANEL_LIGHT, colors.BUTTON_HOVER, colors.BORDER_FOCUS
        else:
            bg_color, fg_color, border_color = colors.BG_PANEL, colors.BUTTON_NORMAL, colors.BORDER_NORMAL

        self.theme.draw_panel(surface, self.rect, fg_color=border_color, bg_color=bg_color)
        self.theme.draw_text(surface, self.theme.fonts.normal(),
                             self.rect.centerx, self.rect.centery,
                             self.text, fg_color, align='center', valign='center')

    def set_enabled(self, enabled: bool):
        self.enabled = enabled
        if not enabled:
            self.state = ButtonState()


class TextInput:
    """
    Text input field

    Single-line input with cursor. Typing calls on_change with the new
    text, Enter calls on_submit.
    """

    def __init__(self, x: int, y: int, width: int, height: int = 40,
                 placeholder: str = "", max_length: int = 60,
                 on_change: Optional[Callable[[str], None]] = None,
                 on_submit: Optional[Callable[[], None]] = None,
                 sticky_focus: bool = False):
        self.rect = pygame.Rect(x, y, width, height)
        self.text = ""
        self.placeholder = placeholder
        self.max_length = max_length
        self.on_change = on_change
        self.on_submit = on_submit
        # a sticky input keeps keyboard focus when the user clicks elsewhere
        self.sticky_focus = sticky_focus
        self.active = True
        self.cursor_visible = True
        self.cursor_timer = 0.0
        self.theme = get_theme()

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle input event

        Returns:
            True if event was handled
        """
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            inside = self.rect.collidepoint(event.pos)
            self.active = inside or self.sticky_focus
            return inside

        if not self.active or event.type != pygame.KEYDOWN:
            return False

        if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            if self.on_submit:
                self.on_submit()
            return True
        if event.key == pygame.K_BACKSPACE:
            self._set(self.text[:-1])
            return True
        if event.key == pygame.K_ESCAPE:
            self._set("")
            return True
        if event.unicode and event.unicode.isprintable() and len(self.text) < self.max_length:
            self._set(self.text + event.unicode)
            return True
        return False

    def _set(self, text: str):
        if text != self.text:
            self.text = text
            if self.on_change:
                self.on_change(text)

    def update(self, dt: float):
        """Update cursor blink"""
        self.cursor_timer += dt
        if self.cursor_timer > 0.5:
            self.cursor_visible = not self.cursor_visible
            self.cursor_timer = 0.0

    def draw(self, surface: pygame.Surface):
        colors = self.theme.colors
        border = colors.BORDER_FOCUS if self.active else colors.BORDER_NORMAL
        self.theme.draw_panel(surface, self.rect, fg_color=border, bg_color=colors.BG_INPUT)

        font = self.theme.fonts.normal()
        if self.text:
            color, shown = colors.FG_PRIMARY, self.text
        else:
            color, shown = colors.FG_DARK, self.placeholder

        text_rect = self.theme.draw_text(surface, font, self.rect.x + 12, self.rect.centery,
                                         shown, color, valign='center')

        if self.active and self.cursor_visible:
            cursor_x = text_rect.right + 2 if self.text else self.rect.x + 12
            pygame.draw.line(surface, colors.FG_PRIMARY,
                             (cursor_x, self.rect.centery - 10),
                             (cursor_x, self.rect.centery + 10), 2)

    def set_text(self, text: str):
        """Set text without firing on_change (used to mirror model state)"""
        self.text = text[:self.max_length]

    def clear(self):
        self.text = ""
