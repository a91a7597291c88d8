"""
UI Theme - Transit Map Style

Defines colors, fonts, and visual style for the game UI: dark chrome
around the map, bright station markers and high-contrast labels.
"""

import pygame
from pathlib import Path
from typing import Dict, Optional, Tuple
from dataclasses import dataclass


class Colors:
    """Color palette"""

    # Background colors
    BG_DARK = (15, 17, 21)         # Window background around the map
    BG_PANEL = (28, 32, 40)        # Input row / panels
    BG_PANEL_LIGHT = (40, 46, 58)  # Hovered buttons
    BG_INPUT = (22, 25, 31)        # Input field background

    # Foreground colors
    FG_PRIMARY = (235, 238, 245)   # Main text
    FG_DIM = (160, 168, 184)       # Secondary text
    FG_DARK = (96, 104, 120)       # Placeholder, disabled

    # Accent colors
    ACCENT_BLUE = (37, 99, 235)    # Focus, primary buttons
    ACCENT_GREEN = (34, 197, 94)   # Target ring
    ACCENT_YELLOW = (255, 220, 0)
    ACCENT_RED = (239, 68, 68)

    # UI element colors
    BUTTON_NORMAL = FG_PRIMARY
    BUTTON_HOVER = (255, 255, 255)
    BUTTON_DISABLED = FG_DARK

    BORDER_NORMAL = (70, 78, 94)
    BORDER_FOCUS = ACCENT_BLUE
    BORDER_DISABLED = FG_DARK

    # Map overlay
    MARKER_TARGET = ACCENT_GREEN
    MARKER_REVEALED = (30, 30, 30)
    MARKER_OUTLINE = (255, 255, 255)
    LABEL_TEXT = (20, 20, 20)
    LABEL_HALO = (255, 255, 255)


@dataclass
class FontConfig:
    """Font configuration"""
    family: str = "Arial"
    size_title: int = 24
    size_normal: int = 18
    size_small: int = 14
    bold_title: bool = True
    # TTF used for station labels; falls back to the system family
    label_path: Optional[Path] = None


class Fonts:
    """
    Font manager

    Loads and caches fonts for one FontConfig. A missing or broken TTF is
    not fatal: loading falls back to a system family, then to pygame's
    built-in font.
    """

    FALLBACK_FAMILIES = ("Arial", "Helvetica", "DejaVu Sans", "sans")

    def __init__(self, config: Optional[FontConfig] = None):
        self.config = config or FontConfig()
        self._fonts: Dict[Tuple[str, int, bool], pygame.font.Font] = {}
        self._label_path_failed = False

    def _load(self, size: int, bold: bool = False, use_label_path: bool = False) -> pygame.font.Font:
        if not pygame.font.get_init():
            pygame.font.init()

        path = self.config.label_path
        if use_label_path and path is not None and not self._label_path_failed:
            try:
                font = pygame.font.Font(str(path), size)
                font.set_bold(bold)
                return font
            except (OSError, pygame.error) as e:
                self._label_path_failed = True
                print(f"Warning: could not load font {path}: {e}; using system font")

        for family in (self.config.family, *self.FALLBACK_FAMILIES):
            match = pygame.font.match_font(family, bold=bold)
            if match:
                try:
                    return pygame.font.Font(match, size)
                except (OSError, pygame.error):
                    continue

        # Ultimate fallback: pygame default font
        font = pygame.font.Font(None, size)
        font.set_bold(bold)
        return font

    def _cached(self, kind: str, size: int, bold: bool = False) -> pygame.font.Font:
        key = (kind, size, bold)
        if key not in self._fonts:
            self._fonts[key] = self._load(size, bold, use_label_path=(kind == 'label'))
        return self._fonts[key]

    def get(self, size: str = 'normal') -> pygame.font.Font:
        """
        Get UI font by size name

        Args:
            size: 'title', 'normal' or 'small'
        """
        if size == 'title':
            return self._cached('ui', self.config.size_title, self.config.bold_title)
        if size == 'small':
            return self._cached('ui', self.config.size_small)
        return self._cached('ui', self.config.size_normal)

    def title(self) -> pygame.font.Font:
        return self.get('title')

    def normal(self) -> pygame.font.Font:
        return self.get('normal')

    def small(self) -> pygame.font.Font:
        return self.get('small')

    def label(self, size: int, bold: bool = False) -> pygame.font.Font:
        """Station label font at a pixel size"""
        return self._cached('label', max(1, int(size)), bold)


class Theme:
    """
    Complete theme configuration

    Bundles colors, fonts, and spacing into single object.
    """

    def __init__(self, font_config: Optional[FontConfig] = None):
        self.colors = Colors()
        self.fonts = Fonts(font_config)

        # Spacing and sizing
        self.padding = 8
        self.margin = 12
        self.border_width = 2

        # Component sizes
        self.button_height = 36
        self.input_height = 40

    def draw_border(self, surface: pygame.Surface, rect: pygame.Rect,
                    color: Tuple[int, int, int], width: int = None):
        if width is None:
            width = self.border_width
        pygame.draw.rect(surface, color, rect, width, border_radius=6)

    def draw_panel(self, surface: pygame.Surface, rect: pygame.Rect,
                   fg_color: Tuple[int, int, int] = None,
                   bg_color: Tuple[int, int, int] = None):
        """
        Draw panel with border (standard UI element)

        Args:
            surface: Target surface
            rect: Panel rectangle
            fg_color: Border color (None = use default)
            bg_color: Fill color (None = use default)
        """
        if fg_color is None:
            fg_color = self.colors.BORDER_NORMAL
        if bg_color is None:
            bg_color = self.colors.BG_PANEL

        pygame.draw.rect(surface, bg_color, rect, border_radius=6)
        self.draw_border(surface, rect, fg_color)

    def draw_text(self, surface: pygame.Surface, font: pygame.font.Font,
                  x: float, y: float, text: str, color: Tuple[int, int, int],
                  align: str = 'left', valign: str = 'top',
                  halo: Optional[Tuple[int, int, int]] = None) -> pygame.Rect:
        """
        Draw text anchored at (x, y)

        Args:
            surface: Target surface
            font: Font to use
            x, y: Anchor position
            text: Text to render
            color: Text color
            align: 'left', 'center', or 'right'
            valign: 'top', 'center', or 'bottom'
            halo: Optional outline color drawn behind the text

        Returns:
            Rectangle covered by the text
        """
        rendered = font.render(text, True, color)
        rect = rendered.get_rect()

        if align == 'center':
            rect.centerx = int(round(x))
        elif align == 'right':
            rect.right = int(round(x))
        else:
            rect.x = int(round(x))

        if valign == 'center':
            rect.centery = int(round(y))
        elif valign == 'bottom':
            rect.bottom = int(round(y))
        else:
            rect.y = int(round(y))

        if halo is not None:
            outline = font.render(text, True, halo)
            for ox, oy in ((-1, 0), (1, 0), (0, -1), (0, 1)):
                surface.blit(outline, rect.move(ox, oy))

        surface.blit(rendered, rect)
        return rect


# Global theme instance
_theme = None

def get_theme() -> Theme:
    """Get global theme instance"""
    global _theme
    if _theme is None:
        _theme = Theme()
    return _theme

def set_theme(theme: Theme):
    """Install the theme built from the startup configuration"""
    global _theme
    _theme = theme
