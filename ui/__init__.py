"""
UI Module - Map viewer, overlays, components and screens
"""
from .theme import get_theme, set_theme, Theme, Colors, Fonts, FontConfig
from .base_screen import BaseScreen
from .components import Button, TextInput
from .map_viewer import Interaction, MapViewer, ViewportTransform
from .render_overlay import RenderOverlay
from .station_overlay import StationOverlay

__all__ = [
    "get_theme", "set_theme", "Theme", "Colors", "Fonts", "FontConfig",
    "BaseScreen",
    "Button", "TextInput",
    "Interaction", "MapViewer", "ViewportTransform",
    "RenderOverlay", "StationOverlay",
]
