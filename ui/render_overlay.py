"""
Render Overlay - compose an interactive layer with a purely visual one

RenderOverlay wraps a base layer (the map viewer) and an overlay layer
(markers, labels, feedback banner):

  - layout is the base layer's; the overlay shares its bounds
  - the overlay is always painted after the base
  - the overlay is handed the base's live ViewportTransform every frame
  - input goes to the base only; the overlay never sees events
  - pointer events and cursor queries outside the composited bounds are
    reported as not handled, so sibling widgets keep them
"""

import pygame
from typing import Protocol, Tuple

from .map_viewer import Interaction, MapViewer, ViewportTransform

_POINTER_EVENTS = (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP,
                   pygame.MOUSEMOTION, pygame.MOUSEWHEEL)


class Overlay(Protocol):
    """Anything that can paint itself over the map for a given transform"""

    def draw(self, surface: pygame.Surface, transform: ViewportTransform) -> None:
        ...


class RenderOverlay:
    """
    Visual overlay over an interactive base layer.

    Args:
        base: Interactive layer; owns the pan/zoom state
        overlay: Decorative layer; read-only consumer of the transform
    """

    def __init__(self, base: MapViewer, overlay: Overlay):
        self.base = base
        self.overlay = overlay
        self.overlay_visible = True

    @property
    def bounds(self) -> pygame.Rect:
        return self.base.bounds

    def layout(self, bounds: pygame.Rect):
        self.base.layout(bounds)

    def transform(self) -> ViewportTransform:
        return self.base.transform()

    def handle_event(self, event: pygame.event.Event, cursor: Tuple[int, int]) -> bool:
        """
        Route an event to the base layer.

        Returns:
            True if the base captured the event
        """
        if event.type in _POINTER_EVENTS:
            inside = self.bounds.collidepoint(cursor)
            dragging = self.base.state.grab_anchor is not None
            if not inside:
                # a drag that leaves the bounds still has to see its release
                if dragging and event.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONUP):
                    self.base.handle_event(event, cursor)
                return False
        return self.base.handle_event(event, cursor)

    def mouse_interaction(self, cursor: Tuple[int, int]) -> Interaction:
        if not self.bounds.collidepoint(cursor):
            return Interaction.IDLE
        return self.base.mouse_interaction(cursor)

    def draw(self, surface: pygame.Surface):
        previous_clip = surface.get_clip()
        surface.set_clip(self.bounds)
        try:
            self.base.draw(surface)
            if self.overlay_visible and self.bounds.width > 0 and self.bounds.height > 0:
                self.overlay.draw(surface, self.base.transform())
        finally:
            surface.set_clip(previous_clip)
