"""
Map Viewer - pannable, zoomable image layer

The map image is fitted into the viewer bounds (aspect preserved) and can
be zoomed with the mouse wheel (around the cursor) and panned by dragging
or with the arrow keys. The pan offset is clamped so the image edges never
come further in than the bounds.

The viewer is the only owner of its ViewportState. Other layers read the
live pan/zoom through transform(), which returns an immutable
ViewportTransform snapshot.
"""

import math
import pygame
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from core.coords import CoordinateSystem, clamp, fit_size

Vec = Tuple[float, float]

MIN_SCALE = 0.25
MAX_SCALE = 10.0
SCALE_STEP = 0.10
KEY_PAN_PX = 60

# bumped whenever a field of ViewportTransform changes meaning
TRANSFORM_SCHEMA_VERSION = 1


class Interaction(Enum):
    """Pointer interaction reported for cursor shape selection"""
    IDLE = "idle"
    GRAB = "grab"
    GRABBING = "grabbing"


@dataclass
class ViewportState:
    scale: float = 1.0
    offset: Vec = (0.0, 0.0)
    grab_anchor: Optional[Vec] = None
    grab_start_offset: Vec = (0.0, 0.0)


@dataclass(frozen=True)
class ViewportTransform:
    """
    Published pan/zoom of the map viewer for one frame.

    bounds:     viewer rectangle on screen (x, y, w, h)
    fit_size:   map image size once fitted into bounds, at scale 1.0
    scale:      zoom factor
    offset:     pan offset in screen pixels (clamped)
    grab_anchor: pointer position where an active drag started, or None
    """
    bounds: Tuple[int, int, int, int]
    fit_size: Vec
    scale: float
    offset: Vec
    grab_anchor: Optional[Vec] = None
    version: int = TRANSFORM_SCHEMA_VERSION

    @property
    def center(self) -> Vec:
        x, y, w, h = self.bounds
        return x + w / 2.0, y + h / 2.0

    def coordinate_system(self) -> CoordinateSystem:
        return CoordinateSystem(self.fit_size[0], self.fit_size[1], self.scale)

    def to_screen(self, normalized: Vec) -> Vec:
        return self.coordinate_system().to_screen(normalized, self.center, self.offset)

    def from_screen(self, point: Vec) -> Vec:
        return self.coordinate_system().from_screen(point, self.center, self.offset)


class MapViewer:
    """
    Interactive base layer showing the map image.

    Args:
        image: The map surface (already loaded)
        background: Fill color around the image
    """

    def __init__(self, image: pygame.Surface,
                 background: Tuple[int, int, int] = (15, 17, 21)):
        self.image = image
        self.background = background
        self.state = ViewportState()
        self.bounds = pygame.Rect(0, 0, 1, 1)
        # (source crop, dest size) -> scaled surface
        self._render_key = None
        self._render_surface: Optional[pygame.Surface] = None

    def set_image(self, image: pygame.Surface):
        self.image = image
        self._render_key = None

    # ── geometry ──────────────────────────────────────────────────────────

    def layout(self, bounds: pygame.Rect):
        self.bounds = pygame.Rect(bounds)
        self.state.offset = self._clamp_offset(self.state.offset)

    def fit_size(self) -> Vec:
        return fit_size(self.image.get_width(), self.image.get_height(),
                        self.bounds.width, self.bounds.height)

    def scaled_size(self, scale: Optional[float] = None) -> Vec:
        fw, fh = self.fit_size()
        s = self.state.scale if scale is None else scale
        return fw * s, fh * s

    def _max_offset(self, scale: Optional[float] = None) -> Vec:
        sw, sh = self.scaled_size(scale)
        return (max(0.0, (sw - self.bounds.width) / 2.0),
                max(0.0, (sh - self.bounds.height) / 2.0))

    def _clamp_offset(self, offset: Vec, scale: Optional[float] = None) -> Vec:
        mx, my = self._max_offset(scale)
        return clamp(offset[0], -mx, mx), clamp(offset[1], -my, my)

    def transform(self) -> ViewportTransform:
        """Snapshot of the live pan/zoom for the overlay"""
        st = self.state
        return ViewportTransform(
            bounds=(self.bounds.x, self.bounds.y, self.bounds.width, self.bounds.height),
            fit_size=self.fit_size(),
            scale=st.scale,
            offset=self._clamp_offset(st.offset),
            grab_anchor=st.grab_anchor,
        )

    # ── interaction ───────────────────────────────────────────────────────

    def reset(self):
        """Back to the whole map, unzoomed"""
        self.state = ViewportState()

    def zoom(self, steps: float, cursor: Optional[Vec] = None):
        """
        Zoom by a number of wheel steps (positive = in), keeping the map
        point under the cursor fixed.
        """
        st = self.state
        previous = st.scale
        factor = (1.0 + SCALE_STEP) ** steps
        st.scale = clamp(previous * factor, MIN_SCALE, MAX_SCALE)
        if st.scale == previous:
            return

        ratio = st.scale / previous - 1.0
        if cursor is None:
            cursor = self.bounds.center
        cx, cy = self.bounds.center
        adjust = ((cursor[0] - cx) * ratio + st.offset[0] * ratio,
                  (cursor[1] - cy) * ratio + st.offset[1] * ratio)
        st.offset = self._clamp_offset((st.offset[0] + adjust[0], st.offset[1] + adjust[1]))

    def pan(self, dx: float, dy: float):
        """Move the view by screen pixels (positive = view moves right/down)"""
        st = self.state
        st.offset = self._clamp_offset((st.offset[0] + dx, st.offset[1] + dy))

    def handle_event(self, event: pygame.event.Event, cursor: Vec) -> bool:
        """
        Handle one input event.

        Args:
            event: Pygame event
            cursor: Current pointer position

        Returns:
            True if the event was captured
        """
        st = self.state

        if event.type == pygame.MOUSEWHEEL:
            self.zoom(event.y, cursor)
            return True

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            st.grab_anchor = (float(event.pos[0]), float(event.pos[1]))
            st.grab_start_offset = st.offset
            return True

        if event.type == pygame.MOUSEMOTION and st.grab_anchor is not None:
            dx = event.pos[0] - st.grab_anchor[0]
            dy = event.pos[1] - st.grab_anchor[1]
            st.offset = self._clamp_offset((st.grab_start_offset[0] - dx,
                                            st.grab_start_offset[1] - dy))
            return True

        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            if st.grab_anchor is not None:
                st.grab_anchor = None
                return True
            return False

        if event.type == pygame.KEYDOWN:
            k = event.key
            if   k == pygame.K_LEFT:  self.pan(-KEY_PAN_PX, 0)
            elif k == pygame.K_RIGHT: self.pan( KEY_PAN_PX, 0)
            elif k == pygame.K_UP:    self.pan(0, -KEY_PAN_PX)
            elif k == pygame.K_DOWN:  self.pan(0,  KEY_PAN_PX)
            elif k == pygame.K_PAGEUP:   self.zoom(1)
            elif k == pygame.K_PAGEDOWN: self.zoom(-1)
            else:
                return False
            return True

        return False

    def mouse_interaction(self, cursor: Vec) -> Interaction:
        if self.state.grab_anchor is not None:
            return Interaction.GRABBING
        if self.bounds.collidepoint(cursor):
            return Interaction.GRAB
        return Interaction.IDLE

    # ── drawing ───────────────────────────────────────────────────────────

    def draw(self, surface: pygame.Surface):
        surface.fill(self.background, self.bounds)
        t = self.transform()
        sw, sh = self.scaled_size()
        if sw < 1 or sh < 1:
            return

        cx, cy = t.center
        left = cx - sw / 2.0 - t.offset[0]
        top = cy - sh / 2.0 - t.offset[1]

        # visible part of the scaled image, in scaled-image pixels
        vx0 = max(self.bounds.left, left) - left
        vy0 = max(self.bounds.top, top) - top
        vx1 = min(self.bounds.right, left + sw) - left
        vy1 = min(self.bounds.bottom, top + sh) - top
        if vx1 <= vx0 or vy1 <= vy0:
            return

        # whole source pixels covering it; crop before scaling
        kx = self.image.get_width() / sw
        ky = self.image.get_height() / sh
        sx0, sy0 = int(math.floor(vx0 * kx)), int(math.floor(vy0 * ky))
        sx1, sy1 = int(math.ceil(vx1 * kx)), int(math.ceil(vy1 * ky))
        src = pygame.Rect(sx0, sy0, sx1 - sx0, sy1 - sy0).clip(self.image.get_rect())
        if src.width <= 0 or src.height <= 0:
            return

        # place the crop where those source pixels really are, so the image
        # lines up with anything projected through transform()
        dx0 = int(round(left + src.left / kx))
        dy0 = int(round(top + src.top / ky))
        dx1 = int(round(left + src.right / kx))
        dy1 = int(round(top + src.bottom / ky))
        dest = pygame.Rect(dx0, dy0, max(1, dx1 - dx0), max(1, dy1 - dy0))

        key = (tuple(src), dest.size)
        if key != self._render_key:
            self._render_surface = pygame.transform.smoothscale(
                self.image.subsurface(src), dest.size)
            self._render_key = key

        previous_clip = surface.get_clip()
        surface.set_clip(self.bounds.clip(previous_clip))
        try:
            surface.blit(self._render_surface, dest.topleft)
        finally:
            surface.set_clip(previous_clip)
