"""
Station Overlay - markers, labels and feedback banner over the map

Everything is computed in screen space from the map viewer's published
ViewportTransform. The rendered overlay is cached on a transparent surface
and only rebuilt when the transform, the guessed set, the feedback message
or its visibility changes.
"""

import time
import numpy as np
import pygame
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from core.name_layout import TextRun, layout_label
from core.stations import StationCatalog
from game.round_state import FeedbackMessage, RoundStateMachine, proximity_color
from .map_viewer import ViewportTransform
from .theme import Theme

Color = Tuple[int, int, int]

# markers further than this outside the bounds are culled
_CULL_MARGIN = 200


def _inside(rect: pygame.Rect, pt) -> bool:
    return rect.left <= pt[0] < rect.right and rect.top <= pt[1] < rect.bottom


@dataclass(frozen=True)
class MarkerSpec:
    x: float
    y: float
    radius: float
    color: Color
    ring: bool = False


@dataclass
class OverlayGeometry:
    markers: List[MarkerSpec] = field(default_factory=list)
    labels: List[TextRun] = field(default_factory=list)
    banner: Optional[FeedbackMessage] = None


class StationOverlay:
    """
    Decorative layer drawn above the map.

    Args:
        catalog: Station list
        game: Round state (read-only here)
        theme: Colors and fonts for markers and labels
        label_font_size: Label line height in pixels
        marker_radius: Station dot radius in pixels
        clock: Time source shared with the round state
    """

    def __init__(self, catalog: StationCatalog, game: RoundStateMachine, theme: Theme,
                 label_font_size: int = 16, marker_radius: int = 7,
                 clock: Callable[[], float] = time.monotonic):
        self.catalog = catalog
        self.game = game
        self.theme = theme
        self.label_font_size = label_font_size
        self.marker_radius = marker_radius
        self.clock = clock
        self.show_all = False

        self._cache_key = None
        self._cache_surface: Optional[pygame.Surface] = None
        self.geometry = OverlayGeometry()
        self.rebuilds = 0

    # ── geometry ──────────────────────────────────────────────────────────

    def cache_key(self, transform: ViewportTransform, now: float):
        st = self.game.state
        feedback_visible = self.game.active_feedback(now) is not None
        return (st.guessed_version, st.feedback_version, feedback_visible,
                st.target, self.show_all, transform)

    def build_geometry(self, transform: ViewportTransform, now: float) -> OverlayGeometry:
        geo = OverlayGeometry()
        cs = transform.coordinate_system()
        center, offset = transform.center, transform.offset
        bx, by, bw, bh = transform.bounds
        visible = pygame.Rect(bx, by, bw, bh).inflate(2 * _CULL_MARGIN, 2 * _CULL_MARGIN)
        colors = self.theme.colors

        target = self.game.target
        if self.show_all:
            shown = list(self.catalog.ids())
        else:
            shown = sorted(self.game.guessed)

        # one projection for every shown position, sliced per station below
        stations = [self.catalog.get(sid) for sid in shown]
        all_positions = [p for station in stations for p in station.positions]
        projected = cs.project(np.array(all_positions, dtype=np.float32).reshape(-1, 2),
                               center, offset).tolist()
        start = 0

        for sid, station in zip(shown, stations):
            if self.show_all or target is None:
                color = colors.MARKER_REVEALED
            elif sid == target:
                color = colors.MARKER_TARGET
            else:
                color = proximity_color(self.catalog.distance(sid, target))

            points = projected[start:start + len(station.positions)]
            start += len(station.positions)
            for px, py in points:
                if _inside(visible, (px, py)):
                    geo.markers.append(MarkerSpec(px, py, self.marker_radius, color))

            anchor_pt = points[station.name_data.position_index]
            if _inside(visible, anchor_pt):
                geo.labels.extend(layout_label(
                    anchor_pt, station.name_data.anchor, station.name_data.offset,
                    self.label_font_size, station.label_lines,
                    gap=self.marker_radius + 4,
                ))

        # the target is always marked while it is still hidden
        if target is not None and not self.show_all and target not in self.game.guessed:
            ring_points = cs.project(self.catalog.get(target).positions, center, offset)
            for px, py in ring_points.tolist():
                geo.markers.append(MarkerSpec(px, py, self.marker_radius * 2,
                                              colors.MARKER_TARGET, ring=True))

        geo.banner = self.game.active_feedback(now)
        return geo

    # ── drawing ───────────────────────────────────────────────────────────

    def draw(self, surface: pygame.Surface, transform: ViewportTransform):
        if transform.fit_size[0] < 1 or transform.fit_size[1] < 1:
            return
        now = self.clock()
        key = self.cache_key(transform, now)
        if key != self._cache_key or self._cache_surface is None:
            self.geometry = self.build_geometry(transform, now)
            self._cache_surface = self._render(transform, self.geometry)
            self._cache_key = key
            self.rebuilds += 1
        surface.blit(self._cache_surface, transform.bounds[:2])

    def invalidate(self):
        self._cache_key = None

    def _render(self, transform: ViewportTransform, geo: OverlayGeometry) -> pygame.Surface:
        bx, by, bw, bh = transform.bounds
        layer = pygame.Surface((max(1, bw), max(1, bh)), pygame.SRCALPHA)
        colors = self.theme.colors

        if geo.banner is not None and geo.banner.dim_color is not None:
            layer.fill(geo.banner.dim_color)

        for m in geo.markers:
            pos = (int(round(m.x - bx)), int(round(m.y - by)))
            r = int(round(m.radius))
            if m.ring:
                pygame.draw.circle(layer, m.color, pos, r, 4)
            else:
                pygame.draw.circle(layer, m.color, pos, r)
                pygame.draw.circle(layer, colors.MARKER_OUTLINE, pos, r, 2)

        font = self.theme.fonts.label(self.label_font_size)
        for run in geo.labels:
            self.theme.draw_text(layer, font, run.x - bx, run.y - by, run.text,
                                 colors.LABEL_TEXT, align=run.h_align,
                                 valign=run.v_align, halo=colors.LABEL_HALO)

        if geo.banner is not None:
            self._draw_banner(layer, geo.banner)
        return layer

    def _draw_banner(self, layer: pygame.Surface, banner: FeedbackMessage):
        font = self.theme.fonts.title()
        text = font.render(banner.text, True, banner.color)
        box = text.get_rect()
        box.inflate_ip(32, 18)
        box.midtop = (layer.get_width() // 2, 16)
        pygame.draw.rect(layer, (*self.theme.colors.BG_PANEL, 220), box, border_radius=10)
        pygame.draw.rect(layer, banner.color, box, 2, border_radius=10)
        layer.blit(text, text.get_rect(center=box.center))
