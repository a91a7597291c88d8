"""
Map coordinate conversions.

Three representations are in play:
  - reference pixels : absolute pixels on the shipped map image (8262x5803)
  - percent          : fraction of the image extent, centred on the image
                       middle, so the visible map spans [-0.5, 0.5]
  - screen pixels    : distances inside the render frame at the current zoom

Conversions are stateless and purely multiplicative (no rotation), so
nothing accumulates between calls.
"""

from __future__ import annotations
from dataclasses import dataclass

import numpy as np

# 8k image resolution of the shipped map asset
REFERENCE_WIDTH = 8262
REFERENCE_HEIGHT = 5803

def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x

def fit_size(content_w: float, content_h: float,
             bounds_w: float, bounds_h: float) -> tuple[float, float]:
    """Largest size with the content's aspect ratio that fits inside bounds."""
    if content_w <= 0 or content_h <= 0:
        return 0.0, 0.0
    ratio = min(bounds_w / content_w, bounds_h / content_h)
    return content_w * ratio, content_h * ratio


@dataclass(slots=True)
class CoordinateSystem:
    """
    Converts map measurements into screen pixels for one frame.

    frame_width/frame_height are the size of the map image as fitted into
    the viewer at scale 1.0; scale is the viewer's current zoom.
    """
    frame_width: float
    frame_height: float
    scale: float = 1.0

    REL_X = 1.0 / REFERENCE_WIDTH
    REL_Y = 1.0 / REFERENCE_HEIGHT

    def __post_init__(self):
        if self.frame_width <= 0 or self.frame_height <= 0:
            raise ValueError(f"Frame size must be positive, got "
                             f"{self.frame_width}x{self.frame_height}")
        if self.scale <= 0:
            raise ValueError(f"Scale must be positive, got {self.scale}")

    # ── distances ─────────────────────────────────────────────────────────

    def x_dist_pixels(self, dist: float) -> float:
        return self.x_dist_percent(dist * self.REL_X)

    def y_dist_pixels(self, dist: float) -> float:
        return self.y_dist_percent(dist * self.REL_Y)

    def x_dist_percent(self, percent: float) -> float:
        return percent * self.frame_width * self.scale

    def y_dist_percent(self, percent: float) -> float:
        return percent * self.frame_height * self.scale

    def x_percent_from_screen(self, dist: float) -> float:
        return dist / (self.frame_width * self.scale)

    def y_percent_from_screen(self, dist: float) -> float:
        return dist / (self.frame_height * self.scale)

    def x_pixels_from_screen(self, dist: float) -> float:
        return self.x_percent_from_screen(dist) / self.REL_X

    def y_pixels_from_screen(self, dist: float) -> float:
        return self.y_percent_from_screen(dist) / self.REL_Y

    def percent_to_screen(self, percent: tuple[float, float]) -> tuple[float, float]:
        return self.x_dist_percent(percent[0]), self.y_dist_percent(percent[1])

    def screen_to_percent(self, dist: tuple[float, float]) -> tuple[float, float]:
        return self.x_percent_from_screen(dist[0]), self.y_percent_from_screen(dist[1])

    # ── points ────────────────────────────────────────────────────────────

    def to_screen(self, normalized: tuple[float, float],
                  center: tuple[float, float],
                  offset: tuple[float, float] = (0.0, 0.0)) -> tuple[float, float]:
        """
        Place a normalized [0,1] map position on screen.

        center is the middle of the viewer bounds, offset the viewer's pan
        (positive offset moves the view right/down, i.e. content left/up).
        """
        dx, dy = self.percent_to_screen((normalized[0] - 0.5, normalized[1] - 0.5))
        return center[0] + dx - offset[0], center[1] + dy - offset[1]

    def from_screen(self, point: tuple[float, float],
                    center: tuple[float, float],
                    offset: tuple[float, float] = (0.0, 0.0)) -> tuple[float, float]:
        """Inverse of to_screen, used for hit-testing."""
        px, py = self.screen_to_percent((point[0] - center[0] + offset[0],
                                         point[1] - center[1] + offset[1]))
        return px + 0.5, py + 0.5

    def project(self, positions: np.ndarray,
                center: tuple[float, float],
                offset: tuple[float, float] = (0.0, 0.0)) -> np.ndarray:
        """Vectorised to_screen for an (N, 2) array of normalized positions."""
        pos = np.asarray(positions, dtype=np.float32).reshape(-1, 2)
        size = np.array([self.frame_width, self.frame_height], dtype=np.float32)
        shift = np.array([center[0] - offset[0], center[1] - offset[1]], dtype=np.float32)
        return (pos - 0.5) * size * np.float32(self.scale) + shift
