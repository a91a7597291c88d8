"""
Station name placement.

Labels are anchored to a point (the station marker) and pushed away from it
in one of eight compass directions. The text alignment follows the
direction so the label always "points away" from the marker: a North label
sits above the point with its bottom edge on the anchor line, an East label
starts right of the point and is vertically centred on it, and so on.

Screen coordinates are y-down.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Sequence, Union

from .types import Anchor

_D = 1.0 / math.sqrt(2.0)

# unit vector (screen, y-down), horizontal align, vertical align
_ANCHOR_TABLE = {
    Anchor.NORTH:      ((0.0, -1.0), 'center', 'bottom'),
    Anchor.NORTH_EAST: (( _D,  -_D), 'left',   'bottom'),
    Anchor.EAST:       ((1.0,  0.0), 'left',   'center'),
    Anchor.SOUTH_EAST: (( _D,   _D), 'left',   'top'),
    Anchor.SOUTH:      ((0.0,  1.0), 'center', 'top'),
    Anchor.SOUTH_WEST: ((-_D,   _D), 'right',  'top'),
    Anchor.WEST:       ((-1.0, 0.0), 'right',  'center'),
    Anchor.NORTH_WEST: ((-_D,  -_D), 'right',  'bottom'),
}

DEFAULT_GAP = 10.0


@dataclass(frozen=True, slots=True)
class TextRun:
    """One line of a label, positioned at its alignment point."""
    text: str
    x: float
    y: float
    h_align: str
    v_align: str


def anchor_vector(anchor: Anchor) -> tuple[float, float]:
    return _ANCHOR_TABLE[anchor][0]


def anchor_alignment(anchor: Anchor) -> tuple[str, str]:
    _, h, v = _ANCHOR_TABLE[anchor]
    return h, v


def layout_label(point: tuple[float, float],
                 anchor: Anchor,
                 offset: tuple[float, float],
                 font_size: float,
                 label: Union[str, Sequence[str]],
                 gap: float = DEFAULT_GAP) -> list[TextRun]:
    """
    Position the lines of a label around a marker.

    Args:
        point: Marker position on screen
        anchor: Side of the marker the label goes on
        offset: Manual per-station nudge in screen pixels
        font_size: Line height in pixels
        label: A single string or the lines of a multi-line label
        gap: Distance between marker and text along the anchor direction

    Returns:
        Text runs in reverse authored order (last line first). Sorting by
        y gives the authored top-to-bottom order.
    """
    lines = [label] if isinstance(label, str) else list(label)
    if not lines:
        return []

    (dx, dy), h_align, v_align = _ANCHOR_TABLE[anchor]
    base_x = point[0] + dx * gap + offset[0]
    base_y = point[1] + dy * gap + offset[1]

    # rise is the upward component of the direction; rounding makes the
    # diagonals behave like their vertical neighbour
    rise = round(-dy)
    span = (len(lines) - 1) * font_size
    base_y += (1 - rise) * 0.5 * span

    runs = []
    for from_end, text in enumerate(reversed(lines)):
        runs.append(TextRun(text, base_x, base_y - from_end * font_size,
                            h_align, v_align))
    return runs
