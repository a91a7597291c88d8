from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

class Anchor(Enum):
    NORTH = "North"
    NORTH_EAST = "NorthEast"
    EAST = "East"
    SOUTH_EAST = "SouthEast"
    SOUTH = "South"
    SOUTH_WEST = "SouthWest"
    WEST = "West"
    NORTH_WEST = "NorthWest"

    @classmethod
    def parse(cls, value: str) -> "Anchor":
        """Accept 'North', 'north', 'NORTH_EAST', 'north-east', 'NE'..."""
        key = str(value).replace("_", "").replace("-", "").replace(" ", "").lower()
        for anchor in cls:
            if anchor.value.lower() == key or _ABBREV[anchor] == key:
                return anchor
        raise ValueError(f"Unknown anchor direction: {value!r}")

_ABBREV = {
    Anchor.NORTH: "n", Anchor.NORTH_EAST: "ne", Anchor.EAST: "e",
    Anchor.SOUTH_EAST: "se", Anchor.SOUTH: "s", Anchor.SOUTH_WEST: "sw",
    Anchor.WEST: "w", Anchor.NORTH_WEST: "nw",
}

@dataclass(slots=True)
class NameData:
    anchor: Anchor = Anchor.NORTH
    # manual offset in screen pixels, applied after the anchor gap
    offset: tuple[float, float] = (0.0, 0.0)
    name_lines: Optional[list[str]] = None
    # which entry of Station.positions carries the label
    position_index: int = 0

@dataclass(slots=True)
class Station:
    id: int
    name: str
    positions: list[tuple[float, float]]
    name_data: NameData = field(default_factory=NameData)

    @property
    def label_position(self) -> tuple[float, float]:
        return self.positions[self.name_data.position_index]

    @property
    def label_lines(self) -> list[str]:
        if self.name_data.name_lines:
            return list(self.name_data.name_lines)
        return [self.name]
