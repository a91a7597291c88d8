"""
Station dataset loader

Reads the hand-maintained station list (YAML, so maintainers can leave
comments next to coordinates) and turns it into Station objects. The
order of records is the station identity: station N is always the Nth
record of the file.

Record layout:

    - name: Baker Street
      positions: [[0.412, 0.387]]        # normalized to the 8262x5803 map
      name_data:                          # optional
        anchor: NorthEast                 # default North
        offset: [0, -4]                   # screen pixels, default [0, 0]
        name_lines: [Baker, Street]       # optional multi-line label
        position_index: 0                 # which position carries the label
"""

from __future__ import annotations
from pathlib import Path
from typing import Iterator, List, Sequence

import numpy as np
import yaml

from .coords import REFERENCE_WIDTH, REFERENCE_HEIGHT
from .types import Anchor, NameData, Station


class DatasetError(ValueError):
    """Station dataset missing or malformed"""


class InvalidStationError(IndexError):
    """A station identifier does not address a station in the dataset"""


def _parse_pair(value, what: str, where: str) -> tuple[float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise DatasetError(f"{where}: {what} must be a pair [x, y], got {value!r}")
    try:
        return float(value[0]), float(value[1])
    except (TypeError, ValueError):
        raise DatasetError(f"{where}: {what} must be numeric, got {value!r}") from None


def _parse_name_data(raw, where: str) -> NameData:
    if raw is None:
        return NameData()
    if not isinstance(raw, dict):
        raise DatasetError(f"{where}: name_data must be a mapping")

    data = NameData()
    if 'anchor' in raw:
        try:
            data.anchor = Anchor.parse(raw['anchor'])
        except ValueError as e:
            raise DatasetError(f"{where}: {e}") from None
    if 'offset' in raw:
        data.offset = _parse_pair(raw['offset'], "offset", where)
    if raw.get('name_lines') is not None:
        lines = raw['name_lines']
        if not isinstance(lines, list) or not all(isinstance(l, str) for l in lines):
            raise DatasetError(f"{where}: name_lines must be a list of strings")
        data.name_lines = list(lines)
    if 'position_index' in raw:
        try:
            data.position_index = int(raw['position_index'])
        except (TypeError, ValueError):
            raise DatasetError(f"{where}: position_index must be an integer") from None
    return data


def parse_station(index: int, record) -> Station:
    """Build one Station from a decoded dataset record."""
    where = f"station #{index}"
    if not isinstance(record, dict):
        raise DatasetError(f"{where}: expected a mapping, got {type(record).__name__}")

    name = record.get('name')
    if not isinstance(name, str) or not name.strip():
        raise DatasetError(f"{where}: missing name")
    where = f"station #{index} ({name})"

    raw_positions = record.get('positions')
    if not raw_positions:
        raise DatasetError(f"{where}: needs at least one position")

    positions = []
    for raw in raw_positions:
        x, y = _parse_pair(raw, "position", where)
        if not (0.0 <= x <= 1.0 and 0.0 <= y <= 1.0):
            raise DatasetError(f"{where}: position {raw!r} outside [0, 1]")
        positions.append((x, y))

    name_data = _parse_name_data(record.get('name_data'), where)
    if not 0 <= name_data.position_index < len(positions):
        raise DatasetError(f"{where}: position_index {name_data.position_index} "
                           f"but only {len(positions)} position(s)")

    return Station(id=index, name=name.strip(), positions=positions, name_data=name_data)


def parse_stations(records) -> List[Station]:
    if not isinstance(records, list) or not records:
        raise DatasetError("Station dataset must be a non-empty list of records")
    return [parse_station(i, rec) for i, rec in enumerate(records)]


def load_stations(path: str | Path) -> List[Station]:
    """
    Load stations from a YAML file.

    Raises:
        DatasetError: file missing, unreadable or malformed
    """
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except OSError as e:
        raise DatasetError(f"Cannot read station dataset {path}: {e}") from e

    try:
        records = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DatasetError(f"{path.name}: invalid YAML: {e}") from e

    # allow a top-level 'stations:' key as well as a bare list
    if isinstance(records, dict) and 'stations' in records:
        records = records['stations']
    return parse_stations(records)


class StationCatalog:
    """
    Read-only ordered station list.

    Identifiers are indices; dereferencing an identifier outside the list
    raises InvalidStationError instead of silently skipping the station.
    """

    def __init__(self, stations: Sequence[Station]):
        self._stations = list(stations)
        for i, st in enumerate(self._stations):
            if st.id != i:
                raise DatasetError(f"Station '{st.name}' has id {st.id}, expected {i}")
        # label anchor position of every station, shape (N, 2)
        self.label_positions = np.array(
            [st.label_position for st in self._stations], dtype=np.float32
        ).reshape(-1, 2)

    @classmethod
    def from_file(cls, path: str | Path) -> "StationCatalog":
        return cls(load_stations(path))

    def __len__(self) -> int:
        return len(self._stations)

    def __iter__(self) -> Iterator[Station]:
        return iter(self._stations)

    def __getitem__(self, station_id: int) -> Station:
        return self.get(station_id)

    def get(self, station_id: int) -> Station:
        if not isinstance(station_id, (int, np.integer)) or not 0 <= station_id < len(self._stations):
            raise InvalidStationError(
                f"Station id {station_id!r} out of range (0..{len(self._stations) - 1})")
        return self._stations[int(station_id)]

    def ids(self) -> range:
        return range(len(self._stations))

    def names(self) -> List[str]:
        return [st.name for st in self._stations]

    def distance(self, a: int, b: int) -> float:
        """Distance between two stations' label positions, in map widths.

        The y axis is rescaled by the map's aspect ratio so the result is
        isotropic on the rendered map.
        """
        pa = self.get(a).label_position
        pb = self.get(b).label_position
        dx = pa[0] - pb[0]
        dy = (pa[1] - pb[1]) * REFERENCE_HEIGHT / REFERENCE_WIDTH
        return float(np.hypot(dx, dy))
