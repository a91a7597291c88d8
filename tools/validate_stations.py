#!/usr/bin/env python3
"""
Check a station dataset before shipping it.

Loads the file exactly as the game does, then reports the station count,
the duplicate-name groups that will be revealed together, and any other
names that collapse to the same search token once their parenthetical
qualifier is stripped (those need adding to KNOWN_DUPLICATE_NAMES or
renaming).

    python tools/validate_stations.py --input game/data/stations.yaml
"""
from __future__ import annotations

import argparse
import sys
from collections import defaultdict
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from core.coords import REFERENCE_HEIGHT, REFERENCE_WIDTH
from core.search import KNOWN_DUPLICATE_NAMES, SearchIndex, normalize_name, strip_parenthetical
from core.stations import DatasetError, StationCatalog
from game.config import DEFAULT_STATIONS_PATH

# label anchors closer than this (map widths) are probably copy-paste slips
MIN_SEPARATION = 0.002


def stripped_collisions(catalog: StationCatalog, grouped: set[int]) -> dict[str, list[str]]:
    by_token: dict[str, list[str]] = defaultdict(list)
    for st in catalog:
        if st.id in grouped:
            continue
        by_token[normalize_name(strip_parenthetical(st.name))].append(st.name)
    return {k: v for k, v in by_token.items() if len(v) > 1}


def close_pairs(catalog: StationCatalog) -> list[tuple[str, str, float]]:
    pos = catalog.label_positions.astype(np.float64)
    if len(pos) < 2:
        return []
    diff = pos[:, None, :] - pos[None, :, :]
    diff[..., 1] *= REFERENCE_HEIGHT / REFERENCE_WIDTH
    dist = np.hypot(diff[..., 0], diff[..., 1])
    ii, jj = np.nonzero(np.triu(dist < MIN_SEPARATION, k=1))
    names = catalog.names()
    return [(names[i], names[j], float(dist[i, j])) for i, j in zip(ii, jj)]


def main(argv: Optional[Sequence[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Validate a TubeTag station dataset")
    ap.add_argument("--input", type=Path, default=DEFAULT_STATIONS_PATH,
                    help="Station dataset (YAML)")
    args = ap.parse_args(argv)
    path = args.input

    try:
        catalog = StationCatalog.from_file(path)
    except DatasetError as e:
        raise SystemExit(f"[stations] {e}")

    index = SearchIndex.build(catalog)
    print(f"[stations] {path}  stations={len(catalog)}  tokens={len(index.tokens)}")

    grouped: set[int] = set()
    for key in KNOWN_DUPLICATE_NAMES:
        members = index.duplicate_groups.get(key)
        if members:
            grouped.update(members)
            print(f"[stations] group '{key}': " + ", ".join(catalog.get(m).name for m in members))

    problems = 0
    for token, names in stripped_collisions(catalog, grouped).items():
        print(f"[stations] WARNING: '{token}' is shared by " + ", ".join(names))
        problems += 1
    for a, b, d in close_pairs(catalog):
        print(f"[stations] WARNING: '{a}' and '{b}' are only {d:.4f} apart")
        problems += 1

    if problems:
        raise SystemExit(f"[stations] {problems} problem(s) found")
    print("[stations] OK")


if __name__ == "__main__":
    main()
