"""
Game configuration

Everything the game needs at startup, gathered in one place so screens and
renderers receive their resources explicitly instead of reading globals.
"""

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from core.search import DEFAULT_THRESHOLD
from ui.theme import FontConfig

# the dataset ships inside the package; the map image is supplied by the
# player and looked up relative to the working directory
DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_STATIONS_PATH = DATA_DIR / "stations.yaml"
DEFAULT_MAP_PATH = Path("assets") / "tube-map.png"


@dataclass
class GameConfig:
    """Startup configuration"""
    # Window
    width: int = 1280
    height: int = 800
    fps: int = 60
    title: str = "TubeTag"

    # Assets
    stations_path: Path = DEFAULT_STATIONS_PATH
    map_path: Path = DEFAULT_MAP_PATH
    full_map_path: Optional[Path] = None    # labelled map for full-map view
    fonts: FontConfig = field(default_factory=FontConfig)

    # Gameplay
    match_threshold: float = DEFAULT_THRESHOLD
    guess_feedback_s: float = 2.0
    win_feedback_s: float = 30.0
    seed: Optional[int] = None

    # Overlay
    label_font_size: int = 16
    marker_radius: int = 7


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="TubeTag - name the stations on the map")
    ap.add_argument("--stations", type=Path, default=DEFAULT_STATIONS_PATH,
                    help="Station dataset (YAML)")
    ap.add_argument("--map", type=Path, default=DEFAULT_MAP_PATH,
                    help="Blank map image")
    ap.add_argument("--full-map", type=Path, default=None,
                    help="Labelled map image shown in full-map view")
    ap.add_argument("--font", type=Path, default=None,
                    help="TTF font for station labels (system font if omitted)")
    ap.add_argument("--width", type=int, default=1280)
    ap.add_argument("--height", type=int, default=800)
    ap.add_argument("--fps", type=int, default=60)
    ap.add_argument("--threshold", type=float, default=DEFAULT_THRESHOLD,
                    help="Name match threshold in [0, 1]")
    ap.add_argument("--seed", type=int, default=None,
                    help="Random seed for target selection")
    return ap


def config_from_args(argv: Optional[Sequence[str]] = None) -> GameConfig:
    args = build_arg_parser().parse_args(argv)
    if not 0.0 < args.threshold <= 1.0:
        raise SystemExit(f"--threshold must be in (0, 1], got {args.threshold}")
    return GameConfig(
        width=args.width,
        height=args.height,
        fps=args.fps,
        stations_path=args.stations,
        map_path=args.map,
        full_map_path=args.full_map,
        fonts=FontConfig(label_path=args.font),
        match_threshold=args.threshold,
        seed=args.seed,
    )
