"""
Round State Machine

One round = one hidden target station. The player types station names;
every recognised station is revealed on the map, and naming the target
wins the round.

    AWAITING_TARGET --restart--> IN_PROGRESS --guess target--> WON
          ^                          |   ^                       |
          +------ (none) ------------+   +-------- restart ------+

Feedback messages are transient: each guess replaces the previous one, and
a message simply stops being reported once its display time has elapsed.
"""

import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Set, Tuple

from core.search import SearchIndex
from core.stations import InvalidStationError, StationCatalog

Color = Tuple[int, int, int]

# Proximity bands, in map widths between guess and target
VERY_CLOSE_DIST = 0.04
CLOSE_DIST = 0.12

FEEDBACK_COLORS = {
    'unknown':    (255, 160, 0),
    'repeat':     (180, 180, 180),
    'very_close': (255, 220, 0),
    'close':      (255, 140, 40),
    'far':        (255, 60, 60),
    'won':        (0, 255, 120),
    'gave_up':    (80, 120, 255),
}
WIN_DIM_COLOR = (0, 0, 0, 150)
_BAND_TEXT = {
    "very_close": "very close!",
    "close": "getting close",
    "far": "far away",
}


class RoundPhase(Enum):
    AWAITING_TARGET = "awaiting_target"
    IN_PROGRESS = "in_progress"
    WON = "won"


@dataclass(frozen=True)
class FeedbackMessage:
    """Transient banner shown after a guess"""
    text: str
    color: Color
    created: float
    duration: float
    dim_color: Optional[Tuple[int, int, int, int]] = None

    def is_active(self, now: float) -> bool:
        return now - self.created < self.duration


@dataclass
class RoundState:
    target: Optional[int] = None
    guessed: Set[int] = field(default_factory=set)
    input_text: str = ""
    feedback: Optional[FeedbackMessage] = None
    phase: RoundPhase = RoundPhase.AWAITING_TARGET
    # bumped on every change so renderers can cache
    guessed_version: int = 0
    feedback_version: int = 0


@dataclass(frozen=True)
class GuessResult:
    """What a single submit did"""
    resolved: frozenset
    new: frozenset
    won: bool

    @property
    def recognised(self) -> bool:
        return bool(self.resolved)


class RoundStateMachine:
    """
    Owns target selection, guessed set and feedback for the current round.

    Args:
        catalog: Station list
        index: Search index built over the same stations
        rng: Random source for target selection
        clock: Monotonic time source in seconds
        guess_feedback_s: Display time of ordinary guess feedback
        win_feedback_s: Display time of the win banner
    """

    def __init__(self, catalog: StationCatalog, index: SearchIndex,
                 rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = time.monotonic,
                 guess_feedback_s: float = 2.0,
                 win_feedback_s: float = 30.0):
        if len(catalog) == 0:
            raise ValueError("Cannot play a round without stations")
        self.catalog = catalog
        self.index = index
        self.rng = rng or random.Random()
        self.clock = clock
        self.guess_feedback_s = guess_feedback_s
        self.win_feedback_s = win_feedback_s
        self.state = RoundState()

    # ── read access ───────────────────────────────────────────────────────

    @property
    def phase(self) -> RoundPhase:
        return self.state.phase

    @property
    def target(self) -> Optional[int]:
        return self.state.target

    @property
    def guessed(self) -> frozenset:
        return frozenset(self.state.guessed)

    @property
    def input_text(self) -> str:
        return self.state.input_text

    def target_station(self):
        if self.state.target is None:
            return None
        return self.catalog.get(self.state.target)

    def active_feedback(self, now: Optional[float] = None) -> Optional[FeedbackMessage]:
        fb = self.state.feedback
        if fb is None:
            return None
        if now is None:
            now = self.clock()
        return fb if fb.is_active(now) else None

    # ── actions ───────────────────────────────────────────────────────────

    def set_input(self, text: str):
        self.state.input_text = text

    def restart(self):
        """Start a new round with a uniformly random target"""
        self.state.guessed.clear()
        self.state.guessed_version += 1
        self.state.target = self.rng.randrange(len(self.catalog))
        self.state.input_text = ""
        self._set_feedback(None)
        self.state.phase = RoundPhase.IN_PROGRESS

    def submit_guess(self, text: Optional[str] = None) -> GuessResult:
        """
        Resolve a guess and apply it.

        Unrecognised text leaves the input buffer untouched so the player
        can correct it; a recognised guess clears it.
        """
        if self.state.phase == RoundPhase.AWAITING_TARGET:
            raise RuntimeError("No round in progress, call restart() first")
        target = self._checked_target()

        if text is None:
            text = self.state.input_text
        resolved = self.index.resolve(text)

        if not resolved:
            self._feedback(f"Unknown station: {text.strip()}" if text.strip()
                           else "Type a station name", 'unknown')
            return GuessResult(frozenset(), frozenset(), False)

        for sid in resolved:
            self.catalog.get(sid)
        new = resolved - self.state.guessed
        self._insert(resolved)
        self.state.input_text = ""

        if target in resolved:
            won_now = self.state.phase != RoundPhase.WON
            self.state.phase = RoundPhase.WON
            self._insert(self.catalog.ids())
            name = self.catalog.get(target).name
            self._feedback(f"Correct! It was {name}", 'won',
                           duration=self.win_feedback_s, dim=WIN_DIM_COLOR)
            return GuessResult(frozenset(resolved), frozenset(new), won_now)

        if not new:
            names = ", ".join(sorted(self.catalog.get(s).name for s in resolved))
            self._feedback(f"Already guessed: {names}", 'repeat')
        else:
            self._proximity_feedback(resolved, target)
        return GuessResult(frozenset(resolved), frozenset(new), False)

    def give_up(self):
        """Reveal every station without winning; target and phase unchanged"""
        self._insert(self.catalog.ids())
        target = self.target_station()
        if target is not None:
            self._feedback(f"The station was {target.name}", 'gave_up',
                           duration=self.win_feedback_s)

    reveal_all = give_up

    # ── internals ─────────────────────────────────────────────────────────

    def _checked_target(self) -> int:
        target = self.state.target
        if target is None or not 0 <= target < len(self.catalog):
            raise InvalidStationError(f"Round target {target!r} is not a valid station")
        return target

    def _insert(self, ids):
        before = len(self.state.guessed)
        self.state.guessed.update(ids)
        if len(self.state.guessed) != before:
            self.state.guessed_version += 1

    def _proximity_feedback(self, resolved: Set[int], target: int):
        nearest = min(resolved, key=lambda s: self.catalog.distance(s, target))
        dist = self.catalog.distance(nearest, target)
        name = self.catalog.get(nearest).name
        band = proximity_band(dist)
        self._feedback(f"{name} - {_BAND_TEXT[band]}", band)

    def _feedback(self, text: str, kind: str, duration: Optional[float] = None,
                  dim: Optional[Tuple[int, int, int, int]] = None):
        self._set_feedback(FeedbackMessage(
            text=text,
            color=FEEDBACK_COLORS[kind],
            created=self.clock(),
            duration=self.guess_feedback_s if duration is None else duration,
            dim_color=dim,
        ))

    def _set_feedback(self, feedback: Optional[FeedbackMessage]):
        self.state.feedback = feedback
        self.state.feedback_version += 1


def proximity_band(distance: float) -> str:
    if distance < VERY_CLOSE_DIST:
        return "very_close"
    if distance < CLOSE_DIST:
        return "close"
    return "far"


def proximity_color(distance: float) -> Color:
    """Marker colour for a guessed station at a distance from the target"""
    return FEEDBACK_COLORS[proximity_band(distance)]
