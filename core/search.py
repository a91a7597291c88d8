"""
Station name search

Resolves free text typed by the player to station identifiers. Names are
normalized (case, punctuation, '&' vs 'and') and compared with difflib's
similarity ratio so small typos still match while unrelated text does not.

Names carrying a parenthetical qualifier, e.g. "Edgware Road (Bakerloo)",
are indexed twice: once in full and once stripped ("Edgware Road"), both
pointing at the same station.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from difflib import SequenceMatcher
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .types import Station

DEFAULT_THRESHOLD = 0.75

# Real-world stations that share a name. Any match on a station whose name
# contains one of these keys reveals the whole group.
KNOWN_DUPLICATE_NAMES: Tuple[str, ...] = (
    "Edgware Road",
)

_PAREN_RE = re.compile(r"\s*\([^)]*\)")
_APOSTROPHE_RE = re.compile(r"[’'`]")
_NON_WORD_RE = re.compile(r"[^a-z0-9]+")


def normalize_name(s: str) -> str:
    s = (s or "").lower().replace("&", " and ")
    s = _APOSTROPHE_RE.sub("", s)
    s = _NON_WORD_RE.sub(" ", s)
    return " ".join(s.split())


def strip_parenthetical(name: str) -> str:
    return " ".join(_PAREN_RE.sub("", name).split())


def similarity(a: str, b: str) -> float:
    """Similarity of two normalized strings in [0, 1]."""
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    return SequenceMatcher(None, a, b).ratio()


@dataclass
class SearchIndex:
    """
    Read-only token index over station names.

    tokens maps a normalized name token to the identifiers indexed under it
    (stripped parenthetical names can be shared by several stations).
    duplicate_groups maps a known duplicate-name key to every identifier
    whose name contains it.
    """
    names: Dict[int, str]
    tokens: Dict[str, List[int]] = field(default_factory=dict)
    duplicate_groups: Dict[str, Tuple[int, ...]] = field(default_factory=dict)
    threshold: float = DEFAULT_THRESHOLD

    @classmethod
    def build(cls, stations: Iterable[Station],
              threshold: float = DEFAULT_THRESHOLD,
              duplicate_names: Iterable[str] = KNOWN_DUPLICATE_NAMES) -> "SearchIndex":
        stations = list(stations)
        index = cls(names={st.id: st.name for st in stations}, threshold=threshold)

        for st in stations:
            index._add_token(st.name, st.id)
            stripped = strip_parenthetical(st.name)
            if stripped and stripped != st.name:
                index._add_token(stripped, st.id)

        for key in duplicate_names:
            members = tuple(st.id for st in stations if key in st.name)
            if len(members) >= 2:
                index.duplicate_groups[key] = members
            else:
                print(f"Warning: duplicate-name group '{key}' matches "
                      f"{len(members)} station(s), ignored")
        return index

    def _add_token(self, name: str, station_id: int):
        ids = self.tokens.setdefault(normalize_name(name), [])
        if station_id not in ids:
            ids.append(station_id)

    # ── queries ───────────────────────────────────────────────────────────

    def best_match(self, query: str) -> Optional[Tuple[int, float]]:
        """
        Best station for a query as (station id, score), or None when no
        token clears the threshold. Ties go to the lowest identifier.
        """
        q = normalize_name(query)
        if not q:
            return None

        exact = self.tokens.get(q)
        if exact:
            return min(exact), 1.0

        best: Optional[Tuple[int, float]] = None
        for token, ids in self.tokens.items():
            score = similarity(q, token)
            if score < self.threshold:
                continue
            sid = min(ids)
            if best is None or score > best[1] or (score == best[1] and sid < best[0]):
                best = (sid, score)
        return best

    def resolve(self, query: str) -> Set[int]:
        """Station identifiers meant by a query; empty when unknown."""
        match = self.best_match(query)
        if match is None:
            return set()

        station_id = match[0]
        name = self.names[station_id]
        for key, members in self.duplicate_groups.items():
            if key in name:
                return set(members)
        return {station_id}

    def suggest(self, prefix: str, limit: int = 5) -> List[str]:
        """Display names starting with prefix (normalized), sorted."""
        p = normalize_name(prefix)
        if not p:
            return []
        hits = set()
        for name in self.names.values():
            n = normalize_name(name)
            if n.startswith(p) or normalize_name(strip_parenthetical(name)).startswith(p):
                hits.add(name)
        return sorted(hits)[:limit]
