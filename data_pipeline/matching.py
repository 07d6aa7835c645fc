"""
Athlete name reconciliation

Matches names extracted from result documents against the member roster.

Priority (first hit wins):
1. exact      - case-insensitive, trimmed equality
2. normalized - equality after diacritic folding ("Kaslin" == "Käslin")
3. potential  - Levenshtein similarity above a threshold, for human review
4. none
"""
from typing import Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from ranking.calculator import is_domestic
from .normalizer import normalize_name
from .schemas import (
    AthleteMatch,
    MatchCandidate,
    MatchStatistics,
    MatchType,
    MissingFieldError,
    NameMatch,
)

DEFAULT_MIN_SIMILARITY = 0.7


def levenshtein_distance(s1: str, s2: str) -> int:
    """Edit distance (insert / delete / substitute), two-row DP"""
    if len(s1) < len(s2):
        s1, s2 = s2, s1
    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, 1):
        current = [i]
        for j, c2 in enumerate(s2, 1):
            if c1 == c2:
                current.append(previous[j - 1])
            else:
                current.append(min(previous[j], current[j - 1], previous[j - 1]) + 1)
        previous = current
    return previous[-1]


def _similarity(n1: str, n2: str) -> float:
    """Similarity of two already-normalized names"""
    if n1 == n2:
        return 1.0
    longest = max(len(n1), len(n2))
    return (longest - levenshtein_distance(n1, n2)) / longest


def calculate_similarity(name1: str, name2: str) -> float:
    """0..1 similarity (1 = identical after normalization)"""
    return _similarity(normalize_name(name1), normalize_name(name2))


class NameMatcher:
    """
    Roster snapshot with precomputed normalized forms.

    Build one per batch; the roster is not re-read during matching.
    """

    def __init__(self, roster: Optional[Iterable[str]]):
        if roster is None:
            raise MissingFieldError("roster")
        self.roster: List[str] = [name for name in roster if name is not None]
        self._lowered: List[str] = [name.lower().strip() for name in self.roster]
        self._normalized: List[str] = [normalize_name(name) for name in self.roster]

    def __len__(self) -> int:
        return len(self.roster)

    def find_exact(self, search_name: str) -> Optional[str]:
        key = (search_name or "").lower().strip()
        for name, lowered in zip(self.roster, self._lowered):
            if lowered == key:
                return name
        return None

    def find_normalized(self, search_name: str) -> Optional[str]:
        key = normalize_name(search_name)
        for name, normalized in zip(self.roster, self._normalized):
            if normalized == key:
                return name
        return None

    def find_name_match(self, search_name: str) -> Optional[str]:
        """Exact or normalized roster entry, else None"""
        exact = self.find_exact(search_name)
        return exact if exact is not None else self.find_normalized(search_name)

    def find_potential_matches(
        self,
        search_name: str,
        min_similarity: float = DEFAULT_MIN_SIMILARITY,
        limit: Optional[int] = None,
    ) -> List[MatchCandidate]:
        """Roster entries at or above min_similarity, best first (ties keep roster order)"""
        key = normalize_name(search_name)
        scored: List[Tuple[str, float]] = []
        for name, normalized in zip(self.roster, self._normalized):
            similarity = _similarity(key, normalized)
            if similarity >= min_similarity:
                scored.append((name, similarity))

        scored.sort(key=lambda item: -item[1])
        if limit is not None:
            scored = scored[:limit]
        return [MatchCandidate(name=name, similarity=similarity) for name, similarity in scored]

    def match(
        self,
        search_name: str,
        min_similarity: float = 0.6,
        max_candidates: int = 3,
    ) -> NameMatch:
        exact = self.find_exact(search_name)
        if exact is not None:
            return NameMatch(search_name=search_name, match_type=MatchType.EXACT, matched_name=exact)

        normalized = self.find_normalized(search_name)
        if normalized is not None:
            return NameMatch(search_name=search_name, match_type=MatchType.NORMALIZED, matched_name=normalized)

        candidates = self.find_potential_matches(search_name, min_similarity, max_candidates)
        if candidates:
            logger.debug(f"Potential match for {search_name!r}: {[c.name for c in candidates]}")
            return NameMatch(search_name=search_name, match_type=MatchType.POTENTIAL, candidates=candidates)

        logger.debug(f"No roster match for {search_name!r}")
        return NameMatch(search_name=search_name, match_type=MatchType.NONE)


# ==================== function API ====================

def find_name_match(search_name: str, roster: Optional[Sequence[str]]) -> Optional[str]:
    return NameMatcher(roster).find_name_match(search_name)


def find_potential_matches(
    search_name: str,
    roster: Optional[Sequence[str]],
    min_similarity: float = DEFAULT_MIN_SIMILARITY,
    limit: Optional[int] = None,
) -> List[MatchCandidate]:
    return NameMatcher(roster).find_potential_matches(search_name, min_similarity, limit)


def match_name(
    search_name: str,
    roster: Optional[Sequence[str]],
    min_similarity: float = 0.6,
    max_candidates: int = 3,
) -> NameMatch:
    return NameMatcher(roster).match(search_name, min_similarity, max_candidates)


def summarize_matches(
    matches: Iterable[AthleteMatch],
    domestic_countries: Iterable[str] = ("switzerland", "sui", "ch"),
) -> MatchStatistics:
    """Match rate over domestic athletes (exact/normalized count as matched)"""
    domestic_countries = tuple(domestic_countries)
    matches = list(matches)
    domestic = [m for m in matches if is_domestic(m.country, domestic_countries)]
    matched = sum(1 for m in domestic if m.match.match_type.is_matched)

    return MatchStatistics(
        total=len(matches),
        domestic=len(domestic),
        other=len(matches) - len(domestic),
        matched=matched,
        unmatched=len(domestic) - matched,
        match_rate=round(matched / len(domestic) * 100) if domestic else 0,
    )
