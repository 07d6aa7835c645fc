"""
Swiss League Points (SLP) calculator

- placement points by rank
- category size bonus
- tournament tier bonus
- per athlete, per tournament: only the best placement per category type counts
"""
from collections import defaultdict
from functools import reduce
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from loguru import logger

from .categories import CategoryRule, CategoryType, LEGACY_CATEGORY_RULES, classify_category
from .models import (
    AthletePoints,
    CategoryPoints,
    CategoryResult,
    ParsedTournament,
    PlacementResult,
    PointsBreakdown,
    RankingRow,
    TournamentScore,
)
from .rules import DEFAULT_RULES, PointsRuleTable

DEFAULT_TIER = "national"
DOMESTIC_COUNTRIES = ("switzerland", "sui", "ch")


# =====================================================
# Single result
# =====================================================

def get_placement_points(rank: int, rules: PointsRuleTable = DEFAULT_RULES) -> int:
    """Placement points for a rank (0 for rank <= 0)"""
    return rules.placement_for(rank)


def get_category_size_bonus(participants: int, rules: PointsRuleTable = DEFAULT_RULES) -> int:
    """Bonus for the number of participants in the category"""
    return rules.size_bonus_for(participants)


def get_competition_bonus(tier: Optional[str], rules: PointsRuleTable = DEFAULT_RULES) -> int:
    """Flat tier bonus; unknown or empty tier -> 0"""
    return rules.tier_bonus_for(tier)


def calculate_single_result(
    rank: int,
    participants: int,
    tier: Optional[str] = DEFAULT_TIER,
    rules: PointsRuleTable = DEFAULT_RULES,
) -> PointsBreakdown:
    """
    Points for one placement

    total = placement + size bonus + tier bonus (no cap)
    """
    placement = rules.placement_for(rank)
    size_bonus = rules.size_bonus_for(participants)
    competition_bonus = rules.tier_bonus_for(tier)

    return PointsBreakdown(
        placement=placement,
        size_bonus=size_bonus,
        competition_bonus=competition_bonus,
        total=placement + size_bonus + competition_bonus,
    )


# =====================================================
# Tournament aggregation
# =====================================================

def group_by_category_type(
    results: Iterable[PlacementResult],
    category_rules: Sequence[CategoryRule] = LEGACY_CATEGORY_RULES,
) -> Dict[CategoryType, List[PlacementResult]]:
    """Group results by category type, keeping input order inside each group"""
    grouped: Dict[CategoryType, List[PlacementResult]] = {}
    for result in results:
        category_type = classify_category(result.category, category_rules)
        grouped.setdefault(category_type, []).append(result)
    return grouped


def best_result(results: Sequence[PlacementResult]) -> PlacementResult:
    """Lowest rank wins; ties keep the first one"""
    return min(results, key=lambda r: r.rank)


def calculate_tournament_points(
    results: Iterable[PlacementResult],
    tier: Optional[str] = DEFAULT_TIER,
    rules: PointsRuleTable = DEFAULT_RULES,
    category_rules: Sequence[CategoryRule] = LEGACY_CATEGORY_RULES,
) -> TournamentScore:
    """
    One athlete's points at one tournament

    Results are grouped by category type; the best placement of each type
    is scored with its own participant count and the totals are summed.
    Entries are ordered by category type tag.
    """
    grouped = group_by_category_type(results, category_rules)

    entries: List[CategoryResult] = []
    for category_type in sorted(grouped, key=lambda t: t.value):
        best = best_result(grouped[category_type])
        entries.append(CategoryResult(
            category=best.category,
            category_type=category_type,
            rank=best.rank,
            participants=best.participants,
            points=calculate_single_result(best.rank, best.participants, tier, rules),
        ))

    return TournamentScore(
        competition_type=tier or "",
        results=entries,
        total_points=sum(e.points.total for e in entries),
    )


# =====================================================
# Parsed result documents
# =====================================================

def is_domestic(country: Optional[str], domestic_countries: Iterable[str] = DOMESTIC_COUNTRIES) -> bool:
    if not country:
        return False
    return country.strip().lower() in {c.lower() for c in domestic_countries}


def flatten_placements(parsed: ParsedTournament) -> List[PlacementResult]:
    """Parsed categories -> placement rows (participants = category size)"""
    rows: List[PlacementResult] = []
    for category in parsed.categories:
        label = f"{category.name} {category.arm}".strip()
        for placement in category.placements:
            rows.append(PlacementResult(
                name=placement.name,
                category=label,
                rank=placement.position,
                participants=category.size,
                country=placement.country,
            ))
    return rows


def calculate_slp_points(
    parsed: ParsedTournament,
    tier: Optional[str] = DEFAULT_TIER,
    rules: PointsRuleTable = DEFAULT_RULES,
    domestic_countries: Iterable[str] = DOMESTIC_COUNTRIES,
) -> List[AthletePoints]:
    """
    Points per domestic athlete for a parsed tournament

    Every category entry is scored; the athlete keeps only the single best
    category across both arms. Sorted by points, highest first.
    """
    domestic = tuple(domestic_countries)
    athletes: Dict[str, AthletePoints] = {}

    for category in parsed.categories:
        for placement in category.placements:
            if not is_domestic(placement.country, domestic):
                continue

            athlete = athletes.get(placement.name)
            if athlete is None:
                athlete = AthletePoints(name=placement.name, country=placement.country)
                athletes[placement.name] = athlete

            athlete.categories.append(CategoryPoints(
                category=category.name,
                arm=category.arm,
                position=placement.position,
                points=calculate_single_result(placement.position, category.size, tier, rules),
            ))

    for athlete in athletes.values():
        # equal totals: the later category wins, as in the published standings
        best = reduce(lambda a, b: a if a.total > b.total else b, athlete.categories)
        athlete.best_category = best.label
        athlete.total_points = best.total

    ranked = sorted(athletes.values(), key=lambda a: -a.total_points)
    logger.info(f"{parsed.tournament_name}: {len(ranked)} domestic athletes scored ({tier})")
    return ranked


def ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def format_breakdown(athlete: AthletePoints) -> str:
    """
    Stored breakdown string, e.g.
    "Best: Men 105 Left | L: 1st (15+2)=17 | R: 2nd (11+2)=13"
    """
    parts = [f"Best: {athlete.best_category}"] if athlete.best_category else []
    for entry in athlete.categories:
        arm = entry.arm[:1].upper() or "-"
        bonus = entry.points.size_bonus + entry.points.competition_bonus
        parts.append(f"{arm}: {ordinal(entry.position)} ({entry.points.placement}+{bonus})={entry.total}")
    return " | ".join(parts)


# =====================================================
# Season totals
# =====================================================

def build_season_rankings(
    tournament_scores: Iterable[Tuple[str, TournamentScore]],
    genders: Optional[Mapping[str, str]] = None,
    clubs: Optional[Mapping[str, str]] = None,
    season: Optional[str] = None,
) -> List[RankingRow]:
    """
    Sum (athlete, TournamentScore) pairs over a season into ranking rows

    Rows are ordered by points, highest first (ties keep first-seen order),
    and numbered 1..n.
    """
    genders = genders or {}
    clubs = clubs or {}

    totals: Dict[str, int] = defaultdict(int)
    tournaments: Dict[str, List[str]] = defaultdict(list)
    for name, score in tournament_scores:
        totals[name] += score.total_points
        tournaments[name].append(str(score.total_points))

    ordered = sorted(totals.items(), key=lambda item: -item[1])
    rows = [
        RankingRow(
            rank=position,
            name=name,
            gender=genders.get(name, ""),
            club=clubs.get(name),
            points=points,
            breakdown=" + ".join(tournaments[name]),
            season=season,
        )
        for position, (name, points) in enumerate(ordered, 1)
    ]
    logger.info(f"Season {season or '-'}: {len(rows)} athletes ranked")
    return rows
