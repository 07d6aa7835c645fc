"""
Tournament scoring pipeline

1. Validate: drop placements with missing fields (reported, not raised)
2. Reconcile: match athlete names against the member roster
3. Score: SLP points per domestic athlete
"""

from typing import Dict, Any, List, Optional, Sequence, Tuple, Union
from loguru import logger

from ranking.calculator import (
    calculate_slp_points,
    calculate_tournament_points,
    flatten_placements,
)
from ranking.config import RankingSettings, get_settings
from ranking.models import ParsedTournament, PlacementResult, TournamentScore
from ranking.rules import PointsRuleTable

from .matching import NameMatcher, summarize_matches
from .schemas import (
    AthleteMatch,
    MatchStatistics,
    MissingFieldError,
    TournamentReport,
    ValidationResult,
)
from .validators import TechnicalValidator

TournamentInput = Union[ParsedTournament, Dict[str, Any]]


def _placement_count(data: TournamentInput) -> int:
    if isinstance(data, ParsedTournament):
        return sum(c.size for c in data.categories)
    return sum(
        len(c.get("placements") or []) if isinstance(c, dict) else 0
        for c in data.get("categories") or []
    )


class ScoringPipeline:
    """Validate -> reconcile -> score, one parsed tournament at a time"""

    def __init__(
        self,
        settings: Optional[RankingSettings] = None,
        rules: Optional[PointsRuleTable] = None,
    ):
        self.settings = settings or get_settings()
        self.rules = rules or self.settings.load_rules()
        self.category_rules = self.settings.load_category_rules()
        self.validator = TechnicalValidator()

        self.stats = {
            "tournaments": 0,
            "placements_skipped": 0,
            "athletes_scored": 0,
        }

    # ==================== Validate ====================

    def prepare(self, data: TournamentInput) -> Tuple[ParsedTournament, ValidationResult]:
        """Raw dict -> (ParsedTournament, ValidationResult); models pass through"""
        if data is None:
            raise MissingFieldError("tournament")
        if isinstance(data, ParsedTournament):
            return data, ValidationResult()
        return self.validator.validate_tournament(data)

    # ==================== Reconcile ====================

    def reconcile(
        self,
        data: TournamentInput,
        roster: Optional[Sequence[str]],
    ) -> List[AthleteMatch]:
        """Match every placement's athlete against the roster"""
        parsed, _ = self.prepare(data)
        matcher = NameMatcher(roster)

        matches = []
        for category in parsed.categories:
            for placement in category.placements:
                matches.append(AthleteMatch(
                    athlete=placement,
                    category=f"{category.name} {category.arm}".strip(),
                    match=matcher.match(
                        placement.name,
                        min_similarity=self.settings.match_threshold,
                        max_candidates=self.settings.max_candidates,
                    ),
                ))

        stats = self.summarize(matches)
        logger.info(
            f"{parsed.tournament_name}: {stats.matched}/{stats.domestic} domestic athletes matched "
            f"({stats.match_rate}%), roster {len(matcher)}"
        )
        return matches

    def summarize(self, matches: List[AthleteMatch]) -> MatchStatistics:
        return summarize_matches(matches, self.settings.domestic_countries)

    # ==================== Score ====================

    def score(self, data: TournamentInput, tier: Optional[str] = None) -> TournamentReport:
        """Best-category SLP points for each domestic athlete"""
        tier = tier or self.settings.default_tier
        parsed, validation = self.prepare(data)
        skipped = _placement_count(data) - _placement_count(parsed)

        athletes = calculate_slp_points(
            parsed,
            tier=tier,
            rules=self.rules,
            domestic_countries=self.settings.domestic_countries,
        )

        self.stats["tournaments"] += 1
        self.stats["placements_skipped"] += skipped
        self.stats["athletes_scored"] += len(athletes)
        logger.info(
            f"{parsed.tournament_name}: {len(athletes)} of {parsed.total_athletes} athletes scored ({tier})"
        )
        if skipped:
            logger.warning(f"{parsed.tournament_name}: {skipped} placements skipped")

        return TournamentReport(
            tournament_name=parsed.tournament_name,
            tier=tier,
            athletes=athletes,
            skipped=skipped,
            validation=validation,
        )

    def aggregate_athletes(
        self,
        placements: Sequence[PlacementResult],
        tier: Optional[str] = None,
    ) -> Dict[str, TournamentScore]:
        """Per-athlete category-type aggregation over placement rows"""
        tier = tier or self.settings.default_tier
        by_athlete: Dict[str, List[PlacementResult]] = {}
        for placement in placements:
            by_athlete.setdefault(placement.name, []).append(placement)

        return {
            name: calculate_tournament_points(results, tier, self.rules, self.category_rules)
            for name, results in by_athlete.items()
        }

    def aggregate_tournament(
        self,
        data: TournamentInput,
        tier: Optional[str] = None,
    ) -> Dict[str, TournamentScore]:
        """Per-athlete category-type aggregation for a parsed tournament"""
        parsed, _ = self.prepare(data)
        return self.aggregate_athletes(flatten_placements(parsed), tier)
