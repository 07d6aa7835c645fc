"""
Swiss League Points ranking

Points rule table, category classification, tournament aggregation
and standings assembly.
"""
from .rules import PointsRuleTable, SizeBand, DEFAULT_RULES
from .categories import (
    CategoryType,
    classify_category,
    get_category_rules,
    LEGACY_CATEGORY_RULES,
    CORRECTED_CATEGORY_RULES,
)
from .models import (
    PlacementResult,
    ParsedPlacement,
    ParsedCategory,
    ParsedTournament,
    PointsBreakdown,
    CategoryResult,
    TournamentScore,
    CategoryPoints,
    AthletePoints,
    RankingRow,
    AthleteStanding,
    ClubStanding,
    TournamentInfo,
    Standings,
)
from .calculator import (
    get_placement_points,
    get_category_size_bonus,
    get_competition_bonus,
    calculate_single_result,
    calculate_tournament_points,
    calculate_slp_points,
    flatten_placements,
    format_breakdown,
    build_season_rankings,
    is_domestic,
)
from .standings import StandingsAssembler, club_standings, gender_standings
from .config import RankingSettings, get_settings

__all__ = [
    # Rules
    "PointsRuleTable",
    "SizeBand",
    "DEFAULT_RULES",
    # Categories
    "CategoryType",
    "classify_category",
    "get_category_rules",
    "LEGACY_CATEGORY_RULES",
    "CORRECTED_CATEGORY_RULES",
    # Models
    "PlacementResult",
    "ParsedPlacement",
    "ParsedCategory",
    "ParsedTournament",
    "PointsBreakdown",
    "CategoryResult",
    "TournamentScore",
    "CategoryPoints",
    "AthletePoints",
    "RankingRow",
    "AthleteStanding",
    "ClubStanding",
    "TournamentInfo",
    "Standings",
    # Calculator
    "get_placement_points",
    "get_category_size_bonus",
    "get_competition_bonus",
    "calculate_single_result",
    "calculate_tournament_points",
    "calculate_slp_points",
    "flatten_placements",
    "format_breakdown",
    "build_season_rankings",
    "is_domestic",
    # Standings
    "StandingsAssembler",
    "club_standings",
    "gender_standings",
    # Settings
    "RankingSettings",
    "get_settings",
]
