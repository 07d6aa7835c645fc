"""
Data pipeline package

Processing of parsed tournament result documents:
- Validation (missing fields are reported, records skipped)
- Name normalization and roster reconciliation
- Scoring through the ranking package
"""

from .schemas import (
    MissingFieldError,
    ValidationResult,
    ValidationError,
    ValidationSeverity,
    MatchType,
    MatchCandidate,
    NameMatch,
    AthleteMatch,
    MatchStatistics,
    TournamentReport,
)
from .normalizer import normalize_name, names_match, full_name
from .matching import (
    NameMatcher,
    levenshtein_distance,
    calculate_similarity,
    find_name_match,
    find_potential_matches,
    match_name,
    summarize_matches,
)
from .validators import TechnicalValidator
from .pipeline import ScoringPipeline

__all__ = [
    # Schemas
    "MissingFieldError",
    "ValidationResult",
    "ValidationError",
    "ValidationSeverity",
    "MatchType",
    "MatchCandidate",
    "NameMatch",
    "AthleteMatch",
    "MatchStatistics",
    "TournamentReport",
    # Normalizer
    "normalize_name",
    "names_match",
    "full_name",
    # Matching
    "NameMatcher",
    "levenshtein_distance",
    "calculate_similarity",
    "find_name_match",
    "find_potential_matches",
    "match_name",
    "summarize_matches",
    # Validators
    "TechnicalValidator",
    # Pipeline
    "ScoringPipeline",
]
