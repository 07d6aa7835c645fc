"""
Ranking value objects

Plain records (numbers and strings only) so that every result can be
stored or embedded in an API response with model_dump(by_alias=True).
"""
from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .categories import CategoryType


class RankingModel(BaseModel):
    """Base: snake_case in Python, camelCase on the wire"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ValueModel(RankingModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# =====================================================
# Inputs (produced by the result-document parser)
# =====================================================

class PlacementResult(ValueModel):
    """One athlete's finish in one category at one tournament"""
    name: str
    category: str
    rank: int
    participants: int = 0
    country: str = ""


class ParsedPlacement(ValueModel):
    position: int
    name: str
    country: str = ""


class ParsedCategory(RankingModel):
    """Category block of a result document ("Men 80kg Left")"""
    name: str
    arm: str = ""
    gender: str = ""
    type: str = ""
    weight_class: str = ""
    placements: List[ParsedPlacement] = Field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.placements)


class ParsedTournament(RankingModel):
    tournament_name: str = "Tournament"
    categories: List[ParsedCategory] = Field(default_factory=list)

    @property
    def unique_athletes(self) -> List[str]:
        return sorted({p.name for c in self.categories for p in c.placements})

    @property
    def total_athletes(self) -> int:
        return len(self.unique_athletes)


# =====================================================
# Scoring outputs
# =====================================================

class PointsBreakdown(ValueModel):
    """Score of a single result"""
    placement: int
    size_bonus: int
    competition_bonus: int
    total: int


class CategoryResult(ValueModel):
    """Best result of one category type at one tournament"""
    category: str
    category_type: CategoryType
    rank: int
    participants: int
    points: PointsBreakdown


class TournamentScore(ValueModel):
    competition_type: str
    results: List[CategoryResult] = Field(default_factory=list)
    total_points: int = 0


class CategoryPoints(ValueModel):
    """One category entry of an athlete in a parsed tournament"""
    category: str
    arm: str = ""
    position: int
    points: PointsBreakdown

    @property
    def total(self) -> int:
        return self.points.total

    @property
    def label(self) -> str:
        return f"{self.category} {self.arm}".strip()


class AthletePoints(RankingModel):
    """Tournament points of one athlete: only the best category counts"""
    name: str
    country: str = ""
    categories: List[CategoryPoints] = Field(default_factory=list)
    best_category: str = ""
    total_points: int = 0


# =====================================================
# Standings
# =====================================================

class RankingRow(RankingModel):
    """Stored season ranking of one athlete"""
    rank: Optional[int] = None
    name: str
    gender: str = ""
    club: Optional[str] = None
    points: int = 0
    breakdown: str = ""
    season: Optional[str] = None


class AthleteStanding(RankingModel):
    rank: Optional[int] = None
    name: str
    club: str = ""
    points: int = 0
    breakdown: str = ""


class ClubStanding(RankingModel):
    rank: int = 0
    club: str
    points: int = 0
    athletes: int = 0
    breakdown: Dict[str, Dict[str, int]] = Field(default_factory=dict)


class TournamentInfo(RankingModel):
    name: str
    date: date
    type: str = "national"
    status: str = "completed"


class Standings(RankingModel):
    season: str
    last_updated: date
    tournaments: List[TournamentInfo] = Field(default_factory=list)
    note: str = ""
    men: List[AthleteStanding] = Field(default_factory=list)
    women: List[AthleteStanding] = Field(default_factory=list)
    clubs: List[ClubStanding] = Field(default_factory=list)
