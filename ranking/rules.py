"""
Swiss League Points rule table

Season-specific point values as an immutable configuration object:
- placement points by rank
- category size bonus bands
- tournament tier bonus
"""
import json
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator


class SizeBand(BaseModel):
    """Inclusive participant-count band; max=None means open-ended"""
    model_config = ConfigDict(frozen=True)

    min: int = Field(..., ge=0, description="lowest participant count (inclusive)")
    max: Optional[int] = Field(None, description="highest participant count (inclusive)")
    bonus: int = Field(..., description="bonus points")

    def contains(self, participants: int) -> bool:
        if participants < self.min:
            return False
        return self.max is None or participants <= self.max


class PointsRuleTable(BaseModel):
    """
    Points rule table for one season.

    Accepts the camelCase keys used by stored rule files
    (placementPoints, categorySizeBonus, tournamentTypeBonus).
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    season: str = Field(default="2025", description="season the table applies to")
    placement_points: Mapping[int, int] = Field(alias="placementPoints")
    default_placement_points: int = Field(
        default=1,
        alias="defaultPlacementPoints",
        description="points for any positive rank beyond the table",
    )
    category_size_bonus: Tuple[SizeBand, ...] = Field(alias="categorySizeBonus")
    tournament_tier_bonus: Mapping[str, int] = Field(alias="tournamentTypeBonus")

    @field_validator("placement_points", "tournament_tier_bonus", mode="after")
    @classmethod
    def _read_only(cls, value: Mapping) -> Mapping:
        # read-only: DEFAULT_RULES is shared by every scoring run
        return MappingProxyType(dict(value))

    @field_serializer("placement_points", "tournament_tier_bonus")
    def _plain_dict(self, value: Mapping) -> Dict:
        return dict(value)

    @model_validator(mode="after")
    def _check_bands(self) -> "PointsRuleTable":
        ordered = sorted(self.category_size_bonus, key=lambda b: b.min)
        for prev, band in zip(ordered, ordered[1:]):
            if prev.max is None or prev.max >= band.min:
                raise ValueError(f"overlapping size bands: {prev} / {band}")
        for band in ordered:
            if band.max is not None and band.max < band.min:
                raise ValueError(f"empty size band: {band}")
        return self

    # ------------------------------------------------------------------
    # lookups (never raise on odd input)
    # ------------------------------------------------------------------

    def placement_for(self, rank: int) -> int:
        """Fixed lookup; non-positive rank scores 0"""
        if rank <= 0:
            return 0
        return self.placement_points.get(rank, self.default_placement_points)

    def size_bonus_for(self, participants: int) -> int:
        for band in self.category_size_bonus:
            if band.contains(participants):
                return band.bonus
        return 0

    def tier_bonus_for(self, tier: Optional[str]) -> int:
        if not tier:
            return 0
        return self.tournament_tier_bonus.get(tier, 0)

    @property
    def tiers(self) -> List[str]:
        return list(self.tournament_tier_bonus)

    # ------------------------------------------------------------------
    # loading
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict) -> "PointsRuleTable":
        # JSON files may spell an open band as "max": null or leave it out
        return cls.model_validate(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "PointsRuleTable":
        """Load a rule table from JSON"""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        table = cls.from_dict(data)
        logger.info(f"Rule table loaded: {path} (season {table.season})")
        return table


DEFAULT_RULES = PointsRuleTable(
    season="2025",
    placement_points={1: 15, 2: 11, 3: 8, 4: 4, 5: 3, 6: 2},
    default_placement_points=1,
    category_size_bonus=[
        SizeBand(min=3, max=5, bonus=1),
        SizeBand(min=6, max=10, bonus=2),
        SizeBand(min=11, max=None, bonus=3),
    ],
    tournament_tier_bonus={
        "national": 0,
        "international": 7,
        "em": 9,   # European Championship
        "wm": 10,  # World Championship
    },
)
