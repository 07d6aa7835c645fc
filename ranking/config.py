"""
Ranking settings
"""
from functools import lru_cache
from typing import List, Literal, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .categories import CategoryRule, get_category_rules
from .rules import DEFAULT_RULES, PointsRuleTable

load_dotenv()


class RankingSettings(BaseSettings):
    """SLP ranking settings (environment prefix SLP_)"""

    model_config = SettingsConfigDict(env_prefix="SLP_", case_sensitive=False, extra="ignore")

    season: str = Field(default="2025/26", description="current season label")
    rules_file: Optional[str] = Field(default=None, description="JSON rule table; 2025 table when empty")
    category_rules: Literal["legacy", "corrected"] = Field(
        default="legacy",
        description="category classifier chain (legacy reproduces published standings)",
    )
    default_tier: str = Field(default="national", description="tier when a tournament has none")

    # name reconciliation
    match_threshold: float = Field(default=0.6, ge=0.0, le=1.0, description="minimum fuzzy similarity")
    max_candidates: int = Field(default=3, ge=1, description="fuzzy candidates kept per athlete")

    domestic_countries: List[str] = Field(
        default_factory=lambda: ["switzerland", "sui", "ch"],
        description="countries whose athletes earn points",
    )

    # logging
    log_level: str = Field(default="INFO")
    log_dir: Optional[str] = Field(default=None, description="daily rotated log files when set")

    def load_rules(self) -> PointsRuleTable:
        if self.rules_file:
            return PointsRuleTable.from_file(self.rules_file)
        return DEFAULT_RULES

    def load_category_rules(self) -> List[CategoryRule]:
        return get_category_rules(self.category_rules)


@lru_cache()
def get_settings() -> RankingSettings:
    return RankingSettings()
