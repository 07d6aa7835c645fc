"""
Data pipeline schemas

Validation records and name-reconciliation results
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Any
from datetime import datetime
from enum import Enum

from ranking.models import AthletePoints, ParsedPlacement


class MissingFieldError(ValueError):
    """A required input (roster, athlete name, ...) is absent"""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"missing required field: {field}")


class ValidationSeverity(str, Enum):
    """Validation error severity"""
    CRITICAL = "critical"   # record skipped
    HIGH = "high"           # record skipped, manual review
    MEDIUM = "medium"       # record kept, warning shown
    LOW = "low"             # record kept, logged only


class ValidationError(BaseModel):
    """Validation error"""
    error_type: str = Field(..., description="error type")
    severity: ValidationSeverity = Field(..., description="severity")
    message: str = Field(..., description="error message")
    field: Optional[str] = Field(None, description="related field")
    value: Optional[Any] = Field(None, description="offending value")
    suggestion: Optional[str] = Field(None, description="how to fix")


class ValidationResult(BaseModel):
    """Validation result"""
    is_valid: bool = Field(default=True)
    errors: List[ValidationError] = Field(default_factory=list)
    warnings: List[ValidationError] = Field(default_factory=list)
    pass_rate: float = Field(default=1.0, description="pass rate (0-1)")
    validated_at: datetime = Field(default_factory=datetime.now)

    @property
    def has_critical_errors(self) -> bool:
        return any(e.severity in [ValidationSeverity.CRITICAL, ValidationSeverity.HIGH] for e in self.errors)

    @property
    def can_score(self) -> bool:
        return not self.has_critical_errors

    def merge(self, other: "ValidationResult") -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        self.is_valid = self.is_valid and other.is_valid


# ==================== Name reconciliation ====================

class PipelineModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MatchType(str, Enum):
    """How an external name was reconciled against the roster"""
    EXACT = "exact"
    NORMALIZED = "normalized"
    POTENTIAL = "potential"
    NONE = "none"

    @property
    def is_matched(self) -> bool:
        return self in (MatchType.EXACT, MatchType.NORMALIZED)


class MatchCandidate(PipelineModel):
    name: str
    similarity: float = Field(..., ge=0.0, le=1.0)


class NameMatch(PipelineModel):
    """
    Reconciliation result

    potential = needs human review; candidates are sorted by similarity
    """
    search_name: str
    match_type: MatchType
    matched_name: Optional[str] = None
    candidates: List[MatchCandidate] = Field(default_factory=list)


class AthleteMatch(PipelineModel):
    """A parsed athlete and its reconciliation"""
    athlete: ParsedPlacement
    category: str = ""
    match: NameMatch

    @property
    def country(self) -> str:
        return self.athlete.country


class MatchStatistics(PipelineModel):
    total: int = 0
    domestic: int = 0
    other: int = 0
    matched: int = 0
    unmatched: int = 0
    match_rate: int = 0


class TournamentReport(PipelineModel):
    """Result of scoring one parsed tournament"""
    tournament_name: str
    tier: str
    athletes: List[AthletePoints] = Field(default_factory=list)
    skipped: int = 0
    validation: ValidationResult = Field(default_factory=ValidationResult)
