"""
Placement record validation

Missing names or positions are reported, never raised: the record is
excluded from scoring and the batch continues.
"""

from typing import List, Dict, Any, Optional, Tuple
from datetime import datetime
from loguru import logger

from ranking.models import ParsedPlacement, ParsedTournament
from .schemas import (
    ValidationResult,
    ValidationError,
    ValidationSeverity,
)

_CATEGORY_TEXT_FIELDS = ("arm", "gender", "type", "weightClass", "weight_class")
_TOURNAMENT_NAME_KEYS = ("tournamentName", "tournament_name")


def _text(value: Any) -> str:
    """None -> "", other values as trimmed text"""
    if value is None:
        return ""
    return str(value).strip()


def _invalid_record(kind: str, value: Any) -> ValidationResult:
    return ValidationResult(
        is_valid=False,
        errors=[ValidationError(
            error_type="INVALID_TYPE",
            severity=ValidationSeverity.CRITICAL,
            message=f"{kind.capitalize()} is not a record: {value!r}",
            field=kind,
            value=value,
        )],
        pass_rate=0.0,
    )


class TechnicalValidator:
    """
    Technical validation of parsed result documents

    - required fields present (name, position)
    - numeric ranges (position >= 1, position <= category size)
    """

    def validate_placement(
        self,
        data: Dict[str, Any],
        category_size: Optional[int] = None,
    ) -> ValidationResult:
        """Validate one raw placement record"""
        if not isinstance(data, dict):
            return _invalid_record("placement", data)

        errors = []
        warnings = []

        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            errors.append(ValidationError(
                error_type="MISSING_FIELD",
                severity=ValidationSeverity.CRITICAL,
                message="Placement has no athlete name",
                field="name",
                value=name,
                suggestion="Check the result document line for this placement",
            ))

        position = data.get("position")
        if position is None:
            errors.append(ValidationError(
                error_type="MISSING_FIELD",
                severity=ValidationSeverity.CRITICAL,
                message=f"Placement has no position: {name}",
                field="position",
                suggestion="Check the result document line for this placement",
            ))
        elif not isinstance(position, int) or isinstance(position, bool):
            errors.append(ValidationError(
                error_type="INVALID_TYPE",
                severity=ValidationSeverity.HIGH,
                message=f"Position is not an integer: {position!r}",
                field="position",
                value=position,
            ))
        else:
            if position < 1:
                # scored as 0 placement points
                warnings.append(ValidationError(
                    error_type="RANK_OUT_OF_RANGE",
                    severity=ValidationSeverity.MEDIUM,
                    message=f"Non-positive position {position}: {name}",
                    field="position",
                    value=position,
                    suggestion="Placement will score 0 points",
                ))
            elif category_size is not None and position > category_size:
                warnings.append(ValidationError(
                    error_type="RANK_EXCEEDS_PARTICIPANTS",
                    severity=ValidationSeverity.LOW,
                    message=f"Position {position} exceeds category size {category_size}: {name}",
                    field="position",
                    value=position,
                ))

        if not data.get("country"):
            warnings.append(ValidationError(
                error_type="MISSING_COUNTRY",
                severity=ValidationSeverity.LOW,
                message=f"Placement has no country: {name}",
                field="country",
                suggestion="Athlete is treated as non-domestic",
            ))

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
            pass_rate=1.0 if not errors else 0.0,
            validated_at=datetime.now()
        )

    def validate_tournament(self, data: Dict[str, Any]) -> Tuple[ParsedTournament, ValidationResult]:
        """
        Validate a raw parsed-tournament document

        Returns the tournament with invalid placements removed plus the
        combined validation result. Null text fields become "".
        """
        combined = ValidationResult()
        categories = []
        total = 0
        passed = 0

        for category in data.get("categories") or []:
            if not isinstance(category, dict):
                combined.merge(_invalid_record("category", category))
                logger.warning(f"Skipping category that is not a record: {category!r}")
                continue

            raw_placements = category.get("placements") or []
            kept: List[ParsedPlacement] = []

            for raw in raw_placements:
                total += 1
                result = self.validate_placement(raw, category_size=len(raw_placements))
                combined.merge(result)
                if not result.can_score:
                    logger.warning(
                        f"Skipping placement in {category.get('name') or '?'}: "
                        f"{'; '.join(e.message for e in result.errors)}"
                    )
                    continue
                passed += 1
                kept.append(ParsedPlacement(
                    position=raw["position"],
                    name=raw["name"].strip(),
                    country=_text(raw.get("country")),
                ))

            cleaned = {**category, "placements": kept}
            for key in _CATEGORY_TEXT_FIELDS:
                if key in cleaned:
                    cleaned[key] = _text(cleaned[key])
            cleaned["name"] = _text(category.get("name"))
            categories.append(cleaned)

        document = {k: v for k, v in data.items() if k not in _TOURNAMENT_NAME_KEYS}
        document["tournamentName"] = (
            _text(data.get("tournamentName", data.get("tournament_name"))) or "Tournament"
        )
        document["categories"] = categories

        tournament = ParsedTournament.model_validate(document)
        combined.pass_rate = passed / total if total > 0 else 1.0
        return tournament, combined
