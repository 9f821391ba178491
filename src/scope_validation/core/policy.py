"""
Business policy tables used by the scope validators.

Trade sequences, structure keywords and score weights are data, so new
rules can be added through a YAML file without touching validator code.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import PolicyConfigurationError
from .models import CoverageType, IssueSeverity


class TradeSequence(BaseModel):
    """A trigger trade and the full set of trades it implies in a room."""

    name: str
    trigger: str
    sequence: list[str] = Field(min_length=1)

    @field_validator("trigger")
    @classmethod
    def _trigger_upper(cls, value: str) -> str:
        return value.upper()

    @field_validator("sequence")
    @classmethod
    def _sequence_upper(cls, value: list[str]) -> list[str]:
        return [code.upper() for code in value]

    def missing_trades(self, present: set[str]) -> list[str]:
        """Trades of the sequence absent from a room, trigger excluded."""
        return [
            code
            for code in self.sequence
            if code != self.trigger and code not in present
        ]


DEFAULT_TRADE_SEQUENCES: list[TradeSequence] = [
    TradeSequence(name="Drywall", trigger="DRY", sequence=["DEM", "DRY", "PNT"]),
    TradeSequence(name="Flooring", trigger="FLR", sequence=["DEM", "FLR"]),
    TradeSequence(name="Mitigation", trigger="MIT", sequence=["MIT", "DEM"]),
]

DEFAULT_SEVERITY_WEIGHTS: dict[IssueSeverity, int] = {
    IssueSeverity.ERROR: 10,
    IssueSeverity.WARNING: 3,
    IssueSeverity.SUGGESTION: 1,
}


class ScopePolicy(BaseModel):
    """Static rule data consumed by the validators and the scorer."""

    trade_sequences: list[TradeSequence] = Field(
        default_factory=lambda: [s.model_copy() for s in DEFAULT_TRADE_SEQUENCES]
    )
    other_structure_keywords: list[str] = Field(
        default_factory=lambda: ["detach", "garage", "shed", "fence"]
    )
    default_structure: str = "Main Dwelling"
    outlier_unit: str = "SF"
    outlier_threshold: float = Field(default=10_000, gt=0)
    severity_weights: dict[IssueSeverity, int] = Field(
        default_factory=lambda: dict(DEFAULT_SEVERITY_WEIGHTS)
    )

    @field_validator("severity_weights", mode="before")
    @classmethod
    def _merge_weights(cls, value: Any) -> Any:
        # Severities left out of an override keep their default weight
        if not isinstance(value, dict):
            return value
        overrides = {IssueSeverity(key): weight for key, weight in value.items()}
        return {**DEFAULT_SEVERITY_WEIGHTS, **overrides}

    @field_validator("other_structure_keywords")
    @classmethod
    def _keywords_lower(cls, value: list[str]) -> list[str]:
        return [keyword.lower() for keyword in value]

    def expected_coverage(self, structure: str | None) -> CoverageType:
        """Classify a structure name into its expected coverage bucket."""
        name = (structure or self.default_structure).lower()
        if any(keyword in name for keyword in self.other_structure_keywords):
            return CoverageType.B
        return CoverageType.A

    def weight(self, severity: IssueSeverity) -> int:
        """Score deduction for one issue of the given severity."""
        return self.severity_weights.get(severity, 0)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "ScopePolicy":
        """Build a policy from a plain mapping, wrapping validation errors."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise PolicyConfigurationError(f"Invalid scope policy: {e}") from e

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ScopePolicy":
        """
        Load a policy from a YAML file.

        Keys missing from the file keep their default values.

        Args:
            path: Path to the YAML policy file

        Returns:
            Validated ScopePolicy
        """
        policy_path = Path(path)
        try:
            raw = yaml.safe_load(policy_path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise PolicyConfigurationError(
                f"Cannot read scope policy {policy_path}: {e}"
            ) from e

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise PolicyConfigurationError(
                f"Scope policy {policy_path} must be a mapping, got {type(raw).__name__}"
            )
        return cls.from_mapping(raw)
