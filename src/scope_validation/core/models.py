"""
Core data models for the Scope Validation Engine.
Uses Pydantic for validation and serialization.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WaterCategory(int, Enum):
    """Water damage categories per IICRC S500 standard."""

    CATEGORY_1 = 1  # Clean water
    CATEGORY_2 = 2  # Gray water
    CATEGORY_3 = 3  # Black water (sewage/contaminated)


class CoverageType(str, Enum):
    """Policy coverage buckets a scope item can be billed against."""

    A = "A"  # Dwelling
    B = "B"  # Other structures


class IssueSeverity(str, Enum):
    """Severity levels for validation issues."""

    ERROR = "error"
    WARNING = "warning"
    SUGGESTION = "suggestion"


class IssueCategory(str, Enum):
    """Categories for validation issues."""

    MISSING_SCOPE = "missing_scope"
    UNLINKED_DAMAGE = "unlinked_damage"
    MISSING_COMPANION = "missing_companion"
    TRADE_SEQUENCE = "trade_sequence"
    INVALID_QUANTITY = "invalid_quantity"
    QUANTITY_OUTLIER = "quantity_outlier"
    DUPLICATE = "duplicate"
    COVERAGE_MISMATCH = "coverage_mismatch"
    WATER_CLASSIFICATION = "water_classification"
    COMPANION = "companion"
    COMPANION_QUANTITY = "companion_quantity"


class InputModel(BaseModel):
    """Base for snapshot inputs; accepts snake_case or camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Room(InputModel):
    """A room recorded during the inspection."""

    id: int
    name: str
    structure: str | None = None


class DamageObservation(InputModel):
    """A damage observation attached to one room."""

    id: int
    room_id: int
    description: str


class ScopeItem(InputModel):
    """Single line of proposed repair work."""

    id: int
    room_id: int | None = None
    damage_id: int | None = None
    catalog_code: str | None = None
    description: str
    quantity: float | None = None
    unit: str = "EA"
    trade_code: str
    coverage_type: str | None = None
    activity_type: str | None = None
    status: str = "active"
    parent_scope_item_id: int | None = None  # Set on auto-added companions

    @property
    def is_active(self) -> bool:
        return self.status == "active"


class CompanionRules(InputModel):
    """Companion dependencies declared by a catalog entry."""

    requires: list[str] = Field(default_factory=list)
    auto_adds: list[str] = Field(default_factory=list)


class CatalogEntry(InputModel):
    """Billable line-item definition from the estimating catalog."""

    code: str
    description: str
    companion_rules: CompanionRules | None = None


class WaterClassification(InputModel):
    """Water loss classification recorded on the inspection session."""

    category: WaterCategory | None = None
    water_class: int | None = Field(default=None, ge=1, le=4)


class ValidationIssue(BaseModel):
    """Individual validation finding. Immutable once created."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    category: IssueCategory
    severity: IssueSeverity
    message: str
    room_id: int | None = None
    scope_item_id: int | None = None
    code: str | None = None


class ValidationResult(BaseModel):
    """Outcome of a validation run."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    valid: bool
    score: int = Field(ge=0, le=100)
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationIssue] = Field(default_factory=list)
    suggestions: list[ValidationIssue] = Field(default_factory=list)

    @property
    def issues(self) -> list[ValidationIssue]:
        """All issues, errors first."""
        return [*self.errors, *self.warnings, *self.suggestions]

    def issues_by_category(self, category: IssueCategory) -> list[ValidationIssue]:
        """Get all issues of a specific category."""
        return [issue for issue in self.issues if issue.category == category]
