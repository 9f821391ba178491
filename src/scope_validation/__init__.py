"""
Scope Consistency Validation Engine.

A rules-based checker that decides whether a proposed repair scope of work
is internally consistent, complete and plausible before it is finalized.
"""

from .config import EngineSettings, configure_logging
from .core.catalog import CatalogIndex
from .core.exceptions import (
    CatalogUnavailableError,
    PolicyConfigurationError,
    ScopeValidationError,
)
from .core.models import (
    CatalogEntry,
    CompanionRules,
    CoverageType,
    DamageObservation,
    IssueCategory,
    IssueSeverity,
    Room,
    ScopeItem,
    ValidationIssue,
    ValidationResult,
    WaterCategory,
    WaterClassification,
)
from .core.policy import ScopePolicy, TradeSequence
from .core.snapshot import ValidationSnapshot
from .core.storage import CatalogStorage, InMemoryCatalogStorage
from .engine import ScopeValidationEngine, validate_scope_completeness
from .modules.companion import validate_companions_post_auto_add
from .reporting.scorecard import (
    ValidationReportFormatter,
    ValidationResultBuilder,
    compute_score,
)

__version__ = "0.1.0"

__all__ = [
    # Main Engine
    "ScopeValidationEngine",
    "validate_scope_completeness",
    "validate_companions_post_auto_add",
    # Models
    "CatalogEntry",
    "CompanionRules",
    "CoverageType",
    "DamageObservation",
    "IssueCategory",
    "IssueSeverity",
    "Room",
    "ScopeItem",
    "ValidationIssue",
    "ValidationResult",
    "WaterCategory",
    "WaterClassification",
    # Catalog & Storage
    "CatalogIndex",
    "CatalogStorage",
    "InMemoryCatalogStorage",
    "ValidationSnapshot",
    # Configuration
    "EngineSettings",
    "ScopePolicy",
    "TradeSequence",
    "configure_logging",
    # Errors
    "CatalogUnavailableError",
    "PolicyConfigurationError",
    "ScopeValidationError",
    # Reporting
    "ValidationReportFormatter",
    "ValidationResultBuilder",
    "compute_score",
]
