"""
Core components for the Scope Validation Engine.
"""

from .catalog import CatalogIndex
from .exceptions import (
    CatalogUnavailableError,
    PolicyConfigurationError,
    ScopeValidationError,
)
from .models import (
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
from .policy import DEFAULT_TRADE_SEQUENCES, ScopePolicy, TradeSequence
from .rule_engine import RuleEngine, ScopeRule
from .snapshot import ValidationSnapshot
from .storage import CatalogStorage, InMemoryCatalogStorage

__all__ = [
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
    # Catalog, Snapshot & Storage
    "CatalogIndex",
    "CatalogStorage",
    "InMemoryCatalogStorage",
    "ValidationSnapshot",
    # Policy
    "DEFAULT_TRADE_SEQUENCES",
    "ScopePolicy",
    "TradeSequence",
    # Rule Engine
    "RuleEngine",
    "ScopeRule",
    # Errors
    "CatalogUnavailableError",
    "PolicyConfigurationError",
    "ScopeValidationError",
]
