"""
Scope Validation Engine - Main Orchestrator.
Fetches the catalog once and runs all scope validators over one snapshot.
"""

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Protocol

from .config import EngineSettings
from .core.catalog import CatalogIndex
from .core.exceptions import CatalogUnavailableError
from .core.models import (
    DamageObservation,
    Room,
    ScopeItem,
    ValidationIssue,
    ValidationResult,
    WaterClassification,
)
from .core.policy import ScopePolicy
from .core.snapshot import ValidationSnapshot
from .core.storage import CatalogStorage
from .modules.companion import CompanionValidator
from .modules.coverage import CoverageTypeValidator
from .modules.damage import DamageCoverageValidator
from .modules.duplicate import DuplicateItemValidator
from .modules.quantity import QuantityValidator
from .modules.trade_sequence import TradeSequenceValidator
from .modules.water_classification import WaterClassificationValidator
from .reporting.scorecard import ValidationReportFormatter, ValidationResultBuilder

logger = logging.getLogger(__name__)


class Validator(Protocol):
    def validate(self, snapshot: ValidationSnapshot) -> list[ValidationIssue]: ...


class ScopeValidationEngine:
    """
    Main orchestrator for the Scope Validation Engine.

    Each module is an independent validator over the same read-only
    snapshot. Issues are merged in module order, so the output order is
    the same whether modules run sequentially or in a thread pool.
    """

    MODULE_NAMES: dict[str, str] = {
        "damage_coverage": "Damage Coverage",
        "companion": "Companion Items",
        "trade_sequence": "Trade Sequence",
        "quantity": "Quantity Reasonableness",
        "duplicate": "Duplicate Items",
        "coverage_type": "Coverage Type",
        "water_classification": "Water Classification",
    }

    VALIDATOR_CLASSES: dict[str, type] = {
        "damage_coverage": DamageCoverageValidator,
        "companion": CompanionValidator,
        "trade_sequence": TradeSequenceValidator,
        "quantity": QuantityValidator,
        "duplicate": DuplicateItemValidator,
        "coverage_type": CoverageTypeValidator,
        "water_classification": WaterClassificationValidator,
    }

    def __init__(
        self,
        enable_damage_coverage: bool = True,
        enable_companion: bool = True,
        enable_trade_sequence: bool = True,
        enable_quantity: bool = True,
        enable_duplicate: bool = True,
        enable_coverage_type: bool = True,
        enable_water_classification: bool = True,
        policy: ScopePolicy | None = None,
        max_workers: int = 1,
    ) -> None:
        """
        Initialize the Scope Validation Engine.

        Args:
            enable_damage_coverage: Enable missing-scope and unlinked-damage checks
            enable_companion: Enable catalog companion checks
            enable_trade_sequence: Enable trade sequence checks
            enable_quantity: Enable quantity checks
            enable_duplicate: Enable duplicate item checks
            enable_coverage_type: Enable coverage type checks
            enable_water_classification: Enable water classification checks
            policy: Rule data; defaults to the built-in policy
            max_workers: Run modules in a thread pool when greater than 1
        """
        self.enabled: dict[str, bool] = {
            "damage_coverage": enable_damage_coverage,
            "companion": enable_companion,
            "trade_sequence": enable_trade_sequence,
            "quantity": enable_quantity,
            "duplicate": enable_duplicate,
            "coverage_type": enable_coverage_type,
            "water_classification": enable_water_classification,
        }
        self.policy = policy or ScopePolicy()
        self.max_workers = max(1, max_workers)

        # Validators are created lazily
        self._validators: dict[str, Validator] = {}

    @classmethod
    def from_settings(cls, settings: EngineSettings | None = None) -> "ScopeValidationEngine":
        """Create an engine from environment settings."""
        settings = settings or EngineSettings()
        return cls(policy=settings.load_policy(), max_workers=settings.max_workers)

    def get_validator(self, module: str) -> Validator:
        """Get or create the validator for a module."""
        if module not in self._validators:
            self._validators[module] = self.VALIDATOR_CLASSES[module]()
        return self._validators[module]

    def fetch_catalog(self, storage: CatalogStorage) -> CatalogIndex:
        """
        Fetch the full catalog listing and index it.

        Raises:
            CatalogUnavailableError: If the storage call fails
        """
        try:
            entries = storage.list_catalog_entries()
        except Exception as e:
            logger.error("Catalog fetch failed: %s", e)
            raise CatalogUnavailableError(f"Could not fetch catalog: {e}") from e

        catalog = CatalogIndex(entries)
        logger.debug("Indexed %d catalog entries", len(catalog))
        return catalog

    def validate(
        self,
        storage: CatalogStorage,
        session_id: int | str,
        scope_items: Iterable[ScopeItem | dict[str, Any]],
        rooms: Iterable[Room | dict[str, Any]],
        damages: Iterable[DamageObservation | dict[str, Any]],
        water_classification: WaterClassification | dict[str, Any] | None = None,
    ) -> ValidationResult:
        """
        Validate a session's scope for completeness and consistency.

        Args:
            storage: Collaborator providing the catalog listing
            session_id: Inspection session the snapshot belongs to
            scope_items: All scope items of the session
            rooms: All rooms of the session
            damages: All damage observations of the session
            water_classification: Optional water loss classification

        Returns:
            Scored validation result

        Raises:
            CatalogUnavailableError: If the catalog cannot be fetched
        """
        catalog = self.fetch_catalog(storage)
        snapshot = ValidationSnapshot.build(
            scope_items=scope_items,
            rooms=rooms,
            damages=damages,
            catalog=catalog,
            policy=self.policy,
            water_classification=water_classification,
        )
        result = self.validate_snapshot(snapshot)

        logger.info(
            "Validated scope for session %s: score=%d valid=%s "
            "(%d errors, %d warnings, %d suggestions)",
            session_id,
            result.score,
            result.valid,
            len(result.errors),
            len(result.warnings),
            len(result.suggestions),
        )
        return result

    def validate_snapshot(self, snapshot: ValidationSnapshot) -> ValidationResult:
        """Run all enabled modules over an already built snapshot."""
        modules = self.get_enabled_modules(keys=True)
        validators = [self.get_validator(module) for module in modules]

        if self.max_workers > 1 and len(validators) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                per_module = list(executor.map(lambda v: v.validate(snapshot), validators))
        else:
            per_module = [validator.validate(snapshot) for validator in validators]

        builder = ValidationResultBuilder(snapshot.policy)
        for module, issues in zip(modules, per_module):
            logger.debug("Module %s produced %d issue(s)", module, len(issues))
            builder.add_issues(issues)

        return builder.build()

    def validate_with_formatter(
        self,
        storage: CatalogStorage,
        session_id: int | str,
        scope_items: Iterable[ScopeItem | dict[str, Any]],
        rooms: Iterable[Room | dict[str, Any]],
        damages: Iterable[DamageObservation | dict[str, Any]],
        water_classification: WaterClassification | dict[str, Any] | None = None,
    ) -> ValidationReportFormatter:
        """Validate and return a formatter for output."""
        result = self.validate(
            storage, session_id, scope_items, rooms, damages, water_classification
        )
        return ValidationReportFormatter(result)

    def get_enabled_modules(self, keys: bool = False) -> list[str]:
        """Get list of enabled modules, as display names unless keys is set."""
        enabled = [module for module, on in self.enabled.items() if on]
        if keys:
            return enabled
        return [self.MODULE_NAMES[module] for module in enabled]

    def configure(
        self,
        enable_damage_coverage: bool | None = None,
        enable_companion: bool | None = None,
        enable_trade_sequence: bool | None = None,
        enable_quantity: bool | None = None,
        enable_duplicate: bool | None = None,
        enable_coverage_type: bool | None = None,
        enable_water_classification: bool | None = None,
        max_workers: int | None = None,
    ) -> "ScopeValidationEngine":
        """
        Configure the engine settings.

        Returns:
            Self for method chaining
        """
        switches = {
            "damage_coverage": enable_damage_coverage,
            "companion": enable_companion,
            "trade_sequence": enable_trade_sequence,
            "quantity": enable_quantity,
            "duplicate": enable_duplicate,
            "coverage_type": enable_coverage_type,
            "water_classification": enable_water_classification,
        }
        for module, value in switches.items():
            if value is not None:
                self.enabled[module] = value
        if max_workers is not None:
            self.max_workers = max(1, max_workers)
        return self


# Convenience function for quick validation runs
def validate_scope_completeness(
    storage: CatalogStorage,
    session_id: int | str,
    scope_items: Iterable[ScopeItem | dict[str, Any]],
    rooms: Iterable[Room | dict[str, Any]],
    damages: Iterable[DamageObservation | dict[str, Any]],
    water_classification: WaterClassification | dict[str, Any] | None = None,
    policy: ScopePolicy | None = None,
) -> ValidationResult:
    """
    Convenience function for one-off validation runs.

    Args:
        storage: Collaborator providing the catalog listing
        session_id: Inspection session the snapshot belongs to
        scope_items: All scope items of the session
        rooms: All rooms of the session
        damages: All damage observations of the session
        water_classification: Optional water loss classification
        policy: Optional rule data override

    Returns:
        Scored validation result
    """
    engine = ScopeValidationEngine(policy=policy)
    return engine.validate(
        storage, session_id, scope_items, rooms, damages, water_classification
    )
