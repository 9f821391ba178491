"""
Water Classification Module.
Category 3 (black water) losses need demolition and mitigation in scope;
Class 4 losses (structural/masonry) usually need professional drying.
"""

from ..core.models import IssueCategory, IssueSeverity, ValidationIssue, WaterCategory
from ..core.rule_engine import RuleEngine, ScopeRule
from ..core.snapshot import ValidationSnapshot


class WaterClassificationValidator:
    """
    Validates the scope against the session's water classification.
    Emits nothing when no classification was recorded.
    """

    # (trade code, message) required for Category 3 losses
    CATEGORY_3_REQUIRED_TRADES: list[tuple[str, str]] = [
        ("DEM", "Category 3 black water damage requires Demolition (DEM) in scope"),
        ("MIT", "Category 3 water damage requires Mitigation Equipment (MIT) for safe handling"),
    ]

    def __init__(self, rule_engine: RuleEngine | None = None) -> None:
        self.engine = rule_engine or RuleEngine()
        self._register_rules()

    def _register_rules(self) -> None:
        """Register all water classification rules."""
        self.engine.add_rule(
            ScopeRule(
                rule_id="WTR-001",
                name="Category 3 Required Trades",
                description="Category 3 water requires demolition and mitigation",
                category=IssueCategory.WATER_CLASSIFICATION,
                severity=IssueSeverity.ERROR,
                evaluator=self._validate_category_3,
            )
        )

        self.engine.add_rule(
            ScopeRule(
                rule_id="WTR-002",
                name="Class 4 Drying",
                description="Class 4 water typically requires professional drying",
                category=IssueCategory.WATER_CLASSIFICATION,
                severity=IssueSeverity.WARNING,
                evaluator=self._validate_class_4,
            )
        )

    def _validate_category_3(
        self, snapshot: ValidationSnapshot
    ) -> list[ValidationIssue]:
        classification = snapshot.water_classification
        if classification is None or classification.category != WaterCategory.CATEGORY_3:
            return []

        rule = self.engine.get_rule("WTR-001")
        return [
            self.engine.create_issue(rule, message=message, code=trade)
            for trade, message in self.CATEGORY_3_REQUIRED_TRADES
            if trade not in snapshot.active_trade_codes
        ]

    def _validate_class_4(
        self, snapshot: ValidationSnapshot
    ) -> list[ValidationIssue]:
        classification = snapshot.water_classification
        if classification is None or classification.water_class != 4:
            return []
        if "DRY" in snapshot.active_trade_codes:
            return []

        rule = self.engine.get_rule("WTR-002")
        return [
            self.engine.create_issue(
                rule,
                message=(
                    "Class 4 water damage (structural/masonry) typically requires "
                    "professional Drying (DRY)"
                ),
                code="DRY",
            )
        ]

    def validate(self, snapshot: ValidationSnapshot) -> list[ValidationIssue]:
        """Run all water classification validations on a snapshot."""
        return self.engine.execute_all(snapshot)
