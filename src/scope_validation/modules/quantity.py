"""
Quantity Reasonableness Module.
Flags missing or non-positive quantities and implausible measurements.
"""

from ..core.models import IssueCategory, IssueSeverity, ValidationIssue
from ..core.rule_engine import RuleEngine, ScopeRule
from ..core.snapshot import ValidationSnapshot


class QuantityValidator:
    """
    Validates scope item quantities. The invalid-quantity and outlier
    checks are independent and can both fire on one item.
    """

    def __init__(self, rule_engine: RuleEngine | None = None) -> None:
        self.engine = rule_engine or RuleEngine()
        self._register_rules()

    def _register_rules(self) -> None:
        """Register all quantity rules."""
        self.engine.add_rule(
            ScopeRule(
                rule_id="SCP-005",
                name="Invalid Quantity",
                description="Flag active items with an absent, zero or negative quantity",
                category=IssueCategory.INVALID_QUANTITY,
                severity=IssueSeverity.ERROR,
                evaluator=self._validate_invalid_quantity,
            )
        )

        self.engine.add_rule(
            ScopeRule(
                rule_id="SCP-006",
                name="Quantity Outlier",
                description="Flag square-foot quantities above the outlier threshold",
                category=IssueCategory.QUANTITY_OUTLIER,
                severity=IssueSeverity.WARNING,
                evaluator=self._validate_quantity_outlier,
            )
        )

    def _validate_invalid_quantity(
        self, snapshot: ValidationSnapshot
    ) -> list[ValidationIssue]:
        rule = self.engine.get_rule("SCP-005")
        return [
            self.engine.create_issue(
                rule,
                message=f'"{item.description}" has invalid quantity: {item.quantity}',
                room_id=item.room_id,
                scope_item_id=item.id,
            )
            for item in snapshot.active_items
            if item.quantity is None or not item.quantity > 0
        ]

    def _validate_quantity_outlier(
        self, snapshot: ValidationSnapshot
    ) -> list[ValidationIssue]:
        """Likely a unit or entry error rather than a true measurement."""
        rule = self.engine.get_rule("SCP-006")
        policy = snapshot.policy
        return [
            self.engine.create_issue(
                rule,
                message=(
                    f'"{item.description}" has unusually large quantity: '
                    f"{item.quantity:,.0f} {item.unit}. Verify this is correct."
                ),
                room_id=item.room_id,
                scope_item_id=item.id,
            )
            for item in snapshot.active_items
            if item.unit == policy.outlier_unit
            and item.quantity is not None
            and item.quantity > policy.outlier_threshold
        ]

    def validate(self, snapshot: ValidationSnapshot) -> list[ValidationIssue]:
        """Run all quantity validations on a snapshot."""
        return self.engine.execute_all(snapshot)
