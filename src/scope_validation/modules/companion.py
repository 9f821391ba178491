"""
Companion Item Module.
Audits repair-trade dependency chains declared in the catalog
(e.g. texture-match paint requires a drywall patch in the same room).
"""

from collections.abc import Iterable
from typing import Any

from ..core.models import IssueCategory, IssueSeverity, ScopeItem, ValidationIssue
from ..core.rule_engine import RuleEngine, ScopeRule
from ..core.snapshot import ValidationSnapshot

# Companion quantity above this multiple of its primary is suspicious
MAX_COMPANION_RATIO = 10


class CompanionValidator:
    """
    Validates that every active scope item has the companion items its
    catalog entry requires in the same room.
    """

    def __init__(self, rule_engine: RuleEngine | None = None) -> None:
        self.engine = rule_engine or RuleEngine()
        self._register_rules()

    def _register_rules(self) -> None:
        """Register all companion validation rules."""
        self.engine.add_rule(
            ScopeRule(
                rule_id="SCP-003",
                name="Missing Companion Item",
                description="Flag items whose catalog-required companions are absent from the room",
                category=IssueCategory.MISSING_COMPANION,
                severity=IssueSeverity.ERROR,
                evaluator=self._validate_missing_companions,
            )
        )

    def _validate_missing_companions(
        self, snapshot: ValidationSnapshot
    ) -> list[ValidationIssue]:
        """Check catalog `requires` rules against codes active in each room."""
        rule = self.engine.get_rule("SCP-003")
        issues: list[ValidationIssue] = []
        codes_by_room: dict[int | None, set[str | None]] = {}

        for item in snapshot.active_items:
            required = snapshot.catalog.requires(item.catalog_code)
            if not required:
                continue

            if item.room_id not in codes_by_room:
                codes_by_room[item.room_id] = {
                    s.catalog_code for s in snapshot.active_items_in_room(item.room_id)
                }
            room_codes = codes_by_room[item.room_id]

            for code in required:
                if code in room_codes:
                    continue
                issues.append(
                    self.engine.create_issue(
                        rule,
                        message=(
                            f'"{item.description}" requires '
                            f'"{snapshot.catalog.describe(code)}" but it\'s not in '
                            "scope for this room."
                        ),
                        room_id=item.room_id,
                        scope_item_id=item.id,
                        code=code,
                    )
                )

        return issues

    def validate(self, snapshot: ValidationSnapshot) -> list[ValidationIssue]:
        """Run all companion validations on a snapshot."""
        return self.engine.execute_all(snapshot)


def validate_companions_post_auto_add(
    scope_items: Iterable[ScopeItem | dict[str, Any]],
) -> list[ValidationIssue]:
    """
    Check auto-added companion items against their primary items.

    Companions are the items carrying a parent_scope_item_id.

    Args:
        scope_items: All scope items of the session

    Returns:
        Issues for orphaned, empty or disproportionate companions
    """
    items = [
        item if isinstance(item, ScopeItem) else ScopeItem.model_validate(item)
        for item in scope_items
    ]
    by_id = {item.id: item for item in items}
    issues: list[ValidationIssue] = []

    for companion in items:
        if companion.parent_scope_item_id is None:
            continue

        primary = by_id.get(companion.parent_scope_item_id)
        if primary is None:
            issues.append(
                ValidationIssue(
                    category=IssueCategory.COMPANION,
                    severity=IssueSeverity.ERROR,
                    message=(
                        "Companion references non-existent primary item "
                        f"{companion.parent_scope_item_id}"
                    ),
                    scope_item_id=companion.id,
                )
            )
        if (companion.quantity or 0) <= 0:
            issues.append(
                ValidationIssue(
                    category=IssueCategory.COMPANION,
                    severity=IssueSeverity.WARNING,
                    message="Companion item has quantity <= 0",
                    scope_item_id=companion.id,
                )
            )

        if primary is None:
            continue
        if _is_disproportionate(companion.quantity or 0, primary.quantity):
            issues.append(
                ValidationIssue(
                    category=IssueCategory.COMPANION_QUANTITY,
                    severity=IssueSeverity.WARNING,
                    message=(
                        f"Companion quantity ({companion.quantity}) is "
                        f"disproportionate to primary ({primary.quantity})"
                    ),
                    scope_item_id=companion.id,
                )
            )

    return issues


def _is_disproportionate(quantity: float, primary_quantity: float | None) -> bool:
    """Companion quantity exceeds MAX_COMPANION_RATIO times its primary."""
    if primary_quantity is None:
        primary_quantity = 1
    if primary_quantity == 0:
        return quantity > 0
    return quantity / primary_quantity > MAX_COMPANION_RATIO
