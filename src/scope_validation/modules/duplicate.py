"""
Duplicate Item Module.
"""

from ..core.models import IssueCategory, IssueSeverity, ValidationIssue
from ..core.rule_engine import RuleEngine, ScopeRule
from ..core.snapshot import ValidationSnapshot


class DuplicateItemValidator:
    """Flags repeated (room, catalog code, activity) combinations."""

    def __init__(self, rule_engine: RuleEngine | None = None) -> None:
        self.engine = rule_engine or RuleEngine()
        self._register_rules()

    def _register_rules(self) -> None:
        self.engine.add_rule(
            ScopeRule(
                rule_id="SCP-007",
                name="Duplicate Item",
                description="Flag second and later occurrences of the same item in a room",
                category=IssueCategory.DUPLICATE,
                severity=IssueSeverity.WARNING,
                evaluator=self._validate_duplicates,
            )
        )

    def _validate_duplicates(
        self, snapshot: ValidationSnapshot
    ) -> list[ValidationIssue]:
        rule = self.engine.get_rule("SCP-007")
        issues: list[ValidationIssue] = []
        seen: set[tuple[int | None, str | None, str | None]] = set()

        for item in snapshot.active_items:
            key = (item.room_id, item.catalog_code, item.activity_type)
            if key in seen:
                issues.append(
                    self.engine.create_issue(
                        rule,
                        message=(
                            f'Duplicate scope item: "{item.description}" '
                            f"({item.catalog_code}) appears multiple times in the same room."
                        ),
                        room_id=item.room_id,
                        scope_item_id=item.id,
                    )
                )
            seen.add(key)

        return issues

    def validate(self, snapshot: ValidationSnapshot) -> list[ValidationIssue]:
        return self.engine.execute_all(snapshot)
