"""
Coverage Type Module.
Checks scope items are billed against the coverage bucket their room's
structure implies (A = main dwelling, B = other structures).
"""

from ..core.models import IssueCategory, IssueSeverity, ValidationIssue
from ..core.rule_engine import RuleEngine, ScopeRule
from ..core.snapshot import ValidationSnapshot


class CoverageTypeValidator:
    """
    Validates coverage type consistency. Mismatches are suggestions only,
    since an adjuster may override coverage assignment on purpose.
    """

    def __init__(self, rule_engine: RuleEngine | None = None) -> None:
        self.engine = rule_engine or RuleEngine()
        self._register_rules()

    def _register_rules(self) -> None:
        """Register all coverage rules."""
        self.engine.add_rule(
            ScopeRule(
                rule_id="SCP-008",
                name="Coverage Type Consistency",
                description="Flag items whose coverage type differs from the room's structure",
                category=IssueCategory.COVERAGE_MISMATCH,
                severity=IssueSeverity.SUGGESTION,
                evaluator=self._validate_coverage,
            )
        )

    def _validate_coverage(
        self, snapshot: ValidationSnapshot
    ) -> list[ValidationIssue]:
        rule = self.engine.get_rule("SCP-008")
        policy = snapshot.policy
        issues: list[ValidationIssue] = []

        for item in snapshot.active_items:
            if item.room_id is None or not item.coverage_type:
                continue
            room = snapshot.rooms_by_id.get(item.room_id)
            if room is None:
                continue

            expected = policy.expected_coverage(room.structure)
            if item.coverage_type != expected.value:
                structure = room.structure or policy.default_structure
                issues.append(
                    self.engine.create_issue(
                        rule,
                        message=(
                            f'"{item.description}" in "{room.name}" ({structure}) has '
                            f"coverage {item.coverage_type} but expected {expected.value}."
                        ),
                        room_id=item.room_id,
                        scope_item_id=item.id,
                    )
                )

        return issues

    def validate(self, snapshot: ValidationSnapshot) -> list[ValidationIssue]:
        """Run all coverage validations on a snapshot."""
        return self.engine.execute_all(snapshot)
