"""
Damage Coverage Module.
Checks that documented damage translates into scope of work.
"""

from ..core.models import IssueCategory, IssueSeverity, ValidationIssue
from ..core.rule_engine import RuleEngine, ScopeRule
from ..core.snapshot import ValidationSnapshot


class DamageCoverageValidator:
    """
    Validates that rooms with damage carry scope items and that each
    damage observation is linked to at least one scope item.
    """

    def __init__(self, rule_engine: RuleEngine | None = None) -> None:
        self.engine = rule_engine or RuleEngine()
        self._register_rules()

    def _register_rules(self) -> None:
        """Register all damage coverage rules."""
        self.engine.add_rule(
            ScopeRule(
                rule_id="SCP-001",
                name="Missing Scope for Damage",
                description="Flag rooms with damage observations but no active scope items",
                category=IssueCategory.MISSING_SCOPE,
                severity=IssueSeverity.ERROR,
                evaluator=self._validate_missing_scope,
            )
        )

        # Weaker than SCP-001: a room-level item may cover the damage
        self.engine.add_rule(
            ScopeRule(
                rule_id="SCP-002",
                name="Unlinked Damage",
                description="Flag damage observations no active scope item references",
                category=IssueCategory.UNLINKED_DAMAGE,
                severity=IssueSeverity.WARNING,
                evaluator=self._validate_unlinked_damage,
            )
        )

    def _validate_missing_scope(
        self, snapshot: ValidationSnapshot
    ) -> list[ValidationIssue]:
        """One error per damaged room without active scope."""
        rule = self.engine.get_rule("SCP-001")
        issues: list[ValidationIssue] = []

        for room in snapshot.rooms:
            room_damages = snapshot.damages_in_room(room.id)
            if room_damages and not snapshot.active_items_in_room(room.id):
                issues.append(
                    self.engine.create_issue(
                        rule,
                        message=(
                            f'Room "{room.name}" has {len(room_damages)} damage '
                            "observation(s) but no scope items. Run generate_scope "
                            "or add items manually."
                        ),
                        room_id=room.id,
                    )
                )

        return issues

    def _validate_unlinked_damage(
        self, snapshot: ValidationSnapshot
    ) -> list[ValidationIssue]:
        """One warning per damage with no active back-reference."""
        rule = self.engine.get_rule("SCP-002")
        linked_ids = {
            item.damage_id
            for item in snapshot.active_items
            if item.damage_id is not None
        }

        return [
            self.engine.create_issue(
                rule,
                message=(
                    f'Damage "{damage.description}" in '
                    f'"{snapshot.room_name(damage.room_id)}" has no linked scope items.'
                ),
                room_id=damage.room_id,
            )
            for damage in snapshot.damages
            if damage.id not in linked_ids
        ]

    def validate(self, snapshot: ValidationSnapshot) -> list[ValidationIssue]:
        """Run all damage coverage validations on a snapshot."""
        return self.engine.execute_all(snapshot)
