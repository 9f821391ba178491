"""
Trade Sequence Module.
Certain trades imply prerequisite or follow-up work in the same room
(drywall implies prior demolition and subsequent paint).
"""

from ..core.models import IssueCategory, IssueSeverity, ValidationIssue
from ..core.rule_engine import RuleEngine, ScopeRule
from ..core.snapshot import ValidationSnapshot


class TradeSequenceValidator:
    """
    Validates trade sequence completeness per room using the sequence
    table from the snapshot's policy.
    """

    def __init__(self, rule_engine: RuleEngine | None = None) -> None:
        self.engine = rule_engine or RuleEngine()
        self._register_rules()

    def _register_rules(self) -> None:
        """Register all trade sequence rules."""
        self.engine.add_rule(
            ScopeRule(
                rule_id="SCP-004",
                name="Trade Sequence Completeness",
                description="Flag rooms where a trigger trade is present but its sequence is incomplete",
                category=IssueCategory.TRADE_SEQUENCE,
                severity=IssueSeverity.WARNING,
                evaluator=self._validate_trade_sequences,
            )
        )

    def _validate_trade_sequences(
        self, snapshot: ValidationSnapshot
    ) -> list[ValidationIssue]:
        """Check every configured sequence against each room's trades."""
        rule = self.engine.get_rule("SCP-004")
        issues: list[ValidationIssue] = []

        # Rooms in order of first appearance among active items
        trades_by_room: dict[int, set[str]] = {}
        for item in snapshot.active_items:
            if item.room_id is None:
                continue
            trades_by_room.setdefault(item.room_id, set()).add(item.trade_code)

        for room_id, trades in trades_by_room.items():
            room_name = snapshot.room_name(room_id)
            for sequence in snapshot.policy.trade_sequences:
                if sequence.trigger not in trades:
                    continue
                for missing in sequence.missing_trades(trades):
                    issues.append(
                        self.engine.create_issue(
                            rule,
                            message=(
                                f'Room "{room_name}": {sequence.name} sequence '
                                f"incomplete - has {sequence.trigger} but missing {missing}."
                            ),
                            room_id=room_id,
                        )
                    )

        return issues

    def validate(self, snapshot: ValidationSnapshot) -> list[ValidationIssue]:
        """Run all trade sequence validations on a snapshot."""
        return self.engine.execute_all(snapshot)
