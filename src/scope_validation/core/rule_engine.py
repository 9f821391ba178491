"""
Dictionary-based Rule Engine for the Scope Validation Engine.
Allows easy addition and management of scope rules.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .models import IssueCategory, IssueSeverity, ValidationIssue
from .snapshot import ValidationSnapshot

logger = logging.getLogger(__name__)

Evaluator = Callable[[ValidationSnapshot], list[ValidationIssue]]


@dataclass
class ScopeRule:
    """Definition of a scope validation rule."""

    rule_id: str
    name: str
    description: str
    category: IssueCategory
    severity: IssueSeverity
    evaluator: Evaluator | None = None
    enabled: bool = True
    metadata: dict[str, Any] = field(default_factory=dict)


class RuleEngine:
    """
    Dictionary-based rule engine for managing and executing scope rules.

    Rules run in registration order. Each evaluator is a pure function of
    the snapshot, so rules never see each other's output.
    """

    def __init__(self) -> None:
        self._rules: dict[str, ScopeRule] = {}
        self._category_index: dict[IssueCategory, list[str]] = {
            cat: [] for cat in IssueCategory
        }

    def add_rule(self, rule: ScopeRule) -> None:
        """Add a rule to the engine."""
        if rule.rule_id in self._rules:
            self.remove_rule(rule.rule_id)
        self._rules[rule.rule_id] = rule
        self._category_index[rule.category].append(rule.rule_id)

    def remove_rule(self, rule_id: str) -> bool:
        """Remove a rule from the engine."""
        if rule_id not in self._rules:
            return False

        rule = self._rules[rule_id]
        self._category_index[rule.category].remove(rule_id)
        del self._rules[rule_id]
        return True

    def get_rule(self, rule_id: str) -> ScopeRule | None:
        """Get a specific rule by ID."""
        return self._rules.get(rule_id)

    def get_rules_by_category(self, category: IssueCategory) -> list[ScopeRule]:
        """Get all enabled rules in a specific category."""
        return [
            self._rules[rule_id]
            for rule_id in self._category_index[category]
            if self._rules[rule_id].enabled
        ]

    def enable_rule(self, rule_id: str) -> bool:
        """Enable a specific rule."""
        if rule_id in self._rules:
            self._rules[rule_id].enabled = True
            return True
        return False

    def disable_rule(self, rule_id: str) -> bool:
        """Disable a specific rule."""
        if rule_id in self._rules:
            self._rules[rule_id].enabled = False
            return True
        return False

    def create_issue(
        self,
        rule: ScopeRule,
        message: str,
        room_id: int | None = None,
        scope_item_id: int | None = None,
        code: str | None = None,
    ) -> ValidationIssue:
        """Create a standardized issue from a rule."""
        return ValidationIssue(
            category=rule.category,
            severity=rule.severity,
            message=message,
            room_id=room_id,
            scope_item_id=scope_item_id,
            code=code,
        )

    def execute_rule(
        self, rule: ScopeRule, snapshot: ValidationSnapshot
    ) -> list[ValidationIssue]:
        """Execute a single rule against a snapshot."""
        if not rule.enabled or rule.evaluator is None:
            return []

        issues = rule.evaluator(snapshot)
        logger.debug("Rule %s produced %d issue(s)", rule.rule_id, len(issues))
        return issues

    def execute_all(self, snapshot: ValidationSnapshot) -> list[ValidationIssue]:
        """Execute all enabled rules against a snapshot."""
        issues: list[ValidationIssue] = []

        for rule in self._rules.values():
            if rule.enabled:
                issues.extend(self.execute_rule(rule, snapshot))

        return issues

    def execute_category(
        self, category: IssueCategory, snapshot: ValidationSnapshot
    ) -> list[ValidationIssue]:
        """Execute all rules in a specific category."""
        issues: list[ValidationIssue] = []

        for rule in self.get_rules_by_category(category):
            issues.extend(self.execute_rule(rule, snapshot))

        return issues

    def list_rules(self) -> list[dict[str, Any]]:
        """List all rules with their status."""
        return [
            {
                "rule_id": rule.rule_id,
                "name": rule.name,
                "category": rule.category.value,
                "severity": rule.severity.value,
                "enabled": rule.enabled,
                "description": rule.description,
            }
            for rule in self._rules.values()
        ]
