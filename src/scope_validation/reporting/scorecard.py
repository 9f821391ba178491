"""
Scope Validation Scoring and Reporting Module.
Turns validation issues into a scored result and formats it for output.
"""

import json
from collections.abc import Iterable
from typing import Any

from ..core.models import (
    IssueSeverity,
    ValidationIssue,
    ValidationResult,
)
from ..core.policy import ScopePolicy

MAX_SCORE = 100
MIN_SCORE = 0


def compute_score(
    issues: Iterable[ValidationIssue], policy: ScopePolicy | None = None
) -> int:
    """
    Compute the completeness score for a set of issues.

    Starts at 100 and subtracts the policy weight of every issue
    (10 per error, 3 per warning, 1 per suggestion by default).

    Returns:
        Score clamped to [0, 100]
    """
    policy = policy or ScopePolicy()
    score = MAX_SCORE - sum(policy.weight(issue.severity) for issue in issues)
    return max(MIN_SCORE, min(MAX_SCORE, score))


class ValidationResultBuilder:
    """
    Builder for constructing validation results.
    """

    def __init__(self, policy: ScopePolicy | None = None) -> None:
        self.policy = policy or ScopePolicy()
        self._issues: list[ValidationIssue] = []

    def add_issue(self, issue: ValidationIssue) -> "ValidationResultBuilder":
        """Add an issue to the result."""
        self._issues.append(issue)
        return self

    def add_issues(self, issues: Iterable[ValidationIssue]) -> "ValidationResultBuilder":
        """Add multiple issues to the result."""
        self._issues.extend(issues)
        return self

    def build(self) -> ValidationResult:
        """Build and return the final result."""
        by_severity: dict[IssueSeverity, list[ValidationIssue]] = {
            severity: [] for severity in IssueSeverity
        }
        for issue in self._issues:
            by_severity[issue.severity].append(issue)

        errors = by_severity[IssueSeverity.ERROR]
        return ValidationResult(
            valid=len(errors) == 0,
            score=compute_score(self._issues, self.policy),
            errors=errors,
            warnings=by_severity[IssueSeverity.WARNING],
            suggestions=by_severity[IssueSeverity.SUGGESTION],
        )

    def get_formatter(self) -> "ValidationReportFormatter":
        """Get a formatter for the built result."""
        return ValidationReportFormatter(self.build())


class ValidationReportFormatter:
    """
    Formats validation results for various output formats.
    """

    SEVERITY_ICONS = {
        IssueSeverity.ERROR: "❌",
        IssueSeverity.WARNING: "⚠️",
        IssueSeverity.SUGGESTION: "💡",
    }

    SEVERITY_LABELS = {
        IssueSeverity.ERROR: "Errors (blocking)",
        IssueSeverity.WARNING: "Warnings (advisory)",
        IssueSeverity.SUGGESTION: "Suggestions",
    }

    def __init__(self, result: ValidationResult) -> None:
        self.result = result

    def to_text(self, include_details: bool = True) -> str:
        """
        Format the result as a plain text report.

        Args:
            include_details: Whether to list individual issues

        Returns:
            Formatted text report
        """
        lines: list[str] = []

        lines.append("=" * 70)
        lines.append("SCOPE VALIDATION REPORT")
        lines.append("=" * 70)
        lines.append("")
        lines.append(f"Status: {'VALID' if self.result.valid else 'INVALID'}")
        lines.append(f"Completeness Score: {self.result.score}/100")
        lines.append(f"  - Errors: {len(self.result.errors)}")
        lines.append(f"  - Warnings: {len(self.result.warnings)}")
        lines.append(f"  - Suggestions: {len(self.result.suggestions)}")
        lines.append("")

        if include_details:
            sections = [
                (IssueSeverity.ERROR, self.result.errors),
                (IssueSeverity.WARNING, self.result.warnings),
                (IssueSeverity.SUGGESTION, self.result.suggestions),
            ]
            for severity, issues in sections:
                if not issues:
                    continue
                lines.append("-" * 70)
                lines.append(self.SEVERITY_LABELS[severity].upper())
                lines.append("-" * 70)
                for issue in issues:
                    lines.append(
                        f"{self.SEVERITY_ICONS[severity]} [{issue.category.value}] {issue.message}"
                    )
                lines.append("")

        lines.append("=" * 70)
        lines.append("END OF REPORT")
        lines.append("=" * 70)

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Dictionary form with camelCase keys; unset optional fields are omitted."""
        return self.result.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self, indent: int = 2) -> str:
        """JSON form of to_dict()."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def print_summary(self) -> None:
        """Print a brief summary to stdout."""
        print(self.to_text(include_details=False))

    def print_full(self) -> None:
        """Print the full report to stdout."""
        print(self.to_text(include_details=True))
