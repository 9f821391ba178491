"""
Tests for scoring and report formatting.
"""

import json

import pytest

from scope_validation.core.models import IssueCategory, IssueSeverity, ValidationIssue
from scope_validation.core.policy import ScopePolicy
from scope_validation.reporting.scorecard import (
    ValidationReportFormatter,
    ValidationResultBuilder,
    compute_score,
)


def make_issue(severity: IssueSeverity, message: str = "issue") -> ValidationIssue:
    return ValidationIssue(
        category=IssueCategory.DUPLICATE,
        severity=severity,
        message=message,
    )


class TestComputeScore:
    """Tests for compute_score."""

    def test_no_issues(self) -> None:
        assert compute_score([]) == 100

    def test_severity_weights(self) -> None:
        issues = [
            make_issue(IssueSeverity.ERROR),
            make_issue(IssueSeverity.WARNING),
            make_issue(IssueSeverity.SUGGESTION),
        ]
        assert compute_score(issues) == 100 - 10 - 3 - 1

    def test_clamped_at_zero(self) -> None:
        assert compute_score([make_issue(IssueSeverity.ERROR)] * 25) == 0

    @pytest.mark.parametrize("severity", list(IssueSeverity))
    def test_monotonically_non_increasing(self, severity: IssueSeverity) -> None:
        issues: list[ValidationIssue] = []
        previous = compute_score(issues)
        for _ in range(40):
            issues.append(make_issue(severity))
            current = compute_score(issues)
            assert 0 <= current <= previous <= 100
            previous = current

    def test_custom_weights(self) -> None:
        policy = ScopePolicy(severity_weights={"error": 50, "warning": 0, "suggestion": 0})
        issues = [make_issue(IssueSeverity.ERROR), make_issue(IssueSeverity.WARNING)]
        assert compute_score(issues, policy) == 50


class TestValidationResultBuilder:
    """Tests for ValidationResultBuilder."""

    def test_partition_by_severity(self) -> None:
        builder = ValidationResultBuilder()
        builder.add_issue(make_issue(IssueSeverity.WARNING, "w1"))
        builder.add_issues(
            [make_issue(IssueSeverity.SUGGESTION, "s1"), make_issue(IssueSeverity.WARNING, "w2")]
        )
        result = builder.build()

        assert [i.message for i in result.warnings] == ["w1", "w2"]
        assert [i.message for i in result.suggestions] == ["s1"]
        assert result.errors == []

    def test_valid_iff_no_errors(self) -> None:
        warnings_only = ValidationResultBuilder().add_issues(
            [make_issue(IssueSeverity.WARNING)] * 40
        ).build()
        with_error = ValidationResultBuilder().add_issue(
            make_issue(IssueSeverity.ERROR)
        ).build()

        assert warnings_only.valid is True
        assert warnings_only.score == 0
        assert with_error.valid is False
        assert with_error.score == 90


class TestValidationReportFormatter:
    """Tests for ValidationReportFormatter."""

    @pytest.fixture
    def formatter(self) -> ValidationReportFormatter:
        result = (
            ValidationResultBuilder()
            .add_issue(
                ValidationIssue(
                    category=IssueCategory.MISSING_SCOPE,
                    severity=IssueSeverity.ERROR,
                    message='Room "Kitchen" has 1 damage observation(s) but no scope items.',
                    room_id=1,
                )
            )
            .add_issue(make_issue(IssueSeverity.SUGGESTION, "Check coverage"))
            .build()
        )
        return ValidationReportFormatter(result)

    def test_to_text(self, formatter: ValidationReportFormatter) -> None:
        text = formatter.to_text()

        assert "SCOPE VALIDATION REPORT" in text
        assert "Status: INVALID" in text
        assert "Completeness Score: 89/100" in text
        assert "[missing_scope]" in text
        assert "Check coverage" in text

    def test_summary_omits_details(self, formatter: ValidationReportFormatter) -> None:
        text = formatter.to_text(include_details=False)
        assert "Errors: 1" in text
        assert "[missing_scope]" not in text

    def test_to_dict(self, formatter: ValidationReportFormatter) -> None:
        data = formatter.to_dict()

        assert data["valid"] is False
        assert data["score"] == 89
        assert data["errors"][0] == {
            "category": "missing_scope",
            "severity": "error",
            "message": 'Room "Kitchen" has 1 damage observation(s) but no scope items.',
            "roomId": 1,
        }
        assert data["warnings"] == []

    def test_to_json(self, formatter: ValidationReportFormatter) -> None:
        assert json.loads(formatter.to_json()) == formatter.to_dict()
