"""
Reporting modules for the Scope Validation Engine.
"""

from .scorecard import ValidationReportFormatter, ValidationResultBuilder, compute_score

__all__ = [
    "ValidationReportFormatter",
    "ValidationResultBuilder",
    "compute_score",
]
