"""
Exceptions raised by the Scope Validation Engine.

Domain problems with a scope are reported as ValidationIssue data, never
raised. These exceptions cover infrastructure and configuration failures.
"""


class ScopeValidationError(Exception):
    """Base class for all engine errors."""


class CatalogUnavailableError(ScopeValidationError):
    """The catalog listing could not be fetched from storage."""


class PolicyConfigurationError(ScopeValidationError):
    """A policy file could not be read or failed validation."""
