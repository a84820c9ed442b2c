"""
Custom exceptions for the risk scoring engine.

All domain errors inherit from RiskScoringError so the HTTP layer can map
them in one place (see ``risk_scoring.main``).

Example:
    try:
        builder.create_with_data(session, config, impacts, probabilities)
    except ConfigurationValidationError as e:
        logger.warning(f"Rejected configuration: {e.errors}")
"""

from typing import Optional


class RiskScoringError(Exception):
    """
    Base exception class for all risk scoring errors.

    Attributes:
        message: Human-readable description of the error.
        details: Optional additional context for debugging.
    """

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation with optional details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationValidationError(RiskScoringError):
    """
    Raised when configuration input breaks a domain rule.

    Always raised before anything is written.

    Attributes:
        errors: One message per violated rule.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(
            "Invalid risk configuration",
            details="; ".join(self.errors) if self.errors else None,
        )


class EmptyInputError(RiskScoringError):
    """Raised when an aggregation receives no scores at all."""

    def __init__(self, message: str = "Cannot aggregate an empty list of scores") -> None:
        super().__init__(message)


class ConfigurationNotFoundError(RiskScoringError):
    """
    Raised when no configuration exists for the organization.

    Attributes:
        organization_id: Tenant that was queried.
    """

    def __init__(self, organization_id: int, details: Optional[str] = None) -> None:
        self.organization_id = organization_id
        super().__init__(
            f"No risk configuration found for organization {organization_id}",
            details=details,
        )


class ConfigurationPersistenceError(RiskScoringError):
    """Raised when a configuration transaction is aborted and rolled back."""
