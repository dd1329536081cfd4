"""Exception hierarchy for the battle roster engine.

Roster operations report ordinary failures through return values
(``None``, ``False`` or a silent no-op). The exceptions below are reserved
for broken contracts and for bad data crossing into the core. All of them
inherit from BattleRosterError, so a UI boundary can catch one type.

Example:
    >>> from battle_roster.core.exceptions import InvalidRosterStateError
    >>> raise InvalidRosterStateError("Updater changed id", kind="adversary")
"""

from __future__ import annotations

from typing import Any


class BattleRosterError(Exception):
    """Base exception for all battle roster errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Roster Domain Exceptions
# =============================================================================


class RosterError(BattleRosterError):
    """Base exception for roster store and undo engine faults."""


class InvalidRosterStateError(RosterError):
    """Raised when a mutation would break a roster invariant.

    The typical cause is an updater that changes the ``id`` or ``kind`` of
    the tracker it was handed.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: str | None = None,
        tracker_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the offending tracker's identity.

        Args:
            message: Human-readable error description.
            kind: Tracker kind the mutation targeted.
            tracker_id: Identifier of the tracker being mutated.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if kind:
            combined_details["kind"] = kind
        if tracker_id:
            combined_details["tracker_id"] = tracker_id
        super().__init__(message, details=combined_details)


class DiceRollError(RosterError):
    """Raised when an adversary roll uses an expression d20 cannot parse."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(BattleRosterError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(BattleRosterError):
    """Raised when external session data fails validation.

    This wraps pydantic's own ValidationError when a saved session is
    loaded back into the roster.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


__all__ = [
    "BattleRosterError",
    "RosterError",
    "InvalidRosterStateError",
    "DiceRollError",
    "ConfigurationError",
    "ValidationError",
]
