"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        BattleRosterError: Base exception for all application errors.
        RosterError: Roster store and undo engine faults.
        InvalidRosterStateError: A mutation would break a roster invariant.
        DiceRollError: An adversary roll used an unrollable expression.
        ConfigurationError: Configuration-related errors.
        ValidationError: External session data failed validation.

    Configuration:
        Settings: Main application settings class.
        RosterSettings: Roster caps and draft fallbacks.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from battle_roster.core.config import (
    RosterSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from battle_roster.core.exceptions import (
    BattleRosterError,
    ConfigurationError,
    DiceRollError,
    InvalidRosterStateError,
    RosterError,
    ValidationError,
)
from battle_roster.core.logging import (
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "BattleRosterError",
    "RosterError",
    "InvalidRosterStateError",
    "DiceRollError",
    "ConfigurationError",
    "ValidationError",
    # Configuration
    "Settings",
    "RosterSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
]
