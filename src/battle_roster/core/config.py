"""Configuration management for the battle roster engine.

Settings are loaded with pydantic-settings from environment variables and
an optional ``.env`` file. The roster caps are plain UX tuning values, so
every one of them can be overridden without touching code.

Example:
    >>> from battle_roster.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.roster.max_undo_depth
    50

Environment Variables:
    BATTLE_ROSTER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    BATTLE_ROSTER_LOG_JSON: Emit JSON logs instead of console output
    BATTLE_ROSTER_ROSTER_MAX_UNDO_DEPTH: Undo/redo stack depth
    BATTLE_ROSTER_ROSTER_ROLL_HISTORY_LIMIT: Number of rolls kept
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from battle_roster.core import constants
from battle_roster.core.exceptions import ConfigurationError


class RosterSettings(BaseSettings):
    """Tuning values for the roster store and undo engine.

    Attributes:
        max_undo_depth: Entries kept on each undo/redo stack.
        recent_spotlight_limit: Length of the deduplicated recent spotlight list.
        spotlight_timeline_limit: Length of the spotlight timeline.
        roll_history_limit: Number of roll records kept.
        default_character_hp: HP fallback for unparseable drafts.
        default_character_stress: Stress fallback for unparseable drafts.
        default_character_evasion: Evasion fallback for unparseable drafts.
        starting_round: Round number of a fresh encounter.
        default_max_fear: Fear pool ceiling, or None for no ceiling.
    """

    model_config = SettingsConfigDict(
        env_prefix="BATTLE_ROSTER_ROSTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_undo_depth: int = Field(
        default=constants.MAX_UNDO_DEPTH,
        ge=1,
        le=1000,
        description="Undo/redo stack depth",
    )
    recent_spotlight_limit: int = Field(
        default=constants.RECENT_SPOTLIGHT_LIMIT,
        ge=1,
        description="Recent spotlight list length",
    )
    spotlight_timeline_limit: int = Field(
        default=constants.SPOTLIGHT_TIMELINE_LIMIT,
        ge=1,
        description="Spotlight timeline length",
    )
    roll_history_limit: int = Field(
        default=constants.ROLL_HISTORY_LIMIT,
        ge=1,
        description="Roll history length",
    )
    default_character_hp: int = Field(
        default=constants.DEFAULT_CHARACTER_HP,
        ge=0,
        description="HP fallback for character drafts",
    )
    default_character_stress: int = Field(
        default=constants.DEFAULT_CHARACTER_STRESS,
        ge=0,
        description="Stress fallback for character drafts",
    )
    default_character_evasion: int = Field(
        default=constants.DEFAULT_CHARACTER_EVASION,
        ge=0,
        description="Evasion fallback for character drafts",
    )
    starting_round: int = Field(
        default=constants.STARTING_ROUND,
        description="Round number of a fresh encounter",
    )
    default_max_fear: int | None = Field(
        default=constants.DEFAULT_MAX_FEAR,
        ge=0,
        description="Fear pool ceiling",
    )

    @model_validator(mode="after")
    def validate_limits(self) -> "RosterSettings":
        """Reject limit combinations that cannot both hold.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If the recent list outgrows the timeline or
                the starting round is below 1.
        """
        if self.recent_spotlight_limit > self.spotlight_timeline_limit:
            raise ConfigurationError(
                f"recent_spotlight_limit ({self.recent_spotlight_limit}) must not exceed "
                f"spotlight_timeline_limit ({self.spotlight_timeline_limit})",
                config_key="recent_spotlight_limit",
            )
        if self.starting_round < 1:
            raise ConfigurationError(
                f"starting_round ({self.starting_round}) must be at least 1",
                config_key="starting_round",
            )
        return self


class Settings(BaseSettings):
    """Main application settings.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        log_json: Render logs as JSON.
        roster: Roster store and undo engine settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="BATTLE_ROSTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Battle Roster",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON",
    )

    roster: RosterSettings = Field(default_factory=RosterSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "RosterSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
