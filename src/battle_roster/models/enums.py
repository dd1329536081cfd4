"""Enumerations shared by the roster models."""

from __future__ import annotations

from enum import StrEnum


class TrackerKind(StrEnum):
    """Discriminator of the three combat participant kinds."""

    CHARACTER = "character"
    ADVERSARY = "adversary"
    ENVIRONMENT = "environment"


class RollKind(StrEnum):
    """Kinds of rolls kept in the roll history."""

    ATTACK = "attack"
    DAMAGE = "damage"


class RosterTab(StrEnum):
    """Roster list tab shown in the UI."""

    CHARACTERS = "characters"
    ADVERSARIES = "adversaries"
    ENVIRONMENTS = "environments"


class DetailTab(StrEnum):
    """Detail panel tab shown in the UI."""

    QUICK = "quick"
    DETAILS = "details"


__all__ = [
    "TrackerKind",
    "RollKind",
    "RosterTab",
    "DetailTab",
]
