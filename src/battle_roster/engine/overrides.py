"""Effective combat values for adversaries.

An adversary tracker pairs an immutable catalog template (``source``)
with optional per-encounter overrides. The functions here merge the two
into the values the table should use. They are pure: they read a tracker
and never modify it or the roster.

Merge rules:
    attack: per field, override wins, otherwise the template's attack.
    thresholds: per field, override wins. Free-text template thresholds
        that do not parse are returned unchanged. Massive defaults to
        2x severe unless set explicitly.
    features: the override list replaces the template list as a whole.
    difficulty: override wins, otherwise the template's difficulty.

Example:
    >>> values = adversary_effective_values(tracker)
    >>> values.difficulty, values.has_modifications
    (15, True)
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, computed_field

from battle_roster.engine.parsing import parse_modifier, parse_thresholds
from battle_roster.models.trackers import AdversaryTracker, AnyAdversaryFeature


class EffectiveAttack(BaseModel):
    """An adversary's attack after overrides."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(description="Attack name")
    modifier: str | int = Field(description="Modifier as written")
    range: str = Field(description="Range band")
    damage: str = Field(description="Damage expression")

    @computed_field(description="Modifier as an integer")
    @property
    def modifier_value(self) -> int:
        """Numeric modifier, with unicode minus normalized and 0 on bad input."""
        return parse_modifier(self.modifier)


class EffectiveThresholds(BaseModel):
    """Damage thresholds after overrides. Any field may be unset."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    major: int | None = None
    severe: int | None = None
    massive: int | None = None


@dataclass(frozen=True)
class EffectiveAdversaryValues:
    """All effective values of one adversary, with override flags.

    Attributes:
        attack: Effective attack.
        thresholds: Effective thresholds, or the template's free text.
        features: Effective feature list.
        difficulty: Effective difficulty.
        has_attack_override: An attack override is present.
        has_thresholds_override: A thresholds override is present.
        has_features_override: A features override is present.
        has_difficulty_override: A difficulty override is present.
        has_modifications: Any override is present.
    """

    attack: EffectiveAttack
    thresholds: EffectiveThresholds | str
    features: list[AnyAdversaryFeature]
    difficulty: int
    has_attack_override: bool
    has_thresholds_override: bool
    has_features_override: bool
    has_difficulty_override: bool
    has_modifications: bool


def _first_set(override: object | None, fallback: object | None) -> object | None:
    return override if override is not None else fallback


def effective_attack(adversary: AdversaryTracker) -> EffectiveAttack:
    """Merge the attack override onto the template attack field by field."""
    base = adversary.source.attack
    override = adversary.attack_override
    if override is None:
        return EffectiveAttack(
            name=base.name,
            modifier=base.modifier,
            range=base.range,
            damage=base.damage,
        )
    return EffectiveAttack(
        name=_first_set(override.name, base.name),
        modifier=_first_set(override.modifier, base.modifier),
        range=_first_set(override.range, base.range),
        damage=_first_set(override.damage, base.damage),
    )


def effective_thresholds(adversary: AdversaryTracker) -> EffectiveThresholds | str:
    """Resolve thresholds, keeping free-text templates intact.

    Returns:
        The template string itself if it is not a ``major/severe`` pair,
        otherwise the merged structured thresholds.
    """
    parsed = parse_thresholds(adversary.source.thresholds)
    if isinstance(parsed, str):
        return parsed

    override = adversary.thresholds_override
    major = parsed.major
    severe = parsed.severe
    massive = parsed.massive
    if override is not None:
        major = _first_set(override.major, major)
        severe = _first_set(override.severe, severe)
        massive = _first_set(override.massive, massive)

    if massive is None and severe is not None:
        massive = severe * 2

    return EffectiveThresholds(major=major, severe=severe, massive=massive)


def effective_features(adversary: AdversaryTracker) -> list[AnyAdversaryFeature]:
    """Return the override feature list if present, else the template's."""
    if adversary.features_override is not None:
        return list(adversary.features_override)
    return list(adversary.source.features)


def effective_difficulty(adversary: AdversaryTracker) -> int:
    """Return the difficulty override if present, else the template's."""
    if adversary.difficulty_override is not None:
        return adversary.difficulty_override
    return adversary.source.difficulty


def has_modifications(adversary: AdversaryTracker) -> bool:
    """Check whether any override field is set.

    Presence is what counts. An override equal to the template value
    still reports True.
    """
    return any(
        value is not None
        for value in (
            adversary.attack_override,
            adversary.thresholds_override,
            adversary.features_override,
            adversary.difficulty_override,
        )
    )


def adversary_effective_values(adversary: AdversaryTracker) -> EffectiveAdversaryValues:
    """Resolve every effective value of an adversary at once."""
    return EffectiveAdversaryValues(
        attack=effective_attack(adversary),
        thresholds=effective_thresholds(adversary),
        features=effective_features(adversary),
        difficulty=effective_difficulty(adversary),
        has_attack_override=adversary.attack_override is not None,
        has_thresholds_override=adversary.thresholds_override is not None,
        has_features_override=adversary.features_override is not None,
        has_difficulty_override=adversary.difficulty_override is not None,
        has_modifications=has_modifications(adversary),
    )


__all__ = [
    "EffectiveAttack",
    "EffectiveThresholds",
    "EffectiveAdversaryValues",
    "effective_attack",
    "effective_thresholds",
    "effective_features",
    "effective_difficulty",
    "has_modifications",
    "adversary_effective_values",
]
