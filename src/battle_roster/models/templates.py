"""Catalog templates for adversaries and environments.

Templates are read-only catalog entries. A tracker keeps its template as
``source`` and never mutates it. Per-encounter changes live in the
tracker's override fields instead.

Models:
    AdversaryAttack: Standard attack line of an adversary.
    ThresholdValues: Structured damage thresholds.
    AdversaryFeature: Named adversary feature.
    Adversary: Adversary stat block.
    EnvironmentFeature: Named environment feature.
    Environment: Environment stat block.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


TEMPLATE_CONFIG = ConfigDict(extra="forbid", frozen=True)


class AdversaryAttack(BaseModel):
    """An adversary's standard attack.

    Attributes:
        name: Attack name (e.g. "Claws").
        modifier: Attack roll modifier. Catalog text may be a string such
            as "+2" or "−1" (unicode minus).
        range: Range band (e.g. "Melee", "Far").
        damage: Damage expression (e.g. "1d8+3 phy").
    """

    model_config = TEMPLATE_CONFIG

    name: str = Field(description="Attack name")
    modifier: str | int = Field(default=0, description="Attack roll modifier")
    range: str = Field(default="Melee", description="Range band")
    damage: str = Field(default="", description="Damage expression")


class ThresholdValues(BaseModel):
    """Structured damage thresholds.

    Attributes:
        major: Major damage threshold.
        severe: Severe damage threshold.
        massive: Explicit massive threshold, or None to default to 2x severe.
    """

    model_config = TEMPLATE_CONFIG

    major: int = Field(description="Major damage threshold")
    severe: int = Field(description="Severe damage threshold")
    massive: int | None = Field(default=None, description="Massive damage threshold")


class AdversaryFeature(BaseModel):
    """A named adversary feature."""

    model_config = TEMPLATE_CONFIG

    name: str = Field(description="Feature name")
    type: str | None = Field(default=None, description="Action, Reaction, Passive...")
    description: str = Field(default="", description="Rules text")


class Adversary(BaseModel):
    """An adversary stat block from the catalog.

    Attributes:
        name: Adversary name.
        tier: Tier (1-4).
        role: Role (Bruiser, Minion, Solo...).
        description: Flavor text.
        difficulty: Difficulty to hit.
        thresholds: Either free text or structured thresholds.
        hp: Hit points.
        stress: Stress slots.
        attack: Standard attack.
        experiences: Experience tags.
        features: Features, as plain strings or structured entries.

    Example:
        >>> Adversary(
        ...     name="Bear",
        ...     tier=1,
        ...     role="Bruiser",
        ...     difficulty=14,
        ...     thresholds=ThresholdValues(major=9, severe=17),
        ...     hp=7,
        ...     stress=2,
        ...     attack=AdversaryAttack(name="Claws", modifier="+1", damage="1d8+3 phy"),
        ... )
    """

    model_config = TEMPLATE_CONFIG

    name: str = Field(min_length=1, description="Adversary name")
    tier: Annotated[int, Field(ge=1, le=4)] = 1
    role: str = Field(default="Standard", description="Adversary role")
    description: str = Field(default="", description="Flavor text")
    difficulty: int = Field(description="Difficulty to hit")
    thresholds: ThresholdValues | str = Field(description="Damage thresholds")
    hp: Annotated[int, Field(ge=0)] = Field(description="Hit points")
    stress: Annotated[int, Field(ge=0)] = Field(default=0, description="Stress slots")
    attack: AdversaryAttack = Field(description="Standard attack")
    experiences: list[str] = Field(default_factory=list, description="Experience tags")
    features: list[AdversaryFeature | str] = Field(
        default_factory=list,
        description="Adversary features",
    )


class EnvironmentFeature(BaseModel):
    """A named environment feature."""

    model_config = TEMPLATE_CONFIG

    name: str = Field(description="Feature name")
    type: str | None = Field(default=None, description="Action, Reaction, Passive...")
    description: str = Field(default="", description="Rules text")


class Environment(BaseModel):
    """An environment stat block from the catalog."""

    model_config = TEMPLATE_CONFIG

    name: str = Field(min_length=1, description="Environment name")
    tier: Annotated[int, Field(ge=1, le=4)] = 1
    type: str = Field(default="Exploration", description="Environment type")
    description: str = Field(default="", description="Flavor text")
    impulses: list[str] = Field(default_factory=list, description="Environment impulses")
    difficulty: int | None = Field(default=None, description="Difficulty, if any")
    potential_adversaries: list[str] = Field(
        default_factory=list,
        description="Adversaries suggested by the catalog",
    )
    features: list[EnvironmentFeature | str] = Field(
        default_factory=list,
        description="Environment features",
    )


__all__ = [
    "AdversaryAttack",
    "ThresholdValues",
    "AdversaryFeature",
    "Adversary",
    "EnvironmentFeature",
    "Environment",
]
