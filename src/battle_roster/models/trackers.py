"""Tracker models for combat participants.

The three participant kinds form a closed, tagged union discriminated by
``kind``. They share no base class. Code that behaves differently per
kind dispatches on ``item.kind``.

Selections, spotlight entries and roll records are weak or denormalized
references. They hold ids and copied names, never live handles.

Models:
    Gauge: A current/max resource (HP, stress, hope).
    CharacterTracker: A player character in the encounter.
    AdversaryTracker: An adversary with optional per-encounter overrides.
    EnvironmentTracker: An environment with normalized feature toggles.
    TrackerSelection: Weak ``{kind, id}`` reference.
    SpotlightHistoryEntry: Denormalized spotlight event.
    RollHistoryEntry: Denormalized roll record.
    NewCharacterDraft: Raw form input for a new character.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from battle_roster.models.enums import RollKind, TrackerKind
from battle_roster.models.templates import (
    Adversary,
    AdversaryFeature,
    Environment,
    ThresholdValues,
)


TRACKER_CONFIG = ConfigDict(extra="forbid", validate_assignment=True)


def new_tracker_id() -> str:
    """Generate a fresh tracker id."""
    return str(uuid4())


# =============================================================================
# Shared Value Types
# =============================================================================


class Gauge(BaseModel):
    """A current/max pair such as hit points or stress."""

    model_config = TRACKER_CONFIG

    current: int = Field(description="Current value")
    max: int = Field(description="Maximum value")

    @classmethod
    def full(cls, value: int) -> "Gauge":
        """Create a gauge filled to its maximum."""
        return cls(current=value, max=value)


# =============================================================================
# Character
# =============================================================================


class CharacterTracker(BaseModel):
    """A player character in the encounter.

    Attributes:
        id: Identifier, unique among characters.
        kind: Always "character".
        name: Display name.
        evasion: Evasion score, if known.
        hp: Hit point gauge.
        stress: Stress gauge.
        conditions: Active condition labels.
        notes: Free-text GM notes.
        source_character_id: Campaign character this tracker was built from.
        class_name: Class name, for display.
        subclass_name: Subclass name, for display.
        level: Character level.
        armor_score: Armor score.
        thresholds: Damage thresholds.
        hope: Hope gauge.
        is_linked_character: Stats sync from a player's live sheet.
    """

    model_config = TRACKER_CONFIG

    id: str = Field(default_factory=new_tracker_id, description="Tracker id")
    kind: Literal["character"] = "character"
    name: str = Field(min_length=1, description="Display name")
    evasion: int | None = Field(default=None, description="Evasion score")
    hp: Gauge = Field(description="Hit points")
    stress: Gauge = Field(description="Stress slots")
    conditions: list[str] = Field(default_factory=list, description="Condition labels")
    notes: str = Field(default="", description="GM notes")

    source_character_id: str | None = Field(default=None, description="Campaign character id")
    class_name: str | None = Field(default=None, description="Class name")
    subclass_name: str | None = Field(default=None, description="Subclass name")
    level: int | None = Field(default=None, description="Character level")
    armor_score: int | None = Field(default=None, description="Armor score")
    thresholds: ThresholdValues | None = Field(default=None, description="Damage thresholds")
    hope: Gauge | None = Field(default=None, description="Hope gauge")
    is_linked_character: bool = Field(default=False, description="Synced from a live sheet")


# =============================================================================
# Adversary
# =============================================================================


class AttackOverride(BaseModel):
    """Partial override of an adversary's attack. ``None`` means use the source."""

    model_config = TRACKER_CONFIG

    name: str | None = None
    modifier: str | int | None = None
    range: str | None = None
    damage: str | None = None


class ThresholdsOverride(BaseModel):
    """Partial override of an adversary's thresholds. ``None`` means use the source.

    An explicit ``0`` is a real value and is never treated as unset.
    """

    model_config = TRACKER_CONFIG

    major: int | None = None
    severe: int | None = None
    massive: int | None = None


class FeatureOverride(BaseModel):
    """One entry of a replacement feature list."""

    model_config = TRACKER_CONFIG

    id: str = Field(default_factory=new_tracker_id, description="Feature id")
    name: str = Field(description="Feature name")
    type: str | None = Field(default=None, description="Feature type")
    description: str = Field(default="", description="Rules text")
    is_custom: bool = Field(default=False, description="Added by the GM")


class AttackRollCache(BaseModel):
    """Most recent attack roll of an adversary."""

    model_config = TRACKER_CONFIG

    roll: int
    total: int
    timestamp: datetime = Field(default_factory=datetime.now)


class DamageRollCache(BaseModel):
    """Most recent damage roll of an adversary."""

    model_config = TRACKER_CONFIG

    dice: str
    rolls: list[int] = Field(default_factory=list)
    total: int
    timestamp: datetime = Field(default_factory=datetime.now)


class AdversaryTracker(BaseModel):
    """An adversary in the encounter.

    ``source`` is the immutable catalog template. The four ``*_override``
    fields are optional per-encounter deltas on top of it. Use
    ``battle_roster.engine.overrides`` to read effective values.

    Attributes:
        id: Identifier, unique among adversaries.
        kind: Always "adversary".
        source: Catalog template.
        hp: Hit point gauge.
        stress: Stress gauge.
        conditions: Active condition labels.
        notes: Free-text GM notes.
        difficulty_override: Replacement difficulty.
        attack_override: Partial attack override.
        thresholds_override: Partial thresholds override.
        features_override: Replacement feature list.
        last_attack_roll: Cached last attack roll.
        last_damage_roll: Cached last damage roll.
        countdown: Countdown value.
        countdown_enabled: Whether the countdown ticks.
        has_acted_this_round: Reset on every round advance.
    """

    model_config = TRACKER_CONFIG

    id: str = Field(default_factory=new_tracker_id, description="Tracker id")
    kind: Literal["adversary"] = "adversary"
    source: Adversary = Field(description="Catalog template")
    hp: Gauge = Field(description="Hit points")
    stress: Gauge = Field(description="Stress slots")
    conditions: list[str] = Field(default_factory=list, description="Condition labels")
    notes: str = Field(default="", description="GM notes")

    difficulty_override: int | None = None
    attack_override: AttackOverride | None = None
    thresholds_override: ThresholdsOverride | None = None
    features_override: list[FeatureOverride] | None = None

    last_attack_roll: AttackRollCache | None = None
    last_damage_roll: DamageRollCache | None = None

    countdown: int | None = Field(default=None, description="Countdown value")
    countdown_enabled: bool = Field(default=False, description="Countdown ticks")
    has_acted_this_round: bool = Field(default=False, description="Acted this round")


# =============================================================================
# Environment
# =============================================================================


class EnvironmentFeatureEntry(BaseModel):
    """A normalized environment feature with an on/off toggle."""

    model_config = TRACKER_CONFIG

    id: str = Field(description="Stable feature id")
    name: str = Field(description="Feature name")
    description: str = Field(default="", description="Rules text")
    type: str | None = Field(default=None, description="Feature type")
    active: bool = Field(default=False, description="Feature is in play")


class EnvironmentTracker(BaseModel):
    """An environment in the encounter.

    ``features`` is derived once from the template when the tracker is
    created and is not recomputed on read.
    """

    model_config = TRACKER_CONFIG

    id: str = Field(default_factory=new_tracker_id, description="Tracker id")
    kind: Literal["environment"] = "environment"
    source: Environment = Field(description="Catalog template")
    notes: str = Field(default="", description="GM notes")
    features: list[EnvironmentFeatureEntry] = Field(default_factory=list)
    countdown: int | None = Field(default=None, description="Countdown value")
    countdown_enabled: bool = Field(default=False, description="Countdown ticks")


TrackerItem = Annotated[
    Union[CharacterTracker, AdversaryTracker, EnvironmentTracker],
    Field(discriminator="kind"),
]
"""Any combat participant, discriminated by ``kind``."""


# =============================================================================
# References & History
# =============================================================================


class TrackerSelection(BaseModel):
    """Weak reference to a tracker. Always re-resolve before use."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: TrackerKind = Field(description="Tracker kind")
    id: str = Field(description="Tracker id")

    @classmethod
    def of(cls, item: CharacterTracker | AdversaryTracker | EnvironmentTracker) -> "TrackerSelection":
        """Build a reference to the given tracker."""
        return cls(kind=TrackerKind(item.kind), id=item.id)

    def matches(self, kind: str, tracker_id: str) -> bool:
        """Check whether this reference points at ``(kind, tracker_id)``."""
        return self.kind == kind and self.id == tracker_id


class SpotlightHistoryEntry(BaseModel):
    """One spotlight event. ``entity_name`` is copied at spotlight time."""

    model_config = TRACKER_CONFIG

    selection: TrackerSelection
    timestamp: datetime = Field(default_factory=datetime.now)
    round: int | None = None
    entity_name: str


class RollHistoryEntry(BaseModel):
    """A recorded roll. Independent of live trackers once written."""

    model_config = TRACKER_CONFIG

    id: str = Field(default_factory=new_tracker_id)
    type: RollKind
    entity_id: str
    entity_name: str
    entity_kind: TrackerKind
    roll: int
    total: int
    dice: str
    rolls: list[int] | None = None
    modifier: str | int | None = None
    is_critical: bool = False
    is_fumble: bool = False
    timestamp: datetime = Field(default_factory=datetime.now)
    round: int | None = None


class NewCharacterDraft(BaseModel):
    """Raw add-character form input. Every field is unparsed text."""

    model_config = ConfigDict(extra="forbid")

    name: str = ""
    evasion: str = ""
    hp_max: str = ""
    stress_max: str = ""


# Effective adversary features may come from the template or an override.
AnyAdversaryFeature = AdversaryFeature | FeatureOverride | str


__all__ = [
    "TRACKER_CONFIG",
    "new_tracker_id",
    "Gauge",
    "CharacterTracker",
    "AttackOverride",
    "ThresholdsOverride",
    "FeatureOverride",
    "AttackRollCache",
    "DamageRollCache",
    "AdversaryTracker",
    "EnvironmentFeatureEntry",
    "EnvironmentTracker",
    "TrackerItem",
    "TrackerSelection",
    "SpotlightHistoryEntry",
    "RollHistoryEntry",
    "NewCharacterDraft",
    "AnyAdversaryFeature",
]
