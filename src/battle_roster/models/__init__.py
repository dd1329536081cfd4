"""Pydantic V2 schemas for the battle roster.

Submodules:
    enums: Enumeration types (TrackerKind, RollKind, UI tabs)
    templates: Read-only catalog templates (Adversary, Environment)
    trackers: Combat participants and weak references
    snapshot: Whole-roster snapshot and undo entries

Example:
    >>> from battle_roster.models import CharacterTracker, Gauge
    >>> hero = CharacterTracker(name="Marlowe", hp=Gauge.full(6), stress=Gauge.full(6))
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from battle_roster.models.enums import (
    DetailTab,
    RollKind,
    RosterTab,
    TrackerKind,
)

# =============================================================================
# Templates
# =============================================================================
from battle_roster.models.templates import (
    Adversary,
    AdversaryAttack,
    AdversaryFeature,
    Environment,
    EnvironmentFeature,
    ThresholdValues,
)

# =============================================================================
# Trackers
# =============================================================================
from battle_roster.models.trackers import (
    AdversaryTracker,
    AnyAdversaryFeature,
    AttackOverride,
    AttackRollCache,
    CharacterTracker,
    DamageRollCache,
    EnvironmentFeatureEntry,
    EnvironmentTracker,
    FeatureOverride,
    Gauge,
    NewCharacterDraft,
    RollHistoryEntry,
    SpotlightHistoryEntry,
    ThresholdsOverride,
    TrackerItem,
    TrackerSelection,
    new_tracker_id,
)

# =============================================================================
# Snapshots
# =============================================================================
from battle_roster.models.snapshot import (
    RosterSnapshot,
    UndoEntry,
    UndoEntryMeta,
)


__all__ = [
    # === Enumerations ===
    "TrackerKind",
    "RollKind",
    "RosterTab",
    "DetailTab",
    # === Templates ===
    "AdversaryAttack",
    "ThresholdValues",
    "AdversaryFeature",
    "Adversary",
    "EnvironmentFeature",
    "Environment",
    # === Trackers ===
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
    # === Snapshots ===
    "RosterSnapshot",
    "UndoEntryMeta",
    "UndoEntry",
]
