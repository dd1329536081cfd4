"""Whole-roster snapshot and undo entry models.

A RosterSnapshot holds every field the undo engine restores. The live
store keeps its state in the same shape, so capturing or restoring a
checkpoint is one deep structural copy.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from battle_roster.core.constants import STARTING_ROUND
from battle_roster.models.trackers import (
    AdversaryTracker,
    CharacterTracker,
    EnvironmentTracker,
    RollHistoryEntry,
    SpotlightHistoryEntry,
    TrackerSelection,
    new_tracker_id,
)


class RosterSnapshot(BaseModel):
    """Every undoable field of the roster.

    Attributes:
        characters: Character trackers, in insertion order.
        adversaries: Adversary trackers, in insertion order.
        environments: Environment trackers, in insertion order.
        selection: What the detail panel shows.
        spotlight: Who has narrative focus.
        spotlight_history: Recently spotlighted, newest first, deduplicated.
        spotlight_history_timeline: Every spotlight event, oldest first.
        roll_history: Recorded rolls, newest first.
        current_round: Current round number.
        fear_pool: GM fear available to spend.
        max_fear: Fear ceiling, or None for no ceiling.
        use_massive_threshold: Show the massive threshold.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    characters: list[CharacterTracker] = Field(default_factory=list)
    adversaries: list[AdversaryTracker] = Field(default_factory=list)
    environments: list[EnvironmentTracker] = Field(default_factory=list)
    selection: TrackerSelection | None = None
    spotlight: TrackerSelection | None = None
    spotlight_history: list[TrackerSelection] = Field(default_factory=list)
    spotlight_history_timeline: list[SpotlightHistoryEntry] = Field(default_factory=list)
    roll_history: list[RollHistoryEntry] = Field(default_factory=list)
    current_round: Annotated[int, Field(ge=1)] = STARTING_ROUND
    fear_pool: Annotated[int, Field(ge=0)] = 0
    max_fear: Annotated[int, Field(ge=0)] | None = None
    use_massive_threshold: bool = False

    def copy_deep(self) -> "RosterSnapshot":
        """Return a fully independent structural copy.

        Nothing nested is shared with the original.
        """
        return self.model_copy(deep=True)


class UndoEntryMeta(BaseModel):
    """Display metadata of an undo or redo entry."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(default_factory=new_tracker_id)
    label: str
    timestamp: datetime = Field(default_factory=datetime.now)


class UndoEntry(BaseModel):
    """A checkpoint on the undo or redo stack."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    meta: UndoEntryMeta
    snapshot: RosterSnapshot


__all__ = [
    "RosterSnapshot",
    "UndoEntryMeta",
    "UndoEntry",
]
