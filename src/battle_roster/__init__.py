"""Battle Roster - combat encounter state engine.

Tracks the participants of a tabletop-RPG combat encounter (characters,
adversaries and environments) together with selection, spotlight, the
round counter and the GM fear pool. Every mutation is undoable.

ARCHITECTURE:
- The store owns the state; collaborators read it and never mutate it
- Adversary combat values are template + per-encounter overrides
- Undo restores whole-roster deep snapshots

Example:
    >>> from battle_roster import UndoableRoster, NewCharacterDraft
    >>>
    >>> roster = UndoableRoster()
    >>> roster.add_character(NewCharacterDraft(name="Marlowe", hp_max="6"))
    >>> roster.set_fear_pool(3)
    >>> roster.spend_fear(2)
    True
    >>> roster.undo().label
    'Spend 2 Fear'

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas for templates, trackers and snapshots.
    engine: Roster store, override resolution, undo and dice.
"""

from __future__ import annotations

# Core
from battle_roster.core.config import Settings, get_settings
from battle_roster.core.exceptions import BattleRosterError
from battle_roster.core.logging import configure_logging, get_logger

# Models
from battle_roster.models import (
    Adversary,
    AdversaryTracker,
    CharacterTracker,
    Environment,
    EnvironmentTracker,
    Gauge,
    NewCharacterDraft,
    RosterSnapshot,
    TrackerKind,
    TrackerSelection,
)

# Engine
from battle_roster.engine import (
    DiceRoller,
    RosterStore,
    UndoableRoster,
    UndoEngine,
    adversary_effective_values,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "BattleRosterError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Adversary",
    "Environment",
    "CharacterTracker",
    "AdversaryTracker",
    "EnvironmentTracker",
    "Gauge",
    "NewCharacterDraft",
    "RosterSnapshot",
    "TrackerKind",
    "TrackerSelection",
    # Engine
    "RosterStore",
    "UndoEngine",
    "UndoableRoster",
    "DiceRoller",
    "adversary_effective_values",
]
