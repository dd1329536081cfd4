"""Combat roster engine.

This module provides the roster store, the adversary override layer,
snapshot undo/redo and the dice used for adversary rolls.

Submodules:
    parsing: Lenient parsing of catalog text and form drafts
    overrides: Effective adversary values (template + overrides)
    dice: Attack and damage rolls (d20 library)
    roster: RosterStore, the encounter state and its operations
    undo: UndoEngine and the undo-tracked UndoableRoster

Example:
    >>> from battle_roster.engine import UndoableRoster
    >>> from battle_roster.models import NewCharacterDraft
    >>>
    >>> roster = UndoableRoster()
    >>> hero_id = roster.add_character(NewCharacterDraft(name="Marlowe"))
    >>> roster.undo().label
    'Add character'
"""

from __future__ import annotations

# =============================================================================
# Parsing
# =============================================================================
from battle_roster.engine.parsing import (
    normalize_environment_feature,
    normalize_minus_signs,
    parse_modifier,
    parse_thresholds,
    to_number,
)

# =============================================================================
# Effective Values
# =============================================================================
from battle_roster.engine.overrides import (
    EffectiveAdversaryValues,
    EffectiveAttack,
    EffectiveThresholds,
    adversary_effective_values,
    effective_attack,
    effective_difficulty,
    effective_features,
    effective_thresholds,
    has_modifications,
)

# =============================================================================
# Dice Rolling
# =============================================================================
from battle_roster.engine.dice import (
    DiceExpression,
    DiceRoller,
    damage_expression,
)

# =============================================================================
# Roster & Undo
# =============================================================================
from battle_roster.engine.roster import (
    AnyTracker,
    RosterStore,
    tracker_name,
)
from battle_roster.engine.undo import (
    UndoableRoster,
    UndoEngine,
)


__all__ = [
    # Parsing
    "normalize_minus_signs",
    "parse_modifier",
    "to_number",
    "parse_thresholds",
    "normalize_environment_feature",
    # Effective values
    "EffectiveAttack",
    "EffectiveThresholds",
    "EffectiveAdversaryValues",
    "effective_attack",
    "effective_thresholds",
    "effective_features",
    "effective_difficulty",
    "has_modifications",
    "adversary_effective_values",
    # Dice
    "DiceExpression",
    "DiceRoller",
    "damage_expression",
    # Roster & undo
    "AnyTracker",
    "RosterStore",
    "tracker_name",
    "UndoEngine",
    "UndoableRoster",
]
