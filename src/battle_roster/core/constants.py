"""Default tuning values for the battle roster engine.

These are the defaults behind RosterSettings. The caps are UX tuning
values. Override them through the environment, not by editing this file.
"""

from __future__ import annotations

# =============================================================================
# History Caps
# =============================================================================

MAX_UNDO_DEPTH = 50
"""Maximum entries kept on each of the undo and redo stacks."""

RECENT_SPOTLIGHT_LIMIT = 5
"""Length of the deduplicated "recently spotlighted" list."""

SPOTLIGHT_TIMELINE_LIMIT = 50
"""Length of the spotlight timeline (every spotlight event, no dedup)."""

ROLL_HISTORY_LIMIT = 100
"""Number of roll records kept, newest first."""

# =============================================================================
# Character Draft Fallbacks
# =============================================================================

DEFAULT_CHARACTER_HP = 6
"""Hit points used when a draft's HP field cannot be parsed."""

DEFAULT_CHARACTER_STRESS = 6
"""Stress slots used when a draft's stress field cannot be parsed."""

DEFAULT_CHARACTER_EVASION = 10
"""Evasion used when a draft's evasion field cannot be parsed."""

# =============================================================================
# Encounter Counters
# =============================================================================

STARTING_ROUND = 1
"""Round number of a fresh encounter."""

DEFAULT_MAX_FEAR = 12
"""Upper bound of the GM fear pool."""

# =============================================================================
# Parsing
# =============================================================================

UNICODE_MINUS_SIGNS = ("−", "–")
"""Minus-like characters normalized to ASCII hyphen-minus before parsing."""

FEATURE_ID_PREFIX = "feature"
"""Prefix of the stable ids given to normalized environment features."""


__all__ = [
    "MAX_UNDO_DEPTH",
    "RECENT_SPOTLIGHT_LIMIT",
    "SPOTLIGHT_TIMELINE_LIMIT",
    "ROLL_HISTORY_LIMIT",
    "DEFAULT_CHARACTER_HP",
    "DEFAULT_CHARACTER_STRESS",
    "DEFAULT_CHARACTER_EVASION",
    "STARTING_ROUND",
    "DEFAULT_MAX_FEAR",
    "UNICODE_MINUS_SIGNS",
    "FEATURE_ID_PREFIX",
]
