"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the battle roster test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from battle_roster.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def roster_settings() -> Any:
    """Provide roster settings with the default caps.

    Returns:
        RosterSettings instance.
    """
    from battle_roster.core.config import RosterSettings

    return RosterSettings()


# =============================================================================
# Template Fixtures
# =============================================================================


@pytest.fixture
def sample_adversary_data() -> dict[str, Any]:
    """Provide a catalog adversary stat block.

    Returns:
        Dictionary of adversary template fields.
    """
    return {
        "name": "Bear",
        "tier": 1,
        "role": "Bruiser",
        "description": "A large bear with thick fur and powerful claws.",
        "difficulty": 14,
        "thresholds": "9/17",
        "hp": 7,
        "stress": 2,
        "attack": {
            "name": "Claws",
            "modifier": "+1",
            "range": "Melee",
            "damage": "1d8+3 phy",
        },
        "experiences": ["Ambusher +3", "Keen Senses +2"],
        "features": [
            {"name": "Overwhelming Force", "type": "Passive", "description": "Knocks targets back."},
            "Bite",
        ],
    }


@pytest.fixture
def sample_adversary(sample_adversary_data: dict[str, Any]) -> Any:
    """Create an Adversary template.

    Args:
        sample_adversary_data: Adversary template fields.

    Returns:
        Adversary instance.
    """
    from battle_roster.models import Adversary

    return Adversary(**sample_adversary_data)


@pytest.fixture
def sample_environment() -> Any:
    """Create an Environment template with mixed feature shapes.

    Returns:
        Environment instance.
    """
    from battle_roster.models import Environment, EnvironmentFeature

    return Environment(
        name="Collapsing Bridge",
        tier=1,
        type="Event",
        description="A rope bridge over a chasm, fraying fast.",
        impulses=["Sway", "Snap"],
        difficulty=12,
        features=[
            EnvironmentFeature(
                name="Fraying Ropes",
                type="Passive",
                description="Each round, the bridge loses a plank.",
            ),
            "Gusting Wind: Creatures on the bridge mark a Stress.",
            "Echoes",
        ],
    )


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def dice_roller() -> Any:
    """Create a DiceRoller with a fixed seed for reproducible tests.

    Returns:
        DiceRoller instance with fixed seed.
    """
    from battle_roster.engine.dice import DiceRoller

    return DiceRoller(seed=42)


@pytest.fixture
def store(roster_settings: Any) -> Any:
    """Create an empty RosterStore.

    Args:
        roster_settings: Roster settings.

    Returns:
        RosterStore instance.
    """
    from battle_roster.engine.roster import RosterStore

    return RosterStore(roster_settings)


@pytest.fixture
def roster(roster_settings: Any, dice_roller: Any) -> Any:
    """Create an empty UndoableRoster.

    Args:
        roster_settings: Roster settings.
        dice_roller: Seeded dice roller.

    Returns:
        UndoableRoster instance.
    """
    from battle_roster.engine.undo import UndoableRoster

    return UndoableRoster(settings=roster_settings, roller=dice_roller)


@pytest.fixture
def hero_draft() -> Any:
    """Provide a complete add-character form draft.

    Returns:
        NewCharacterDraft instance.
    """
    from battle_roster.models import NewCharacterDraft

    return NewCharacterDraft(name="  Marlowe  ", evasion="11", hp_max="7", stress_max="5")
