"""Integration tests for combat flow.

Tests complete encounters from setup through rounds, rolls and undo.
"""

from __future__ import annotations

from battle_roster import UndoableRoster
from battle_roster.engine.overrides import adversary_effective_values
from battle_roster.models import (
    Adversary,
    AdversaryTracker,
    AttackOverride,
    CharacterTracker,
    Environment,
    NewCharacterDraft,
    ThresholdsOverride,
)


class TestCombatFlow:
    """Test complete combat scenarios."""

    def test_full_round(
        self,
        roster: UndoableRoster,
        sample_adversary: Adversary,
        sample_environment: Environment,
    ) -> None:
        """Set up an encounter, play a round, undo back to the start."""
        hero_id = roster.add_character(NewCharacterDraft(name="Marlowe", hp_max="6"))
        bear_id = roster.add_adversary(sample_adversary)
        bridge_id = roster.add_environment(sample_environment)
        setup = roster.state.model_dump()

        # GM gains fear and the bear acts
        roster.set_fear_pool(4)
        roster.handle_spotlight(roster.get_adversary(bear_id))
        roster.toggle_adversary_acted(bear_id)
        roster.roll_adversary_attack(bear_id)
        roster.spend_fear(1)

        # The hero takes a hit
        def wound(prev: CharacterTracker) -> CharacterTracker:
            prev.hp.current -= 2
            prev.conditions.append("Vulnerable")
            return prev

        roster.update_character(hero_id, wound)
        roster.toggle_environment_feature(bridge_id, "feature-0")
        roster.advance_round()

        state = roster.state
        assert state.current_round == 2
        assert state.fear_pool == 3
        assert state.characters[0].hp.current == 4
        assert state.characters[0].conditions == ["Vulnerable"]
        assert state.adversaries[0].has_acted_this_round is False
        assert state.environments[0].features[0].active is True
        assert len(state.roll_history) == 1
        assert state.spotlight_history_timeline[0].entity_name == "Bear"

        while roster.can_undo and len(roster.undo_stack) > 3:
            roster.undo()

        assert roster.state.model_dump() == setup

    def test_adversary_customization(
        self,
        roster: UndoableRoster,
        sample_adversary: Adversary,
    ) -> None:
        """Customize an adversary mid-fight and read effective values."""
        bear_id = roster.add_adversary(sample_adversary)

        def enrage(prev: AdversaryTracker) -> AdversaryTracker:
            return prev.model_copy(
                update={
                    "difficulty_override": 16,
                    "attack_override": AttackOverride(modifier="+3"),
                    "thresholds_override": ThresholdsOverride(severe=20),
                }
            )

        roster.update_adversary(bear_id, enrage)
        values = adversary_effective_values(roster.get_adversary(bear_id))

        assert values.difficulty == 16
        assert values.attack.modifier_value == 3
        assert values.attack.name == "Claws"
        assert values.thresholds.major == 9
        assert values.thresholds.massive == 40
        assert values.has_modifications is True

        entry = roster.roll_adversary_attack(bear_id)
        assert entry.dice == "1d20+3"

        roster.undo()
        roster.undo()
        restored = adversary_effective_values(roster.get_adversary(bear_id))
        assert restored.has_modifications is False
        assert restored.difficulty == sample_adversary.difficulty

    def test_removal_mid_fight(
        self,
        roster: UndoableRoster,
        sample_adversary: Adversary,
    ) -> None:
        """Defeated adversaries leave history intact."""
        first = roster.add_adversary(sample_adversary)
        second = roster.add_adversary(sample_adversary)
        roster.handle_spotlight(roster.get_adversary(first))
        roster.roll_adversary_damage(first)

        roster.remove_item(roster.get_adversary(first))

        assert [a.id for a in roster.state.adversaries] == [second]
        assert roster.state.spotlight is None
        assert roster.state.spotlight_history == []
        assert len(roster.state.spotlight_history_timeline) == 1
        assert roster.state.roll_history[0].entity_id == first

    def test_session_round_trip(
        self,
        roster: UndoableRoster,
        sample_adversary: Adversary,
        sample_environment: Environment,
    ) -> None:
        """Save an encounter to plain data and load it into a new roster."""
        roster.add_adversary(sample_adversary)
        roster.add_environment(sample_environment)
        roster.add_character(NewCharacterDraft(name="Marlowe"))
        roster.set_use_massive_threshold(True)
        saved = roster.state.model_dump(mode="json")

        restored = UndoableRoster(settings=roster.store.settings)
        restored.load_session(saved)

        assert restored.state == roster.state
        assert restored.selected_item.name == "Marlowe"
