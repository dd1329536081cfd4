"""Tests for effective adversary values."""

from __future__ import annotations

import pytest

from battle_roster.engine.overrides import (
    EffectiveThresholds,
    adversary_effective_values,
    effective_attack,
    effective_difficulty,
    effective_features,
    effective_thresholds,
    has_modifications,
)
from battle_roster.models import (
    Adversary,
    AdversaryTracker,
    AttackOverride,
    FeatureOverride,
    Gauge,
    ThresholdsOverride,
    ThresholdValues,
)


@pytest.fixture
def bear(sample_adversary: Adversary) -> AdversaryTracker:
    """Provide an adversary tracker with no overrides."""
    return AdversaryTracker(
        source=sample_adversary,
        hp=Gauge.full(sample_adversary.hp),
        stress=Gauge.full(sample_adversary.stress),
    )


class TestEffectiveAttack:
    """Tests for attack resolution."""

    def test_no_override(self, bear: AdversaryTracker) -> None:
        """Test the template attack is used as-is."""
        attack = effective_attack(bear)

        assert attack.name == "Claws"
        assert attack.modifier == "+1"
        assert attack.modifier_value == 1
        assert attack.damage == "1d8+3 phy"

    def test_partial_override(self, bear: AdversaryTracker) -> None:
        """Test overridden fields win and the rest fall back."""
        bear.attack_override = AttackOverride(modifier="−2", damage="2d6 phy")

        attack = effective_attack(bear)

        assert attack.name == "Claws"
        assert attack.range == "Melee"
        assert attack.modifier_value == -2
        assert attack.damage == "2d6 phy"


class TestEffectiveThresholds:
    """Tests for threshold resolution."""

    def test_massive_defaults_to_double_severe(self, bear: AdversaryTracker) -> None:
        """Test massive is 2x severe when unset."""
        assert effective_thresholds(bear) == EffectiveThresholds(major=9, severe=17, massive=34)

    def test_override_severe_moves_massive(self, bear: AdversaryTracker) -> None:
        """Test the massive default follows an overridden severe."""
        bear.thresholds_override = ThresholdsOverride(severe=10)

        result = effective_thresholds(bear)

        assert result.major == 9
        assert result.severe == 10
        assert result.massive == 20

    def test_explicit_zero_massive(self, bear: AdversaryTracker) -> None:
        """Test an explicit 0 is a real value, not unset."""
        bear.thresholds_override = ThresholdsOverride(severe=10, massive=0)

        assert effective_thresholds(bear).massive == 0

    def test_template_massive(self, sample_adversary: Adversary) -> None:
        """Test a structured template massive value is kept."""
        template = sample_adversary.model_copy(
            update={"thresholds": ThresholdValues(major=5, severe=9, massive=25)}
        )
        tracker = AdversaryTracker(source=template, hp=Gauge.full(7), stress=Gauge.full(2))

        assert effective_thresholds(tracker).massive == 25

    def test_free_text_unchanged(self, sample_adversary: Adversary) -> None:
        """Test unparseable template thresholds are returned verbatim."""
        template = sample_adversary.model_copy(update={"thresholds": "special"})
        tracker = AdversaryTracker(
            source=template,
            hp=Gauge.full(7),
            stress=Gauge.full(2),
            thresholds_override=ThresholdsOverride(major=3),
        )

        assert effective_thresholds(tracker) == "special"


class TestFeaturesAndDifficulty:
    """Tests for feature and difficulty resolution."""

    def test_features_from_template(self, bear: AdversaryTracker) -> None:
        """Test the template list is used without an override."""
        assert effective_features(bear) == list(bear.source.features)

    def test_features_override_replaces_list(self, bear: AdversaryTracker) -> None:
        """Test the override replaces the whole list."""
        custom = FeatureOverride(name="Rage", description="Deals +2 damage.", is_custom=True)
        bear.features_override = [custom]

        assert effective_features(bear) == [custom]

    def test_empty_features_override(self, bear: AdversaryTracker) -> None:
        """Test an empty override still wins."""
        bear.features_override = []

        assert effective_features(bear) == []
        assert has_modifications(bear)

    def test_difficulty_override(self, bear: AdversaryTracker) -> None:
        """Test the difficulty override wins."""
        bear.difficulty_override = 15

        assert effective_difficulty(bear) == 15


class TestAdversaryEffectiveValues:
    """Tests for the combined resolution."""

    def test_difficulty_override_scenario(self, sample_adversary: Adversary) -> None:
        """Test only the overridden value changes and flags are set."""
        template = sample_adversary.model_copy(update={"difficulty": 12})
        tracker = AdversaryTracker(
            source=template,
            hp=Gauge.full(7),
            stress=Gauge.full(2),
            difficulty_override=15,
        )

        values = adversary_effective_values(tracker)

        assert values.difficulty == 15
        assert values.has_difficulty_override is True
        assert values.has_modifications is True
        assert values.has_attack_override is False
        assert values.attack == effective_attack(tracker)
        assert values.thresholds == effective_thresholds(tracker)

    def test_no_modifications(self, bear: AdversaryTracker) -> None:
        """Test an untouched adversary reports no modifications."""
        values = adversary_effective_values(bear)

        assert values.has_modifications is False
        assert values.difficulty == 14

    def test_override_equal_to_template_counts(self, bear: AdversaryTracker) -> None:
        """Test presence, not difference, sets the flag."""
        bear.difficulty_override = bear.source.difficulty

        assert has_modifications(bear) is True
