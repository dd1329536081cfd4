"""Tests for tracker, template and snapshot models."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from battle_roster.models import (
    Adversary,
    AdversaryTracker,
    CharacterTracker,
    EnvironmentTracker,
    Gauge,
    RosterSnapshot,
    ThresholdValues,
    TrackerItem,
    TrackerKind,
    TrackerSelection,
)


class TestTemplates:
    """Tests for catalog template models."""

    def test_string_thresholds_kept(self, sample_adversary: Adversary) -> None:
        """Test that thresholds written as text stay text."""
        assert sample_adversary.thresholds == "9/17"

    def test_structured_thresholds(self, sample_adversary_data: dict[str, Any]) -> None:
        """Test structured thresholds are parsed into ThresholdValues."""
        sample_adversary_data["thresholds"] = {"major": 9, "severe": 17}

        adversary = Adversary(**sample_adversary_data)

        assert adversary.thresholds == ThresholdValues(major=9, severe=17)

    def test_mixed_features(self, sample_adversary: Adversary) -> None:
        """Test features can mix structured entries and plain strings."""
        assert sample_adversary.features[0].name == "Overwhelming Force"
        assert sample_adversary.features[1] == "Bite"

    def test_templates_are_frozen(self, sample_adversary: Adversary) -> None:
        """Test catalog templates cannot be modified."""
        with pytest.raises(PydanticValidationError):
            sample_adversary.name = "Dire Bear"

    def test_tier_range(self, sample_adversary_data: dict[str, Any]) -> None:
        """Test tier is limited to 1-4."""
        sample_adversary_data["tier"] = 5

        with pytest.raises(PydanticValidationError):
            Adversary(**sample_adversary_data)


class TestTrackers:
    """Tests for the tracker union."""

    def test_gauge_full(self) -> None:
        """Test a full gauge starts at its maximum."""
        gauge = Gauge.full(6)

        assert gauge.current == 6
        assert gauge.max == 6

    def test_character_defaults(self) -> None:
        """Test character tracker defaults."""
        hero = CharacterTracker(name="Marlowe", hp=Gauge.full(6), stress=Gauge.full(6))

        assert hero.kind == "character"
        assert hero.id
        assert hero.conditions == []
        assert hero.is_linked_character is False

    def test_unique_ids(self) -> None:
        """Test each tracker gets a fresh id."""
        first = CharacterTracker(name="A", hp=Gauge.full(1), stress=Gauge.full(1))
        second = CharacterTracker(name="B", hp=Gauge.full(1), stress=Gauge.full(1))

        assert first.id != second.id

    def test_blank_name_rejected(self) -> None:
        """Test character names cannot be empty."""
        with pytest.raises(PydanticValidationError):
            CharacterTracker(name="", hp=Gauge.full(6), stress=Gauge.full(6))

    def test_extra_fields_rejected(self) -> None:
        """Test unknown fields are rejected."""
        with pytest.raises(PydanticValidationError):
            CharacterTracker(name="A", hp=Gauge.full(1), stress=Gauge.full(1), armour=3)

    def test_discriminated_union(self, sample_adversary: Adversary) -> None:
        """Test the union dispatches on kind."""
        adapter = TypeAdapter(TrackerItem)
        tracker = AdversaryTracker(
            source=sample_adversary,
            hp=Gauge.full(sample_adversary.hp),
            stress=Gauge.full(sample_adversary.stress),
        )

        restored = adapter.validate_python(tracker.model_dump())

        assert isinstance(restored, AdversaryTracker)
        assert restored == tracker

    def test_environment_defaults(self, sample_environment: Any) -> None:
        """Test environment tracker defaults."""
        tracker = EnvironmentTracker(source=sample_environment)

        assert tracker.kind == "environment"
        assert tracker.features == []
        assert tracker.countdown_enabled is False


class TestTrackerSelection:
    """Tests for weak tracker references."""

    def test_of(self) -> None:
        """Test building a reference from a tracker."""
        hero = CharacterTracker(name="Marlowe", hp=Gauge.full(6), stress=Gauge.full(6))

        selection = TrackerSelection.of(hero)

        assert selection.kind == TrackerKind.CHARACTER
        assert selection.id == hero.id

    def test_matches(self) -> None:
        """Test reference matching on kind and id."""
        selection = TrackerSelection(kind=TrackerKind.ADVERSARY, id="a-1")

        assert selection.matches("adversary", "a-1")
        assert not selection.matches("character", "a-1")
        assert not selection.matches("adversary", "a-2")

    def test_frozen(self) -> None:
        """Test references are immutable."""
        selection = TrackerSelection(kind=TrackerKind.ADVERSARY, id="a-1")

        with pytest.raises(PydanticValidationError):
            selection.id = "a-2"


class TestRosterSnapshot:
    """Tests for whole-roster snapshots."""

    def test_defaults(self) -> None:
        """Test an empty snapshot."""
        snapshot = RosterSnapshot()

        assert snapshot.current_round == 1
        assert snapshot.fear_pool == 0
        assert snapshot.selection is None

    def test_copy_deep_is_independent(self) -> None:
        """Test deep copies share no nested state."""
        hero = CharacterTracker(name="Marlowe", hp=Gauge.full(6), stress=Gauge.full(6))
        snapshot = RosterSnapshot(characters=[hero])

        copied = snapshot.copy_deep()
        copied.characters[0].hp.current = 1

        assert snapshot.characters[0].hp.current == 6

    def test_round_must_be_positive(self) -> None:
        """Test the round counter starts at 1."""
        with pytest.raises(PydanticValidationError):
            RosterSnapshot(current_round=0)

    def test_dump_and_validate(self, sample_adversary: Adversary) -> None:
        """Test a dumped snapshot validates back to an equal snapshot."""
        adversary = AdversaryTracker(
            source=sample_adversary,
            hp=Gauge.full(7),
            stress=Gauge.full(2),
        )
        snapshot = RosterSnapshot(
            adversaries=[adversary],
            selection=TrackerSelection.of(adversary),
            fear_pool=3,
        )

        restored = RosterSnapshot.model_validate(snapshot.model_dump())

        assert restored == snapshot
