"""Tests for adversary dice rolls."""

from __future__ import annotations

import pytest

from battle_roster.core.exceptions import DiceRollError
from battle_roster.engine.dice import DiceExpression, DiceRoller, damage_expression


class TestDiceRoller:
    """Tests for the DiceRoller class."""

    def test_simple_d20_roll(self, dice_roller: DiceRoller) -> None:
        """Test simple d20 roll."""
        result = dice_roller.roll("1d20")

        assert isinstance(result, DiceExpression)
        assert 1 <= result.total <= 20
        assert result.natural == result.total
        assert result.modifier == 0

    def test_roll_with_modifier(self, dice_roller: DiceRoller) -> None:
        """Test roll with positive modifier."""
        result = dice_roller.roll("1d20+5")

        assert result.modifier == 5
        assert 6 <= result.total <= 25

    def test_multiple_dice(self, dice_roller: DiceRoller) -> None:
        """Test rolling multiple dice."""
        result = dice_roller.roll("3d6")

        assert 3 <= result.total <= 18
        assert len(result.dice) == 3
        assert result.natural is None

    def test_roll_attack_negative_modifier(self, dice_roller: DiceRoller) -> None:
        """Test attack rolls with a negative modifier."""
        result = dice_roller.roll_attack(-2)

        assert result.expression == "1d20-2"
        assert result.modifier == -2
        assert result.total == result.natural - 2

    def test_critical_and_fumble_flags(self, dice_roller: DiceRoller) -> None:
        """Test flags follow the natural d20."""
        for _ in range(50):
            result = dice_roller.roll_attack(3)
            assert result.is_critical == (result.natural == 20)
            assert result.is_fumble == (result.natural == 1)

    def test_roll_damage_strips_type(self, dice_roller: DiceRoller) -> None:
        """Test the damage-type suffix is ignored."""
        result = dice_roller.roll_damage("1d8+3 phy")

        assert result.expression == "1d8+3"
        assert 4 <= result.total <= 11
        assert result.modifier == 3

    @pytest.mark.parametrize("expression", ["", "   ", "1d", "banana"])
    def test_invalid_expression(self, dice_roller: DiceRoller, expression: str) -> None:
        """Test invalid expressions raise DiceRollError."""
        with pytest.raises(DiceRollError):
            dice_roller.roll(expression)


class TestDamageExpression:
    """Tests for damage line cleanup."""

    @pytest.mark.parametrize(
        ("damage", "expected"),
        [
            ("1d8+3 phy", "1d8+3"),
            ("2d6 mag", "2d6"),
            ("3d10 + 2 phy", "3d10+2"),
            ("4", "4"),
            ("1d6−1 phy", "1d6-1"),
            ("2d4 – 1 mag", "2d4-1"),
        ],
    )
    def test_damage_expression(self, damage: str, expected: str) -> None:
        """Test the leading dice expression is kept."""
        assert damage_expression(damage) == expected
