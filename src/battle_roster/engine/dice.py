"""Dice rolling for adversary attacks and damage.

Rolls are made with the d20 library. The roster records the results in
an adversary's last-roll cache and in the roll history.

Catalog damage lines carry a damage-type suffix (``"1d8+3 phy"``). Only
the leading dice expression is rolled.
"""

from __future__ import annotations

import random
import re
from dataclasses import dataclass
from typing import Any

import d20

from battle_roster.core.exceptions import DiceRollError
from battle_roster.core.logging import get_logger
from battle_roster.engine.parsing import normalize_minus_signs


logger = get_logger(__name__)

_DICE_EXPRESSION = re.compile(r"^\s*([0-9dD+\-\s]+)")


@dataclass(frozen=True)
class DiceExpression:
    """A rolled dice expression.

    Attributes:
        expression: The expression that was rolled.
        total: The total result of the roll.
        dice: Individual kept dice results.
        natural: First d20 result, for attack rolls.
        modifier: Static modifier applied.
        is_critical: Whether a natural 20 was rolled.
        is_fumble: Whether a natural 1 was rolled.
    """

    expression: str
    total: int
    dice: list[int]
    natural: int | None
    modifier: int
    is_critical: bool
    is_fumble: bool


def damage_expression(damage: str) -> str:
    """Strip the damage-type suffix from a catalog damage line.

    Example:
        >>> damage_expression("2d6+3 phy")
        '2d6+3'
    """
    damage = normalize_minus_signs(damage)
    match = _DICE_EXPRESSION.match(damage)
    if not match:
        return damage.strip()
    return match.group(1).replace(" ", "").rstrip("+-")


class DiceRoller:
    """Roll attack and damage dice with the d20 library.

    Example:
        >>> roller = DiceRoller(seed=7)
        >>> result = roller.roll_attack(2)
        >>> 3 <= result.total <= 22
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
        """
        self._seed = seed
        if seed is not None:
            random.seed(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    def roll(self, expression: str) -> DiceExpression:
        """Roll a dice expression.

        Args:
            expression: Dice expression (e.g. '1d20+2', '2d6+3').

        Returns:
            DiceExpression containing roll results.

        Raises:
            DiceRollError: If the expression is empty or invalid.
        """
        if not expression or not expression.strip():
            raise DiceRollError("Empty dice expression", expression=expression)

        try:
            result = d20.roll(expression)
        except d20.RollError as exc:
            raise DiceRollError(
                f"Invalid dice expression: {exc}",
                expression=expression,
            ) from exc

        dice_values = self._extract_dice_values(result.expr)
        natural = self._first_d20(result.expr)
        modifier = result.total - sum(dice_values)

        rolled = DiceExpression(
            expression=expression,
            total=result.total,
            dice=dice_values,
            natural=natural,
            modifier=modifier,
            is_critical=natural == 20,
            is_fumble=natural == 1,
        )
        logger.debug(
            "Dice rolled",
            expression=expression,
            total=rolled.total,
            is_critical=rolled.is_critical,
        )
        return rolled

    def roll_attack(self, modifier: int) -> DiceExpression:
        """Roll ``1d20`` plus an attack modifier."""
        sign = "+" if modifier >= 0 else ""
        return self.roll(f"1d20{sign}{modifier}")

    def roll_damage(self, damage: str) -> DiceExpression:
        """Roll a catalog damage line, ignoring its damage-type suffix."""
        return self.roll(damage_expression(damage))

    def _extract_dice_values(self, expr: Any) -> list[int]:
        values: list[int] = []

        def traverse(node: Any) -> None:
            if isinstance(node, d20.Dice):
                for die in node.values:
                    if die.kept:
                        values.append(die.number)
            elif hasattr(node, "children"):
                for child in node.children:
                    traverse(child)

        traverse(expr)
        return values

    def _first_d20(self, expr: Any) -> int | None:
        found: list[int] = []

        def traverse(node: Any) -> None:
            if found:
                return
            if isinstance(node, d20.Dice):
                if node.size == 20:
                    kept = [die.number for die in node.values if die.kept]
                    if kept:
                        found.append(kept[0])
            elif hasattr(node, "children"):
                for child in node.children:
                    traverse(child)

        traverse(expr)
        return found[0] if found else None


__all__ = [
    "DiceExpression",
    "DiceRoller",
    "damage_expression",
]
