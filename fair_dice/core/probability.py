
"""
probability.py
Win probabilities between custom dice, used by the help table and the counter agent.
Related modules:
- dice.py: Dice faces compared here.
"""

from itertools import product
from typing import List, Sequence

from .dice import Dice


def win_probability(dice_a: Dice, dice_b: Dice) -> float:
    """
    Probability that a random face of dice_a is strictly greater than a random face of dice_b.
    Ties are not wins. win_probability(b, a) is not 1 - win_probability(a, b) when ties exist.
    Args:
        dice_a (Dice): First die.
        dice_b (Dice): Second die.
    Returns:
        float: Value in [0, 1].
    """
    wins = sum(1 for a, b in product(dice_a.faces, dice_b.faces) if a > b)
    return wins / (len(dice_a.faces) * len(dice_b.faces))


def tie_fraction(dice_a: Dice, dice_b: Dice) -> float:
    ties = sum(1 for a, b in product(dice_a.faces, dice_b.faces) if a == b)
    return ties / (len(dice_a.faces) * len(dice_b.faces))


def probability_table(dice: Sequence[Dice]) -> List[List[float]]:
    """
    Square matrix of win probabilities; row i is dice[i] against every column die.
    The diagonal is 0.0 and is not computed.
    """
    return [
        [0.0 if i == j else win_probability(row, col) for j, col in enumerate(dice)]
        for i, row in enumerate(dice)
    ]
