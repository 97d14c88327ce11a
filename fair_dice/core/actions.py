
"""
actions.py
Defines the base Action type and the moves a player can make in the fair dice game.
Related modules:
- engine.py: Consumes Action objects to update game state.
"""

from dataclasses import dataclass


class Action:
    """
    Base class for all game actions.
    """
    pass


@dataclass(frozen=True)
class GuessAction(Action):
    """
    The human's guess of the computer's committed "who selects first" number.
    Args:
        number (int): Guess in [first_move_lower, first_move_upper).
    """
    number: int


@dataclass(frozen=True)
class SelectDiceAction(Action):
    """
    Select a die from the remaining set.
    Args:
        index (int): Position in the remaining DiceSet.
    """
    index: int


@dataclass(frozen=True)
class AddNumberAction(Action):
    """
    The human's number added to the computer's committed number for a throw.
    Args:
        number (int): Value in [throw_lower, throw_upper).
    """
    number: int
