
"""
config.py
Defines the GameConfig dataclass, which centralizes the numeric rules of the fair dice game.
Related modules:
- engine.py: Uses GameConfig for commitment ranges and the throw modulus.
- dice.py: min_dice is checked when parsing the command line.
"""

from dataclasses import dataclass

from .dice import FACE_COUNT, MIN_DICE


@dataclass(frozen=True)
class GameConfig:
    """
    Centralizes all numeric constraints for a game.
    Fields:
        face_count (int): Modulus used to turn the combined numbers into a face index.
        min_dice (int): Minimum number of dice on the command line.
        first_move_lower (int): Inclusive lower bound of the "who selects first" number.
        first_move_upper (int): Exclusive upper bound of the "who selects first" number.
        throw_lower (int): Inclusive lower bound of each throw number.
        throw_upper (int): Exclusive upper bound of each throw number.
        key_length (int): Bytes of entropy requested per secret key.
        agent (str): Name of the computer's dice selection agent.
    """
    face_count: int = FACE_COUNT
    min_dice: int = MIN_DICE
    first_move_lower: int = 0
    first_move_upper: int = 3
    throw_lower: int = 2
    throw_upper: int = 8
    key_length: int = 32
    agent: str = "random"
