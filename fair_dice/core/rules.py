
"""
rules.py
Helper functions for resolving throws: combining the two parties' numbers and comparing faces.
Related modules:
- engine.py: Uses these helpers in the throwing phase.
"""

from typing import Optional

HUMAN = 0
COMPUTER = 1


def combine_numbers(user_number: int, secret_number: int, modulus: int = 6) -> int:
    """
    Face index selected by a throw: (user_number + secret_number) % modulus.
    Neither party can steer the sum as long as one of the numbers is uniform.
    """
    return (user_number + secret_number) % modulus


def decide_winner(human_face: int, computer_face: int) -> Optional[int]:
    """
    Higher face wins.
    Returns:
        int|None: HUMAN, COMPUTER, or None for a draw.
    """
    if human_face > computer_face:
        return HUMAN
    if computer_face > human_face:
        return COMPUTER
    return None
