
"""
dice.py
Defines the custom six-faced Dice, the DiceSet the players pick from, and parsing of
dice specifications such as "2,2,4,4,9,9".
Related modules:
- probability.py: Compares faces of two Dice.
- engine.py: Transfers Dice out of the DiceSet as players select them.
"""

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

FACE_COUNT = 6
MIN_DICE = 3


class InvalidDiceSpec(ValueError):
    """
    Raised for a die without exactly 6 positive integer faces, or a set with too few dice.
    """
    pass


@dataclass(frozen=True)
class Dice:
    """
    A die defined by its ordered face values. Duplicates are allowed.
    Args:
        faces (tuple[int]): Exactly 6 positive integers.
    """
    faces: Tuple[int, ...]

    def __post_init__(self):
        faces = tuple(self.faces)
        if len(faces) != FACE_COUNT:
            raise InvalidDiceSpec(f"a die must have exactly {FACE_COUNT} faces, got {len(faces)}")
        for f in faces:
            if isinstance(f, bool) or not isinstance(f, int) or f <= 0:
                raise InvalidDiceSpec(f"face values must be positive integers, got {f!r}")
        object.__setattr__(self, "faces", faces)

    def face_at(self, index: int) -> int:
        return self.faces[index]

    def __str__(self) -> str:
        return ",".join(str(f) for f in self.faces)


def parse_dice(text: str) -> Dice:
    """
    Parse one comma separated dice specification.
    Args:
        text (str): e.g. "2,2,4,4,9,9".
    Returns:
        Dice: The parsed die.
    Raises:
        InvalidDiceSpec: On non-integer values or a bad face count.
    """
    try:
        faces = tuple(int(part.strip()) for part in text.split(","))
    except ValueError:
        raise InvalidDiceSpec(f"'{text}' is not a comma separated list of integers") from None
    return Dice(faces)


@dataclass(frozen=True)
class DiceSet:
    """
    Immutable ordered collection of dice still available for selection.
    """
    dice: Tuple[Dice, ...] = ()

    def __len__(self) -> int:
        return len(self.dice)

    def __iter__(self) -> Iterator[Dice]:
        return iter(self.dice)

    def __getitem__(self, index: int) -> Dice:
        return self.dice[index]

    def take(self, index: int) -> Tuple[Dice, "DiceSet"]:
        """
        Remove a die from the set.
        Args:
            index (int): Position of the die.
        Returns:
            tuple: (selected Dice, new DiceSet without it). This set is left unchanged.
        Raises:
            IndexError: If index is out of range.
        """
        if not 0 <= index < len(self.dice):
            raise IndexError(f"the dice {index} doesn't exist in the list")
        selected = self.dice[index]
        return selected, DiceSet(self.dice[:index] + self.dice[index + 1:])


def parse_dice_set(args: Sequence[str], min_count: int = MIN_DICE) -> DiceSet:
    """
    Parse the dice specifications given on the command line.
    Args:
        args (list[str]): One specification per die.
        min_count (int): Minimum number of dice required.
    Returns:
        DiceSet: The parsed dice, in argument order.
    Raises:
        InvalidDiceSpec: If fewer than min_count dice are given or any die is invalid.
    """
    if len(args) < min_count:
        raise InvalidDiceSpec(f"At least {min_count} dice are required, got {len(args)}")
    return DiceSet(tuple(parse_dice(a) for a in args))
