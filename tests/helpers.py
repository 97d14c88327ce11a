import random

from fair_dice.core.dice import Dice, DiceSet
from fair_dice.fairness.random_source import SecureRandomSource


class ScriptedSource(SecureRandomSource):
    """
    SecureRandomSource whose uniform() returns queued numbers. Keys still come from a seeded byte stream.
    """
    def __init__(self, numbers, seed=0):
        super().__init__(entropy=random.Random(seed).randbytes)
        self.numbers = list(numbers)

    def uniform(self, low, high):
        return self.numbers.pop(0)


def byte_stream(values):
    """Entropy function returning each value as 8 little-endian bytes, in order."""
    it = iter(values)

    def entropy(n):
        return next(it).to_bytes(n, "little")
    return entropy


def make_dice_set(dice):
    """Build a DiceSet from face tuples (or Dice instances)."""
    return DiceSet(tuple(d if isinstance(d, Dice) else Dice(tuple(d)) for d in dice))
