from .base import Agent
from ..fairness.random_source import SecureRandomSource
from . import register_agent


@register_agent("random")
class RandomAgent(Agent):
    """
    Selects one of the remaining dice uniformly at random using the secure random source.
    """
    def __init__(self, rng: SecureRandomSource = None):
        self.rng = rng or SecureRandomSource()

    def choose_index(self, view):
        remaining = view["public"].remaining
        return self.rng.uniform(0, len(remaining))
