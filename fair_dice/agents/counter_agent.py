from .base import Agent
from ..core.probability import win_probability
from . import register_agent


@register_agent("counter")
class CounterAgent(Agent):
    """
    Picks the die with the best odds. When the human has already selected, that means the
    highest win probability against the human's die; otherwise the best average against
    every other remaining die. Ties go to the lowest index.
    """

    def choose_index(self, view):
        remaining = list(view["public"].remaining)
        opponent = view.get("opponent_dice")
        if opponent is not None:
            scores = [win_probability(d, opponent) for d in remaining]
        elif len(remaining) == 1:
            return 0
        else:
            scores = [
                sum(win_probability(d, other) for j, other in enumerate(remaining) if j != i) / (len(remaining) - 1)
                for i, d in enumerate(remaining)
            ]
        return max(range(len(scores)), key=lambda i: (scores[i], -i))
