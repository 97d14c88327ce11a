from abc import ABC, abstractmethod
from typing import Any

from ..core.actions import SelectDiceAction


class Agent(ABC):
    """
    Abstract base class for the computer's dice selection strategies.
    Agents implement choose_index(view), which receives the computer's view of the game
    and returns the index of a die in the remaining set.
    """

    @abstractmethod
    def choose_index(self, view: Any) -> int:
        """
        Args:
            view (dict): Player view with keys 'public', 'my_dice', 'opponent_dice' and 'config'.
        Returns:
            int: Index into view['public'].remaining.
        """
        raise NotImplementedError

    def choose_action(self, view: Any) -> SelectDiceAction:
        return SelectDiceAction(self.choose_index(view))
