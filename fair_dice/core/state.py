
"""
state.py
Defines the game state dataclasses: PlayerState, PublicState, GameState.
Related modules:
- engine.py: Mutates and reads GameState during play.
- dice.py: Dice and DiceSet held by the state.
- commitment.py: The open Commitment of the current round.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .config import GameConfig
from .dice import Dice, DiceSet
from ..fairness.commitment import Commitment


@dataclass
class PlayerState:
    """
    Stores state for a single player.
    Fields:
        player_id (int): HUMAN (0) or COMPUTER (1).
        dice (Dice|None): Selected die, None until selection.
        throw (int|None): Face value thrown, None until the throw resolves.
        agent_id (str|None): Agent name for the computer.
    """
    player_id: int
    dice: Optional[Dice] = None
    throw: Optional[int] = None
    agent_id: Optional[str] = None


@dataclass
class PublicState:
    """
    Stores state visible to both players.
    Fields:
        phase (str): NOT_STARTED | FIRST_MOVE | SELECTING | THROWING | ENDED.
        current_player (int|None): Player expected to act.
        first_player (int|None): Player who selects a die first.
        throw_owner (int|None): Player whose throw is being resolved.
        commitment_mac (str|None): HMAC of the open commitment.
        remaining (DiceSet): Dice nobody has selected yet.
        winner (int|None): Winner once ENDED; None for a draw.
    """
    phase: str = "NOT_STARTED"
    current_player: Optional[int] = None
    first_player: Optional[int] = None
    throw_owner: Optional[int] = None
    commitment_mac: Optional[str] = None
    remaining: DiceSet = field(default_factory=DiceSet)
    winner: Optional[int] = None


@dataclass
class GameState:
    """
    Composite state: config, both players, public state and the hidden open commitment.
    """
    config: GameConfig
    players: Tuple[PlayerState, PlayerState]
    public: PublicState
    commitment: Optional[Commitment] = None
    throw_order: List[int] = field(default_factory=list)
