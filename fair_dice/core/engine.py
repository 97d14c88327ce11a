
"""
engine.py
Implements the GameEngine class, which drives a fair dice game: deciding who selects first,
dice selection, and the two committed throws. It manages state, applies actions, enforces
rules, and emits events.
Related modules:
- config.py: GameConfig is used to configure the engine.
- state.py: GameState, PlayerState, PublicState hold all game data.
- actions.py: Actions are applied to update state.
- rules.py: Throw arithmetic and outcome.
- fairness/commitment.py: Every hidden number is a Commitment.
"""

import logging
from typing import Dict, Optional

from .config import GameConfig
from .dice import DiceSet
from .state import PlayerState, PublicState, GameState
from .actions import Action, GuessAction, SelectDiceAction, AddNumberAction
from .rules import HUMAN, COMPUTER, combine_numbers, decide_winner
from ..fairness.commitment import FairCommitment, Commitment

logger = logging.getLogger(__name__)


class IllegalMoveError(Exception):
    """
    Raised when an illegal action is attempted (wrong phase, wrong player, value out of range).
    """
    pass


class GameEngine:
    """
    Main state machine for the fair dice game.
    The human is player 0 and the computer is player 1. The engine never chooses for the
    computer; the caller asks an agent and applies its SelectDiceAction like any other move.
    """
    def __init__(self, config: GameConfig, dice: DiceSet, fair: Optional[FairCommitment] = None):
        """
        Args:
            config (GameConfig): Game configuration.
            dice (DiceSet): All dice available for selection.
            fair (FairCommitment|None): Commitment factory; a fresh OS-backed one by default.
        """
        if len(dice) < 2:
            raise ValueError("at least two dice are needed to play")
        self.config = config
        self.fair = fair or FairCommitment(key_length=config.key_length)
        human = PlayerState(player_id=HUMAN)
        computer = PlayerState(player_id=COMPUTER, agent_id=config.agent)
        self.state = GameState(config=config, players=(human, computer), public=PublicState(remaining=dice))
        self._events = []
        self.turn_log = []

    def _emit(self, event: Dict):
        self._events.append(event)

    def pop_events(self):
        """
        Return and clear all emitted events since last call.
        """
        ev = list(self._events)
        self._events.clear()
        return ev

    def get_events(self):
        """
        Return all events emitted so far (does not clear).
        """
        return list(self._events)

    def _snapshot(self, actor: int = None, action: Dict = None):
        """
        Internal: record public state after a step. Secrets of an open commitment are never included.
        """
        public = self.state.public
        players_snapshot = [
            {
                "player_id": p.player_id,
                "dice": None if p.dice is None else list(p.dice.faces),
                "throw": p.throw,
                "agent_id": p.agent_id,
            }
            for p in self.state.players
        ]
        snap = {
            "actor": actor,
            "action": action,
            "public": {
                "phase": public.phase,
                "current_player": public.current_player,
                "first_player": public.first_player,
                "throw_owner": public.throw_owner,
                "commitment_mac": public.commitment_mac,
                "remaining": [list(d.faces) for d in public.remaining],
                "winner": public.winner,
            },
            "players": players_snapshot,
        }
        self.turn_log.append(snap)
        return snap

    def _open_commitment(self, lower: int, upper: int, purpose: str) -> Commitment:
        commitment = self.fair.commit(upper, lower)
        self.state.commitment = commitment
        self.state.public.commitment_mac = commitment.mac
        self._emit({"type": "CommitmentShown", "purpose": purpose, "lower": lower, "upper": upper, "mac": commitment.mac})
        return commitment

    def _close_commitment(self, purpose: str, user_number: int) -> Commitment:
        commitment = self.state.commitment
        reveal = self.fair.reveal(commitment)
        self.state.commitment = None
        self.state.public.commitment_mac = None
        self._emit({
            "type": "CommitmentRevealed",
            "purpose": purpose,
            "user_number": user_number,
            "number": reveal.number,
            "key": reveal.key_hex,
            "mac": commitment.mac,
        })
        return commitment

    def start(self) -> None:
        """
        Start the game: commit to the "who selects first" number and wait for the human's guess.
        """
        if self.state.public.phase != "NOT_STARTED":
            raise IllegalMoveError("Game already started")
        cfg = self.config
        self.state.public.phase = "FIRST_MOVE"
        self.state.public.current_player = HUMAN
        self._open_commitment(cfg.first_move_lower, cfg.first_move_upper, "first_move")
        logger.info("game started with %d dice", len(self.state.public.remaining))
        self._snapshot(actor=None, action=None)

    def get_view(self, player_id: int):
        """
        Player-specific view of the game. Contains no unrevealed secrets.
        """
        opponent = self.state.players[1 - player_id]
        return {
            "player_id": player_id,
            "public": self.state.public,
            "my_dice": self.state.players[player_id].dice,
            "opponent_dice": opponent.dice,
            "config": self.config,
        }

    def apply_action(self, player_id: int, action: Action) -> None:
        """
        Apply an action for the given player, updating state and emitting events.
        Args:
            player_id (int): HUMAN or COMPUTER.
            action (Action): GuessAction, SelectDiceAction or AddNumberAction.
        Raises:
            IllegalMoveError: If the action is invalid, out of range or not the player's turn.
        """
        public = self.state.public
        if public.phase in ("NOT_STARTED", "ENDED"):
            raise IllegalMoveError(f"Game is not in progress ({public.phase})")
        if player_id != public.current_player:
            raise IllegalMoveError("Not player's turn")

        if isinstance(action, GuessAction):
            action_ser = {"type": "Guess", "number": action.number}
            self._apply_guess(action)
        elif isinstance(action, SelectDiceAction):
            action_ser = {"type": "SelectDice", "index": action.index}
            self._apply_select(player_id, action)
        elif isinstance(action, AddNumberAction):
            action_ser = {"type": "AddNumber", "number": action.number}
            self._apply_add_number(action)
        else:
            raise IllegalMoveError("Unknown action")

        self._snapshot(actor=player_id, action=action_ser)

    def _apply_guess(self, action: GuessAction) -> None:
        cfg = self.config
        public = self.state.public
        if public.phase != "FIRST_MOVE":
            raise IllegalMoveError("Guessing is only allowed before dice selection")
        if not cfg.first_move_lower <= action.number < cfg.first_move_upper:
            raise IllegalMoveError(
                f"Guess must be between {cfg.first_move_lower} and {cfg.first_move_upper - 1}")
        commitment = self._close_commitment("first_move", action.number)
        first = HUMAN if action.number == commitment.number else COMPUTER
        public.first_player = first
        public.current_player = first
        public.phase = "SELECTING"
        self._emit({"type": "FirstMoveDecided", "first_player": first, "guess": action.number})
        logger.info("player %d selects first", first)

    def _apply_select(self, player_id: int, action: SelectDiceAction) -> None:
        public = self.state.public
        if public.phase != "SELECTING":
            raise IllegalMoveError("Dice selection is over")
        try:
            selected, remaining = public.remaining.take(action.index)
        except IndexError as e:
            raise IllegalMoveError(str(e)) from None
        self.state.players[player_id].dice = selected
        public.remaining = remaining
        self._emit({"type": "DiceSelected", "player": player_id, "index": action.index, "dice": list(selected.faces)})
        other = 1 - player_id
        if self.state.players[other].dice is None:
            public.current_player = other
            return
        self.state.throw_order = [COMPUTER, HUMAN]
        public.phase = "THROWING"
        self._start_throw()

    def _start_throw(self) -> None:
        cfg = self.config
        public = self.state.public
        public.throw_owner = self.state.throw_order.pop(0)
        # the human adds a number to every throw, including the computer's
        public.current_player = HUMAN
        self._open_commitment(cfg.throw_lower, cfg.throw_upper, "throw")
        logger.info("throw for player %d", public.throw_owner)

    def _apply_add_number(self, action: AddNumberAction) -> None:
        cfg = self.config
        public = self.state.public
        if public.phase != "THROWING":
            raise IllegalMoveError("No throw in progress")
        if not cfg.throw_lower <= action.number < cfg.throw_upper:
            raise IllegalMoveError(f"Number must be between {cfg.throw_lower} and {cfg.throw_upper - 1}")
        commitment = self._close_commitment("throw", action.number)
        owner = self.state.players[public.throw_owner]
        face_index = combine_numbers(action.number, commitment.number, cfg.face_count)
        owner.throw = owner.dice.face_at(face_index)
        self._emit({
            "type": "ThrowResolved",
            "player": owner.player_id,
            "user_number": action.number,
            "number": commitment.number,
            "face_index": face_index,
            "face": owner.throw,
        })
        if self.state.throw_order:
            self._start_throw()
            return
        self._resolve_game()

    def _resolve_game(self) -> None:
        public = self.state.public
        human, computer = self.state.players
        public.winner = decide_winner(human.throw, computer.throw)
        public.phase = "ENDED"
        public.current_player = None
        public.throw_owner = None
        self._emit({"type": "RoundEnded", "winner": public.winner, "human_throw": human.throw, "computer_throw": computer.throw})
        logger.info("game ended: winner=%s (%s vs %s)", public.winner, human.throw, computer.throw)

    def is_terminal(self) -> bool:
        """
        Returns True once both throws are resolved.
        """
        return self.state.public.phase == "ENDED"
