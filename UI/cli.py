import argparse
import logging
import sys
from typing import List, Optional, Sequence

from fair_dice.core.config import GameConfig
from fair_dice.core.dice import DiceSet, InvalidDiceSpec, parse_dice_set
from fair_dice.core.engine import GameEngine
from fair_dice.core.actions import GuessAction, SelectDiceAction, AddNumberAction
from fair_dice.core.probability import probability_table
from fair_dice.core.rules import HUMAN, COMPUTER
from fair_dice.fairness.commitment import CommitmentMismatch, verify_commitment
from fair_dice.fairness.random_source import EntropyUnavailable
from fair_dice.agents import choose_agent
from fair_dice.agents.base import Agent

logger = logging.getLogger(__name__)

USAGE_EXAMPLE = 'Input values example: fair-dice "2,2,4,4,9,9" "6,8,1,1,8,6" "7,5,3,7,5,3"'
CELL_WIDTH = 15
ROW_LABEL = "User's Dice ↓"


class ExitGame(Exception):
    """
    Raised when the user types X at any prompt.
    """
    pass


def render_help_table(dice: Sequence) -> str:
    """
    Render the probability table: the user's dice in rows, the opponent's in columns.
    Args:
        dice (sequence[Dice]): Dice given on the command line.
    Returns:
        str: Fixed-width text grid.
    """
    dice = list(dice)
    table = probability_table(dice)
    total_width = CELL_WIDTH * (len(dice) + 2) + len(dice)
    divider = "+" + "-" * (total_width - 2) + "+"
    header_cells = " | ".join(f"[{d}]".ljust(CELL_WIDTH) for d in dice)
    lines = [
        "Probability Table:",
        f"|{ROW_LABEL.ljust(CELL_WIDTH)}| {header_cells} |",
        divider,
    ]
    for d, row in zip(dice, table):
        cells = "".join(f"{p:.4f}".rjust(CELL_WIDTH) + " | " for p in row)
        lines.append(f"|[{d}]".ljust(CELL_WIDTH) + " | " + cells)
        lines.append(divider)
    return "\n".join(lines)


def prompt_choice(title: str, options: List[tuple], all_dice: DiceSet) -> int:
    """
    Prompt until the user picks one of the options, typing X to exit or ? for the help table.
    Args:
        title (str): Prompt heading.
        options (list[tuple]): (value, label) pairs.
        all_dice (DiceSet): Dice shown in the help table.
    Returns:
        int: The chosen value.
    Raises:
        ExitGame: If the user types X.
    """
    values = [v for v, _ in options]
    while True:
        print(title)
        for value, label in options:
            print(f"[{value}]: {label}")
        print("X - Exit")
        print("? - Help")
        raw = input("Your selection: ").strip()
        if raw.upper() == "X":
            raise ExitGame()
        if raw == "?":
            print(render_help_table(all_dice))
            continue
        try:
            choice = int(raw)
        except ValueError:
            print("You must type an integer number")
            continue
        if choice in values:
            return choice
        print("Invalid input. Please try again.")


class EventPrinter:
    """
    Prints engine events for the human and independently verifies every reveal
    against the HMAC that was shown before the human answered.
    """
    def __init__(self):
        self.shown_mac = None

    def handle(self, events) -> None:
        for ev in events:
            t = ev.get("type")
            if t == "CommitmentShown":
                self.shown_mac = ev["mac"]
                print(f"I selected a random value in the range {ev['lower']}..{ev['upper'] - 1}")
                print(f"(HMAC={ev['mac']})")
            elif t == "CommitmentRevealed":
                print(f"My number is {ev['number']} (KEY={ev['key']}).")
                verify_commitment(ev["key"], ev["number"], self.shown_mac)
                print("HMAC verified: the number was fixed before you answered.")
                self.shown_mac = None
            elif t == "FirstMoveDecided":
                if ev["first_player"] == HUMAN:
                    print("You guessed right, you are first to choose!")
                else:
                    print("I make the first move.")
            elif t == "DiceSelected":
                who = "You choose" if ev["player"] == HUMAN else "I choose"
                print(f"{who} the [{','.join(str(f) for f in ev['dice'])}] dice.")
            elif t == "ThrowResolved":
                print(f"The result is {ev['user_number']} + {ev['number']} = {ev['face_index']} (mod 6).")
                whose = "Your" if ev["player"] == HUMAN else "My"
                print(f"{whose} throw is {ev['face']}.")
            elif t == "RoundEnded":
                human, computer = ev["human_throw"], ev["computer_throw"]
                if ev["winner"] == HUMAN:
                    print(f"You win ({human} > {computer})!")
                elif ev["winner"] == COMPUTER:
                    print(f"I win ({computer} > {human})!")
                else:
                    print(f"It's a draw ({human} = {computer}).")


def play(engine: GameEngine, agent: Agent, all_dice: DiceSet) -> None:
    """
    Run one game in the terminal: guess for the first move, select dice, then both throws.
    Raises:
        ExitGame: If the user exits at a prompt.
        CommitmentMismatch: If a revealed number does not match its HMAC.
    """
    cfg = engine.config
    printer = EventPrinter()
    public = engine.state.public

    print("Let's determine who makes the first move.")
    engine.start()
    printer.handle(engine.pop_events())
    guess = prompt_choice(
        "Try to guess my selection.",
        [(n, str(n)) for n in range(cfg.first_move_lower, cfg.first_move_upper)],
        all_dice,
    )
    engine.apply_action(HUMAN, GuessAction(guess))
    printer.handle(engine.pop_events())

    while public.phase == "SELECTING":
        if public.current_player == COMPUTER:
            engine.apply_action(COMPUTER, agent.choose_action(engine.get_view(COMPUTER)))
        else:
            index = prompt_choice(
                "Choose your dice:",
                [(i, str(d)) for i, d in enumerate(public.remaining)],
                all_dice,
            )
            engine.apply_action(HUMAN, SelectDiceAction(index))
        printer.handle(engine.pop_events())

    while public.phase == "THROWING":
        owner = "my" if public.throw_owner == COMPUTER else "your"
        print(f"It's time for {owner} throw.")
        number = prompt_choice(
            f"Add your number modulo {cfg.face_count}.",
            [(n, str(n)) for n in range(cfg.throw_lower, cfg.throw_upper)],
            all_dice,
        )
        engine.apply_action(HUMAN, AddNumberAction(number))
        printer.handle(engine.pop_events())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fair-dice",
        description="Non-transitive dice game with provably fair random throws.",
        epilog=USAGE_EXAMPLE,
    )
    parser.add_argument("dice", nargs="*", help="dice specifications: six comma separated positive integers each")
    parser.add_argument("--agent", default=GameConfig.agent, help="computer dice selection strategy (random, counter)")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Console entry point.
    Returns:
        int: 0 on graceful exit, 1 on malformed dice input, 3 on a failed HMAC check,
        4 when secure randomness is unavailable.
    """
    parser = build_parser()
    args, extra = parser.parse_known_args(argv)
    # a spec starting with a negative face looks like an option to argparse
    unknown = [t for t in extra if "," not in t]
    if unknown:
        parser.error(f"unrecognized arguments: {' '.join(unknown)}")
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    cfg = GameConfig(agent=args.agent)

    try:
        dice = parse_dice_set(args.dice + extra, cfg.min_dice)
    except InvalidDiceSpec as e:
        print(f"Error: {e}")
        print(USAGE_EXAMPLE)
        return 1
    try:
        agent = choose_agent(cfg.agent)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    try:
        play(GameEngine(cfg, dice), agent, dice)
    except (ExitGame, EOFError, KeyboardInterrupt):
        print("Thanks for playing!")
    except CommitmentMismatch as e:
        logger.error("fairness check failed: %s", e)
        print(f"Verification failed: {e}")
        return 3
    except EntropyUnavailable as e:
        logger.error("%s", e)
        print(f"Error: {e}")
        return 4
    return 0


if __name__ == "__main__":
    sys.exit(main())
