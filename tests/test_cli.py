import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from fair_dice.agents.random_agent import RandomAgent
from fair_dice.core.config import GameConfig
from fair_dice.core.engine import GameEngine
from fair_dice.fairness.commitment import CommitmentMismatch, FairCommitment
from helpers import ScriptedSource, make_dice_set

from UI import cli

SPECS = ["2,2,4,4,9,9", "1,1,6,6,8,8", "3,3,5,5,7,7"]
DICE = make_dice_set([(2, 2, 4, 4, 9, 9), (1, 1, 6, 6, 8, 8), (3, 3, 5, 5, 7, 7)])


def run_main(argv, inputs):
    out = io.StringIO()
    with mock.patch("builtins.input", side_effect=inputs), redirect_stdout(out):
        code = cli.main(argv)
    return code, out.getvalue()


class TestMain(unittest.TestCase):
    def test_too_few_dice(self):
        code, out = run_main(SPECS[:2], [])
        self.assertEqual(code, 1)
        self.assertIn("Error:", out)
        self.assertIn("Input values example", out)

    def test_malformed_dice(self):
        code, out = run_main(SPECS[:2] + ["1,2,3"], [])
        self.assertEqual(code, 1)
        self.assertIn("exactly 6 faces", out)

    def test_negative_face_is_invalid_dice(self):
        code, out = run_main(["-1,2,3,4,5,6", "1,2,3,4,5,6", "1,2,3,4,5,6"], [])
        self.assertEqual(code, 1)
        self.assertIn("Error: face values must be positive integers", out)
        self.assertIn("Input values example", out)

    def test_unknown_option_still_rejected(self):
        with self.assertRaises(SystemExit) as ctx, redirect_stderr(io.StringIO()):
            cli.main(SPECS + ["--verbose"])
        self.assertEqual(ctx.exception.code, 2)

    def test_unknown_agent(self):
        code, out = run_main(SPECS + ["--agent", "nash"], [])
        self.assertEqual(code, 1)
        self.assertIn("Unknown agent", out)

    def test_exit_at_first_prompt(self):
        code, out = run_main(SPECS, ["x"])
        self.assertEqual(code, 0)
        self.assertIn("(HMAC=", out)
        self.assertIn("Thanks for playing!", out)

    def test_help_then_exit(self):
        code, out = run_main(SPECS, ["?", "X"])
        self.assertEqual(code, 0)
        self.assertIn("Probability Table:", out)

    def test_end_of_input_exits_cleanly(self):
        code, _ = run_main(SPECS, EOFError)
        self.assertEqual(code, 0)


class TestPlay(unittest.TestCase):
    def test_full_game_output(self):
        engine = GameEngine(GameConfig(), DICE, FairCommitment(ScriptedSource([1, 4, 7])))
        agent = RandomAgent(rng=ScriptedSource([0]))
        out = io.StringIO()
        # guess, bad input, dice, computer throw number, human throw number
        inputs = ["1", "abc", "0", "2", "3"]
        with mock.patch("builtins.input", side_effect=inputs), redirect_stdout(out):
            cli.play(engine, agent, DICE)
        text = out.getvalue()
        self.assertIn("You guessed right", text)
        self.assertIn("You must type an integer number", text)
        self.assertIn("I choose the [1,1,6,6,8,8] dice.", text)
        self.assertEqual(text.count("HMAC verified"), 3)
        self.assertIn("You win (9 > 1)!", text)
        self.assertTrue(engine.is_terminal())

    def test_tampered_reveal_is_fatal(self):
        printer = cli.EventPrinter()
        printer.handle([{"type": "CommitmentShown", "lower": 0, "upper": 3, "mac": "00" * 32}])
        with self.assertRaises(CommitmentMismatch):
            printer.handle([{"type": "CommitmentRevealed", "number": 1, "key": "AB" * 32, "user_number": 0}])


class TestHelpTable(unittest.TestCase):
    def test_table_layout(self):
        text = cli.render_help_table(DICE)
        lines = text.splitlines()
        self.assertEqual(lines[0], "Probability Table:")
        self.assertTrue(lines[1].startswith("|User's Dice ↓"))
        self.assertIn("[2,2,4,4,9,9]", lines[1])
        self.assertIn("0.5556", text)
        self.assertIn("0.4444", text)
        # one divider under the header and one under each row
        self.assertEqual(sum(1 for l in lines if l.startswith("+")), 4)
        self.assertEqual(lines[3].count("0.0000"), 1)


if __name__ == '__main__':
    unittest.main()
