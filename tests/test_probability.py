import unittest
from itertools import combinations

from fair_dice.core.dice import Dice
from fair_dice.core.probability import win_probability, tie_fraction, probability_table


A = Dice((2, 2, 4, 4, 9, 9))
B = Dice((1, 1, 6, 6, 8, 8))
C = Dice((3, 3, 5, 5, 7, 7))
D = Dice((1, 2, 3, 4, 5, 6))


class TestProbability(unittest.TestCase):
    def test_known_pair(self):
        # 2s beat the 1s (4 pairs), 4s beat the 1s (4 pairs), 9s beat everything (12 pairs)
        self.assertAlmostEqual(win_probability(A, B), 20 / 36)
        self.assertAlmostEqual(win_probability(B, A), 16 / 36)

    def test_ties_are_not_wins(self):
        self.assertEqual(win_probability(D, D), 15 / 36)
        self.assertEqual(tie_fraction(D, D), 6 / 36)

    def test_probabilities_sum_to_one(self):
        for x, y in combinations([A, B, C, D], 2):
            total = win_probability(x, y) + win_probability(y, x) + tie_fraction(x, y)
            self.assertAlmostEqual(total, 1.0)

    def test_nontransitive_set(self):
        # A beats B, B beats C, C beats A
        self.assertGreater(win_probability(A, B), 0.5)
        self.assertGreater(win_probability(B, C), 0.5)
        self.assertGreater(win_probability(C, A), 0.5)

    def test_table_has_zero_diagonal(self):
        table = probability_table([A, B, C])
        self.assertEqual(len(table), 3)
        for i in range(3):
            self.assertEqual(table[i][i], 0.0)
        self.assertAlmostEqual(table[0][1], 20 / 36)
        self.assertAlmostEqual(table[1][0], 16 / 36)


if __name__ == '__main__':
    unittest.main()
