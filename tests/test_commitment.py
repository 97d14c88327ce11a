import unittest

from fair_dice.fairness.commitment import (
    CommitmentMismatch,
    FairCommitment,
    is_commitment_valid,
    verify_commitment,
)
from fair_dice.fairness.random_source import SecureRandomSource, calculate_hmac
from helpers import ScriptedSource


class TestFairCommitment(unittest.TestCase):
    """
    Tests for the commit-reveal round trip: every committed number verifies after reveal,
    reveals never re-sample, and tampered values are rejected.
    """

    def test_round_trip_first_move_values(self):
        fair = FairCommitment(ScriptedSource([0, 1, 2]))
        for expected in (0, 1, 2):
            c = fair.commit(3, 0)
            self.assertEqual(c.number, expected)
            self.assertEqual((c.lower, c.upper), (0, 3))
            r = fair.reveal(c)
            self.assertEqual(calculate_hmac(r.key, str(r.number)), c.mac)
            verify_commitment(r.key, r.number, c.mac)

    def test_round_trip_throw_values(self):
        fair = FairCommitment(ScriptedSource(range(2, 8)))
        for expected in range(2, 8):
            c = fair.commit(8, 2)
            r = c.reveal()
            self.assertEqual(r.number, expected)
            verify_commitment(r.key_hex, r.number, c.mac)

    def test_commit_with_os_source_stays_in_range(self):
        fair = FairCommitment()
        for _ in range(200):
            c = fair.commit(8, 2)
            self.assertIn(c.number, range(2, 8))
            self.assertEqual(len(c.key), 32)
            self.assertTrue(is_commitment_valid(c.key, c.number, c.mac))

    def test_reveal_is_idempotent(self):
        fair = FairCommitment(SecureRandomSource())
        c = fair.commit(3)
        first = fair.reveal(c)
        self.assertEqual(fair.reveal(c), first)
        self.assertEqual(c.reveal(), first)
        self.assertEqual(first.number, c.number)

    def test_fresh_key_per_commitment(self):
        fair = FairCommitment()
        self.assertNotEqual(fair.commit(3).key, fair.commit(3).key)

    def test_wrong_number_is_mismatch(self):
        fair = FairCommitment(ScriptedSource([4]))
        c = fair.commit(8, 2)
        with self.assertRaises(CommitmentMismatch):
            verify_commitment(c.key, 5, c.mac)
        self.assertFalse(is_commitment_valid(c.key, 5, c.mac))

    def test_wrong_key_is_mismatch(self):
        fair = FairCommitment(ScriptedSource([1, 1]))
        a = fair.commit(3)
        b = fair.commit(3)
        with self.assertRaises(CommitmentMismatch):
            verify_commitment(b.key, a.number, a.mac)

    def test_lowercase_mac_is_accepted(self):
        c = FairCommitment().commit(3)
        verify_commitment(c.key_hex.lower(), c.number, c.mac.lower())

    def test_non_ascii_mac_is_mismatch(self):
        c = FairCommitment().commit(3)
        with self.assertRaises(CommitmentMismatch):
            verify_commitment(c.key, c.number, "\u00e9" * 64)
        self.assertFalse(is_commitment_valid(c.key, c.number, "\u00e9" * 64))

    def test_key_that_is_not_hex_is_mismatch(self):
        c = FairCommitment().commit(3)
        for bad_key in ("hello", "\u043a\u043b\u044e\u0447", c.key_hex[:-1]):
            with self.assertRaises(CommitmentMismatch):
                verify_commitment(bad_key, c.number, c.mac)
            self.assertFalse(is_commitment_valid(bad_key, c.number, c.mac))

    def test_empty_range(self):
        with self.assertRaises(ValueError):
            FairCommitment().commit(2, 2)


if __name__ == '__main__':
    unittest.main()
