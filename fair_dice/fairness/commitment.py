
"""
commitment.py
Commit-reveal protocol for agreeing on a fair random number.
The computer commits to a number by publishing an HMAC of it, the human answers with their
own number, and only then are the number and key revealed so the HMAC can be checked.
Related modules:
- random_source.py: Supplies the number, the key and the HMAC.
- engine.py: Opens one commitment for the first move and one per throw.
"""

import hmac
import logging
from dataclasses import dataclass
from typing import Optional, Union

from .random_source import SecureRandomSource, calculate_hmac, KEY_LENGTH

logger = logging.getLogger(__name__)


class CommitmentMismatch(Exception):
    """
    Raised when a revealed (key, number) pair does not reproduce the HMAC shown before the reveal.
    """
    pass


@dataclass(frozen=True)
class Reveal:
    """
    The values disclosed after the counter-party has answered.
    Fields:
        key (bytes): Secret key of the round.
        number (int): The committed number.
    """
    key: bytes
    number: int

    @property
    def key_hex(self) -> str:
        return self.key.hex().upper()


@dataclass(frozen=True)
class Commitment:
    """
    One commit-reveal round.
    Fields:
        lower (int): Inclusive lower bound of the sampled number.
        upper (int): Exclusive upper bound of the sampled number.
        number (int): The secret number.
        key (bytes): The secret key.
        mac (str): Uppercase hex HMAC of str(number); safe to show immediately.
    """
    lower: int
    upper: int
    number: int
    key: bytes
    mac: str

    @property
    def key_hex(self) -> str:
        return self.key.hex().upper()

    def reveal(self) -> Reveal:
        return Reveal(key=self.key, number=self.number)


class FairCommitment:
    """
    Produces commitments to fair numbers drawn from a SecureRandomSource.
    """
    def __init__(self, random_source: Optional[SecureRandomSource] = None, key_length: int = KEY_LENGTH):
        self.random = random_source or SecureRandomSource()
        self.key_length = key_length

    def commit(self, upper: int, lower: int = 0) -> Commitment:
        """
        Sample a number in [lower, upper) and commit to it.
        Args:
            upper (int): Exclusive upper bound (3 for the first move, 8 for a throw).
            lower (int): Inclusive lower bound (0 for the first move, 2 for a throw).
        Returns:
            Commitment: The full round; only `mac` should be shown before the reveal.
        Raises:
            ValueError: If the range is empty.
            EntropyUnavailable: If secure randomness cannot be read.
        """
        number = self.random.uniform(lower, upper)
        key = self.random.new_secret_key(self.key_length)
        mac = self.random.calculate_hmac(key, str(number))
        logger.debug("committed to a number in [%d, %d): %s", lower, upper, mac)
        return Commitment(lower=lower, upper=upper, number=number, key=key, mac=mac)

    def reveal(self, commitment: Commitment) -> Reveal:
        """Expose the key and number of a commitment. Never re-samples."""
        return commitment.reveal()


def verify_commitment(key: Union[bytes, str], number: int, mac: str) -> None:
    """
    Recompute the HMAC of a revealed number and compare it with the one shown earlier.
    Args:
        key (bytes|str): Revealed key, raw or as hex text.
        number (int): Revealed number.
        mac (str): HMAC shown before the reveal.
    Raises:
        CommitmentMismatch: If the HMAC does not match.
    """
    try:
        expected = calculate_hmac(key, str(number))
    except ValueError as e:
        raise CommitmentMismatch(f"revealed key is not valid: {e}") from None
    shown = mac.strip().upper().encode("ascii", "replace")
    if not hmac.compare_digest(expected.encode("ascii"), shown):
        logger.error("commitment mismatch for number %s", number)
        raise CommitmentMismatch(f"HMAC of {number} is {expected}, but {mac} was shown")


def is_commitment_valid(key: Union[bytes, str], number: int, mac: str) -> bool:
    try:
        verify_commitment(key, number, mac)
    except CommitmentMismatch:
        return False
    return True
