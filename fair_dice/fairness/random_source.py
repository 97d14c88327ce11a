
"""
random_source.py
Cryptographically strong randomness for the fair-play protocol: unbiased integer sampling,
secret key generation and the HMAC used to commit to a number.
Related modules:
- commitment.py: FairCommitment draws numbers and keys from SecureRandomSource.
- agents/random_agent.py: Uses uniform() to pick the computer's die.
"""

import hashlib
import hmac
import logging
import os
from typing import Callable, Union

logger = logging.getLogger(__name__)

INT64_MAX = 2 ** 63 - 1
KEY_LENGTH = 32


class EntropyUnavailable(RuntimeError):
    """
    Raised when the operating system entropy source cannot be read.
    There is no fallback to a non-cryptographic generator.
    """
    pass


def _key_text(key: Union[bytes, str]) -> str:
    if isinstance(key, str):
        try:
            key = bytes.fromhex(key.strip())
        except ValueError:
            raise ValueError("key must be hexadecimal text") from None
    return key.hex().upper()


def calculate_hmac(key: Union[bytes, str], message: str) -> str:
    """
    Compute HMAC-SHA3-256 of message, keyed with the uppercase hex text of key.
    The MAC key is the ASCII encoding of the hex string, not the raw key bytes;
    reveal-time verification depends on reproducing this exactly.
    Args:
        key (bytes|str): Raw key bytes, or the key already rendered as hex text.
        message (str): Message to authenticate (UTF-8 encoded).
    Raises:
        ValueError: If a text key is not hexadecimal.
    Returns:
        str: Uppercase hexadecimal digest.
    """
    mac_key = _key_text(key).encode("ascii")
    digest = hmac.new(mac_key, message.encode("utf-8"), hashlib.sha3_256)
    return digest.hexdigest().upper()


class SecureRandomSource:
    """
    Uniform integers and key material backed by the OS CSPRNG.
    Args:
        entropy (callable): Function returning n random bytes. Defaults to os.urandom.
    """
    def __init__(self, entropy: Callable[[int], bytes] = os.urandom):
        self._entropy = entropy

    def _read(self, n: int) -> bytes:
        try:
            data = self._entropy(n)
        except (OSError, NotImplementedError) as e:
            raise EntropyUnavailable(f"Secure random source failed: {e}") from e
        if data is None or len(data) != n:
            raise EntropyUnavailable(f"Secure random source returned {0 if data is None else len(data)} of {n} bytes")
        return data

    def uniform(self, low: int, high: int) -> int:
        """
        Return an integer uniformly distributed in [low, high).
        Draws 63-bit values and rejects the incomplete band at the top of the
        range so the final modulo reduction carries no bias.
        Args:
            low (int): Inclusive lower bound.
            high (int): Exclusive upper bound.
        Returns:
            int: The sampled value.
        Raises:
            ValueError: If high <= low.
            EntropyUnavailable: If the entropy source fails.
        """
        span = high - low
        if span <= 0:
            raise ValueError(f"empty range [{low}, {high})")
        if span > INT64_MAX:
            raise ValueError("range too wide for 63-bit sampling")
        limit = INT64_MAX - INT64_MAX % span
        rejected = 0
        while True:
            value = int.from_bytes(self._read(8), "little") & INT64_MAX
            if value < limit:
                break
            rejected += 1
        if rejected:
            logger.debug("uniform(%d, %d): rejected %d draw(s)", low, high, rejected)
        return low + value % span

    def new_secret_key(self, length: int = KEY_LENGTH) -> bytes:
        """
        Return fresh key material: `length` random bytes passed through SHA3-256.
        The result is always the 32-byte digest, whatever `length` is.
        """
        return hashlib.sha3_256(self._read(length)).digest()

    def calculate_hmac(self, key: Union[bytes, str], message: str) -> str:
        """Same as the module-level calculate_hmac; kept here so callers can use one object."""
        return calculate_hmac(key, message)
