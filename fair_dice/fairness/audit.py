
"""
audit.py
Batch checks of the commit-reveal protocol: runs many rounds, verifies every HMAC and
measures how far the committed numbers are from a uniform distribution.
Related modules:
- commitment.py: Rounds are produced and verified with FairCommitment / verify_commitment.
- scripts/fairness_audit.py: Command line wrapper.
"""

import logging
from collections import Counter
from typing import Any, Dict, Mapping, Optional

from .commitment import FairCommitment, is_commitment_valid

logger = logging.getLogger(__name__)


def chi_square(counts: Mapping[int, int], lower: int, upper: int) -> float:
    """
    Pearson chi-square statistic of observed counts against the uniform distribution on [lower, upper).
    """
    total = sum(counts.values())
    expected = total / (upper - lower)
    return sum((counts.get(v, 0) - expected) ** 2 / expected for v in range(lower, upper))


def run_audit(rounds: int, lower: int, upper: int, fair: Optional[FairCommitment] = None) -> Dict[str, Any]:
    """
    Run `rounds` commitments in [lower, upper) and verify each one after reveal.
    Args:
        rounds (int): Number of commit/reveal rounds.
        lower (int): Inclusive lower bound.
        upper (int): Exclusive upper bound.
        fair (FairCommitment|None): Commitment factory; OS-backed by default.
    Returns:
        dict: rounds, counts per value, out_of_range, mac_failures, chi_square, degrees_of_freedom.
    """
    fair = fair or FairCommitment()
    counts = Counter()
    out_of_range = 0
    mac_failures = 0
    for _ in range(rounds):
        commitment = fair.commit(upper, lower)
        reveal = fair.reveal(commitment)
        if not lower <= reveal.number < upper:
            out_of_range += 1
        if not is_commitment_valid(reveal.key, reveal.number, commitment.mac):
            mac_failures += 1
        counts[reveal.number] += 1
    if mac_failures:
        logger.error("%d of %d commitments failed verification", mac_failures, rounds)
    return {
        "rounds": rounds,
        "lower": lower,
        "upper": upper,
        "counts": {v: counts.get(v, 0) for v in range(lower, upper)},
        "out_of_range": out_of_range,
        "mac_failures": mac_failures,
        "chi_square": chi_square(counts, lower, upper) if rounds else 0.0,
        "degrees_of_freedom": upper - lower - 1,
    }
