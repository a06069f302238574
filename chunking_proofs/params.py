"""
Protocol Parameters
===================

Fixed parameters of the proof of correct chunking. Prover and verifier must
agree on every value here; changing CHUNK_SIZE on one side only silently
breaks soundness.

Notation:
---------
- l = NUM_ZK_REPETITIONS parallel repetitions share one challenge
- each per-repetition challenge has CHALLENGE_BITS = ceil(SECURITY_LEVEL / l)
- CHUNK_SIZE is the numeric base of one chunk of the forward-secure
  encryption scheme; a 256-bit share splits into NUM_CHUNKS chunks
"""

from typing import Tuple

SECURITY_LEVEL = 256

# Referred to as l in the NIDKG paper (Section 6.5)
NUM_ZK_REPETITIONS = 32

CHALLENGE_BITS = (SECURITY_LEVEL + NUM_ZK_REPETITIONS - 1) // NUM_ZK_REPETITIONS

# Bytes of oracle output consumed per challenge
CHALLENGE_BYTES = (CHALLENGE_BITS + 7) // 8

CHALLENGE_MASK = (1 << CHALLENGE_BITS) - 1

CHUNK_BYTES = 2
CHUNK_SIZE = 1 << (8 * CHUNK_BYTES)
CHUNK_MIN = 0
CHUNK_MAX = CHUNK_SIZE - 1

SCALAR_BYTES = 32
NUM_CHUNKS = (SCALAR_BYTES + CHUNK_BYTES - 1) // CHUNK_BYTES

# Rejection sampling expects one attempt; more than this many is suspicious
REJECTION_WARNING_THRESHOLD = 8

assert CHALLENGE_BITS * NUM_ZK_REPETITIONS >= SECURITY_LEVEL
assert CHALLENGE_MASK < (1 << (8 * CHALLENGE_BYTES))
# A challenge must fit the 64-bit word the reference implementations mask in
assert CHALLENGE_BYTES < 8


def chunking_bounds(n: int, m: int) -> Tuple[int, int]:
    """
    Compute the response bounds (ss, zz) for n receivers and m chunks each.

    ss = n · m · (CHUNK_SIZE - 1) · CHALLENGE_MASK
    zz = 2 · l · ss

    ss is the largest value Σ_ij e_ijk · s_ij can reach for an honest witness;
    zz is both the rejection-sampling ceiling and the verifier's bound.
    """
    ss = n * m * (CHUNK_SIZE - 1) * CHALLENGE_MASK
    zz = 2 * NUM_ZK_REPETITIONS * ss
    return ss, zz
