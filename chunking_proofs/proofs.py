"""
Proof Generation
================

This module implements the prover of the proof of correct chunking.

Protocol (Section 6.5 of the NIDKG paper):
------------------------------------------
First move:
    y0 ← HashToG1(random seed)
    β_k ← Z_p,  σ_k ← [-S, Z-1]             for k ∈ [l]
    bb_k = g^{β_k},  cc_k = y0^{β_k} · g^{σ_k}
First challenge:
    e_ijk ← ChunksOracle(instance, (y0, bb, cc))
Second move:
    z_s_k = Σ_ij e_ijk · s_ij + σ_k          (rejected and resampled if > Z)
    δ_i ← Z_p for i ∈ [0, n],  dd_i = g^{δ_i}
    Y = y0^{δ_0} · ∏_{i=1}^{n} y_i^{δ_i}
Second challenge:
    x ← Oracle(e, (z_s, dd, Y))
Responses:
    z_r_i  = δ_i + Σ_j r_j · Σ_k e_ijk · x^k
    z_β    = δ_0 + Σ_k β_k · x^k

S and Z are the bounds (ss, zz) from params.chunking_bounds.
"""

import logging
import random

from charm.toolbox.pairinggroup import ZR, G1
from typing import List

from .instance import ChunkingInstance, ChunkingWitness, ChunkingProof, FirstMoveChunking, SecondMoveChunking
from .oracles import ChunksOracle, chunking_proof_challenge_oracle
from .params import NUM_ZK_REPETITIONS, REJECTION_WARNING_THRESHOLD, chunking_bounds
from .utils import mul2, random_scalar, random_scalar_in_range, scalar_from_int, scalar_to_int, xpowers

logger = logging.getLogger(__name__)

DOMAIN_PROOF_OF_CHUNKING_Y0 = b"zk-proof-of-chunking-y0"


def _hash_y0(group, seed: bytes) -> G1:
    """y0 = HashToG1(len(domain) || domain || seed)."""
    data = len(DOMAIN_PROOF_OF_CHUNKING_Y0).to_bytes(8, 'big') + DOMAIN_PROOF_OF_CHUNKING_Y0 + seed
    return group.hash(data, G1)


def _responses_z_s(first_challenge: List[List[List[int]]], scalars_s: List[List[ZR]],
                   sigma: List[ZR], group) -> List[ZR]:
    """z_s_k = Σ_{i,j} e_ijk · s_ij + σ_k for every repetition k."""
    z_s = []
    for k in range(NUM_ZK_REPETITIONS):
        acc = group.init(ZR, 0)
        for e_i, s_i in zip(first_challenge, scalars_s):
            for e_ij, s_ij in zip(e_i, s_i):
                acc += group.init(ZR, e_ij[k]) * s_ij
        acc += sigma[k]
        z_s.append(acc)
    return z_s


def prove_chunking(instance: ChunkingInstance, witness: ChunkingWitness, rng=None) -> ChunkingProof:
    """
    Create a proof of correct chunking.

    Parameters
    ----------
    instance : ChunkingInstance
        The public instance (must pass check_instance())
    witness : ChunkingWitness
        The chunk values s_ij and randomizer exponents r_j
    rng : random.Random-like, optional
        Source of randomness providing randrange() and getrandbits().
        Defaults to random.SystemRandom().

    Returns
    -------
    ChunkingProof
        The proof (y0, bb, cc, dd, yy, z_r, z_s, z_beta)

    Raises
    ------
    InvalidInstanceError
        If the instance is malformed. Callers are expected to validate the
        instance first, so this signals a programming error.

    Notes
    -----
    The rejection-sampling loop has no iteration cap. Each repetition is
    rejected with probability below 1/(2l), so a few attempts are normal.
    """
    instance.check_instance()
    if rng is None:
        rng = random.SystemRandom()

    group = instance.group
    g1 = instance.generator
    spec_n = instance.num_receivers
    spec_m = instance.num_chunks

    ss, zz = chunking_bounds(spec_n, spec_m)
    # σ ranges over [-ss, zz - 1], i.e. zz + ss integers
    sigma_range = zz - 1 + ss + 1
    p_sub_s = scalar_from_int(-ss, group)

    # y0 <- getRandomG1
    y0 = _hash_y0(group, rng.getrandbits(256).to_bytes(32, 'little'))

    # β is fixed across rejection attempts
    beta = [random_scalar(group, rng) for _ in range(NUM_ZK_REPETITIONS)]
    bb = [g1 ** beta_k for beta_k in beta]

    attempts = 0
    while True:
        attempts += 1
        if attempts > REJECTION_WARNING_THRESHOLD:
            logger.warning("Chunking proof rejection sampling on attempt %d", attempts)

        sigma = [random_scalar_in_range(group, rng, sigma_range) + p_sub_s
                 for _ in range(NUM_ZK_REPETITIONS)]
        cc = [mul2(y0, beta_k, g1, sigma_k) for beta_k, sigma_k in zip(beta, sigma)]

        first_move = FirstMoveChunking(group, y0, bb, cc)
        first_challenge = ChunksOracle(instance, first_move).get_all_chunks(spec_n, spec_m)

        z_s = _responses_z_s(first_challenge, witness.scalars_s, sigma, group)
        if all(scalar_to_int(z_sk) <= zz for z_sk in z_s):
            break
        logger.debug("Chunking proof attempt %d rejected", attempts)

    # δ_0 pairs with y0, δ_i with public_keys[i-1]
    delta = [random_scalar(group, rng) for _ in range(spec_n + 1)]
    dd = [g1 ** delta_i for delta_i in delta]
    yy = y0 ** delta[0]
    for pk_i, delta_i in zip(instance.public_keys, delta[1:]):
        yy *= pk_i ** delta_i

    second_move = SecondMoveChunking(group, z_s, dd, yy)
    second_challenge = chunking_proof_challenge_oracle(first_challenge, second_move)
    xpows = xpowers(second_challenge, NUM_ZK_REPETITIONS, group)

    z_r = []
    for delta_i, e_i in zip(delta[1:], first_challenge):
        acc = group.init(ZR, 0)
        # Powers of x restart at x^1 for every chunk column
        for e_ij, r_j in zip(e_i, witness.scalars_r):
            for e_ijk, x_k in zip(e_ij, xpows):
                acc += group.init(ZR, e_ijk) * r_j * x_k
        z_r.append(delta_i + acc)

    acc = group.init(ZR, 0)
    for beta_k, x_k in zip(beta, xpows):
        acc += beta_k * x_k
    z_beta = delta[0] + acc

    return ChunkingProof(
        group=group,
        y0=y0,
        bb=bb,
        cc=cc,
        dd=dd,
        yy=yy,
        z_r=z_r,
        z_s=z_s,
        z_beta=z_beta,
    )
