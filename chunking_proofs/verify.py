"""
Verification Equations
======================

This module implements the verifier of the proof of correct chunking.

After the shape and bound checks, three equations must hold
(e recomputed by ChunksOracle, x by the challenge oracle):

Equation (1), for every receiver i ∈ [n]:
    ∏_{j=1}^{m} R_j^{Σ_k e_ijk · x^k} · dd_i = g^{z_r_i}

Equation (2):
    ∏_{k=1}^{l} bb_k^{x^k} · dd_0 = g^{z_β}

Equation (3):
    ∏_{k=1}^{l} (∏_{i,j} C_ij^{e_ijk} · cc_k)^{x^k} · Y
        = ∏_{i=1}^{n} y_i^{z_r_i} · y0^{z_β} · g^{Σ_k z_s_k · x^k}

All multi-exponentiations here run on public data only, so variable-time
arithmetic is acceptable.
"""

import logging

from charm.toolbox.pairinggroup import ZR
from typing import List

from .errors import InvalidInstanceError, InvalidProofError
from .instance import ChunkingInstance, ChunkingProof
from .oracles import ChunksOracle, chunking_proof_challenge_oracle
from .params import NUM_ZK_REPETITIONS, chunking_bounds
from .utils import mul2, multiexp_g1, scalar_to_int, xpowers

logger = logging.getLogger(__name__)


def _require_eq(name: str, actual: int, expected: int) -> None:
    if actual != expected:
        logger.debug("Chunking proof field %s has length %d, expected %d", name, actual, expected)
        raise InvalidProofError()


def verify_receiver_equations(instance: ChunkingInstance, proof: ChunkingProof,
                              e: List[List[List[int]]], xpows: list) -> bool:
    """
    Equation (1): ∏_j R_j^{Σ_k e_ijk · x^k} · dd_i = g^{z_r_i} for every i.

    dd[0] belongs to y0, so receiver i (0-based) is checked against dd[i + 1].
    """
    group = instance.group
    g1 = instance.generator

    verifies = True
    for i, (e_i, z_ri) in enumerate(zip(e, proof.z_r)):
        e_ijk_polynomials = []
        for e_ij in e_i:
            acc = group.init(ZR, 0)
            for e_ijk, x_k in zip(e_ij, xpows):
                acc += group.init(ZR, e_ijk) * x_k
            e_ijk_polynomials.append(acc)

        lhs = multiexp_g1(instance.randomizers, e_ijk_polynomials, group) * proof.dd[i + 1]
        rhs = g1 ** z_ri
        verifies = verifies and (lhs == rhs)
    return verifies


def verify_beta_equation(instance: ChunkingInstance, proof: ChunkingProof, xpows: list) -> bool:
    """Equation (2): ∏_k bb_k^{x^k} · dd_0 = g^{z_β}."""
    group = instance.group
    lhs = multiexp_g1(proof.bb, xpows, group) * proof.dd[0]
    rhs = instance.generator ** proof.z_beta
    return lhs == rhs


def verify_master_equation(instance: ChunkingInstance, proof: ChunkingProof,
                           e: List[List[List[int]]], xpows: list) -> bool:
    """
    Equation (3):
    ∏_k (∏_{i,j} C_ij^{e_ijk} · cc_k)^{x^k} · Y = ∏_i y_i^{z_r_i} · y0^{z_β} · g^{Σ_k z_s_k · x^k}
    """
    group = instance.group
    spec_n = instance.num_receivers
    spec_m = instance.num_chunks

    c_ij_s = [c_ij for row in instance.ciphertext_chunks for c_ij in row]
    if len(c_ij_s) != spec_n * spec_m:
        logger.debug("Chunking instance has %d chunks, expected %d", len(c_ij_s), spec_n * spec_m)
        raise InvalidProofError()

    cij_to_eijks = []
    for k in range(NUM_ZK_REPETITIONS):
        e_ijk_s = [group.init(ZR, e_ij[k]) for e_i in e for e_ij in e_i]
        cij_to_eijks.append(multiexp_g1(c_ij_s, e_ijk_s, group) * proof.cc[k])

    lhs = multiexp_g1(cij_to_eijks, xpows, group) * proof.yy

    acc = group.init(ZR, 0)
    for z_sk, x_k in zip(proof.z_s, xpows):
        acc += z_sk * x_k

    rhs = multiexp_g1(instance.public_keys, proof.z_r, group) * \
        mul2(proof.y0, proof.z_beta, instance.generator, acc)
    return lhs == rhs


def verify_chunking(instance: ChunkingInstance, proof: ChunkingProof) -> None:
    """
    Verify a proof of correct chunking.

    Parameters
    ----------
    instance : ChunkingInstance
        The public instance
    proof : ChunkingProof
        The proof to check

    Returns
    -------
    None
        If the proof is valid

    Raises
    ------
    InvalidInstanceError
        If the instance is malformed
    InvalidProofError
        If any component has the wrong length, a z_s response is out of
        bounds, or any of the three equations fails. The error does not say
        which check failed.
    """
    instance.check_instance()

    num_receivers = instance.num_receivers
    _require_eq("bb", len(proof.bb), NUM_ZK_REPETITIONS)
    _require_eq("cc", len(proof.cc), NUM_ZK_REPETITIONS)
    _require_eq("dd", len(proof.dd), num_receivers + 1)
    _require_eq("z_r", len(proof.z_r), num_receivers)
    _require_eq("z_s", len(proof.z_s), NUM_ZK_REPETITIONS)

    spec_n = instance.num_receivers
    spec_m = instance.num_chunks
    _, zz = chunking_bounds(spec_n, spec_m)

    for z_sk in proof.z_s:
        if scalar_to_int(z_sk) >= zz:
            logger.debug("Chunking proof response z_s out of bounds")
            raise InvalidProofError()

    # e_{n,m,l} = oracle(instance, y0, bb, cc)
    e = ChunksOracle(instance, proof.first_move()).get_all_chunks(spec_n, spec_m)

    # x = oracle(e, z_s, dd, yy)
    x = chunking_proof_challenge_oracle(e, proof.second_move())
    xpows = xpowers(x, NUM_ZK_REPETITIONS, instance.group)

    if not verify_receiver_equations(instance, proof, e, xpows):
        logger.debug("Chunking proof receiver equation failed")
        raise InvalidProofError()

    if not verify_beta_equation(instance, proof, xpows):
        logger.debug("Chunking proof beta equation failed")
        raise InvalidProofError()

    if not verify_master_equation(instance, proof, e, xpows):
        logger.debug("Chunking proof master equation failed")
        raise InvalidProofError()


def is_valid_chunking_proof(instance: ChunkingInstance, proof: ChunkingProof) -> bool:
    """Return True iff verify_chunking accepts; an invalid instance also gives False."""
    try:
        verify_chunking(instance, proof)
    except (InvalidInstanceError, InvalidProofError):
        return False
    return True
