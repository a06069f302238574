"""
Shared fixtures for the chunking proof tests.

make_dealing() plays the dealer of a DKG: it chunk-encrypts random chunk
values to n receivers,

    R_j  = g^{r_j}
    C_ij = y_i^{r_j} · g^{s_ij}

and returns the matching instance and witness.
"""

import random

import pytest
from charm.toolbox.pairinggroup import ZR

from chunking_proofs import setup, get_generator, ChunkingInstance, ChunkingWitness
from chunking_proofs.params import CHUNK_SIZE
from chunking_proofs.utils import random_scalar


def make_dealing(group, n, m, rng, zero_witness=False):
    g = get_generator(group)
    secret_keys = [random_scalar(group, rng) for _ in range(n)]
    public_keys = [g ** sk for sk in secret_keys]

    if zero_witness:
        scalars_r = [group.init(ZR, 0) for _ in range(m)]
        scalars_s = [[group.init(ZR, 0) for _ in range(m)] for _ in range(n)]
    else:
        scalars_r = [random_scalar(group, rng) for _ in range(m)]
        scalars_s = [[group.init(ZR, rng.randrange(CHUNK_SIZE)) for _ in range(m)] for _ in range(n)]

    randomizers = [g ** r_j for r_j in scalars_r]
    ciphertext_chunks = [
        [(pk_i ** r_j) * (g ** s_ij) for r_j, s_ij in zip(scalars_r, s_i)]
        for pk_i, s_i in zip(public_keys, scalars_s)
    ]

    instance = ChunkingInstance(group, public_keys, ciphertext_chunks, randomizers, generator=g)
    witness = ChunkingWitness(scalars_r, scalars_s)
    return instance, witness


@pytest.fixture(scope="module")
def pairing_params():
    """Initialize pairing group."""
    return setup('BN254')


@pytest.fixture(scope="module")
def group(pairing_params):
    return pairing_params['group']


@pytest.fixture
def rng():
    """Seeded randomness so that failures are reproducible."""
    return random.Random(20240601)


@pytest.fixture
def small_dealing(group, rng):
    """Honest dealing for n=2 receivers and m=3 chunks."""
    return make_dealing(group, 2, 3, rng)
