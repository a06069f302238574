"""
Zero-Knowledge Proofs of Correct Chunking
==========================================

A non-interactive zero-knowledge proof that a matrix of ElGamal-style
ciphertext chunks C_ij = y_i^{r_j} · g^{s_ij} encrypts small chunk values
s_ij ∈ [0, CHUNK_SIZE) under the receivers' public keys y_i, with
randomizers R_j = g^{r_j}. It is the chunking proof used when a dealer in a
non-interactive DKG splits every share into fixed-width chunks.

The interactive Sigma protocol runs NUM_ZK_REPETITIONS parallel repetitions
with rejection sampling and is made non-interactive with the Fiat-Shamir
transform. Group arithmetic is provided by charm-crypto (G1 of a pairing
curve, BN254 by default).

Modules:
--------
- groups: Pairing group initialization and the fixed G1 generator
- params: Protocol constants and the response bounds
- instance: ChunkingInstance, ChunkingWitness and ChunkingProof
- random_oracles: Labeled hashing (HashedMap) and random oracles
- oracles: First challenge (ChaCha20 expansion) and second challenge
- proofs: prove_chunking
- verify: verify_chunking
- serialization: Wire form of a ChunkingProof
- errors: InvalidInstanceError, InvalidProofError

Usage:
------
    import random
    from chunking_proofs import setup, get_generator, ChunkingInstance
    from chunking_proofs import ChunkingWitness, prove_chunking, verify_chunking

    params = setup('BN254')
    group = params['group']
    instance = ChunkingInstance(group, public_keys, ciphertext_chunks, randomizers)
    witness = ChunkingWitness(scalars_r, scalars_s)
    proof = prove_chunking(instance, witness, random.SystemRandom())
    verify_chunking(instance, proof)  # raises InvalidProofError on failure
"""

__version__ = "0.1.0"

from .groups import setup, get_generator
from .errors import ChunkingProofError, InvalidInstanceError, InvalidProofError
from .instance import ChunkingInstance, ChunkingWitness, ChunkingProof
from .proofs import prove_chunking
from .verify import verify_chunking, is_valid_chunking_proof
from .serialization import ChunkingProofWire, serialize_proof, deserialize_proof

__all__ = [
    'setup',
    'get_generator',
    'ChunkingProofError',
    'InvalidInstanceError',
    'InvalidProofError',
    'ChunkingInstance',
    'ChunkingWitness',
    'ChunkingProof',
    'prove_chunking',
    'verify_chunking',
    'is_valid_chunking_proof',
    'ChunkingProofWire',
    'serialize_proof',
    'deserialize_proof',
]
