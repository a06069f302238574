"""
Fiat-Shamir Challenges
======================

The two verifier challenges of the chunking proof, derived from the
transcript.

First challenge e (ChunksOracle):
---------------------------------
seed = random_oracle("zk-proof-of-chunking-chunking",
                     {instance, first-move, number-of-parallel-repetitions})

The seed keys ChaCha20 (RFC 7539 block function, counter and nonce zero).
Each challenge byte takes one 4-byte little-endian word of the keystream and
keeps its low byte, so bytes 0, 4, 8, ... of the keystream are used. The
challenges e_ijk are read in order i -> j -> k, CHALLENGE_BYTES bytes each
(big-endian), masked with CHALLENGE_MASK. The cipher is fixed: every
implementation must reproduce this stream bit for bit.

Second challenge x:
-------------------
x = random_oracle_to_scalar("zk-proof-of-chunking-challenge",
                            {first-challenge, second-move})
"""

from typing import List

from charm.toolbox.pairinggroup import ZR
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

from .instance import ChunkingInstance, FirstMoveChunking, SecondMoveChunking
from .params import CHALLENGE_BYTES, CHALLENGE_MASK, NUM_ZK_REPETITIONS
from .random_oracles import HashedMap, random_oracle, random_oracle_to_scalar

DOMAIN_PROOF_OF_CHUNKING_ORACLE = "zk-proof-of-chunking-chunking"
DOMAIN_PROOF_OF_CHUNKING_CHALLENGE = "zk-proof-of-chunking-challenge"

_CHACHA_BLOCK_BYTES = 64
_CHACHA_WORD_BYTES = 4
_ZERO_NONCE = b"\x00" * 16


class ChaCha20Stream:
    """Keystream of ChaCha20 with a 32-byte key, counter 0 and nonce 0."""

    def __init__(self, key: bytes):
        if len(key) != 32:
            raise ValueError(f"ChaCha20 key must be 32 bytes, got {len(key)}")
        cipher = Cipher(algorithms.ChaCha20(key, _ZERO_NONCE), mode=None)
        self._encryptor = cipher.encryptor()
        self._buffer = b""
        self._pos = 0

    def _refill(self):
        self._buffer = self._encryptor.update(b"\x00" * _CHACHA_BLOCK_BYTES)
        self._pos = 0

    def next_word(self) -> bytes:
        """Next 4-byte keystream word."""
        if self._pos >= len(self._buffer):
            self._refill()
        word = self._buffer[self._pos:self._pos + _CHACHA_WORD_BYTES]
        self._pos += _CHACHA_WORD_BYTES
        return word


class ChunksOracle:
    """
    Expands a random-oracle seed into the n x m x l array of chunk challenges.

    Examples
    --------
    >>> e = ChunksOracle(instance, first_move).get_all_chunks(n, m)
    >>> len(e), len(e[0]), len(e[0][0])
    (n, m, NUM_ZK_REPETITIONS)
    """

    def __init__(self, instance: ChunkingInstance, first_move: FirstMoveChunking):
        m = HashedMap(instance.group)
        m.insert_hashed("instance", instance)
        m.insert_hashed("first-move", first_move)
        m.insert_hashed("number-of-parallel-repetitions", NUM_ZK_REPETITIONS)
        self.seed = random_oracle(DOMAIN_PROOF_OF_CHUNKING_ORACLE, m)
        self._stream = ChaCha20Stream(self.seed)

    def getbyte(self) -> int:
        # A single byte consumes a whole keystream word
        return self._stream.next_word()[0]

    def get_chunk(self) -> int:
        state = 0
        for _ in range(CHALLENGE_BYTES):
            state = (state << 8) | self.getbyte()
        return CHALLENGE_MASK & state

    def get_all_chunks(self, spec_n: int, spec_m: int) -> List[List[List[int]]]:
        # The order of the draws is part of the protocol
        return [
            [[self.get_chunk() for _ in range(NUM_ZK_REPETITIONS)] for _ in range(spec_m)]
            for _ in range(spec_n)
        ]


def chunking_proof_challenge_oracle(first_challenge: List[List[List[int]]],
                                    second_move: SecondMoveChunking) -> ZR:
    """Second verifier challenge x, bound to e and the second move."""
    m = HashedMap(second_move.group)
    m.insert_hashed("first-challenge", first_challenge)
    m.insert_hashed("second-move", second_move)
    return random_oracle_to_scalar(second_move.group, DOMAIN_PROOF_OF_CHUNKING_CHALLENGE, m)
