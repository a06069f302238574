"""
Instance, Witness and Proof
===========================

Data model of the proof of correct chunking (Section 6.5 of the NIDKG
paper, https://eprint.iacr.org/2021/339.pdf).

    instance = (y = [y_1..y_n], C = [C_{1,1}..C_{n,m}], R = [R_1..R_m])
    witness  = (r = [r_1..r_m], s = [s_{1,1}..s_{n,m}])

with C_ij = y_i^{r_j} · g^{s_ij} and R_j = g^{r_j}. Here y is called
public_keys, C ciphertext_chunks and R randomizers.
"""

from dataclasses import dataclass, field
from typing import List

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1

from .errors import InvalidInstanceError
from .groups import get_generator
from .random_oracles import HashedMap


class ChunkingInstance:
    """
    Public data of a chunking relation.

    Parameters
    ----------
    group : PairingGroup
        The pairing group hosting all points
    public_keys : List[G1]
        One public key y_i per receiver (n entries)
    ciphertext_chunks : List[List[G1]]
        n rows of m chunks C_ij
    randomizers : List[G1]
        m randomizers R_j
    generator : G1, optional
        The generator g; defaults to get_generator(group)
    """

    def __init__(self, group: PairingGroup, public_keys: List[G1],
                 ciphertext_chunks: List[List[G1]], randomizers: List[G1],
                 generator: G1 = None):
        self.group = group
        self.generator = generator if generator is not None else get_generator(group)
        self.public_keys = list(public_keys)
        self.ciphertext_chunks = [list(row) for row in ciphertext_chunks]
        self.randomizers = list(randomizers)

    @property
    def num_receivers(self) -> int:
        return len(self.public_keys)

    @property
    def num_chunks(self) -> int:
        return len(self.randomizers)

    def check_instance(self) -> None:
        """Raise InvalidInstanceError unless all lists are non-empty and n rows are given."""
        if not self.public_keys or not self.ciphertext_chunks or not self.randomizers:
            raise InvalidInstanceError("chunking instance has an empty component")
        if len(self.public_keys) != len(self.ciphertext_chunks):
            raise InvalidInstanceError(
                f"{len(self.public_keys)} public keys but {len(self.ciphertext_chunks)} chunk rows")

    def unique_hash(self) -> bytes:
        m = HashedMap(self.group)
        m.insert_hashed("g1-generator", self.generator)
        m.insert_hashed("public-keys", self.public_keys)
        m.insert_hashed("ciphertext-chunks", self.ciphertext_chunks)
        m.insert_hashed("randomizers-r", self.randomizers)
        return m.unique_hash()


class ChunkingWitness:
    """
    Secret data of a chunking relation.

    scalars_r holds the m randomizer exponents r_j, scalars_s the n x m
    chunk values s_ij. The witness is not validated; a witness that does not
    match the instance yields a proof that fails verification.
    """

    def __init__(self, scalars_r: List[ZR], scalars_s: List[List[ZR]]):
        self.scalars_r = list(scalars_r)
        self.scalars_s = [list(row) for row in scalars_s]


@dataclass
class FirstMoveChunking:
    """First move of the prover: (y0, bb, cc)."""
    group: PairingGroup = field(compare=False, repr=False)
    y0: G1
    bb: List[G1]
    cc: List[G1]

    def unique_hash(self) -> bytes:
        m = HashedMap(self.group)
        m.insert_hashed("y0", self.y0)
        m.insert_hashed("bb", self.bb)
        m.insert_hashed("cc", self.cc)
        return m.unique_hash()


@dataclass
class SecondMoveChunking:
    """Prover's response to the first challenge: (z_s, dd, yy)."""
    group: PairingGroup = field(compare=False, repr=False)
    z_s: List[ZR]
    dd: List[G1]
    yy: G1

    def unique_hash(self) -> bytes:
        m = HashedMap(self.group)
        m.insert_hashed("z_s", self.z_s)
        m.insert_hashed("dd", self.dd)
        m.insert_hashed("yy", self.yy)
        return m.unique_hash()


@dataclass
class ChunkingProof:
    """
    Zero-knowledge proof of correct chunking.

    Attributes
    ----------
    y0 : G1
        Auxiliary generator, fresh per proof
    bb, cc : List[G1]
        First-move commitments, NUM_ZK_REPETITIONS each
    dd : List[G1]
        Second-move commitments, n + 1 entries; dd[0] pairs with y0 and
        dd[i] with public_keys[i-1]
    yy : G1
        Second-move aggregate commitment
    z_r : List[ZR]
        One response per receiver
    z_s : List[ZR]
        One response per repetition
    z_beta : ZR
        Response for the beta exponents
    """
    group: PairingGroup = field(compare=False, repr=False)
    y0: G1
    bb: List[G1]
    cc: List[G1]
    dd: List[G1]
    yy: G1
    z_r: List[ZR]
    z_s: List[ZR]
    z_beta: ZR

    def first_move(self) -> FirstMoveChunking:
        return FirstMoveChunking(self.group, self.y0, list(self.bb), list(self.cc))

    def second_move(self) -> SecondMoveChunking:
        return SecondMoveChunking(self.group, list(self.z_s), list(self.dd), self.yy)

    def serialize(self):
        """Convert to the wire form (see serialization.ChunkingProofWire)."""
        from .serialization import proof_to_wire
        return proof_to_wire(self)

    @classmethod
    def deserialize(cls, group: PairingGroup, wire) -> 'ChunkingProof':
        """Parse the wire form; returns None if it is malformed."""
        from .serialization import proof_from_wire
        return proof_from_wire(group, wire)
