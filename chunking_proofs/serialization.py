"""
Proof Serialization
===================

Wire form of a ChunkingProof, for the transport carrying DKG dealings.

ChunkingProofWire holds the fixed-width charm encoding of every point and
scalar. Two framings are provided:

Bytes (to_bytes / from_bytes):
    y0 | bb[l] | cc[l] | u32 len(dd) | dd | yy | u32 len(z_r) | z_r | z_s[l] | z_beta

JSON-friendly dict (to_dict / from_dict):
    every encoding as a base64 string, lists kept as lists

Decoding never raises: malformed input gives None.
"""

import base64
from dataclasses import dataclass
from typing import List, Optional

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1

from .instance import ChunkingProof
from .params import NUM_ZK_REPETITIONS
from .utils import batch_deserialize, deserialize_element, element_width, serialize_element

_LENGTH_BYTES = 4


@dataclass
class ChunkingProofWire:
    """Serialized chunking proof; field names follow the protocol moves."""
    first_move_y0: bytes
    first_move_b: List[bytes]
    first_move_c: List[bytes]
    second_move_d: List[bytes]
    second_move_y: bytes
    response_z_r: List[bytes]
    response_z_s: List[bytes]
    response_z_b: bytes

    def to_bytes(self) -> bytes:
        for name in ('first_move_b', 'first_move_c', 'response_z_s'):
            if len(getattr(self, name)) != NUM_ZK_REPETITIONS:
                raise ValueError(f"{name} must have {NUM_ZK_REPETITIONS} entries")

        out = bytearray()
        out += self.first_move_y0
        out += b"".join(self.first_move_b)
        out += b"".join(self.first_move_c)
        out += len(self.second_move_d).to_bytes(_LENGTH_BYTES, 'big')
        out += b"".join(self.second_move_d)
        out += self.second_move_y
        out += len(self.response_z_r).to_bytes(_LENGTH_BYTES, 'big')
        out += b"".join(self.response_z_r)
        out += b"".join(self.response_z_s)
        out += self.response_z_b
        return bytes(out)

    @classmethod
    def from_bytes(cls, group: PairingGroup, data: bytes) -> Optional['ChunkingProofWire']:
        """Split data into fixed-width entries; None if it is truncated or too long."""
        reader = _Reader(bytes(data))
        point_width = element_width(group, G1)
        scalar_width = element_width(group, ZR)

        y0 = reader.take(point_width)
        bb = reader.take_many(point_width, NUM_ZK_REPETITIONS)
        cc = reader.take_many(point_width, NUM_ZK_REPETITIONS)
        dd = reader.take_many(point_width, reader.take_length())
        yy = reader.take(point_width)
        z_r = reader.take_many(scalar_width, reader.take_length())
        z_s = reader.take_many(scalar_width, NUM_ZK_REPETITIONS)
        z_b = reader.take(scalar_width)

        if reader.failed or not reader.at_end():
            return None
        return cls(y0, bb, cc, dd, yy, z_r, z_s, z_b)

    def to_dict(self) -> dict:
        enc = _b64encode
        return {
            'first_move_y0': enc(self.first_move_y0),
            'first_move_b': [enc(b) for b in self.first_move_b],
            'first_move_c': [enc(c) for c in self.first_move_c],
            'second_move_d': [enc(d) for d in self.second_move_d],
            'second_move_y': enc(self.second_move_y),
            'response_z_r': [enc(z) for z in self.response_z_r],
            'response_z_s': [enc(z) for z in self.response_z_s],
            'response_z_b': enc(self.response_z_b),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Optional['ChunkingProofWire']:
        dec = _b64decode
        try:
            return cls(
                first_move_y0=dec(data['first_move_y0']),
                first_move_b=[dec(b) for b in data['first_move_b']],
                first_move_c=[dec(c) for c in data['first_move_c']],
                second_move_d=[dec(d) for d in data['second_move_d']],
                second_move_y=dec(data['second_move_y']),
                response_z_r=[dec(z) for z in data['response_z_r']],
                response_z_s=[dec(z) for z in data['response_z_s']],
                response_z_b=dec(data['response_z_b']),
            )
        except (KeyError, TypeError, ValueError):
            return None


class _Reader:
    """Cursor over a byte string that records, rather than raises, truncation."""

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0
        self.failed = False

    def take(self, width: int) -> bytes:
        if self.failed or self.pos + width > len(self.data):
            self.failed = True
            return b""
        chunk = self.data[self.pos:self.pos + width]
        self.pos += width
        return chunk

    def take_many(self, width: int, count: int) -> List[bytes]:
        if self.failed or self.pos + width * count > len(self.data):
            self.failed = True
            return []
        return [self.take(width) for _ in range(count)]

    def take_length(self) -> int:
        raw = self.take(_LENGTH_BYTES)
        return int.from_bytes(raw, 'big') if raw else 0

    def at_end(self) -> bool:
        return self.pos == len(self.data)


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode('utf-8')


def _b64decode(data: str) -> bytes:
    return base64.b64decode(data, validate=True)


def proof_to_wire(proof: ChunkingProof) -> ChunkingProofWire:
    """
    Serialize a proof.

    Raises
    ------
    ValueError
        If bb, cc or z_s do not hold exactly NUM_ZK_REPETITIONS entries.
        Proofs built by prove_chunking always do.
    """
    for name in ('bb', 'cc', 'z_s'):
        if len(getattr(proof, name)) != NUM_ZK_REPETITIONS:
            raise ValueError(f"Wrong size of {name} in chunking proof")

    group = proof.group
    ser = serialize_element
    return ChunkingProofWire(
        first_move_y0=ser(proof.y0, group),
        first_move_b=[ser(b, group) for b in proof.bb],
        first_move_c=[ser(c, group) for c in proof.cc],
        second_move_d=[ser(d, group) for d in proof.dd],
        second_move_y=ser(proof.yy, group),
        response_z_r=[ser(z, group) for z in proof.z_r],
        response_z_s=[ser(z, group) for z in proof.z_s],
        response_z_b=ser(proof.z_beta, group),
    )


def proof_from_wire(group: PairingGroup, wire: ChunkingProofWire) -> Optional[ChunkingProof]:
    """
    Parse a proof, or return None if any element is invalid or
    len(dd) != len(z_r) + 1. The other length rules are left to verify_chunking.
    """
    y0 = deserialize_element(wire.first_move_y0, group, G1)
    bb = batch_deserialize(wire.first_move_b, group, G1)
    cc = batch_deserialize(wire.first_move_c, group, G1)
    dd = batch_deserialize(wire.second_move_d, group, G1)
    yy = deserialize_element(wire.second_move_y, group, G1)
    z_r = batch_deserialize(wire.response_z_r, group, ZR)
    z_s = batch_deserialize(wire.response_z_s, group, ZR)
    z_beta = deserialize_element(wire.response_z_b, group, ZR)

    if any(v is None for v in (y0, bb, cc, dd, yy, z_r, z_s, z_beta)):
        return None
    if len(dd) != len(z_r) + 1:
        return None

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


def serialize_proof(proof: ChunkingProof) -> bytes:
    """Serialize a proof to bytes."""
    return proof_to_wire(proof).to_bytes()


def deserialize_proof(group: PairingGroup, data: bytes) -> Optional[ChunkingProof]:
    """Parse a proof from bytes, or return None if data is malformed."""
    wire = ChunkingProofWire.from_bytes(group, data)
    if wire is None:
        return None
    return proof_from_wire(group, wire)
