"""
Random Oracles
==============

Labeled hashing used by the Fiat-Shamir transformation of the chunking
proof.

A HashedMap collects (label, value) pairs in insertion order. Every value is
first reduced to a 32-byte unique hash with a type tag, so two values of
different type or structure never hash the same input. A random oracle then
hashes a domain separator together with the map digest.

Hashable values:
----------------
- bytes, str, int (non-negative, < 2^64), bool
- list / tuple (hashed element-wise with the length)
- HashedMap
- charm G1 points and ZR scalars (via group.serialize)
- any object with a unique_hash() -> bytes method

Domain Separation:
------------------
random_oracle(domain, map) = SHA-256(len(domain) || domain || map digest)
"""

import hashlib
from typing import List, Tuple

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1


def _tagged_hash(tag: bytes, payload: bytes) -> bytes:
    h = hashlib.sha256()
    h.update(len(tag).to_bytes(8, 'big'))
    h.update(tag)
    h.update(payload)
    return h.digest()


def unique_hash(value, group: PairingGroup = None) -> bytes:
    """
    Compute the 32-byte unique hash of a value.

    Parameters
    ----------
    value : hashable value (see module docstring)
        The value to hash
    group : PairingGroup, optional
        Required when value contains charm group elements

    Returns
    -------
    bytes
        A 32-byte digest
    """
    if hasattr(value, 'unique_hash'):
        return value.unique_hash()
    if isinstance(value, (bytes, bytearray)):
        return _tagged_hash(b"bytes", bytes(value))
    if isinstance(value, str):
        return _tagged_hash(b"str", value.encode('utf-8'))
    if isinstance(value, bool):
        return _tagged_hash(b"bool", b"\x01" if value else b"\x00")
    if isinstance(value, int):
        if value < 0 or value >= 1 << 64:
            raise ValueError(f"Integer {value} out of range for hashing")
        return _tagged_hash(b"int", value.to_bytes(8, 'big'))
    if isinstance(value, (list, tuple)):
        payload = len(value).to_bytes(8, 'big')
        payload += b"".join(unique_hash(item, group) for item in value)
        return _tagged_hash(b"vec", payload)
    elem_type = getattr(value, 'type', None)
    if elem_type in (G1, ZR):
        if group is None:
            raise ValueError("A pairing group is required to hash group elements")
        if elem_type == G1 and value == group.init(G1, 1):
            # The identity has no stable compressed encoding
            return _tagged_hash(b"g1-identity", b"")
        tag = b"g1" if elem_type == G1 else b"zr"
        return _tagged_hash(tag, group.serialize(value))
    raise TypeError(f"Cannot hash value of type {type(value).__name__}")


class HashedMap:
    """
    Ordered map from labels to hashed values.

    Values are hashed when inserted; only their digests are kept.

    Examples
    --------
    >>> m = HashedMap(group)
    >>> m.insert_hashed("y0", y0)
    >>> m.insert_hashed("bb", bb)
    >>> digest = m.unique_hash()
    """

    def __init__(self, group: PairingGroup = None):
        self.group = group
        self._entries: List[Tuple[str, bytes]] = []

    def insert_hashed(self, label: str, value) -> None:
        if any(existing == label for existing, _ in self._entries):
            raise ValueError(f"Duplicate label in HashedMap: {label}")
        self._entries.append((label, unique_hash(value, self.group)))

    def __len__(self):
        return len(self._entries)

    def unique_hash(self) -> bytes:
        payload = len(self._entries).to_bytes(8, 'big')
        for label, digest in self._entries:
            payload += unique_hash(label) + digest
        return _tagged_hash(b"map", payload)


def random_oracle(domain: str, hashed_map: HashedMap) -> bytes:
    """
    Random oracle returning a 32-byte digest.

    Parameters
    ----------
    domain : str
        The domain separator
    hashed_map : HashedMap
        The labeled inputs

    Returns
    -------
    bytes
        SHA-256(len(domain) || domain || hashed_map.unique_hash())
    """
    domain_bytes = domain.encode('utf-8')
    h = hashlib.sha256()
    h.update(len(domain_bytes).to_bytes(8, 'big'))
    h.update(domain_bytes)
    h.update(hashed_map.unique_hash())
    return h.digest()


def random_oracle_to_scalar(group: PairingGroup, domain: str, hashed_map: HashedMap) -> ZR:
    """Random oracle returning a scalar: group.hash(random_oracle(domain, map), ZR)."""
    return group.hash(random_oracle(domain, hashed_map), ZR)
