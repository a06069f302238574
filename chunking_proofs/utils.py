"""
Utility Functions
=================

This module provides the group and field helpers used by the prover, the
verifier and the codec.

Key Operations:
- Multi-exponentiation: Compute ∏ g_i^{e_i}
- Scalar conversions between ZR and Python integers
- Sampling of uniform scalars from a caller-supplied random source
- Fixed-width serialization of G1 points and ZR scalars

According to charm-crypto documentation:
- Group operations use * for multiplication, ** for exponentiation
- group.init(G1, 1) is the identity, group.init(ZR, v) lifts an integer
- group.serialize() / group.deserialize() give a fixed-width encoding per
  element type for a given curve (compressed points)
"""

import base64
import binascii

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1
from typing import List, Optional, Sequence


def multiexp_g1(bases: Sequence[G1], exponents: Sequence[ZR], group: PairingGroup) -> G1:
    """
    Compute multi-exponentiation in G1: ∏ bases[i]^{exponents[i]}.

    Formula:
    --------
    result = ∏_{i=0}^{len(bases)-1} bases[i]^{exponents[i]}

    Parameters
    ----------
    bases : Sequence[G1]
        List of base elements in G1
    exponents : Sequence[ZR]
        List of exponents in Z_p
    group : PairingGroup
        The pairing group

    Returns
    -------
    G1
        The product ∏ bases[i]^{exponents[i]}

    Notes
    -----
    - If bases is empty, returns the identity element 1_G
    - bases and exponents must have the same length
    - Variable time; only call it on public data
    """
    if len(bases) != len(exponents):
        raise ValueError(f"bases and exponents must have same length: {len(bases)} != {len(exponents)}")

    result = group.init(G1, 1)
    for base, exp in zip(bases, exponents):
        result *= base ** exp

    return result


def mul2(p: G1, a: ZR, q: G1, b: ZR) -> G1:
    """Compute p^a · q^b."""
    return (p ** a) * (q ** b)


def scalar_from_int(value: int, group: PairingGroup) -> ZR:
    """Lift an integer (possibly negative) into Z_p."""
    return group.init(ZR, value % int(group.order()))


def scalar_to_int(value: ZR) -> int:
    """Lift a scalar to its canonical integer representative in [0, p)."""
    return int(value)


def random_scalar(group: PairingGroup, rng) -> ZR:
    """Sample a uniform scalar in Z_p from rng (a random.Random-like source)."""
    return group.init(ZR, rng.randrange(int(group.order())))


def random_scalar_in_range(group: PairingGroup, rng, bound: int) -> ZR:
    """Sample a scalar uniformly from the integers [0, bound)."""
    if bound <= 0:
        raise ValueError(f"bound must be positive, got {bound}")
    return group.init(ZR, rng.randrange(bound))


def xpowers(x: ZR, count: int, group: PairingGroup) -> List[ZR]:
    """
    Compute [x^1, x^2, ..., x^count].

    The powers start at x^1, matching the weighting of the repetitions in
    the verification equations.
    """
    powers = []
    acc = group.init(ZR, 1)
    for _ in range(count):
        acc = acc * x
        powers.append(acc)
    return powers


def serialize_element(elem, group: PairingGroup) -> bytes:
    """
    Serialize a G1 point or ZR scalar to its fixed-width encoding.

    Parameters
    ----------
    elem : Union[G1, ZR]
        The element to serialize
    group : PairingGroup
        The pairing group

    Returns
    -------
    bytes
        group.serialize(elem) (compressed for points)
    """
    return group.serialize(elem)


def deserialize_element(data: bytes, group: PairingGroup, expected_type,
                        width: int = None) -> Optional[object]:
    """
    Deserialize a G1 point or ZR scalar, returning None if data is invalid.

    Validity means: the encoding has the fixed width and type prefix of
    expected_type with a strict base64 payload, charm accepts the bytes, the
    result has the expected type, points lie in the prime-order subgroup,
    and re-serialization gives back exactly the same bytes (this rejects
    out-of-range scalars that charm would otherwise reduce silently).
    """
    data = bytes(data)
    if width is None:
        width = element_width(group, expected_type)
    prefix = str(expected_type).encode() + b":"
    if len(data) != width or not data.startswith(prefix):
        return None
    try:
        base64.b64decode(data[len(prefix):], validate=True)
    except binascii.Error:
        return None

    try:
        elem = group.deserialize(data)
    except Exception:
        return None
    if elem is None or elem is False:
        return None
    if elem.type != expected_type:
        return None
    if expected_type == G1 and not group.ismember(elem):
        return None
    if group.serialize(elem) != data:
        return None
    return elem


def batch_deserialize(items: Sequence[bytes], group: PairingGroup, expected_type) -> Optional[List]:
    """Deserialize every entry of items, or return None if any entry is invalid."""
    width = element_width(group, expected_type)
    result = []
    for data in items:
        elem = deserialize_element(data, group, expected_type, width)
        if elem is None:
            return None
        result.append(elem)
    return result


def element_width(group: PairingGroup, expected_type) -> int:
    """Width in bytes of one serialized element of the given type on this curve."""
    if expected_type == G1:
        sample = group.hash(b"element-width", G1)
    else:
        sample = group.init(ZR, 1)
    return len(group.serialize(sample))
