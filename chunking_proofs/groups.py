"""
Group Initialization and Setup
==============================

This module handles the initialization of the pairing group whose G1 hosts
every point of the chunking proof (public keys, ciphertext chunks,
randomizers and commitments).

According to charm-crypto documentation (https://jhuisi.github.io/charm/tutorial.html):
- PairingGroup('BN254') provides an asymmetric Type-3 pairing with a
  254-bit base field; only its G1 and its scalar field ZR are used here
- Alternative curves: 'MNT224', 'SS512'
- group.hash(data, G1) hashes bytes to a point, group.hash(data, ZR) to a scalar
"""

import logging

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1

from .config import config

logger = logging.getLogger(__name__)

# Domain separator for deriving the fixed G1 generator
DOMAIN_G1_GENERATOR = b"zk-proof-of-chunking-g1-generator"

_FALLBACK_CURVES = ('BN254', 'MNT224', 'SS512')


def setup(group_name: str = None) -> dict:
    """
    Initialize the pairing group used by the chunking proof.

    Parameters
    ----------
    group_name : str, optional
        The pairing curve identifier. Defaults to config.pairing_curve
        ('BN254' unless CHUNKING_PAIRING_CURVE is set).

    Returns
    -------
    dict
        A dictionary containing:
        - 'group': The PairingGroup object
        - 'group_name': The name of the curve used
        - 'G1': The G1 group type constant
        - 'ZR': The ZR (scalar field) type constant

    Notes
    -----
    If the requested curve cannot be loaded the next curve of
    ('BN254', 'MNT224', 'SS512') is tried and a warning is logged. Prover
    and verifier must of course end up on the same curve.

    Examples
    --------
    >>> params = setup('BN254')
    >>> group = params['group']
    >>> g = get_generator(group)
    """
    group_name = group_name or config.pairing_curve
    candidates = [group_name] + [c for c in _FALLBACK_CURVES if c != group_name]

    group = None
    last_error = None
    for name in candidates:
        try:
            group = PairingGroup(name)
        except Exception as e:
            logger.warning("Pairing curve %s not available (%s)", name, e)
            last_error = e
            continue
        if name != group_name:
            logger.warning("Falling back to pairing curve %s", name)
        group_name = name
        break

    if group is None:
        raise RuntimeError(f"No pairing curve available: {last_error}")

    return {
        'group': group,
        'group_name': group_name,
        'G1': G1,
        'ZR': ZR,
    }


def get_generator(group: PairingGroup) -> G1:
    """
    Return the fixed G1 generator g shared by every prover and verifier.

    charm-crypto does not expose a canonical generator, so g is derived by
    hashing a fixed domain separator to G1. The result only depends on the
    curve.
    """
    return group.hash(DOMAIN_G1_GENERATOR, G1)
