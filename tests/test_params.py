"""Tests for the protocol constants and bounds."""

import pytest

from chunking_proofs import params
from chunking_proofs.config import Config, configure_logging
from chunking_proofs.params import chunking_bounds


def test_challenge_constants():
    assert params.SECURITY_LEVEL == 256
    assert params.NUM_ZK_REPETITIONS == 32
    assert params.CHALLENGE_BITS == 8
    assert params.CHALLENGE_BYTES == 1
    assert params.CHALLENGE_MASK == 255


def test_chunk_constants():
    assert params.CHUNK_SIZE == 65536
    assert params.CHUNK_MAX == params.CHUNK_SIZE - 1
    assert params.NUM_CHUNKS == 16


@pytest.mark.parametrize("n, m", [(1, 1), (2, 2), (5, 8), (28, 16)])
def test_chunking_bounds(n, m):
    ss, zz = chunking_bounds(n, m)
    assert ss == n * m * 65535 * 255
    assert zz == 64 * ss


def test_config_defaults():
    cfg = Config()
    assert cfg.pairing_curve
    cfg.log_level = 'debug'
    assert cfg.log_level_number == 10


def test_config_rejects_unknown_log_level():
    cfg = Config()
    cfg.log_level = 'chatty'
    with pytest.raises(ValueError):
        cfg.log_level_number


def test_configure_logging_sets_package_level():
    import logging
    cfg = Config()
    cfg.log_level = 'ERROR'
    configure_logging(cfg)
    logger = logging.getLogger('chunking_proofs')
    assert logger.level == logging.ERROR
    logger.setLevel(logging.NOTSET)
