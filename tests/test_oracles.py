"""Tests for the Fiat-Shamir challenges."""

import pytest
from charm.toolbox.pairinggroup import ZR, G1

from chunking_proofs.instance import ChunkingInstance, FirstMoveChunking, SecondMoveChunking
from chunking_proofs.oracles import ChaCha20Stream, ChunksOracle, chunking_proof_challenge_oracle
from chunking_proofs.params import CHALLENGE_MASK, NUM_ZK_REPETITIONS

from conftest import make_dealing


def _first_move(group, label=b"first-move"):
    y0 = group.hash(label + b"-y0", G1)
    bb = [group.hash(label + b"-b%d" % k, G1) for k in range(NUM_ZK_REPETITIONS)]
    cc = [group.hash(label + b"-c%d" % k, G1) for k in range(NUM_ZK_REPETITIONS)]
    return FirstMoveChunking(group, y0, bb, cc)


def test_chacha20_zero_key_keystream():
    # RFC 7539 Appendix A.1, test vector #1
    stream = ChaCha20Stream(b"\x00" * 32)
    words = [stream.next_word() for _ in range(16)]
    assert b"".join(words).hex() == (
        "76b8e0ada0f13d90405d6ae55386bd28bdd219b8a08ded1aa836efcc8b770dc7"
        "da41597c5157488d7724e03fb8d84a376a43b8f41518a11cc387b669b2ee6586"
    )


def test_chacha20_crosses_block_boundary():
    a = ChaCha20Stream(b"\x01" * 32)
    b = ChaCha20Stream(b"\x01" * 32)
    first = [a.next_word() for _ in range(40)]
    assert [b.next_word() for _ in range(40)] == first
    assert len(set(first)) > 1


def test_chacha20_rejects_short_key():
    with pytest.raises(ValueError):
        ChaCha20Stream(b"\x00" * 16)


def test_oracle_uses_low_byte_of_each_word(group, rng):
    instance, _ = make_dealing(group, 1, 1, rng)
    oracle = ChunksOracle(instance, _first_move(group))
    reference = ChaCha20Stream(oracle.seed)
    expected = [reference.next_word()[0] & CHALLENGE_MASK for _ in range(NUM_ZK_REPETITIONS)]
    assert oracle.get_all_chunks(1, 1) == [[expected]]


def test_challenges_are_deterministic(group, rng):
    instance, _ = make_dealing(group, 2, 3, rng)
    first_move = _first_move(group)

    e1 = ChunksOracle(instance, first_move).get_all_chunks(2, 3)
    e2 = ChunksOracle(instance, first_move).get_all_chunks(2, 3)

    assert e1 == e2
    assert len(e1) == 2
    assert all(len(e_i) == 3 for e_i in e1)
    assert all(len(e_ij) == NUM_ZK_REPETITIONS for e_i in e1 for e_ij in e_i)
    assert all(0 <= e_ijk <= CHALLENGE_MASK for e_i in e1 for e_ij in e_i for e_ijk in e_ij)


def test_challenges_depend_on_instance(group, rng):
    instance, _ = make_dealing(group, 2, 3, rng)
    first_move = _first_move(group)
    e = ChunksOracle(instance, first_move).get_all_chunks(2, 3)

    chunks = [list(row) for row in instance.ciphertext_chunks]
    chunks[1][2] = chunks[1][2] * instance.generator
    modified = ChunkingInstance(group, instance.public_keys, chunks, instance.randomizers,
                                generator=instance.generator)
    assert ChunksOracle(modified, first_move).get_all_chunks(2, 3) != e


def test_challenges_depend_on_first_move(group, rng):
    instance, _ = make_dealing(group, 2, 3, rng)
    first_move = _first_move(group)
    e = ChunksOracle(instance, first_move).get_all_chunks(2, 3)

    cc = list(first_move.cc)
    cc[0] = cc[0] * instance.generator
    modified = FirstMoveChunking(group, first_move.y0, first_move.bb, cc)
    assert ChunksOracle(instance, modified).get_all_chunks(2, 3) != e


def test_second_challenge(group, rng):
    instance, _ = make_dealing(group, 1, 2, rng)
    e = ChunksOracle(instance, _first_move(group)).get_all_chunks(1, 2)
    g = instance.generator
    z_s = [group.init(ZR, k) for k in range(NUM_ZK_REPETITIONS)]
    second_move = SecondMoveChunking(group, z_s, [g, g ** group.init(ZR, 2)], g ** group.init(ZR, 3))

    x = chunking_proof_challenge_oracle(e, second_move)
    assert x == chunking_proof_challenge_oracle(e, second_move)

    e_changed = [[list(e_ij) for e_ij in e_i] for e_i in e]
    e_changed[0][0][0] ^= 1
    assert x != chunking_proof_challenge_oracle(e_changed, second_move)

    z_s_changed = list(z_s)
    z_s_changed[-1] = group.init(ZR, 1000)
    other = SecondMoveChunking(group, z_s_changed, second_move.dd, second_move.yy)
    assert x != chunking_proof_challenge_oracle(e, other)
