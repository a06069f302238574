"""Tests for the wire form of chunking proofs."""

import json
from dataclasses import replace

import pytest
from charm.toolbox.pairinggroup import ZR, G1

from chunking_proofs import (
    ChunkingProof, ChunkingProofWire, deserialize_proof, prove_chunking, serialize_proof, verify_chunking,
)
from chunking_proofs.params import NUM_ZK_REPETITIONS
from chunking_proofs.serialization import proof_from_wire
from chunking_proofs.utils import deserialize_element, element_width, serialize_element


@pytest.fixture
def proof_and_instance(small_dealing, rng):
    instance, witness = small_dealing
    return prove_chunking(instance, witness, rng), instance


def test_element_round_trip(group):
    p = group.hash(b"point", G1)
    s = group.init(ZR, 123456789)
    assert deserialize_element(serialize_element(p, group), group, G1) == p
    assert deserialize_element(serialize_element(s, group), group, ZR) == s
    assert len(serialize_element(p, group)) == element_width(group, G1)
    assert len(serialize_element(s, group)) == element_width(group, ZR)


def test_element_type_is_checked(group):
    s = group.init(ZR, 7)
    assert deserialize_element(serialize_element(s, group), group, G1) is None


@pytest.mark.parametrize("data", [b"", b"garbage", b"1:AAAA", b"0:AAAA"])
def test_invalid_element_bytes(group, data):
    assert deserialize_element(data, group, G1) is None
    assert deserialize_element(data, group, ZR) is None


def test_invalid_base64_payload(group):
    width = element_width(group, G1)
    assert deserialize_element(b"1:" + b"!" * (width - 2), group, G1) is None


def test_bytes_round_trip(group, proof_and_instance):
    proof, instance = proof_and_instance
    data = serialize_proof(proof)
    decoded = deserialize_proof(group, data)
    assert decoded == proof
    verify_chunking(instance, decoded)


def test_wire_round_trip(group, proof_and_instance):
    proof, _ = proof_and_instance
    wire = proof.serialize()
    assert len(wire.first_move_b) == NUM_ZK_REPETITIONS
    assert len(wire.second_move_d) == len(proof.dd)
    assert ChunkingProof.deserialize(group, wire) == proof


def test_dict_round_trip_through_json(group, proof_and_instance):
    proof, instance = proof_and_instance
    encoded = json.dumps(proof.serialize().to_dict())
    wire = ChunkingProofWire.from_dict(json.loads(encoded))
    decoded = ChunkingProof.deserialize(group, wire)
    assert decoded == proof
    verify_chunking(instance, decoded)


def test_from_dict_rejects_malformed():
    assert ChunkingProofWire.from_dict({}) is None
    assert ChunkingProofWire.from_dict({'first_move_y0': 'not base64!'}) is None


def test_truncated_bytes(group, proof_and_instance):
    proof, _ = proof_and_instance
    data = serialize_proof(proof)
    for cut in (0, 1, len(data) // 2, len(data) - 1):
        assert deserialize_proof(group, data[:cut]) is None


def test_trailing_bytes(group, proof_and_instance):
    proof, _ = proof_and_instance
    assert deserialize_proof(group, serialize_proof(proof) + b"\x00") is None


def test_dd_and_z_r_length_mismatch(group, proof_and_instance):
    proof, _ = proof_and_instance
    wire = proof.serialize()
    assert proof_from_wire(group, replace(wire, second_move_d=wire.second_move_d[:-1])) is None
    assert proof_from_wire(group, replace(wire, response_z_r=wire.response_z_r + wire.response_z_r[:1])) is None

    mismatched = replace(wire, second_move_d=wire.second_move_d + wire.second_move_d[:1])
    assert deserialize_proof(group, mismatched.to_bytes()) is None


def test_corrupted_entry(group, proof_and_instance):
    proof, _ = proof_and_instance
    wire = proof.serialize()
    scalar = serialize_element(group.init(ZR, 1), group)

    assert proof_from_wire(group, replace(wire, first_move_y0=scalar)) is None
    assert proof_from_wire(group, replace(wire, response_z_b=wire.first_move_y0)) is None
    bb = list(wire.first_move_b)
    bb[3] = b"1:" + b"*" * (len(bb[3]) - 2)
    assert proof_from_wire(group, replace(wire, first_move_b=bb)) is None


def test_serialize_refuses_wrong_fixed_size(group, proof_and_instance):
    proof, _ = proof_and_instance
    with pytest.raises(ValueError):
        serialize_proof(replace(proof, bb=proof.bb[:-1]))
    with pytest.raises(ValueError):
        replace(proof.serialize(), response_z_s=[]).to_bytes()


def test_decoding_does_not_enforce_repetition_count(group, proof_and_instance):
    proof, instance = proof_and_instance
    wire = replace(proof.serialize(), first_move_c=proof.serialize().first_move_c[:-1])
    decoded = ChunkingProof.deserialize(group, wire)
    assert decoded is not None
    assert len(decoded.cc) == NUM_ZK_REPETITIONS - 1
