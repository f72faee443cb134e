from __future__ import annotations

import hashlib
import hmac
import re
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
APP_DIR = ROOT / "src" / "rps"
sys.path.insert(0, str(APP_DIR))

import rps_commit_reveal  # type: ignore[import-not-found]  # noqa: E402
from rps_commit_reveal import (  # type: ignore[import-not-found]  # noqa: E402
    RoundCommitment,
    compute_mac,
    generate_key,
    verify_mac,
)
from rps_errors import InvalidLength  # type: ignore[import-not-found]  # noqa: E402
from rps_rules import MoveSet, Rules  # type: ignore[import-not-found]  # noqa: E402


def _flip_bit(text: str, bit: int) -> str:
    raw = bytearray(text.encode("utf-8"))
    raw[bit // 8] ^= 1 << (bit % 8)
    return raw.decode("latin-1")


def test_generate_key_is_lowercase_hex_of_requested_length() -> None:
    key = generate_key(256)
    assert re.fullmatch(r"[0-9a-f]{64}", key)
    assert len(bytes.fromhex(key)) == 32
    assert len(bytes.fromhex(generate_key(8))) == 1


def test_generate_key_values_are_distinct() -> None:
    keys = [generate_key(256) for _ in range(500)]
    assert len(set(keys)) == len(keys)
    assert all(len(bytes.fromhex(k)) == 32 for k in keys)


@pytest.mark.parametrize("bits", [0, -8, 7, 100, 255, 8.0, "256", True])
def test_generate_key_rejects_bad_lengths(bits: object) -> None:
    with pytest.raises(InvalidLength):
        generate_key(bits)  # type: ignore[arg-type]


def test_generate_key_does_not_fall_back_when_csprng_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(_: int) -> str:
        raise OSError("no entropy")

    monkeypatch.setattr(rps_commit_reveal.secrets, "token_hex", broken)
    with pytest.raises(OSError, match="no entropy"):
        generate_key(256)


def test_compute_mac_matches_hmac_sha256_over_hex_key_text() -> None:
    key = "00ff" * 16
    expected = hmac.new(key.encode("utf-8"), b"rock", hashlib.sha256).hexdigest()
    assert compute_mac(key, "rock") == expected
    assert re.fullmatch(r"[0-9a-f]{64}", expected)


def test_compute_mac_is_deterministic() -> None:
    key = generate_key()
    assert compute_mac(key, "paper") == compute_mac(key, "paper")


def test_compute_mac_avalanche() -> None:
    key = "a1" * 32
    message = "Scissors"
    base = int(compute_mac(key, message), 16)

    changed_bits: list[int] = []
    for bit in range(len(message) * 8):
        flipped = int(compute_mac(key, _flip_bit(message, bit)), 16)
        changed_bits.append(bin(base ^ flipped).count("1"))
    for bit in range(len(key) * 8):
        flipped = int(compute_mac(_flip_bit(key, bit), message), 16)
        changed_bits.append(bin(base ^ flipped).count("1"))

    assert all(changed > 0 for changed in changed_bits)
    # About half of the 256 output bits should change on average.
    mean = sum(changed_bits) / len(changed_bits)
    assert 112 < mean < 144


def test_verify_mac() -> None:
    key = generate_key()
    mac = compute_mac(key, "lizard")
    assert verify_mac(expected_mac=mac, key=key, message="lizard")
    assert verify_mac(expected_mac=mac.upper(), key=key, message="lizard")
    assert not verify_mac(expected_mac=mac, key=key, message="Lizard")
    assert not verify_mac(expected_mac=mac, key=generate_key(), message="lizard")


def test_verify_mac_rejects_non_ascii_input() -> None:
    key = generate_key()
    mac = compute_mac(key, "spock")
    assert not verify_mac(expected_mac=mac[:-1] + "\u00e9", key=key, message="spock")
    assert not verify_mac(expected_mac="\u2013" + mac, key=key, message="spock")


def test_round_commitment_binds_move() -> None:
    rules = Rules(MoveSet.from_names(["rock", "paper", "scissors"]))
    commitment = RoundCommitment.create(rules)

    assert 1 <= commitment.move_index <= 3
    assert commitment.move_name == rules.move_name(commitment.move_index)
    assert commitment.mac == compute_mac(commitment.key, commitment.move_name)
    assert commitment.verify()
    assert len(bytes.fromhex(commitment.key)) == 32


def test_round_commitment_is_fresh_each_time() -> None:
    rules = Rules(MoveSet.from_names(["a", "b", "c", "d", "e"]))
    commitments = [RoundCommitment.create(rules) for _ in range(300)]

    assert len({c.key for c in commitments}) == len(commitments)
    # Uniform choice over 5 moves; 300 draws miss one with negligible probability.
    assert {c.move_index for c in commitments} == {1, 2, 3, 4, 5}
