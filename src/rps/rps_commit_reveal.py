from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass
from typing import Final

from rps_errors import InvalidLength
from rps_rules import Rules

logger = logging.getLogger(__name__)

KEY_BITS: Final[int] = 256


def generate_key(bit_length: int = KEY_BITS) -> str:
    if isinstance(bit_length, bool) or not isinstance(bit_length, int) or bit_length <= 0 or bit_length % 8:
        raise InvalidLength(f"key length must be a positive multiple of 8 bits, got {bit_length!r}")
    # OS CSPRNG only, never the random module.
    return secrets.token_hex(bit_length // 8)


def compute_mac(key: str, message: str) -> str:
    # The hex key is used as text, the same bytes a player pastes into any
    # HMAC-SHA256 calculator to check the round.
    return hmac.new(key.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).hexdigest()


def verify_mac(*, expected_mac: str, key: str, message: str) -> bool:
    computed = compute_mac(key, message)
    return secrets.compare_digest(expected_mac.strip().lower().encode("utf-8"), computed.encode("ascii"))


@dataclass(frozen=True)
class RoundCommitment:
    key: str
    move_index: int
    move_name: str
    mac: str

    @classmethod
    def create(cls, rules: Rules, bit_length: int = KEY_BITS) -> "RoundCommitment":
        key = generate_key(bit_length)
        move_index = secrets.randbelow(rules.size) + 1
        move_name = rules.move_name(move_index)
        mac = compute_mac(key, move_name)
        logger.debug("round committed, mac=%s", mac)
        return cls(key=key, move_index=move_index, move_name=move_name, mac=mac)

    def verify(self) -> bool:
        return verify_mac(expected_mac=self.mac, key=self.key, message=self.move_name)
