"""
Consumed authorization-token fingerprints (replay protection).

A fingerprint moves from "unused" to "used" exactly once. `consume` performs
the membership check and the insertion as one step, so two callers can never
both observe "unused" for the same fingerprint.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Set

from ..errors import TokenAlreadyUsed
from .accounts import canonical_hex_fixed


def _fingerprint_key(fingerprint: bytes | str) -> str:
    if isinstance(fingerprint, (bytes, bytearray)):
        if len(fingerprint) != 32:
            raise ValueError(f"fingerprint must be 32 bytes, got {len(fingerprint)}")
        return "0x" + bytes(fingerprint).hex()
    return canonical_hex_fixed(fingerprint, nbytes=32, name="fingerprint")


@dataclass
class ReplayGuard:
    _consumed: Set[str] = field(default_factory=set)

    def has_been_consumed(self, fingerprint: bytes | str) -> bool:
        return _fingerprint_key(fingerprint) in self._consumed

    def consume(self, fingerprint: bytes | str) -> None:
        key = _fingerprint_key(fingerprint)
        if key in self._consumed:
            raise TokenAlreadyUsed(f"authorization {key} already used")
        self._consumed.add(key)

    def get_all(self) -> FrozenSet[str]:
        return frozenset(self._consumed)

    def __len__(self) -> int:
        return len(self._consumed)
