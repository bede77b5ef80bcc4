"""
Account identifiers.

Accounts are 20-byte identifiers. Internally they are always carried as
EIP-55 checksummed, 0x-prefixed hex strings so that dict keys compare equal
regardless of the casing a caller used.
"""

from __future__ import annotations

import re

from eth_utils import is_address, to_canonical_address, to_checksum_address


# Type aliases
Address = str  # EIP-55 checksummed 0x hex string
MarketId = str  # 32-byte hex string (0x...)
Amount = int  # Non-negative integer (arbitrary precision, uint256 on the wire)

ZERO_ADDRESS: Address = "0x" + "00" * 20

UINT256_MAX = (1 << 256) - 1

_HEX_CHARS_RE = re.compile(r"^[0-9a-fA-F]+$")


def canonical_address(value: object, *, name: str = "address") -> Address:
    """
    Canonicalize an account identifier.

    Accepts 0x-prefixed hex (any casing; mixed case must carry a valid
    checksum) or 20 raw bytes.

    Raises:
        TypeError: If value is not str/bytes
        ValueError: If value is not a well-formed 20-byte identifier
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 20:
            raise ValueError(f"{name} must be 20 bytes, got {len(value)}")
        return to_checksum_address(bytes(value))
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a str or bytes")
    s = value.strip()
    if not s.lower().startswith("0x") or len(s) != 42:
        raise ValueError(f"{name} must be a 0x-prefixed 20-byte hex string")
    if not _HEX_CHARS_RE.fullmatch(s[2:]):
        raise ValueError(f"{name} must be valid hex")
    if not is_address(s):
        raise ValueError(f"{name} has an invalid checksum")
    return to_checksum_address(s)


def address_bytes(address: Address) -> bytes:
    return to_canonical_address(canonical_address(address))


def require_uint256(value: object, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0 or value > UINT256_MAX:
        raise ValueError(f"{name} must fit in uint256: {value}")
    return int(value)


def canonical_hex_fixed(hex_str: str, *, nbytes: int, name: str) -> str:
    """
    Canonicalize a fixed-size hex string (lowercase, 0x-prefixed).

    Accepts either 0x-prefixed or raw hex input.
    """
    if not isinstance(hex_str, str):
        raise TypeError(f"{name} must be a str")
    if not isinstance(nbytes, int) or isinstance(nbytes, bool) or nbytes <= 0:
        raise ValueError("nbytes must be a positive int")

    s = hex_str.strip()
    if s.lower().startswith("0x"):
        s = s[2:]
    expected_len = 2 * nbytes
    if len(s) != expected_len:
        raise ValueError(f"{name} must be {nbytes} bytes (hex length {expected_len})")
    if not _HEX_CHARS_RE.fullmatch(s):
        raise ValueError(f"{name} must be valid hex")
    return "0x" + s.lower()
