"""
Authorization-token creation and signing for off-chain authorizers.
"""

import re
import time
from typing import Optional, Union

from py_ecc.secp256k1 import secp256k1

from ..core.authorization import (
    AuthorizationToken,
    encode_hook_data,
    pubkey_to_address,
    token_fingerprint,
)
from ..state.accounts import Address, canonical_address


PrivKey = Union[str, int, bytes, bytearray]

_HEX_RE = re.compile(r"^[0-9a-fA-F]{64}$")


def _parse_privkey(privkey: PrivKey) -> bytes:
    """
    Normalize a secp256k1 private key to 32 big-endian bytes.

    Accepts 32 raw bytes, a 32-byte hex string (0x optional) or a positive int.

    Raises:
        ValueError: If the key is malformed or outside [1, N-1]
    """
    if isinstance(privkey, (bytes, bytearray)):
        if len(privkey) != 32:
            raise ValueError("privkey bytes must be 32 bytes")
        value = int.from_bytes(bytes(privkey), "big")
    elif isinstance(privkey, bool):
        raise TypeError("privkey must be str|int|bytes")
    elif isinstance(privkey, int):
        value = privkey
    elif isinstance(privkey, str):
        s = privkey.strip()
        if s.lower().startswith("0x"):
            s = s[2:]
        if not _HEX_RE.fullmatch(s):
            raise ValueError("privkey must be 32-byte hex (0x... or 64 hex chars)")
        value = int(s, 16)
    else:
        raise TypeError("privkey must be str|int|bytes")

    if not (0 < value < secp256k1.N):
        raise ValueError("privkey out of range for secp256k1")
    return value.to_bytes(32, "big")


def authorizer_address(privkey: PrivKey) -> Address:
    """Account identifier of the authorizer holding `privkey`."""
    x, y = secp256k1.privtopub(_parse_privkey(privkey))
    return pubkey_to_address(x, y)


def sign_digest(privkey: PrivKey, digest: bytes) -> bytes:
    """
    Sign a 32-byte digest.

    Returns:
        65-byte signature ``r || s || v`` with low-s and v in {27, 28}
    """
    if len(digest) != 32:
        raise ValueError("digest must be 32 bytes")
    v, r, s = secp256k1.ecdsa_raw_sign(digest, _parse_privkey(privkey))
    signature = r.to_bytes(32, "big") + s.to_bytes(32, "big") + bytes([v])
    return signature


def sign_authorization(privkey: PrivKey, origin: Address, deadline: int) -> AuthorizationToken:
    """
    Authorize `origin` to trade until `deadline` (inclusive).

    The token is single-use: the verifier records its fingerprint on the
    first trade it authorizes.
    """
    origin = canonical_address(origin, name="origin")
    digest = token_fingerprint(origin, deadline)
    return AuthorizationToken(deadline=int(deadline), signature=sign_digest(privkey, digest))


def authorize_for(
    privkey: PrivKey,
    origin: Address,
    *,
    ttl_s: int = 300,
    now: Optional[int] = None,
    referrer: Optional[Address] = None,
) -> bytes:
    """
    Sign a token valid for `ttl_s` seconds and encode it as trade hook data.
    """
    if ttl_s < 0:
        raise ValueError("ttl_s must be non-negative")
    issued_at = int(time.time()) if now is None else int(now)
    token = sign_authorization(privkey, origin, issued_at + ttl_s)
    return encode_hook_data(token, referrer=referrer)
