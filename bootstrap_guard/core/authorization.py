"""
Authorization tokens: wire format, fingerprint and signer recovery.

Token wire format (the trade's side-channel data), ABI encoded:
- plain:          (uint256 deadline, bytes signature)
- with referrer:  (address referrer, bytes token) where `token` is the plain
                  encoding above. The referrer is ignored here.

Signing: an authorizer signs, with secp256k1 ECDSA, the personal-message
digest

    keccak256("\\x19Ethereum Signed Message:\\n32" || keccak256(origin || uint256(deadline)))

where `origin` is the 20-byte initiating account. That digest is also the
token's replay fingerprint.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import keccak, to_checksum_address
from py_ecc.secp256k1 import secp256k1

from ..errors import InvalidAuthorization, InvalidSigner
from ..state.accounts import Address, address_bytes, canonical_address, require_uint256


SIGNATURE_LENGTH = 65
_TOKEN_ABI_TYPES = ["uint256", "bytes"]
_REFERRER_ABI_TYPES = ["address", "bytes"]
_PERSONAL_MESSAGE_PREFIX = b"\x19Ethereum Signed Message:\n32"
_HALF_CURVE_ORDER = secp256k1.N // 2


@dataclass(frozen=True)
class AuthorizationToken:
    deadline: int
    signature: bytes


def encode_token(token: AuthorizationToken) -> bytes:
    return encode(
        _TOKEN_ABI_TYPES,
        [require_uint256(token.deadline, name="deadline"), bytes(token.signature)],
    )


def encode_hook_data(token: AuthorizationToken, referrer: Optional[Address] = None) -> bytes:
    payload = encode_token(token)
    if referrer is None:
        return payload
    return encode(_REFERRER_ABI_TYPES, [canonical_address(referrer, name="referrer"), payload])


def _decode_token(data: bytes) -> AuthorizationToken:
    deadline, signature = decode(_TOKEN_ABI_TYPES, data)
    return AuthorizationToken(deadline=int(deadline), signature=bytes(signature))


def decode_hook_data(data: bytes) -> AuthorizationToken:
    """
    Extract the authorization token from a trade's side-channel data.

    Both layouts start with one word followed by a `bytes` field, so a plain
    token also parses as the referrer form. The payload length tells them
    apart: in a plain token it is the 65-byte signature, in the referrer form
    it is a full token encoding, which must then decode on its own.

    Raises:
        InvalidAuthorization: If no token can be decoded
    """
    if not data:
        raise InvalidAuthorization("missing authorization data")
    raw = bytes(data)
    try:
        _referrer, inner = decode(_REFERRER_ABI_TYPES, raw)
    except (DecodingError, ValueError, TypeError, OverflowError):
        inner = None
    if inner is not None and len(inner) != SIGNATURE_LENGTH:
        try:
            return _decode_token(bytes(inner))
        except (DecodingError, ValueError, TypeError, OverflowError) as exc:
            raise InvalidAuthorization(f"undecodable token after referrer: {exc}") from exc
    try:
        return _decode_token(raw)
    except (DecodingError, ValueError, TypeError, OverflowError) as exc:
        raise InvalidAuthorization(f"undecodable authorization data: {exc}") from exc


def authorization_message_hash(origin: Address, deadline: int) -> bytes:
    """keccak256 of the packed (origin, deadline) pair."""
    deadline = require_uint256(deadline, name="deadline")
    return keccak(address_bytes(origin) + deadline.to_bytes(32, "big"))


def personal_message_digest(message_hash: bytes) -> bytes:
    if len(message_hash) != 32:
        raise ValueError("message_hash must be 32 bytes")
    return keccak(_PERSONAL_MESSAGE_PREFIX + message_hash)


def token_fingerprint(origin: Address, deadline: int) -> bytes:
    return personal_message_digest(authorization_message_hash(origin, deadline))


def pubkey_to_address(x: int, y: int) -> Address:
    return to_checksum_address(keccak(x.to_bytes(32, "big") + y.to_bytes(32, "big"))[-20:])


def recover_signer(digest: bytes, signature: bytes) -> Address:
    """
    Recover the signing account from a 65-byte ``r || s || v`` signature.

    High-s signatures are rejected so that each (digest, signer) pair has a
    single valid encoding.

    Raises:
        InvalidSigner: If the signature is malformed or unrecoverable
    """
    if len(digest) != 32:
        raise ValueError("digest must be 32 bytes")
    if len(signature) != SIGNATURE_LENGTH:
        raise InvalidSigner(f"signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}")

    r = int.from_bytes(signature[0:32], "big")
    s = int.from_bytes(signature[32:64], "big")
    v = signature[64]
    if v < 27:
        v += 27
    if v not in (27, 28):
        raise InvalidSigner(f"invalid signature recovery id: {signature[64]}")
    if not (0 < r < secp256k1.N) or not (0 < s <= _HALF_CURVE_ORDER):
        raise InvalidSigner("signature r/s out of range")

    try:
        point = secp256k1.ecdsa_raw_recover(digest, (v, r, s))
    except (ValueError, ZeroDivisionError) as exc:
        raise InvalidSigner(f"unrecoverable signature: {exc}") from exc
    if not point:
        raise InvalidSigner("unrecoverable signature")
    x, y = point
    if x == 0 and y == 0:
        raise InvalidSigner("unrecoverable signature")
    return pubkey_to_address(x, y)
