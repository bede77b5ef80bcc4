# [TESTER] v1

from __future__ import annotations

import pytest
from py_ecc.secp256k1 import secp256k1

from bootstrap_guard.agents.token_signer import authorize_for, authorizer_address, sign_authorization
from bootstrap_guard.core.authorization import decode_hook_data, recover_signer, token_fingerprint


ORIGIN = "0x" + "77" * 20
REFERRER = "0x" + "99" * 20
KEY_HEX = "0x" + "01" * 32


def test_authorize_for_uses_ttl() -> None:
    data = authorize_for(KEY_HEX, ORIGIN, ttl_s=120, now=1_000)
    token = decode_hook_data(data)
    assert token.deadline == 1_120
    assert recover_signer(token_fingerprint(ORIGIN, 1_120), token.signature) == authorizer_address(KEY_HEX)


def test_authorize_for_with_referrer_decodes_to_same_token() -> None:
    plain = decode_hook_data(authorize_for(KEY_HEX, ORIGIN, ttl_s=0, now=5))
    wrapped = decode_hook_data(authorize_for(KEY_HEX, ORIGIN, ttl_s=0, now=5, referrer=REFERRER))
    assert plain == wrapped


def test_authorize_for_rejects_negative_ttl() -> None:
    with pytest.raises(ValueError):
        authorize_for(KEY_HEX, ORIGIN, ttl_s=-1, now=0)


def test_signatures_are_deterministic_and_low_s() -> None:
    a = sign_authorization(KEY_HEX, ORIGIN, 42)
    b = sign_authorization(bytes.fromhex("01" * 32), ORIGIN, 42)
    assert a == b
    s = int.from_bytes(a.signature[32:64], "big")
    assert 0 < s <= secp256k1.N // 2
    assert a.signature[64] in (27, 28)


@pytest.mark.parametrize(
    "privkey,exc",
    [
        (b"\x01" * 31, ValueError),
        ("0x1234", ValueError),
        (0, ValueError),
        (secp256k1.N, ValueError),
        (True, TypeError),
        (1.5, TypeError),
    ],
)
def test_malformed_private_keys(privkey, exc) -> None:
    with pytest.raises(exc):
        authorizer_address(privkey)


def test_int_and_hex_keys_agree() -> None:
    assert authorizer_address(int("01" * 32, 16)) == authorizer_address(KEY_HEX)


def test_origin_must_be_an_account() -> None:
    with pytest.raises(ValueError):
        sign_authorization(KEY_HEX, "0x1234", 42)
