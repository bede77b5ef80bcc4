# [TESTER] v1

from __future__ import annotations

from eth_abi import encode

from bootstrap_guard.events import Event, EventLog
from bootstrap_guard.state.caps import (
    DISABLED_CONFIG,
    BootstrapCapConfigStore,
    MarketCapConfig,
    decode_cap_config,
    encode_cap_config,
)


MARKET = "0x" + "01" * 32


def test_empty_blob_decodes_to_disabled_config() -> None:
    assert decode_cap_config(b"") == MarketCapConfig(enabled=False, per_account_cap=0, per_trade_cap=0)


def test_blob_is_stored_verbatim_without_bounds_checks() -> None:
    huge = (1 << 256) - 1
    blob = encode(["bool", "uint256", "uint256"], [True, huge, 7])
    assert decode_cap_config(blob) == MarketCapConfig(enabled=True, per_account_cap=huge, per_trade_cap=7)


def test_encode_matches_abi_layout() -> None:
    cfg = MarketCapConfig(enabled=True, per_account_cap=100, per_trade_cap=0)
    blob = encode_cap_config(cfg)
    assert len(blob) == 96
    assert blob[31] == 1
    assert int.from_bytes(blob[32:64], "big") == 100
    assert decode_cap_config(blob) == cfg


def test_malformed_blob_falls_back_to_disabled() -> None:
    assert decode_cap_config(b"\x01\x02\x03") == DISABLED_CONFIG
    # bool word other than 0/1 is not a valid encoding.
    bad_bool = (2).to_bytes(32, "big") + (1).to_bytes(32, "big") + (1).to_bytes(32, "big")
    assert decode_cap_config(bad_bool) == DISABLED_CONFIG


def test_store_overwrites_and_emits() -> None:
    log = EventLog()
    store = BootstrapCapConfigStore(log)
    assert store.get(MARKET) == DISABLED_CONFIG

    store.set_config(MARKET, encode_cap_config(MarketCapConfig(True, 100, 10)))
    store.set_config(MARKET, b"")

    assert store.get(MARKET) == DISABLED_CONFIG
    notes = log.entries(Event.CAP_CONFIG_SET)
    assert len(notes) == 2
    assert notes[0].as_dict() == {
        "market_id": MARKET,
        "enabled": True,
        "per_account_cap": 100,
        "per_trade_cap": 10,
    }
