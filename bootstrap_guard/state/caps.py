"""
Per-market bootstrap cap configuration.

The execution engine hands over an opaque blob when a market is created.
The blob is the ABI encoding of ``(bool enabled, uint256 per_account_cap,
uint256 per_trade_cap)``. An empty blob means "no caps" and is never an
error. Cap values are stored verbatim, without bounds validation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError

from ..events import Event, EventLog
from .accounts import Amount, MarketId, require_uint256


logger = logging.getLogger(__name__)

CAP_CONFIG_ABI_TYPES = ["bool", "uint256", "uint256"]


@dataclass(frozen=True)
class MarketCapConfig:
    enabled: bool = False
    per_account_cap: Amount = 0
    per_trade_cap: Amount = 0

    @property
    def unbounded(self) -> bool:
        """Both caps at the zero sentinel: nothing is enforced."""
        return self.per_account_cap == 0 and self.per_trade_cap == 0


DISABLED_CONFIG = MarketCapConfig()


def encode_cap_config(config: MarketCapConfig) -> bytes:
    return encode(
        CAP_CONFIG_ABI_TYPES,
        [
            bool(config.enabled),
            require_uint256(config.per_account_cap, name="per_account_cap"),
            require_uint256(config.per_trade_cap, name="per_trade_cap"),
        ],
    )


def decode_cap_config(blob: bytes) -> MarketCapConfig:
    """
    Decode a cap-config blob.

    Empty and undecodable blobs both yield the disabled all-zero config.
    """
    if not blob:
        return DISABLED_CONFIG
    try:
        enabled, per_account_cap, per_trade_cap = decode(CAP_CONFIG_ABI_TYPES, bytes(blob))
    except (DecodingError, ValueError, TypeError, OverflowError) as exc:
        logger.warning("malformed cap config blob (%d bytes), storing disabled config: %s", len(blob), exc)
        return DISABLED_CONFIG
    return MarketCapConfig(
        enabled=bool(enabled),
        per_account_cap=int(per_account_cap),
        per_trade_cap=int(per_trade_cap),
    )


class BootstrapCapConfigStore:
    """Mutable mapping: market_id -> MarketCapConfig."""

    def __init__(self, events: Optional[EventLog] = None) -> None:
        self._configs: Dict[MarketId, MarketCapConfig] = {}
        self._events = events if events is not None else EventLog()

    def set_config(self, market_id: MarketId, blob: bytes) -> MarketCapConfig:
        config = decode_cap_config(blob)
        self._configs[market_id] = config
        self._events.emit(
            Event.CAP_CONFIG_SET,
            market_id=market_id,
            enabled=config.enabled,
            per_account_cap=config.per_account_cap,
            per_trade_cap=config.per_trade_cap,
        )
        return config

    def get(self, market_id: MarketId) -> MarketCapConfig:
        return self._configs.get(market_id, DISABLED_CONFIG)

    def __repr__(self) -> str:
        return f"BootstrapCapConfigStore({len(self._configs)} markets)"
