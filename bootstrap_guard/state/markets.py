"""
Market keys and market identifiers.

A market is uniquely identified by its configuration tuple: two assets in
canonical (ascending) order, the fee tier, the tick spacing and the address
of the hook/policy contract. The market id is the keccak-256 hash of the
ABI encoding of that tuple.
"""

from __future__ import annotations

from dataclasses import dataclass

from eth_abi import encode
from eth_utils import keccak

from ..errors import InvalidMarket
from .accounts import Address, MarketId, canonical_address


MAX_FEE = 1_000_000  # hundredths of a bip; the top bit of uint24 is reserved
MIN_TICK_SPACING = 1
MAX_TICK_SPACING = (1 << 15) - 1


@dataclass(frozen=True)
class MarketKey:
    currency0: Address
    currency1: Address
    fee: int
    tick_spacing: int
    hooks: Address

    @property
    def market_id(self) -> MarketId:
        return compute_market_id(self)

    def other_asset(self, asset: Address) -> Address:
        """Return the counterpart of `asset` in this market."""
        asset = canonical_address(asset, name="asset")
        if asset == self.currency0:
            return self.currency1
        if asset == self.currency1:
            return self.currency0
        raise InvalidMarket(f"asset {asset} is not part of market {self.market_id}")


def make_market_key(
    currency0: object,
    currency1: object,
    fee: int,
    tick_spacing: int,
    hooks: object,
) -> MarketKey:
    """
    Build a validated `MarketKey`.

    Raises:
        InvalidMarket: If any field is malformed or the assets are not in
            strictly ascending order.
    """
    try:
        c0 = canonical_address(currency0, name="currency0")
        c1 = canonical_address(currency1, name="currency1")
        h = canonical_address(hooks, name="hooks")
    except (TypeError, ValueError) as exc:
        raise InvalidMarket(str(exc)) from exc

    if int(c0, 16) >= int(c1, 16):
        raise InvalidMarket("currency0 must sort strictly before currency1")
    if not isinstance(fee, int) or isinstance(fee, bool) or not (0 <= fee <= MAX_FEE):
        raise InvalidMarket(f"fee out of range: {fee!r}")
    if (
        not isinstance(tick_spacing, int)
        or isinstance(tick_spacing, bool)
        or not (MIN_TICK_SPACING <= tick_spacing <= MAX_TICK_SPACING)
    ):
        raise InvalidMarket(f"tick_spacing out of range: {tick_spacing!r}")
    return MarketKey(currency0=c0, currency1=c1, fee=fee, tick_spacing=tick_spacing, hooks=h)


def compute_market_id(key: MarketKey) -> MarketId:
    encoded = encode(
        ["address", "address", "uint24", "int24", "address"],
        [key.currency0, key.currency1, key.fee, key.tick_spacing, key.hooks],
    )
    return "0x" + keccak(encoded).hex()
