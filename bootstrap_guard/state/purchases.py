"""
Cumulative bootstrap purchases per (market, account).

Amounts only ever increase. The cap policy lives in `remaining_allowance`
and `effective_ceiling`, the only places that interpret the zero-as-unset
sentinel and the already-over-cap trap.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from ..errors import AllowanceUnderflow, CapExceeded
from .accounts import Address, Amount, MarketId
from .caps import MarketCapConfig


def remaining_allowance(config: MarketCapConfig, consumed: Amount) -> Optional[Amount]:
    """
    Per-account allowance left after `consumed`, or None without an account cap.

    Raises:
        AllowanceUnderflow: If consumed already exceeds the account cap
    """
    if config.per_account_cap == 0:
        return None
    if consumed > config.per_account_cap:
        raise AllowanceUnderflow(consumed, config.per_account_cap)
    return config.per_account_cap - consumed


def effective_ceiling(config: MarketCapConfig, consumed: Amount) -> Optional[Amount]:
    """
    Largest quantity a single new trade may still receive.

    - Both caps zero: no ceiling (returns None).
    - `per_account_cap != 0`: the remaining allowance is `cap - consumed`.
      If `consumed > cap` this underflows and raises `AllowanceUnderflow`
      instead of clamping to zero.
    - `per_trade_cap == 0` means "unset": the ceiling is the remaining
      allowance alone. Otherwise the ceiling is the smaller of the two.

    Raises:
        AllowanceUnderflow: If consumed already exceeds a non-zero account cap
    """
    if config.unbounded:
        return None

    remaining = remaining_allowance(config, consumed)

    if config.per_trade_cap == 0:
        return remaining
    if remaining is None:
        return config.per_trade_cap
    return min(config.per_trade_cap, remaining)


class PurchaseLedger:
    """Mapping (market_id, account) -> cumulative estimated purchases."""

    def __init__(self) -> None:
        self._purchased: Dict[Tuple[MarketId, Address], Amount] = {}

    def purchased(self, market_id: MarketId, account: Address) -> Amount:
        return self._purchased.get((market_id, account), 0)

    def check(
        self,
        market_id: MarketId,
        account: Address,
        config: MarketCapConfig,
        estimated: Amount,
    ) -> Amount:
        """
        Validate one trade against the cap policy without recording it.

        Returns:
            The cumulative total after the trade would be recorded

        Raises:
            ValueError: If estimated is negative
            CapExceeded: If estimated exceeds the effective ceiling
            AllowanceUnderflow: See `effective_ceiling`
        """
        if estimated < 0:
            raise ValueError(f"estimated amount must be non-negative: {estimated}")
        current = self.purchased(market_id, account)
        ceiling = effective_ceiling(config, current)
        if ceiling is not None and estimated > ceiling:
            raise CapExceeded(estimated, ceiling)
        return current + estimated

    def record(self, market_id: MarketId, account: Address, new_total: Amount) -> None:
        current = self.purchased(market_id, account)
        if new_total < current:
            raise ValueError(f"purchases never decrease: {current} -> {new_total}")
        self._purchased[(market_id, account)] = new_total

    def record_and_check(
        self,
        market_id: MarketId,
        account: Address,
        config: MarketCapConfig,
        estimated: Amount,
    ) -> Amount:
        new_total = self.check(market_id, account, config, estimated)
        self.record(market_id, account, new_total)
        return new_total

    def get_all(self) -> Dict[Tuple[MarketId, Address], Amount]:
        return dict(self._purchased)

    def __repr__(self) -> str:
        return f"PurchaseLedger({len(self._purchased)} entries)"
