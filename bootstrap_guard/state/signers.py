"""
Trusted authorizer registry.

Two tiers:
- a global set of trusted signers, mutated by the administrator;
- a per-market override, written by the market's asset creator, that either
  pins one required signer or (with the zero signer) disables the signature
  requirement for that market.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Set

from ..errors import AlreadyTrusted, NotTrusted
from ..events import Event, EventLog
from .accounts import ZERO_ADDRESS, Address, MarketId, canonical_address


@dataclass(frozen=True)
class MarketSignerOverride:
    signer: Address = ZERO_ADDRESS
    enabled: bool = False

    @property
    def disables_check(self) -> bool:
        return self.enabled and self.signer == ZERO_ADDRESS


_NO_OVERRIDE = MarketSignerOverride()


class SignerRegistry:
    """
    Global trusted set plus per-market overrides.

    Authorization of the callers (administrator, asset creator) is the
    verifier's job; this table only enforces its own consistency rules.
    """

    def __init__(self, events: Optional[EventLog] = None) -> None:
        self._trusted: Set[Address] = set()
        self._overrides: Dict[MarketId, MarketSignerOverride] = {}
        self._events = events if events is not None else EventLog()

    def add_trusted_signer(self, account: Address) -> None:
        account = canonical_address(account, name="signer")
        if account in self._trusted:
            raise AlreadyTrusted(f"{account} is already a trusted signer")
        self._trusted.add(account)
        self._events.emit(Event.SIGNER_ADDED, signer=account)

    def remove_trusted_signer(self, account: Address) -> None:
        account = canonical_address(account, name="signer")
        if account not in self._trusted:
            raise NotTrusted(f"{account} is not a trusted signer")
        self._trusted.remove(account)
        self._events.emit(Event.SIGNER_REMOVED, signer=account)

    def is_trusted_signer(self, account: Address) -> bool:
        try:
            account = canonical_address(account, name="signer")
        except (TypeError, ValueError):
            return False
        return account in self._trusted

    def trusted_signers(self) -> FrozenSet[Address]:
        return frozenset(self._trusted)

    def set_market_signer(self, market_id: MarketId, signer: Address) -> MarketSignerOverride:
        # Overwrites unconditionally; there is no path back to "no override".
        override = MarketSignerOverride(signer=canonical_address(signer, name="signer"), enabled=True)
        self._overrides[market_id] = override
        self._events.emit(Event.MARKET_SIGNER_SET, market_id=market_id, signer=override.signer)
        return override

    def market_signer(self, market_id: MarketId) -> MarketSignerOverride:
        return self._overrides.get(market_id, _NO_OVERRIDE)

    def __repr__(self) -> str:
        return f"SignerRegistry({len(self._trusted)} trusted, {len(self._overrides)} overrides)"
