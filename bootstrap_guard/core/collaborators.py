"""
Interfaces of the external collaborators.

Only the boundary is specified here; the execution engine, the asset
registry and intermediary routers are owned elsewhere. Tests and embedding
applications provide concrete implementations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol, runtime_checkable

from ..state.accounts import Address, Amount, MarketId


@dataclass(frozen=True)
class FairLaunchSnapshot:
    """Bootstrap-window price/supply state, as reported by the engine."""

    start_tick: int
    remaining_supply: Amount


class FairLaunchSource(Protocol):
    def get_fair_launch_snapshot(self, market_id: MarketId) -> FairLaunchSnapshot:
        ...


class AssetRegistry(Protocol):
    def creator_of(self, asset: Address) -> Address:
        ...


@runtime_checkable
class OriginReporter(Protocol):
    """Optional capability of intermediaries that forward a user's trade."""

    def msg_sender(self) -> Address:
        ...


class ContractDirectory(Protocol):
    """Resolves an account to the object deployed there, if any."""

    def contract_at(self, account: Address) -> Optional[object]:
        ...


@dataclass(frozen=True)
class StaticDirectory:
    """`ContractDirectory` over a fixed mapping."""

    contracts: Mapping[Address, object]

    def contract_at(self, account: Address) -> Optional[object]:
        return self.contracts.get(account)


@dataclass(frozen=True)
class TradeParams:
    """
    Parameters of one trade, as applied by the engine.

    zero_for_one: True when the trader pays currency0 and receives currency1
    amount_specified: negative for exact input, positive for exact output
    """

    zero_for_one: bool
    amount_specified: int

    def pays_native(self, native_is_first_asset: bool) -> bool:
        """True when the trader spends the pairing asset to receive the scarce one."""
        return self.zero_for_one == native_is_first_asset


@dataclass(frozen=True)
class CallContext:
    """Platform-supplied facts about the current call.

    sender: the immediate caller of the verifier operation
    origin: the account that signed the enclosing transaction
    timestamp: current block timestamp (seconds)
    """

    sender: Address
    origin: Address
    timestamp: int
