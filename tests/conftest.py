from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

import pytest

from bootstrap_guard.agents.token_signer import authorizer_address, sign_authorization
from bootstrap_guard.core.authorization import encode_hook_data
from bootstrap_guard.core.collaborators import CallContext, FairLaunchSnapshot, StaticDirectory, TradeParams
from bootstrap_guard.integration.deployment import VerifierConfig
from bootstrap_guard.integration.verifier import AuthorizationVerifier
from bootstrap_guard.state.accounts import Address, MarketId
from bootstrap_guard.state.caps import MarketCapConfig, encode_cap_config
from bootstrap_guard.state.markets import MarketKey, make_market_key


NATIVE = "0x" + "11" * 20
SCARCE = "0x" + "22" * 20
ENGINE = "0x" + "33" * 20
ADMIN = "0x" + "44" * 20
HOOK = "0x" + "55" * 20
CREATOR = "0x" + "66" * 20
USER = "0x" + "77" * 20
ROUTER = "0x" + "88" * 20
OTHER_USER = "0x" + "99" * 20

TRUSTED_KEY = b"\x01" * 32
OTHER_TRUSTED_KEY = b"\x02" * 32
UNTRUSTED_KEY = b"\x03" * 32

NOW = 1_700_000_000


@dataclass
class FakeFairLaunch:
    """Execution-engine stand-in: per-market bootstrap snapshots."""

    snapshots: Dict[MarketId, FairLaunchSnapshot] = field(default_factory=dict)
    default: FairLaunchSnapshot = FairLaunchSnapshot(start_tick=0, remaining_supply=10**30)
    calls: int = 0

    def get_fair_launch_snapshot(self, market_id: MarketId) -> FairLaunchSnapshot:
        self.calls += 1
        return self.snapshots.get(market_id, self.default)


@dataclass
class FakeAssetRegistry:
    creators: Dict[Address, Address] = field(default_factory=dict)
    on_lookup: Optional[Callable[[], None]] = None

    def creator_of(self, asset: Address) -> Address:
        if self.on_lookup is not None:
            self.on_lookup()
        return self.creators[asset]


@dataclass
class Env:
    verifier: AuthorizationVerifier
    fair_launch: FakeFairLaunch
    registry: FakeAssetRegistry
    key: MarketKey
    # Contracts deployed at caller accounts, consulted for origin resolution.
    contracts: Dict[Address, object] = field(default_factory=dict)

    def engine_ctx(self, *, origin: str = USER, timestamp: int = NOW) -> CallContext:
        return CallContext(sender=ENGINE, origin=origin, timestamp=timestamp)

    def configure(self, *, enabled: bool = True, per_account: int = 0, per_trade: int = 0) -> None:
        blob = encode_cap_config(
            MarketCapConfig(enabled=enabled, per_account_cap=per_account, per_trade_cap=per_trade)
        )
        self.verifier.set_config(self.engine_ctx(), self.key, blob)

    def hook_data(self, *, privkey: bytes = TRUSTED_KEY, origin: str = USER, deadline: int = NOW + 60) -> bytes:
        return encode_hook_data(sign_authorization(privkey, origin, deadline))

    def buy(
        self,
        amount: int,
        *,
        hook_data: bytes = b"",
        origin: str = USER,
        caller: str = USER,
        timestamp: int = NOW,
    ):
        # Native is currency0 in the default market, so zero_for_one is a buy.
        return self.verifier.notify_trade(
            self.engine_ctx(origin=origin, timestamp=timestamp),
            caller,
            self.key,
            TradeParams(zero_for_one=True, amount_specified=amount),
            hook_data,
        )


@pytest.fixture
def trusted_signer() -> str:
    return authorizer_address(TRUSTED_KEY)


@pytest.fixture
def env() -> Env:
    fair_launch = FakeFairLaunch()
    registry = FakeAssetRegistry(creators={SCARCE: CREATOR})
    config = VerifierConfig(
        address=HOOK,
        execution_engine=ENGINE,
        admin=ADMIN,
        native_token=NATIVE,
        trusted_signers=(authorizer_address(TRUSTED_KEY), authorizer_address(OTHER_TRUSTED_KEY)),
    )
    contracts: Dict[Address, object] = {}
    verifier = AuthorizationVerifier(
        config,
        fair_launch=fair_launch,
        registry=registry,
        directory=StaticDirectory(contracts),
    )
    key = make_market_key(NATIVE, SCARCE, 3000, 60, HOOK)
    return Env(verifier=verifier, fair_launch=fair_launch, registry=registry, key=key, contracts=contracts)
