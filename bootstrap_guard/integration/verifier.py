"""
Bootstrap purchase authorization verifier (imperative shell).

This is the component the execution engine talks to. It wires the state
tables and the pure helpers in `core/` into one guard chain per trade:

1. caller must be the execution engine
2. cap config disabled -> return, nothing touched
3. signer policy NoCheck -> skip to 6
4. decode the authorization token, check its deadline
5. resolve the initiating account, check replay, recover and check signer
6. estimate the scarce-asset quantity
7. check the purchase ceiling
8. commit: mark the token consumed, record the purchase

Every failure raises a `BootstrapGuardError`. Writes are staged until every
check has passed, so a rejected trade leaves all tables unchanged.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from ..core.authorization import decode_hook_data, recover_signer, token_fingerprint
from ..core.collaborators import (
    AssetRegistry,
    CallContext,
    ContractDirectory,
    FairLaunchSource,
    StaticDirectory,
    TradeParams,
)
from ..core.origin import OriginResolver, ProbingOriginResolver
from ..core.policy import NoCheck, RequireSigner, resolve_policy
from ..core.quoter import PriceQuoter
from ..errors import (
    DeadlineExpired,
    InvalidMarket,
    InvalidSigner,
    ReentrantCall,
    TokenAlreadyUsed,
    Unauthorized,
)
from ..events import EventLog
from ..state.accounts import Address, Amount, MarketId, canonical_address
from ..state.caps import BootstrapCapConfigStore, MarketCapConfig
from ..state.markets import MarketKey
from ..state.purchases import PurchaseLedger, remaining_allowance
from ..state.replay import ReplayGuard
from ..state.signers import MarketSignerOverride, SignerRegistry
from .deployment import VerifierConfig


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TradeReceipt:
    """Outcome of an enforced trade notification."""

    market_id: MarketId
    origin: Address
    estimated: Amount
    purchased_total: Amount
    fingerprint: Optional[str] = None


class AuthorizationVerifier:
    def __init__(
        self,
        config: VerifierConfig,
        *,
        fair_launch: FairLaunchSource,
        registry: AssetRegistry,
        directory: Optional[ContractDirectory] = None,
        origin_resolver: Optional[OriginResolver] = None,
        events: Optional[EventLog] = None,
    ) -> None:
        self.config = config
        self.events = events if events is not None else EventLog()
        self.signers = SignerRegistry(self.events)
        self.caps = BootstrapCapConfigStore(self.events)
        self.replay = ReplayGuard()
        self.ledger = PurchaseLedger()
        self.quoter = PriceQuoter(fair_launch)
        self.registry = registry
        if origin_resolver is None:
            origin_resolver = ProbingOriginResolver(directory if directory is not None else StaticDirectory({}))
        self.origin_resolver: OriginResolver = origin_resolver
        self._entered = False

        for signer in config.trusted_signers:
            self.signers.add_trusted_signer(signer)

    @classmethod
    def from_config(
        cls,
        config: VerifierConfig,
        *,
        fair_launch: FairLaunchSource,
        registry: AssetRegistry,
        directory: Optional[ContractDirectory] = None,
        origin_resolver: Optional[OriginResolver] = None,
    ) -> "AuthorizationVerifier":
        return cls(
            config,
            fair_launch=fair_launch,
            registry=registry,
            directory=directory,
            origin_resolver=origin_resolver,
        )

    # -- helpers ---------------------------------------------------------------

    @contextmanager
    def _nonreentrant(self) -> Iterator[None]:
        if self._entered:
            raise ReentrantCall("verifier operation re-entered")
        self._entered = True
        try:
            yield
        finally:
            self._entered = False

    def _require_sender(self, ctx: CallContext, expected: Address, *, role: str) -> None:
        try:
            sender = canonical_address(ctx.sender, name="sender")
        except (TypeError, ValueError) as exc:
            raise Unauthorized(f"malformed caller: {exc}") from exc
        if sender != expected:
            raise Unauthorized(f"caller {sender} is not the {role}")

    def _market_id(self, key: MarketKey) -> MarketId:
        if key.hooks != self.config.address:
            raise InvalidMarket(f"market hook {key.hooks} is not this verifier")
        return key.market_id

    def _native_is_first(self, key: MarketKey) -> bool:
        if key.currency0 == self.config.native_token:
            return True
        if key.currency1 == self.config.native_token:
            return False
        raise InvalidMarket(f"market {key.market_id} does not pair the native token")

    # -- administrator ---------------------------------------------------------

    def add_trusted_signer(self, ctx: CallContext, account: Address) -> None:
        self._require_sender(ctx, self.config.admin, role="admin")
        self.signers.add_trusted_signer(account)

    def remove_trusted_signer(self, ctx: CallContext, account: Address) -> None:
        self._require_sender(ctx, self.config.admin, role="admin")
        self.signers.remove_trusted_signer(account)

    # -- asset creator ---------------------------------------------------------

    def set_market_signer(self, ctx: CallContext, key: MarketKey, signer: Address) -> MarketSignerOverride:
        """
        Pin (or, with the zero account, disable) the authorizer for one market.

        Only the creator of the market's scarce asset may call this. The
        creator lookup runs inside the non-reentrant section.
        """
        with self._nonreentrant():
            market_id = self._market_id(key)
            scarce = key.other_asset(self.config.native_token)
            try:
                creator = canonical_address(self.registry.creator_of(scarce), name="creator")
            except (TypeError, ValueError) as exc:
                raise Unauthorized(f"no usable creator for {scarce}: {exc}") from exc
            self._require_sender(ctx, creator, role=f"creator of {scarce}")
            try:
                signer = canonical_address(signer, name="signer")
            except (TypeError, ValueError) as exc:
                raise InvalidSigner(str(exc)) from exc
            return self.signers.set_market_signer(market_id, signer)

    # -- execution engine ------------------------------------------------------

    def set_config(self, ctx: CallContext, key: MarketKey, blob: bytes) -> MarketCapConfig:
        self._require_sender(ctx, self.config.execution_engine, role="execution engine")
        return self.caps.set_config(self._market_id(key), blob)

    def notify_trade(
        self,
        ctx: CallContext,
        caller: Address,
        key: MarketKey,
        params: TradeParams,
        hook_data: bytes = b"",
    ) -> Optional[TradeReceipt]:
        """
        Authorize and account one trade.

        Args:
            ctx: Call context; `ctx.sender` must be the execution engine
            caller: The account that submitted the trade to the engine
            key: Market the trade was applied to
            params: Trade direction and signed amount
            hook_data: Side-channel data carrying the authorization token

        Returns:
            None when the market has no cap config enabled, else a receipt

        Raises:
            Unauthorized, InvalidMarket, InvalidAuthorization, DeadlineExpired,
            TokenAlreadyUsed, InvalidSigner, CapExceeded, AllowanceUnderflow
        """
        with self._nonreentrant():
            self._require_sender(ctx, self.config.execution_engine, role="execution engine")
            market_id = self._market_id(key)

            config = self.caps.get(market_id)
            if not config.enabled:
                return None

            native_is_first = self._native_is_first(key)
            policy = resolve_policy(self.signers.market_signer(market_id))

            fingerprint: Optional[bytes] = None
            if isinstance(policy, NoCheck):
                logger.debug("market %s: signature check disabled by override", market_id)
                origin = self.origin_resolver.resolve(caller, ctx.origin)
            else:
                token = decode_hook_data(hook_data)
                if token.deadline < ctx.timestamp:
                    raise DeadlineExpired(token.deadline, ctx.timestamp)

                origin = self.origin_resolver.resolve(caller, ctx.origin)
                fingerprint = token_fingerprint(origin, token.deadline)
                if self.replay.has_been_consumed(fingerprint):
                    raise TokenAlreadyUsed(f"authorization 0x{fingerprint.hex()} already used")

                signer = recover_signer(fingerprint, token.signature)
                if isinstance(policy, RequireSigner):
                    if signer != policy.signer:
                        raise InvalidSigner(f"{signer} is not the market signer {policy.signer}")
                elif not self.signers.is_trusted_signer(signer):
                    raise InvalidSigner(f"{signer} is not a trusted signer")

            if params.pays_native(native_is_first):
                estimated = self.quoter.estimate_received(market_id, params.amount_specified, native_is_first)
            else:
                estimated = 0

            new_total = self.ledger.check(market_id, origin, config, estimated)

            if fingerprint is not None:
                self.replay.consume(fingerprint)
            self.ledger.record(market_id, origin, new_total)

            logger.debug(
                "market %s: %s authorized for %d (total %d)", market_id, origin, estimated, new_total
            )
            return TradeReceipt(
                market_id=market_id,
                origin=origin,
                estimated=estimated,
                purchased_total=new_total,
                fingerprint=None if fingerprint is None else "0x" + fingerprint.hex(),
            )

    # -- views -----------------------------------------------------------------

    def is_trusted_signer(self, account: Address) -> bool:
        return self.signers.is_trusted_signer(account)

    def market_signer(self, key: MarketKey) -> MarketSignerOverride:
        return self.signers.market_signer(self._market_id(key))

    def cap_config(self, key: MarketKey) -> MarketCapConfig:
        return self.caps.get(self._market_id(key))

    def purchased(self, key: MarketKey, account: Address) -> Amount:
        return self.ledger.purchased(self._market_id(key), canonical_address(account))

    def remaining_cap(self, key: MarketKey, account: Address) -> Tuple[bool, Amount]:
        """
        Remaining per-account allowance.

        Returns (False, 0) when the market enforces no per-account cap.

        Raises:
            AllowanceUnderflow: If purchases already exceed the cap
        """
        market_id = self._market_id(key)
        config = self.caps.get(market_id)
        if not config.enabled:
            return False, 0
        purchased = self.ledger.purchased(market_id, canonical_address(account))
        remaining = remaining_allowance(config, purchased)
        if remaining is None:
            return False, 0
        return True, remaining

    def determine_swap_fee(self, key: MarketKey, params: TradeParams, base_fee: int) -> int:
        """Fee-policy hook: the base fee is returned unmodified."""
        return base_fee
