# [TESTER] v1

from __future__ import annotations

from dataclasses import dataclass

from bootstrap_guard.core.collaborators import FairLaunchSnapshot
from bootstrap_guard.core.quoter import PriceQuoter
from bootstrap_guard.core.tick_math import quote_at_tick


MARKET = "0x" + "01" * 32


@dataclass
class _Snapshot:
    start_tick: int
    remaining_supply: int
    calls: int = 0

    def get_fair_launch_snapshot(self, market_id: str) -> FairLaunchSnapshot:
        self.calls += 1
        return FairLaunchSnapshot(start_tick=self.start_tick, remaining_supply=self.remaining_supply)


def test_zero_amount_short_circuits_without_engine_call() -> None:
    source = _Snapshot(start_tick=0, remaining_supply=100)
    assert PriceQuoter(source).estimate_received(MARKET, 0, True) == 0
    assert source.calls == 0


def test_exact_output_is_taken_directly() -> None:
    source = _Snapshot(start_tick=6932, remaining_supply=10**30)
    assert PriceQuoter(source).estimate_received(MARKET, 777, True) == 777


def test_exact_spend_is_converted_at_start_tick() -> None:
    source = _Snapshot(start_tick=6932, remaining_supply=10**30)
    quoter = PriceQuoter(source)
    assert quoter.estimate_received(MARKET, -(10**18), True) == quote_at_tick(6932, 10**18, True)
    assert quoter.estimate_received(MARKET, -(10**18), False) == quote_at_tick(6932, 10**18, False)


def test_estimate_is_clamped_to_remaining_supply() -> None:
    # Spend of 80 at price 1:1 would buy 80, but only 50 remain.
    source = _Snapshot(start_tick=0, remaining_supply=50)
    quoter = PriceQuoter(source)
    assert quoter.estimate_received(MARKET, -80, True) == 50
    assert quoter.estimate_received(MARKET, 80, True) == 50
    assert quoter.estimate_received(MARKET, -30, True) == 30


def test_exhausted_reserve_estimates_zero() -> None:
    source = _Snapshot(start_tick=0, remaining_supply=0)
    assert PriceQuoter(source).estimate_received(MARKET, -10, True) == 0
