"""
Bootstrap-window fill estimation.

Mirrors the execution engine's own fill estimate so cap accounting matches
what the engine will let settle: during the bootstrap window the scarce asset
is sold at the market's fixed starting tick, out of a finite reserve.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..state.accounts import Amount, MarketId
from .collaborators import FairLaunchSource
from .tick_math import quote_at_tick


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriceQuoter:
    fair_launch: FairLaunchSource

    def estimate_received(
        self,
        market_id: MarketId,
        signed_amount: int,
        native_is_first_asset: bool,
    ) -> Amount:
        """
        Estimate the scarce-asset quantity a trade receives.

        Args:
            market_id: Market identifier
            signed_amount: Negative for an exact spend of the pairing asset,
                positive for an exact scarce-asset quantity
            native_is_first_asset: True if the pairing asset is currency0

        Returns:
            Estimated quantity, clamped to the remaining bootstrap supply
        """
        if signed_amount == 0:
            return 0

        snapshot = self.fair_launch.get_fair_launch_snapshot(market_id)

        if signed_amount < 0:
            estimate = quote_at_tick(snapshot.start_tick, -signed_amount, native_is_first_asset)
        else:
            estimate = signed_amount

        if estimate > snapshot.remaining_supply:
            logger.debug(
                "clamping estimate %d to remaining supply %d (market %s)",
                estimate,
                snapshot.remaining_supply,
                market_id,
            )
            return max(int(snapshot.remaining_supply), 0)
        return estimate
