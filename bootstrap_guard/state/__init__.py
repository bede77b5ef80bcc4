"""
State tables for the bootstrap guard
"""

from .accounts import ZERO_ADDRESS, Address, MarketId, canonical_address
from .caps import BootstrapCapConfigStore, MarketCapConfig, decode_cap_config, encode_cap_config
from .markets import MarketKey, compute_market_id, make_market_key
from .purchases import PurchaseLedger, effective_ceiling, remaining_allowance
from .replay import ReplayGuard
from .signers import MarketSignerOverride, SignerRegistry

__all__ = [
    "ZERO_ADDRESS",
    "Address",
    "MarketId",
    "canonical_address",
    "BootstrapCapConfigStore",
    "MarketCapConfig",
    "decode_cap_config",
    "encode_cap_config",
    "MarketKey",
    "compute_market_id",
    "make_market_key",
    "PurchaseLedger",
    "effective_ceiling",
    "remaining_allowance",
    "ReplayGuard",
    "MarketSignerOverride",
    "SignerRegistry",
]
