"""
Core bootstrap-guard algorithms
"""

from .authorization import (
    AuthorizationToken,
    decode_hook_data,
    encode_hook_data,
    recover_signer,
    token_fingerprint,
)
from .collaborators import (
    AssetRegistry,
    CallContext,
    ContractDirectory,
    FairLaunchSnapshot,
    FairLaunchSource,
    OriginReporter,
    StaticDirectory,
    TradeParams,
)
from .origin import OriginResolver, ProbingOriginResolver, TxOriginResolver
from .policy import NoCheck, RequireGlobalTrust, RequireSigner, SignerPolicy, resolve_policy
from .quoter import PriceQuoter
from .tick_math import get_sqrt_price_at_tick, mul_div, quote_at_tick

__all__ = [
    "AuthorizationToken",
    "decode_hook_data",
    "encode_hook_data",
    "recover_signer",
    "token_fingerprint",
    "AssetRegistry",
    "CallContext",
    "ContractDirectory",
    "FairLaunchSnapshot",
    "FairLaunchSource",
    "OriginReporter",
    "StaticDirectory",
    "TradeParams",
    "OriginResolver",
    "ProbingOriginResolver",
    "TxOriginResolver",
    "NoCheck",
    "RequireGlobalTrust",
    "RequireSigner",
    "SignerPolicy",
    "resolve_policy",
    "PriceQuoter",
    "get_sqrt_price_at_tick",
    "mul_div",
    "quote_at_tick",
]
