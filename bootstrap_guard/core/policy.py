"""
Signer policy resolution.

A market's override record is turned into exactly one of three policies, so
the verifier's guard chain branches on a value instead of re-deriving the
layering rules inline.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..state.accounts import ZERO_ADDRESS, Address
from ..state.signers import MarketSignerOverride


@dataclass(frozen=True)
class RequireGlobalTrust:
    """The recovered signer must be in the global trusted set."""


@dataclass(frozen=True)
class RequireSigner:
    """The recovered signer must equal `signer` exactly."""

    signer: Address


@dataclass(frozen=True)
class NoCheck:
    """No authorization token is required; caps still apply."""


SignerPolicy = Union[RequireGlobalTrust, RequireSigner, NoCheck]


def resolve_policy(override: MarketSignerOverride) -> SignerPolicy:
    if not override.enabled:
        return RequireGlobalTrust()
    if override.signer == ZERO_ADDRESS:
        return NoCheck()
    return RequireSigner(override.signer)
