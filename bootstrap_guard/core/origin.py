"""
Initiating-account resolution.

Trades often reach the execution engine through an intermediary (a router).
The intermediary may report the user it is acting for; if it does not, or
its answer is unusable, the transaction origin supplied by the platform is
used instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from ..state.accounts import Address, canonical_address
from .collaborators import ContractDirectory, OriginReporter


logger = logging.getLogger(__name__)


class OriginResolver(Protocol):
    def resolve(self, caller: Address, tx_origin: Address) -> Address:
        ...


@dataclass(frozen=True)
class TxOriginResolver:
    """Always use the platform-supplied transaction origin."""

    def resolve(self, caller: Address, tx_origin: Address) -> Address:
        return canonical_address(tx_origin, name="tx_origin")


@dataclass(frozen=True)
class ProbingOriginResolver:
    """
    Ask the immediate caller for the account it acts on behalf of.

    The probe never raises: a caller that is not a known contract, does not
    implement `msg_sender`, fails while answering, or answers with something
    that is not a well-formed account all fall back to `tx_origin`.
    """

    directory: ContractDirectory

    def probe(self, caller: Address) -> Optional[Address]:
        try:
            caller = canonical_address(caller, name="caller")
        except (TypeError, ValueError):
            return None
        contract = self.directory.contract_at(caller)
        if contract is None or not isinstance(contract, OriginReporter):
            return None
        try:
            reported = contract.msg_sender()
        except Exception as exc:  # the probed object is untrusted code
            logger.debug("origin probe on %s failed: %s", caller, exc)
            return None
        try:
            return canonical_address(reported, name="msg_sender")
        except (TypeError, ValueError):
            logger.debug("origin probe on %s returned malformed account %r", caller, reported)
            return None

    def resolve(self, caller: Address, tx_origin: Address) -> Address:
        reported = self.probe(caller)
        if reported is not None:
            return reported
        return canonical_address(tx_origin, name="tx_origin")
