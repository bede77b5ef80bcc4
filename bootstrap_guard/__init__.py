"""
bootstrap_guard: purchase authorization and cap enforcement for assets in
their bootstrap (fair launch) window.

Public API:
- `AuthorizationVerifier` (integration/verifier.py): the component the
  execution engine calls on every trade
- `VerifierConfig`, `load_deployment` (integration/deployment.py)
- `sign_authorization`, `authorize_for` (agents/token_signer.py)
"""

from .agents import authorize_for, sign_authorization
from .errors import BootstrapGuardError
from .integration import AuthorizationVerifier, TradeReceipt, VerifierConfig, load_deployment

__all__ = [
    "authorize_for",
    "sign_authorization",
    "BootstrapGuardError",
    "AuthorizationVerifier",
    "TradeReceipt",
    "VerifierConfig",
    "load_deployment",
]

__version__ = "0.1.0"
