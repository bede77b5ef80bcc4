"""
Execution-engine integration layer
"""

from .deployment import VerifierConfig, config_from_mapping, deployment_from_env, load_deployment
from .verifier import AuthorizationVerifier, TradeReceipt

__all__ = [
    "VerifierConfig",
    "config_from_mapping",
    "deployment_from_env",
    "load_deployment",
    "AuthorizationVerifier",
    "TradeReceipt",
]
