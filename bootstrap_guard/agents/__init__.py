"""
Off-chain authorizer helpers.
"""

from .token_signer import authorize_for, authorizer_address, sign_authorization, sign_digest

__all__ = [
    "authorize_for",
    "authorizer_address",
    "sign_authorization",
    "sign_digest",
]
