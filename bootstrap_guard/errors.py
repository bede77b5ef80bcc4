"""Exception taxonomy for the bootstrap guard.

Every failure of a verifier operation is one of these. Raising aborts the
whole operation; nothing is partially applied. ``code`` is a stable,
machine-readable reason string for callers that log or relay rejections.
"""

from __future__ import annotations


class BootstrapGuardError(Exception):
    """Base class for all bootstrap-guard rejections."""

    code = "bootstrap_guard_error"


class Unauthorized(BootstrapGuardError):
    """Raised when the caller is not allowed to invoke the operation."""

    code = "unauthorized"


class InvalidMarket(BootstrapGuardError):
    """Raised for a malformed or unrecognized market key."""

    code = "invalid_market"


class DeadlineExpired(BootstrapGuardError):
    """Raised when an authorization token's deadline is in the past."""

    code = "deadline_expired"

    def __init__(self, deadline: int, now: int) -> None:
        self.deadline = deadline
        self.now = now
        super().__init__(f"authorization deadline {deadline} is before {now}")


class TokenAlreadyUsed(BootstrapGuardError):
    """Raised when an authorization token fingerprint was already consumed."""

    code = "token_already_used"


class InvalidSigner(BootstrapGuardError):
    """Raised when the recovered signer is not acceptable for the market."""

    code = "invalid_signer"


class InvalidAuthorization(BootstrapGuardError):
    """Raised when the trade's side-channel data carries no decodable token."""

    code = "invalid_authorization"


class CapExceeded(BootstrapGuardError):
    """Raised when a trade's estimated quantity exceeds the remaining ceiling."""

    code = "cap_exceeded"

    def __init__(self, estimated: int, ceiling: int) -> None:
        self.estimated = estimated
        self.ceiling = ceiling
        super().__init__(f"estimated {estimated} exceeds ceiling {ceiling}")


class AllowanceUnderflow(BootstrapGuardError):
    """Raised when cumulative purchases already exceed the per-account cap."""

    code = "allowance_underflow"

    def __init__(self, purchased: int, per_account_cap: int) -> None:
        self.purchased = purchased
        self.per_account_cap = per_account_cap
        super().__init__(
            f"purchased {purchased} already exceeds per-account cap {per_account_cap}"
        )


class AlreadyTrusted(BootstrapGuardError):
    """Raised when adding a signer that is already trusted."""

    code = "already_trusted"


class NotTrusted(BootstrapGuardError):
    """Raised when removing a signer that is not trusted."""

    code = "not_trusted"


class ReentrantCall(BootstrapGuardError):
    """Raised when a guarded operation is re-entered."""

    code = "reentrant_call"


class InvalidTick(BootstrapGuardError):
    """Raised when a price tick is outside the representable range."""

    code = "invalid_tick"


class MathOverflow(BootstrapGuardError):
    """Raised when fixed-point arithmetic leaves the uint256 domain."""

    code = "math_overflow"
