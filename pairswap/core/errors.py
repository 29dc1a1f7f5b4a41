"""Exception types for pool operations.

Every rejection is a ``PoolError`` (a ``ValueError``), raised synchronously
to the caller with the ledger left untouched.
"""

from __future__ import annotations

from typing import Optional


class PoolError(ValueError):
    """Base class for all pool rejections."""


class InvalidAmount(PoolError):
    """Raised for a zero, negative or otherwise out-of-domain amount."""


class EmptyReserves(PoolError):
    """Raised when a quote would divide by an empty reserve."""


class RatioMismatch(PoolError):
    """Raised when a non-initial deposit does not match the pool ratio exactly."""

    def __init__(self, amount_b: int, required_b: int) -> None:
        self.amount_b = amount_b
        self.required_b = required_b
        super().__init__(f"amount_b ({amount_b}) does not match the pool ratio (requires {required_b})")


class InsufficientShares(PoolError):
    """Raised when a provider tries to burn more shares than they hold."""

    def __init__(self, provider: str, held: int, requested: int) -> None:
        self.provider = provider
        self.held = held
        self.requested = requested
        super().__init__(f"provider {provider!r} holds {held} shares, cannot burn {requested}")


class ReserveUnderflow(PoolError):
    """Raised when an outflow would exceed the reserve it is taken from."""


class SlippageExceeded(PoolError):
    """Raised when a swap would pay out less than the caller's minimum."""

    def __init__(self, amount_out: int, min_amount_out: int) -> None:
        self.amount_out = amount_out
        self.min_amount_out = min_amount_out
        super().__init__(f"amount_out ({amount_out}) < min_amount_out ({min_amount_out})")


class TransferFailed(PoolError):
    """Raised when the transfer collaborator could not move funds.

    ``compensated`` is False when an earlier transfer of the same operation
    could not be reversed either.
    """

    def __init__(self, message: str, *, compensated: bool = True, cause: Optional[BaseException] = None) -> None:
        self.compensated = compensated
        self.cause = cause
        super().__init__(message)


class InvariantViolation(PoolError):
    """Raised when a candidate post-state violates one or more invariants."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")


class ReentrantCall(PoolError):
    """Raised when a pool operation is re-entered from inside another one on the same thread."""
