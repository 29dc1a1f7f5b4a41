"""
Core pool algorithms: pricing, ledger bookkeeping, invariants, events
"""

from .errors import (
    EmptyReserves,
    InsufficientShares,
    InvalidAmount,
    InvariantViolation,
    PoolError,
    RatioMismatch,
    ReentrantCall,
    ReserveUnderflow,
    SlippageExceeded,
    TransferFailed,
)
from .events import EventKind, EventLog, LiquidityAdded, LiquidityRemoved, PoolEvent, Swap
from .invariants import INVARIANT_REGISTRY, check_all, check_swap_product
from .ledger import record_deposit, record_swap, record_withdrawal
from .pricing import (
    FEE_DENOMINATOR,
    FEE_NUMERATOR,
    check_deposit_ratio,
    isqrt,
    quote_initial_shares,
    quote_proportional_shares,
    quote_swap,
    quote_swap_output,
    quote_withdrawal_amounts,
    required_amount_b,
)

__all__ = [
    "PoolError",
    "InvalidAmount",
    "EmptyReserves",
    "RatioMismatch",
    "InsufficientShares",
    "ReserveUnderflow",
    "ReentrantCall",
    "SlippageExceeded",
    "TransferFailed",
    "InvariantViolation",
    "EventKind",
    "EventLog",
    "LiquidityAdded",
    "LiquidityRemoved",
    "PoolEvent",
    "Swap",
    "INVARIANT_REGISTRY",
    "check_all",
    "check_swap_product",
    "record_deposit",
    "record_withdrawal",
    "record_swap",
    "FEE_NUMERATOR",
    "FEE_DENOMINATOR",
    "isqrt",
    "quote_swap_output",
    "quote_swap",
    "quote_initial_shares",
    "quote_proportional_shares",
    "quote_withdrawal_amounts",
    "required_amount_b",
    "check_deposit_ratio",
]
