"""
pairswap: two-asset constant-product AMM core.

- `pairswap.kernels` integer pricing / share math
- `pairswap.core` pricing engine, ledger, invariants, events, errors
- `pairswap.state` pool snapshots and deterministic encodings
- `pairswap.integration` lock-guarded Pool shell, transfers, config, registry
"""

from .core.errors import (
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
from .core.events import EventLog, LiquidityAdded, LiquidityRemoved, Swap
from .core.pricing import quote_swap_output
from .integration import InMemoryTransferService, Pool, PoolConfig, PoolRegistry, TransferService
from .state.pool import PoolState

__all__ = [
    "EmptyReserves",
    "EventLog",
    "InMemoryTransferService",
    "InsufficientShares",
    "InvalidAmount",
    "InvariantViolation",
    "LiquidityAdded",
    "LiquidityRemoved",
    "Pool",
    "PoolConfig",
    "PoolError",
    "PoolRegistry",
    "PoolState",
    "RatioMismatch",
    "ReentrantCall",
    "ReserveUnderflow",
    "SlippageExceeded",
    "Swap",
    "TransferFailed",
    "TransferService",
    "quote_swap_output",
]
