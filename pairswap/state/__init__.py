"""
State types for pairswap pools
"""

from .balances import BalanceTable
from .pool import PoolState, compute_pool_id, initial_state, state_from_dict, state_to_dict
from .shares import ShareTable
from .state_root import compute_state_root

__all__ = [
    "BalanceTable",
    "PoolState",
    "ShareTable",
    "compute_pool_id",
    "compute_state_root",
    "initial_state",
    "state_from_dict",
    "state_to_dict",
]
