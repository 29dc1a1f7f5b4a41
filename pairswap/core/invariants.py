"""Invariant checkers for pool snapshots.

Each function returns True when the invariant holds, and `check_all()`
returns the list of violated invariant IDs (empty = all pass).

`check_swap_product` is the one transition invariant: it compares the
snapshots before and after a swap.
"""

from __future__ import annotations

from typing import Callable

from ..state.pool import PoolState


def inv_share_supply_matches_balances(s: PoolState) -> bool:
    return s.total_shares == s.shares.total


def inv_empty_iff_unseeded(s: PoolState) -> bool:
    if s.total_shares == 0:
        return s.reserve_a == 0 and s.reserve_b == 0
    return s.reserve_a > 0 and s.reserve_b > 0


def inv_reserves_nonneg(s: PoolState) -> bool:
    return s.reserve_a >= 0 and s.reserve_b >= 0 and s.total_shares >= 0


def inv_share_balances_positive(s: PoolState) -> bool:
    # Zero balances are pruned; a stored zero or negative entry means a bad table.
    return all(amount > 0 for amount in s.shares.as_mapping().values())


# ---------------------------------------------------------------------------
# Registry + check_all
# ---------------------------------------------------------------------------

INVARIANT_REGISTRY: dict[str, Callable[[PoolState], bool]] = {
    "inv_share_supply_matches_balances": inv_share_supply_matches_balances,
    "inv_empty_iff_unseeded": inv_empty_iff_unseeded,
    "inv_reserves_nonneg": inv_reserves_nonneg,
    "inv_share_balances_positive": inv_share_balances_positive,
}


def check_all(state: PoolState) -> list[str]:
    """Return list of violated invariant IDs (empty = all pass)."""
    return [
        inv_id
        for inv_id, check_fn in INVARIANT_REGISTRY.items()
        if not check_fn(state)
    ]


def check_swap_product(before: PoolState, after: PoolState) -> bool:
    """reserve_a * reserve_b must not decrease across a swap."""
    return after.get_constant_product() >= before.get_constant_product()
