"""
Pool state for a two-asset constant-product pool.

`PoolState` is an immutable snapshot. The ledger functions in
`pairswap.core.ledger` return new snapshots instead of mutating, and the
`Pool` shell publishes each committed snapshot with a single reference swap.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Any, Mapping

from .balances import AccountId, Amount, AssetId
from .shares import ShareTable


def compute_pool_id(asset_a: AssetId, asset_b: AssetId) -> str:
    """
    Deterministically compute a pool_id for an ordered asset pair.

    pool_id = H("PairSwapPool" || len(asset_a) || asset_a || len(asset_b) || asset_b)

    The pair is ordered: (X, Y) and (Y, X) are different pools, because the
    A/B roles fix what `get_price` reports.
    """
    _require_asset("asset_a", asset_a)
    _require_asset("asset_b", asset_b)
    if asset_a == asset_b:
        raise ValueError(f"Pool assets must differ: {asset_a!r}")

    a_bytes = asset_a.encode("utf-8")
    b_bytes = asset_b.encode("utf-8")
    pool_id_data = (
        b"PairSwapPool"
        + len(a_bytes).to_bytes(4, "big")
        + a_bytes
        + len(b_bytes).to_bytes(4, "big")
        + b_bytes
    )
    return "0x" + hashlib.sha256(pool_id_data).hexdigest()


def _require_asset(name: str, value: object) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty string")


def _require_amount(name: str, value: object) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")


@dataclass(frozen=True)
class PoolState:
    """
    Snapshot of one pool.

    Attributes:
        asset_a: Identifier of asset A
        asset_b: Identifier of asset B
        reserve_a: Pool holding of asset A (minor units)
        reserve_b: Pool holding of asset B (minor units)
        total_shares: Outstanding liquidity shares
        shares: Per-provider share balances
    """
    asset_a: AssetId
    asset_b: AssetId
    reserve_a: Amount = 0
    reserve_b: Amount = 0
    total_shares: Amount = 0
    shares: ShareTable = field(default_factory=ShareTable)

    def __post_init__(self) -> None:
        _require_asset("asset_a", self.asset_a)
        _require_asset("asset_b", self.asset_b)
        if self.asset_a == self.asset_b:
            raise ValueError(f"Pool assets must differ: {self.asset_a!r}")
        _require_amount("reserve_a", self.reserve_a)
        _require_amount("reserve_b", self.reserve_b)
        _require_amount("total_shares", self.total_shares)
        if not isinstance(self.shares, ShareTable):
            raise TypeError("shares must be a ShareTable")

    @property
    def pool_id(self) -> str:
        return compute_pool_id(self.asset_a, self.asset_b)

    @property
    def is_empty(self) -> bool:
        return self.total_shares == 0

    def share_of(self, provider: AccountId) -> Amount:
        return self.shares.get(provider)

    def get_constant_product(self) -> int:
        """k = reserve_a * reserve_b"""
        return self.reserve_a * self.reserve_b

    def __repr__(self) -> str:
        return (
            f"PoolState(pair={self.asset_a}/{self.asset_b}, "
            f"reserves=({self.reserve_a}, {self.reserve_b}), "
            f"total_shares={self.total_shares}, providers={len(self.shares)})"
        )


def initial_state(asset_a: AssetId, asset_b: AssetId) -> PoolState:
    """Empty pool: zero reserves, zero shares."""
    return PoolState(asset_a=asset_a, asset_b=asset_b)


def state_to_dict(state: PoolState) -> dict[str, Any]:
    """Serialize a PoolState to a plain dict (share balances sorted by provider)."""
    return {
        "asset_a": state.asset_a,
        "asset_b": state.asset_b,
        "reserve_a": state.reserve_a,
        "reserve_b": state.reserve_b,
        "total_shares": state.total_shares,
        "shares": {provider: amount for provider, amount in state.shares.sorted_items()},
    }


def state_from_dict(d: Mapping[str, Any]) -> PoolState:
    """
    Deserialize a dict to a PoolState. Raises KeyError on missing fields.

    Only the structural checks of `PoolState` run here; callers loading
    untrusted snapshots should also run `pairswap.core.invariants.check_all`.
    """
    shares_raw = d["shares"]
    if not isinstance(shares_raw, Mapping):
        raise TypeError("shares must be a mapping of provider -> amount")
    return PoolState(
        asset_a=d["asset_a"],
        asset_b=d["asset_b"],
        reserve_a=d["reserve_a"],
        reserve_b=d["reserve_b"],
        total_shares=d["total_shares"],
        shares=ShareTable(shares_raw),
    )
