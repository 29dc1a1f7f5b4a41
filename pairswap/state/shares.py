"""
Liquidity share balances for a single pool.

Unlike the account `BalanceTable`, a `ShareTable` is immutable: every update
returns a new table. Pool snapshots hold one, so a reader that grabbed a
snapshot keeps a consistent view while writers commit newer ones.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from .balances import AccountId, Amount


class ShareTable:
    """
    Immutable provider -> share balance map.

    Notes:
    - Absent providers read as 0.
    - Zero balances are pruned, so every stored balance is positive.
    - `total` is kept alongside the balances and always equals their sum.
    """

    __slots__ = ("_balances", "_total")

    def __init__(self, balances: Optional[Mapping[AccountId, Amount]] = None) -> None:
        entries: Dict[AccountId, Amount] = {}
        total = 0
        for provider, amount in (balances or {}).items():
            if not isinstance(amount, int) or isinstance(amount, bool):
                raise TypeError(f"share balance for {provider!r} must be an int")
            if amount < 0:
                raise ValueError(f"Share balance cannot be negative: {provider!r} -> {amount}")
            if amount == 0:
                continue
            entries[provider] = amount
            total += amount
        self._balances = entries
        self._total = total

    def get(self, provider: AccountId) -> Amount:
        """Share balance of `provider`. Returns 0 if not found."""
        return self._balances.get(provider, 0)

    @property
    def total(self) -> Amount:
        return self._total

    def credit(self, provider: AccountId, amount: Amount) -> "ShareTable":
        """Return a new table with `amount` added to `provider`."""
        if amount < 0:
            raise ValueError(f"Credit must be non-negative: {amount}")
        updated = dict(self._balances)
        updated[provider] = updated.get(provider, 0) + amount
        return ShareTable(updated)

    def debit(self, provider: AccountId, amount: Amount) -> "ShareTable":
        """Return a new table with `amount` removed from `provider`."""
        if amount < 0:
            raise ValueError(f"Debit must be non-negative: {amount}")
        current = self.get(provider)
        if amount > current:
            raise ValueError(f"Insufficient share balance: {current} < {amount}")
        updated = dict(self._balances)
        updated[provider] = current - amount
        return ShareTable(updated)

    def as_mapping(self) -> Mapping[AccountId, Amount]:
        """Read-only view of the stored (positive) balances."""
        return MappingProxyType(self._balances)

    def sorted_items(self) -> Tuple[Tuple[AccountId, Amount], ...]:
        return tuple(sorted(self._balances.items()))

    def __iter__(self) -> Iterator[AccountId]:
        return iter(self._balances)

    def __len__(self) -> int:
        return len(self._balances)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ShareTable):
            return NotImplemented
        return self._balances == other._balances

    def __hash__(self) -> int:
        return hash(self.sorted_items())

    def __repr__(self) -> str:
        return f"ShareTable({len(self._balances)} providers, total={self._total})"
