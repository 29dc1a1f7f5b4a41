"""
Asset transfer collaborator.

The pool never moves funds itself. It asks a `TransferService` to pull
inbound amounts from a participant and to push outbound amounts to one, and
only books the operation once every transfer has reported success.

`InMemoryTransferService` is the reference backend: a `BalanceTable` with one
custody account standing in for the pool's holdings.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Optional

from ..state.balances import AccountId, Amount, AssetId, BalanceTable


class TransferService(ABC):
    """Moves funds between participants and pool custody on the pool's behalf."""

    @abstractmethod
    def transfer_in(self, asset: AssetId, sender: AccountId, amount: Amount) -> bool:
        """Move `amount` of `asset` from `sender` into pool custody. False on failure."""

    @abstractmethod
    def transfer_out(self, asset: AssetId, recipient: AccountId, amount: Amount) -> bool:
        """Move `amount` of `asset` from pool custody to `recipient`. False on failure."""


class InMemoryTransferService(TransferService):
    """
    BalanceTable-backed transfers.

    A transfer fails (returns False) when the paying side cannot cover it;
    balances are never driven negative. One service may back several pools:
    every balance update runs under the service lock.
    """

    def __init__(self, balances: Optional[BalanceTable] = None, *, custody_account: AccountId = "pool") -> None:
        if not isinstance(custody_account, str) or not custody_account:
            raise ValueError("custody_account must be a non-empty string")
        self.balances = balances if balances is not None else BalanceTable()
        self.custody_account = custody_account
        self._lock = threading.Lock()

    def mint(self, account: AccountId, asset: AssetId, amount: Amount) -> None:
        """Credit an account out of thin air (test and demo funding)."""
        with self._lock:
            self.balances.add(account, asset, amount)

    def balance_of(self, account: AccountId, asset: AssetId) -> Amount:
        return self.balances.get(account, asset)

    def custody_balance(self, asset: AssetId) -> Amount:
        return self.balances.get(self.custody_account, asset)

    def transfer_in(self, asset: AssetId, sender: AccountId, amount: Amount) -> bool:
        return self._move(asset, sender, self.custody_account, amount)

    def transfer_out(self, asset: AssetId, recipient: AccountId, amount: Amount) -> bool:
        return self._move(asset, self.custody_account, recipient, amount)

    def _move(self, asset: AssetId, sender: AccountId, recipient: AccountId, amount: Amount) -> bool:
        if amount < 0:
            return False
        with self._lock:
            if self.balances.get(sender, asset) < amount:
                return False
            self.balances.transfer(asset, sender, recipient, amount)
        return True

    def __repr__(self) -> str:
        return f"InMemoryTransferService(custody={self.custody_account!r}, {self.balances!r})"
