"""
Account balance tracking for the in-memory custody backend.

Implements BalanceTable[AccountId, AssetId] -> Amount. The pool core never
touches this table directly; it is the storage behind
`pairswap.integration.transfers.InMemoryTransferService`.
"""

from typing import Dict, Tuple


# Type aliases
AccountId = str  # provider / trader / custody account identifier
AssetId = str  # opaque asset symbol or address
Amount = int  # Non-negative integer in the asset's minor units


class BalanceTable:
    """
    Balance table mapping (account, asset) -> amount.

    Zero balances are dropped so the table stays sparse. Callers that need a
    stable ordering must sort keys themselves.
    """

    def __init__(self):
        self._balances: Dict[Tuple[AccountId, AssetId], Amount] = {}

    def get(self, account: AccountId, asset: AssetId) -> Amount:
        """Get balance for (account, asset). Returns 0 if not found."""
        return self._balances.get((account, asset), 0)

    def set(self, account: AccountId, asset: AssetId, amount: Amount) -> None:
        """
        Set balance for (account, asset).

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop((account, asset), None)
        else:
            self._balances[(account, asset)] = amount

    def add(self, account: AccountId, asset: AssetId, delta: int) -> None:
        """
        Add delta to a balance (delta may be negative).

        Raises:
            ValueError: If the resulting balance would be negative
        """
        current = self.get(account, asset)
        new_balance = current + delta
        if new_balance < 0:
            raise ValueError(
                f"Insufficient balance: {current} + {delta} = {new_balance} < 0"
            )
        self.set(account, asset, new_balance)

    def subtract(self, account: AccountId, asset: AssetId, delta: Amount) -> None:
        """Subtract a non-negative amount from a balance."""
        if delta < 0:
            raise ValueError(f"Delta must be non-negative: {delta}")
        self.add(account, asset, -delta)

    def transfer(self, asset: AssetId, sender: AccountId, recipient: AccountId, amount: Amount) -> None:
        """
        Move `amount` of `asset` between two accounts.

        The debit is checked before anything changes, so a failed transfer
        leaves both balances untouched.
        """
        if amount < 0:
            raise ValueError(f"Transfer amount must be non-negative: {amount}")
        self.subtract(sender, asset, amount)
        self.add(recipient, asset, amount)

    def total_supply(self, asset: AssetId) -> Amount:
        """Sum of all balances held in `asset`."""
        return sum(amount for (_, a), amount in self._balances.items() if a == asset)

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} entries)"
