"""
Reserve/share ledger: the only functions that produce a changed PoolState.

Each `record_*` function checks its preconditions against the given snapshot,
then returns `(new_state, event)`. Nothing is mutated, so a rejected call
leaves the caller's snapshot exactly as it was.

Amounts are decided elsewhere (`pairswap.core.pricing`); the ledger only
books them and defends its own invariants.
"""

from dataclasses import replace
from typing import Tuple

from ..state.balances import AccountId, Amount
from ..state.pool import PoolState
from .errors import InsufficientShares, InvalidAmount, ReserveUnderflow
from .events import LiquidityAdded, LiquidityRemoved, Swap


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def _require_positive(name: str, value: int) -> None:
    _require_int(name, value)
    if value <= 0:
        raise InvalidAmount(f"{name} must be positive: {value}")


def _require_non_negative(name: str, value: int) -> None:
    _require_int(name, value)
    if value < 0:
        raise InvalidAmount(f"{name} must be non-negative: {value}")


def record_deposit(
    state: PoolState,
    provider: AccountId,
    amount_a: Amount,
    amount_b: Amount,
    minted_shares: Amount,
) -> Tuple[PoolState, LiquidityAdded]:
    """
    Book a deposit.

    reserve_a += amount_a, reserve_b += amount_b,
    shares[provider] += minted_shares, total_shares += minted_shares

    Raises:
        InvalidAmount: If any amount is not positive
    """
    _require_positive("amount_a", amount_a)
    _require_positive("amount_b", amount_b)
    _require_positive("minted_shares", minted_shares)

    new_state = replace(
        state,
        reserve_a=state.reserve_a + amount_a,
        reserve_b=state.reserve_b + amount_b,
        total_shares=state.total_shares + minted_shares,
        shares=state.shares.credit(provider, minted_shares),
    )
    event = LiquidityAdded(
        provider=provider,
        amount_a=amount_a,
        amount_b=amount_b,
        minted_shares=minted_shares,
    )
    return new_state, event


def record_withdrawal(
    state: PoolState,
    provider: AccountId,
    burned_shares: Amount,
    amount_a: Amount,
    amount_b: Amount,
) -> Tuple[PoolState, LiquidityRemoved]:
    """
    Book a withdrawal, the mirror image of `record_deposit`.

    Raises:
        InvalidAmount: If burned_shares is not positive or an amount is negative
        InsufficientShares: If the provider holds fewer than burned_shares
        ReserveUnderflow: If an amount exceeds its reserve
    """
    _require_positive("burned_shares", burned_shares)
    _require_non_negative("amount_a", amount_a)
    _require_non_negative("amount_b", amount_b)

    held = state.shares.get(provider)
    if held < burned_shares:
        raise InsufficientShares(provider, held, burned_shares)
    if burned_shares > state.total_shares:
        raise InvalidAmount(
            f"Cannot burn more shares than supply: {burned_shares} > {state.total_shares}"
        )
    if amount_a > state.reserve_a:
        raise ReserveUnderflow(f"amount_a ({amount_a}) exceeds reserve_a ({state.reserve_a})")
    if amount_b > state.reserve_b:
        raise ReserveUnderflow(f"amount_b ({amount_b}) exceeds reserve_b ({state.reserve_b})")

    new_state = replace(
        state,
        reserve_a=state.reserve_a - amount_a,
        reserve_b=state.reserve_b - amount_b,
        total_shares=state.total_shares - burned_shares,
        shares=state.shares.debit(provider, burned_shares),
    )
    event = LiquidityRemoved(
        provider=provider,
        amount_a=amount_a,
        amount_b=amount_b,
        burned_shares=burned_shares,
    )
    return new_state, event


def record_swap(
    state: PoolState,
    trader: AccountId,
    amount_in: Amount,
    amount_out: Amount,
    in_is_a: bool,
) -> Tuple[PoolState, Swap]:
    """
    Book a swap: the input reserve grows by amount_in, the output reserve
    shrinks by amount_out.

    Raises:
        InvalidAmount: If amount_in is not positive or amount_out is negative
        ReserveUnderflow: If amount_out exceeds the output reserve
    """
    _require_positive("amount_in", amount_in)
    _require_non_negative("amount_out", amount_out)

    reserve_out = state.reserve_b if in_is_a else state.reserve_a
    if amount_out > reserve_out:
        raise ReserveUnderflow(f"amount_out ({amount_out}) exceeds output reserve ({reserve_out})")

    if in_is_a:
        new_state = replace(
            state,
            reserve_a=state.reserve_a + amount_in,
            reserve_b=state.reserve_b - amount_out,
        )
        asset_in, asset_out = state.asset_a, state.asset_b
    else:
        new_state = replace(
            state,
            reserve_a=state.reserve_a - amount_out,
            reserve_b=state.reserve_b + amount_in,
        )
        asset_in, asset_out = state.asset_b, state.asset_a

    event = Swap(
        trader=trader,
        asset_in=asset_in,
        asset_out=asset_out,
        amount_in=amount_in,
        amount_out=amount_out,
    )
    return new_state, event
