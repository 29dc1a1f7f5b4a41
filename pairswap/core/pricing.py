"""
Pricing engine: swap quotes and liquidity share math.

Every function here is pure. They wrap the integer kernels in
`pairswap.kernels.python` with the pool's error taxonomy, so callers get
`InvalidAmount` / `EmptyReserves` / `RatioMismatch` instead of bare
ValueErrors.

Rounding Design:
- swap output, minted shares and withdrawn amounts all floor
- the residue always stays in the pool (solvency over individual precision)
- no function ever rounds up in the caller's favour
"""

from typing import Tuple

from ..kernels.python import cpmm_swap as _swap_kernel
from ..kernels.python import lp_math as _lp_kernel
from ..kernels.python.cpmm_swap import FEE_DENOMINATOR, FEE_NUMERATOR, SwapExactInResult
from ..state.balances import Amount
from .errors import EmptyReserves, InvalidAmount, RatioMismatch


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def _require_positive(name: str, value: int) -> None:
    _require_int(name, value)
    if value <= 0:
        raise InvalidAmount(f"{name} must be positive: {value}")


def _require_reserve(name: str, value: int) -> None:
    _require_int(name, value)
    if value < 0:
        raise InvalidAmount(f"{name} must be non-negative: {value}")
    if value == 0:
        raise EmptyReserves(f"{name} is empty")


def isqrt(y: int) -> int:
    """
    Integer square root, floor(sqrt(y)).

    Raises:
        InvalidAmount: If y is negative
    """
    _require_int("y", y)
    if y < 0:
        raise InvalidAmount(f"isqrt input must be non-negative: {y}")
    return _lp_kernel.isqrt(y)


def quote_swap_output(
    amount_in: Amount,
    reserve_in: Amount,
    reserve_out: Amount,
    fee_numerator: int = FEE_NUMERATOR,
    fee_denominator: int = FEE_DENOMINATOR,
) -> Amount:
    """
    Compute the output of an exact-in swap.

    Formula:
        amount_out = floor(amount_in * fee_num * reserve_out
                           / (reserve_in * fee_den + amount_in * fee_num))

    The fee is the excluded (fee_den - fee_num) / fee_den of the input. It
    is not paid out anywhere; it stays in reserve_in and grows the value of
    every share.

    Guarantee: reserve_in * reserve_out <= (reserve_in + amount_in) * (reserve_out - amount_out)

    Args:
        amount_in: Exact input amount
        reserve_in: Current reserve of the input asset
        reserve_out: Current reserve of the output asset
        fee_numerator: Fee-adjusted fraction numerator (997)
        fee_denominator: Fee fraction denominator (1000)

    Returns:
        Output amount (may be 0 for dust inputs)

    Raises:
        InvalidAmount: If amount_in is not positive or the fee fraction is invalid
        EmptyReserves: If either reserve is zero
    """
    _require_positive("amount_in", amount_in)
    _require_reserve("reserve_in", reserve_in)
    _require_reserve("reserve_out", reserve_out)
    _require_int("fee_numerator", fee_numerator)
    _require_int("fee_denominator", fee_denominator)
    if fee_denominator <= 0 or not (0 < fee_numerator <= fee_denominator):
        raise InvalidAmount(
            f"fee fraction must satisfy 0 < numerator <= denominator: {fee_numerator}/{fee_denominator}"
        )

    return _swap_kernel.get_amount_out(
        amount_in=amount_in,
        reserve_in=reserve_in,
        reserve_out=reserve_out,
        fee_numerator=fee_numerator,
        fee_denominator=fee_denominator,
    )


def quote_initial_shares(amount_a: Amount, amount_b: Amount) -> Amount:
    """
    Shares minted by the deposit that seeds an empty pool.

    Formula:
        shares = floor(sqrt(amount_a * amount_b))

    Raises:
        InvalidAmount: If the geometric mean is zero (either amount is zero)
    """
    _require_int("amount_a", amount_a)
    _require_int("amount_b", amount_b)
    if amount_a < 0 or amount_b < 0:
        raise InvalidAmount(f"Deposit amounts must be non-negative: ({amount_a}, {amount_b})")

    shares = _lp_kernel.mint_liquidity_initial(amount_a=amount_a, amount_b=amount_b)
    if shares <= 0:
        raise InvalidAmount(f"Initial deposit has zero liquidity: ({amount_a}, {amount_b})")
    return shares


def required_amount_b(amount_a: Amount, reserve_a: Amount, reserve_b: Amount) -> Amount:
    """amount_b matching the current ratio: floor(amount_a * reserve_b / reserve_a)."""
    _require_positive("amount_a", amount_a)
    _require_reserve("reserve_a", reserve_a)
    _require_reserve("reserve_b", reserve_b)
    return _lp_kernel.required_amount_b(amount_a=amount_a, reserve_a=reserve_a, reserve_b=reserve_b)


def check_deposit_ratio(amount_a: Amount, amount_b: Amount, reserve_a: Amount, reserve_b: Amount) -> None:
    """
    Require amount_b to equal the ratio-implied amount exactly.

    Raises:
        RatioMismatch: If amount_b != floor(amount_a * reserve_b / reserve_a)
    """
    _require_positive("amount_b", amount_b)
    required = required_amount_b(amount_a, reserve_a, reserve_b)
    if amount_b != required:
        raise RatioMismatch(amount_b, required)


def quote_proportional_shares(amount_a: Amount, reserve_a: Amount, total_shares: Amount) -> Amount:
    """
    Shares minted by a deposit into a seeded pool.

    Formula:
        shares = floor(amount_a * total_shares / reserve_a)

    The caller must already have run `check_deposit_ratio`.

    Raises:
        InvalidAmount: If amount_a is not positive
        EmptyReserves: If the pool has no reserve_a or no shares
    """
    _require_positive("amount_a", amount_a)
    _require_reserve("reserve_a", reserve_a)
    _require_int("total_shares", total_shares)
    if total_shares < 0:
        raise InvalidAmount(f"total_shares must be non-negative: {total_shares}")
    if total_shares == 0:
        raise EmptyReserves("pool has no outstanding shares; use quote_initial_shares")

    return _lp_kernel.mint_liquidity_proportional(
        amount_a=amount_a,
        reserve_a=reserve_a,
        total_supply=total_shares,
    )


def quote_withdrawal_amounts(
    burned_shares: Amount,
    reserve_a: Amount,
    reserve_b: Amount,
    total_shares: Amount,
) -> Tuple[Amount, Amount]:
    """
    Asset amounts returned for burning shares.

    Formula:
        amount_x = floor(burned_shares * reserve_x / total_shares)

    Returns:
        Tuple of (amount_a, amount_b)

    Raises:
        InvalidAmount: If burned_shares is not positive or exceeds total_shares
        EmptyReserves: If the pool has no outstanding shares
    """
    _require_positive("burned_shares", burned_shares)
    for name, v in (("reserve_a", reserve_a), ("reserve_b", reserve_b), ("total_shares", total_shares)):
        _require_int(name, v)
        if v < 0:
            raise InvalidAmount(f"{name} must be non-negative: {v}")
    if total_shares == 0:
        raise EmptyReserves("pool has no outstanding shares")
    if burned_shares > total_shares:
        raise InvalidAmount(f"Cannot burn more shares than supply: {burned_shares} > {total_shares}")

    res = _lp_kernel.burn_liquidity(
        shares=burned_shares,
        reserve_a=reserve_a,
        reserve_b=reserve_b,
        total_supply=total_shares,
    )
    return res.amount_a_out, res.amount_b_out


def quote_swap(amount_in: Amount, reserve_in: Amount, reserve_out: Amount) -> SwapExactInResult:
    """
    Full exact-in swap quote at the fixed fee, including the post-swap reserves
    and the constant product before/after.

    Raises:
        InvalidAmount: If amount_in is not positive
        EmptyReserves: If either reserve is zero
    """
    _require_positive("amount_in", amount_in)
    _require_reserve("reserve_in", reserve_in)
    _require_reserve("reserve_out", reserve_out)
    return _swap_kernel.swap_exact_in(reserve_in=reserve_in, reserve_out=reserve_out, amount_in=amount_in)
