"""
CPMM swap kernel.

Fixed-fee constant-product pricing (Uniswap-v2 style):
- The fee is a fixed fraction of the input, FEE_NUMERATOR / FEE_DENOMINATOR = 997 / 1000.
- The fee is never transferred anywhere; it stays in the input reserve because
  only the fee-adjusted input is priced.
- All products are formed before the single floor division.
"""

from __future__ import annotations

from dataclasses import dataclass


FEE_NUMERATOR = 997
FEE_DENOMINATOR = 1000


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


@dataclass(frozen=True)
class SwapExactInResult:
    amount_in: int
    amount_out: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int
    k_after: int


def get_amount_out(
    *,
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee_numerator: int = FEE_NUMERATOR,
    fee_denominator: int = FEE_DENOMINATOR,
) -> int:
    """
    amount_out = floor(amount_in * fee_num * reserve_out / (reserve_in * fee_den + amount_in * fee_num))

    Raises ValueError on non-positive inputs or an invalid fee fraction.
    """
    for name, v in (
        ("amount_in", amount_in),
        ("reserve_in", reserve_in),
        ("reserve_out", reserve_out),
        ("fee_numerator", fee_numerator),
        ("fee_denominator", fee_denominator),
    ):
        _require_int(name, v)

    if amount_in <= 0:
        raise ValueError("amount_in must be positive")
    if reserve_in <= 0 or reserve_out <= 0:
        raise ValueError("cannot price against an empty reserve")
    if fee_denominator <= 0 or not (0 < fee_numerator <= fee_denominator):
        raise ValueError("fee fraction must satisfy 0 < fee_numerator <= fee_denominator")

    amount_in_with_fee = amount_in * fee_numerator
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * fee_denominator + amount_in_with_fee
    return numerator // denominator


def swap_exact_in(*, reserve_in: int, reserve_out: int, amount_in: int) -> SwapExactInResult:
    """
    Exact-in swap quote + post-state at the fixed fee.

    Raises ValueError on invalid inputs or if the post-state would break
    the constant-product guarantee.
    """
    amount_out = get_amount_out(amount_in=amount_in, reserve_in=reserve_in, reserve_out=reserve_out)
    if amount_out >= reserve_out:
        raise ValueError("amount_out must stay below reserve_out")

    new_reserve_in = reserve_in + amount_in
    new_reserve_out = reserve_out - amount_out
    k_before = reserve_in * reserve_out
    k_after = new_reserve_in * new_reserve_out
    if k_after < k_before:
        raise ValueError(f"Invariant violation: new_k ({k_after}) < old_k ({k_before})")

    return SwapExactInResult(
        amount_in=amount_in,
        amount_out=amount_out,
        new_reserve_in=new_reserve_in,
        new_reserve_out=new_reserve_out,
        k_before=k_before,
        k_after=k_after,
    )
