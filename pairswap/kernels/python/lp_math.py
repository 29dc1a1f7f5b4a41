"""
Liquidity share math kernel.

Pure integer functions with explicit rounding. Every division floors, which
always favours the pool over the individual provider.
"""

from __future__ import annotations

from dataclasses import dataclass


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


@dataclass(frozen=True)
class BurnLiquidityResult:
    amount_a_out: int
    amount_b_out: int


def isqrt(y: int) -> int:
    """
    floor(sqrt(y)) by Newton iteration.

    Starts from y // 2 + 1 and stops once the iterate no longer decreases.
    Inputs up to 3 are answered directly; the iteration only converges from
    above for y > 3.
    """
    _require_int("y", y)
    if y < 0:
        raise ValueError("isqrt is undefined for negative inputs")
    if y <= 3:
        return 0 if y == 0 else 1
    z = y
    x = y // 2 + 1
    while x < z:
        z = x
        x = (y // x + x) // 2
    return z


def mint_liquidity_initial(*, amount_a: int, amount_b: int) -> int:
    """First deposit: shares = floor(sqrt(amount_a * amount_b))."""
    _require_int("amount_a", amount_a)
    _require_int("amount_b", amount_b)
    if amount_a < 0 or amount_b < 0:
        raise ValueError("initial amounts must be non-negative")
    return isqrt(amount_a * amount_b)


def required_amount_b(*, amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """amount_b that keeps the pool ratio: floor(amount_a * reserve_b / reserve_a)."""
    for name, v in (("amount_a", amount_a), ("reserve_a", reserve_a), ("reserve_b", reserve_b)):
        _require_int(name, v)
    if amount_a < 0:
        raise ValueError("amount_a must be non-negative")
    if reserve_a <= 0 or reserve_b < 0:
        raise ValueError("reserve_a must be positive and reserve_b non-negative")
    return (amount_a * reserve_b) // reserve_a


def mint_liquidity_proportional(*, amount_a: int, reserve_a: int, total_supply: int) -> int:
    """Subsequent deposit: shares = floor(amount_a * total_supply / reserve_a)."""
    for name, v in (("amount_a", amount_a), ("reserve_a", reserve_a), ("total_supply", total_supply)):
        _require_int(name, v)
    if amount_a < 0:
        raise ValueError("amount_a must be non-negative")
    if reserve_a <= 0:
        raise ValueError("reserve_a must be positive")
    if total_supply <= 0:
        raise ValueError("total_supply must be positive")
    return (amount_a * total_supply) // reserve_a


def burn_liquidity(*, shares: int, reserve_a: int, reserve_b: int, total_supply: int) -> BurnLiquidityResult:
    """
    Burn shares for underlying assets (floor rounding).
    """
    for name, v in (
        ("shares", shares),
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("total_supply", total_supply),
    ):
        _require_int(name, v)

    if shares <= 0:
        raise ValueError("shares must be positive")
    if reserve_a < 0 or reserve_b < 0:
        raise ValueError("reserves must be non-negative")
    if total_supply <= 0:
        raise ValueError("total_supply must be positive")
    if shares > total_supply:
        raise ValueError("cannot burn more than total_supply")

    amount_a_out = (shares * reserve_a) // total_supply
    amount_b_out = (shares * reserve_b) // total_supply
    return BurnLiquidityResult(amount_a_out=amount_a_out, amount_b_out=amount_b_out)
