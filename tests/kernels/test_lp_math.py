# [TESTER] v1

from __future__ import annotations

import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from pairswap.kernels.python.lp_math import (
    burn_liquidity,
    isqrt,
    mint_liquidity_initial,
    mint_liquidity_proportional,
    required_amount_b,
)


@pytest.mark.parametrize(
    "y, expected",
    [(0, 0), (1, 1), (2, 1), (3, 1), (4, 2), (15, 3), (16, 4), (17, 4), (20_000, 141)],
)
def test_isqrt_small_values(y: int, expected: int) -> None:
    assert isqrt(y) == expected


@settings(max_examples=300)
@given(st.integers(min_value=0, max_value=1 << 256))
def test_isqrt_is_floor_sqrt(y: int) -> None:
    r = isqrt(y)
    assert r == math.isqrt(y)
    assert r * r <= y < (r + 1) * (r + 1)


def test_isqrt_rejects_negative_and_non_int() -> None:
    with pytest.raises(ValueError):
        isqrt(-1)
    with pytest.raises(TypeError):
        isqrt(True)
    with pytest.raises(TypeError):
        isqrt(4.0)  # type: ignore[arg-type]


def test_initial_mint_is_exact_for_large_products() -> None:
    # Float sqrt would lose precision here.
    n = (1 << 70) + 12345
    assert mint_liquidity_initial(amount_a=n, amount_b=n) == n


def test_proportional_mint_and_ratio_floor() -> None:
    assert mint_liquidity_proportional(amount_a=50, reserve_a=100, total_supply=100) == 50
    assert mint_liquidity_proportional(amount_a=1, reserve_a=3, total_supply=2) == 0
    assert required_amount_b(amount_a=10, reserve_a=3, reserve_b=7) == 23


def test_burn_liquidity_floors_each_side() -> None:
    res = burn_liquidity(shares=50, reserve_a=101, reserve_b=203, total_supply=100)
    assert (res.amount_a_out, res.amount_b_out) == (50, 101)


def test_burn_liquidity_rejects_more_than_supply() -> None:
    with pytest.raises(ValueError, match="total_supply"):
        burn_liquidity(shares=101, reserve_a=10, reserve_b=10, total_supply=100)


@pytest.mark.parametrize("amount_a, amount_b, expected", [(1, 2, 1), (1, 3, 1), (2, 2, 2), (1, 1, 1)])
def test_initial_mint_on_tiny_seeds(amount_a: int, amount_b: int, expected: int) -> None:
    assert mint_liquidity_initial(amount_a=amount_a, amount_b=amount_b) == expected
