# [TESTER] v1

from __future__ import annotations

import pytest

from pairswap.kernels.python.cpmm_swap import FEE_DENOMINATOR, FEE_NUMERATOR, get_amount_out, swap_exact_in


def test_fee_constants() -> None:
    assert (FEE_NUMERATOR, FEE_DENOMINATOR) == (997, 1000)


def test_get_amount_out_matches_formula() -> None:
    # 1 * 997 * 200 / (100 * 1000 + 1 * 997) = 199400 / 100997
    assert get_amount_out(amount_in=1, reserve_in=100, reserve_out=200) == 1
    assert get_amount_out(amount_in=1000, reserve_in=5000, reserve_out=10_000) == (
        1000 * 997 * 10_000 // (5000 * 1000 + 1000 * 997)
    )


def test_swap_exact_in_reports_post_state() -> None:
    res = swap_exact_in(reserve_in=100_000, reserve_out=200_000, amount_in=1_000)
    assert res.new_reserve_in == 101_000
    assert res.new_reserve_out == 200_000 - res.amount_out
    assert res.k_after > res.k_before


def test_swap_exact_in_rejects_empty_reserve() -> None:
    with pytest.raises(ValueError, match="empty reserve"):
        swap_exact_in(reserve_in=0, reserve_out=100, amount_in=10)


def test_kernel_rejects_bool_amounts() -> None:
    with pytest.raises(TypeError):
        get_amount_out(amount_in=True, reserve_in=10, reserve_out=10)
