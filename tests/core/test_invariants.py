"""Tests for pairswap/core/invariants.py."""

from pairswap.core.invariants import INVARIANT_REGISTRY, check_all, check_swap_product
from pairswap.state.pool import PoolState, initial_state
from pairswap.state.shares import ShareTable


class TestAllInvariantsOnInitialState:
    def test_initial_state_passes_all(self):
        assert check_all(initial_state("TKA", "TKB")) == []

    def test_registry_has_4_invariants(self):
        assert len(INVARIANT_REGISTRY) == 4


class TestShareSupplyMatchesBalances:
    def test_pass(self):
        s = PoolState("TKA", "TKB", 10, 10, 10, ShareTable({"a": 4, "b": 6}))
        assert "inv_share_supply_matches_balances" not in check_all(s)

    def test_fail(self):
        s = PoolState("TKA", "TKB", 10, 10, 11, ShareTable({"a": 4, "b": 6}))
        assert "inv_share_supply_matches_balances" in check_all(s)


class TestEmptyIffUnseeded:
    def test_fail_reserves_without_shares(self):
        s = PoolState("TKA", "TKB", 10, 10, 0, ShareTable())
        assert "inv_empty_iff_unseeded" in check_all(s)

    def test_fail_shares_without_reserves(self):
        s = PoolState("TKA", "TKB", 0, 10, 5, ShareTable({"a": 5}))
        assert "inv_empty_iff_unseeded" in check_all(s)

    def test_pass_seeded(self):
        s = PoolState("TKA", "TKB", 1, 1, 1, ShareTable({"a": 1}))
        assert check_all(s) == []


class TestSwapProduct:
    def test_non_decreasing(self):
        before = PoolState("TKA", "TKB", 100, 200, 141, ShareTable({"a": 141}))
        after = PoolState("TKA", "TKB", 110, 182, 141, ShareTable({"a": 141}))
        assert check_swap_product(before, after)

    def test_decreasing(self):
        before = PoolState("TKA", "TKB", 100, 200, 141, ShareTable({"a": 141}))
        after = PoolState("TKA", "TKB", 110, 181, 141, ShareTable({"a": 141}))
        assert not check_swap_product(before, after)
