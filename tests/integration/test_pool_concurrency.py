# [TESTER] v1

from __future__ import annotations

import threading

import hypothesis.strategies as st
from hypothesis import given, settings

from pairswap.core.errors import PoolError
from pairswap.core.invariants import check_all
from pairswap.integration.config import PoolConfig
from pairswap.integration.pool import Pool
from pairswap.integration.transfers import InMemoryTransferService

TKA = "TKA"
TKB = "TKB"


def _funded_pool(accounts: list[str], amount: int) -> tuple[Pool, InMemoryTransferService]:
    transfers = InMemoryTransferService()
    for account in accounts:
        transfers.mint(account, TKA, amount)
        transfers.mint(account, TKB, amount)
    return Pool(PoolConfig(TKA, TKB), transfers), transfers


def test_concurrent_swaps_keep_ledger_consistent() -> None:
    traders = [f"trader{i}" for i in range(4)]
    pool, transfers = _funded_pool(["owner", *traders], 10**9)
    pool.deposit("owner", 10**6, 2 * 10**6)

    errors: list[BaseException] = []
    bad_snapshots: list[list[str]] = []
    stop = threading.Event()

    def trade(trader: str) -> None:
        try:
            for i in range(200):
                if i % 2 == 0:
                    pool.swap_a_for_b(trader, 1000)
                else:
                    pool.swap_b_for_a(trader, 1500)
        except BaseException as exc:  # surfaced below
            errors.append(exc)

    def read() -> None:
        while not stop.is_set():
            violations = check_all(pool.snapshot())
            if violations:
                bad_snapshots.append(violations)

    reader = threading.Thread(target=read)
    reader.start()
    workers = [threading.Thread(target=trade, args=(t,)) for t in traders]
    for w in workers:
        w.start()
    for w in workers:
        w.join()
    stop.set()
    reader.join()

    assert errors == []
    assert bad_snapshots == []
    reserve_a, reserve_b = pool.get_reserves()
    assert transfers.custody_balance(TKA) == reserve_a
    assert transfers.custody_balance(TKB) == reserve_b
    assert reserve_a * reserve_b >= 10**6 * 2 * 10**6


def test_concurrent_deposits_and_withdrawals() -> None:
    providers = [f"lp{i}" for i in range(4)]
    pool, transfers = _funded_pool(["owner", *providers], 10**9)
    pool.deposit("owner", 1000, 1000)

    def churn(provider: str) -> None:
        for _ in range(50):
            minted = pool.deposit(provider, 100, 100)
            pool.withdraw(provider, minted)

    workers = [threading.Thread(target=churn, args=(p,)) for p in providers]
    for w in workers:
        w.start()
    for w in workers:
        w.join()

    state = pool.snapshot()
    assert check_all(state) == []
    assert state.total_shares == pool.share_of("owner") == 1000
    assert transfers.custody_balance(TKA) == state.reserve_a
    assert transfers.custody_balance(TKB) == state.reserve_b


_ACCOUNTS = ["alice", "bob", "carol"]

_operation = st.one_of(
    st.tuples(st.just("deposit"), st.sampled_from(_ACCOUNTS), st.integers(1, 10**6), st.integers(1, 10**6)),
    st.tuples(st.just("withdraw"), st.sampled_from(_ACCOUNTS), st.integers(1, 10**6), st.just(0)),
    st.tuples(st.just("swap_a_for_b"), st.sampled_from(_ACCOUNTS), st.integers(1, 10**6), st.just(0)),
    st.tuples(st.just("swap_b_for_a"), st.sampled_from(_ACCOUNTS), st.integers(1, 10**6), st.just(0)),
)


@settings(max_examples=150, deadline=None)
@given(st.lists(_operation, min_size=1, max_size=30))
def test_random_operation_sequences_preserve_invariants(ops) -> None:
    pool, transfers = _funded_pool(_ACCOUNTS, 10**8)

    for name, account, x, y in ops:
        before = pool.snapshot()
        try:
            if name == "deposit":
                if before.total_shares > 0:
                    # Match the pool ratio so later deposits get exercised too.
                    y = x * before.reserve_b // before.reserve_a
                pool.deposit(account, x, y)
            elif name == "withdraw":
                pool.withdraw(account, x)
            elif name == "swap_a_for_b":
                pool.swap_a_for_b(account, x)
            else:
                pool.swap_b_for_a(account, x)
        except PoolError:
            assert pool.snapshot() is before
            continue

        after = pool.snapshot()
        assert check_all(after) == []
        if name.startswith("swap"):
            assert after.get_constant_product() >= before.get_constant_product()
        assert transfers.custody_balance(TKA) == after.reserve_a
        assert transfers.custody_balance(TKB) == after.reserve_b
