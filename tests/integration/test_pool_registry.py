# [TESTER] v1

from __future__ import annotations

import threading

import pytest

from pairswap.integration.config import PoolConfig
from pairswap.integration.registry import PoolRegistry
from pairswap.integration.transfers import InMemoryTransferService
from pairswap.state.pool import compute_pool_id


def test_create_and_lookup() -> None:
    registry = PoolRegistry()
    pool = registry.create_pool(PoolConfig("ETH", "USDC"), InMemoryTransferService())

    assert registry.get("ETH", "USDC") is pool
    assert registry.get_by_id(pool.pool_id) is pool
    assert pool.pool_id in registry
    assert len(registry) == 1


def test_duplicate_pair_rejected() -> None:
    registry = PoolRegistry()
    registry.create_pool(PoolConfig("ETH", "USDC"), InMemoryTransferService())
    with pytest.raises(ValueError):
        registry.create_pool(PoolConfig("ETH", "USDC"), InMemoryTransferService())


def test_reversed_pair_is_a_separate_pool() -> None:
    registry = PoolRegistry()
    forward = registry.create_pool(PoolConfig("ETH", "USDC"), InMemoryTransferService())
    backward = registry.create_pool(PoolConfig("USDC", "ETH"), InMemoryTransferService())
    assert forward is not backward
    assert registry.pool_ids() == sorted([forward.pool_id, backward.pool_id])


def test_missing_pool() -> None:
    with pytest.raises(ValueError):
        PoolRegistry().get("ETH", "USDC")


def test_pools_are_independent() -> None:
    registry = PoolRegistry()
    transfers = InMemoryTransferService()
    transfers.mint("owner", "ETH", 100)
    transfers.mint("owner", "USDC", 200)
    transfers.mint("owner", "WBTC", 10)
    eth_usdc = registry.create_pool(PoolConfig("ETH", "USDC"), transfers)
    wbtc_eth = registry.create_pool(PoolConfig("WBTC", "ETH"), InMemoryTransferService())
    empty_root = wbtc_eth.state_root()

    eth_usdc.deposit("owner", 100, 200)

    roots = registry.state_roots()
    assert roots[eth_usdc.pool_id] == eth_usdc.state_root()
    assert roots[wbtc_eth.pool_id] == empty_root
    assert wbtc_eth.get_reserves() == (0, 0)


def test_from_yaml(tmp_path) -> None:
    path = tmp_path / "pools.yaml"
    path.write_text(
        "pools:\n"
        "  - asset_a: ETH\n"
        "    asset_b: USDC\n"
        "  - asset_a: WBTC\n"
        "    asset_b: ETH\n"
        "    check_invariants: false\n",
        encoding="utf-8",
    )
    services = {}

    def transfers_for(config: PoolConfig) -> InMemoryTransferService:
        services[config.pool_id] = InMemoryTransferService()
        return services[config.pool_id]

    registry = PoolRegistry.from_yaml(path, transfers_for)

    assert len(registry) == 2
    assert registry.get("WBTC", "ETH").config.check_invariants is False
    assert set(services) == {compute_pool_id("ETH", "USDC"), compute_pool_id("WBTC", "ETH")}


def test_pools_sharing_one_transfer_service() -> None:
    registry = PoolRegistry()
    shared = InMemoryTransferService()
    traders = [f"trader{i}" for i in range(4)]
    for account in ["owner", *traders]:
        for asset in ("ETH", "USDC", "WBTC"):
            shared.mint(account, asset, 10**9)
    eth_usdc = registry.create_pool(PoolConfig("ETH", "USDC"), shared)
    wbtc_eth = registry.create_pool(PoolConfig("WBTC", "ETH"), shared)
    eth_usdc.deposit("owner", 10**6, 10**6)
    wbtc_eth.deposit("owner", 10**6, 10**6)

    def trade(trader: str) -> None:
        for _ in range(100):
            eth_usdc.swap_a_for_b(trader, 500)
            wbtc_eth.swap_b_for_a(trader, 500)

    workers = [threading.Thread(target=trade, args=(t,)) for t in traders]
    for w in workers:
        w.start()
    for w in workers:
        w.join()

    eth_in_pools = eth_usdc.get_reserves()[0] + wbtc_eth.get_reserves()[1]
    assert shared.custody_balance("ETH") == eth_in_pools
    assert shared.custody_balance("USDC") == eth_usdc.get_reserves()[1]
    assert shared.custody_balance("WBTC") == wbtc_eth.get_reserves()[0]
    assert shared.balances.total_supply("ETH") == 5 * 10**9
