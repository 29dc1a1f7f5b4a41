# [TESTER] v1

from __future__ import annotations

import pytest

from pairswap.integration.config import PoolConfig, load_pool_configs, pool_config_from_mapping


def test_defaults() -> None:
    config = PoolConfig("ETH", "USDC")
    assert config.check_invariants is True
    assert config.compensate_failed_transfers is True
    assert config.pool_id.startswith("0x")


@pytest.mark.parametrize(
    "kwargs, exc",
    [
        ({"asset_a": "", "asset_b": "USDC"}, ValueError),
        ({"asset_a": "ETH", "asset_b": "ETH"}, ValueError),
        ({"asset_a": "ETH", "asset_b": "USDC", "check_invariants": "yes"}, TypeError),
    ],
)
def test_rejects_invalid(kwargs, exc) -> None:
    with pytest.raises(exc):
        PoolConfig(**kwargs)


def test_unknown_key() -> None:
    with pytest.raises(ValueError, match="fee"):
        pool_config_from_mapping({"asset_a": "ETH", "asset_b": "USDC", "fee_bps": 30})


def test_load_empty_file(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_pool_configs(path) == []


def test_load(tmp_path) -> None:
    path = tmp_path / "pools.yaml"
    path.write_text(
        "pools:\n"
        "  - {asset_a: ETH, asset_b: USDC, compensate_failed_transfers: false}\n",
        encoding="utf-8",
    )
    assert load_pool_configs(path) == [PoolConfig("ETH", "USDC", compensate_failed_transfers=False)]


def test_pools_must_be_list(tmp_path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("pools: {asset_a: ETH}\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_pool_configs(path)
