"""
Pool configuration.

Only per-pool identity and shell behaviour are configurable. The fee fraction
(997/1000) and the rounding rules are fixed in `pairswap.kernels.python`.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, List, Mapping, Union

import structlog
import yaml

from ..state.pool import compute_pool_id

logger = structlog.get_logger()


@dataclass(frozen=True)
class PoolConfig:
    asset_a: str
    asset_b: str

    # Run the invariant registry on every candidate post-state before committing it.
    check_invariants: bool = True

    # When a later transfer of an operation fails, reverse the earlier ones
    # before reporting the failure.
    compensate_failed_transfers: bool = True

    def __post_init__(self) -> None:
        for name in ("asset_a", "asset_b"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{name} must be a non-empty string")
        if self.asset_a == self.asset_b:
            raise ValueError(f"Pool assets must differ: {self.asset_a!r}")
        for name in ("check_invariants", "compensate_failed_transfers"):
            if not isinstance(getattr(self, name), bool):
                raise TypeError(f"{name} must be a bool")

    @property
    def pool_id(self) -> str:
        return compute_pool_id(self.asset_a, self.asset_b)


_CONFIG_FIELDS = frozenset(f.name for f in fields(PoolConfig))


def pool_config_from_mapping(raw: Mapping[str, Any]) -> PoolConfig:
    """Build a PoolConfig from a mapping, rejecting unknown keys."""
    if not isinstance(raw, Mapping):
        raise TypeError("pool config entry must be a mapping")
    unknown = sorted(set(raw) - _CONFIG_FIELDS)
    if unknown:
        raise ValueError(f"unknown pool config keys: {', '.join(unknown)}")
    return PoolConfig(**dict(raw))


def load_pool_configs(path: Union[str, Path]) -> List[PoolConfig]:
    """
    Load pool configs from a YAML file of the form:

        pools:
          - asset_a: ETH
            asset_b: USDC
          - asset_a: WBTC
            asset_b: ETH
            check_invariants: false
    """
    path = Path(path)
    doc = yaml.safe_load(path.read_text(encoding="utf-8"))
    if doc is None:
        doc = {}
    if not isinstance(doc, Mapping):
        raise TypeError("pool config YAML must be a mapping")
    entries = doc.get("pools", [])
    if not isinstance(entries, list):
        raise TypeError("'pools' must be a list")

    configs = [pool_config_from_mapping(entry) for entry in entries]
    logger.debug("pool_config_loaded", path=str(path), pools=len(configs))
    return configs
