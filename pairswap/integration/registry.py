"""
Registry of independent pools, one per ordered asset pair.

Each pool keeps its own lock; the registry lock only guards the pool map,
so operations on different pairs never wait on each other.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

import structlog

from ..state.pool import PoolState, compute_pool_id
from .config import PoolConfig, load_pool_configs
from .pool import Pool
from .transfers import TransferService

logger = structlog.get_logger()


class PoolRegistry:
    """In-memory registry of pools keyed by deterministic pool_id."""

    def __init__(self) -> None:
        self._pools: Dict[str, Pool] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_yaml(
        cls,
        path: Union[str, Path],
        transfers_for: Callable[[PoolConfig], TransferService],
    ) -> "PoolRegistry":
        """Create one empty pool per entry of a pool config YAML file."""
        registry = cls()
        for config in load_pool_configs(path):
            registry.create_pool(config, transfers_for(config))
        return registry

    def create_pool(
        self,
        config: PoolConfig,
        transfers: TransferService,
        *,
        state: Optional[PoolState] = None,
    ) -> Pool:
        pool_id = config.pool_id
        with self._lock:
            if pool_id in self._pools:
                raise ValueError(f"Pool already exists for {config.asset_a}/{config.asset_b}")
            pool = Pool(config, transfers, state=state)
            self._pools[pool_id] = pool
        logger.info("pool_registered", pool_id=pool_id, asset_a=config.asset_a, asset_b=config.asset_b)
        return pool

    def get(self, asset_a: str, asset_b: str) -> Pool:
        return self.get_by_id(compute_pool_id(asset_a, asset_b))

    def get_by_id(self, pool_id: str) -> Pool:
        with self._lock:
            try:
                return self._pools[pool_id]
            except KeyError as exc:
                raise ValueError(f"Pool not found: {pool_id}") from exc

    def pool_ids(self) -> List[str]:
        with self._lock:
            return sorted(self._pools)

    def state_roots(self) -> Dict[str, str]:
        """pool_id -> state root of each pool's committed snapshot."""
        with self._lock:
            pools = dict(self._pools)
        return {pool_id: pool.state_root() for pool_id, pool in sorted(pools.items())}

    def __contains__(self, pool_id: object) -> bool:
        with self._lock:
            return pool_id in self._pools

    def __len__(self) -> int:
        with self._lock:
            return len(self._pools)
