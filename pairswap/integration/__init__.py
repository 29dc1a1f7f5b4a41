"""
Imperative shell: lock-guarded pools, transfer collaborators, configuration.
"""

from .config import PoolConfig, load_pool_configs, pool_config_from_mapping
from .pool import Pool
from .registry import PoolRegistry
from .transfers import InMemoryTransferService, TransferService

__all__ = [
    "InMemoryTransferService",
    "Pool",
    "PoolConfig",
    "PoolRegistry",
    "TransferService",
    "load_pool_configs",
    "pool_config_from_mapping",
]
