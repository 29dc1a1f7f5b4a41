"""
Pool state root: one sha256 commitment over a pool snapshot.

The root is taken over the canonical JSON of `state_to_dict`, behind a
versioned label, so it does not depend on the order providers joined in.
"""

from __future__ import annotations

import hashlib

from .canonical import canonical_json_bytes
from .pool import PoolState, state_to_dict

STATE_ROOT_LABEL = b"pairswap:pool_state_root:v1\x00"


def compute_state_root(state: PoolState) -> str:
    """0x-prefixed sha256 of the labelled canonical snapshot."""
    if not isinstance(state, PoolState):
        raise TypeError("state must be a PoolState")
    payload = STATE_ROOT_LABEL + canonical_json_bytes(state_to_dict(state))
    return "0x" + hashlib.sha256(payload).hexdigest()
