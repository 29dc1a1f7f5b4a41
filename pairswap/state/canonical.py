"""
Canonical JSON for pool snapshots.

A snapshot only ever holds strings, integers and mappings of them, so the
encoder accepts exactly that and refuses anything else (floats included).
Keys are sorted, separators are compact and output is ASCII, so two equal
pool states always encode to the same bytes.
"""

from __future__ import annotations

import json
from typing import Any, Mapping


def _check_snapshot_value(value: Any, path: str) -> None:
    if isinstance(value, bool):
        raise TypeError(f"{path}: bool is not allowed in a pool snapshot")
    if isinstance(value, (str, int)):
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"{path}: snapshot keys must be str, got {key!r}")
            _check_snapshot_value(item, f"{path}.{key}")
        return
    raise TypeError(f"{path}: {type(value).__name__} is not allowed in a pool snapshot")


def canonical_json_bytes(value: Mapping[str, Any]) -> bytes:
    """Sorted-key, compact, ASCII JSON encoding of a snapshot mapping."""
    _check_snapshot_value(value, "$")
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=True).encode("ascii")
