"""Domain events emitted by pool operations.

Events are informational. They are built from the committed post-state and
handed to subscribers after the ledger update; nothing in the pool reads
them back.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum, unique
from typing import Any, Callable, List, Union


@unique
class EventKind(Enum):
    LIQUIDITY_ADDED = "LiquidityAdded"
    LIQUIDITY_REMOVED = "LiquidityRemoved"
    SWAP = "Swap"


@dataclass(frozen=True)
class LiquidityAdded:
    provider: str
    amount_a: int
    amount_b: int
    minted_shares: int

    kind = EventKind.LIQUIDITY_ADDED


@dataclass(frozen=True)
class LiquidityRemoved:
    provider: str
    amount_a: int
    amount_b: int
    burned_shares: int

    kind = EventKind.LIQUIDITY_REMOVED


@dataclass(frozen=True)
class Swap:
    trader: str
    asset_in: str
    asset_out: str
    amount_in: int
    amount_out: int

    kind = EventKind.SWAP


PoolEvent = Union[LiquidityAdded, LiquidityRemoved, Swap]
EventSubscriber = Callable[[PoolEvent], None]


def event_to_dict(event: PoolEvent) -> dict[str, Any]:
    """Plain-dict form of an event, tagged with its kind."""
    d: dict[str, Any] = {"event": event.kind.value}
    d.update(asdict(event))
    return d


class EventLog:
    """Subscriber that records every event it receives, in order."""

    def __init__(self) -> None:
        self.events: List[PoolEvent] = []

    def __call__(self, event: PoolEvent) -> None:
        self.events.append(event)

    def of_kind(self, kind: EventKind) -> List[PoolEvent]:
        return [e for e in self.events if e.kind is kind]

    def __len__(self) -> int:
        return len(self.events)
