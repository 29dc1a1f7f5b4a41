"""
Pool: the imperative shell around the functional core.

Every mutating operation runs the same sequence while holding the pool lock:

1. validate inputs against the current snapshot,
2. quote amounts with `pairswap.core.pricing`,
3. build the candidate post-state with `pairswap.core.ledger` (pure),
4. move funds through the `TransferService` (inbound before outbound),
5. commit the candidate snapshot and deliver the event.

The ledger is only touched in step 5, so a rejected validation or a failed
transfer leaves the committed state exactly as it was. Readers never take the
lock: they read the committed snapshot, which is immutable and replaced with
a single reference assignment.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

import structlog

from ..core.errors import (
    InsufficientShares,
    InvalidAmount,
    InvariantViolation,
    PoolError,
    ReentrantCall,
    SlippageExceeded,
    TransferFailed,
)
from ..core.events import EventSubscriber, PoolEvent
from ..core.invariants import check_all, check_swap_product
from ..core.ledger import record_deposit, record_swap, record_withdrawal
from ..core.pricing import (
    check_deposit_ratio,
    quote_initial_shares,
    quote_proportional_shares,
    quote_swap,
    quote_swap_output,
    quote_withdrawal_amounts,
)
from ..state.balances import AccountId, Amount, AssetId
from ..state.canonical import canonical_json_bytes
from ..state.pool import PoolState, initial_state, state_to_dict
from ..state.state_root import compute_state_root
from .config import PoolConfig
from .transfers import TransferService

logger = structlog.get_logger()


@dataclass(frozen=True)
class _Transfer:
    inbound: bool
    asset: AssetId
    account: AccountId
    amount: Amount


def _require_account(name: str, value: object) -> None:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string")


def _require_positive(name: str, value: object) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value <= 0:
        raise InvalidAmount(f"{name} must be positive: {value}")


class Pool:
    """Constant-product pool for one ordered asset pair."""

    def __init__(
        self,
        config: PoolConfig,
        transfers: TransferService,
        *,
        state: Optional[PoolState] = None,
    ) -> None:
        if state is None:
            state = initial_state(config.asset_a, config.asset_b)
        elif (state.asset_a, state.asset_b) != (config.asset_a, config.asset_b):
            raise ValueError(
                f"state pair {state.asset_a}/{state.asset_b} does not match "
                f"config pair {config.asset_a}/{config.asset_b}"
            )
        violations = check_all(state)
        if violations:
            raise InvariantViolation(violations)

        self._config = config
        self._transfers = transfers
        self._state = state
        self._lock = threading.Lock()
        self._owner: Optional[int] = None
        self._subscribers: List[EventSubscriber] = []
        self._log = logger.bind(pool_id=config.pool_id, pair=f"{config.asset_a}/{config.asset_b}")

    # ------------------------------------------------------------------
    # Read-only queries (lock-free, single snapshot)
    # ------------------------------------------------------------------

    @property
    def config(self) -> PoolConfig:
        return self._config

    @property
    def pool_id(self) -> str:
        return self._config.pool_id

    def snapshot(self) -> PoolState:
        return self._state

    def get_reserves(self) -> Tuple[Amount, Amount]:
        state = self._state
        return state.reserve_a, state.reserve_b

    def get_price(self) -> Amount:
        """reserve_b // reserve_a, or 0 while either reserve is empty."""
        state = self._state
        if state.reserve_a == 0 or state.reserve_b == 0:
            return 0
        return state.reserve_b // state.reserve_a

    def share_of(self, provider: AccountId) -> Amount:
        return self._state.share_of(provider)

    def total_shares(self) -> Amount:
        return self._state.total_shares

    def state_root(self) -> str:
        return compute_state_root(self._state)

    def export_snapshot(self) -> bytes:
        """Canonical JSON bytes of the committed state, for external persistence."""
        return canonical_json_bytes(state_to_dict(self._state))

    @staticmethod
    def quote_swap_output(amount_in: Amount, reserve_in: Amount, reserve_out: Amount) -> Amount:
        return quote_swap_output(amount_in, reserve_in, reserve_out)

    def preview_swap_a_for_b(self, amount_in: Amount) -> Amount:
        state = self._state
        return quote_swap_output(amount_in, state.reserve_a, state.reserve_b)

    def preview_swap_b_for_a(self, amount_in: Amount) -> Amount:
        state = self._state
        return quote_swap_output(amount_in, state.reserve_b, state.reserve_a)

    def preview_withdraw(self, provider: AccountId, shares: Amount) -> Tuple[Amount, Amount]:
        state = self._state
        _require_positive("shares", shares)
        held = state.share_of(provider)
        if held < shares:
            raise InsufficientShares(provider, held, shares)
        return quote_withdrawal_amounts(shares, state.reserve_a, state.reserve_b, state.total_shares)

    # ------------------------------------------------------------------
    # Event subscribers
    # ------------------------------------------------------------------

    def subscribe(self, subscriber: EventSubscriber) -> None:
        with self._guard():
            self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: EventSubscriber) -> None:
        with self._guard():
            self._subscribers.remove(subscriber)

    # ------------------------------------------------------------------
    # Mutating operations
    # ------------------------------------------------------------------

    def deposit(self, provider: AccountId, amount_a: Amount, amount_b: Amount) -> Amount:
        """
        Add liquidity and return the minted shares.

        The first deposit into an empty pool sets the price and mints
        floor(sqrt(amount_a * amount_b)). Later deposits must match the pool
        ratio exactly (amount_b == floor(amount_a * reserve_b / reserve_a))
        and mint floor(amount_a * total_shares / reserve_a).

        Raises:
            InvalidAmount: Non-positive amounts, or a deposit too small to mint
            RatioMismatch: amount_b does not match the pool ratio
            TransferFailed: The collaborator could not pull the funds
        """
        _require_account("provider", provider)
        with self._guard(), self._rejections("deposit", provider=provider):
            state = self._state
            _require_positive("amount_a", amount_a)
            _require_positive("amount_b", amount_b)

            if state.total_shares == 0:
                minted = quote_initial_shares(amount_a, amount_b)
            else:
                check_deposit_ratio(amount_a, amount_b, state.reserve_a, state.reserve_b)
                minted = quote_proportional_shares(amount_a, state.reserve_a, state.total_shares)
                if minted <= 0:
                    raise InvalidAmount(f"Deposit too small to mint shares: ({amount_a}, {amount_b})")

            new_state, event = record_deposit(state, provider, amount_a, amount_b, minted)
            self._verify(state, new_state)
            self._run_transfers(
                "deposit",
                [
                    _Transfer(True, state.asset_a, provider, amount_a),
                    _Transfer(True, state.asset_b, provider, amount_b),
                ],
            )
            self._commit(new_state, event)

        self._log.info(
            "pool_deposit",
            provider=provider,
            amount_a=amount_a,
            amount_b=amount_b,
            minted_shares=minted,
            total_shares=new_state.total_shares,
        )
        return minted

    def withdraw(self, provider: AccountId, shares: Amount) -> Tuple[Amount, Amount]:
        """
        Burn shares and return (amount_a, amount_b) paid out.

        Raises:
            InvalidAmount: Non-positive share amount
            InsufficientShares: Provider holds fewer shares
            TransferFailed: The collaborator could not pay out
        """
        _require_account("provider", provider)
        with self._guard(), self._rejections("withdraw", provider=provider):
            state = self._state
            _require_positive("shares", shares)
            held = state.share_of(provider)
            if held < shares:
                raise InsufficientShares(provider, held, shares)

            amount_a, amount_b = quote_withdrawal_amounts(
                shares, state.reserve_a, state.reserve_b, state.total_shares
            )
            new_state, event = record_withdrawal(state, provider, shares, amount_a, amount_b)
            self._verify(state, new_state)
            self._run_transfers(
                "withdraw",
                [
                    _Transfer(False, state.asset_a, provider, amount_a),
                    _Transfer(False, state.asset_b, provider, amount_b),
                ],
            )
            self._commit(new_state, event)

        self._log.info(
            "pool_withdraw",
            provider=provider,
            burned_shares=shares,
            amount_a=amount_a,
            amount_b=amount_b,
            total_shares=new_state.total_shares,
        )
        return amount_a, amount_b

    def swap_a_for_b(self, trader: AccountId, amount_in: Amount, min_amount_out: Amount = 0) -> Amount:
        """Sell exactly `amount_in` of asset A; return the asset B paid out."""
        return self._swap(trader, amount_in, min_amount_out, in_is_a=True)

    def swap_b_for_a(self, trader: AccountId, amount_in: Amount, min_amount_out: Amount = 0) -> Amount:
        """Sell exactly `amount_in` of asset B; return the asset A paid out."""
        return self._swap(trader, amount_in, min_amount_out, in_is_a=False)

    def _swap(self, trader: AccountId, amount_in: Amount, min_amount_out: Amount, *, in_is_a: bool) -> Amount:
        _require_account("trader", trader)
        operation = "swap_a_for_b" if in_is_a else "swap_b_for_a"
        with self._guard(), self._rejections(operation, trader=trader):
            state = self._state
            _require_positive("amount_in", amount_in)
            if not isinstance(min_amount_out, int) or isinstance(min_amount_out, bool):
                raise TypeError("min_amount_out must be an int")
            if min_amount_out < 0:
                raise InvalidAmount(f"min_amount_out must be non-negative: {min_amount_out}")

            if in_is_a:
                reserve_in, reserve_out = state.reserve_a, state.reserve_b
                asset_in, asset_out = state.asset_a, state.asset_b
            else:
                reserve_in, reserve_out = state.reserve_b, state.reserve_a
                asset_in, asset_out = state.asset_b, state.asset_a

            quote = quote_swap(amount_in, reserve_in, reserve_out)
            amount_out = quote.amount_out
            if amount_out <= 0:
                raise InvalidAmount(f"amount_in too small: output rounds to zero ({amount_in})")
            if amount_out < min_amount_out:
                raise SlippageExceeded(amount_out, min_amount_out)

            new_state, event = record_swap(state, trader, amount_in, amount_out, in_is_a)
            if not check_swap_product(state, new_state):
                raise InvariantViolation(["swap_product_non_decreasing"])
            self._verify(state, new_state)
            self._run_transfers(
                operation,
                [
                    _Transfer(True, asset_in, trader, amount_in),
                    _Transfer(False, asset_out, trader, amount_out),
                ],
            )
            self._commit(new_state, event)

        self._log.info(
            "pool_swap",
            trader=trader,
            asset_in=asset_in,
            asset_out=asset_out,
            amount_in=amount_in,
            amount_out=amount_out,
            reserve_a=new_state.reserve_a,
            reserve_b=new_state.reserve_b,
        )
        return amount_out

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @contextmanager
    def _guard(self) -> Iterator[None]:
        """Per-pool mutual exclusion that fails fast on same-thread re-entry."""
        me = threading.get_ident()
        if self._owner == me:
            raise ReentrantCall("pool operation re-entered from inside another operation")
        with self._lock:
            self._owner = me
            try:
                yield
            finally:
                self._owner = None

    @contextmanager
    def _rejections(self, operation: str, **context: object) -> Iterator[None]:
        try:
            yield
        except PoolError as exc:
            self._log.info(
                "pool_operation_rejected",
                operation=operation,
                error=type(exc).__name__,
                reason=str(exc),
                **context,
            )
            raise

    def _verify(self, before: PoolState, after: PoolState) -> None:
        if not self._config.check_invariants:
            return
        violations = check_all(after)
        if violations:
            self._log.error(
                "pool_invariant_violation",
                violations=violations,
                before=repr(before),
                after=repr(after),
            )
            raise InvariantViolation(violations)

    def _run_transfers(self, operation: str, transfers: Sequence[_Transfer]) -> None:
        done: List[_Transfer] = []
        for transfer in transfers:
            if transfer.amount == 0:
                continue
            error: Optional[BaseException] = None
            try:
                ok = self._call_transfer(transfer)
            except Exception as exc:
                ok = False
                error = exc
            if ok:
                done.append(transfer)
                continue

            self._log.warning(
                "pool_transfer_failed",
                operation=operation,
                inbound=transfer.inbound,
                asset=transfer.asset,
                account=transfer.account,
                amount=transfer.amount,
                error=repr(error) if error is not None else None,
            )
            compensated = self._compensate(operation, done)
            direction = "in" if transfer.inbound else "out"
            raise TransferFailed(
                f"transfer {direction} of {transfer.amount} {transfer.asset} for {transfer.account!r} failed",
                compensated=compensated,
                cause=error,
            ) from error

    def _call_transfer(self, transfer: _Transfer) -> bool:
        if transfer.inbound:
            return bool(self._transfers.transfer_in(transfer.asset, transfer.account, transfer.amount))
        return bool(self._transfers.transfer_out(transfer.asset, transfer.account, transfer.amount))

    def _compensate(self, operation: str, done: Sequence[_Transfer]) -> bool:
        if not done:
            return True
        if not self._config.compensate_failed_transfers:
            return False
        compensated = True
        for transfer in reversed(done):
            reverse = _Transfer(not transfer.inbound, transfer.asset, transfer.account, transfer.amount)
            try:
                ok = self._call_transfer(reverse)
            except Exception:
                self._log.exception("pool_compensation_failed", operation=operation, asset=transfer.asset)
                ok = False
            else:
                if not ok:
                    self._log.error(
                        "pool_compensation_failed",
                        operation=operation,
                        asset=transfer.asset,
                        account=transfer.account,
                        amount=transfer.amount,
                    )
            compensated = compensated and ok
        return compensated

    def _commit(self, new_state: PoolState, event: PoolEvent) -> None:
        self._state = new_state
        for subscriber in list(self._subscribers):
            try:
                subscriber(event)
            except Exception:
                self._log.exception("pool_event_subscriber_failed", event_kind=event.kind.value)

    def __repr__(self) -> str:
        return f"Pool({self._state!r})"
