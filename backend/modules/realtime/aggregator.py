"""
Change aggregator.

Subscribes to one change stream per watched table and folds every event
into a single "data changed at T" signal. Consumers re-query current
state on each signal instead of applying deltas.
"""

import asyncio
import logging
import time
from contextlib import AsyncExitStack
from typing import Callable, Optional, Sequence

from .interfaces import IChangeFeed, ISubscriptionHandle
from .models import AggregatorStatus, ChangeEvent, ChangeSignal

logger = logging.getLogger(__name__)

SignalListener = Callable[[ChangeSignal], None]

# Minimum step between two signals so changed_at strictly increases
_TICK = 1e-6


class ChangeAggregator:
    """
    Owns a set of change subscriptions for its lifetime.

    Usage:
        async with ChangeAggregator(feed, ["players", "groups"]) as aggregator:
            aggregator.add_listener(refetch)
            ...

    Events arriving before the scheduled flush runs are coalesced into one
    signal. A table whose stream fails to open is reported in
    ``failed_tables`` and the aggregator runs degraded on the rest. Every
    opened handle is closed on exit, including when opening is interrupted.
    """

    def __init__(
        self,
        feed: IChangeFeed,
        tables: Sequence[str],
        clock: Callable[[], float] = time.time,
    ):
        self._feed = feed
        self._tables = list(dict.fromkeys(tables))
        self._clock = clock

        self._handles: set[ISubscriptionHandle] = set()
        self._failed: dict[str, str] = {}
        self._stack: Optional[AsyncExitStack] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

        self._listeners: list[SignalListener] = []
        self._waiters: list[asyncio.Future] = []
        self._flush_handle: Optional[asyncio.Handle] = None
        self._pending_events = 0
        self._last_signal: Optional[ChangeSignal] = None

        self._opened = False
        self._closed = False

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def tables(self) -> list[str]:
        return list(self._tables)

    @property
    def handles(self) -> frozenset[ISubscriptionHandle]:
        return frozenset(self._handles)

    @property
    def failed_tables(self) -> dict[str, str]:
        return dict(self._failed)

    @property
    def degraded(self) -> bool:
        return bool(self._failed)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def last_signal(self) -> Optional[ChangeSignal]:
        return self._last_signal

    @property
    def last_changed(self) -> Optional[float]:
        return self._last_signal.changed_at if self._last_signal else None

    def status(self) -> AggregatorStatus:
        return AggregatorStatus(
            tables=self.tables,
            failed_tables=self.failed_tables,
            degraded=self.degraded,
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "ChangeAggregator":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def open(self) -> None:
        """Open one subscription per table."""
        if self._opened:
            raise RuntimeError("ChangeAggregator can only be opened once")
        self._opened = True
        self._loop = asyncio.get_running_loop()

        stack = AsyncExitStack()
        try:
            for table in self._tables:
                try:
                    handle = await self._feed.subscribe(table, self._on_event)
                except Exception as e:
                    logger.warning(f"Change stream for {table} unavailable, running degraded: {e}")
                    self._failed[table] = str(e)
                    continue
                stack.push_async_callback(handle.close)
                self._handles.add(handle)
        except BaseException:
            # Interrupted while opening: release whatever was acquired
            self._closed = True
            await stack.aclose()
            raise

        self._stack = stack
        logger.info(
            f"Watching {len(self._handles)}/{len(self._tables)} tables"
            + (f" (failed: {', '.join(self._failed)})" if self._failed else "")
        )

    async def close(self) -> None:
        """Stop delivering signals and close every handle."""
        if self._closed and self._stack is None:
            return
        self._closed = True

        if self._flush_handle is not None:
            self._flush_handle.cancel()
            self._flush_handle = None

        for waiter in self._waiters:
            if not waiter.done():
                waiter.set_result(None)
        self._waiters.clear()

        stack, self._stack = self._stack, None
        if stack is not None:
            await stack.aclose()
        logger.debug("Change aggregator closed")

    # -------------------------------------------------------------------------
    # Consumers
    # -------------------------------------------------------------------------

    def add_listener(self, listener: SignalListener) -> Callable[[], None]:
        """
        Register a listener for change signals.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    async def wait_for_change(self, after_sequence: Optional[int] = None) -> Optional[ChangeSignal]:
        """
        Wait for the next signal.

        Args:
            after_sequence: Sequence of the last signal the caller has seen.
                If a newer signal was already flushed it is returned at once.

        Returns:
            The signal, or None once the aggregator is closed
        """
        if self._closed:
            return None
        if (
            after_sequence is not None
            and self._last_signal is not None
            and self._last_signal.sequence > after_sequence
        ):
            return self._last_signal
        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            return await waiter
        finally:
            if waiter in self._waiters:
                self._waiters.remove(waiter)

    # -------------------------------------------------------------------------
    # Coalescing
    # -------------------------------------------------------------------------

    def _on_event(self, event: ChangeEvent) -> None:
        if self._closed or self._loop is None:
            return
        logger.debug(f"{event.table} {event.operation.value}")
        self._pending_events += 1
        if self._flush_handle is None:
            self._flush_handle = self._loop.call_soon(self._flush)

    def _flush(self) -> None:
        self._flush_handle = None
        if self._closed or self._pending_events == 0:
            return

        now = self._clock()
        if self._last_signal is not None:
            now = max(now, self._last_signal.changed_at + _TICK)
        sequence = self._last_signal.sequence + 1 if self._last_signal else 1

        signal = ChangeSignal(changed_at=now, sequence=sequence, event_count=self._pending_events)
        self._pending_events = 0
        self._last_signal = signal

        for listener in list(self._listeners):
            try:
                listener(signal)
            except Exception:
                logger.exception("Change listener failed")

        for waiter in self._waiters:
            if not waiter.done():
                waiter.set_result(signal)
        self._waiters.clear()
