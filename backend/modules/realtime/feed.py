"""
Supabase Realtime change feed.

Opens one ``postgres_changes`` channel per table and waits for the
server to confirm the subscription before handing back a handle.
"""

import asyncio
import logging
import uuid
from typing import Any, Optional

from supabase import AsyncClient

from .interfaces import ChangeCallback, IChangeFeed, ISubscriptionHandle
from .models import ChangeEvent, ChangeOperation
from .exceptions import SubscriptionError

logger = logging.getLogger(__name__)

SUBSCRIBE_TIMEOUT_SECONDS = 10.0

_FAILED_STATES = {"CHANNEL_ERROR", "TIMED_OUT", "CLOSED"}


def _operation_from_payload(payload: Any) -> ChangeOperation:
    """Pull the operation kind out of a postgres_changes payload."""
    if not isinstance(payload, dict):
        return ChangeOperation.UNKNOWN
    data = payload.get("data", payload)
    if not isinstance(data, dict):
        return ChangeOperation.UNKNOWN
    return ChangeOperation.parse(data.get("type") or data.get("eventType"))


class ChannelHandle(ISubscriptionHandle):
    """Handle over one realtime channel."""

    def __init__(self, client: AsyncClient, channel: Any, table: str):
        self._client = client
        self._channel = channel
        self.table = table
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        if self._closed:
            return
        try:
            await self._client.remove_channel(self._channel)
        finally:
            self._closed = True
            logger.debug(f"Closed realtime channel for {self.table}")


class SupabaseChangeFeed(IChangeFeed):
    """
    Change feed backed by Supabase Realtime.

    Args:
        client: Async Supabase client
        channel_prefix: Prefix for channel names
        timeout: Seconds to wait for the subscription to be confirmed
    """

    def __init__(
        self,
        client: AsyncClient,
        channel_prefix: str = "changes",
        timeout: float = SUBSCRIBE_TIMEOUT_SECONDS,
    ):
        self._client = client
        self._prefix = channel_prefix
        self._timeout = timeout

    async def subscribe(self, table: str, callback: ChangeCallback) -> ISubscriptionHandle:
        """Open a channel for every operation on ``public.<table>``."""
        # Unique per subscription so re-mounted consumers never share a channel
        channel = self._client.channel(f"{self._prefix}-{table}-{uuid.uuid4().hex[:8]}")
        handle = ChannelHandle(self._client, channel, table)

        def _on_change(payload: Any) -> None:
            if handle.closed:
                return
            callback(ChangeEvent(table=table, operation=_operation_from_payload(payload)))

        loop = asyncio.get_running_loop()
        confirmed: asyncio.Future = loop.create_future()

        def _on_status(status: Any, err: Optional[Exception] = None) -> None:
            state = str(getattr(status, "value", status)).upper()
            logger.debug(f"Realtime channel {table} status: {state}")
            if confirmed.done():
                return
            if state == "SUBSCRIBED":
                confirmed.set_result(None)
            elif state in _FAILED_STATES:
                confirmed.set_exception(SubscriptionError(table, str(err) if err else state))

        channel.on_postgres_changes(event="*", schema="public", table=table, callback=_on_change)

        try:
            await channel.subscribe(_on_status)
            await asyncio.wait_for(confirmed, timeout=self._timeout)
        except SubscriptionError:
            await handle.close()
            raise
        except asyncio.TimeoutError:
            await handle.close()
            raise SubscriptionError(table, "timed out waiting for confirmation")
        except Exception as e:
            await handle.close()
            raise SubscriptionError(table, str(e))

        return handle
