"""
Realtime API endpoints.

Streams coalesced change signals over SSE so dashboards can re-query
instead of polling.
"""

import logging

from fastapi import APIRouter, Depends
from sse_starlette.sse import EventSourceResponse

from api.dependencies import get_change_feed, get_watched_tables

from .aggregator import ChangeAggregator
from .interfaces import IChangeFeed

logger = logging.getLogger(__name__)

router = APIRouter()


async def change_event_generator(feed: IChangeFeed, tables: list[str]):
    """
    Generate SSE events for data changes.

    Yields events in the format:
        event: subscribed | changed
        data: <json_data>
    """
    async with ChangeAggregator(feed, tables) as aggregator:
        yield {
            "event": "subscribed",
            "data": aggregator.status().model_dump_json(),
        }
        sequence = 0
        while True:
            signal = await aggregator.wait_for_change(after_sequence=sequence)
            if signal is None:
                break
            sequence = signal.sequence
            yield {
                "event": "changed",
                "data": signal.model_dump_json(),
            }


@router.get("/stream")
async def stream_changes(
    feed: IChangeFeed = Depends(get_change_feed),
    tables: list[str] = Depends(get_watched_tables),
):
    """
    Stream change signals via SSE.

    Event types:
    - subscribed: Subscriptions are open; data lists tables and any
      that failed (degraded mode)
    - changed: One or more watched tables changed; data carries
      changed_at, sequence and event_count
    """
    return EventSourceResponse(
        change_event_generator(feed, tables),
        media_type="text/event-stream",
    )
