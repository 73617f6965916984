from __future__ import annotations

import asyncio
import logging
from typing import Union

from common.config.config import Config
from .events import ChainSyncEvent, CHAIN_SYNC_EVENT_TYPES
from .sync_stats import SyncStats

_LOG = logging.getLogger(__name__)

SyncStatItem = Union[SyncStats, ChainSyncEvent]


class SyncStatSubscription:
    """An independent read cursor on the broadcast, it gets each item published after the subscription."""

    def __init__(self, broadcast: SyncStatBroadcast, capacity: int) -> None:
        self._broadcast = broadcast
        self._queue: asyncio.Queue[SyncStatItem] = asyncio.Queue(maxsize=capacity)
        self._lost_item_cnt = 0

    @property
    def lost_item_cnt(self) -> int:
        return self._lost_item_cnt

    @property
    def pending_item_cnt(self) -> int:
        return self._queue.qsize()

    @property
    def is_subscribed(self) -> bool:
        return self._broadcast.has_subscription(self)

    def try_read(self) -> SyncStatItem | None:
        try:
            return self._queue.get_nowait()
        except asyncio.QueueEmpty:
            return None

    def unsubscribe(self) -> None:
        self._broadcast.unsubscribe(self)

    def _put(self, item: SyncStatItem) -> None:
        if self._queue.full():
            # the producer never waits for slow readers, the oldest item is dropped
            self._queue.get_nowait()
            self._lost_item_cnt += 1
        self._queue.put_nowait(item)


class SyncStatBroadcast:
    def __init__(self, cfg: Config | None = None) -> None:
        self._cfg = cfg or Config()
        self._subscription_list: list[SyncStatSubscription] = list()

    @property
    def subscription_cnt(self) -> int:
        return len(self._subscription_list)

    def has_subscription(self, subscription: SyncStatSubscription) -> bool:
        return subscription in self._subscription_list

    def subscribe(self) -> SyncStatSubscription:
        subscription = SyncStatSubscription(self, self._cfg.sync_stat_queue_capacity)
        self._subscription_list.append(subscription)
        _LOG.debug("new subscription, total %s subscriptions", len(self._subscription_list))
        return subscription

    def unsubscribe(self, subscription: SyncStatSubscription) -> None:
        if subscription in self._subscription_list:
            self._subscription_list.remove(subscription)

    def publish(self, item: SyncStatItem) -> None:
        if not isinstance(item, (SyncStats, *CHAIN_SYNC_EVENT_TYPES)):
            raise ValueError(f"Wrong input type {type(item).__name__}")

        for subscription in self._subscription_list:
            subscription._put(item)  # noqa


def drain_until_empty(subscription: SyncStatSubscription) -> SyncStats:
    """Read all items from the subscription until it is empty and combine them into one window."""
    stats = SyncStats.empty()
    while (item := subscription.try_read()) is not None:
        stats += SyncStats.from_raw(item)
    return stats
