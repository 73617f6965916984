from __future__ import annotations

import asyncio
import contextlib
import logging

from strenum import StrEnum

from common.config.config import Config
from common.config.constants import CHAIN_INDEX_VER
from common.utils.json_logger import logging_context
from .broadcast import SyncStatBroadcast, SyncStatSubscription, drain_until_empty
from .sync_log import SyncLogRecord, SyncLogSink, LoggingSyncLogSink
from .sync_state import SyncState, get_sync_state_from_stats

_LOG = logging.getLogger(__name__)


class SyncStatDelay(StrEnum):
    Short = "short"
    Long = "long"

    @classmethod
    def from_state(cls, state: SyncState) -> SyncStatDelay:
        # while the chain-index is catching up, the state changes fast
        if state.is_syncing:
            return cls.Short
        return cls.Long

    def to_sec(self, cfg: Config) -> float:
        if self == SyncStatDelay.Short:
            return cfg.sync_stat_short_delay_sec
        return cfg.sync_stat_long_delay_sec


class SyncProgressReporter:
    """
    Periodically logs the summary of the chain-index syncing.

    Each step drains all pending items of the subscription into one window,
    evaluates the sync state and logs it. The next step happens after the short delay
    if the chain-index is syncing, otherwise after the long delay.
    """

    def __init__(self, cfg: Config, subscription: SyncStatSubscription, sink: SyncLogSink | None = None) -> None:
        self._cfg = cfg
        self._subscription = subscription
        self._sink = sink or LoggingSyncLogSink()

        self._delay = SyncStatDelay.Short
        self._stop_event = asyncio.Event()
        self._report_task: asyncio.Task | None = None

    @property
    def delay(self) -> SyncStatDelay:
        return self._delay

    @property
    def delay_sec(self) -> float:
        return self._delay.to_sec(self._cfg)

    async def start(self) -> None:
        self._report_task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        self._stop_event.set()
        if self._report_task:
            await self._report_task
            self._report_task = None

    def step(self) -> SyncLogRecord:
        stats = drain_until_empty(self._subscription)
        state = get_sync_state_from_stats(stats, self._cfg.sync_stat_synced_slot_gap)

        record = SyncLogRecord(state=state, stats=stats, delay_sec=self.delay_sec)
        if state.is_not_syncing:
            self._sink.warn(record)
        else:
            self._sink.info(record)

        self._delay = SyncStatDelay.from_state(state)
        return record

    async def run(self) -> None:
        with logging_context(ctx="sync-stat"):
            while True:
                with contextlib.suppress(asyncio.TimeoutError):
                    await asyncio.wait_for(self._stop_event.wait(), self.delay_sec)
                if self._stop_event.is_set():
                    break

                try:
                    self.step()
                except BaseException as exc:
                    _LOG.error("unexpected error on sync progress report", exc_info=exc)


async def log_progress(
    broadcast: SyncStatBroadcast,
    sink: SyncLogSink | None = None,
    cfg: Config | None = None,
) -> None:
    """
    Subscribe to the broadcast and log the sync progress till the cancellation of the task.

    The host process is expected to call `Logger.setup()` before, so the records go through `log_cfg.json`.
    """
    cfg = cfg or Config()
    if not cfg.gather_sync_stat:
        _LOG.info("skip sync progress reporting: %s=%s", cfg.gather_sync_stat_name, cfg.gather_sync_stat)
        return

    _LOG.info("running sync progress reporter %s with the config: %s", CHAIN_INDEX_VER, cfg.to_string())
    subscription = broadcast.subscribe()
    reporter = SyncProgressReporter(cfg, subscription, sink)
    try:
        await reporter.run()
    finally:
        subscription.unsubscribe()
