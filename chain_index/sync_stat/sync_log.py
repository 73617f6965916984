from __future__ import annotations

import logging
from typing import Protocol

from pydantic import NonNegativeFloat

from common.utils.cached import cached_method
from common.utils.json_logger import log_msg
from common.utils.pydantic import BaseModel
from .sync_state import SyncState
from .sync_stats import SyncStats

_LOG = logging.getLogger(__name__)


class SyncLogRecord(BaseModel):
    state: SyncState
    stats: SyncStats
    delay_sec: NonNegativeFloat

    @cached_method
    def to_string(self) -> str:
        msg = (
            f"{self.state.to_string()} "
            f"Applied {self.stats.applied_block_cnt} blocks, "
            f"{self.stats.applied_rollback_cnt} rollbacks in the last {self.delay_sec:g}s."
        )
        if not self.state.is_not_syncing:
            msg += f" Current tip is {self.stats.chain_sync_point.to_string()}"
        return msg


class SyncLogSink(Protocol):
    """Any object with info/warn methods, the reporter chooses the severity of each record."""

    def info(self, record: SyncLogRecord) -> None: ...

    def warn(self, record: SyncLogRecord) -> None: ...


class LoggingSyncLogSink:
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or _LOG

    def info(self, record: SyncLogRecord) -> None:
        self._logger.info(log_msg("{SyncLog}", SyncLog=record))

    def warn(self, record: SyncLogRecord) -> None:
        self._logger.warning(log_msg("{SyncLog}", SyncLog=record))
