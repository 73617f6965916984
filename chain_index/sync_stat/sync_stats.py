from __future__ import annotations

import functools
from typing import Union

from pydantic import NonNegativeInt
from typing_extensions import Self

from common.chain.point import ChainPoint, tip_as_point
from common.utils.pydantic import BaseModel
from .events import ChainSyncEvent, RollForwardEvent, RollBackwardEvent, ResumeEvent


class SyncStats(BaseModel):
    """
    Sync statistics of one accumulation window.

    Windows are combined with `+`: the counters are added,
    and the points are taken from the right operand, unless it is genesis.
    The empty window (zero counters, genesis points) is the identity of `+`.
    """

    applied_block_cnt: NonNegativeInt = 0
    applied_rollback_cnt: NonNegativeInt = 0
    chain_sync_point: ChainPoint = ChainPoint.genesis()
    node_point: ChainPoint = ChainPoint.genesis()

    @classmethod
    def empty(cls) -> Self:
        return cls()

    @classmethod
    def combine(cls, *stats_list: SyncStats) -> Self:
        """Folds the list from left to right, the last non-genesis points win."""
        return functools.reduce(lambda a, b: a + b, stats_list, cls.empty())

    @classmethod
    def from_event(cls, event: ChainSyncEvent) -> Self:
        if isinstance(event, RollForwardEvent):
            return cls(
                applied_block_cnt=1,
                chain_sync_point=tip_as_point(event.block.tip),
                node_point=tip_as_point(event.node_tip),
            )
        elif isinstance(event, RollBackwardEvent):
            return cls(
                applied_rollback_cnt=1,
                chain_sync_point=event.point,
                node_point=tip_as_point(event.node_tip),
            )
        elif isinstance(event, ResumeEvent):
            # resume doesn't observe the node tip
            return cls(chain_sync_point=event.point)
        raise ValueError(f"Wrong event type {type(event).__name__}")

    @classmethod
    def from_raw(cls, raw: _RawSyncStats) -> Self:
        if raw is None:
            return cls.empty()
        elif isinstance(raw, cls):
            return raw
        return cls.from_event(raw)

    @property
    def is_empty(self) -> bool:
        return self == self.empty()

    def __add__(self, other: SyncStats) -> SyncStats:
        if not isinstance(other, SyncStats):
            return NotImplemented

        return SyncStats(
            applied_block_cnt=self.applied_block_cnt + other.applied_block_cnt,
            applied_rollback_cnt=self.applied_rollback_cnt + other.applied_rollback_cnt,
            chain_sync_point=self.chain_sync_point + other.chain_sync_point,
            node_point=self.node_point + other.node_point,
        )


_RawSyncStats = Union[None, SyncStats, ChainSyncEvent]
