from __future__ import annotations

from typing import Annotated

from pydantic import Field
from strenum import StrEnum
from typing_extensions import Self

from common.config.constants import SYNCED_SLOT_GAP
from common.utils.cached import cached_method
from common.utils.pydantic import BaseModel
from .sync_stats import SyncStats


class SyncStateKind(StrEnum):
    Synced = "synced"
    Syncing = "syncing"
    NotSyncing = "not-syncing"


class SyncState(BaseModel):
    kind: SyncStateKind
    pct: Annotated[float, Field(ge=0.0, le=100.0)] = 0.0

    @classmethod
    def synced(cls) -> Self:
        return cls(kind=SyncStateKind.Synced)

    @classmethod
    def syncing(cls, pct: float) -> Self:
        return cls(kind=SyncStateKind.Syncing, pct=float(pct))

    @classmethod
    def not_syncing(cls) -> Self:
        return cls(kind=SyncStateKind.NotSyncing)

    @property
    def is_synced(self) -> bool:
        return self.kind == SyncStateKind.Synced

    @property
    def is_syncing(self) -> bool:
        return self.kind == SyncStateKind.Syncing

    @property
    def is_not_syncing(self) -> bool:
        return self.kind == SyncStateKind.NotSyncing

    @cached_method
    def to_string(self) -> str:
        if self.is_synced:
            return "Still in sync."
        elif self.is_syncing:
            return f"Syncing ({self.pct:.2f}%)."
        return "Not syncing."


def get_sync_state_from_stats(stats: SyncStats, synced_slot_gap: int = SYNCED_SLOT_GAP) -> SyncState:
    """
    Get the sync state of the chain-index from the window statistics.

    The syncing percentage is valid only when the node is already fully synced.
    When the node and the chain-index are started at the same time,
    the node slot isn't the real tip of the chain, and the percentage is not a meaningful number.
    """
    chain_sync_point, node_point = stats.chain_sync_point, stats.node_point

    if node_point.is_genesis:
        return SyncState.not_syncing()
    elif chain_sync_point.is_genesis:
        return SyncState.syncing(0.0)

    chain_sync_slot, node_slot = chain_sync_point.slot, node_point.slot
    if node_slot - chain_sync_slot < synced_slot_gap:
        return SyncState.synced()

    return SyncState.syncing(100.0 * chain_sync_slot / node_slot)
