from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from common.chain.block import ChainIndexBlock
from common.chain.point import ChainPoint, ChainTip


@dataclass(frozen=True)
class RollForwardEvent:
    """The chain-index applied a new block, node_tip is the node tip at the time of the apply."""

    block: ChainIndexBlock
    node_tip: ChainTip


@dataclass(frozen=True)
class RollBackwardEvent:
    """The chain-index reverted to an earlier point due to a fork."""

    point: ChainPoint
    node_tip: ChainTip


@dataclass(frozen=True)
class ResumeEvent:
    """The chain-index reconnected and resumed from the point, there is no node tip in it."""

    point: ChainPoint


ChainSyncEvent = Union[RollForwardEvent, RollBackwardEvent, ResumeEvent]
CHAIN_SYNC_EVENT_TYPES = (RollForwardEvent, RollBackwardEvent, ResumeEvent)
