from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from typing_extensions import Self

from .point import ChainPoint, ChainTip, tip_as_point


@dataclass(frozen=True)
class ChainIndexBlock:
    tip: ChainTip
    tx_list: tuple[Any, ...] = field(default_factory=tuple)

    @classmethod
    def new_empty(cls, slot: int, block_id: bytes | str, block_no: int | None = None) -> Self:
        return cls(tip=ChainTip.new(slot, block_id, block_no))

    @property
    def slot(self) -> int | None:
        return self.tip.slot

    @property
    def point(self) -> ChainPoint:
        return tip_as_point(self.tip)

    @property
    def tx_cnt(self) -> int:
        return len(self.tx_list)
