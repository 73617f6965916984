from __future__ import annotations

from typing import Union

from pydantic import NonNegativeInt
from typing_extensions import Self

from ..utils.cached import cached_method
from ..utils.format import bytes_to_hex
from ..utils.pydantic import BaseModel, HexBytesField

_SlotField = Union[NonNegativeInt, None]


class ChainTip(BaseModel):
    """The most recent block known to a chain follower, slot=None is the tip at genesis."""

    slot: _SlotField = None
    block_id: HexBytesField = bytes()
    block_no: _SlotField = None

    @classmethod
    def genesis(cls) -> Self:
        return cls()

    @classmethod
    def new(cls, slot: int, block_id: bytes | str, block_no: int | None = None) -> Self:
        return cls(slot=slot, block_id=block_id, block_no=block_no)

    @property
    def is_genesis(self) -> bool:
        return self.slot is None

    @cached_method
    def to_string(self) -> str:
        if self.is_genesis:
            return "TipAtGenesis"
        return f"Tip(slot={self.slot}, block_id={bytes_to_hex(self.block_id)}, block_no={self.block_no})"


class ChainPoint(BaseModel):
    """
    A position on a chain: the genesis sentinel or a concrete (slot, block-id) pair.

    Points are ordered by slot, the genesis sentinel is the smallest point.
    The sum of two points is right-biased: `a + b` is `b`, unless `b` is genesis.
    So genesis is the identity of the sum, and the sum is associative.
    """

    slot: _SlotField = None
    block_id: HexBytesField = bytes()

    @classmethod
    def genesis(cls) -> Self:
        return cls()

    @classmethod
    def new(cls, slot: int, block_id: bytes | str) -> Self:
        return cls(slot=slot, block_id=block_id)

    @classmethod
    def from_raw(cls, raw: _RawPoint) -> Self:
        if raw is None:
            return cls.genesis()
        elif isinstance(raw, cls):
            return raw
        elif isinstance(raw, ChainTip):
            return tip_as_point(raw)
        elif isinstance(raw, tuple) and (len(raw) == 2):
            return cls.new(*raw)
        raise ValueError(f"Wrong input type {type(raw).__name__}")

    @property
    def is_genesis(self) -> bool:
        return self.slot is None

    def __add__(self, other: ChainPoint) -> ChainPoint:
        if not isinstance(other, ChainPoint):
            return NotImplemented
        return self if other.is_genesis else other

    def _cmp_key(self) -> int:
        return -1 if self.is_genesis else self.slot

    def __lt__(self, other: ChainPoint) -> bool:
        if not isinstance(other, ChainPoint):
            return NotImplemented
        return self._cmp_key() < other._cmp_key()

    def __le__(self, other: ChainPoint) -> bool:
        if not isinstance(other, ChainPoint):
            return NotImplemented
        return self._cmp_key() <= other._cmp_key()

    def __gt__(self, other: ChainPoint) -> bool:
        if not isinstance(other, ChainPoint):
            return NotImplemented
        return self._cmp_key() > other._cmp_key()

    def __ge__(self, other: ChainPoint) -> bool:
        if not isinstance(other, ChainPoint):
            return NotImplemented
        return self._cmp_key() >= other._cmp_key()

    @cached_method
    def to_string(self) -> str:
        if self.is_genesis:
            return "Genesis"
        return f"Point(slot={self.slot}, block_id={bytes_to_hex(self.block_id)})"


_RawPoint = Union[None, ChainPoint, ChainTip, tuple[int, Union[bytes, str]]]


def tip_as_point(tip: ChainTip) -> ChainPoint:
    if tip.is_genesis:
        return ChainPoint.genesis()
    return ChainPoint.new(tip.slot, tip.block_id)
