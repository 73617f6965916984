from __future__ import annotations

from typing import Annotated, Any

from pydantic import (
    BaseModel as _PydanticBaseModel,
    ConfigDict,
    PlainValidator,
    PlainSerializer,
)
from typing_extensions import Self

from .cached import cached_method, cached_property
from .format import bytes_to_hex, hex_to_bytes, str_fmt_object


class BaseModel(_PydanticBaseModel):
    model_config = ConfigDict(
        extra="forbid",
        strict=True,
        frozen=True,
        ignored_types=(cached_property, cached_method),
    )

    @classmethod
    def from_json(cls, json_data: str) -> Self:
        return cls.model_validate_json(json_data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls.model_validate(data)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

    @cached_method
    def to_string(self) -> str:
        return str_fmt_object(self)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return self.to_string()

    def __deepcopy__(self, memo: dict[int, Any] | None = None) -> Self:
        """The object is not mutable, so there is no point in creating a copy."""
        memo[id(self)] = self
        return self


# Allows: None | "" | "0x" | "0xab12" | "ab12" | b"..."
def _hex_to_bytes(value: str | bytes | bytearray | None) -> bytes:
    return hex_to_bytes(value)


def _bytes_to_hex(value: bytes) -> str:
    return bytes_to_hex(value)


HexBytesField = Annotated[bytes, PlainValidator(_hex_to_bytes), PlainSerializer(_bytes_to_hex, return_type=str)]
