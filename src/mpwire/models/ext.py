"""Extension value model.

An extension value is an application-defined signed type code paired with a
fixed-size opaque payload. Only the fixext payload sizes are representable.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

EXT_PAYLOAD_SIZES: tuple[int, ...] = (1, 2, 4, 8, 16)


class ExtType(BaseModel):
    """A typed extension payload.

    The model is frozen so instances are hashable and compare by value.
    Construction fails with a pydantic ValidationError (a ValueError) when the
    code is outside -128..127 or the payload size is not 1, 2, 4, 8 or 16.

    Example:
        >>> ext = ExtType(5, b"\\x01\\x02")
        >>> ext.code, ext.data
        (5, b'\\x01\\x02')
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    code: int = Field(ge=-128, le=127, strict=True)
    data: bytes = Field(strict=True)

    def __init__(self, code: int, data: bytes, **kwargs: Any) -> None:
        super().__init__(code=code, data=data, **kwargs)

    @field_validator("data", mode="before")
    @classmethod
    def _coerce_buffer(cls, value: Any) -> Any:
        if isinstance(value, (bytearray, memoryview)):
            return bytes(value)
        return value

    @field_validator("data")
    @classmethod
    def _check_payload_size(cls, value: bytes) -> bytes:
        if len(value) not in EXT_PAYLOAD_SIZES:
            raise ValueError(
                f"extension payload must be one of {EXT_PAYLOAD_SIZES} bytes, got {len(value)}"
            )
        return value
