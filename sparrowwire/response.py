"""Building blocks for server-to-client packet payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Union

ScalarValue = Union[str, int, float, None]

_NANOS_PER_SECOND = 1_000_000_000
_NANOS_PER_MINUTE = 60 * _NANOS_PER_SECOND
_NANOS_PER_HOUR = 60 * _NANOS_PER_MINUTE
_NANOS_PER_DAY = 24 * _NANOS_PER_HOUR


def _format_float(value: float) -> str:
    """Format a float in plain decimal notation, shortest round-trip digits."""
    if value != value:
        return "NaN"
    if value in (float("inf"), float("-inf")):
        return "inf" if value > 0 else "-inf"
    exact = Decimal(repr(value))
    if value.is_integer():
        exact = exact.to_integral_value()
    return format(exact, "f")


@dataclass
class ResponsePayload:
    """A growable payload of a packet sent to the client."""

    data: bytearray = field(default_factory=bytearray)

    def append(self, byte: int) -> None:
        self.data.append(byte)

    def extend(self, data: bytes) -> None:
        self.data.extend(data)

    def dump_text_row(self, columns: Iterable[ScalarValue]) -> None:
        """Write one text-protocol result row; ``None`` becomes SQL NULL."""
        for value in columns:
            if value is None:
                self.dump_length_encoded_null()
            elif isinstance(value, bool):
                raise TypeError(f"unsupported scalar value type: {type(value).__name__}")
            elif isinstance(value, str):
                self.dump_length_encoded_string(value.encode("utf-8"))
            elif isinstance(value, int):
                self.dump_length_encoded_string(str(value).encode("ascii"))
            elif isinstance(value, float):
                self.dump_length_encoded_string(_format_float(value).encode("ascii"))
            else:
                raise TypeError(f"unsupported scalar value type: {type(value).__name__}")

    def dump_length_encoded_string(self, data: bytes) -> None:
        self.dump_length_encoded_int(len(data))
        self.data.extend(data)

    def dump_length_encoded_null(self) -> None:
        self.data.append(0xFB)

    def dump_length_encoded_int(self, n: int) -> None:
        if n < 0 or n > 0xFFFF_FFFF_FFFF_FFFF:
            raise ValueError(f"length-encoded integer out of range: {n}")
        if n <= 250:
            self.data.append(n)
        elif n <= 0xFFFF:
            self.data.append(0xFC)
            self.data.extend(n.to_bytes(2, "little"))
        elif n <= 0xFFFFFF:
            self.data.append(0xFD)
            self.data.extend(n.to_bytes(3, "little"))
        else:
            self.data.append(0xFE)
            self.data.extend(n.to_bytes(8, "little"))

    def dump_uint16(self, n: int) -> None:
        """Write the low 16 bits of n, little-endian."""
        self.data.extend((n & 0xFFFF).to_bytes(2, "little"))

    def dump_uint32(self, n: int) -> None:
        """Write the low 32 bits of n, little-endian."""
        self.data.extend((n & 0xFFFF_FFFF).to_bytes(4, "little"))

    def dump_uint64(self, n: int) -> None:
        """Write the low 64 bits of n, little-endian."""
        self.data.extend((n & 0xFFFF_FFFF_FFFF_FFFF).to_bytes(8, "little"))

    def dump_binary_time(self, nanoseconds: int) -> None:
        """Write a binary-protocol TIME value given as a signed duration in nanoseconds."""
        if nanoseconds == 0:
            self.data.append(0)
            return

        negative = nanoseconds < 0
        remaining = -nanoseconds if negative else nanoseconds
        days, remaining = divmod(remaining, _NANOS_PER_DAY)
        hours, remaining = divmod(remaining, _NANOS_PER_HOUR)
        minutes, remaining = divmod(remaining, _NANOS_PER_MINUTE)
        seconds, remaining = divmod(remaining, _NANOS_PER_SECOND)

        body = bytearray(
            [
                12,
                1 if negative else 0,
                days & 0xFF,
                0,
                0,
                0,
                hours & 0xFF,
                minutes & 0xFF,
                seconds & 0xFF,
            ]
        )
        if remaining == 0:
            body[0] = 8
        else:
            microseconds = remaining // 1000
            body.extend((microseconds & 0xFFFF_FFFF).to_bytes(4, "little"))
        self.data.extend(body)

    def __bytes__(self) -> bytes:
        return bytes(self.data)

    def __len__(self) -> int:
        return len(self.data)