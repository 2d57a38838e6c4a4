"""Access to the fields of a raw client request packet."""

from __future__ import annotations

from .errors import CR_MALFORMED_PACKET, UNKNOWN_ERROR, MysqlError, global_error
from .packet import PacketType

_HEADER_SIZE = 4
_COMMAND_OFFSET = 4


class RequestPayload:
    """A client packet including its 4-byte header."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)

    def __repr__(self) -> str:
        return f"RequestPayload({self.data!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RequestPayload):
            return NotImplemented
        return self.data == other.data

    def _byte(self, index: int) -> int:
        if len(self.data) <= index:
            raise global_error(CR_MALFORMED_PACKET, "malformed packet error")
        return self.data[index]

    def sequence_id(self) -> int:
        return self._byte(3)

    def command_id(self) -> int:
        return self._byte(_COMMAND_OFFSET)

    def query_sql(self) -> bytes:
        """Bytes following the command byte, as bounded by the packet length."""
        if len(self.data) < _HEADER_SIZE:
            raise global_error(CR_MALFORMED_PACKET, "malformed packet error")
        length = int.from_bytes(self.data[:3], "little")
        start = _COMMAND_OFFSET + 1
        end = length + _HEADER_SIZE
        if end < start or end > len(self.data):
            raise global_error(CR_MALFORMED_PACKET, "malformed packet error")
        return self.data[start:end]

    def stmt_execute(self) -> bytes:
        return self.data[_COMMAND_OFFSET + 1 :]

    def stmt_close(self) -> bytes:
        return self.data[_COMMAND_OFFSET + 1 :]

    def packet_type(self) -> PacketType:
        command = self.command_id()
        try:
            return PacketType(command)
        except ValueError:
            raise global_error(
                UNKNOWN_ERROR,
                "Unknown error, The packet type is not supported, "
                f"packet type: {command}.",
            ) from None


__all__ = ["RequestPayload", "MysqlError"]