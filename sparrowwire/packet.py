"""Packet framing and command identifiers."""

from __future__ import annotations

from enum import IntEnum
from typing import Union

from .response import ResponsePayload


class PacketType(IntEnum):
    """Command byte of a client request packet."""

    COM_SLEEP = 0x00
    COM_QUIT = 0x01
    COM_INIT_DB = 0x02
    COM_QUERY = 0x03
    COM_FIELD_LIST = 0x04
    COM_CREATE_DB = 0x05
    COM_DROP_DB = 0x06
    COM_REFRESH = 0x07
    COM_SHUTDOWN = 0x08
    COM_STATISTICS = 0x09
    COM_PROCESS_INFO = 0x0A
    COM_CONNECT = 0x0B
    COM_PROCESS_KILL = 0x0C
    COM_DEBUG = 0x0D
    COM_PING = 0x0E
    COM_TIME = 0x0F
    COM_DELAYED_INSERT = 0x10
    COM_CHANGE_USER = 0x11
    COM_BINLOG_DUMP = 0x12
    COM_TABLE_DUMP = 0x13
    COM_CONNECT_OUT = 0x14
    COM_REGISTER_SLAVE = 0x15
    COM_STMT_PREPARE = 0x16
    COM_STMT_EXECUTE = 0x17
    COM_STMT_SEND_LONG_DATA = 0x18
    COM_STMT_CLOSE = 0x19
    COM_STMT_RESET = 0x1A
    COM_DAEMON = 0x1D
    COM_BINLOG_DUMP_GTID = 0x1E
    COM_RESET_CONNECTION = 0x1F


class PacketSequence:
    """Tracks the sequence id and frames payloads with the packet header."""

    def __init__(self) -> None:
        self.sequence_id = 0

    def increase(self) -> None:
        self.sequence_id = (self.sequence_id + 1) & 0xFF

    def reset(self) -> None:
        self.sequence_id = 0

    def frame(self, payload: Union[ResponsePayload, bytes, bytearray]) -> bytes:
        """Prefix the payload with its 3-byte length and the current sequence id."""
        body = bytes(payload)
        header = (len(body) & 0xFFFFFF).to_bytes(3, "little") + bytes([self.sequence_id])
        return header + body