"""Builders for the server packets of the MySQL protocol."""

from __future__ import annotations

from typing import Iterable

from .response import ResponsePayload, ScalarValue
from .types import StatusFlags

SERVER_VERSION = b"8.0.25"
AUTH_PLUGIN_NAME = b"mysql_native_password"
_AUTH_DATA_PART_1 = bytes(range(0x01, 0x09))
_AUTH_DATA_PART_2 = bytes(range(0x09, 0x15))
_CONNECTION_ID = bytes([0x0B, 0x00, 0x00, 0x00])
# Low bytes of the default capability words.
_CAPABILITY_LOWER = bytes([181211 & 0xFF, 7078 & 0xFF])
_CAPABILITY_UPPER = bytes([27, 0])
_CHARSET = 46


def com_stmt_prepare_first_message(
    statement_id: int, num_columns: int, num_params: int, warning_count: int
) -> ResponsePayload:
    """First packet of a COM_STMT_PREPARE response."""
    payload = ResponsePayload()
    payload.append(0x00)
    payload.dump_uint32(statement_id)
    payload.dump_uint16(num_columns)
    payload.dump_uint16(num_params)
    payload.append(0x00)
    payload.dump_uint16(warning_count)
    return payload


def row_message(columns: Iterable[ScalarValue]) -> ResponsePayload:
    """One text-protocol result row."""
    payload = ResponsePayload()
    payload.dump_text_row(columns)
    return payload


def column_count_message(count: int) -> ResponsePayload:
    payload = ResponsePayload()
    payload.dump_length_encoded_int(count)
    return payload


def ok_message(
    affect_rows: int,
    last_insert_id: int,
    status_flags: StatusFlags,
    warning_count: int,
    msg: str,
) -> ResponsePayload:
    """An OK packet."""
    payload = ResponsePayload()
    payload.append(0x00)
    payload.dump_length_encoded_int(affect_rows)
    payload.dump_length_encoded_int(last_insert_id)
    payload.dump_uint16(int(status_flags))
    payload.dump_uint16(warning_count)
    payload.dump_length_encoded_string(msg.encode("utf-8"))
    return payload


def error_message(code: int, state: str, msg: str) -> ResponsePayload:
    """An ERR packet."""
    payload = ResponsePayload()
    payload.append(0xFF)
    payload.dump_uint16(code)
    payload.extend(b"#")
    payload.extend(state.encode("utf-8"))
    payload.extend(msg.encode("utf-8"))
    return payload


def eof_message(warning_count: int, status: int) -> ResponsePayload:
    """An EOF packet."""
    payload = ResponsePayload()
    payload.append(0xFE)
    payload.dump_uint16(warning_count)
    payload.dump_uint16(status)
    return payload


def handshake_auth_switch_request() -> ResponsePayload:
    """Auth switch request asking for mysql_native_password."""
    payload = ResponsePayload()
    payload.append(0xFE)
    payload.extend(AUTH_PLUGIN_NAME)
    payload.append(0x00)
    payload.extend(_AUTH_DATA_PART_1 + _AUTH_DATA_PART_2)
    payload.append(0x00)
    return payload


def handshake_message() -> ResponsePayload:
    """Initial handshake (protocol version 10) sent on connect."""
    payload = ResponsePayload()
    payload.append(10)
    payload.extend(SERVER_VERSION)
    payload.append(0)
    payload.extend(_CONNECTION_ID)
    payload.extend(_AUTH_DATA_PART_1)
    payload.append(0)
    payload.extend(_CAPABILITY_LOWER)
    payload.append(_CHARSET)
    payload.dump_uint16(int(StatusFlags.SERVER_STATUS_AUTOCOMMIT))
    payload.extend(_CAPABILITY_UPPER)
    payload.append(0x15)
    payload.extend(bytes(10))
    payload.extend(_AUTH_DATA_PART_2)
    payload.append(0)
    payload.extend(AUTH_PLUGIN_NAME)
    payload.append(0)
    return payload