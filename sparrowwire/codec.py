"""Length-encoded integers and COM_STMT_EXECUTE parameter decoding."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .errors import CR_MALFORMED_PACKET, MysqlError, global_error
from .types import DataType, MysqlType, TypeCode

logger = logging.getLogger(__name__)

# The number of parameters decoded from a COM_STMT_EXECUTE request.
_NUM_PARAMS = 2


class LiteralKind(Enum):
    """Kind of an SQL literal decoded from a statement parameter."""

    NULL = "null"
    NUMBER = "number"
    SINGLE_QUOTED_STRING = "single_quoted_string"


@dataclass(frozen=True)
class SqlLiteral:
    """An SQL literal value bound to a prepared statement parameter."""

    kind: LiteralKind
    value: Optional[str] = None

    def __str__(self) -> str:
        if self.kind is LiteralKind.NULL:
            return "NULL"
        if self.kind is LiteralKind.NUMBER:
            return str(self.value)
        return "'" + str(self.value).replace("'", "''") + "'"


def _malformed(message: str = "malformed packet error") -> MysqlError:
    return global_error(CR_MALFORMED_PACKET, message)


def length_encoded_int_size(n: int) -> int:
    """Number of bytes a length-encoded integer takes on the wire."""
    if n <= 250:
        return 1
    if n <= 0xFFFF:
        return 3
    if n <= 0xFFFFFF:
        return 4
    return 9


def parse_length_encoded_int(data: bytes) -> Optional[Tuple[int, int]]:
    """Decode a length-encoded integer.

    Returns ``(header_size, value)`` or ``None`` if the data is empty or truncated.
    """
    if not data:
        return None
    first = data[0]
    if first == 0xFC:
        size = 2
    elif first == 0xFD:
        size = 3
    elif first == 0xFE:
        size = 8
    else:
        return 1, first
    if len(data) < size + 1:
        return None
    return size + 1, int.from_bytes(data[1 : size + 1], "little")


def parse_length_encoded_bytes(data: bytes) -> Optional[Tuple[int, bytes]]:
    """Decode a length-encoded string.

    Returns ``(header_size, content)`` or ``None`` if the data is too short.
    """
    parsed = parse_length_encoded_int(data)
    if parsed is None:
        return None
    start, length = parsed
    end = start + length
    if len(data) < end:
        return None
    return start, bytes(data[start:end])


def _read_fixed(values: bytes, pos: int, size: int) -> int:
    chunk = values[pos : pos + size]
    if len(chunk) < size:
        raise _malformed()
    return int.from_bytes(chunk, "little")


def _to_signed(value: int, bits: int) -> int:
    return value - (1 << bits) if value >= 1 << (bits - 1) else value


def parse_stmt_execute_args(
    null_bitmap: bytes, param_types: bytes, param_values: bytes
) -> List[SqlLiteral]:
    """Decode the bound parameter values of a COM_STMT_EXECUTE request."""
    values: List[SqlLiteral] = []
    value_pos = 0

    for index in range(_NUM_PARAMS):
        type_pos = index * 2
        if len(param_types) < type_pos + 2 or len(null_bitmap) <= index // 8:
            raise _malformed()
        mysql_type = param_types[type_pos]
        type_flag = param_types[type_pos + 1]

        if null_bitmap[index // 8] & (1 << (index % 8)):
            continue

        unsigned = bool(type_flag & 0x80)

        if mysql_type == TypeCode.NULL:
            value = SqlLiteral(LiteralKind.NULL)
        elif mysql_type == TypeCode.INT32:
            raw = _read_fixed(param_values, value_pos, 4)
            value_pos += 4
            number = raw if unsigned else _to_signed(raw, 32)
            value = SqlLiteral(LiteralKind.NUMBER, str(number))
        elif mysql_type == TypeCode.INT64:
            raw = _read_fixed(param_values, value_pos, 8)
            value_pos += 8
            number = raw if unsigned else _to_signed(raw, 64)
            value = SqlLiteral(LiteralKind.NUMBER, str(number))
        elif mysql_type in (TypeCode.VARCHAR_2, TypeCode.FLOAT64_2):
            parsed = parse_length_encoded_bytes(param_values[value_pos:])
            if parsed is None:
                raise _malformed()
            start, content = parsed
            try:
                text = content.decode("utf-8")
            except UnicodeDecodeError as exc:
                logger.error("Unknown error, Error reading REQUEST, error: %r", exc)
                break
            value_pos += start + len(content)
            value = SqlLiteral(LiteralKind.SINGLE_QUOTED_STRING, text)
        else:
            raise _malformed(f"unsupported mysql type: {mysql_type}")

        values.append(value)

    return values


def arrow_type_to_mysql_type(data_type: DataType) -> MysqlType:
    """Map a logical column type to the MySQL type sent to clients."""
    return {
        DataType.INT8: MysqlType.TINY,
        DataType.INT16: MysqlType.SHORT,
        DataType.INT32: MysqlType.LONG,
        DataType.INT64: MysqlType.LONGLONG,
        DataType.UTF8: MysqlType.STRING,
    }.get(data_type, MysqlType.STRING)