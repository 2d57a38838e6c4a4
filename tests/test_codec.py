import struct

import pytest

from sparrowwire.codec import (
    LiteralKind,
    SqlLiteral,
    arrow_type_to_mysql_type,
    length_encoded_int_size,
    parse_length_encoded_bytes,
    parse_length_encoded_int,
    parse_stmt_execute_args,
)
from sparrowwire.errors import CR_MALFORMED_PACKET, MysqlError
from sparrowwire.response import ResponsePayload
from sparrowwire.types import DataType, MysqlType, TypeCode


def _lenenc_string(data: bytes) -> bytes:
    payload = ResponsePayload()
    payload.dump_length_encoded_string(data)
    return bytes(payload)


@pytest.mark.parametrize(
    "n, size",
    [(0, 1), (250, 1), (251, 3), (0xFFFF, 3), (0x10000, 4), (0xFFFFFF, 4), (0x1000000, 9)],
)
def test_length_encoded_int_size(n, size):
    assert length_encoded_int_size(n) == size


@pytest.mark.parametrize("n", [0, 7, 250, 251, 0xFFFF, 0x10000, 0xFFFFFF, 0x1000000, 2**64 - 1])
def test_length_encoded_int_round_trip(n):
    payload = ResponsePayload()
    payload.dump_length_encoded_int(n)
    data = bytes(payload)
    assert parse_length_encoded_int(data) == (length_encoded_int_size(n), n)
    assert len(data) == length_encoded_int_size(n)


def test_parse_length_encoded_int_empty():
    assert parse_length_encoded_int(b"") is None


def test_parse_length_encoded_int_truncated():
    assert parse_length_encoded_int(b"\xfc\x01") is None


def test_parse_length_encoded_bytes_round_trip():
    content = b"hello world" * 30
    data = _lenenc_string(content) + b"trailing"
    start, parsed = parse_length_encoded_bytes(data)
    assert parsed == content
    assert start == length_encoded_int_size(len(content))


def test_parse_length_encoded_bytes_too_short():
    data = _lenenc_string(b"abcdef")[:-1]
    assert parse_length_encoded_bytes(data) is None


def test_stmt_execute_int32_signed_and_unsigned():
    types = bytes([TypeCode.INT32, 0, TypeCode.INT32, 0x80])
    values = struct.pack("<iI", -5, 4000000000)
    result = parse_stmt_execute_args(b"\x00", types, values)
    assert result == [
        SqlLiteral(LiteralKind.NUMBER, "-5"),
        SqlLiteral(LiteralKind.NUMBER, "4000000000"),
    ]


def test_stmt_execute_int64():
    types = bytes([TypeCode.INT64, 0, TypeCode.INT64, 0x80])
    values = struct.pack("<qQ", -1, 2**64 - 1)
    result = parse_stmt_execute_args(b"\x00", types, values)
    assert [item.value for item in result] == ["-1", str(2**64 - 1)]


def test_stmt_execute_strings():
    types = bytes([TypeCode.VARCHAR_2, 0, TypeCode.FLOAT64_2, 0])
    values = _lenenc_string(b"abc") + _lenenc_string(b"1.5")
    result = parse_stmt_execute_args(b"\x00", types, values)
    assert result == [
        SqlLiteral(LiteralKind.SINGLE_QUOTED_STRING, "abc"),
        SqlLiteral(LiteralKind.SINGLE_QUOTED_STRING, "1.5"),
    ]


def test_stmt_execute_null_bitmap_skips_parameter():
    types = bytes([TypeCode.INT32, 0, TypeCode.INT32, 0])
    values = struct.pack("<i", 42)
    result = parse_stmt_execute_args(b"\x01", types, values)
    assert result == [SqlLiteral(LiteralKind.NUMBER, "42")]


def test_stmt_execute_null_type():
    types = bytes([TypeCode.NULL, 0, TypeCode.NULL, 0])
    result = parse_stmt_execute_args(b"\x00", types, b"")
    assert result == [SqlLiteral(LiteralKind.NULL), SqlLiteral(LiteralKind.NULL)]
    assert str(result[0]) == "NULL"


def test_stmt_execute_unsupported_type():
    types = bytes([TypeCode.INT8, 0, TypeCode.INT8, 0])
    with pytest.raises(MysqlError) as info:
        parse_stmt_execute_args(b"\x00", types, b"\x01\x02")
    assert info.value.error_number == CR_MALFORMED_PACKET


def test_stmt_execute_malformed_string():
    types = bytes([TypeCode.VARCHAR_2, 0, TypeCode.VARCHAR_2, 0])
    with pytest.raises(MysqlError) as info:
        parse_stmt_execute_args(b"\x00", types, b"")
    assert info.value.error_number == CR_MALFORMED_PACKET


def test_single_quoted_literal_str_escapes_quotes():
    literal = SqlLiteral(LiteralKind.SINGLE_QUOTED_STRING, "it's")
    assert str(literal) == "'it''s'"


@pytest.mark.parametrize(
    "data_type, expected",
    [
        (DataType.INT8, MysqlType.TINY),
        (DataType.INT16, MysqlType.SHORT),
        (DataType.INT32, MysqlType.LONG),
        (DataType.INT64, MysqlType.LONGLONG),
        (DataType.UTF8, MysqlType.STRING),
        (DataType.FLOAT64, MysqlType.STRING),
    ],
)
def test_arrow_type_to_mysql_type(data_type, expected):
    assert arrow_type_to_mysql_type(data_type) is expected