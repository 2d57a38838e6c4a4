import pytest

from sparrowwire.types import ColumnFlags, DataType, MysqlType, StatusFlags, TypeCode


@pytest.mark.parametrize("member", list(MysqlType))
def test_mysql_type_round_trips_through_int(member):
    assert MysqlType(int(member)) is member


def test_mysql_type_from_wire_byte():
    assert MysqlType(0xFE) is MysqlType.STRING
    assert MysqlType(0xFD) is MysqlType.VAR_STRING
    assert MysqlType(0x08) is MysqlType.LONGLONG


def test_unknown_mysql_type_raises():
    with pytest.raises(ValueError):
        MysqlType(0x20)


@pytest.mark.parametrize("flags", [ColumnFlags, StatusFlags])
def test_flags_are_distinct_single_bits(flags):
    values = [int(member) for member in flags]
    assert len(set(values)) == len(values)
    assert all(value & (value - 1) == 0 for value in values)


def test_column_flags_combine():
    combined = ColumnFlags(1 | 128)
    assert combined == ColumnFlags.NOT_NULL_FLAG | ColumnFlags.BINARY_FLAG
    assert ColumnFlags.BINARY_FLAG in combined
    assert ColumnFlags.NOT_NULL_FLAG in combined
    assert ColumnFlags.SET_FLAG not in combined
    assert int(combined) == 129


def test_type_codes_agree_with_mysql_types():
    assert MysqlType(int(TypeCode.INT32)) is MysqlType.LONG
    assert MysqlType(int(TypeCode.INT64)) is MysqlType.LONGLONG
    assert MysqlType(int(TypeCode.VARCHAR_2)) is MysqlType.VAR_STRING
    assert MysqlType(int(TypeCode.FLOAT64_2)) is MysqlType.NEWDECIMAL
    assert MysqlType(int(TypeCode.NULL)) is MysqlType.NULL


def test_data_type_lookup_by_name():
    assert DataType("Utf8") is DataType.UTF8
    assert DataType("Int64") is DataType.INT64
    with pytest.raises(ValueError):
        DataType("Decimal")