"""Column definitions sent in result sets and COM_FIELD_LIST responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .codec import arrow_type_to_mysql_type
from .response import ResponsePayload
from .types import ColumnFlags, DataType, MysqlType

CATALOG_NAME = "def"


@dataclass(frozen=True)
class Field:
    """A named, typed column of a result schema."""

    name: str
    data_type: DataType
    nullable: bool = True


def _dump_flag(column_type: MysqlType, flags: int) -> int:
    if column_type is MysqlType.SET:
        return flags | ColumnFlags.SET_FLAG
    if column_type is MysqlType.ENUM:
        return flags | ColumnFlags.ENUM_FLAG
    if flags & ColumnFlags.BINARY_FLAG:
        return flags | ColumnFlags.NOT_NULL_FLAG
    return flags


def _dump_column_type(column_type: MysqlType) -> int:
    if column_type in (MysqlType.SET, MysqlType.ENUM):
        return int(MysqlType.STRING)
    return int(column_type)


def _flags_for(nullable: bool) -> ColumnFlags:
    return ColumnFlags.NO_DEFAULT_VALUE_FLAG if nullable else ColumnFlags.NOT_NULL_FLAG


@dataclass
class Column:
    """A column definition as described by the protocol."""

    schema: str
    table: str
    org_table: str
    name: str
    org_name: str
    character_set: int
    column_length: int
    column_type: MysqlType
    flags: ColumnFlags
    decimals: int
    default_value: Optional[str] = None

    def to_response_payload(self, com_field_list: bool) -> ResponsePayload:
        """Encode the column definition packet."""
        payload = ResponsePayload()
        for text in (
            CATALOG_NAME,
            self.schema,
            self.table,
            self.org_table,
            self.name,
            self.org_name,
        ):
            payload.dump_length_encoded_string(text.encode("utf-8"))
        payload.append(0x0C)
        payload.dump_uint16(self.character_set)
        payload.dump_uint32(self.column_length)
        payload.append(_dump_column_type(self.column_type))
        payload.dump_uint16(_dump_flag(self.column_type, int(self.flags)))
        payload.append(self.decimals)
        payload.extend(b"\x00\x00")

        if com_field_list:
            if self.default_value is None:
                payload.dump_uint64(1)
                payload.append(0xFB)
            else:
                default = self.default_value.encode("utf-8")
                payload.dump_uint64(len(default))
                payload.extend(default)

        return payload


def column_from_field(field: Field) -> Column:
    """Column definition for a field of a query result."""
    return Column(
        schema="",
        table="SCHEMATA",
        org_table="schemata",
        name=field.name,
        org_name=field.name,
        character_set=33,
        column_length=15,
        column_type=arrow_type_to_mysql_type(field.data_type),
        flags=_flags_for(field.nullable),
        decimals=8,
    )


def column_from_definition(
    schema_name: object,
    table_name: object,
    column_name: str,
    data_type: DataType,
    nullable: bool,
) -> Column:
    """Column definition for a column of a stored table."""
    return Column(
        schema=str(schema_name),
        table=str(table_name),
        org_table=str(table_name),
        name=column_name,
        org_name=column_name,
        character_set=46,
        column_length=100000,
        column_type=arrow_type_to_mysql_type(data_type),
        flags=_flags_for(nullable),
        decimals=8,
    )