"""Layout of the keys under which schemas, rows and indexes are stored."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from .errors import UNKNOWN_ERROR, global_error
from .ranges import PointKind, PointType, RangeNotNullValue, RangePoint, TableIndex

# Flipping the sign bit makes signed integers sort in unsigned order.
SIGN_MASK = 1 << 63
_U64_MASK = (1 << 64) - 1


def _encode(text: str) -> bytes:
    return text.encode("utf-8")


@dataclass
class ScanKey:
    """A key prefix used as one end of a scan, with the bound's openness."""

    key: str
    point_type: PointType = PointType.CLOSED

    def add_key(self, key: str) -> None:
        """Append a key segment followed by a separator."""
        self.key += key + "/"

    def change_interval(self, point_type: PointType) -> None:
        self.point_type = point_type


def scan_column_name(schema_name: str) -> bytes:
    return _encode(f"/Schema/ColumnName/ToIndex/{schema_name}")


def create_current_serial_number(full_table_name: Any) -> str:
    return f"/Schema/ColumnIndex/Current/{full_table_name}"


def create_column_index_to_name(schema_name: str, column_index: int) -> bytes:
    return _encode(f"/Schema/ColumnIndex/ToName/{schema_name}/{column_index}")


def create_column_id(full_table_name: Any, column_name: Any) -> str:
    return f"/Schema/ColumnName/ToIndex/{full_table_name}/{column_name}"


def create_database_key(schema_name: str) -> bytes:
    return _encode(f"/System/database/name/{schema_name}")


def create_table_key(schema_name: str) -> bytes:
    return _encode(f"/System/table/name/{schema_name}")


def create_record_rowid(full_table_name: Any, uuid: str) -> str:
    return f"/Table/rowid/{full_table_name}/{uuid}"


def create_column_rowid_key(full_table_name: Any, uuid: str) -> str:
    return f"/Table/rowid/{full_table_name}/{uuid}"


def create_column_key(full_table_name: Any, store_id: int, uuid: str) -> str:
    return f"/Table/index/column/{full_table_name}/{store_id}/{uuid}"


def parse_record_rowid(key: str) -> str:
    """Return the sixth segment of a row id key."""
    parts = key.split("/")
    if len(parts) < 6:
        raise ValueError(f"row id not found: {key!r}")
    return parts[5]


def scan_record_rowid(full_table_name: Any) -> str:
    return f"/Table/rowid/{full_table_name}/"


def _index_value_segment(value: Any) -> str:
    if value is None:
        return "0/"
    if isinstance(value, bool):
        raise global_error(
            UNKNOWN_ERROR, f"Unsupported convert scalar value to string: {value!r}"
        )
    if isinstance(value, int):
        return f"1/{(value & _U64_MASK) ^ SIGN_MASK}/"
    if isinstance(value, str):
        return f"1/{value}/"
    raise global_error(
        UNKNOWN_ERROR, f"Unsupported convert scalar value to string: {value!r}"
    )


def create_table_index_key(
    full_table_name: Any,
    index_name: str,
    column_names: Iterable[Any],
    store_ids: Mapping[Any, int],
    column_values: Mapping[Any, Any],
) -> str:
    """Key of one index entry for a row with the given column values."""
    parts: List[str] = [f"/Table/index/key/{full_table_name}/{index_name}/"]
    for column_name in column_names:
        if column_name not in store_ids:
            raise global_error(
                UNKNOWN_ERROR, f"Unknown error. The column {column_name} not found."
            )
        if column_name not in column_values:
            raise global_error(
                UNKNOWN_ERROR,
                f"Unknown error. The column value {column_name} not found.",
            )
        parts.append(f"{store_ids[column_name]}/")
        parts.append(_index_value_segment(column_values[column_name]))
    return "".join(parts)


def create_scan_rowid(full_table_name: Any) -> ScanKey:
    scan_key = ScanKey("/Table/rowid/")
    scan_key.add_key(str(full_table_name))
    return scan_key


def _apply_point(scan_key: ScanKey, point: RangePoint) -> None:
    if point.kind is PointKind.INFINITY:
        return
    if point.kind is PointKind.NULL:
        scan_key.add_key("0")
    elif point.kind is PointKind.NOT_NULL:
        scan_key.add_key("1")
    else:
        scan_key.add_key("1")
        scan_key.add_key(str(point.value))
        scan_key.change_interval(point.point_type)


def create_scan_index(
    full_table_name: Any, table_index: TableIndex, store_ids: Mapping[Any, int]
) -> Tuple[ScanKey, ScanKey]:
    """Start and end keys of a scan over an index for the index's column ranges."""
    start = ScanKey("/Table/index/key/")
    end = ScanKey("/Table/index/key/")
    for scan_key in (start, end):
        scan_key.add_key(str(full_table_name))
        scan_key.add_key(table_index.index_name)

    for column_range in table_index.column_range_list:
        if column_range.column_name not in store_ids:
            raise global_error(
                UNKNOWN_ERROR,
                f"Unknown error. The column {column_range.column_name} not found.",
            )
        store_id = str(store_ids[column_range.column_name])
        start.add_key(store_id)
        end.add_key(store_id)
        _apply_point(start, column_range.range.start)
        _apply_point(end, column_range.range.end)

    return start, end


def scan_index(
    schema_name: str,
    index_name: str,
    column_index_values: Iterable[Tuple[int, Optional[RangeNotNullValue]]],
) -> Tuple[str, str]:
    """Start and end keys of an index scan.

    A value of ``None`` restricts the column to NULL; a ``RangeNotNullValue``
    gives its textual bounds.
    """
    start = f"/Table/index/key/{schema_name}/{index_name}/"
    end = start
    for column_index, range_value in column_index_values:
        start += f"{column_index}/"
        end += f"{column_index}/"
        if range_value is None:
            start += "0/"
            end += "0/"
            continue
        if range_value.start is not None:
            start += f"1/{range_value.start[0]}/"
        if range_value.end is not None:
            end += f"1/{range_value.end[0]}/"
    return start, end


def scan_record_primary(schema_name: str) -> bytes:
    return _encode(f"/Table/primary/key/{schema_name}")


def create_record_unique(
    schema_name: str, column_indexes: Iterable[int], column_values: Sequence[str]
) -> bytes:
    """Unique key built from the values at the given column positions."""
    key = f"/Table/unique/{schema_name}"
    for index in column_indexes:
        key += f"/{index}/{column_values[index]}"
    return _encode(key)


def scan_record_unique(schema_name: str, column_pairs: Iterable[Tuple[int, Any]]) -> bytes:
    key = f"/Table/unique/{schema_name}"
    for column_index, column_value in column_pairs:
        key += f"/{column_index}/{column_value}"
    return _encode(key)


def parse_record_column(key: bytes) -> Tuple[int, int]:
    """Read the two numeric segments at positions six and seven of a column key."""
    parts = bytes(key).decode("utf-8").split("/")
    if len(parts) < 8:
        raise ValueError(f"malformed column key: {key!r}")
    return int(parts[6]), int(parts[7])


def scan_record_column(schema_name: str, col_index: int, row_index: int) -> bytes:
    """Column key prefix; negative indexes are left out."""
    key = f"/Table/index/column/{schema_name}"
    if col_index > -1:
        key += f"/{col_index}"
    if row_index > -1:
        key += f"/{row_index}"
    return _encode(key)