"""Choice of the key range to scan for a table read with filters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Sequence, Union

from .keys import ScanKey, create_scan_index, create_scan_rowid
from .ranges import (
    PointKind,
    Range,
    TableIndex,
    create_column_filter,
    create_column_range,
    get_table_index_list,
)


class ScanOrder(Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass
class FullTableScan:
    """Scan over every row id of a table."""

    start: ScanKey
    end: ScanKey


@dataclass
class IndexScan:
    """Scan over a range of an index."""

    index_name: str
    order: ScanOrder
    start: ScanKey
    end: ScanKey


SeekType = Union[FullTableScan, IndexScan]


def get_seek_prefix_default(full_table_name: Any) -> FullTableScan:
    """Full scan of the table's row ids."""
    return FullTableScan(
        start=create_scan_rowid(full_table_name),
        end=create_scan_rowid(full_table_name),
    )


def get_seek_prefix_with_index(
    full_table_name: Any,
    store_ids: Mapping[Any, int],
    table_index_list: Sequence[TableIndex],
) -> SeekType:
    """Scan the index matching the most columns, preferring the higher level on ties."""
    if not table_index_list:
        return get_seek_prefix_default(full_table_name)

    best = table_index_list[0]
    for candidate in table_index_list:
        more_columns = len(candidate.column_range_list) > len(best.column_range_list)
        same_columns = len(candidate.column_range_list) == len(best.column_range_list)
        if more_columns or (same_columns and candidate.level > best.level):
            best = candidate

    start, end = create_scan_index(full_table_name, best, store_ids)
    order = ScanOrder.DESC if start.key < end.key else ScanOrder.ASC
    return IndexScan(index_name=best.index_name, order=order, start=start, end=end)


def get_seek_prefix(
    full_table_name: Any,
    constraints: Iterable[Any],
    store_ids: Mapping[Any, int],
    filters: Iterable[Any],
) -> SeekType:
    """Work out the scan for a table read restricted by the given filters."""
    column_ranges: Dict[str, Range] = {}
    for column_name, exprs in create_column_filter(filters).items():
        column_range = create_column_range(exprs)
        if (
            column_range.start.kind is PointKind.INFINITY
            and column_range.end.kind is PointKind.INFINITY
        ):
            continue
        column_ranges[column_name] = column_range

    table_index_list = get_table_index_list(constraints, column_ranges)
    return get_seek_prefix_with_index(full_table_name, store_ids, table_index_list)