"""Key-value store engines and helpers for lining up row columns and values."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Hashable, Iterator, List, Mapping, Optional, Sequence, Tuple

from .errors import UNKNOWN_ERROR, global_error


class StoreEngine(ABC):
    """A key-value store holding schemas, rows and index entries."""

    @abstractmethod
    def delete_key(self, key: str) -> None:
        """Remove a key; removing a missing key is not an error."""

    @abstractmethod
    def get_key(self, key: str) -> Optional[bytes]:
        """Value stored under a key, or ``None``."""

    @abstractmethod
    def put_key(self, key: str, value: bytes) -> None:
        """Store a value under a key, replacing any previous value."""


class MemoryStoreEngine(StoreEngine):
    """A store engine kept in memory, ordered by key on scans."""

    def __init__(self) -> None:
        self._entries: Dict[str, bytes] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def delete_key(self, key: str) -> None:
        self._entries.pop(key, None)

    def get_key(self, key: str) -> Optional[bytes]:
        return self._entries.get(key)

    def put_key(self, key: str, value: bytes) -> None:
        self._entries[key] = bytes(value)

    def scan_prefix(self, prefix: str) -> Iterator[Tuple[str, bytes]]:
        """Entries whose key starts with the prefix, in byte order of their keys."""
        matching = [key for key in self._entries if key.startswith(prefix)]
        for key in sorted(matching, key=lambda k: k.encode("utf-8")):
            yield key, self._entries[key]


def build_row_column_indexes(row_column_names: Sequence[str]) -> Dict[str, int]:
    """Map each column name to its position; a repeated name keeps the last one."""
    return {name: index for index, name in enumerate(row_column_names)}


def find_constraint_row_indexes(
    constraint_keys: Sequence[str], column_names: Sequence[str]
) -> List[int]:
    """Positions within the row of the columns named by a constraint."""
    column_indexes = build_row_column_indexes(column_names)
    indexes: List[int] = []
    for column_name in constraint_keys:
        if column_name not in column_indexes:
            raise global_error(
                UNKNOWN_ERROR,
                f"Unknown error. The column `{column_name}` not found in column names.",
            )
        indexes.append(column_indexes[column_name])
    return indexes


def build_column_serial_number_value(
    column_names: Sequence[Hashable],
    serial_numbers: Mapping[Hashable, int],
    values: Mapping[Hashable, Any],
) -> List[Tuple[int, Any]]:
    """Pair the serial number of each column with its value, in column order."""
    pairs: List[Tuple[int, Any]] = []
    for column_name in column_names:
        if column_name not in serial_numbers:
            raise global_error(
                UNKNOWN_ERROR,
                f"Unknown error. The column `{column_name}` serial number not found "
                "in input_column_name_serial_number.",
            )
        if column_name not in values:
            raise global_error(
                UNKNOWN_ERROR,
                f"Unknown error. The column value `{column_name}` not found "
                "in input input_column_name_value.",
            )
        pairs.append((serial_numbers[column_name], values[column_name]))
    return pairs


def build_column_name_value(
    column_names: Sequence[Hashable], column_values: Sequence[Any]
) -> Dict[Hashable, Any]:
    """Map each column name to the value at the same position."""
    if len(column_values) < len(column_names):
        missing = column_names[len(column_values)]
        raise global_error(
            UNKNOWN_ERROR,
            f"Unknown error. The column value `{missing}` not found in input column_values.",
        )
    return dict(zip(column_names, column_values))