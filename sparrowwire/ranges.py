"""Column value ranges derived from filter expressions, and index matching."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

INDEX_LEVEL_PRIMARY = 0
INDEX_LEVEL_UNIQUE = 1


class PointType(Enum):
    """Whether a range bound includes its value."""

    OPEN = "open"
    CLOSED = "closed"


class PointKind(Enum):
    """Kind of a range bound."""

    INFINITY = "infinity"
    NULL = "null"
    NOT_NULL = "not_null"
    NOT_NULL_VALUE = "not_null_value"


@dataclass(frozen=True)
class RangePoint:
    """One end of a column range."""

    kind: PointKind
    value: Any = None
    point_type: Optional[PointType] = None

    @classmethod
    def infinity(cls) -> "RangePoint":
        return cls(PointKind.INFINITY)

    @classmethod
    def null(cls) -> "RangePoint":
        return cls(PointKind.NULL)

    @classmethod
    def not_null(cls) -> "RangePoint":
        return cls(PointKind.NOT_NULL)

    @classmethod
    def not_null_value(cls, value: Any, point_type: PointType) -> "RangePoint":
        return cls(PointKind.NOT_NULL_VALUE, value, point_type)


@dataclass(frozen=True)
class Range:
    """A range of column values between two bounds."""

    start: RangePoint = field(default_factory=RangePoint.infinity)
    end: RangePoint = field(default_factory=RangePoint.infinity)


@dataclass(frozen=True)
class ColumnRange:
    """A range restricting one column."""

    column_name: str
    range: Range


@dataclass(frozen=True)
class TableIndex:
    """An index usable for a scan, with the ranges of its leading columns."""

    index_name: str
    level: int
    column_range_list: Tuple[ColumnRange, ...]

    def __init__(self, index_name: str, level: int, column_range_list: Iterable[ColumnRange]) -> None:
        object.__setattr__(self, "index_name", index_name)
        object.__setattr__(self, "level", level)
        object.__setattr__(self, "column_range_list", tuple(column_range_list))


@dataclass(frozen=True)
class RangeNotNullValue:
    """Textual start and end bounds of a non-null value range."""

    start: Optional[Tuple[str, PointType]] = None
    end: Optional[Tuple[str, PointType]] = None


class Operator(Enum):
    """Binary operator of a filter expression."""

    EQ = "="
    NOT_EQ = "!="
    LT = "<"
    LT_EQ = "<="
    GT = ">"
    GT_EQ = ">="
    AND = "AND"
    OR = "OR"
    LIKE = "LIKE"


@dataclass(frozen=True)
class ColumnRef:
    """Reference to a column by name."""

    name: str


@dataclass(frozen=True)
class LiteralExpr:
    """A literal scalar value."""

    value: Any


@dataclass(frozen=True)
class BinaryExpr:
    """``left op right``."""

    left: Any
    op: Operator
    right: Any


@dataclass(frozen=True)
class IsNull:
    """``expr IS NULL``."""

    expr: Any


@dataclass(frozen=True)
class IsNotNull:
    """``expr IS NOT NULL``."""

    expr: Any


@dataclass(frozen=True)
class UniqueConstraint:
    """A primary key or unique constraint of a table."""

    name: Optional[str]
    columns: Tuple[Any, ...]
    is_primary: bool = False

    def __init__(self, name: Optional[str], columns: Iterable[Any], is_primary: bool = False) -> None:
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "columns", tuple(columns))
        object.__setattr__(self, "is_primary", is_primary)


def _compare(left: Any, right: Any) -> Optional[int]:
    """Order two scalar values; ``None`` when they are not comparable."""
    if left is None and right is None:
        return 0
    if left is None:
        return -1
    if right is None:
        return 1
    if type(left) is not type(right) or isinstance(left, bool):
        return None
    try:
        if left < right:
            return -1
        if left > right:
            return 1
        if left == right:
            return 0
    except TypeError:
        return None
    return None


_OPERATOR_RANGES = {
    Operator.GT_EQ: lambda v: Range(RangePoint.not_null_value(v, PointType.CLOSED), RangePoint.infinity()),
    Operator.GT: lambda v: Range(RangePoint.not_null_value(v, PointType.OPEN), RangePoint.infinity()),
    Operator.EQ: lambda v: Range(
        RangePoint.not_null_value(v, PointType.CLOSED),
        RangePoint.not_null_value(v, PointType.CLOSED),
    ),
    Operator.LT: lambda v: Range(RangePoint.infinity(), RangePoint.not_null_value(v, PointType.OPEN)),
    Operator.LT_EQ: lambda v: Range(RangePoint.infinity(), RangePoint.not_null_value(v, PointType.CLOSED)),
}


def _expr_range(expr: Any) -> Optional[Range]:
    if isinstance(expr, BinaryExpr):
        if not isinstance(expr.right, LiteralExpr):
            return None
        build = _OPERATOR_RANGES.get(expr.op)
        return build(expr.right.value) if build else None
    if isinstance(expr, (IsNotNull, IsNull)):
        return Range(RangePoint.not_null(), RangePoint.not_null())
    return None


def _merge_start(acc: RangePoint, new: RangePoint) -> RangePoint:
    if new.kind is PointKind.INFINITY:
        return acc
    if new.kind is PointKind.NULL:
        return new if acc.kind is PointKind.INFINITY else acc
    if new.kind is PointKind.NOT_NULL:
        return new if acc.kind in (PointKind.INFINITY, PointKind.NULL) else acc
    if acc.kind is not PointKind.NOT_NULL_VALUE:
        return new
    order = _compare(acc.value, new.value)
    if order == -1 or (order == 0 and new.point_type is PointType.OPEN):
        return new
    return acc


def _merge_end(acc: RangePoint, new: RangePoint) -> RangePoint:
    if new.kind is PointKind.INFINITY:
        return acc
    if new.kind is PointKind.NULL:
        return acc if acc.kind is PointKind.NULL else new
    if new.kind is PointKind.NOT_NULL:
        return new if acc.kind in (PointKind.INFINITY, PointKind.NOT_NULL_VALUE) else acc
    if acc.kind in (PointKind.INFINITY, PointKind.NOT_NULL):
        return new
    if acc.kind is PointKind.NULL:
        return acc
    order = _compare(acc.value, new.value)
    if order == 1 or (order == 0 and new.point_type is PointType.OPEN):
        return new
    return acc


def create_column_range(operators: Iterable[Any]) -> Range:
    """Intersect the ranges implied by the filter expressions on one column."""
    start = RangePoint.infinity()
    end = RangePoint.infinity()
    for expr in operators:
        expr_range = _expr_range(expr)
        if expr_range is None:
            continue
        start = _merge_start(start, expr_range.start)
        end = _merge_end(end, expr_range.end)
    return Range(start, end)


def _filter_column(expr: Any) -> Optional[str]:
    if isinstance(expr, (IsNull, IsNotNull)):
        inner = expr.expr
    elif isinstance(expr, BinaryExpr):
        inner = expr.left
    else:
        return None
    return inner.name if isinstance(inner, ColumnRef) else None


def create_column_filter(filters: Iterable[Any]) -> Dict[str, List[Any]]:
    """Group filter expressions by the column they restrict."""
    column_filters: Dict[str, List[Any]] = {}
    for expr in filters:
        column_name = _filter_column(expr)
        if column_name is None:
            continue
        column_filters.setdefault(str(column_name), []).append(expr)
    return column_filters


def _constraint_name(name: Any) -> str:
    if name is None:
        raise ValueError("constraint has no name")
    return str(getattr(name, "value", name))


def get_table_index_list(
    constraints: Iterable[Any], column_range_map: Mapping[str, Range]
) -> List[TableIndex]:
    """Indexes whose leading columns are restricted by the given ranges."""
    indexes: List[TableIndex] = []
    for constraint in constraints:
        if not isinstance(constraint, UniqueConstraint):
            continue
        index_name = _constraint_name(constraint.name)

        column_ranges: List[ColumnRange] = []
        for column in constraint.columns:
            column_name = str(column)
            column_range = column_range_map.get(column_name)
            if column_range is None:
                break
            column_ranges.append(ColumnRange(column_name, column_range))
            if column_range.start != column_range.end:
                break

        if not column_ranges:
            continue

        level = INDEX_LEVEL_PRIMARY if constraint.is_primary else INDEX_LEVEL_UNIQUE
        indexes.append(TableIndex(index_name, level, column_ranges))
    return indexes


__all__: Sequence[str] = [
    "PointType",
    "PointKind",
    "RangePoint",
    "Range",
    "ColumnRange",
    "TableIndex",
    "RangeNotNullValue",
    "Operator",
    "ColumnRef",
    "LiteralExpr",
    "BinaryExpr",
    "IsNull",
    "IsNotNull",
    "UniqueConstraint",
    "create_column_range",
    "create_column_filter",
    "get_table_index_list",
]