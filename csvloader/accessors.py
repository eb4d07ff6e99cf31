"""
Read-only access to a loaded Table.

Every typed getter goes through `get_cell` and one conversion primitive.
The `*_ptr` variants return None for an empty cell instead of parsing it.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, time
from typing import Callable, Dict, List, Optional, Type, TypeVar

from pydantic import TypeAdapter

from .errors import (
    CellMissing,
    CellParseError,
    DateParseError,
    FloatParseError,
    IntParseError,
    RowIndexOutOfRange,
    TimeParseError,
    UnknownColumn,
)
from .models import Table
from .rules import DATE_FORMAT, EMPTY_JSON_ARRAY, JSON_INDENT, TIME_FORMAT

T = TypeVar("T")

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INF_LITERALS = ("inf", "infinity")

_RECORDS_ADAPTER = TypeAdapter(List[Dict[str, str]])


# --- Serialization --------------------------------------------------------


def to_records(table: Table) -> List[Dict[str, str]]:
    """
    One dict per row, keyed by every column name in column order.

    Cells missing from a short row come out as "".
    """
    columns = [(name, table.column_index[name]) for name in table.columns]
    return [
        {name: row[position] if position < len(row) else "" for name, position in columns}
        for row in table.rows
    ]


def to_json(table: Table) -> str:
    if not table.rows:
        return EMPTY_JSON_ARRAY
    return _RECORDS_ADAPTER.dump_json(to_records(table), indent=JSON_INDENT).decode("utf-8")


# --- Addressing -----------------------------------------------------------


def get_cell(table: Table, row_index: int, column: str) -> str:
    """Raw cell text at (row_index, column)."""
    try:
        position = table.column_index[column]
    except KeyError:
        raise UnknownColumn(column, row_index) from None

    if row_index < 0 or row_index >= table.row_count:
        raise RowIndexOutOfRange(column, row_index, table.row_count)

    row = table.rows[row_index]
    if position >= len(row):
        raise CellMissing(column, row_index, position, len(row))
    return row[position]


# --- Parse routines -------------------------------------------------------


def parse_int(value: str) -> int:
    text = value.strip()
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid base-10 integer: {value!r}")
    return int(text)


def parse_float(value: str) -> float:
    # float() would also accept digit separators
    if "_" in value:
        raise ValueError(f"invalid float: {value!r}")
    text = value.strip()
    result = float(text)
    # float() overflows to inf silently; only an explicit inf literal may yield it
    if math.isinf(result) and text.lstrip("+-").lower() not in _INF_LITERALS:
        raise ValueError(f"float out of range: {value!r}")
    return result


def _parse_exact(value: str, fmt: str) -> datetime:
    parsed = datetime.strptime(value, fmt)
    # strptime accepts unpadded fields such as "2024115"
    if parsed.strftime(fmt) != value:
        raise ValueError(f"{value!r} does not match format {fmt!r}")
    return parsed


def parse_date(value: str, fmt: str = DATE_FORMAT) -> date:
    return _parse_exact(value, fmt).date()


def parse_time(value: str, fmt: str = TIME_FORMAT) -> time:
    return _parse_exact(value, fmt).time()


def _convert(
    table: Table,
    row_index: int,
    column: str,
    convert: Callable[[str], T],
    error: Type[CellParseError],
    empty_as_none: bool,
) -> Optional[T]:
    value = get_cell(table, row_index, column)
    if empty_as_none and value == "":
        return None
    try:
        return convert(value)
    except ValueError as exc:
        raise error(column, row_index, value, str(exc)) from exc


# --- Typed getters --------------------------------------------------------


def get_string(table: Table, row_index: int, column: str) -> str:
    return get_cell(table, row_index, column)


def get_string_ptr(table: Table, row_index: int, column: str) -> Optional[str]:
    value = get_cell(table, row_index, column)
    return value if value != "" else None


def get_int(table: Table, row_index: int, column: str) -> int:
    return _convert(table, row_index, column, parse_int, IntParseError, empty_as_none=False)


def get_int_ptr(table: Table, row_index: int, column: str) -> Optional[int]:
    return _convert(table, row_index, column, parse_int, IntParseError, empty_as_none=True)


def get_float(table: Table, row_index: int, column: str) -> float:
    return _convert(table, row_index, column, parse_float, FloatParseError, empty_as_none=False)


def get_float_ptr(table: Table, row_index: int, column: str) -> Optional[float]:
    return _convert(table, row_index, column, parse_float, FloatParseError, empty_as_none=True)


def get_date(table: Table, row_index: int, column: str, fmt: str = DATE_FORMAT) -> date:
    return _convert(
        table, row_index, column, lambda v: parse_date(v, fmt), DateParseError, empty_as_none=False
    )


def get_date_ptr(
    table: Table, row_index: int, column: str, fmt: str = DATE_FORMAT
) -> Optional[date]:
    return _convert(
        table, row_index, column, lambda v: parse_date(v, fmt), DateParseError, empty_as_none=True
    )


def get_time(table: Table, row_index: int, column: str, fmt: str = TIME_FORMAT) -> time:
    return _convert(
        table, row_index, column, lambda v: parse_time(v, fmt), TimeParseError, empty_as_none=False
    )


def get_time_ptr(
    table: Table, row_index: int, column: str, fmt: str = TIME_FORMAT
) -> Optional[time]:
    return _convert(
        table, row_index, column, lambda v: parse_time(v, fmt), TimeParseError, empty_as_none=True
    )
