"""
Exceptions raised by the loader and the cell accessors.

Load errors abort the whole load. Access errors only fail the single call
that raised them, so callers can keep reading other cells.
"""

from __future__ import annotations

from typing import Optional


class CsvLoaderError(Exception):
    """Base class for every error raised by this package."""


# --- Loader ---------------------------------------------------------------


class LoadError(CsvLoaderError):
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class UnsupportedEncoding(LoadError, ValueError):
    def __init__(self, encoding: str, path: Optional[str] = None):
        super().__init__(f"unsupported encoding: {encoding!r}", path)
        self.encoding = encoding


class FileOpenError(LoadError):
    def __init__(self, path: str, cause: OSError):
        super().__init__(f"failed to open file {path!r}: {cause}", path)
        self.cause = cause


class HeaderReadError(LoadError):
    def __init__(self, path: str, reason: str, line: Optional[int] = None):
        where = f" (line {line})" if line else ""
        super().__init__(f"failed to read header of {path!r}{where}: {reason}", path)
        self.reason = reason
        self.line = line


class RecordReadError(LoadError):
    def __init__(self, path: str, reason: str, line: Optional[int] = None):
        where = f" at line {line}" if line else ""
        super().__init__(f"failed to read records of {path!r}{where}: {reason}", path)
        self.reason = reason
        self.line = line


# --- Addressing -----------------------------------------------------------


class AccessError(CsvLoaderError):
    def __init__(self, message: str, column: str, row_index: int):
        super().__init__(message)
        self.column = column
        self.row_index = row_index


class UnknownColumn(AccessError):
    def __init__(self, column: str, row_index: int):
        super().__init__(f"column {column!r} does not exist", column, row_index)


class RowIndexOutOfRange(AccessError, IndexError):
    def __init__(self, column: str, row_index: int, row_count: int):
        super().__init__(
            f"row index {row_index} out of range (rows: {row_count})",
            column,
            row_index,
        )
        self.row_count = row_count


class CellMissing(AccessError, IndexError):
    def __init__(self, column: str, row_index: int, column_position: int, row_length: int):
        super().__init__(
            f"row {row_index} has {row_length} cells, "
            f"column {column!r} is at position {column_position}",
            column,
            row_index,
        )
        self.column_position = column_position
        self.row_length = row_length


# --- Conversion -----------------------------------------------------------


class CellParseError(AccessError, ValueError):
    kind = "value"

    def __init__(self, column: str, row_index: int, value: str, reason: str = ""):
        message = f"failed to parse {self.kind} in column {column!r} at row {row_index}: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, column, row_index)
        self.value = value


class IntParseError(CellParseError):
    kind = "int"


class FloatParseError(CellParseError):
    kind = "float"


class DateParseError(CellParseError):
    kind = "date"


class TimeParseError(CellParseError):
    kind = "time"
