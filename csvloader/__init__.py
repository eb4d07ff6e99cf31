from .accessors import (
    get_cell,
    get_date,
    get_date_ptr,
    get_float,
    get_float_ptr,
    get_int,
    get_int_ptr,
    get_string,
    get_string_ptr,
    get_time,
    get_time_ptr,
    to_json,
    to_records,
)
from .errors import (
    AccessError,
    CellMissing,
    CellParseError,
    CsvLoaderError,
    DateParseError,
    FileOpenError,
    FloatParseError,
    HeaderReadError,
    IntParseError,
    LoadError,
    RecordReadError,
    RowIndexOutOfRange,
    TimeParseError,
    UnknownColumn,
    UnsupportedEncoding,
)
from .loader import decode_bytes, detect_encoding, load, load_bytes, parse_text
from .models import Table

__version__ = "0.1.0"
