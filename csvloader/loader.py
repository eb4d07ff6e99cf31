"""
CSV loading.

Responsibilities:
- encoding name validation
- decoding (BOM override, Shift-JIS via cp932)
- strict CSV parsing: header row + data rows
"""

from __future__ import annotations

import csv
import io
import logging
import os
from typing import Dict, List, Optional, Sequence, Tuple, Union

from charset_normalizer import from_bytes

from .errors import FileOpenError, HeaderReadError, RecordReadError, UnsupportedEncoding
from .models import Table
from .rules import (
    DELIMITER,
    QUOTECHAR,
    SUPPORTED_ENCODINGS,
    UTF16_BE_BOM,
    UTF16_LE_BOM,
    UTF8_BOM,
)

logger = logging.getLogger(__name__)

BARE_QUOTE_REASON = "bare \" in non-quoted field"

_DETECTED_TO_SUPPORTED = {
    "utf_8": "utf-8",
    "ascii": "utf-8",
    "cp932": "sjis",
    "shift_jis": "sjis",
    "shift_jis_2004": "sjis",
    "shift_jisx0213": "sjis",
}


def resolve_codec(encoding: str) -> str:
    """Return the Python codec for a supported encoding name."""
    try:
        return SUPPORTED_ENCODINGS[encoding]
    except (KeyError, TypeError):
        raise UnsupportedEncoding(encoding) from None


def _bom_codec(raw: bytes) -> Optional[str]:
    if raw.startswith(UTF8_BOM):
        return "utf-8-sig"
    if raw.startswith(UTF16_LE_BOM) or raw.startswith(UTF16_BE_BOM):
        # the utf-16 codec reads the BOM for byte order and drops it
        return "utf-16"
    return None


def decode_bytes(raw: bytes, encoding: str) -> str:
    """
    Decode a CSV payload for one of the supported encoding names.

    A leading byte-order marker wins over the requested encoding, whichever
    name was given, and is never part of the returned text. Invalid byte
    sequences become U+FFFD instead of failing the load.
    """
    codec = resolve_codec(encoding)

    bom_codec = _bom_codec(raw)
    if bom_codec is not None:
        logger.debug("byte-order marker found, decoding as %s instead of %s", bom_codec, codec)
        codec = bom_codec

    try:
        return raw.decode(codec)
    except UnicodeDecodeError as exc:
        logger.warning("undecodable bytes replaced while decoding as %s: %s", codec, exc)
        return raw.decode(codec, errors="replace")


def detect_encoding(raw: bytes) -> Optional[str]:
    """
    Best-effort guess of the supported encoding name for `raw`.

    Returns None when the payload does not look like any supported encoding.
    """
    if raw.startswith(UTF8_BOM):
        return "utf-8"

    match = from_bytes(raw).best()
    if match is None:
        logger.debug("no encoding detected")
        return None

    detected = match.encoding.lower().replace("-", "_")
    suggested = _DETECTED_TO_SUPPORTED.get(detected)
    if suggested is None:
        logger.debug("detected encoding %s is not supported", detected)
    return suggested


class _RecordLines:
    """Line source for csv.reader that keeps the raw lines of the current record."""

    def __init__(self, text: str):
        self._lines = io.StringIO(text, newline="")
        self._pending: List[str] = []

    def __iter__(self):
        return self

    def __next__(self) -> str:
        line = next(self._lines)
        self._pending.append(line)
        return line

    def take(self) -> str:
        raw, self._pending = "".join(self._pending), []
        return raw


def _has_bare_quote(raw_record: str) -> bool:
    """True if a quote character appears inside a field that did not start quoted."""
    quoted = closed = False
    at_field_start = True
    for ch in raw_record:
        if quoted:
            if ch == QUOTECHAR:
                quoted, closed = False, True
            continue
        if ch == QUOTECHAR:
            if closed:
                # doubled quote inside a quoted field
                quoted, closed = True, False
                continue
            if not at_field_start:
                return True
            quoted, at_field_start = True, False
            continue
        closed = False
        at_field_start = ch in (DELIMITER, "\r", "\n")
    return False


def _next_record(reader) -> Optional[List[str]]:
    for record in reader:
        if record:
            return record
    return None


def _build_column_index(header: Sequence[str], source: str) -> Dict[str, int]:
    column_index: Dict[str, int] = {}
    for position, name in enumerate(header):
        if name in column_index:
            logger.warning(
                "%s: duplicate column %r at positions %d and %d, keeping the last",
                source, name, column_index[name], position,
            )
        column_index[name] = position
    return column_index


def parse_text(text: str, source: str = "<text>") -> Table:
    """
    Parse decoded CSV text into a Table. Blank lines are skipped.

    A quote inside a non-quoted field (`x"y`) is rejected, like any other
    malformed quoting.
    """
    lines = _RecordLines(text)
    reader = csv.reader(lines, delimiter=DELIMITER, quotechar=QUOTECHAR, strict=True)

    try:
        header = _next_record(reader)
    except csv.Error as exc:
        raise HeaderReadError(source, str(exc), reader.line_num) from exc
    if header is None:
        raise HeaderReadError(source, "no header row")
    if _has_bare_quote(lines.take()):
        raise HeaderReadError(source, BARE_QUOTE_REASON, reader.line_num)

    column_index = _build_column_index(header, source)

    rows: List[Tuple[str, ...]] = []
    try:
        for record in reader:
            raw_record = lines.take()
            if not record:
                continue
            if _has_bare_quote(raw_record):
                raise RecordReadError(source, BARE_QUOTE_REASON, reader.line_num)
            rows.append(tuple(record))
    except csv.Error as exc:
        raise RecordReadError(source, str(exc), reader.line_num) from exc

    return Table(column_index=column_index, rows=tuple(rows))


def load_bytes(raw: bytes, encoding: str, source: str = "<bytes>") -> Table:
    """Decode and parse an in-memory CSV payload."""
    text = decode_bytes(raw, encoding)
    table = parse_text(text, source)
    logger.info(
        "loaded %s (%s): %d columns, %d rows",
        source, encoding, len(table.column_index), table.row_count,
    )
    return table


def load(path: Union[str, os.PathLike], encoding: str) -> Table:
    """
    Load a CSV file with a header row.

    The encoding name is checked before the file is touched. Any failure
    aborts the load; no partial Table is returned.
    """
    resolve_codec(encoding)

    source = os.fsdecode(path)
    try:
        with open(path, "rb") as fh:
            raw = fh.read()
    except OSError as exc:
        raise FileOpenError(source, exc) from exc

    return load_bytes(raw, encoding, source=source)
