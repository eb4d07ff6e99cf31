"""
Fixed loading and parsing rules.

Parse routines receive these as explicit arguments, so callers and tests can
substitute their own patterns.
"""

# Accepted encoding names (exact, case-sensitive) -> Python codec.
SUPPORTED_ENCODINGS = {
    "utf-8": "utf-8",
    "shift-jis": "cp932",
    "shift_jis": "cp932",
    "sjis": "cp932",
}

UTF8_BOM = b"\xef\xbb\xbf"
UTF16_LE_BOM = b"\xff\xfe"
UTF16_BE_BOM = b"\xfe\xff"

DELIMITER = ","
QUOTECHAR = "\""

DATE_FORMAT = "%Y%m%d"    # 20240115
TIME_FORMAT = "%H:%M:%S"  # 09:05:00

EMPTY_JSON_ARRAY = "[]"
JSON_INDENT = 2
