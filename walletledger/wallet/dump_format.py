"""Mini README: Codec for the ``;``-delimited wallet dump records.

Structure:
    * FIELD_SEPARATOR, LEGACY_TERMINATOR, LINE_TERMINATOR - format constants.
    * encode_record - join escaped fields and append a terminator.
    * split_records - cut text on unescaped terminators.
    * decode_fields - split a record on unescaped separators and unescape.
    * parse_int - base-10 integer parsing with field-aware errors.

Values are escaped with a backslash: ``\\``, ``\\;``, ``\\|``, ``\\n`` and
``\\r``. A value that contains none of those characters is written exactly as
the plain format expects, so dumps of ordinary data stay readable by older
tooling.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Tuple

FIELD_SEPARATOR = ";"
LEGACY_TERMINATOR = "|"
LINE_TERMINATOR = "\n"
ESCAPE = "\\"

_INTEGER = re.compile(r"-?[0-9]+")

_ESCAPES = {
    ESCAPE: ESCAPE,
    FIELD_SEPARATOR: FIELD_SEPARATOR,
    LEGACY_TERMINATOR: LEGACY_TERMINATOR,
    "\n": "n",
    "\r": "r",
}
_UNESCAPES = {code: char for char, code in _ESCAPES.items()}


def escape_value(value: str) -> str:
    """Escape characters that would otherwise break record parsing."""

    return "".join(ESCAPE + _ESCAPES[char] if char in _ESCAPES else char for char in value)


def encode_record(fields: Iterable[object], terminator: str) -> str:
    """Render one record, e.g. ``encode_record([1, "792", 0], "\\n") == "1;792;0\\n"``."""

    return FIELD_SEPARATOR.join(escape_value(str(field)) for field in fields) + terminator


def split_records(text: str, terminator: str) -> Tuple[List[str], str]:
    """Split ``text`` on unescaped terminators.

    Returns the complete records (terminators stripped, escapes intact) and
    whatever followed the last terminator. The caller decides whether a
    non-empty remainder is an error.
    """

    records: List[str] = []
    start = 0
    index = 0
    while index < len(text):
        char = text[index]
        if char == ESCAPE:
            index += 2
            continue
        if char == terminator:
            records.append(text[start:index])
            start = index + 1
        index += 1
    return records, text[start:]


def decode_fields(record: str) -> List[str]:
    """Split a record on unescaped separators and resolve escapes."""

    fields: List[str] = []
    current: List[str] = []
    chars = iter(record)
    for char in chars:
        if char == ESCAPE:
            code = next(chars, None)
            if code is None:
                raise ValueError(f"Dangling escape at end of record: {record!r}")
            if code not in _UNESCAPES:
                raise ValueError(f"Unknown escape sequence \\{code} in record: {record!r}")
            current.append(_UNESCAPES[code])
        elif char == FIELD_SEPARATOR:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    fields.append("".join(current))
    return fields


def expect_fields(record: str, names: Tuple[str, ...]) -> List[str]:
    """Decode ``record`` and check it carries exactly ``names`` fields."""

    fields = decode_fields(record)
    if len(fields) != len(names):
        raise ValueError(
            f"Expected {len(names)} fields ({';'.join(names)}), got {len(fields)} in record: {record!r}"
        )
    return fields


def parse_int(value: str, field_name: str) -> int:
    """Parse a base-10 integer field: optional minus sign, ASCII digits only."""

    if not _INTEGER.fullmatch(value):
        raise ValueError(f"Field '{field_name}' is not an integer: {value!r}")
    return int(value, 10)
