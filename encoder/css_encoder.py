#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

"""
CSS encoder.

Escapes arbitrary text so it can be embedded inside a CSS value without
breaking out of it. Every character outside the CSS safe list is written
as a backslash followed by six hex digits (e.g. "<" becomes "\\00003C").

Input is scanned as UTF-16 code units: a Python str is encoded with
"surrogatepass", so astral characters and explicit surrogate pairs both
arrive as high/low surrogate pairs and are combined before escaping.
Lone surrogates and the non-characters U+FFFE/U+FFFF are rejected.
"""

from __future__ import annotations

import sys
import threading
from array import array
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from css_context import EncoderContext
from css_errors import (
    CssEncodingError,
    InvalidSurrogatePairError,
    InvalidUnicodeValueError,
    HIGH_SURROGATE_AT_END,
    HIGH_SURROGATE_NOT_PAIRED,
    LOW_SURROGATE_NOT_PAIRED,
    MISSING_SURROGATE,
)
from css_logger import log_debug
from css_safe_list import (
    CSS_TABLE_UPPER_BOUND,
    css_safe_list,
    generate,
    punch_safe_list,
    slash_then_six_digit_hex,
)


_HIGH_SURROGATE_START = 0xD800
_HIGH_SURROGATE_END = 0xDBFF
_LOW_SURROGATE_START = 0xDC00
_LOW_SURROGATE_END = 0xDFFF
_INVALID_CODE_UNITS = (0xFFFE, 0xFFFF)


def _is_high_surrogate(unit: int) -> bool:
    return _HIGH_SURROGATE_START <= unit <= _HIGH_SURROGATE_END


def _is_low_surrogate(unit: int) -> bool:
    return _LOW_SURROGATE_START <= unit <= _LOW_SURROGATE_END


def combine_surrogates(high: int, low: int) -> int:
    return 0x10000 + (high - _HIGH_SURROGATE_START) * 0x400 + (low - _LOW_SURROGATE_START)


def utf16_code_units(text: str) -> array:
    """Return text as an array of UTF-16 code units, keeping lone surrogates."""
    units = array("H")
    units.frombytes(text.encode("utf-16-le", "surrogatepass"))
    if sys.byteorder == "big":
        units.byteswap()
    return units


@dataclass(frozen=True)
class EscapeTable:
    """
    Escape sequences indexed by code point.

    A slot holding None means the character is safe and written unchanged.
    """
    slots: Tuple[Optional[str], ...]

    @property
    def upper_bound(self) -> int:
        return len(self.slots) - 1

    def __len__(self) -> int:
        return len(self.slots)

    def lookup(self, code_unit: int) -> Optional[str]:
        return self.slots[code_unit]

    def is_safe(self, code_unit: int) -> bool:
        return 0 <= code_unit <= self.upper_bound and self.slots[code_unit] is None


def build_css_escape_table() -> EscapeTable:
    table = generate(CSS_TABLE_UPPER_BOUND, slash_then_six_digit_hex)
    punch_safe_list(table, css_safe_list())
    return EscapeTable(tuple(table))


class LazyEscapeTable:
    """
    Builds an EscapeTable on first use, exactly once.

    The unlocked check serves the common case; the re-check under the lock
    stops racing threads from building twice. The table is published with a
    single assignment after it is complete, so readers see it either absent
    or whole, and need no lock once it exists.
    """

    def __init__(self, builder: Callable[[], EscapeTable] = build_css_escape_table):
        self._builder = builder
        self._lock = threading.Lock()
        self._table: Optional[EscapeTable] = None
        self.build_count = 0

    @property
    def is_built(self) -> bool:
        return self._table is not None

    def get(self, context: Optional[EncoderContext] = None) -> EscapeTable:
        table = self._table
        if table is not None:
            return table
        with self._lock:
            if self._table is None:
                built = self._builder()
                self.build_count += 1
                self._table = built
                safe = sum(1 for slot in built.slots if slot is None)
                log_debug(context, f"Built CSS escape table: {len(built)} slots, {safe} safe")
            return self._table


@dataclass(frozen=True)
class EncodeResult:
    """Outcome of try_encode: either the encoded output or the error, never both."""
    output: Optional[str] = None
    error: Optional[CssEncodingError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Optional[str]:
        if self.error is not None:
            raise self.error
        return self.output


class CssEncoder:
    """Encodes text for safe embedding in CSS using a shared escape table."""

    def __init__(
            self,
            context: Optional[EncoderContext] = None,
            table: Optional[LazyEscapeTable] = None,
    ):
        self.context = context or EncoderContext.default()
        self.table = table if table is not None else _SHARED_TABLE

    def encode(self, text: Optional[str]) -> Optional[str]:
        """
        Encode text according to the CSS encoding rules.

        None and "" are returned as given without touching the escape table.

        Raises:
            InvalidUnicodeValueError: if U+FFFE or U+FFFF appears in the input.
            InvalidSurrogatePairError: if a surrogate is missing its other half.
        """
        if not text:
            return text

        table = self.table.get(self.context)
        units = utf16_code_units(text)
        length = len(units)
        out: List[str] = []

        i = 0
        while i < length:
            unit = units[i]

            if unit in _INVALID_CODE_UNITS:
                raise InvalidUnicodeValueError(unit, index=i)

            if _is_high_surrogate(unit):
                if i + 1 == length:
                    raise InvalidSurrogatePairError(unit, MISSING_SURROGATE, HIGH_SURROGATE_AT_END, index=i)
                low = units[i + 1]
                if not _is_low_surrogate(low):
                    raise InvalidSurrogatePairError(unit, low, HIGH_SURROGATE_NOT_PAIRED, index=i)
                out.append(slash_then_six_digit_hex(combine_surrogates(unit, low)))
                i += 2
                continue

            if _is_low_surrogate(unit):
                raise InvalidSurrogatePairError(MISSING_SURROGATE, unit, LOW_SURROGATE_NOT_PAIRED, index=i)

            if unit > table.upper_bound:
                out.append(slash_then_six_digit_hex(unit))
            else:
                escaped = table.lookup(unit)
                out.append(chr(unit) if escaped is None else escaped)
            i += 1

        return "".join(out)

    def try_encode(self, text: Optional[str]) -> EncodeResult:
        """Encode text, returning the error in the result instead of raising it."""
        try:
            return EncodeResult(output=self.encode(text))
        except CssEncodingError as e:
            return EncodeResult(error=e)


_SHARED_TABLE = LazyEscapeTable()
_DEFAULT_ENCODER = CssEncoder()


def shared_table() -> LazyEscapeTable:
    return _SHARED_TABLE


def encode(text: Optional[str]) -> Optional[str]:
    """Encode text for CSS using the process-wide escape table."""
    return _DEFAULT_ENCODER.encode(text)


def try_encode(text: Optional[str]) -> EncodeResult:
    return _DEFAULT_ENCODER.try_encode(text)
