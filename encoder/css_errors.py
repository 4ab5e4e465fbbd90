#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

# css_errors.py
from __future__ import annotations

from typing import Optional


ERROR_CODE_FAMILIES = {
    "ENC": [
        "ENC-0010",  # permanently invalid code unit (U+FFFE, U+FFFF)
        "ENC-0020",  # high surrogate at end of input
        "ENC-0021",  # high surrogate followed by a non-low unit
        "ENC-0022",  # low surrogate without a preceding high surrogate
    ],
}

# Value carried for the missing half of a broken surrogate pair.
MISSING_SURROGATE = 0

HIGH_SURROGATE_AT_END = "ENC-0020"
HIGH_SURROGATE_NOT_PAIRED = "ENC-0021"
LOW_SURROGATE_NOT_PAIRED = "ENC-0022"


def _u(value: int) -> str:
    return f"U+{value:04X}"


class CssEncodingError(ValueError):
    """
    Input that cannot be CSS encoded.

    These are hard rejections of malformed input: the scan stops at the
    first offending code unit and no partial output is produced.
    """

    code = "ENC-0000"

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.index = index

    def format(self) -> str:
        text = f"[{self.code}] {self.message}"
        if self.index is not None:
            text += f" at offset {self.index}"
        return text


class InvalidUnicodeValueError(CssEncodingError):
    """A code unit that Unicode reserves as a permanent non-character."""

    code = "ENC-0010"

    def __init__(self, value: int, index: Optional[int] = None):
        super().__init__(f"invalid Unicode value {_u(value)}", index)
        self.value = value


class InvalidSurrogatePairError(CssEncodingError):
    """
    A high surrogate without its low half, or a low surrogate without its high half.

    The kind of breakage is given by code; high and low are the units carried,
    with MISSING_SURROGATE standing in for a half that is absent.
    """

    def __init__(self, high: int, low: int, code: str, index: Optional[int] = None):
        if code == HIGH_SURROGATE_AT_END:
            message = f"high surrogate {_u(high)} is not followed by a low surrogate"
        elif code == HIGH_SURROGATE_NOT_PAIRED:
            message = f"invalid surrogate pair {_u(high)} {_u(low)}"
        elif code == LOW_SURROGATE_NOT_PAIRED:
            message = f"low surrogate {_u(low)} is not preceded by a high surrogate"
        else:
            raise ValueError(f"unknown surrogate pair error code {code!r}")
        self.code = code
        super().__init__(message, index)
        self.high = high
        self.low = low
