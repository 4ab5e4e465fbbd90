#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

"""
Safe-list helpers for building character escape tables.

A table maps each code point in [0, upper_bound] to the escape sequence
written in its place. Characters punched out of the table (set to None)
are written through unchanged.
"""

from typing import Callable, Iterable, Iterator, List, Optional


CSS_TABLE_UPPER_BOUND = 0xFF
ESCAPE_LENGTH = 7
_MAX_SIX_DIGIT_HEX = 16 ** (ESCAPE_LENGTH - 1) - 1

EscapeGenerator = Callable[[int], str]


def slash_then_six_digit_hex(code_point: int) -> str:
    """
    Return the CSS escape for a code point: a backslash and six uppercase hex digits.

    Combined surrogate pairs produce values above 0xFFFF, so the full
    six-digit width is always used.
    """
    if code_point < 0 or code_point > _MAX_SIX_DIGIT_HEX:
        raise ValueError(f"code point {code_point:#x} does not fit six hex digits")
    return f"\\{code_point:06X}"


def generate(upper_bound: int, escape_generator: EscapeGenerator) -> List[Optional[str]]:
    """Build a table of upper_bound + 1 slots, each holding escape_generator(i)."""
    return [escape_generator(i) for i in range(upper_bound + 1)]


def punch_safe_list(table: List[Optional[str]], safe_code_points: Iterable[int]) -> None:
    """Clear every slot named by safe_code_points so the character passes through."""
    for code_point in safe_code_points:
        table[code_point] = None


def css_safe_list() -> Iterator[int]:
    """Yield the code points that never need CSS escaping."""
    yield from range(ord("0"), ord("9") + 1)
    yield from range(ord("A"), ord("Z") + 1)
    yield from range(ord("a"), ord("z") + 1)
    # Extended higher ASCII, Ç to É
    yield from range(0x80, 0x90 + 1)
    # Extended higher ASCII, ô to Ü
    yield from range(0x93, 0x9A + 1)
    # Extended higher ASCII, á to Ñ
    yield from range(0xA0, 0xA5 + 1)
