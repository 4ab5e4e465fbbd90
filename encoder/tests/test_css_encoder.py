#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import pytest

import css_encoder
from conftest import SAFE_CODE_POINTS, css_escape
from css_encoder import (
    EscapeTable,
    build_css_escape_table,
    combine_surrogates,
    encode,
    utf16_code_units,
)


def test_encode_mixed_example():
    assert encode("a<b") == "a\\00003Cb"


def test_encode_safe_characters_unchanged(encoder):
    for cp in sorted(SAFE_CODE_POINTS):
        assert encoder.encode(chr(cp)) == chr(cp)


def test_encode_unsafe_low_range_escaped(encoder):
    for cp in range(0x100):
        if cp in SAFE_CODE_POINTS:
            continue
        assert encoder.encode(chr(cp)) == css_escape(cp)


def test_encode_boundary_0xff_is_table_driven_and_escaped(encoder):
    assert encoder.encode("\u00ff") == "\\0000FF"
    assert encoder.encode("\u0100") == "\\000100"


def test_encode_bmp_above_table_escaped_on_the_fly(encoder):
    assert encoder.encode("\u20ac") == "\\0020AC"
    assert encoder.encode("\u4e2d\u6587") == "\\004E2D\\006587"


def test_encode_backslash_is_escaped(encoder):
    assert encoder.encode("\\00003C") == "\\00005C00003C"


def test_encode_css_breakout_attempt(encoder):
    encoded = encoder.encode("red;}</style><script>")
    assert encoded == (
        "red\\00003B\\00007D\\00003C\\00002Fstyle\\00003E\\00003Cscript\\00003E"
    )
    for ch in ";}<>/":
        assert ch not in encoded


def test_encode_astral_character_as_single_escape(encoder):
    assert encoder.encode("\U0001F600") == "\\01F600"


def test_encode_explicit_surrogate_pair_consumes_both_units(encoder):
    assert encoder.encode("x\ud83d\ude00y") == "x\\01F600y"


def test_encode_adjacent_surrogate_pairs(encoder):
    assert encoder.encode("\U0001F600\U00010000") == "\\01F600\\010000"


def test_encode_supplementary_upper_limit(encoder):
    assert encoder.encode("\U0010FFFF") == "\\10FFFF"


@pytest.mark.parametrize("value", [None, ""])
def test_encode_empty_or_none_passes_through_without_building(encoder, fresh_table, value):
    assert encoder.encode(value) is value
    assert not fresh_table.is_built


def test_encode_builds_table_on_first_use(encoder, fresh_table):
    assert not fresh_table.is_built
    encoder.encode("a")
    assert fresh_table.is_built
    encoder.encode("b")
    assert fresh_table.build_count == 1


def test_encode_is_deterministic(encoder):
    text = "font: 'Ünïcødé'  "
    assert encoder.encode(text) == encoder.encode(text)


def test_module_encode_uses_shared_table():
    encode("q")
    assert css_encoder.shared_table().is_built


def test_build_css_escape_table_shape():
    table = build_css_escape_table()
    assert isinstance(table, EscapeTable)
    assert len(table) == 0x100
    assert table.upper_bound == 0xFF
    assert table.lookup(ord("<")) == "\\00003C"
    assert table.lookup(ord("a")) is None
    assert table.is_safe(0x85)
    assert not table.is_safe(0x91)
    assert not table.is_safe(0x100)


def test_escape_table_is_immutable():
    table = build_css_escape_table()
    with pytest.raises(TypeError):
        table.slots[0] = None


def test_combine_surrogates():
    assert combine_surrogates(0xD83D, 0xDE00) == 0x1F600
    assert combine_surrogates(0xD800, 0xDC00) == 0x10000
    assert combine_surrogates(0xDBFF, 0xDFFF) == 0x10FFFF


def test_utf16_code_units_keeps_lone_surrogates():
    assert list(utf16_code_units("a\U0001F600")) == [0x61, 0xD83D, 0xDE00]
    assert list(utf16_code_units("\udc00")) == [0xDC00]
