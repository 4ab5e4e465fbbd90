#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from css_context import EncoderContext, LogLevel
from css_encoder import CssEncoder, LazyEscapeTable
from css_safe_list import css_safe_list


SAFE_CODE_POINTS = frozenset(css_safe_list())


def css_escape(code_point: int) -> str:
    return "\\" + format(code_point, "06X")


@pytest.fixture
def context() -> EncoderContext:
    return EncoderContext(log_level=LogLevel.WARNING)


@pytest.fixture
def fresh_table() -> LazyEscapeTable:
    return LazyEscapeTable()


@pytest.fixture
def encoder(context: EncoderContext, fresh_table: LazyEscapeTable) -> CssEncoder:
    """An encoder with its own, not yet built, escape table."""
    return CssEncoder(context=context, table=fresh_table)
