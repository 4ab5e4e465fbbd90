"""
Encoder context for cross-cutting options.

This module defines the EncoderContext dataclass which holds options that
affect every part of the CSS encoder (logging, diagnostics output).
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import os
from dataclasses import dataclass
from enum import IntEnum


VERBOSITY_ENV_VAR = "CSSENC_VERBOSITY"


class LogLevel(IntEnum):
    """Hierarchical logging levels for the CSS encoder."""
    SILENT = 0      # No logging
    ERROR = 3       # Error messages only
    WARNING = 6     # Warning messages (default)
    INFO = 10       # General progress messages (-v)
    DEBUG = 30      # Table construction and scan details (-vvv)


def level_from_verbosity(verbosity: int) -> LogLevel:
    """Map a `-v` count to a LogLevel."""
    if verbosity >= 3:
        return LogLevel.DEBUG
    if verbosity >= 1:
        return LogLevel.INFO
    return LogLevel.ERROR


def env_verbosity(default: int = 0) -> int:
    """Read the default verbosity from $CSSENC_VERBOSITY, ignoring junk values."""
    raw = os.getenv(VERBOSITY_ENV_VAR)
    if not raw:
        return default
    try:
        return max(0, int(raw))
    except ValueError:
        return default


@dataclass
class EncoderContext:
    """
    Holds cross-cutting encoder options.

    Attributes:
        log_rich_format:        If True, emit logs in rich format: timestamp and level prefix.
        log_level:              Current logging level.
    """
    log_rich_format: bool = False
    log_level: LogLevel = LogLevel.WARNING

    @staticmethod
    def default() -> 'EncoderContext':
        """Create an EncoderContext with default settings."""
        return EncoderContext(log_level=LogLevel.WARNING)
