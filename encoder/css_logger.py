"""
Logging utilities for the CSS encoder.

This module provides logging functions that respect the EncoderContext
flags (log level and rich format).
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import sys
import time
from typing import Optional

from css_context import EncoderContext, LogLevel


def log(context: Optional[EncoderContext], log_level: LogLevel, message: str) -> None:
    """
    Log a message to stderr if the context's level admits it.

    Args:
        context:    The encoder context holding the logging level.
        log_level:  The level of the message to log.
        message:    The message to log.
    """
    if context is None:
        context = EncoderContext.default()
    if context.log_level < log_level:
        return
    prefix = ""
    if context.log_rich_format:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        prefix = {
            LogLevel.ERROR: f"{timestamp} [ERROR] ",
            LogLevel.WARNING: f"{timestamp} [WARNING] ",
            LogLevel.INFO: f"{timestamp} [INFO] ",
            LogLevel.DEBUG: f"{timestamp} [DEBUG] ",
        }.get(log_level, "")
    print(f"{prefix}{message}", file=sys.stderr)


def log_error(context: Optional[EncoderContext], message: str) -> None:
    log(context, LogLevel.ERROR, message)


def log_info(context: Optional[EncoderContext], message: str) -> None:
    log(context, LogLevel.INFO, message)


def log_debug(context: Optional[EncoderContext], message: str) -> None:
    log(context, LogLevel.DEBUG, message)


def log_stage(context: Optional[EncoderContext], stage: str, subject: Optional[str] = None) -> None:
    """
    Log the start of a processing stage.

    Args:
        context: The encoder context holding logging flags.
        stage:   The name of the stage (e.g., "Encoding", "Checking").
        subject: Optional name of the input being processed.
    """
    if subject:
        log(context, LogLevel.INFO, f"{stage} {subject}")
    else:
        log(context, LogLevel.INFO, f"{stage}...")
