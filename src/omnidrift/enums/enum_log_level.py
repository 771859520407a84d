# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Log level enumeration for project configuration."""

from __future__ import annotations

from enum import Enum


class EnumLogLevel(str, Enum):
    """Log level names accepted by ``logging.Logger.setLevel``."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


__all__ = ["EnumLogLevel"]
