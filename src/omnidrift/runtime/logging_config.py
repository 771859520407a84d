# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Logging setup for hosts embedding the engine.

The package never configures handlers on import. Hosts call
``configure_logging`` with the configured level; ``install_handler=True``
additionally attaches a stream handler when the ``omnidrift`` logger has
none.
"""

from __future__ import annotations

import logging
from typing import Final

from omnidrift.enums import EnumLogLevel

LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

ROOT_LOGGER_NAME: Final[str] = "omnidrift"


def configure_logging(
    level: EnumLogLevel | str = EnumLogLevel.INFO,
    *,
    install_handler: bool = False,
) -> logging.Logger:
    """Apply ``level`` to the ``omnidrift`` logger hierarchy.

    Returns:
        The package root logger.
    """
    resolved = EnumLogLevel(level.upper() if isinstance(level, str) else level)
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(resolved.value)
    if install_handler and not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    return root


__all__ = ["LOG_FORMAT", "ROOT_LOGGER_NAME", "configure_logging"]
