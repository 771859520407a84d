# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Per-file scan error classification."""

from __future__ import annotations

from enum import Enum


class EnumScanErrorType(str, Enum):
    """Type of a per-file scan error.

    Per-file errors never abort a batch. They are reported in
    ``ScanResults.errors`` and, when they prevented the file from being
    analysed at all, flip ``ScanResults.success`` to False.

    Attributes:
        PERMISSION_DENIED: The file could not be opened for reading.
        NOT_FOUND: The file disappeared between discovery and reading.
        SYMLINK_LOOP: Resolving the path hit a circular symlink.
        READ_ERROR: Any other I/O or decoding failure while reading.
        HASH_ERROR: The content hash could not be computed.
        UNKNOWN: Anything else, including detector exceptions.
    """

    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    SYMLINK_LOOP = "symlink_loop"
    READ_ERROR = "read_error"
    HASH_ERROR = "hash_error"
    UNKNOWN = "unknown"


__all__ = ["EnumScanErrorType"]
