# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Classification of per-file failures into typed scan errors."""

from __future__ import annotations

import errno

from omnidrift.enums import EnumScanErrorType
from omnidrift.models import ModelScanError
from omnidrift.scanner.exceptions import DetectorError
from omnidrift.utils import sanitize_message


def classify_read_error(error: BaseException) -> tuple[EnumScanErrorType, str]:
    """Map a read failure to its error type and code.

    Returns:
        ``(type, code)`` where ``code`` is the errno name when available,
        otherwise the exception class name.
    """
    code = type(error).__name__
    if isinstance(error, OSError) and error.errno is not None:
        code = errno.errorcode.get(error.errno, code)

    if isinstance(error, PermissionError):
        return EnumScanErrorType.PERMISSION_DENIED, code
    if isinstance(error, FileNotFoundError):
        return EnumScanErrorType.NOT_FOUND, code
    if isinstance(error, OSError) and error.errno == errno.ELOOP:
        return EnumScanErrorType.SYMLINK_LOOP, code
    # pathlib raises RuntimeError on symlink loops during resolve()
    if isinstance(error, RuntimeError) and "loop" in str(error).lower():
        return EnumScanErrorType.SYMLINK_LOOP, code
    if isinstance(error, (OSError, UnicodeDecodeError)):
        return EnumScanErrorType.READ_ERROR, code
    return EnumScanErrorType.UNKNOWN, code


def read_scan_error(path: str, error: BaseException) -> ModelScanError:
    """A non-recoverable scan error for a file that could not be read."""
    error_type, code = classify_read_error(error)
    return ModelScanError(
        path=path,
        message=sanitize_message(f"Failed to read {path}: {error}"),
        type=error_type,
        code=code,
        recoverable=False,
    )


def hash_scan_error(path: str, error: BaseException) -> ModelScanError:
    return ModelScanError(
        path=path,
        message=sanitize_message(f"Failed to hash {path}: {error}"),
        type=EnumScanErrorType.HASH_ERROR,
        code=type(error).__name__,
        recoverable=False,
    )


def detector_scan_error(error: DetectorError) -> ModelScanError:
    cause = error.__cause__
    return ModelScanError(
        path=error.file,
        message=sanitize_message(str(error)),
        type=EnumScanErrorType.UNKNOWN,
        code=type(cause).__name__ if cause is not None else type(error).__name__,
        detector_id=error.detector_id,
        recoverable=error.recoverable,
    )


def unexpected_scan_error(path: str, error: BaseException) -> ModelScanError:
    """Failure outside any detector, e.g. a worker bug. Fails the file."""
    return ModelScanError(
        path=path,
        message=sanitize_message(f"Unexpected failure scanning {path}: {error}"),
        type=EnumScanErrorType.UNKNOWN,
        code=type(error).__name__,
        recoverable=False,
    )


__all__ = [
    "classify_read_error",
    "detector_scan_error",
    "hash_scan_error",
    "read_scan_error",
    "unexpected_scan_error",
]
