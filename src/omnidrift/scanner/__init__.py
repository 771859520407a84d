# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Scanner service: parallel detector execution with per-file error capture."""

from omnidrift.scanner.detector_worker import DetectorWorker
from omnidrift.scanner.exceptions import DetectorError
from omnidrift.scanner.file_reader import LocalFileReader
from omnidrift.scanner.handler_scan_errors import (
    classify_read_error,
    detector_scan_error,
    hash_scan_error,
    read_scan_error,
    unexpected_scan_error,
)
from omnidrift.scanner.registry import (
    DetectorFactory,
    DetectorRegistration,
    DetectorRegistry,
)
from omnidrift.scanner.scanner_service import (
    ScannerService,
    default_worker_count,
    matches_ignore_pattern,
)

__all__ = [
    "DetectorError",
    "DetectorFactory",
    "DetectorRegistration",
    "DetectorRegistry",
    "DetectorWorker",
    "LocalFileReader",
    "ScannerService",
    "classify_read_error",
    "default_worker_count",
    "detector_scan_error",
    "hash_scan_error",
    "matches_ignore_pattern",
    "read_scan_error",
    "unexpected_scan_error",
]
