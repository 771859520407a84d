# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Runtime: project configuration, logging setup and the scan pipeline."""

from omnidrift.runtime.exceptions import ScanInProgressError
from omnidrift.runtime.logging_config import (
    LOG_FORMAT,
    ROOT_LOGGER_NAME,
    configure_logging,
)
from omnidrift.runtime.model_project_config import ModelProjectConfig
from omnidrift.runtime.pipeline import ScanPipeline

__all__ = [
    "LOG_FORMAT",
    "ROOT_LOGGER_NAME",
    "ModelProjectConfig",
    "ScanInProgressError",
    "ScanPipeline",
    "configure_logging",
]
