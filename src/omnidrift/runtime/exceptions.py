# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Exceptions for the scan pipeline."""

from __future__ import annotations

from omnidrift.exceptions import OmniDriftError


class ScanInProgressError(OmniDriftError):
    """A scan of the project is already running and the caller would not wait.

    Attributes:
        project_root: Project whose scan lock is held.
    """

    def __init__(self, project_root: str) -> None:
        self.project_root = project_root
        super().__init__(f"A scan of {project_root} is already in progress")


__all__ = ["ScanInProgressError"]
