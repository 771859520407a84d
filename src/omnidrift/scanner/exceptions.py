# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Exceptions for the scanner service."""

from __future__ import annotations

from omnidrift.exceptions import OmniDriftError


class DetectorError(OmniDriftError):
    """A detector raised while analysing a file.

    Never escapes a scan: the worker converts it into a ``ModelScanError``
    of type ``unknown`` carrying the detector id.

    Attributes:
        detector_id: Detector that failed.
        file: Relative path of the file being analysed.
        recoverable: Copied from the original exception's ``recoverable``
            attribute when present, otherwise True.

    Example:
        >>> try:
        ...     detector.detect(context)
        ... except Exception as e:
        ...     raise DetectorError.from_exception("errors/style", "a.ts", e) from e
    """

    def __init__(
        self,
        message: str,
        *,
        detector_id: str,
        file: str,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message)
        self.detector_id = detector_id
        self.file = file
        self.recoverable = recoverable

    @classmethod
    def from_exception(
        cls, detector_id: str, file: str, error: BaseException
    ) -> DetectorError:
        return cls(
            f"Detector {detector_id} failed on {file}: {error}",
            detector_id=detector_id,
            file=file,
            recoverable=bool(getattr(error, "recoverable", True)),
        )


__all__ = ["DetectorError"]
