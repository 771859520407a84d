# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Detector worker: runs a private detector set over one file at a time.

A worker is created per pool slot. It warms its detectors up once and then
turns each ``ModelDetectorWorkerTask`` into a ``ModelDetectorWorkerResult``.
``process`` never raises for a per-file problem; read, hash and detector
failures come back as typed errors on the result.
"""

from __future__ import annotations

import logging
import time
from typing import TypeVar

from omnidrift.models import (
    DetectorMetadata,
    ModelDetectionContext,
    ModelDetectorWorkerResult,
    ModelDetectorWorkerTask,
    ModelPatternObservation,
    ModelRawViolation,
    ModelScanError,
)
from omnidrift.protocols import ProtocolDetector, ProtocolFileReader
from omnidrift.scanner.exceptions import DetectorError
from omnidrift.scanner.handler_scan_errors import (
    detector_scan_error,
    hash_scan_error,
    read_scan_error,
)
from omnidrift.scanner.registry import DetectorRegistry
from omnidrift.utils import compute_content_hash, sanitize_message

logger = logging.getLogger(__name__)

T = TypeVar("T", ModelPatternObservation, ModelRawViolation)


class DetectorWorker:
    """One pool slot's detector set.

    Args:
        worker_id: Slot number, reported on every result.
        registry: Registry the detector set is built from.
        file_reader: Reader for file content.
    """

    def __init__(
        self,
        worker_id: int,
        registry: DetectorRegistry,
        file_reader: ProtocolFileReader,
    ) -> None:
        self.worker_id = worker_id
        self._registry = registry
        self._file_reader = file_reader
        self._detectors: list[tuple[str, ProtocolDetector]] | None = None

    @property
    def detector_ids(self) -> list[str]:
        return [detector_id for detector_id, _ in self._detectors or []]

    def warm_up(self) -> None:
        """Build and warm up the detector set.

        A detector whose warm-up fails is left out of this worker's set.

        Raises:
            ConfigurationError: If the registry cannot build a detector.
        """
        if self._detectors is not None:
            return
        ready: list[tuple[str, ProtocolDetector]] = []
        for detector_id, detector in self._registry.instantiate():
            try:
                detector.warm_up()
            except Exception as e:
                logger.warning(
                    "Detector %s failed to warm up and is disabled for worker %d: %s",
                    detector_id,
                    self.worker_id,
                    sanitize_message(str(e)),
                    extra={"worker_id": self.worker_id},
                )
                continue
            ready.append((detector_id, detector))
        self._detectors = ready
        logger.debug(
            "Worker %d warmed up %d detectors",
            self.worker_id,
            len(ready),
            extra={"worker_id": self.worker_id},
        )

    def process(self, task: ModelDetectorWorkerTask) -> ModelDetectorWorkerResult:
        """Run every applicable detector over ``task.file``."""
        self.warm_up()
        started = time.perf_counter()
        identity = task.file
        relative_path = identity.relative_path

        try:
            content = self._file_reader.read_text(identity.path)
        except Exception as e:
            error = read_scan_error(relative_path, e)
            logger.warning(
                "Skipping %s: %s",
                relative_path,
                error.message,
                extra={"file_path": relative_path, "error_type": error.type.value},
            )
            return self._result(task, started, errors=[error])

        try:
            content_hash = compute_content_hash(content)
        except Exception as e:
            error = hash_scan_error(relative_path, e)
            logger.warning(
                "Skipping %s: %s",
                relative_path,
                error.message,
                extra={"file_path": relative_path, "error_type": error.type.value},
            )
            return self._result(task, started, errors=[error])

        context = ModelDetectionContext(
            file=identity.model_copy(update={"content_hash": content_hash}),
            content=content,
            project_root=task.project_root,
        )
        observations: list[ModelPatternObservation] = []
        violations: list[ModelRawViolation] = []
        metadata: list[DetectorMetadata] = []
        errors: list[ModelScanError] = []
        detectors_run: list[str] = []

        for detector_id, detector in self._detectors or []:
            if detector.languages and identity.language not in detector.languages:
                continue
            try:
                result = detector.detect(context)
            except Exception as e:
                failure = DetectorError.from_exception(detector_id, relative_path, e)
                failure.__cause__ = e
                error = detector_scan_error(failure)
                errors.append(error)
                logger.warning(
                    "%s",
                    error.message,
                    extra={
                        "file_path": relative_path,
                        "error_type": error.type.value,
                        "worker_id": self.worker_id,
                    },
                )
                if not failure.recoverable:
                    # the file as a whole is unusable
                    return self._result(
                        task, started, content_hash=content_hash, errors=errors
                    )
                continue
            detectors_run.append(detector_id)
            if result is None:
                continue
            observations.extend(
                self._own_file_only(detector_id, relative_path, result.observations)
            )
            violations.extend(
                self._own_file_only(detector_id, relative_path, result.violations)
            )
            if result.metadata is not None:
                metadata.append(result.metadata)

        return self._result(
            task,
            started,
            content_hash=content_hash,
            observations=sorted(observations, key=lambda o: o.sort_key()),
            violations=sorted(violations, key=lambda v: v.sort_key()),
            metadata=metadata,
            errors=errors,
            detectors_run=detectors_run,
        )

    def _own_file_only(
        self, detector_id: str, relative_path: str, items: list[T]
    ) -> list[T]:
        kept = [item for item in items if item.file == relative_path]
        if len(kept) != len(items):
            logger.warning(
                "Detector %s reported %d entries for other files; dropped",
                detector_id,
                len(items) - len(kept),
                extra={"file_path": relative_path, "worker_id": self.worker_id},
            )
        return kept

    def _result(
        self,
        task: ModelDetectorWorkerTask,
        started: float,
        **fields: object,
    ) -> ModelDetectorWorkerResult:
        return ModelDetectorWorkerResult(
            file=task.file,
            duration_ms=(time.perf_counter() - started) * 1000,
            worker_id=self.worker_id,
            **fields,
        )


__all__ = ["DetectorWorker"]
