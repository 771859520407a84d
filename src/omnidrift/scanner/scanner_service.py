# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Scanner service: distributes files over a fixed-size worker pool.

Architecture:
    The orchestrator fills a queue with one task per file and starts N
    worker coroutines. Each worker owns a ``DetectorWorker`` (its own
    detector instances), warms it up once, then pulls tasks and runs them
    on a thread pool. Workers share nothing but the task queue and the
    result list, both touched only from the event loop.

    Results are sorted by relative path once every worker is done, so the
    outcome does not depend on completion order.

Cancellation:
    ``request_stop()`` lets in-flight files finish and discards the rest of
    the queue; the batch is marked ``cancelled``. ``drop_file()`` discards a
    single file (for example one deleted mid-scan) without touching its
    siblings.
"""

from __future__ import annotations

import asyncio
import fnmatch
import logging
import os
import time
from collections import Counter
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor

from omnidrift.constants import DEFAULT_IGNORE_PATTERNS
from omnidrift.exceptions import ConfigurationError
from omnidrift.models import (
    ModelDetectorWorkerResult,
    ModelDetectorWorkerTask,
    ModelFileIdentity,
    ModelScanBatch,
    ModelScanStats,
)
from omnidrift.protocols import ProtocolFileReader
from omnidrift.scanner.detector_worker import DetectorWorker
from omnidrift.scanner.file_reader import LocalFileReader
from omnidrift.scanner.handler_scan_errors import unexpected_scan_error
from omnidrift.scanner.registry import DetectorRegistry
from omnidrift.utils import normalize_path, utc_now

logger = logging.getLogger(__name__)


def default_worker_count() -> int:
    """Available parallelism, at least 1."""
    return os.cpu_count() or 1


def matches_ignore_pattern(relative_path: str, patterns: Iterable[str]) -> bool:
    """Whether ``relative_path`` matches any ignore glob.

    A pattern also matches below any directory, so ``node_modules/**``
    excludes ``packages/app/node_modules/x.js``.
    """
    path = normalize_path(relative_path)
    return any(
        fnmatch.fnmatchcase(path, pattern) or fnmatch.fnmatchcase(path, f"*/{pattern}")
        for pattern in patterns
    )


class ScannerService:
    """Run registered detectors over a file list in parallel.

    Args:
        registry: Detectors to run; every worker builds its own instances.
        worker_count: Pool size; ``None`` uses the available parallelism.
        ignore_patterns: Globs of relative paths to skip.
        file_reader: Content source; defaults to the local filesystem.
        project_root: Passed to detectors in their context.

    Raises:
        ConfigurationError: If ``worker_count`` is below 1.
    """

    def __init__(
        self,
        registry: DetectorRegistry,
        *,
        worker_count: int | None = None,
        ignore_patterns: Sequence[str] = DEFAULT_IGNORE_PATTERNS,
        file_reader: ProtocolFileReader | None = None,
        project_root: str = ".",
    ) -> None:
        if worker_count is not None and worker_count < 1:
            raise ConfigurationError(f"worker_count must be >= 1, got {worker_count}")
        self.registry = registry
        self.worker_count = worker_count or default_worker_count()
        self.ignore_patterns = tuple(ignore_patterns)
        self.file_reader = file_reader or LocalFileReader()
        self.project_root = project_root
        self._stop = asyncio.Event()
        self._dropped: set[str] = set()

    # =========================================================================
    # Control
    # =========================================================================

    def request_stop(self) -> None:
        """Finish in-flight files and discard the remaining queue."""
        self._stop.set()

    def drop_file(self, relative_path: str) -> None:
        """Discard one file from the current scan, queued or in flight."""
        self._dropped.add(normalize_path(relative_path))

    def is_ignored(self, relative_path: str) -> bool:
        return matches_ignore_pattern(relative_path, self.ignore_patterns)

    # =========================================================================
    # Scanning
    # =========================================================================

    async def scan(self, files: Sequence[ModelFileIdentity]) -> ModelScanBatch:
        """Scan ``files`` and return the per-file results.

        Per-file failures are reported on the results, never raised. The
        same relative path given twice is scanned once.
        """
        started_at = utc_now()
        started = time.perf_counter()
        self._stop.clear()
        self._dropped = set()

        queue: asyncio.Queue[ModelDetectorWorkerTask] = asyncio.Queue()
        skipped: list[str] = []
        seen: set[str] = set()
        for identity in files:
            relative_path = normalize_path(identity.relative_path)
            if relative_path in seen:
                continue
            seen.add(relative_path)
            if self.is_ignored(relative_path):
                skipped.append(relative_path)
                continue
            if relative_path != identity.relative_path:
                identity = identity.model_copy(update={"relative_path": relative_path})
            queue.put_nowait(
                ModelDetectorWorkerTask(
                    file=identity,
                    project_root=self.project_root,
                    sequence=queue.qsize(),
                )
            )

        queued = queue.qsize()
        pool_size = min(self.worker_count, queued)
        results: list[ModelDetectorWorkerResult] = []
        if pool_size:
            logger.info(
                "Scanning %d files with %d workers (%d skipped by ignore rules)",
                queued,
                pool_size,
                len(skipped),
            )
            with ThreadPoolExecutor(
                max_workers=pool_size, thread_name_prefix="omnidrift-worker"
            ) as executor:
                try:
                    await asyncio.gather(
                        *(
                            self._run_worker(worker_id, queue, executor, results)
                            for worker_id in range(pool_size)
                        )
                    )
                except BaseException:
                    self.request_stop()
                    raise

        cancelled = self._stop.is_set() and not queue.empty()
        results = sorted(
            (r for r in results if r.file.relative_path not in self._dropped),
            key=lambda r: r.file.relative_path,
        )
        stats = ModelScanStats(
            total_files=len(seen),
            files_scanned=len(results),
            files_skipped=len(skipped),
            error_count=sum(len(r.errors) for r in results),
            duration_ms=(time.perf_counter() - started) * 1000,
            files_by_language=dict(sorted(Counter(r.file.language for r in results).items())),
            started_at=started_at,
            finished_at=utc_now(),
            cancelled=cancelled,
        )
        if cancelled:
            logger.warning(
                "Scan stopped early: %d of %d files scanned", len(results), queued
            )
        else:
            logger.info(
                "Scanned %d files in %.1f ms with %d errors",
                stats.files_scanned,
                stats.duration_ms,
                stats.error_count,
            )
        return ModelScanBatch(results=results, skipped=sorted(skipped), stats=stats)

    async def _run_worker(
        self,
        worker_id: int,
        queue: asyncio.Queue[ModelDetectorWorkerTask],
        executor: ThreadPoolExecutor,
        results: list[ModelDetectorWorkerResult],
    ) -> None:
        loop = asyncio.get_running_loop()
        worker = DetectorWorker(worker_id, self.registry, self.file_reader)
        await loop.run_in_executor(executor, worker.warm_up)

        processed = 0
        while not self._stop.is_set():
            try:
                task = queue.get_nowait()
            except asyncio.QueueEmpty:
                break
            relative_path = task.file.relative_path
            if relative_path in self._dropped:
                continue
            try:
                result = await loop.run_in_executor(executor, worker.process, task)
            except Exception as e:
                logger.exception(
                    "Worker %d failed on %s",
                    worker_id,
                    relative_path,
                    extra={"file_path": relative_path, "worker_id": worker_id},
                )
                result = ModelDetectorWorkerResult(
                    file=task.file,
                    errors=[unexpected_scan_error(relative_path, e)],
                    worker_id=worker_id,
                )
            results.append(result)
            processed += 1
            logger.debug(
                "Worker %d scanned %s",
                worker_id,
                relative_path,
                extra={"file_path": relative_path, "worker_id": worker_id},
            )
        logger.debug(
            "Worker %d finished after %d files",
            worker_id,
            processed,
            extra={"worker_id": worker_id},
        )


__all__ = ["ScannerService", "default_worker_count", "matches_ignore_pattern"]
