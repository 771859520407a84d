# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""End-to-end scan pipeline for one project.

Flow:
    files -> ScannerService (parallel) -> per-file results
          -> aggregate_patterns (single-threaded, full observation set)
          -> RuleEngine (severity, variants, tracking, quick fixes)
          -> ModelScanResults

Shared state:
    One pipeline owns one project. Scans are serialized by the pipeline's
    lock, and the tracker and repositories are written only after a pass
    that was not cancelled or aborted. A cancelled pass returns what it
    collected with ``partial=True`` and leaves every store untouched.

Usage:
    pipeline = ScanPipeline(registry, ModelProjectConfig.from_yaml("drift.yaml"))
    results = await pipeline.scan(files)
    if not results.success:
        for error in results.errors:
            ...
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence
from typing import Literal

from omnidrift.aggregation import AggregationValidationError, aggregate_patterns
from omnidrift.exceptions import ConfigurationError
from omnidrift.models import (
    ModelAggregatedPattern,
    ModelAiRequestContext,
    ModelDetectorWorkerResult,
    ModelFileIdentity,
    ModelFileScanResult,
    ModelRuleEvaluationError,
    ModelScanBatch,
    ModelScanError,
    ModelScanResults,
    ModelScanStats,
    ModelViolation,
    ModelViolationRecord,
)
from omnidrift.protocols import (
    ProtocolAiCapabilities,
    ProtocolFileReader,
    ProtocolPatternRepository,
    ProtocolViolationRepository,
)
from omnidrift.quick_fix import QuickFixGenerator
from omnidrift.repositories import (
    InMemoryPatternRepository,
    InMemoryViolationRepository,
)
from omnidrift.rules import (
    CategoryAiCapabilities,
    FixCandidateProvider,
    RuleEngine,
    RuleEvaluationAbortedError,
    ViolationTracker,
    build_ai_context,
    summarize_violations,
)
from omnidrift.runtime.exceptions import ScanInProgressError
from omnidrift.runtime.logging_config import configure_logging
from omnidrift.runtime.model_project_config import ModelProjectConfig
from omnidrift.scanner import DetectorRegistry, LocalFileReader, ScannerService
from omnidrift.severity import SeverityManager
from omnidrift.utils import normalize_path, sanitize_message
from omnidrift.variants import VariantManager

logger = logging.getLogger(__name__)


def _file_result(result: ModelDetectorWorkerResult) -> ModelFileScanResult:
    return ModelFileScanResult(
        file=result.file,
        content_hash=result.content_hash,
        observation_count=len(result.observations),
        violation_count=len(result.violations),
        errors=result.errors,
        duration_ms=result.duration_ms,
    )


class ScanPipeline:
    """Orchestrate scanning, aggregation and evaluation for one project.

    Args:
        registry: Detectors to run.
        config: Project configuration; defaults apply when omitted.
        project_root: Root passed to detectors.
        file_reader: Content source for scanning and quick fixes.
        pattern_repository: Store for aggregated patterns.
        violation_repository: Store for violation history.
        variant_manager: Approved variants; loaded from its repository
            before the first scan.
        ai_capabilities: Registered AI capabilities; defaults to the
            categories listed in the configuration.
        fix_candidates: Explicit fix candidates per violation.
    """

    def __init__(
        self,
        registry: DetectorRegistry,
        config: ModelProjectConfig | None = None,
        *,
        project_root: str = ".",
        file_reader: ProtocolFileReader | None = None,
        pattern_repository: ProtocolPatternRepository | None = None,
        violation_repository: ProtocolViolationRepository | None = None,
        variant_manager: VariantManager | None = None,
        ai_capabilities: ProtocolAiCapabilities | None = None,
        fix_candidates: FixCandidateProvider | None = None,
    ) -> None:
        self.config = config or ModelProjectConfig()
        self.project_root = project_root
        configure_logging(self.config.log_level)

        self.file_reader = file_reader or LocalFileReader()
        self.scanner = ScannerService(
            registry,
            worker_count=self.config.worker_count,
            ignore_patterns=self.config.ignore_patterns,
            file_reader=self.file_reader,
            project_root=project_root,
        )
        self.pattern_repository = pattern_repository or InMemoryPatternRepository()
        self.violation_repository = violation_repository or InMemoryViolationRepository()
        self.variant_manager = variant_manager or VariantManager()
        self.tracker = ViolationTracker()
        self.rule_engine = RuleEngine(
            severity_manager=SeverityManager(self.config.severity),
            variant_manager=self.variant_manager,
            tracker=self.tracker,
            quick_fix_generator=QuickFixGenerator(
                min_confidence=self.config.min_fix_confidence,
                max_fixes_per_violation=self.config.max_fixes_per_violation,
            ),
            ai_capabilities=ai_capabilities
            or CategoryAiCapabilities(
                self.config.ai_explain_categories, self.config.ai_fix_categories
            ),
            ignored_pattern_ids=self.config.ignored_pattern_ids,
        )
        self.fix_candidates = fix_candidates

        self._lock = asyncio.Lock()
        self._state_loaded = False
        self._file_results: dict[str, ModelDetectorWorkerResult] = {}
        self._paths: dict[str, str] = {}
        self._last_results: ModelScanResults | None = None

    @property
    def is_scanning(self) -> bool:
        return self._lock.locked()

    @property
    def last_results(self) -> ModelScanResults | None:
        return self._last_results

    def request_stop(self) -> None:
        """Stop the running scan after in-flight files; the pass is partial."""
        self.scanner.request_stop()

    # =========================================================================
    # Scans
    # =========================================================================

    async def scan(
        self, files: Sequence[ModelFileIdentity], *, wait: bool = True
    ) -> ModelScanResults:
        """Run a full pass over ``files``.

        Args:
            files: Every file of the project.
            wait: Wait for a running scan to finish instead of raising.

        Raises:
            ScanInProgressError: If a scan is running and ``wait`` is False.
        """
        if not wait and self._lock.locked():
            raise ScanInProgressError(self.project_root)
        async with self._lock:
            await self._load_state()
            batch = await self.scanner.scan(files)
            self._remember_paths(batch)
            cancelled = batch.stats.cancelled
            if not cancelled:
                self._file_results = {r.file.relative_path: r for r in batch.results}
            results = await self._evaluate(
                batch.results,
                batch.stats,
                cancelled=cancelled,
                counted_files=None,
            )
            self._last_results = results
            return results

    async def rescan_files(
        self,
        changed: Sequence[ModelFileIdentity],
        deleted: Iterable[str] = (),
        *,
        wait: bool = True,
    ) -> ModelScanResults:
        """Rescan changed files and re-aggregate over every known file.

        Only the changed files count as new occurrences; violations in
        deleted files are resolved.

        Raises:
            ConfigurationError: If incremental analysis is disabled.
            ScanInProgressError: If a scan is running and ``wait`` is False.
        """
        if not self.config.incremental:
            raise ConfigurationError(
                "rescan_files() requires incremental analysis to be enabled"
            )
        if not wait and self._lock.locked():
            raise ScanInProgressError(self.project_root)
        async with self._lock:
            await self._load_state()
            batch = await self.scanner.scan(changed)
            self._remember_paths(batch)
            if batch.stats.cancelled:
                logger.warning("Incremental rescan cancelled; known results unchanged")
                results = self._partial_results(batch)
                self._last_results = results
                return results

            removed = {normalize_path(path) for path in deleted}
            # changed files that are now ignored leave the merged set too
            removed.update(batch.skipped)
            for path in removed:
                self._file_results.pop(path, None)
                self._paths.pop(path, None)
            for result in batch.results:
                self._file_results[result.file.relative_path] = result

            merged = [self._file_results[path] for path in sorted(self._file_results)]
            stats = batch.stats.model_copy(
                update={"total_files": len(merged), "files_scanned": len(batch.results)}
            )
            results = await self._evaluate(
                merged,
                stats,
                cancelled=False,
                counted_files={r.file.relative_path for r in batch.results},
                removed_files=sorted(removed),
            )
            self._last_results = results
            return results

    # =========================================================================
    # AI context
    # =========================================================================

    def ai_context(
        self,
        violation: ModelViolation,
        purpose: Literal["explain", "fix"] = "explain",
    ) -> ModelAiRequestContext | None:
        """Request context for ``violation`` from the last results.

        Returns ``None`` when the capability is unavailable for its category.
        """
        pattern = self._last_results.pattern(violation.pattern_id) if self._last_results else None
        return build_ai_context(
            violation, pattern, self._read_content(violation.file), purpose=purpose
        )

    # =========================================================================
    # Internals
    # =========================================================================

    async def _load_state(self) -> None:
        if self._state_loaded:
            return
        await self.variant_manager.load()
        self.tracker.load(await self.violation_repository.list_all())
        self._state_loaded = True

    def _remember_paths(self, batch: ModelScanBatch) -> None:
        for result in batch.results:
            self._paths[result.file.relative_path] = result.file.path

    def _read_content(self, relative_path: str) -> str | None:
        path = self._paths.get(relative_path)
        if path is None:
            return None
        try:
            return self.file_reader.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(
                "Could not re-read %s: %s",
                relative_path,
                sanitize_message(str(e)),
                extra={"file_path": relative_path},
            )
            return None

    async def _evaluate(
        self,
        file_results: Sequence[ModelDetectorWorkerResult],
        stats: ModelScanStats,
        *,
        cancelled: bool,
        counted_files: set[str] | None,
        removed_files: Sequence[str] = (),
    ) -> ModelScanResults:
        scan_errors = [error for result in file_results for error in result.errors]
        files = [_file_result(result) for result in file_results]
        success = not cancelled and all(error.recoverable for error in scan_errors)

        try:
            patterns = aggregate_patterns(
                [o for result in file_results for o in result.observations],
                min_occurrences=self.config.min_occurrences,
                auto_approve_threshold=self.config.auto_approve_threshold,
            )
        except AggregationValidationError as e:
            logger.error("Aggregation failed: %s", e)
            return ModelScanResults(
                files=files,
                errors=scan_errors,
                evaluation_errors=[
                    ModelRuleEvaluationError(
                        message=sanitize_message(str(e)),
                        code="aggregation_failed",
                        recoverable=False,
                    )
                ],
                stats=stats,
                success=False,
                partial=cancelled,
            )

        # files that failed outright keep their tracked violations
        evaluated = [r.file.relative_path for r in file_results if r.success]
        try:
            evaluation = await asyncio.to_thread(
                self.rule_engine.evaluate,
                patterns,
                [v for result in file_results for v in result.violations],
                files=evaluated,
                detector_errors=scan_errors,
                content_provider=self._read_content,
                fix_candidates=self.fix_candidates,
                counted_files=counted_files,
                removed_files=removed_files,
                commit=not cancelled,
            )
        except RuleEvaluationAbortedError as e:
            logger.error("Rule evaluation aborted: %s", e)
            return ModelScanResults(
                files=files,
                patterns=patterns,
                errors=scan_errors,
                evaluation_errors=e.errors,
                summary=e.summary,
                stats=stats,
                success=False,
                partial=cancelled,
            )

        if not cancelled:
            await self._persist(patterns, evaluation.records)

        results = ModelScanResults(
            files=files,
            patterns=patterns,
            violations=evaluation.violations,
            suppressed=evaluation.suppressed,
            fixes=evaluation.fixes,
            errors=scan_errors,
            evaluation_errors=evaluation.errors,
            summary=evaluation.summary,
            violation_summary=summarize_violations(evaluation.violations),
            pattern_health=evaluation.pattern_health,
            stats=stats,
            success=success,
            partial=cancelled,
        )
        logger.info(
            "Pass complete: %d patterns, %d violations, %d suppressed, success=%s",
            len(patterns),
            len(results.violations),
            len(results.suppressed),
            success,
        )
        return results

    async def _persist(
        self,
        patterns: list[ModelAggregatedPattern],
        records: list[ModelViolationRecord],
    ) -> None:
        await self.pattern_repository.replace_all(patterns)
        for record in records:
            await self.violation_repository.upsert(record)
        logger.debug(
            "Persisted %d patterns and %d violation records", len(patterns), len(records)
        )

    @staticmethod
    def _partial_results(batch: ModelScanBatch) -> ModelScanResults:
        errors: list[ModelScanError] = batch.errors
        return ModelScanResults(
            files=[_file_result(result) for result in batch.results],
            errors=errors,
            stats=batch.stats,
            success=False,
            partial=True,
        )


__all__ = ["ScanPipeline"]
