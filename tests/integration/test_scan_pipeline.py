# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Integration tests for ScanPipeline.

Each test drives the full flow (scanner, aggregation, rule engine, tracker
and repositories) over in-memory files read by ``InMemoryFileReader`` and
analysed by ``MarkerDetector``.
"""

from __future__ import annotations

import asyncio
import errno
import threading

import pytest

from omnidrift.enums import (
    EnumConfidenceLevel,
    EnumDetectorCategory,
    EnumScanErrorType,
    EnumSeverity,
    EnumVariantScope,
    EnumViolationState,
)
from omnidrift.exceptions import ConfigurationError
from omnidrift.models import (
    ModelDetectionContext,
    ModelDetectorResult,
    ModelFileIdentity,
)
from omnidrift.runtime import ModelProjectConfig, ScanInProgressError, ScanPipeline
from omnidrift.scanner import DetectorRegistry
from omnidrift.variants import VariantManager
from tests.fixtures import InMemoryFileReader, MarkerDetector, make_identity

LABELS = {"try-catch": "try/catch", "promise-catch": ".catch() chaining"}

TRY_CATCH = "function load() {\n  error-handling-style=try-catch\n}\n"
PROMISE_CATCH = "function load() {\n  error-handling-style=promise-catch\n}\n"


def _labelled_detector() -> MarkerDetector:
    return MarkerDetector(labels=LABELS)


def _registry() -> DetectorRegistry:
    return DetectorRegistry.from_factories({"test/markers": _labelled_detector})


def _style_files(count: int = 10, outliers: int = 2) -> dict[str, str]:
    return {
        f"src/file{i:03d}.ts": TRY_CATCH if i < count - outliers else PROMISE_CATCH
        for i in range(count)
    }


def _identities(files: dict[str, str]) -> list[ModelFileIdentity]:
    return [make_identity(path) for path in files]


def _pipeline(
    files: dict[str, str],
    config: ModelProjectConfig | None = None,
    *,
    registry: DetectorRegistry | None = None,
    failures: dict[str, Exception] | None = None,
    variant_manager: VariantManager | None = None,
) -> ScanPipeline:
    return ScanPipeline(
        registry or _registry(),
        config or ModelProjectConfig(worker_count=4),
        file_reader=InMemoryFileReader(files, failures),
        variant_manager=variant_manager,
    )


@pytest.mark.integration
class TestScanPipelineFullPass:
    """End-to-end behaviour of a full pass."""

    @pytest.mark.asyncio
    async def test_dominant_style_flags_outliers(self) -> None:
        """8 try/catch files and 2 .catch() files yield two warnings."""
        files = _style_files()
        pipeline = _pipeline(files)

        results = await pipeline.scan(_identities(files))

        assert results.success is True
        assert results.partial is False
        (pattern,) = results.patterns
        assert pattern.dominant_variant == "try-catch"
        assert pattern.confidence == pytest.approx(0.666667)
        assert pattern.confidence_level == EnumConfidenceLevel.LOW
        assert [v.file for v in results.violations] == ["src/file008.ts", "src/file009.ts"]
        for violation in results.violations:
            assert violation.expected == "try/catch"
            assert violation.actual == ".catch() chaining"
            assert violation.severity == EnumSeverity.WARNING
            assert violation.range.start.line == 1
        assert results.count_by_severity(EnumSeverity.WARNING) == 2
        assert results.stats.files_scanned == 10

    @pytest.mark.asyncio
    async def test_escalation_after_prior_occurrences(self) -> None:
        """The 10th pass still warns; the 11th escalates to error."""
        files = _style_files()
        config = ModelProjectConfig.load(
            {
                "worker_count": 2,
                "severity": {
                    "escalation": {
                        "enabled": True,
                        "rules": [{"from": "warning", "to": "error", "afterCount": 10}],
                    }
                },
            }
        )
        pipeline = _pipeline(files, config)

        for _ in range(9):
            await pipeline.scan(_identities(files))
        tenth = await pipeline.scan(_identities(files))
        eleventh = await pipeline.scan(_identities(files))

        assert {v.severity for v in tenth.violations} == {EnumSeverity.WARNING}
        assert {v.occurrences for v in tenth.violations} == {10}
        assert {v.severity for v in eleventh.violations} == {EnumSeverity.ERROR}
        assert {v.state for v in eleventh.violations} == {EnumViolationState.ESCALATED}

    @pytest.mark.asyncio
    async def test_permission_denied_file(self) -> None:
        """One unreadable file fails the pass but keeps every other result."""
        files = _style_files(count=100, outliers=20)
        unreadable = "src/file042.ts"
        pipeline = _pipeline(
            files,
            failures={unreadable: PermissionError(errno.EACCES, "Permission denied")},
        )

        results = await pipeline.scan(_identities(files))

        assert results.success is False
        assert len(results.errors) == 1
        (error,) = results.errors
        assert error.path == unreadable
        assert error.type == EnumScanErrorType.PERMISSION_DENIED
        assert len(results.violations) == 20
        assert {v.file for v in results.violations} == {
            f"src/file{i:03d}.ts" for i in range(80, 100)
        }

    @pytest.mark.asyncio
    async def test_deterministic_across_pipelines(self) -> None:
        """Identical input in fresh pipelines yields identical output."""
        files = _style_files()

        first = await _pipeline(files).scan(_identities(files))
        second = await _pipeline(files, ModelProjectConfig(worker_count=1)).scan(
            list(reversed(_identities(files)))
        )

        assert [v.id for v in first.violations] == [v.id for v in second.violations]
        assert first.patterns == second.patterns

    @pytest.mark.asyncio
    async def test_repeat_scan_counts_occurrences(self) -> None:
        """Rescanning unchanged code reuses ids and counts occurrences."""
        files = _style_files()
        pipeline = _pipeline(files)

        first = await pipeline.scan(_identities(files))
        second = await pipeline.scan(_identities(files))

        assert [v.id for v in first.violations] == [v.id for v in second.violations]
        assert {v.occurrences for v in second.violations} == {2}
        stored = await pipeline.violation_repository.list_all()
        assert {r.id for r in stored} == {v.id for v in second.violations}
        assert [p.id for p in await pipeline.pattern_repository.list_all()] == [
            "error-handling-style"
        ]

    @pytest.mark.asyncio
    async def test_approved_variant_suppresses(self) -> None:
        """A file-scoped variant moves that file's violation to suppressed."""
        files = _style_files()
        variants = VariantManager()
        variants.create(
            pattern_id="error-handling-style",
            name="promise wrapper",
            reason="Wraps a promise-only SDK",
            scope=EnumVariantScope.FILE,
            scope_value="src/file009.ts",
        )
        pipeline = _pipeline(files, variant_manager=variants)

        results = await pipeline.scan(_identities(files))

        assert [v.file for v in results.violations] == ["src/file008.ts"]
        assert [v.file for v in results.suppressed] == ["src/file009.ts"]
        assert results.pattern_health[0].suppressed == 1

    @pytest.mark.asyncio
    async def test_ai_context_for_violation(self) -> None:
        """Registered categories get a request context from the last pass."""
        files = _style_files()
        config = ModelProjectConfig(
            worker_count=2, ai_explain_categories=[EnumDetectorCategory.ERRORS]
        )
        pipeline = _pipeline(files, config)

        results = await pipeline.scan(_identities(files))
        violation = results.violations[0]
        context = pipeline.ai_context(violation)

        assert violation.ai_explain_available is True
        assert violation.ai_fix_available is False
        assert context is not None
        assert context.pattern is not None
        assert context.pattern.id == "error-handling-style"
        assert context.snippet is not None
        assert "promise-catch" in context.snippet.code
        assert pipeline.ai_context(violation, purpose="fix") is None


@pytest.mark.integration
class TestIncrementalRescan:
    """Tests for rescan_files."""

    @pytest.mark.asyncio
    async def test_requires_incremental(self) -> None:
        """rescan_files is refused unless incremental analysis is enabled."""
        pipeline = _pipeline({})

        with pytest.raises(ConfigurationError):
            await pipeline.rescan_files([])

    @pytest.mark.asyncio
    async def test_changed_and_deleted_files(self) -> None:
        """Fixed and deleted files resolve their violations."""
        files = _style_files()
        pipeline = _pipeline(files, ModelProjectConfig(worker_count=2, incremental=True))
        first = await pipeline.scan(_identities(files))
        by_file = {v.file: v.id for v in first.violations}

        reader = pipeline.file_reader
        assert isinstance(reader, InMemoryFileReader)
        reader.files["src/file008.ts"] = TRY_CATCH
        del reader.files["src/file009.ts"]

        results = await pipeline.rescan_files(
            [make_identity("src/file008.ts")], deleted=["src/file009.ts"]
        )

        assert results.violations == []
        assert results.stats.total_files == 9
        assert results.stats.files_scanned == 1
        (pattern,) = results.patterns
        assert pattern.frequency == 9
        for violation_id in by_file.values():
            record = await pipeline.violation_repository.get(violation_id)
            assert record is not None
            assert record.state == EnumViolationState.RESOLVED

    @pytest.mark.asyncio
    async def test_unchanged_files_not_recounted(self) -> None:
        """Only rescanned files add occurrences."""
        files = _style_files()
        pipeline = _pipeline(files, ModelProjectConfig(worker_count=2, incremental=True))
        await pipeline.scan(_identities(files))

        results = await pipeline.rescan_files([make_identity("src/file008.ts")])

        occurrences = {v.file: v.occurrences for v in results.violations}
        assert occurrences == {"src/file008.ts": 2, "src/file009.ts": 1}

    @pytest.mark.asyncio
    async def test_suppressed_in_unchanged_file_not_recounted(self) -> None:
        """A suppressed violation in an unchanged file keeps its count and state."""
        files = _style_files()
        variants = VariantManager()
        variants.create(
            pattern_id="error-handling-style",
            name="promise wrapper",
            reason="Wraps a promise-only SDK",
            scope=EnumVariantScope.FILE,
            scope_value="src/file009.ts",
        )
        pipeline = _pipeline(
            files,
            ModelProjectConfig(worker_count=2, incremental=True),
            variant_manager=variants,
        )
        await pipeline.scan(_identities(files))

        for _ in range(3):
            results = await pipeline.rescan_files([make_identity("src/file008.ts")])

        (suppressed,) = results.suppressed
        assert suppressed.file == "src/file009.ts"
        assert suppressed.occurrences == 1
        record = await pipeline.violation_repository.get(suppressed.id)
        assert record is not None
        assert record.occurrences == 1
        assert record.state == EnumViolationState.SUPPRESSED
        assert {v.file: v.occurrences for v in results.violations} == {"src/file008.ts": 4}



@pytest.mark.integration
class TestScanConcurrency:
    """Tests for scan serialization and cancellation."""

    @pytest.mark.asyncio
    async def test_scan_in_progress(self) -> None:
        """A second scan that will not wait is refused while one runs."""
        started = threading.Event()
        release = threading.Event()

        class BlockingDetector(MarkerDetector):
            def detect(self, context: ModelDetectionContext) -> ModelDetectorResult | None:
                started.set()
                release.wait(timeout=5)
                return super().detect(context)

        files = _style_files()
        pipeline = _pipeline(
            files,
            ModelProjectConfig(worker_count=1),
            registry=DetectorRegistry.from_factories({"test/markers": BlockingDetector}),
        )

        running = asyncio.create_task(pipeline.scan(_identities(files)))
        try:
            assert await asyncio.to_thread(started.wait, 5) is True
            assert pipeline.is_scanning is True
            with pytest.raises(ScanInProgressError):
                await pipeline.scan(_identities(files), wait=False)
        finally:
            release.set()
        results = await running

        assert results.success is True
        assert pipeline.is_scanning is False

    @pytest.mark.asyncio
    async def test_cancelled_scan_is_partial(self) -> None:
        """A stopped pass is partial and leaves the stores untouched."""
        holder: list[ScanPipeline] = []

        class StoppingDetector(MarkerDetector):
            def detect(self, context: ModelDetectionContext) -> ModelDetectorResult | None:
                holder[0].request_stop()
                return super().detect(context)

        files = _style_files()
        pipeline = _pipeline(
            files,
            ModelProjectConfig(worker_count=1),
            registry=DetectorRegistry.from_factories({"test/markers": StoppingDetector}),
        )
        holder.append(pipeline)

        results = await pipeline.scan(_identities(files))

        assert results.partial is True
        assert results.success is False
        assert results.stats.cancelled is True
        assert len(results.files) == 1
        assert await pipeline.pattern_repository.list_all() == []
        assert await pipeline.violation_repository.list_all() == []
