# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""OmniDrift - learn a codebase's own conventions and flag drift from them.

The engine turns per-file detector observations into learned patterns with a
confidence score, severity-scored violations for outliers, ranked quick fixes
and durable suppression of approved deviations.

Usage:
    from omnidrift.runtime import ModelProjectConfig, ScanPipeline
    from omnidrift.scanner import DetectorRegistry

    pipeline = ScanPipeline(
        project_root="/path/to/project",
        config=ModelProjectConfig(),
        registry=DetectorRegistry.from_detectors([MyDetector()]),
    )
    results = await pipeline.scan(files)
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
