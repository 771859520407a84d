# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Violation tracker: occurrence counters and lifecycle history per violation id.

The tracker is the only owner of occurrence counts. A pass is staged between
``begin_pass`` and ``commit_pass``; ``abort_pass`` discards it, so a partial
or cancelled scan never changes committed history.

Lifecycle:
    NEW -> ESCALATED* -> SUPPRESSED | RESOLVED | IGNORED

A terminal id that is observed again restarts at NEW with its ``first_seen``
and prior occurrence count reattached.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime

from omnidrift.enums import EnumSeverity, EnumViolationState
from omnidrift.models import ModelViolationCandidate, ModelViolationRecord
from omnidrift.utils import utc_now

logger = logging.getLogger(__name__)


class ViolationTracker:
    """Track violation history across scan passes.

    Args:
        records: Previously persisted history to start from.
        clock: Returns the current time; injectable for tests.
    """

    def __init__(
        self,
        records: Iterable[ModelViolationRecord] = (),
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._records: dict[str, ModelViolationRecord] = {r.id: r for r in records}
        self._staged: dict[str, ModelViolationRecord] = {}
        self._clock = clock
        self._in_pass = False

    @property
    def in_pass(self) -> bool:
        return self._in_pass

    def get(self, violation_id: str) -> ModelViolationRecord | None:
        """Committed record for ``violation_id``."""
        return self._records.get(violation_id)

    def records(self) -> list[ModelViolationRecord]:
        return [record for _, record in sorted(self._records.items())]

    def load(self, records: Iterable[ModelViolationRecord]) -> None:
        """Merge persisted records; existing in-memory records win."""
        for record in records:
            self._records.setdefault(record.id, record)

    # =========================================================================
    # Pass lifecycle
    # =========================================================================

    def begin_pass(self) -> None:
        if self._in_pass:
            logger.warning("Starting a new tracker pass discards an uncommitted pass")
        self._staged = {}
        self._in_pass = True

    def observe(
        self,
        candidate: ModelViolationCandidate,
        *,
        count: bool = True,
    ) -> ModelViolationRecord:
        """Stage an observation of ``candidate`` in the current pass.

        Args:
            candidate: The observed candidate.
            count: Whether this pass counts as a new occurrence. Incremental
                passes re-evaluate unchanged files without counting them, and
                an uncounted record keeps its state unless it was resolved.

        Returns:
            The staged record. Observing the same id twice in one pass
            returns the first staged record unchanged.
        """
        if not self._in_pass:
            raise RuntimeError("observe() called outside of a tracker pass")
        staged = self._staged.get(candidate.id)
        if staged is not None:
            return staged

        now = self._clock()
        prior = self._records.get(candidate.id)
        if prior is None:
            record = ModelViolationRecord(
                id=candidate.id,
                pattern_id=candidate.pattern_id,
                file=candidate.file,
                first_seen=now,
                last_seen=now,
                occurrences=1,
                state=EnumViolationState.NEW,
            )
        elif not count and prior.state != EnumViolationState.RESOLVED:
            # still present in an unchanged file
            record = prior
        else:
            state = prior.state
            if state.is_terminal:
                # reappeared: new incarnation with history reattached
                state = EnumViolationState.NEW
            record = prior.model_copy(
                update={
                    "last_seen": now,
                    "occurrences": prior.occurrences + 1,
                    "state": state,
                }
            )
        self._staged[candidate.id] = record
        return record

    def set_state(
        self,
        violation_id: str,
        state: EnumViolationState,
        severity: EnumSeverity | None = None,
    ) -> ModelViolationRecord:
        """Update the state (and optionally severity) of a staged record.

        Invalid transitions (for example escalated back to new) keep the
        current state.
        """
        record = self._staged[violation_id]
        if record.state != state and not record.state.can_transition_to(state):
            logger.debug(
                "Keeping %s for %s, transition to %s is not allowed",
                record.state.value,
                violation_id,
                state.value,
            )
            state = record.state
        update: dict[str, object] = {"state": state}
        if severity is not None:
            update["severity"] = severity
        record = record.model_copy(update=update)
        self._staged[violation_id] = record
        return record

    def commit_pass(self, evaluated_files: Iterable[str]) -> list[ModelViolationRecord]:
        """Commit the staged pass.

        Records in ``evaluated_files`` that were not observed this pass are
        resolved.

        Returns:
            Every record created or changed by the pass, sorted by id.
        """
        if not self._in_pass:
            raise RuntimeError("commit_pass() called outside of a tracker pass")
        files = set(evaluated_files)
        changed: dict[str, ModelViolationRecord] = {}
        for violation_id, record in self._records.items():
            if violation_id in self._staged or record.file not in files:
                continue
            if record.state == EnumViolationState.RESOLVED:
                continue
            changed[violation_id] = record.model_copy(
                update={"state": EnumViolationState.RESOLVED}
            )
        for violation_id, record in self._staged.items():
            if self._records.get(violation_id) != record:
                changed[violation_id] = record
        self._records.update(changed)
        self._staged = {}
        self._in_pass = False
        logger.debug("Committed tracker pass with %d changed records", len(changed))
        return [record for _, record in sorted(changed.items())]

    def abort_pass(self) -> None:
        """Discard the staged pass."""
        self._staged = {}
        self._in_pass = False

    def reset(self) -> None:
        self._records = {}
        self.abort_pass()


__all__ = ["ViolationTracker"]
