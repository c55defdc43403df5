"""Control registry and scorer.

Holds security control records and scores them on demand. Scoring is a
handful of threshold comparisons over the control's status, evidence,
verification date and owner; nothing is probed on a live system.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from datetime import datetime
from typing import Optional

from ..models.config import ScoringConfig
from ..models.control import (
    ControlCategory,
    ControlStatus,
    ControlValidationResult,
    EffectivenessStatus,
    IssueKind,
    SecurityControl,
)
from ..utils.dates import months_ago, to_local_naive


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def classify(issue_count: int, effectiveness: float, config: ScoringConfig) -> EffectivenessStatus:
    """Map (issue count, effectiveness) to an effectiveness tier.

    - EFFECTIVE: no issues and effectiveness at or above effective_threshold
    - PARTIALLY_EFFECTIVE: effectiveness at or above partial_threshold
    - INEFFECTIVE: everything else
    """
    if issue_count == 0 and effectiveness >= config.effective_threshold:
        return EffectivenessStatus.EFFECTIVE
    if effectiveness >= config.partial_threshold:
        return EffectivenessStatus.PARTIALLY_EFFECTIVE
    return EffectivenessStatus.INEFFECTIVE


def get_exit_code(results: list[ControlValidationResult], exit_codes: dict) -> int:
    """Map the worst result status to a CI exit code."""
    statuses = {r.status for r in results}
    if EffectivenessStatus.INEFFECTIVE in statuses:
        return int(exit_codes.get("ineffective", 1))
    if EffectivenessStatus.PARTIALLY_EFFECTIVE in statuses:
        return int(exit_codes.get("partially_effective", 2))
    return int(exit_codes.get("effective", 0))


class ControlRegistry:
    """Ordered collection of controls plus an append-only result log.

    Duplicate ids are allowed; lookups return the first match.
    """

    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config or ScoringConfig()
        self._clock = clock
        self._controls: list[SecurityControl] = []
        self._results: list[ControlValidationResult] = []
        self._sequence = itertools.count(1)

    def add_control(self, control: SecurityControl) -> None:
        self._controls.append(control)

    def get_controls(self) -> list[SecurityControl]:
        return list(self._controls)

    def get_control(self, control_id: str) -> Optional[SecurityControl]:
        return next((c for c in self._controls if c.id == control_id), None)

    def get_controls_by_category(self, category: ControlCategory) -> list[SecurityControl]:
        return [c for c in self._controls if c.category == category]

    def get_controls_by_status(self, status: ControlStatus) -> list[SecurityControl]:
        return [c for c in self._controls if c.status == status]

    def group_by_category(self) -> dict[ControlCategory, list[SecurityControl]]:
        """Group controls by category, categories in first-seen order."""
        groups: dict[ControlCategory, list[SecurityControl]] = {}
        for control in self._controls:
            groups.setdefault(control.category, []).append(control)
        return groups

    def status_counts(self) -> dict[ControlStatus, int]:
        counts: dict[ControlStatus, int] = {}
        for control in self._controls:
            counts[control.status] = counts.get(control.status, 0) + 1
        return counts

    def get_validation_results(self) -> list[ControlValidationResult]:
        return list(self._results)

    def validate_control(self, control_id: str) -> Optional[ControlValidationResult]:
        """Score a control by id and append the result to the log.

        Returns None (and logs nothing) when no control has that id.
        """
        control = self.get_control(control_id)
        if control is None:
            return None

        result = self.evaluate(control)
        self._results.append(result)
        return result

    def validate_all(self) -> list[ControlValidationResult]:
        """Validate every held control in insertion order."""
        results = []
        for control in self._controls:
            result = self.evaluate(control)
            self._results.append(result)
            results.append(result)
        return results

    def evaluate(self, control: SecurityControl) -> ControlValidationResult:
        """Score a control without recording the result.

        Each call consumes a sequence number, so results stay ordered
        even when they are produced within the same clock tick.
        """
        now = self._clock()
        effectiveness = self.effectiveness_for(control.status)
        issue_kinds = self.identify_issues(control, now)
        confidence = self.calculate_confidence(control, issue_kinds)

        return ControlValidationResult(
            sequence=next(self._sequence),
            control_id=control.id,
            control_name=control.name,
            status=classify(len(issue_kinds), effectiveness, self.config),
            effectiveness=effectiveness,
            confidence=confidence,
            issue_kinds=issue_kinds,
            issues=[kind.describe(self.config.verification_window_months) for kind in issue_kinds],
            evidence=list(control.evidence),
            recommendations=[kind.recommendation for kind in issue_kinds],
            validated_at=now,
        )

    def effectiveness_for(self, status: ControlStatus) -> float:
        value = self.config.status_effectiveness.get(status, self.config.default_effectiveness)
        return clamp(value)

    def identify_issues(self, control: SecurityControl, now: datetime) -> list[IssueKind]:
        """Run the evidence, recency and owner checks, in that order."""
        issues: list[IssueKind] = []

        if not control.evidence:
            issues.append(IssueKind.MISSING_EVIDENCE)

        # Aware and naive timestamps are compared as naive local time
        cutoff = months_ago(to_local_naive(now), self.config.verification_window_months)
        if control.last_verified is None or to_local_naive(control.last_verified) < cutoff:
            issues.append(IssueKind.STALE_VERIFICATION)

        if not control.owner:
            issues.append(IssueKind.MISSING_OWNER)

        return issues

    def calculate_confidence(self, control: SecurityControl, issues: list[IssueKind]) -> float:
        confidence = self.config.base_confidence

        if control.evidence:
            confidence += self.config.evidence_bonus

        if not issues:
            confidence += self.config.clean_bonus
        else:
            confidence -= len(issues) * self.config.issue_penalty

        return clamp(confidence)
