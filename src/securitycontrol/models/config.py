"""Typed views over the scoring and testing configuration sections."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field

from .control import ControlStatus

Fraction = Annotated[float, Field(ge=0.0, le=1.0)]


class ScoringConfig(BaseModel):
    """Constants used by the control scorer.

    Statuses missing from ``status_effectiveness`` (deprecated, by
    default) fall back to ``default_effectiveness``.
    """

    status_effectiveness: dict[ControlStatus, Fraction] = {
        ControlStatus.IMPLEMENTED: 0.9,
        ControlStatus.PARTIALLY_IMPLEMENTED: 0.6,
        ControlStatus.NOT_IMPLEMENTED: 0.0,
    }
    default_effectiveness: float = Field(default=0.7, ge=0.0, le=1.0)
    verification_window_months: int = Field(default=6, ge=1, le=1200)
    base_confidence: float = 0.5
    evidence_bonus: float = 0.2
    clean_bonus: float = 0.3
    issue_penalty: float = Field(default=0.1, ge=0.0)
    effective_threshold: float = Field(default=0.9, ge=0.0, le=1.0)
    partial_threshold: float = Field(default=0.7, ge=0.0, le=1.0)


class CheckConfig(BaseModel):
    """Effectiveness assigned to passed and failed control tests."""

    pass_effectiveness: float = Field(default=0.8, ge=0.0, le=1.0)
    fail_effectiveness: float = Field(default=0.0, ge=0.0, le=1.0)
