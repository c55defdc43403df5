"""Security control data models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ControlCategory(str, Enum):
    PREVENTIVE = "preventive"
    DETECTIVE = "detective"
    CORRECTIVE = "corrective"
    DETERRENT = "deterrent"
    RECOVERY = "recovery"


class ControlType(str, Enum):
    TECHNICAL = "technical"
    ADMINISTRATIVE = "administrative"
    PHYSICAL = "physical"


class ControlStatus(str, Enum):
    IMPLEMENTED = "implemented"
    PARTIALLY_IMPLEMENTED = "partially_implemented"
    NOT_IMPLEMENTED = "not_implemented"
    DEPRECATED = "deprecated"


class EffectivenessStatus(str, Enum):
    EFFECTIVE = "EFFECTIVE"
    PARTIALLY_EFFECTIVE = "PARTIALLY_EFFECTIVE"
    INEFFECTIVE = "INEFFECTIVE"


class IssueKind(str, Enum):
    """A failed control check, with the action that resolves it."""

    MISSING_EVIDENCE = "missing_evidence"
    STALE_VERIFICATION = "stale_verification"
    MISSING_OWNER = "missing_owner"

    def describe(self, window_months: int = 6) -> str:
        if self is IssueKind.MISSING_EVIDENCE:
            return "No evidence provided for control implementation"
        if self is IssueKind.STALE_VERIFICATION:
            return f"Control not verified in last {window_months} months"
        return "Control owner not assigned"

    @property
    def recommendation(self) -> str:
        return _RECOMMENDATIONS[self]


_RECOMMENDATIONS: dict[IssueKind, str] = {
    IssueKind.MISSING_EVIDENCE: "Provide evidence of control implementation",
    IssueKind.STALE_VERIFICATION: "Schedule control verification",
    IssueKind.MISSING_OWNER: "Assign control owner",
}


class SecurityControl(BaseModel):
    """A security control record. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    category: ControlCategory
    type: ControlType
    sub_category: str = ""
    risk_reduction: float = Field(default=0.0, ge=0.0, le=1.0)
    implementation: str = ""
    verification: str = ""
    maintenance: str = ""
    owner: str = ""
    status: ControlStatus
    last_verified: Optional[datetime] = None
    next_review: Optional[datetime] = None
    evidence: list[str] = []
    references: list[str] = []


class ControlValidationResult(BaseModel):
    """Outcome of scoring one control."""

    sequence: int
    control_id: str
    control_name: str
    status: EffectivenessStatus
    effectiveness: float = Field(ge=0.0, le=1.0)
    confidence: float = Field(ge=0.0, le=1.0)
    issue_kinds: list[IssueKind] = []
    issues: list[str] = []
    evidence: list[str] = []
    recommendations: list[str] = []
    validated_at: datetime
