"""Control test data models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ValidationMethod(str, Enum):
    DOCUMENTATION = "documentation"
    INTERVIEW = "interview"
    OBSERVATION = "observation"
    TESTING = "testing"
    AUTOMATION = "automation"


class TestOutcome(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"


class ControlTest(BaseModel):
    """A recorded verification procedure for a control."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    method: ValidationMethod
    steps: list[str] = []
    expected_result: str = ""
    actual_result: str = ""
    passed: bool = False
    notes: str = ""
    tested_by: str = ""
    tested_at: Optional[datetime] = None


class ValidationResult(BaseModel):
    sequence: int
    id: str
    control_id: str
    control_name: str
    method: ValidationMethod
    test_passed: bool
    result: TestOutcome
    effectiveness: float = Field(ge=0.0, le=1.0)
    risk_remaining: float = Field(ge=0.0, le=1.0)
    recommendations: list[str] = []
    validated_at: datetime
