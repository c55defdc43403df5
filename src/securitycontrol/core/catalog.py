"""Built-in control and control test definitions.

Every call builds fresh records so callers never share mutable lists.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..models.control import ControlCategory, ControlStatus, ControlType, SecurityControl
from ..models.control_test import ControlTest, ValidationMethod
from ..utils.dates import months_ago, shift_months


def create_common_controls(now: Optional[datetime] = None) -> list[SecurityControl]:
    """Return ctrl-001..004, all implemented and recently verified."""
    now = now or datetime.now()
    return [
        SecurityControl(
            id="ctrl-001",
            name="Access Control Policy",
            description="Policy governing access to systems and data",
            category=ControlCategory.PREVENTIVE,
            type=ControlType.ADMINISTRATIVE,
            sub_category="Access Management",
            risk_reduction=0.3,
            implementation="Documented access control policy enforced through IAM",
            verification="Review policy documents and access logs",
            owner="Security Team",
            status=ControlStatus.IMPLEMENTED,
            last_verified=months_ago(now, 3),
            next_review=shift_months(now, 3),
            evidence=["policy-access-control.pdf", "iam-configuration.json"],
            references=["NIST-800-53-AC-1"],
        ),
        SecurityControl(
            id="ctrl-002",
            name="Multi-Factor Authentication",
            description="MFA for all user access to systems",
            category=ControlCategory.PREVENTIVE,
            type=ControlType.TECHNICAL,
            sub_category="Authentication",
            risk_reduction=0.4,
            implementation="MFA enforced for all user accounts",
            verification="Test MFA enforcement",
            owner="IT Operations",
            status=ControlStatus.IMPLEMENTED,
            last_verified=months_ago(now, 1),
            next_review=shift_months(now, 5),
            evidence=["mfa-configuration.json", "audit-log.json"],
            references=["NIST-800-53-IA-2"],
        ),
        SecurityControl(
            id="ctrl-003",
            name="Security Monitoring",
            description="Continuous security monitoring of systems",
            category=ControlCategory.DETECTIVE,
            type=ControlType.TECHNICAL,
            sub_category="Monitoring",
            risk_reduction=0.35,
            implementation="SIEM and IDS/IPS deployed",
            verification="Review monitoring dashboards",
            owner="SOC Team",
            status=ControlStatus.IMPLEMENTED,
            last_verified=months_ago(now, 2),
            next_review=shift_months(now, 4),
            evidence=["siem-config.json", "monitoring-report.pdf"],
            references=["NIST-800-53-AU-6"],
        ),
        SecurityControl(
            id="ctrl-004",
            name="Incident Response Plan",
            description="Documented incident response procedures",
            category=ControlCategory.CORRECTIVE,
            type=ControlType.ADMINISTRATIVE,
            sub_category="Incident Response",
            risk_reduction=0.25,
            implementation="IR plan documented and tested",
            verification="Review IR plan and test results",
            owner="Security Team",
            status=ControlStatus.IMPLEMENTED,
            last_verified=months_ago(now, 4),
            next_review=shift_months(now, 2),
            evidence=["ir-plan.pdf", "test-results.pdf"],
            references=["NIST-800-53-IR-1"],
        ),
    ]


def create_common_control_tests(now: Optional[datetime] = None) -> list[ControlTest]:
    now = now or datetime.now()
    return [
        ControlTest(
            id="test-001",
            name="Access Control Verification",
            description="Verify access control policies are enforced",
            method=ValidationMethod.TESTING,
            steps=[
                "Attempt unauthorized access",
                "Verify access is denied",
                "Review access logs",
            ],
            expected_result="Unauthorized access denied",
            passed=True,
            notes="All access controls functioning correctly",
            tested_by="Security Team",
            tested_at=now,
        ),
        ControlTest(
            id="test-002",
            name="Encryption Verification",
            description="Verify data encryption at rest and in transit",
            method=ValidationMethod.TESTING,
            steps=[
                "Check encryption configuration",
                "Verify certificates",
                "Test data encryption",
            ],
            expected_result="Data encrypted correctly",
            passed=True,
            notes="Encryption properly configured",
            tested_by="Security Team",
            tested_at=now,
        ),
        ControlTest(
            id="test-003",
            name="Monitoring Verification",
            description="Verify security monitoring is active",
            method=ValidationMethod.OBSERVATION,
            steps=[
                "Check monitoring dashboards",
                "Verify alert configuration",
                "Test alert generation",
            ],
            expected_result="Monitoring active and alerts working",
            passed=True,
            notes="All monitoring systems operational",
            tested_by="SOC Team",
            tested_at=now,
        ),
        ControlTest(
            id="test-004",
            name="Backup Verification",
            description="Verify backup and recovery procedures",
            method=ValidationMethod.TESTING,
            steps=[
                "Check backup status",
                "Test data restoration",
                "Verify recovery time",
            ],
            expected_result="Backups successful and recoverable",
            passed=True,
            notes="Backup and recovery working correctly",
            tested_by="IT Operations",
            tested_at=now,
        ),
    ]
