"""Tests for core/catalog.py."""

from __future__ import annotations

from securitycontrol.core.catalog import create_common_control_tests, create_common_controls
from securitycontrol.models.control import ControlStatus
from securitycontrol.models.control_test import ValidationMethod
from securitycontrol.utils.dates import months_ago


class TestCreateCommonControls:
    def test_four_implemented_controls(self, now):
        controls = create_common_controls(now)
        assert [c.id for c in controls] == ["ctrl-001", "ctrl-002", "ctrl-003", "ctrl-004"]
        assert all(c.status == ControlStatus.IMPLEMENTED for c in controls)
        assert all(c.evidence for c in controls)
        assert all(c.owner for c in controls)

    def test_verified_within_four_months(self, now):
        controls = create_common_controls(now)
        assert [c.last_verified for c in controls] == [
            months_ago(now, 3),
            months_ago(now, 1),
            months_ago(now, 2),
            months_ago(now, 4),
        ]

    def test_fresh_lists_per_call(self, now):
        first = create_common_controls(now)
        second = create_common_controls(now)
        first.pop()
        first[0].evidence.append("extra.pdf")
        assert len(second) == 4
        assert second[0].evidence == ["policy-access-control.pdf", "iam-configuration.json"]

    def test_references(self, now):
        assert create_common_controls(now)[1].references == ["NIST-800-53-IA-2"]


class TestCreateCommonControlTests:
    def test_four_passing_tests(self, now):
        tests = create_common_control_tests(now)
        assert [t.id for t in tests] == ["test-001", "test-002", "test-003", "test-004"]
        assert all(t.passed for t in tests)
        assert all(t.tested_at == now for t in tests)

    def test_methods_and_steps(self, now):
        tests = create_common_control_tests(now)
        assert [t.method for t in tests] == [
            ValidationMethod.TESTING,
            ValidationMethod.TESTING,
            ValidationMethod.OBSERVATION,
            ValidationMethod.TESTING,
        ]
        assert tests[3].steps == ["Check backup status", "Test data restoration", "Verify recovery time"]
