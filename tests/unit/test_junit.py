"""Tests for formatters/junit.py."""

from __future__ import annotations

from pathlib import Path
from xml.etree import ElementTree as ET

from securitycontrol.core.control_tests import ControlTestRegistry
from securitycontrol.formatters.junit import export_junit_results
from securitycontrol.models.control_test import ValidationMethod


class TestExportJunitResults:
    def _make_results(self, make_test):
        registry = ControlTestRegistry()
        registry.add_control_test(make_test(id="test-a", name="Access"))
        registry.add_control_test(make_test(id="test-b", name="Backup", passed=False))
        registry.add_control_test(
            make_test(id="test-c", name="Monitoring", method=ValidationMethod.OBSERVATION)
        )
        return registry.validate()

    def test_creates_xml_file(self, tmp_path: Path, make_test):
        out = tmp_path / "results.xml"
        result = export_junit_results(self._make_results(make_test), out)
        assert out.exists()
        assert result["total_tests"] == 3
        assert result["failures"] == 1
        assert result["passed"] == 2

    def test_failed_test_has_failure(self, tmp_path: Path, make_test):
        out = tmp_path / "results.xml"
        export_junit_results(self._make_results(make_test), out)
        root = ET.parse(out).getroot()
        failures = root.findall(".//failure")
        assert len(failures) == 1
        assert failures[0].get("message") == "[FAIL] Backup"
        assert "Review and fix control implementation" in failures[0].text

    def test_passing_test_has_no_failure(self, tmp_path: Path, make_test):
        out = tmp_path / "results.xml"
        export_junit_results(self._make_results(make_test), out)
        root = ET.parse(out).getroot()
        for tc in root.iter("testcase"):
            if tc.get("name", "").startswith("test-a"):
                assert tc.find("failure") is None

    def test_one_suite_per_method(self, tmp_path: Path, make_test):
        out = tmp_path / "results.xml"
        export_junit_results(self._make_results(make_test), out)
        root = ET.parse(out).getroot()
        suites = root.findall("testsuite")
        assert [s.get("name") for s in suites] == ["testing", "observation"]
        assert suites[0].get("tests") == "2"
        assert suites[0].get("failures") == "1"

    def test_testsuites_attributes(self, tmp_path: Path, make_test):
        out = tmp_path / "results.xml"
        export_junit_results(self._make_results(make_test), out, suite_name="Controls")
        root = ET.parse(out).getroot()
        assert root.get("name") == "Controls"
        assert root.get("tests") == "3"
        assert root.get("failures") == "1"

    def test_creates_parent_dirs(self, tmp_path: Path, make_test):
        out = tmp_path / "sub" / "dir" / "results.xml"
        export_junit_results(self._make_results(make_test), out)
        assert out.exists()

    def test_empty_results(self, tmp_path: Path):
        out = tmp_path / "results.xml"
        result = export_junit_results([], out)
        assert result["total_tests"] == 0
        assert result["failures"] == 0
        ET.parse(out)
