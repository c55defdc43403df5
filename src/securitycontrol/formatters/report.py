"""Text and JSON report generation for validation results."""

from __future__ import annotations

import json

from ..models.control import ControlValidationResult
from ..models.control_test import ValidationResult

REPORT_TITLE = "=== Security Control Validation Report ==="


def _percent(fraction: float) -> str:
    return f"{fraction * 100:.1f}%"


def generate_control_report(results: list[ControlValidationResult]) -> str:
    """Render control validation results as a numbered text report."""
    lines: list[str] = [REPORT_TITLE, ""]

    if not results:
        lines.append("No controls validated yet")
        return "\n".join(lines) + "\n"

    lines.append("Validation Results:")
    for i, result in enumerate(results, start=1):
        lines.append("")
        lines.append(f"[{i}] {result.control_name}")
        lines.append(f"    ID: {result.control_id}")
        lines.append(f"    Status: {result.status.value}")
        lines.append(f"    Effectiveness: {_percent(result.effectiveness)}")
        lines.append(f"    Confidence: {_percent(result.confidence)}")
        lines.append("")

        if result.issues:
            lines.append("    Issues:")
            for j, issue in enumerate(result.issues, start=1):
                lines.append(f"      [{j}] {issue}")
            lines.append("")

        if result.recommendations:
            lines.append("    Recommendations:")
            for j, rec in enumerate(result.recommendations, start=1):
                lines.append(f"      [{j}] {rec}")
            lines.append("")

    return "\n".join(lines) + "\n"


def generate_validation_report(results: list[ValidationResult]) -> str:
    """Render control test results with a pass/fail summary."""
    lines: list[str] = [REPORT_TITLE, ""]

    if not results:
        lines.append("No validation results available")
        return "\n".join(lines) + "\n"

    passed = sum(1 for r in results if r.test_passed)
    failed = len(results) - passed

    lines.append("Validation Summary:")
    lines.append(f"  Total Tests: {len(results)}")
    lines.append(f"  Passed: {passed}")
    lines.append(f"  Failed: {failed}")
    lines.append(f"  Success Rate: {_percent(passed / len(results))}")
    lines.append("")

    lines.append("Validation Details:")
    for i, result in enumerate(results, start=1):
        glyph = "✓" if result.test_passed else "✗"
        lines.append(f"  [{i}] {glyph} {result.control_name}")
        lines.append(f"      Control ID: {result.control_id}")
        lines.append(f"      Result: {result.result.value}")
        lines.append(f"      Effectiveness: {_percent(result.effectiveness)}")
        lines.append(f"      Risk Remaining: {_percent(result.risk_remaining)}")

        if result.recommendations:
            lines.append("      Recommendations:")
            for rec in result.recommendations:
                lines.append(f"        - {rec}")

        lines.append("")

    return "\n".join(lines) + "\n"


def export_results_json(
    control_results: list[ControlValidationResult],
    test_results: list[ValidationResult],
) -> str:
    """Serialize both result logs as one JSON document."""
    passed = sum(1 for r in test_results if r.test_passed)
    data = {
        "controls": [r.model_dump(mode="json") for r in control_results],
        "tests": [r.model_dump(mode="json") for r in test_results],
        "summary": {
            "controls_validated": len(control_results),
            "tests_run": len(test_results),
            "tests_passed": passed,
            "tests_failed": len(test_results) - passed,
        },
    }
    return json.dumps(data, indent=2)
