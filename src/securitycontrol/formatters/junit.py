"""JUnit XML formatter for CI/CD integration."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from xml.dom import minidom
from xml.etree import ElementTree as ET

from ..models.control_test import ValidationResult


def export_junit_results(
    results: list[ValidationResult],
    output_path: Path,
    suite_name: str = "securitycontrol",
) -> dict:
    """Export control test results as JUnit XML.

    One testsuite is written per validation method, in first-seen order.
    Failed tests get a <failure> element carrying their recommendations.

    Returns:
        Dict with: path, total_tests, failures, passed.
    """
    testsuites = ET.Element("testsuites")
    testsuites.set("name", suite_name)
    testsuites.set("timestamp", datetime.now().strftime("%Y-%m-%dT%H:%M:%S"))

    by_method: dict[str, list[ValidationResult]] = {}
    for result in results:
        by_method.setdefault(result.method.value, []).append(result)

    total_failures = 0

    for method, method_results in by_method.items():
        testsuite = ET.SubElement(testsuites, "testsuite")
        testsuite.set("name", method)
        testsuite.set("tests", str(len(method_results)))

        suite_failures = 0

        for result in method_results:
            testcase = ET.SubElement(testsuite, "testcase")
            testcase.set("name", f"{result.control_id}: {result.control_name}")
            testcase.set("classname", method)

            if not result.test_passed:
                total_failures += 1
                suite_failures += 1

                failure = ET.SubElement(testcase, "failure")
                failure.set("message", f"[{result.result.value}] {result.control_name}")
                failure.set("type", result.result.value.lower())

                text_parts = [
                    f"Effectiveness: {result.effectiveness * 100:.1f}%",
                    f"Risk Remaining: {result.risk_remaining * 100:.1f}%",
                ]
                if result.recommendations:
                    text_parts.append("\nRecommendations:")
                    text_parts.extend(f"- {rec}" for rec in result.recommendations)

                failure.text = "\n".join(text_parts)

        testsuite.set("failures", str(suite_failures))
        testsuite.set("errors", "0")
        testsuite.set("skipped", "0")

    testsuites.set("tests", str(len(results)))
    testsuites.set("failures", str(total_failures))
    testsuites.set("errors", "0")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Pretty-print XML
    rough = ET.tostring(testsuites, encoding="unicode")
    dom = minidom.parseString(rough)
    xml_str = dom.toprettyxml(indent="  ", encoding="UTF-8")
    output_path.write_bytes(xml_str)

    return {
        "path": str(output_path),
        "total_tests": len(results),
        "failures": total_failures,
        "passed": len(results) - total_failures,
    }
