"""Shared fixtures for securitycontrol tests."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from securitycontrol.core.catalog import create_common_control_tests, create_common_controls
from securitycontrol.core.control_tests import ControlTestRegistry
from securitycontrol.core.controls import ControlRegistry
from securitycontrol.models.control import ControlCategory, ControlStatus, ControlType, SecurityControl
from securitycontrol.models.control_test import ControlTest, ValidationMethod

NOW = datetime(2026, 8, 31, 12, 0, 0)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_control():
    """Factory for controls that pass every check unless overridden."""

    def _make(**overrides) -> SecurityControl:
        fields = {
            "id": "ctrl-100",
            "name": "Test Control",
            "category": ControlCategory.PREVENTIVE,
            "type": ControlType.TECHNICAL,
            "owner": "Security Team",
            "status": ControlStatus.IMPLEMENTED,
            "last_verified": datetime(2026, 7, 1),
            "evidence": ["evidence.pdf"],
        }
        fields.update(overrides)
        return SecurityControl(**fields)

    return _make


@pytest.fixture
def make_test():
    def _make(**overrides) -> ControlTest:
        fields = {
            "id": "test-100",
            "name": "Sample Verification",
            "method": ValidationMethod.TESTING,
            "steps": ["Step one", "Step two"],
            "passed": True,
        }
        fields.update(overrides)
        return ControlTest(**fields)

    return _make


@pytest.fixture
def control_registry(now: datetime) -> ControlRegistry:
    """Registry seeded with the built-in controls and a fixed clock."""
    registry = ControlRegistry(clock=lambda: now)
    for control in create_common_controls(now):
        registry.add_control(control)
    return registry


@pytest.fixture
def control_test_registry(now: datetime) -> ControlTestRegistry:
    registry = ControlTestRegistry(clock=lambda: now)
    for test in create_common_control_tests(now):
        registry.add_control_test(test)
    return registry


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    project = tmp_path / "test-project"
    project.mkdir()
    return project


@pytest.fixture
def configured_project(tmp_project: Path) -> Path:
    """Create a project with a .securitycontrol/config.yaml."""
    cfg_dir = tmp_project / ".securitycontrol"
    cfg_dir.mkdir()
    (cfg_dir / "config.yaml").write_text(
        "scoring:\n"
        "  status_effectiveness:\n"
        "    implemented: 0.95\n"
        "  verification_window_months: 3\n"
        "output:\n"
        "  format: text\n",
        encoding="utf-8",
    )
    return tmp_project
