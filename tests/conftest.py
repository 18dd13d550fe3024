"""
Pytest configuration for the gosurgeon test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- An isolated HOME so a developer's ~/.gosurgeon/config.json never leaks in
- A copy of the sample Go project per test
- Mutation fixtures with external formatters disabled, for byte-exact assertions
"""

import os
import shutil
from pathlib import Path

import pytest

from gosurgeon.cli.config import CLIConfig
from gosurgeon.logging_config import setup_logging
from gosurgeon.mutation import KindDispatcher, MutationFacade


SAMPLE_DIR = Path(__file__).parent / "test_files" / "sample"

# Formatting off: results must not depend on gofmt being installed
NO_FORMAT = {"format_enabled": False}


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Configure pytest for machine-mode operation."""
    os.environ.setdefault("GOSURGEON_MACHINE_MODE", "1")


# ============================================================================
# LOGGING / ENVIRONMENT FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    setup_logging(level="DEBUG", suppress_console=True, force=True)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point HOME at an empty directory so only test configs are loaded."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    yield home
    CLIConfig.reset()


# ============================================================================
# PROJECT FIXTURES
# ============================================================================

@pytest.fixture
def go_project(tmp_path):
    """
    Copy of tests/test_files/sample in a temp directory.

    Returns:
        Path to the project root (package "sample")
    """
    project = tmp_path / "project"
    shutil.copytree(SAMPLE_DIR, project)
    return project


@pytest.fixture
def sample_file(go_project):
    return go_project / "sample.go"


@pytest.fixture
def other_file(go_project):
    return go_project / "other.go"


@pytest.fixture
def facade(go_project):
    return MutationFacade(go_project, config=NO_FORMAT)


@pytest.fixture
def dispatcher(go_project, facade):
    return KindDispatcher(go_project, facade=facade)


@pytest.fixture
def write_go(tmp_path):
    """
    Factory writing a Go file under tmp_path.

    Usage:
        path = write_go("pkg/a.go", "package pkg\\n")
    """
    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write
