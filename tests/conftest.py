"""
Pytest configuration and shared fixtures for all SLPy tests.

The compiler driver is stateless, so one instance is shared across the
whole session; runtimes are cheap and created per test.
"""

import sys
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from slpy.compiler.driver import CompilerDriver
from slpy.runtime.runtime import SlpyRuntime


# =============================================================================
# Session-scoped fixtures (shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def session_compiler():
    """Session-scoped stateless compiler instance shared across ALL tests."""
    return CompilerDriver()


# =============================================================================
# Class-scoped fixtures (shared within a test class)
# =============================================================================

@pytest.fixture(scope="class")
def compiler(session_compiler):
    """Class-scoped compiler - returns session compiler (stateless, safe to share)."""
    return session_compiler


# =============================================================================
# Function-scoped fixtures (default - one per test)
# =============================================================================

@pytest.fixture
def runtime():
    """Function-scoped runtime - fresh per test."""
    return SlpyRuntime()


# =============================================================================
# Helper fixtures
# =============================================================================

@pytest.fixture
def run_source(session_compiler):
    """
    Returns a function that compiles and runs SLPy source, feeding it
    `stdin` and capturing everything it prints.
    """
    from tests.test_utils import compile_and_execute

    def _run_source(source: str, stdin: str = "", source_file: str = "<test>"):
        return compile_and_execute(source, compiler=session_compiler, stdin=stdin, source_file=source_file)

    return _run_source


def pytest_configure(config):
    """Register custom markers for test organization."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
