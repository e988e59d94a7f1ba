import os
import sys

import pytest

# Ensure project root is on sys.path before imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from partner_comp.logging_config import reset_logging  # noqa: E402
from partner_comp.schema import FiscalYearParams, Physician  # noqa: E402


# Define pytest markers for test categories
def pytest_configure(config):
    """
    Register custom markers to avoid pytest warnings.
    """
    config.addinivalue_line("markers", "unit: mark a test as a unit test")
    config.addinivalue_line("markers", "integration: mark a test as an integration test")
    config.addinivalue_line("markers", "config: mark a test as a config test")
    config.addinivalue_line("markers", "engines: mark a test as an engines test")
    config.addinivalue_line("markers", "reporting: mark a test as a reporting test")
    config.addinivalue_line("markers", "utils: mark a test as a utils test")


@pytest.fixture
def physician():
    """Factory for roster entries: physician("a", "partner", weeks_off=4)."""
    def _make(pid, ptype, **fields):
        fields.setdefault("name", pid.upper())
        return Physician(id=pid, type=ptype, **fields)
    return _make


@pytest.fixture
def fiscal_year():
    """Factory for a fiscal year with an empty shared MD pool unless given."""
    def _make(**fields):
        fields.setdefault("year", 2026)
        fields.setdefault("medical_director_hours", 0)
        return FiscalYearParams(**fields)
    return _make


@pytest.fixture
def clean_logging():
    reset_logging()
    yield
    reset_logging()
