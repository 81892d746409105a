"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local cov package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def jacoco_sample() -> bytes:
    """A real two-package JaCoCo report with DOCTYPE and sessioninfo elements."""
    return (FIXTURES_DIR / "jacoco_sample.xml").read_bytes()


@pytest.fixture
def gocov_sample() -> bytes:
    """A Go count-mode profile with a stray blank line."""
    return (FIXTURES_DIR / "cover.out").read_bytes()
