"""
Pytest configuration for the test tree.

Markers are applied automatically from the directory a test lives in.
"""

import sys
from pathlib import Path

import pytest

# Add backend directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Unit test files exercising the entry store (as opposed to pure validation)
CRUD_TEST_FILES = {
    "test_entry_store.py",
    "test_statistics.py",
    "test_search.py",
}


def pytest_collection_modifyitems(items):
    """Auto-apply markers based on test directory."""
    for item in items:
        filepath = str(item.fspath)
        filename = Path(filepath).name

        # Apply 'unit' marker to tests in unit directory
        if "/tests/unit/" in filepath:
            item.add_marker(pytest.mark.unit)
            if filename in CRUD_TEST_FILES:
                item.add_marker(pytest.mark.crud)
        # Apply 'integration' and 'api' markers to tests in integration directory
        elif "/tests/integration/" in filepath:
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.api)
