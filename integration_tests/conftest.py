"""Pytest configuration for integration tests."""

import pytest

from samay_sahayak.db.engine import init_db


# Mark all tests in this directory as integration tests
def pytest_collection_modifyitems(items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
async def pipeline_db(tmp_path):
    """Path to a freshly initialized database."""
    db_path = tmp_path / "pipeline.db"
    await init_db(db_path)
    return db_path
