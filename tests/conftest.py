"""
Pytest configuration for the featurestyle test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- Common fixtures for temp directories, containers and feature tables
- Marker-based test organization
"""

import os
import tempfile
import shutil
from pathlib import Path

import pytest

from featurestyle.logging_config import reset_logging, setup_logging


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Run quietly and keep log files out of the working tree."""
    os.environ.setdefault("FEATURESTYLE_MACHINE_MODE", "1")
    os.environ.setdefault("FEATURESTYLE_FILE_LOGGING", "0")


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture(autouse=True, scope="session")
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    reset_logging()
    setup_logging(level="DEBUG", suppress_console=True, enable_file_logging=False)


# ============================================================================
# TEMPORARY DIRECTORY FIXTURES
# ============================================================================

@pytest.fixture
def temp_dir():
    """Create a temporary directory that's cleaned up after the test."""
    tmp = Path(tempfile.mkdtemp(prefix="featurestyle_test_"))
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


# ============================================================================
# CONTAINER FIXTURES
# ============================================================================

@pytest.fixture
def container(temp_dir):
    """
    Create an empty container file in the temp directory.

    Returns:
        Container instance
    """
    from featurestyle.storage import Container

    return Container(temp_dir / "test.gpkg")


@pytest.fixture
def feature_table(container):
    """
    Create a point feature table with three features.

    Returns:
        Tuple of (table_name, [feature ids])
    """
    from featurestyle.attributes.columns import Column
    from featurestyle.geometry import GeometryType

    container.create_feature_table(
        "places", GeometryType.POINT, columns=[Column("label", "TEXT")]
    )
    ids = [container.insert_feature("places", label=f"place {i}") for i in range(3)]
    return "places", ids


@pytest.fixture
def catalog(container):
    """Relationship catalog over the test container."""
    from featurestyle.related import RelationshipCatalog

    return RelationshipCatalog(container)


@pytest.fixture
def extension(container):
    """Feature style extension over the test container."""
    from featurestyle.style import FeatureStyleExtension

    return FeatureStyleExtension(container)


@pytest.fixture
def table_styles(container, feature_table, extension):
    """
    FeatureTableStyles handle for the ``places`` table.

    Returns:
        Tuple of (FeatureTableStyles, [feature ids])
    """
    from featurestyle.style import FeatureTableStyles

    table_name, ids = feature_table
    return FeatureTableStyles(container, table_name, extension), ids
