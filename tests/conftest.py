"""
Test configuration: repo root on sys.path and shared fixtures.

Nothing here touches the network. Hack'n'Plan is replaced by the
in-memory stand-ins in tests/fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add repo root to sys.path so tests can import hnp_importer.* and cli.*
REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from hnp_importer.catalogs import CatalogSnapshot  # noqa: E402
from hnp_importer.config import ImporterConfig  # noqa: E402
from hnp_importer.grammar import AnnotationGrammar  # noqa: E402
from tests.fixtures import (  # noqa: E402
    CATEGORIES,
    IMPORTANCE_LEVELS,
    TAGS,
    USERS,
    FakeCatalogSource,
)


@pytest.fixture
def grammar():
    return AnnotationGrammar()


@pytest.fixture
def snapshot():
    return CatalogSnapshot(
        categories=tuple(CATEGORIES),
        tags=tuple(TAGS),
        users=tuple(USERS),
        importance_levels=tuple(IMPORTANCE_LEVELS),
    )


@pytest.fixture
def source():
    return FakeCatalogSource()


@pytest.fixture
def config():
    return ImporterConfig(api_key="test_key", project_id=42)
