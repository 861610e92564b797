"""Pytest configuration and shared fixtures for backend tests."""
import pytest

from sheets.core.engine import SheetEngine
from sheets.services import SheetService
from sheets.storage import FileStorage, MemoryStorage
from tests.test_utils import CountingStorage


@pytest.fixture
def store():
    """Fresh in-memory storage."""
    return CountingStorage()


@pytest.fixture
def engine(store):
    """Engine bound to the in-memory storage."""
    return SheetEngine(store)


@pytest.fixture
def service():
    """Service with its own in-memory storage."""
    return SheetService(MemoryStorage())


@pytest.fixture
def file_storage(tmp_path):
    """File storage rooted in a temporary directory."""
    return FileStorage(str(tmp_path / "sheets"))
