"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real stores.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from modules.backend.stores.base import BlobStore, NoteStore


# =============================================================================
# Store Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_note_store() -> AsyncMock:
    """
    Mock note store for unit tests.

    Usage:
        async def test_list(mock_note_store, make_record):
            mock_note_store.list_all.return_value = [make_record("n1")]
    """
    store = AsyncMock(spec=NoteStore)
    store.backend_name = "mock"
    store.list_all.return_value = []
    return store


@pytest.fixture
def mock_blob_store() -> AsyncMock:
    """
    Mock blob store for unit tests.

    resolve_url returns ``https://blobs.test/<path>`` by default.
    """
    store = AsyncMock(spec=BlobStore)
    store.backend_name = "mock"
    store.upload.return_value = None
    store.remove.return_value = None
    store.resolve_url.side_effect = lambda path: f"https://blobs.test/{path}"
    return store


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            service._logger = mock_logger
            ...
            mock_logger.warning.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
