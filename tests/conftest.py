"""Common utilities for tests."""

from tests.mock_utils import (  # noqa: F401
    MockBatch,
    MockFirestoreBuilder,
    MockTransaction,
    patch_mockfirestore,
    serial_transactional,
)
