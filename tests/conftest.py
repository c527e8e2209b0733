"""Shared pytest configuration for the cidls test suite."""

import pytest

from cidls.testing import build_store, make_entry


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: large listings, excluded by run_tests.py")


@pytest.fixture
def two_path_store():
    """Store from the classic two-path scenario.

    Structure:
        /a
        └── z      (file, 1 byte)
        /b
        └── m/     (directory)
    """
    return build_store({
        '/a': [make_entry('z', size=1, identifier='hashz')],
        '/b': [make_entry('m', kind='dir', size=2, identifier='hashm')],
    })
