import os

import pytest

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")


@pytest.fixture
def trace_path():
    """Path to a small recorded function trace with known stack totals."""
    return os.path.join(DATA_DIR, "trace.test.xt")


@pytest.fixture
def expected_stacks():
    return {
        "{main};a;c": 140.0,
        "{main};a": 189.0,
        "{main};b;d;e": 18.0,
        "{main};b;d": 39.0,
        "{main};b;f": 7.0,
        "{main};b": 68.0,
        "{main}": 302.0,
    }
