"""Test configuration and fixtures for lsn."""

import pytest


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture
def sample_tree(tmp_path):
    """Create the tree a/b.txt, a/.hidden, c.txt under a temporary root."""
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "b.txt").write_text("b")
    (tmp_path / "a" / ".hidden").write_text("hidden")
    (tmp_path / "c.txt").write_text("c")
    return tmp_path
