"""Shared fixtures for mspack tests."""

import pytest

import mspack


@pytest.fixture(autouse=True)
def reset_stats():
    """Every test starts with empty global stats."""
    mspack.conversion_stats.reset()
    yield
    mspack.conversion_stats.reset()


@pytest.fixture
def sample_dir(tmp_path):
    """Factory creating a folder with one small file per given name."""

    def _make(names, folder="samples"):
        directory = tmp_path / folder
        directory.mkdir()
        for name in names:
            (directory / name).write_bytes(f"data-{name}".encode("utf-8"))
        return directory

    return _make
