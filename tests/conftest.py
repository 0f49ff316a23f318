"""Shared fixtures for dupdetect tests."""

import logging
import pathlib

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: pathlib.Path, monkeypatch) -> pathlib.Path:
    """Point the config directory at an empty temporary location."""
    cfg = tmp_path / "cfg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(cfg))
    return cfg


@pytest.fixture
def tree(tmp_path: pathlib.Path) -> pathlib.Path:
    """Directory with two identical 10-byte files and one different 10-byte file."""
    root = tmp_path / "tree"
    root.mkdir()
    (root / "a.txt").write_bytes(b"0123456789")
    (root / "b.txt").write_bytes(b"0123456789")
    (root / "c.txt").write_bytes(b"abcdefghij")
    return root


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by configure_logging between tests."""
    yield
    logger = logging.getLogger("dupdetect")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
