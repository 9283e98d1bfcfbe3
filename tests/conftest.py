"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest

from superfs.utils.config import Config, set_config


@pytest.fixture(autouse=True)
def default_config():
    """Isolate tests from config files on the machine."""
    config = Config()
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """Sample directory tree.

    root/
        a.txt
        b.log
        empty/
        sub/
            c.txt
            deep/
                d.txt
    """
    root = tmp_path / "root"
    (root / "sub" / "deep").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "a.txt").write_text("alpha")
    (root / "b.log").write_text("beta")
    (root / "sub" / "c.txt").write_text("gamma")
    (root / "sub" / "deep" / "d.txt").write_text("delta")
    return root


@pytest.fixture
def simple_tree(tmp_path: Path) -> Path:
    """root/a.txt and root/sub/b.txt."""
    root = tmp_path / "simple"
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_text("a")
    (root / "sub" / "b.txt").write_text("b")
    return root
