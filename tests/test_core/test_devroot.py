"""Tests for dev-root detection."""

import logging
from pathlib import Path

import pytest

from project_sharedir.core.devroot import (
    DevRootDetector,
    find_dev_root,
    has_marker,
    is_install_dir,
    iter_ancestors,
    looks_like_dev_root,
)


def _marked(tmp_path):
    """Predicate: a directory inside tmp_path containing a MARK file."""

    def predicate(directory):
        return directory.is_relative_to(tmp_path) and (directory / "MARK").exists()

    return predicate


def test_finds_marked_ancestor(tmp_path):
    root = tmp_path / "a"
    deep = root / "b" / "c" / "d"
    deep.mkdir(parents=True)
    (root / "MARK").touch()

    assert find_dev_root(deep, _marked(tmp_path)) == root


def test_start_itself_can_be_root(tmp_path):
    (tmp_path / "MARK").touch()
    assert find_dev_root(tmp_path, _marked(tmp_path)) == tmp_path


def test_nearest_marked_ancestor_wins(tmp_path):
    outer = tmp_path / "outer"
    inner = outer / "vendor" / "inner"
    (inner / "src").mkdir(parents=True)
    (outer / "MARK").touch()
    (inner / "MARK").touch()

    assert find_dev_root(inner / "src", _marked(tmp_path)) == inner


def test_no_marked_ancestor(tmp_path):
    deep = tmp_path / "x" / "y"
    deep.mkdir(parents=True)
    assert find_dev_root(deep, _marked(tmp_path)) is None


def test_file_start_uses_its_directory(tmp_path):
    (tmp_path / "MARK").touch()
    (tmp_path / "lib").mkdir()
    module = tmp_path / "lib" / "mod.py"
    module.write_text("")

    assert find_dev_root(module, _marked(tmp_path)) == tmp_path


def test_walk_reaches_filesystem_root(tmp_path):
    seen = []

    def predicate(directory):
        seen.append(directory)
        return False

    assert find_dev_root(tmp_path, predicate) is None
    assert seen[0] == tmp_path
    assert seen[-1] == Path(tmp_path.anchor)


def test_predicate_oserror_is_no_match(tmp_path):
    child = tmp_path / "child"
    child.mkdir()
    (tmp_path / "MARK").touch()

    def predicate(directory):
        if directory == child:
            raise PermissionError("unreadable")
        return directory.is_relative_to(tmp_path) and (directory / "MARK").exists()

    assert find_dev_root(child, predicate) == tmp_path


def test_iter_ancestors_order(tmp_path):
    deep = tmp_path / "a" / "b"
    ancestors = list(iter_ancestors(deep))
    assert ancestors[:3] == [deep, tmp_path / "a", tmp_path]


@pytest.mark.parametrize(
    "marker", [".git", ".hg", "pyproject.toml", "setup.py", "dist.ini", "MANIFEST.in"]
)
def test_default_markers(tmp_path, marker):
    target = tmp_path / marker
    if marker.startswith("."):
        target.mkdir()
    else:
        target.touch()
    assert has_marker(tmp_path) == marker
    assert looks_like_dev_root(tmp_path) is True


def test_plain_directory_is_not_dev_root(tmp_path):
    assert has_marker(tmp_path) is None
    assert looks_like_dev_root(tmp_path) is False


def test_home_directory_is_vetoed(tmp_path, monkeypatch):
    (tmp_path / ".git").mkdir()
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    assert looks_like_dev_root(tmp_path) is False


def test_site_packages_is_vetoed(tmp_path):
    site_dir = tmp_path / "lib" / "site-packages"
    site_dir.mkdir(parents=True)
    (site_dir / "setup.py").touch()

    assert is_install_dir(site_dir)
    assert looks_like_dev_root(site_dir) is False


def test_custom_negative_heuristics(tmp_path):
    (tmp_path / "pyproject.toml").touch()
    assert looks_like_dev_root(tmp_path, negative=[lambda d: True]) is False
    assert looks_like_dev_root(tmp_path, negative=[]) is True


def test_custom_markers(tmp_path):
    (tmp_path / "WORKSPACE").touch()
    assert looks_like_dev_root(tmp_path) is False
    assert looks_like_dev_root(tmp_path, markers=["WORKSPACE"]) is True


def test_detector_logs_match(tmp_path, caplog):
    (tmp_path / "MARK").touch()
    logger = logging.getLogger("test.devroot")
    detector = DevRootDetector(_marked(tmp_path), logger=logger)

    with caplog.at_level(logging.DEBUG, logger="test.devroot"):
        assert detector.find(tmp_path) == tmp_path

    assert "Found dev root" in caplog.text


def test_relative_start(tmp_path, monkeypatch):
    (tmp_path / "MARK").touch()
    (tmp_path / "sub").mkdir()
    monkeypatch.chdir(tmp_path)

    assert find_dev_root("sub", _marked(tmp_path)) == tmp_path
