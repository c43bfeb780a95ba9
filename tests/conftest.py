"""Shared test fixtures."""

from pathlib import Path

import pytest

from project_sharedir.core.devroot import DevRootDetector, looks_like_dev_root


class FakeLookup:
    """Installed lookup that records its calls instead of touching site-packages."""

    def __init__(self, root="/installed/share"):
        self.root = root
        self.calls = []

    def dist_dir(self, distname):
        self.calls.append(("dist_dir", distname))
        return f"{self.root}/{distname}"

    def dist_file(self, distname, filename):
        self.calls.append(("dist_file", distname, filename))
        return f"{self.root}/{distname}/{filename}"


@pytest.fixture
def fake_lookup():
    return FakeLookup()


@pytest.fixture
def detector(tmp_path):
    """Default heuristic, but blind to anything outside tmp_path."""

    def predicate(directory: Path) -> bool:
        return directory.is_relative_to(tmp_path) and looks_like_dev_root(directory)

    return DevRootDetector(predicate)


@pytest.fixture
def project(tmp_path):
    """A checkout: proj/.git, proj/share/data.txt, proj/lib/Pkg.py."""
    root = tmp_path / "proj"
    (root / ".git").mkdir(parents=True)
    (root / "share").mkdir()
    (root / "share" / "data.txt").write_text("hello")
    (root / "lib").mkdir()
    (root / "lib" / "Pkg.py").write_text("")
    return root


@pytest.fixture
def bare_project(tmp_path):
    """Same checkout without a share/ directory."""
    root = tmp_path / "proj"
    (root / ".git").mkdir(parents=True)
    (root / "lib").mkdir()
    (root / "lib" / "Pkg.py").write_text("")
    return root
