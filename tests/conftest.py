"""Shared test fixtures."""

from pathlib import Path

import pytest


def write_bytes(path: Path, size: int) -> None:
    """Create a file of exactly ``size`` bytes."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point HOME at a temp directory and drop cache overrides."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.delenv("PUB_CACHE", raising=False)
    return home


@pytest.fixture
def make_project():
    """Factory creating a Flutter project directory."""

    def _make(
        path: Path,
        marker: str | None = "android",
        build_files: int = 0,
        build_bytes: int = 0,
        dart_tool_bytes: int = 0,
    ) -> Path:
        path.mkdir(parents=True, exist_ok=True)
        (path / "pubspec.yaml").write_text("name: app\n")
        if marker == ".metadata":
            (path / ".metadata").write_text("version: 1\n")
        elif marker:
            (path / marker).mkdir(exist_ok=True)

        if build_files:
            per_file, remainder = divmod(build_bytes, build_files)
            for i in range(build_files):
                size = per_file + (remainder if i == 0 else 0)
                write_bytes(path / "build" / f"out{i}.bin", size)
        if dart_tool_bytes:
            write_bytes(path / ".dart_tool" / "package_config.json", dart_tool_bytes)
        return path

    return _make
