"""Tests for componentmap.source_scanner."""

from __future__ import annotations

from pathlib import Path

import pytest

from componentmap.errors import FileSystemError
from componentmap.source_scanner import LocalFileSystem, SourceFiles, is_source_file
from tests._fixtures.memory_fs import MemoryFileSystem


def _write(path: Path, content: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_is_source_file_accepts_only_markup_extensions() -> None:
    assert is_source_file("/a/b/Page.tsx")
    assert is_source_file("/a/b/Page.jsx")
    assert not is_source_file("/a/b/util.ts")
    assert not is_source_file("/a/b/styles.css")
    assert not is_source_file("/a/b/Page.tsx.bak")


def test_discovers_nested_sources_on_disk(tmp_path: Path) -> None:
    app = tmp_path / "app"
    _write(app / "root.tsx")
    _write(app / "routes" / "index.jsx")
    _write(app / "routes" / "nested" / "deep" / "child.tsx")
    _write(app / "utils" / "format.ts")
    _write(app / "README.md")

    found = {Path(path).relative_to(app).as_posix() for path in SourceFiles(app.as_posix())}

    assert found == {"root.tsx", "routes/index.jsx", "routes/nested/deep/child.tsx"}


def test_dependency_directories_are_not_skipped(tmp_path: Path) -> None:
    app = tmp_path / "app"
    _write(app / "node_modules" / "pkg" / "Widget.jsx")

    found = list(SourceFiles(app.as_posix()))

    assert found == [(app / "node_modules" / "pkg" / "Widget.jsx").as_posix()]


def test_walk_is_restartable() -> None:
    fs = MemoryFileSystem(
        {
            "/root/app/root.tsx": "",
            "/root/app/routes/a.tsx": "",
            "/root/app/lib/x.ts": "",
        }
    )
    files = SourceFiles("/root/app", fs)

    first = sorted(files)
    second = sorted(files)

    assert first == second == ["/root/app/root.tsx", "/root/app/routes/a.tsx"]


def test_walk_is_lazy() -> None:
    fs = MemoryFileSystem({"/root/app/a.tsx": ""})
    iterator = iter(SourceFiles("/root/app", fs))

    assert next(iterator) == "/root/app/a.tsx"
    with pytest.raises(StopIteration):
        next(iterator)


def test_missing_root_raises_file_system_error(tmp_path: Path) -> None:
    with pytest.raises(FileSystemError):
        list(SourceFiles((tmp_path / "missing").as_posix()))


def test_local_file_system_wraps_read_errors(tmp_path: Path) -> None:
    with pytest.raises(FileSystemError) as excinfo:
        LocalFileSystem().read_text((tmp_path / "nope.tsx").as_posix())

    assert "nope.tsx" in str(excinfo.value)
