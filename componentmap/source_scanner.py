"""Discovery of markup-bearing source files under the application directory."""

from __future__ import annotations

import os
import posixpath
from typing import Iterator, List, Protocol

from .errors import FileSystemError

SOURCE_SUFFIXES = (".jsx", ".tsx")


class FileSystem(Protocol):
    """Minimal read-only filesystem surface used by discovery and the builder."""

    def list_dir(self, path: str) -> List[str]:
        ...

    def is_dir(self, path: str) -> bool:
        ...

    def is_file(self, path: str) -> bool:
        ...

    def read_text(self, path: str) -> str:
        ...


class LocalFileSystem:
    """``FileSystem`` backed by the operating system."""

    def list_dir(self, path: str) -> List[str]:
        try:
            return os.listdir(path)
        except OSError as exc:
            raise FileSystemError(f"Cannot list directory {path}: {exc.strerror or exc}") from exc

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def read_text(self, path: str) -> str:
        try:
            with open(path, encoding="utf-8") as handle:
                return handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise FileSystemError(f"Cannot read file {path}: {exc}") from exc


def is_source_file(path: str) -> bool:
    return posixpath.splitext(path)[1] in SOURCE_SUFFIXES


class SourceFiles:
    """Lazy, restartable walk yielding every ``.jsx``/``.tsx`` file below ``root``.

    Every subdirectory is descended into; there is no ignore list. Each call to
    ``iter()`` starts a fresh traversal.
    """

    def __init__(self, root: str, fs: FileSystem | None = None) -> None:
        self.root = root
        self._fs = fs or LocalFileSystem()

    def __iter__(self) -> Iterator[str]:
        if not self._fs.is_dir(self.root):
            raise FileSystemError(f"Application directory not found: {self.root}")
        stack = [self.root]
        while stack:
            directory = stack.pop()
            for entry in self._fs.list_dir(directory):
                entry_path = posixpath.join(directory, entry)
                if self._fs.is_dir(entry_path):
                    stack.append(entry_path)
                elif self._fs.is_file(entry_path) and is_source_file(entry_path):
                    yield entry_path


__all__ = ["FileSystem", "LocalFileSystem", "SOURCE_SUFFIXES", "SourceFiles", "is_source_file"]
