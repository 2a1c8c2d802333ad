"""Canonical manifest ids derived from component file paths.

The steps below reproduce the inspection client's key format exactly,
including its known quirks: only the first occurrence of each fragment is
removed, and everything before the first ``routes/`` is discarded, so nested
app roots collapse onto the same ids.
"""

from __future__ import annotations

from dataclasses import dataclass

_EXTENSIONS = (".tsx", ".jsx")
_ROUTES_SEGMENT = "routes/"
_APP_SEGMENT = "app/"
_ROOT_ID = "root"
_ENTRY_PREFIX = "entry"


@dataclass(frozen=True)
class ComponentId:
    """Normalized manifest key and its route classification."""

    value: str
    is_route: bool

    @property
    def parent_id(self) -> str | None:
        return "" if self.is_route else None

    @property
    def is_entry(self) -> bool:
        return self.value.startswith(_ENTRY_PREFIX)


def strip_root_prefix(file_path: str, app_root_dir: str) -> str:
    if not app_root_dir:
        return file_path
    return file_path.replace(app_root_dir, "", 1)


def strip_extension(raw_id: str) -> str:
    for extension in _EXTENSIONS:
        raw_id = raw_id.replace(extension, "", 1)
    return raw_id


def drop_leading_slash(raw_id: str) -> str:
    return raw_id[1:] if raw_id.startswith("/") else raw_id


def extract_route_segment(raw_id: str) -> str:
    """Keep from the first ``routes/`` onward, else drop the first ``app/``."""
    index = raw_id.find(_ROUTES_SEGMENT)
    if index >= 0:
        return raw_id[index:]
    return raw_id.replace(_APP_SEGMENT, "", 1)


def is_route_id(raw_id: str) -> bool:
    return raw_id.startswith(_ROUTES_SEGMENT) or raw_id == _ROOT_ID


def normalize_id(file_path: str, app_root_dir: str) -> ComponentId:
    """Return the manifest key for ``file_path`` relative to ``app_root_dir``."""
    raw_id = strip_root_prefix(file_path, app_root_dir)
    raw_id = strip_extension(raw_id)
    raw_id = drop_leading_slash(raw_id)
    raw_id = extract_route_segment(raw_id)
    return ComponentId(value=raw_id, is_route=is_route_id(raw_id))


__all__ = [
    "ComponentId",
    "drop_leading_slash",
    "extract_route_segment",
    "is_route_id",
    "normalize_id",
    "strip_extension",
    "strip_root_prefix",
]
