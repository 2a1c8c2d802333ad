"""Manifest construction across every component file of an application."""

from __future__ import annotations

import posixpath
from types import MappingProxyType
from typing import Dict, Optional

from .analyzers.ids import normalize_id
from .analyzers.resolver import resolve_components
from .analyzers.source_parser import SourceParser
from .logging import get_logger
from .models import ComponentRecord, Manifest
from .source_scanner import FileSystem, LocalFileSystem, SourceFiles

DEFAULT_APP_DIRECTORY = "app"


class ManifestBuilder:
    """Runs the per-file analysis pipeline and collects component records."""

    def __init__(
        self,
        *,
        fs: Optional[FileSystem] = None,
        parser: Optional[SourceParser] = None,
    ) -> None:
        self._fs = fs or LocalFileSystem()
        self._parser = parser or SourceParser()
        self.logger = get_logger("builder")

    def build(self, app_root: str, app_directory: str = DEFAULT_APP_DIRECTORY) -> Manifest:
        """Analyze ``<app_root>/<app_directory>`` and return a read-only manifest.

        Parse and filesystem errors propagate: a single bad file aborts the
        whole build and no partial manifest is returned.
        """
        root = app_root.rstrip("/") or "/"
        source_dir = posixpath.join(root, app_directory) if app_directory else root
        self.logger.info("Building component manifest for %s", source_dir)

        records: Dict[str, ComponentRecord] = {}
        analyzed = 0
        for file_path in SourceFiles(source_dir, self._fs):
            analyzed += 1
            record = self.analyze_file(file_path, root)
            if record is None:
                continue
            previous = records.get(record.id)
            if previous is not None:
                self.logger.warning(
                    "Manifest id %s from %s overwrites %s",
                    record.id,
                    record.file_path,
                    previous.file_path,
                )
            records[record.id] = record

        self.logger.debug("Analyzed %d files, %d components", analyzed, len(records))
        return MappingProxyType(records)

    def analyze_file(self, file_path: str, app_root: str) -> Optional[ComponentRecord]:
        """Return the manifest record for one file, or None when it is excluded."""
        text = self._fs.read_text(file_path)
        parsed = self._parser.extract(text, file_path)
        component_id = normalize_id(file_path, app_root)

        if parsed.component_name is None or component_id.is_entry:
            self.logger.debug("Skipping %s (id=%s)", file_path, component_id.value)
            return None

        return ComponentRecord(
            id=component_id.value,
            component_name=parsed.component_name,
            is_route=component_id.is_route,
            file_path=file_path,
            parent_id=component_id.parent_id,
            file_imports=list(parsed.imports),
            external_components=resolve_components(parsed),
        )


def build_manifest(
    app_root: str,
    app_directory: str = DEFAULT_APP_DIRECTORY,
    *,
    fs: Optional[FileSystem] = None,
) -> Manifest:
    """Convenience wrapper around ``ManifestBuilder.build``."""
    return ManifestBuilder(fs=fs).build(app_root, app_directory)


__all__ = ["DEFAULT_APP_DIRECTORY", "ManifestBuilder", "build_manifest"]
