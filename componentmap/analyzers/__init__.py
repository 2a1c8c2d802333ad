"""Per-file analysis steps: parsing, identifier resolution and id normalization."""

from __future__ import annotations

from .ids import ComponentId, normalize_id
from .resolver import find_import, resolve_components
from .source_parser import ParsedSource, SourceParser, is_external_source

__all__ = [
    "ComponentId",
    "ParsedSource",
    "SourceParser",
    "find_import",
    "is_external_source",
    "normalize_id",
    "resolve_components",
]
