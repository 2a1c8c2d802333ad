"""Resolution of JSX component identifiers to the imports that provide them."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..dedup import DedupSet
from ..models import ExternalComponentRef, ImportRecord
from .source_parser import ParsedSource


def find_import(name: str, imports: Sequence[ImportRecord]) -> Optional[ImportRecord]:
    """Return the first import that binds ``name`` locally."""
    for record in imports:
        if name in record.specifiers:
            return record
    return None


def resolve_components(parsed: ParsedSource) -> List[ExternalComponentRef]:
    """Map each capitalized JSX identifier of a file onto its import origin.

    Identifiers without a matching import (locally declared components,
    implicit globals) are skipped. Packaged components carry ``children=None``;
    local ones an empty tuple since they are not expanded here.
    """
    components: DedupSet[ExternalComponentRef] = DedupSet()
    for name in parsed.jsx_identifiers:
        record = find_import(name, parsed.imports)
        if record is None:
            continue
        components.add(
            ExternalComponentRef(
                component_name=name,
                component_path=record.source,
                children=None if record.is_external else (),
            )
        )
    return list(components)


__all__ = ["find_import", "resolve_components"]
