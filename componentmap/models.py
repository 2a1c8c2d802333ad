"""Core data models shared across componentmap components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

MANIFEST_FIELD = "__appManifest"


@dataclass(frozen=True)
class ImportRecord:
    """One value import declaration of a source file."""

    source: str
    specifiers: Tuple[str, ...]
    is_external: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "specifiers": list(self.specifiers),
            "isExternal": self.is_external,
        }


@dataclass(frozen=True)
class ExternalComponentRef:
    """A component referenced from markup and resolved to its import.

    ``children`` is ``None`` for packaged components, which are opaque, and an
    empty tuple for locally authored ones, which are not expanded further.
    """

    component_name: str
    component_path: str
    children: Optional[Tuple["ExternalComponentRef", ...]]

    def to_dict(self) -> Dict[str, Any]:
        children = None
        if self.children is not None:
            children = [child.to_dict() for child in self.children]
        return {
            "componentName": self.component_name,
            "componentPath": self.component_path,
            "children": children,
        }


@dataclass
class ComponentRecord:
    """Manifest entry describing one analyzed component file."""

    id: str
    component_name: str
    is_route: bool
    file_path: str
    parent_id: Optional[str]
    file_imports: List[ImportRecord] = field(default_factory=list)
    external_components: List[ExternalComponentRef] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "componentName": self.component_name,
            "isRoute": self.is_route,
            "filePath": self.file_path,
            "parentId": self.parent_id,
            "fileImports": [record.to_dict() for record in self.file_imports],
            "externalComponents": [ref.to_dict() for ref in self.external_components],
        }


Manifest = Mapping[str, ComponentRecord]


def manifest_to_dict(manifest: Manifest) -> Dict[str, Dict[str, Any]]:
    """Serialise a manifest into the camelCase shape the inspection client reads."""
    return {key: record.to_dict() for key, record in manifest.items()}


def manifest_payload(manifest: Manifest) -> Dict[str, Any]:
    """Wrap the serialised manifest in the single-field response object."""
    return {MANIFEST_FIELD: manifest_to_dict(manifest)}


__all__ = [
    "ComponentRecord",
    "ExternalComponentRef",
    "ImportRecord",
    "MANIFEST_FIELD",
    "Manifest",
    "manifest_payload",
    "manifest_to_dict",
]
