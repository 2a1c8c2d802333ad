"""Tree-sitter powered TSX parser extracting imports, default exports and JSX usage."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from ..errors import ParseError
from ..models import ImportRecord

_LOCAL_PREFIXES = (".", "~")

_FUNCTION_DECLARATIONS = {"function_declaration", "generator_function_declaration"}
# Named default-exported functions may surface as expressions depending on grammar version.
_FUNCTION_EXPRESSIONS = {"function_expression", "function", "generator_function"}

_JSX_ELEMENTS = {"jsx_opening_element", "jsx_closing_element", "jsx_self_closing_element"}
_JSX_NAME_PARTS = {"identifier", "property_identifier", "jsx_identifier"}


@dataclass
class ParsedSource:
    """Facts extracted from a single markup-bearing source file."""

    path: str
    imports: List[ImportRecord] = field(default_factory=list)
    component_name: Optional[str] = None
    jsx_identifiers: List[str] = field(default_factory=list)


def is_external_source(source: str) -> bool:
    """Return True when an import specifier does not point at local source."""
    return not source.startswith(_LOCAL_PREFIXES)


def is_component_identifier(name: str) -> bool:
    """Components are JSX names whose first character is already upper case."""
    return bool(name) and name[0] == name[0].upper()


class SourceParser:
    """Parses TypeScript/JSX sources with the tree-sitter TSX grammar."""

    def __init__(self) -> None:
        self._parser: Optional[Parser] = None

    def parse(self, text: str, path: str = "<memory>") -> Tree:
        """Return the syntax tree for ``text`` or raise ``ParseError``."""
        tree = self._get_parser().parse(text.encode("utf-8"))
        if tree.root_node.has_error:
            node = _first_error(tree.root_node)
            row, column = node.start_point if node is not None else (0, 0)
            detail = "missing token" if node is not None and node.is_missing else "syntax error"
            raise ParseError(path, row + 1, column + 1, detail)
        return tree

    def extract(self, text: str, path: str = "<memory>") -> ParsedSource:
        """Parse ``text`` and collect its imports, default export and JSX names."""
        source_bytes = text.encode("utf-8")
        tree = self.parse(text, path)
        parsed = ParsedSource(path=path)
        default_export: Optional[Node] = None
        for node in _walk(tree.root_node):
            if node.type == "import_statement":
                record = self._import_record(node, source_bytes)
                if record is not None:
                    parsed.imports.append(record)
            elif node.type == "export_statement" and _is_default_export(node):
                if default_export is not None:
                    row, column = node.start_point
                    raise ParseError(
                        path, row + 1, column + 1, "only one default export allowed per module"
                    )
                default_export = node
                parsed.component_name = self._default_export_name(node, source_bytes)
            elif node.type in _JSX_ELEMENTS:
                name_node = node.child_by_field_name("name")
                if name_node is not None:
                    parsed.jsx_identifiers.extend(
                        name
                        for name in self._name_parts(name_node, source_bytes)
                        if is_component_identifier(name)
                    )
            elif node.type == "jsx_attribute" and node.named_child_count:
                parsed.jsx_identifiers.extend(
                    name
                    for name in self._name_parts(node.named_children[0], source_bytes)
                    if is_component_identifier(name)
                )
        return parsed

    def _get_parser(self) -> Parser:
        if self._parser is None:
            self._parser = Parser(Language(tree_sitter_typescript.language_tsx()))
        return self._parser

    @staticmethod
    def _node_text(node: Node, source_bytes: bytes) -> str:
        return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")

    def _import_record(self, node: Node, source_bytes: bytes) -> Optional[ImportRecord]:
        if any(child.type == "type" for child in node.children):
            return None
        # `import x = require("y")` is not an ES import declaration.
        if any(child.type == "import_require_clause" for child in node.children):
            return None
        source_node = node.child_by_field_name("source")
        if source_node is None:
            return None
        source = self._node_text(source_node, source_bytes)[1:-1]

        specifiers: List[str] = []
        clause = next((child for child in node.children if child.type == "import_clause"), None)
        if clause is not None:
            for child in clause.named_children:
                if child.type == "identifier":
                    specifiers.append(self._node_text(child, source_bytes))
                elif child.type == "namespace_import":
                    local = next(
                        (part for part in child.named_children if part.type == "identifier"),
                        None,
                    )
                    if local is not None:
                        specifiers.append(self._node_text(local, source_bytes))
                elif child.type == "named_imports":
                    for spec in child.named_children:
                        if spec.type != "import_specifier":
                            continue
                        local = spec.child_by_field_name("alias") or spec.child_by_field_name("name")
                        if local is not None:
                            specifiers.append(self._node_text(local, source_bytes))

        return ImportRecord(
            source=source,
            specifiers=tuple(specifiers),
            is_external=is_external_source(source),
        )

    def _default_export_name(self, node: Node, source_bytes: bytes) -> Optional[str]:
        declaration = node.child_by_field_name("declaration")
        if declaration is not None:
            if declaration.type in _FUNCTION_DECLARATIONS:
                name_node = declaration.child_by_field_name("name")
                return self._node_text(name_node, source_bytes) if name_node else None
            return None

        value = node.child_by_field_name("value")
        if value is None:
            return None
        if value.type in _FUNCTION_EXPRESSIONS:
            name_node = value.child_by_field_name("name")
            return self._node_text(name_node, source_bytes) if name_node else None
        while value.type == "parenthesized_expression" and value.named_child_count == 1:
            value = value.named_children[0]
        if value.type == "identifier":
            return self._node_text(value, source_bytes)
        return None

    def _name_parts(self, node: Node, source_bytes: bytes) -> Iterable[str]:
        if node.type in _JSX_NAME_PARTS:
            yield self._node_text(node, source_bytes)
            return
        for child in node.named_children:
            yield from self._name_parts(child, source_bytes)


def _walk(root: Node) -> Iterator[Node]:
    """Pre-order traversal in source order without recursion."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _is_default_export(node: Node) -> bool:
    return any(child.type == "default" for child in node.children)


def _first_error(root: Node) -> Optional[Node]:
    for node in _walk(root):
        if node.type == "ERROR" or node.is_missing:
            return node
    return None


__all__ = [
    "ParsedSource",
    "SourceParser",
    "is_component_identifier",
    "is_external_source",
]
