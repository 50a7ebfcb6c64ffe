"""Static import extraction for TypeScript/JavaScript modules."""

from __future__ import annotations

from typing import List

from .tree_sitter import node_text, parse_source


class ImportParseError(ValueError):
    """Raised in strict mode when a module does not parse cleanly."""


class ImportExtractor:
    """Returns the module specifiers of a file's top-level import statements."""

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict

    def extract(self, content: str, path: str) -> List[str]:
        source_bytes = content.encode("utf-8")
        tree = parse_source(content, path)
        root = tree.root_node
        if self.strict and root.has_error:
            raise ImportParseError(f"Syntax errors while parsing {path}")

        specifiers: List[str] = []
        # Only direct children of the program: nested scopes are never visited.
        for child in root.children:
            if child.type != "import_statement":
                continue
            source = child.child_by_field_name("source")
            if source is None or source.type != "string":
                continue
            specifiers.append(_string_literal_value(node_text(source, source_bytes)))
        return specifiers


def _string_literal_value(literal: str) -> str:
    if len(literal) >= 2 and literal[0] == literal[-1] and literal[0] in {"'", '"'}:
        return literal[1:-1]
    return literal


__all__ = ["ImportExtractor", "ImportParseError"]
