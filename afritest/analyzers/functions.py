"""Top-level function discovery used for deterministic test scaffolds."""

from __future__ import annotations

from typing import Iterable, List

from tree_sitter import Node

from ..models import FunctionSignature, ParsedModule
from .tree_sitter import node_text, parse_source

_PARAMETER_TYPES = {"required_parameter", "optional_parameter"}


class FunctionParser:
    """Extracts top-level function declarations and their parameter names."""

    def parse(self, content: str, path: str = "module.ts") -> ParsedModule:
        source_bytes = content.encode("utf-8")
        tree = parse_source(content, path)
        functions: List[FunctionSignature] = []
        for node in _top_level_declarations(tree.root_node):
            if node.type != "function_declaration":
                continue
            name = node_text(node.child_by_field_name("name"), source_bytes)
            if not name:
                continue
            parameters = node.child_by_field_name("parameters")
            functions.append(
                FunctionSignature(
                    name=name,
                    parameters=_parameter_names(parameters, source_bytes),
                )
            )
        return ParsedModule(functions=functions)


def _top_level_declarations(root: Node) -> Iterable[Node]:
    for child in root.children:
        if child.type == "export_statement":
            declaration = child.child_by_field_name("declaration")
            if declaration is not None:
                yield declaration
            continue
        yield child


def _parameter_names(parameters: Node | None, source_bytes: bytes) -> List[str]:
    if parameters is None:
        return []
    names: List[str] = []
    for child in parameters.named_children:
        if child.type in _PARAMETER_TYPES:
            pattern = child.child_by_field_name("pattern")
            names.append(node_text(pattern, source_bytes))
        elif child.type == "identifier":
            names.append(node_text(child, source_bytes))
    return [name for name in names if name]


__all__ = ["FunctionParser"]
