"""Shared tree-sitter parser handling for TypeScript and JavaScript sources."""

from __future__ import annotations

from typing import Dict, Optional

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

_LANGUAGES: Dict[str, Language] = {}
_PARSERS: Dict[str, Parser] = {}

_LANGUAGE_FACTORIES = {
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}


def language_for_path(path: str) -> str:
    """Return the grammar key used to parse `path`."""
    lower = path.lower()
    if lower.endswith((".tsx", ".jsx")):
        return "tsx"
    return "typescript"


def get_parser(language_key: str) -> Parser:
    parser = _PARSERS.get(language_key)
    if parser is not None:
        return parser
    language = _LANGUAGES.get(language_key)
    if language is None:
        language = Language(_LANGUAGE_FACTORIES[language_key]())
        _LANGUAGES[language_key] = language
    parser = Parser(language)
    _PARSERS[language_key] = parser
    return parser


def parse_source(content: str, path: str) -> Tree:
    """Parse `content` with the grammar matching `path`."""
    parser = get_parser(language_for_path(path))
    return parser.parse(content.encode("utf-8"))


def node_text(node: Optional[Node], source_bytes: bytes) -> str:
    if node is None:
        return ""
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


__all__ = ["get_parser", "language_for_path", "node_text", "parse_source"]
