from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

from tree_sitter import Node, Tree
from tree_sitter_language_pack import SupportedLanguage, get_parser

from autonotify.core.languages import detect_language_from_path, normalize_language

TYPE_DECLARATION_NODES = frozenset(
    {
        "class_declaration",
        "struct_declaration",
        "record_declaration",
        "record_struct_declaration",
        "interface_declaration",
    }
)

NAMESPACE_NODES = frozenset({"namespace_declaration", "file_scoped_namespace_declaration"})


@dataclass(frozen=True)
class SyntaxTree:
    """A parsed C# source unit. ``path`` only identifies the unit; it is never read again."""

    path: str
    source: bytes
    tree: Tree = field(compare=False, repr=False)

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        return node_text(node, self.source)


def parse_source(source: str | bytes, path: str = "<memory>.cs", language: str = "csharp") -> SyntaxTree:
    resolved_language = normalize_language(language)
    source_bytes = source.encode("utf-8") if isinstance(source, str) else source
    parser = get_parser(cast(SupportedLanguage, resolved_language))
    return SyntaxTree(path=path, source=source_bytes, tree=parser.parse(source_bytes))


def parse_file(path: str | Path) -> SyntaxTree:
    file_path = Path(path)
    language = detect_language_from_path(file_path)

    try:
        source_bytes = file_path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None

    return parse_source(source_bytes, str(file_path), language)


def node_text(node: Node, source_bytes: bytes) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def compact_text(node: Node, source_bytes: bytes) -> str:
    """Node text with all whitespace removed, e.g. ``System . Collections`` -> ``System.Collections``."""
    return "".join(node_text(node, source_bytes).split())


def walk(node: Node) -> Iterator[Node]:
    """Pre-order traversal without recursion."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def field_child(node: Node, field_name: str, *fallback_types: str) -> Node | None:
    """Return ``node``'s child for ``field_name``, or its first named child of one of ``fallback_types``."""
    child = node.child_by_field_name(field_name)
    if child is not None:
        return child
    for candidate in node.named_children:
        if candidate.type in fallback_types:
            return candidate
    return None


def declaration_name(node: Node, source_bytes: bytes) -> str:
    name_node = field_child(node, "name", "identifier", "qualified_name")
    return compact_text(name_node, source_bytes) if name_node is not None else ""


def declaration_body(node: Node) -> Node | None:
    return field_child(node, "body", "declaration_list")


def modifiers(node: Node, source_bytes: bytes) -> tuple[str, ...]:
    return tuple(node_text(child, source_bytes) for child in node.children if child.type == "modifier")
