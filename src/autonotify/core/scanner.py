from dataclasses import dataclass, field

from tree_sitter import Node

from autonotify.core.syntax import SyntaxTree, walk


@dataclass(frozen=True)
class CandidateField:
    """A field declaration with at least one attribute list; nothing has been resolved yet."""

    tree: SyntaxTree
    node: Node = field(compare=False)

    @property
    def declarators(self) -> list[Node]:
        declaration = next((child for child in self.node.named_children if child.type == "variable_declaration"), None)
        if declaration is None:
            return []
        return [child for child in declaration.named_children if child.type == "variable_declarator"]


class SyntaxReceiver:
    """Collects annotated field declarations while the host walks the syntax trees."""

    def __init__(self) -> None:
        self.candidate_fields: list[CandidateField] = []

    def on_visit_syntax_node(self, node: Node, tree: SyntaxTree) -> None:
        if node.type == "field_declaration" and any(child.type == "attribute_list" for child in node.children):
            self.candidate_fields.append(CandidateField(tree, node))


def scan(tree: SyntaxTree) -> list[CandidateField]:
    receiver = SyntaxReceiver()
    for node in walk(tree.root):
        receiver.on_visit_syntax_node(node, tree)
    return receiver.candidate_fields
