from collections.abc import Callable
from typing import Any, Protocol

from tree_sitter import Node

from autonotify.core.compilation import Compilation
from autonotify.core.syntax import SyntaxTree
from autonotify.models import Diagnostic


class SyntaxReceiverPort(Protocol):
    def on_visit_syntax_node(self, node: Node, tree: SyntaxTree) -> None: ...


class GeneratorInitializationContext(Protocol):
    def register_for_syntax_notifications(self, receiver_factory: Callable[[], SyntaxReceiverPort]) -> None: ...


class GeneratorExecutionContext(Protocol):
    @property
    def compilation(self) -> Compilation: ...

    @property
    def syntax_receiver(self) -> Any: ...

    def add_source(self, key: str, text: str) -> None: ...

    def report_diagnostic(self, diagnostic: Diagnostic) -> None: ...


class SourceGenerator(Protocol):
    def initialize(self, context: GeneratorInitializationContext) -> None: ...

    def execute(self, context: GeneratorExecutionContext) -> None: ...
