import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from pathlib import Path

from autonotify.config import GeneratorOptions
from autonotify.core.compilation import Compilation
from autonotify.core.generator import AutoNotifyGenerator, bind_compilation
from autonotify.core.languages import collect_source_files
from autonotify.core.ports.host import SourceGenerator, SyntaxReceiverPort
from autonotify.core.resolver import ResolvedField, resolve_fields
from autonotify.core.scanner import scan
from autonotify.core.syntax import SyntaxTree, parse_file, parse_source, walk
from autonotify.models import Diagnostic, GeneratedFragment, GenerationResult

logger = logging.getLogger(__name__)

_SEVERITY_LEVELS = {"info": logging.INFO, "warning": logging.WARNING, "error": logging.ERROR}


class _InitializationContext:
    def __init__(self) -> None:
        self.receiver_factory: Callable[[], SyntaxReceiverPort] | None = None

    def register_for_syntax_notifications(self, receiver_factory: Callable[[], SyntaxReceiverPort]) -> None:
        self.receiver_factory = receiver_factory


class _ExecutionContext:
    def __init__(self, compilation: Compilation, receiver: SyntaxReceiverPort | None) -> None:
        self._compilation = compilation
        self._receiver = receiver
        self.sources: dict[str, str] = {}
        self.diagnostics: list[Diagnostic] = []

    @property
    def compilation(self) -> Compilation:
        return self._compilation

    @property
    def syntax_receiver(self) -> SyntaxReceiverPort | None:
        return self._receiver

    def add_source(self, key: str, text: str) -> None:
        if key in self.sources:
            raise ValueError(f"A source named '{key}' was already added")
        self.sources[key] = text

    def report_diagnostic(self, diagnostic: Diagnostic) -> None:
        logger.log(_SEVERITY_LEVELS[diagnostic.severity], "%s", diagnostic)
        self.diagnostics.append(diagnostic)


class GeneratorDriver:
    """Runs source generators over a compilation the way a build host would: one pass, one snapshot."""

    def __init__(self, generators: Sequence[SourceGenerator]) -> None:
        self._generators = tuple(generators)

    def run(self, compilation: Compilation) -> GenerationResult:
        result = GenerationResult()
        for generator in self._generators:
            initialization = _InitializationContext()
            generator.initialize(initialization)

            receiver = initialization.receiver_factory() if initialization.receiver_factory else None
            if receiver is not None:
                for tree in compilation.syntax_trees:
                    for node in walk(tree.root):
                        receiver.on_visit_syntax_node(node, tree)

            context = _ExecutionContext(compilation, receiver)
            generator.execute(context)
            result.fragments.extend(GeneratedFragment(key=key, text=text) for key, text in context.sources.items())
            result.diagnostics.extend(context.diagnostics)

        logger.info(
            "Generated %d source(s) from %d syntax tree(s)", len(result.fragments), len(compilation.syntax_trees)
        )
        return result


def generate(trees: Iterable[SyntaxTree], options: GeneratorOptions | None = None) -> GenerationResult:
    driver = GeneratorDriver([AutoNotifyGenerator(options)])
    return driver.run(Compilation(trees))


def generate_sources(sources: Mapping[str, str | bytes], options: GeneratorOptions | None = None) -> GenerationResult:
    """Parse in-memory sources keyed by path and run one generation pass over them."""
    return generate((parse_source(text, path) for path, text in sources.items()), options)


def generate_files(paths: Iterable[str | Path], options: GeneratorOptions | None = None) -> GenerationResult:
    files = collect_source_files([Path(path) for path in paths])
    return generate((parse_file(path) for path in files), options)


def find_notifiable_fields(
    trees: Iterable[SyntaxTree], options: GeneratorOptions | None = None
) -> tuple[list[ResolvedField], list[Diagnostic]]:
    """Scan and resolve without emitting, for inspection."""
    compilation, attribute_symbol, _ = bind_compilation(Compilation(trees), options)
    diagnostics: list[Diagnostic] = []
    candidates = [candidate for tree in compilation.syntax_trees for candidate in scan(tree)]
    fields = resolve_fields(candidates, compilation, attribute_symbol, diagnostics.append)
    return fields, diagnostics
