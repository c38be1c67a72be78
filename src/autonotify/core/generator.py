import logging

from autonotify.config import GeneratorOptions
from autonotify.core.attribute import (
    ATTRIBUTE_METADATA_NAME,
    ATTRIBUTE_SOURCE,
    ATTRIBUTE_SOURCE_KEY,
    ATTRIBUTE_SOURCE_PATH,
    NOTIFY_METADATA_NAME,
)
from autonotify.core.compilation import Compilation
from autonotify.core.diagnostics import DUPLICATE_FRAGMENT_KEY, DUPLICATE_QUALIFIED_FRAGMENT_KEY, GENERATION_FAILED
from autonotify.core.emitter import render_type_group
from autonotify.core.grouping import build_type_groups
from autonotify.core.ports.host import GeneratorExecutionContext, GeneratorInitializationContext
from autonotify.core.resolver import resolve_fields
from autonotify.core.scanner import SyntaxReceiver
from autonotify.core.symbols import TypeSymbol
from autonotify.core.syntax import parse_source

logger = logging.getLogger(__name__)

FRAGMENT_KEY_SUFFIX = "_autoNotify"


def fragment_key(symbol: TypeSymbol, qualified: bool = False) -> str:
    """Simple keys use the type name alone; qualified keys add the namespace and generic arity."""
    if not qualified:
        return f"{symbol.name}{FRAGMENT_KEY_SUFFIX}"
    name = f"{symbol.name}_{symbol.arity}" if symbol.arity else symbol.name
    if symbol.namespace:
        name = f"{symbol.namespace}.{name}"
    return f"{name}{FRAGMENT_KEY_SUFFIX}"


def reference_table(names: tuple[str, ...]) -> dict[str, str]:
    """Parse ``Metadata.Name`` or ``Metadata.Name=kind`` entries; kind defaults to class."""
    table: dict[str, str] = {}
    for entry in names:
        name, _, kind = entry.partition("=")
        table[name.strip()] = kind.strip() or "class"
    return table


def bind_compilation(
    compilation: Compilation, options: GeneratorOptions | None = None
) -> tuple[Compilation, TypeSymbol, TypeSymbol]:
    """Merge the marker declaration into ``compilation`` and bind the marker and notification symbols."""
    # The marker is not part of the host's inputs; merge it so its uses can bind.
    compilation = compilation.add_syntax_trees(parse_source(ATTRIBUTE_SOURCE, ATTRIBUTE_SOURCE_PATH))
    if options is not None and options.extra_references:
        compilation = compilation.add_references(reference_table(options.extra_references))

    attribute_symbol = compilation.get_type_by_metadata_name(ATTRIBUTE_METADATA_NAME)
    notify_symbol = compilation.get_type_by_metadata_name(NOTIFY_METADATA_NAME)
    if attribute_symbol is None or notify_symbol is None:
        raise RuntimeError(f"Could not bind {ATTRIBUTE_METADATA_NAME} or {NOTIFY_METADATA_NAME}")
    return compilation, attribute_symbol, notify_symbol


class AutoNotifyGenerator:
    """Adds INotifyPropertyChanged properties for fields marked with ``[NotifiableProperty]``."""

    def __init__(self, options: GeneratorOptions | None = None) -> None:
        self._options = options or GeneratorOptions()

    def initialize(self, context: GeneratorInitializationContext) -> None:
        context.register_for_syntax_notifications(SyntaxReceiver)

    def execute(self, context: GeneratorExecutionContext) -> None:
        context.add_source(ATTRIBUTE_SOURCE_KEY, ATTRIBUTE_SOURCE)

        receiver = context.syntax_receiver
        if not isinstance(receiver, SyntaxReceiver):
            return

        compilation, attribute_symbol, notify_symbol = bind_compilation(context.compilation, self._options)

        fields = resolve_fields(receiver.candidate_fields, compilation, attribute_symbol, context.report_diagnostic)

        published: dict[str, TypeSymbol] = {}
        collision = DUPLICATE_QUALIFIED_FRAGMENT_KEY if self._options.qualified_keys else DUPLICATE_FRAGMENT_KEY
        for group in build_type_groups(fields, context.report_diagnostic):
            symbol = group.containing_type
            key = fragment_key(symbol, self._options.qualified_keys)
            if key in published:
                context.report_diagnostic(
                    collision.create(
                        symbol.locations[0] if symbol.locations else None,
                        key,
                        symbol.to_display_string(),
                        published[key].to_display_string(),
                    )
                )
                continue

            try:
                text = render_type_group(group, notify_symbol, context.report_diagnostic)
            except Exception as exc:
                logger.exception("Error generating properties for %s", symbol.to_display_string())
                context.report_diagnostic(
                    GENERATION_FAILED.create(
                        symbol.locations[0] if symbol.locations else None, symbol.to_display_string(), exc
                    )
                )
                continue
            if text is None:
                continue

            context.add_source(key, text)
            published[key] = symbol
            logger.info("Generated %s (%d properties)", key, len(group.members))
