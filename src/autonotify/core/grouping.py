import logging
from collections.abc import Iterable
from dataclasses import dataclass

from autonotify.core.diagnostics import CONFLICTING_USING_ALIAS
from autonotify.core.documentation import summary_text
from autonotify.core.naming import derive_property_name
from autonotify.core.resolver import DiagnosticSink, ResolvedField
from autonotify.core.symbols import TypeSymbol, UsingDirective

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropertySpec:
    name: str
    backing_field: str
    type: str
    doc_comment: str | None = None


@dataclass(frozen=True)
class TypeGroup:
    containing_type: TypeSymbol
    members: tuple[PropertySpec, ...]
    usings: tuple[UsingDirective, ...] = ()


def build_property_spec(resolved: ResolvedField) -> PropertySpec | None:
    name = derive_property_name(resolved.identifier, resolved.property_name_override)
    if not name or name == resolved.identifier:
        logger.debug(
            "No property generated for %s.%s: derived name %r is unusable",
            resolved.containing_type.to_display_string(),
            resolved.identifier,
            name,
        )
        return None
    return PropertySpec(
        name=name,
        backing_field=resolved.identifier,
        type=resolved.declared_type,
        doc_comment=summary_text(resolved.documentation),
    )


def build_type_groups(fields: Iterable[ResolvedField], report: DiagnosticSink | None = None) -> list[TypeGroup]:
    """Group fields by containing type, keeping first-seen order of groups and of members.

    A type keeps its group even when none of its fields yields a property, so it still
    receives the (empty) partial declaration. The using directives of every part are
    merged into one declaration space; a type whose parts bind one alias to different
    targets gets no group.
    """
    members: dict[TypeSymbol, list[PropertySpec]] = {}
    usings: dict[TypeSymbol, dict[str, UsingDirective]] = {}
    conflicting: set[TypeSymbol] = set()
    for resolved in fields:
        symbol = resolved.containing_type
        group_members = members.setdefault(symbol, [])
        merged = usings.setdefault(symbol, {})
        for using in resolved.usings:
            existing = merged.setdefault(using.key, using)
            if existing.target != using.target and symbol not in conflicting:
                conflicting.add(symbol)
                logger.debug("Conflicting alias %s in parts of %s", using.alias, symbol.to_display_string())
                if report is not None:
                    report(
                        CONFLICTING_USING_ALIAS.create(
                            resolved.location, using.alias, existing.target, using.target, symbol.to_display_string()
                        )
                    )
        spec = build_property_spec(resolved)
        if spec is not None:
            group_members.append(spec)

    return [
        TypeGroup(containing_type=symbol, members=tuple(specs), usings=tuple(usings[symbol].values()))
        for symbol, specs in members.items()
        if symbol not in conflicting
    ]
