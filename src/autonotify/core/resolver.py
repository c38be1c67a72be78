import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from autonotify.core.attribute import PROPERTY_NAME_ARGUMENT
from autonotify.core.compilation import Compilation, SemanticModel
from autonotify.core.diagnostics import DUPLICATE_MARKER, NON_CONSTANT_PROPERTY_NAME, UNSUPPORTED_FIELD
from autonotify.core.scanner import CandidateField
from autonotify.core.symbols import AttributeData, FieldSymbol, Location, TypeSymbol, UsingDirective
from autonotify.models import Diagnostic

logger = logging.getLogger(__name__)

DiagnosticSink = Callable[[Diagnostic], None]


@dataclass(frozen=True)
class ResolvedField:
    identifier: str
    declared_type: str
    containing_type: TypeSymbol
    annotation_args: MappingProxyType[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    documentation: str | None = None
    location: Location | None = None
    usings: tuple[UsingDirective, ...] = ()

    @property
    def property_name_override(self) -> str | None:
        value = self.annotation_args.get(PROPERTY_NAME_ARGUMENT)
        return None if value is None else str(value)


def _matching_attributes(symbol: FieldSymbol, attribute_symbol: TypeSymbol) -> list[AttributeData]:
    return [data for data in symbol.attributes if data.attribute_class == attribute_symbol]


def _unsupported_reason(symbol: FieldSymbol) -> str | None:
    if symbol.is_const:
        return "const"
    if symbol.is_static:
        return "static"
    if symbol.is_readonly:
        return "readonly"
    return None


def resolve_fields(
    candidates: Iterable[CandidateField],
    compilation: Compilation,
    attribute_symbol: TypeSymbol,
    report: DiagnosticSink | None = None,
) -> list[ResolvedField]:
    """Keep the declared fields whose attributes bind to ``attribute_symbol``, in discovery order."""
    resolved: list[ResolvedField] = []
    models: dict[str, SemanticModel] = {}
    for candidate in candidates:
        model = models.get(candidate.tree.path)
        if model is None or model.syntax_tree is not candidate.tree:
            model = compilation.get_semantic_model(candidate.tree)
            models[candidate.tree.path] = model

        for declarator in candidate.declarators:
            symbol = model.get_declared_symbol(declarator)
            if symbol is None:
                continue
            matches = _matching_attributes(symbol, attribute_symbol)
            if not matches:
                continue

            qualified_name = f"{symbol.containing_type.to_display_string()}.{symbol.name}"
            if len(matches) > 1 and report is not None:
                report(DUPLICATE_MARKER.create(matches[1].location, qualified_name, len(matches)))

            reason = _unsupported_reason(symbol)
            if reason is not None:
                logger.debug("Skipping %s field %s", reason, qualified_name)
                if report is not None:
                    report(UNSUPPORTED_FIELD.create(symbol.location, qualified_name, reason))
                continue

            marker = matches[0]
            annotation_args: dict[str, Any] = {}
            if marker.has_named_argument(PROPERTY_NAME_ARGUMENT):
                property_name = marker.named_argument(PROPERTY_NAME_ARGUMENT)
                if property_name is not None and not isinstance(property_name, str):
                    logger.debug("Skipping %s: PropertyName does not fold to a string", qualified_name)
                    if report is not None:
                        report(NON_CONSTANT_PROPERTY_NAME.create(marker.location, qualified_name))
                    continue
                annotation_args[PROPERTY_NAME_ARGUMENT] = property_name

            resolved.append(
                ResolvedField(
                    identifier=symbol.name,
                    declared_type=symbol.type,
                    containing_type=symbol.containing_type,
                    annotation_args=MappingProxyType(annotation_args),
                    documentation=symbol.documentation,
                    location=symbol.location,
                    usings=symbol.usings,
                )
            )
    logger.debug("Resolved %d annotated field(s)", len(resolved))
    return resolved
