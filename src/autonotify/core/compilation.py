"""Immutable program snapshot and the minimal C# semantic model built on top of it.

Only what identity-based attribute matching needs is modelled: namespaces, type
declarations (nested and partial included), using directives and aliases, and a
table of external reference types standing in for referenced assemblies.
"""

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any

from tree_sitter import Node

from autonotify.core.documentation import collect_documentation
from autonotify.core.symbols import AttributeData, FieldSymbol, Location, TypeSymbol, UsingDirective
from autonotify.core.syntax import (
    TYPE_DECLARATION_NODES,
    SyntaxTree,
    compact_text,
    declaration_body,
    declaration_name,
    field_child,
    modifiers,
    node_text,
    walk,
)

logger = logging.getLogger(__name__)

DEFAULT_REFERENCES: Mapping[str, str] = {
    "System.Object": "class",
    "System.Attribute": "class",
    "System.AttributeUsageAttribute": "class",
    "System.AttributeTargets": "enum",
    "System.ComponentModel.INotifyPropertyChanged": "interface",
    "System.ComponentModel.INotifyPropertyChanging": "interface",
    "System.ComponentModel.PropertyChangedEventArgs": "class",
    "System.ComponentModel.PropertyChangedEventHandler": "delegate",
}

_GLOBAL_PREFIX = "global::"
_ATTRIBUTE_SUFFIX = "Attribute"

_ESCAPES = {
    "'": "'",
    '"': '"',
    "\\": "\\",
    "0": "\0",
    "a": "\a",
    "b": "\b",
    "e": "\x1b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}
_ESCAPE_RE = re.compile(r"\\(u[0-9a-fA-F]{4}|U[0-9a-fA-F]{8}|x[0-9a-fA-F]{1,4}|.)", re.DOTALL)
_NAMEOF_RE = re.compile(r"^nameof\((?P<target>.+)\)$", re.DOTALL)
_INTEGER_SUFFIX_RE = re.compile(r"[uUlL]+$")


@dataclass(frozen=True)
class _ScopeLevel:
    namespace: str
    usings: tuple[UsingDirective, ...] = ()


@dataclass(frozen=True)
class _Scope:
    """Lookup context of a node: enclosing types and namespaces, both innermost first."""

    enclosing_types: tuple[str, ...]
    levels: tuple[_ScopeLevel, ...]

    @property
    def namespace(self) -> str:
        return self.levels[0].namespace if self.levels else ""


@dataclass
class _TypeDeclaration:
    metadata_name: str
    name: str
    namespace: str
    kind: str
    type_parameters: str
    containing_type: str | None
    base_types: list[str]
    scope: _Scope
    location: Location


def split_type_name(text: str) -> list[str]:
    """Split a qualified C# name into metadata segments (``Foo<int, T>`` becomes ``Foo`2``)."""
    segments: list[str] = []
    depth = 0
    current: list[str] = []
    for char in text:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        if char == "." and depth == 0:
            segments.append("".join(current))
            current = []
        else:
            current.append(char)
    segments.append("".join(current))
    return [_metadata_segment(segment) for segment in segments if segment]


def _metadata_segment(segment: str) -> str:
    segment = segment.rstrip("?").lstrip("@")
    if "<" not in segment:
        return segment
    name, _, arguments = segment.partition("<")
    depth = 0
    arity = 1
    for char in arguments[:-1]:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        elif char == "," and depth == 0:
            arity += 1
    return f"{name}`{arity}"


def _qualify(namespace: str, name: str) -> str:
    return f"{namespace}.{name}" if namespace else name


def _location(tree: SyntaxTree, node: Node) -> Location:
    return Location(path=tree.path, line=node.start_point[0], column=node.start_point[1])


def _parse_using(node: Node, source_bytes: bytes) -> UsingDirective | None:
    child_types = {child.type for child in node.children}
    named = [child for child in node.named_children if child.type != "comment"]
    alias_node = node.child_by_field_name("name")
    name_equals = next((child for child in named if child.type == "name_equals"), None)
    if name_equals is not None:
        alias_node = field_child(name_equals, "name", "identifier")
    elif alias_node is None and "=" in child_types and len(named) > 1:
        alias_node = named[0]

    targets = [
        child
        for child in named
        if child.type != "name_equals"
        and (alias_node is None or (child.start_byte, child.end_byte) != (alias_node.start_byte, alias_node.end_byte))
    ]
    if not targets:
        return None
    return UsingDirective(
        target=compact_text(targets[-1], source_bytes).removeprefix(_GLOBAL_PREFIX),
        alias=node_text(alias_node, source_bytes) if alias_node is not None else None,
        is_global="global" in child_types,
        is_static="static" in child_types,
        text=" ".join(node_text(node, source_bytes).split()),
    )


def _usings_in(container: Node | None, source_bytes: bytes) -> tuple[UsingDirective, ...]:
    if container is None:
        return ()
    usings = (_parse_using(child, source_bytes) for child in container.named_children if child.type == "using_directive")
    return tuple(using for using in usings if using is not None)


def _type_segment(node: Node, source_bytes: bytes) -> str:
    name = declaration_name(node, source_bytes)
    type_parameters = field_child(node, "type_parameters", "type_parameter_list")
    if type_parameters is None:
        return name
    arity = sum(1 for child in type_parameters.named_children if child.type == "type_parameter")
    return f"{name}`{arity}" if arity else name


def _kind_keyword(node: Node) -> str:
    keywords = [child.type for child in node.children if child.type in {"class", "struct", "record", "interface"}]
    if keywords:
        return " ".join(keywords)
    return node.type.removesuffix("_declaration").replace("_", " ")


def _scope_of(node: Node, tree: SyntaxTree, global_usings: tuple[UsingDirective, ...]) -> _Scope:
    source_bytes = tree.source
    type_segments: list[str] = []
    namespaces: list[tuple[str, tuple[UsingDirective, ...]]] = []
    unit_usings: tuple[UsingDirective, ...] = ()

    current = node.parent
    while current is not None:
        if current.type in TYPE_DECLARATION_NODES:
            type_segments.append(_type_segment(current, source_bytes))
        elif current.type == "namespace_declaration":
            namespaces.append(
                (declaration_name(current, source_bytes), _usings_in(declaration_body(current), source_bytes))
            )
        elif current.type == "file_scoped_namespace_declaration":
            namespaces.append((declaration_name(current, source_bytes), _usings_in(current, source_bytes)))
        elif current.type == "compilation_unit":
            unit_usings = _usings_in(current, source_bytes)
            # Older grammars keep file-scoped namespace members as siblings of the declaration.
            for child in current.named_children:
                if (
                    child.type == "file_scoped_namespace_declaration"
                    and child.end_byte <= node.start_byte
                    and not namespaces
                ):
                    namespaces.append((declaration_name(child, source_bytes), ()))
        current = current.parent

    namespaces.reverse()
    type_segments.reverse()

    declared: dict[str, tuple[UsingDirective, ...]] = {}
    full_name = ""
    for name, usings in namespaces:
        full_name = _qualify(full_name, name)
        declared[full_name] = usings

    levels: list[_ScopeLevel] = []
    parts = full_name.split(".") if full_name else []
    for size in range(len(parts), 0, -1):
        prefix = ".".join(parts[:size])
        levels.append(_ScopeLevel(prefix, tuple(u for u in declared.get(prefix, ()) if not u.is_global)))
    levels.append(_ScopeLevel("", tuple(u for u in unit_usings if not u.is_global) + global_usings))

    enclosing: list[str] = []
    outer = full_name
    for segment in type_segments:
        outer = f"{outer}+{segment}" if enclosing else _qualify(outer, segment)
        enclosing.append(outer)
    enclosing.reverse()

    return _Scope(enclosing_types=tuple(enclosing), levels=tuple(levels))


def _decode_string(text: str) -> str:
    if text[-2:].lower() == "u8":
        text = text[:-2]
    if text.startswith('@"'):
        return text[2:-1].replace('""', '"')
    if text.startswith('"""'):
        quotes = len(text) - len(text.lstrip('"'))
        return text[quotes:-quotes].strip("\r\n")

    def _unescape(match: re.Match[str]) -> str:
        escape = match.group(1)
        if escape[0] in "uUx":
            return chr(int(escape[1:], 16))
        return _ESCAPES.get(escape, escape)

    return _ESCAPE_RE.sub(_unescape, text[1:-1])


class _NotConstant:
    """Marks an argument expression that does not fold to a compile-time constant."""

    def __repr__(self) -> str:
        return "NOT_CONSTANT"


NOT_CONSTANT: Any = _NotConstant()

ConstantLookup = Callable[[str], Any]

_NAME_NODES = {"identifier", "member_access_expression", "qualified_name", "alias_qualified_name"}


def _parse_integer(text: str) -> Any:
    digits = _INTEGER_SUFFIX_RE.sub("", text).replace("_", "")
    try:
        if digits[:2].lower() in {"0x", "0b"}:
            return int(digits, 0)
        return int(digits, 10)
    except ValueError:
        return NOT_CONSTANT


def _operands(node: Node) -> tuple[Node | None, str, Node | None]:
    left = node.child_by_field_name("left")
    right = node.child_by_field_name("right")
    operator = node.child_by_field_name("operator")
    if operator is None and len(node.children) == 3:
        operator = node.children[1]
    return left, operator.type if operator is not None else "", right


def constant_value(node: Node, source_bytes: bytes, lookup: ConstantLookup | None = None) -> Any:
    """Fold the constant expressions attribute arguments may hold; anything else is ``NOT_CONSTANT``.

    Names of ``const`` fields only fold when ``lookup`` is given.
    """
    text = node_text(node, source_bytes).strip()
    if node.type == "null_literal":
        return None
    if node.type == "boolean_literal":
        return text == "true"
    if node.type in {"string_literal", "verbatim_string_literal", "raw_string_literal", "character_literal"}:
        return _decode_string(text)
    if node.type == "integer_literal":
        return _parse_integer(text)
    if node.type == "parenthesized_expression" and node.named_children:
        return constant_value(node.named_children[0], source_bytes, lookup)
    if node.type == "prefix_unary_expression" and text.startswith("-") and node.named_children:
        operand = constant_value(node.named_children[-1], source_bytes, lookup)
        return -operand if isinstance(operand, int) and not isinstance(operand, bool) else NOT_CONSTANT
    if node.type == "binary_expression":
        left, operator, right = _operands(node)
        if operator == "+" and left is not None and right is not None:
            values = (constant_value(left, source_bytes, lookup), constant_value(right, source_bytes, lookup))
            if all(isinstance(value, str) for value in values):
                return values[0] + values[1]
        return NOT_CONSTANT
    match = _NAMEOF_RE.match("".join(text.split()))
    if match:
        return split_type_name(match.group("target"))[-1].split("`")[0]
    if node.type in _NAME_NODES and lookup is not None:
        return lookup(compact_text(node, source_bytes))
    return NOT_CONSTANT


def _initializer(declarator: Node) -> Node | None:
    clause = next((child for child in declarator.named_children if child.type == "equals_value_clause"), None)
    if clause is not None:
        return clause.named_children[-1] if clause.named_children else None
    if any(child.type == "=" for child in declarator.children):
        return declarator.named_children[-1]
    return None


class Compilation:
    """An immutable set of syntax trees plus the reference types they compile against."""

    def __init__(
        self,
        syntax_trees: Iterable[SyntaxTree] = (),
        references: Mapping[str, str] = DEFAULT_REFERENCES,
    ) -> None:
        self._syntax_trees = tuple(syntax_trees)
        self._references = dict(references)
        self._global_usings = tuple(
            using
            for tree in self._syntax_trees
            for using in _usings_in(tree.root, tree.source)
            if using.is_global
        )
        self._kinds: dict[str, str] = {}
        self._namespaces: set[str] = set()
        self._types: dict[str, TypeSymbol] = {}
        self._constants: dict[str, tuple[SyntaxTree, Node]] = {}
        self._build()

    @property
    def syntax_trees(self) -> tuple[SyntaxTree, ...]:
        return self._syntax_trees

    @property
    def references(self) -> Mapping[str, str]:
        return dict(self._references)

    def add_syntax_trees(self, *trees: SyntaxTree) -> "Compilation":
        return Compilation(self._syntax_trees + trees, self._references)

    def add_references(self, references: Mapping[str, str]) -> "Compilation":
        return Compilation(self._syntax_trees, {**self._references, **references})

    def get_type_by_metadata_name(self, metadata_name: str) -> TypeSymbol | None:
        return self._types.get(metadata_name)

    def get_semantic_model(self, tree: SyntaxTree) -> "SemanticModel":
        return SemanticModel(self, tree)

    @property
    def type_symbols(self) -> tuple[TypeSymbol, ...]:
        return tuple(self._types.values())

    def _build(self) -> None:
        declarations: list[_TypeDeclaration] = []
        for tree in self._syntax_trees:
            for node in walk(tree.root):
                if node.type in TYPE_DECLARATION_NODES:
                    declarations.append(self._declare(node, tree))
                elif node.type == "field_declaration" and "const" in modifiers(node, tree.source):
                    self._declare_constants(node, tree)

        for metadata_name, kind in self._references.items():
            self._kinds.setdefault(metadata_name, kind)
        for metadata_name in self._kinds:
            self._register_namespaces(metadata_name.split("+")[0].rpartition(".")[0])

        # Containers first, so nested symbols can point at their final containing symbol.
        declarations.sort(key=lambda declaration: declaration.metadata_name.count("+"))

        merged: dict[str, list[_TypeDeclaration]] = {}
        for declaration in declarations:
            merged.setdefault(declaration.metadata_name, []).append(declaration)

        skeletons: dict[str, TypeSymbol] = {}
        for metadata_name, kind in self._references.items():
            name = metadata_name.rpartition(".")[2].split("`")[0]
            namespace = metadata_name.rpartition(".")[0]
            skeletons[metadata_name] = TypeSymbol(
                metadata_name, name=name, namespace=namespace, kind=kind, is_external=True
            )
        for metadata_name, parts in merged.items():
            first = parts[0]
            skeletons[metadata_name] = TypeSymbol(
                metadata_name,
                name=first.name,
                namespace=first.namespace,
                kind=first.kind,
                type_parameters=first.type_parameters,
                containing_type=skeletons.get(first.containing_type) if first.containing_type else None,
                locations=tuple(part.location for part in parts),
            )

        self._types.update({name: symbol for name, symbol in skeletons.items() if symbol.is_external})
        for metadata_name, parts in merged.items():
            interfaces: list[TypeSymbol] = []
            for part in parts:
                for base_name in part.base_types:
                    resolved = self._resolve(base_name, part.scope)
                    if resolved is None:
                        logger.debug("Unresolved base type %s of %s", base_name, metadata_name)
                        continue
                    symbol = skeletons[resolved]
                    if symbol.kind == "interface" and symbol not in interfaces:
                        interfaces.append(symbol)
            containing = parts[0].containing_type
            self._types[metadata_name] = replace(
                skeletons[metadata_name],
                containing_type=self._types.get(containing) if containing else None,
                interfaces=tuple(interfaces),
            )

    def _declare(self, node: Node, tree: SyntaxTree) -> _TypeDeclaration:
        source_bytes = tree.source
        scope = _scope_of(node, tree, self._global_usings)
        segment = _type_segment(node, source_bytes)
        containing = scope.enclosing_types[0] if scope.enclosing_types else None
        metadata_name = f"{containing}+{segment}" if containing else _qualify(scope.namespace, segment)

        base_types: list[str] = []
        base_list = next((child for child in node.named_children if child.type == "base_list"), None)
        if base_list is not None:
            for child in base_list.named_children:
                if child.type == "primary_constructor_base_type":
                    child = field_child(child, "type", "identifier", "qualified_name", "generic_name") or child
                if child.type in {"argument_list", "comment"}:
                    continue
                base_types.append(compact_text(child, source_bytes))

        type_parameters = field_child(node, "type_parameters", "type_parameter_list")
        self._kinds[metadata_name] = _kind_keyword(node).split(" ")[-1]
        self._register_namespaces(scope.namespace)
        return _TypeDeclaration(
            metadata_name=metadata_name,
            name=declaration_name(node, source_bytes),
            namespace=scope.namespace,
            kind=_kind_keyword(node),
            type_parameters=" ".join(node_text(type_parameters, source_bytes).split()) if type_parameters else "",
            containing_type=containing,
            base_types=base_types,
            scope=scope,
            location=_location(tree, node),
        )

    def _declare_constants(self, node: Node, tree: SyntaxTree) -> None:
        scope = _scope_of(node, tree, self._global_usings)
        declaration = next((child for child in node.named_children if child.type == "variable_declaration"), None)
        if not scope.enclosing_types or declaration is None:
            return
        for declarator in declaration.named_children:
            if declarator.type != "variable_declarator":
                continue
            name_node = field_child(declarator, "name", "identifier")
            value = _initializer(declarator)
            if name_node is not None and value is not None:
                key = f"{scope.enclosing_types[0]}.{node_text(name_node, tree.source)}"
                self._constants.setdefault(key, (tree, value))

    def _register_namespaces(self, namespace: str) -> None:
        parts = namespace.split(".") if namespace else []
        for size in range(1, len(parts) + 1):
            self._namespaces.add(".".join(parts[:size]))

    def resolve_type(self, name: str, tree: SyntaxTree, node: Node, *, attribute: bool = False) -> TypeSymbol | None:
        """Bind a type name written at ``node`` to its symbol, the way C# name lookup would."""
        resolved = self._resolve(name, self._scope(node, tree), attribute=attribute)
        return self._types.get(resolved) if resolved else None

    def _scope(self, node: Node, tree: SyntaxTree) -> _Scope:
        return _scope_of(node, tree, self._global_usings)

    def _resolve(self, name: str, scope: _Scope, *, attribute: bool = False) -> str | None:
        text = "".join(name.split())
        absolute = text.startswith(_GLOBAL_PREFIX)
        text = text.removeprefix(_GLOBAL_PREFIX)

        if "::" in text:
            alias, _, text = text.partition("::")
            target = self._alias_target(alias, scope)
            if target is None:
                return None
            text = f"{target}.{text}"
            absolute = True

        segments = split_type_name(text)
        if not segments:
            return None

        variants = [segments]
        if attribute:
            variants = [segments[:-1] + [segments[-1] + _ATTRIBUTE_SUFFIX], segments]
        for variant in variants:
            resolved = self._resolve_absolute(variant) if absolute else self._resolve_segments(variant, scope)
            if resolved is not None:
                return resolved
        return None

    def _constant(self, name: str, scope: _Scope, seen: frozenset[str] = frozenset()) -> Any:
        """Fold a reference to a ``const`` field: ``X`` in an enclosing type, or ``Type.X``."""
        owner, _, member = "".join(name.split()).rpartition(".")
        if owner:
            resolved = self._resolve(owner, scope)
            owners = [resolved] if resolved else []
        else:
            owners = list(scope.enclosing_types)

        for owner_name in owners:
            key = f"{owner_name}.{member}"
            if key not in self._constants:
                continue
            if key in seen:
                logger.debug("Circular constant %s", key)
                return NOT_CONSTANT
            tree, node = self._constants[key]
            declaring_scope = _scope_of(node, tree, self._global_usings)
            return constant_value(
                node, tree.source, lambda inner: self._constant(inner, declaring_scope, seen | {key})
            )
        return NOT_CONSTANT

    def _alias_target(self, alias: str, scope: _Scope) -> str | None:
        for level in scope.levels:
            for using in level.usings:
                if using.alias == alias:
                    return using.target
        return None

    def _resolve_absolute(self, segments: list[str]) -> str | None:
        return self._walk_segments("namespace", "", segments)

    def _resolve_segments(self, segments: list[str], scope: _Scope) -> str | None:
        head, rest = segments[0], segments[1:]

        for enclosing in scope.enclosing_types:
            nested = f"{enclosing}+{head}"
            if nested in self._kinds:
                return self._walk_segments("type", nested, rest)

        for level in scope.levels:
            qualified = _qualify(level.namespace, head)
            if qualified in self._kinds:
                return self._walk_segments("type", qualified, rest)
            if qualified in self._namespaces:
                resolved = self._walk_segments("namespace", qualified, rest)
                if resolved is not None:
                    return resolved

            for using in level.usings:
                if using.alias == head:
                    aliased = self._resolve_absolute(split_type_name(using.target) + rest)
                    if aliased is not None:
                        return aliased

            imported = [
                _qualify(using.target, head)
                for using in level.usings
                if using.alias is None and _qualify(using.target, head) in self._kinds
            ]
            if imported:
                if len(set(imported)) > 1:
                    logger.debug("Ambiguous reference %s between %s; using the first", head, imported)
                return self._walk_segments("type", imported[0], rest)
        return None

    def _walk_segments(self, kind: str, current: str, segments: list[str]) -> str | None:
        for segment in segments:
            if kind == "namespace":
                candidate = _qualify(current, segment)
                if candidate in self._kinds:
                    kind = "type"
                elif candidate not in self._namespaces:
                    return None
            else:
                candidate = f"{current}+{segment}"
                if candidate not in self._kinds:
                    return None
            current = candidate
        return current if kind == "type" else None


class SemanticModel:
    """Read-only semantic view of one syntax tree within a compilation."""

    def __init__(self, compilation: Compilation, tree: SyntaxTree) -> None:
        self._compilation = compilation
        self._tree = tree

    @property
    def syntax_tree(self) -> SyntaxTree:
        return self._tree

    def get_declared_symbol(self, declarator: Node) -> FieldSymbol | None:
        """Return the field declared by a ``variable_declarator`` inside a ``field_declaration``."""
        declaration = declarator.parent
        field_declaration = declaration.parent if declaration is not None else None
        if field_declaration is None or field_declaration.type != "field_declaration":
            return None

        tree = self._tree
        source_bytes = tree.source
        scope = self._compilation._scope(field_declaration, tree)
        if not scope.enclosing_types:
            return None
        containing_type = self._compilation.get_type_by_metadata_name(scope.enclosing_types[0])
        if containing_type is None:
            return None

        name_node = field_child(declarator, "name", "identifier")
        type_node = declaration.child_by_field_name("type")
        if type_node is None and declaration.named_children:
            type_node = declaration.named_children[0]
        if name_node is None or type_node is None:
            return None

        return FieldSymbol(
            name=node_text(name_node, source_bytes),
            type=" ".join(node_text(type_node, source_bytes).split()),
            containing_type=containing_type,
            attributes=self._attributes(field_declaration, scope),
            modifiers=modifiers(field_declaration, source_bytes),
            documentation=collect_documentation(field_declaration, source_bytes),
            location=_location(tree, name_node),
            usings=tuple(using for level in scope.levels for using in level.usings if not using.is_global),
        )

    def _attributes(self, field_declaration: Node, scope: _Scope) -> tuple[AttributeData, ...]:
        source_bytes = self._tree.source
        attributes: list[AttributeData] = []
        for attribute_list in field_declaration.named_children:
            if attribute_list.type != "attribute_list":
                continue
            for attribute in attribute_list.named_children:
                if attribute.type != "attribute":
                    continue
                name_node = field_child(attribute, "name", "identifier", "qualified_name", "alias_qualified_name")
                if name_node is None:
                    continue
                resolved = self._compilation._resolve(compact_text(name_node, source_bytes), scope, attribute=True)
                positional, named = self._arguments(attribute, scope)
                attributes.append(
                    AttributeData(
                        attribute_class=self._compilation.get_type_by_metadata_name(resolved) if resolved else None,
                        constructor_arguments=positional,
                        named_arguments=named,
                        location=_location(self._tree, attribute),
                    )
                )
        return tuple(attributes)

    def _arguments(self, attribute: Node, scope: _Scope) -> tuple[tuple[Any, ...], tuple[tuple[str, Any], ...]]:
        source_bytes = self._tree.source
        positional: list[Any] = []
        named: list[tuple[str, Any]] = []
        argument_list = next((c for c in attribute.named_children if c.type == "attribute_argument_list"), None)
        if argument_list is None:
            return (), ()

        def lookup(text: str) -> Any:
            return self._compilation._constant(text, scope)

        for argument in argument_list.named_children:
            if argument.type != "attribute_argument" or not argument.named_children:
                continue
            expression = argument.named_children[-1]
            name: str | None = None
            for child in argument.children:
                if child.type == "name_equals":
                    name_node = field_child(child, "name", "identifier")
                    name = node_text(name_node, source_bytes) if name_node is not None else None
                elif child.type == "=" and len(argument.named_children) > 1:
                    name = node_text(argument.named_children[0], source_bytes)
            if name is None and expression.type == "assignment_expression":
                left = expression.child_by_field_name("left")
                right = expression.child_by_field_name("right")
                if left is not None and right is not None and left.type == "identifier":
                    name, expression = node_text(left, source_bytes), right

            value = constant_value(expression, source_bytes, lookup)
            if name is None:
                positional.append(value)
            else:
                named.append((name, value))
        return tuple(positional), tuple(named)
