from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Location:
    path: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.path}:{self.line + 1}:{self.column + 1}"


@dataclass(frozen=True)
class TypeSymbol:
    """Handle for a named type.

    Two handles are equal when they name the same type, i.e. share a metadata name
    (``Namespace.Outer+Inner``, generic arity appended as `` `N``). Everything else is
    descriptive and excluded from comparison, so a same-named type in another
    namespace never compares equal.
    """

    metadata_name: str
    name: str = field(compare=False)
    namespace: str = field(default="", compare=False)
    kind: str = field(default="class", compare=False)
    type_parameters: str = field(default="", compare=False)
    containing_type: "TypeSymbol | None" = field(default=None, compare=False, repr=False)
    interfaces: tuple["TypeSymbol", ...] = field(default=(), compare=False, repr=False)
    locations: tuple[Location, ...] = field(default=(), compare=False, repr=False)
    is_external: bool = field(default=False, compare=False)

    @property
    def is_top_level(self) -> bool:
        return self.containing_type is None

    @property
    def arity(self) -> int:
        _, tick, count = self.metadata_name.rpartition("+")[2].partition("`")
        return int(count) if tick else 0

    def to_display_string(self) -> str:
        return self.metadata_name.replace("+", ".")


@dataclass(frozen=True)
class UsingDirective:
    target: str
    alias: str | None = None
    is_global: bool = False
    is_static: bool = False
    text: str = ""

    @property
    def key(self) -> str:
        """Identity of the directive within one declaration space: the alias name, or the imported target."""
        if self.alias is not None:
            return f"alias:{self.alias}"
        return f"{'static' if self.is_static else 'using'}:{self.target}"


@dataclass(frozen=True)
class AttributeData:
    attribute_class: TypeSymbol | None
    constructor_arguments: tuple[Any, ...] = ()
    named_arguments: tuple[tuple[str, Any], ...] = ()
    location: Location | None = None

    def named_argument(self, name: str, default: Any = None) -> Any:
        for key, value in self.named_arguments:
            if key == name:
                return value
        return default

    def has_named_argument(self, name: str) -> bool:
        return any(key == name for key, _ in self.named_arguments)


@dataclass(frozen=True)
class FieldSymbol:
    name: str
    type: str
    containing_type: TypeSymbol
    attributes: tuple[AttributeData, ...] = ()
    modifiers: tuple[str, ...] = ()
    documentation: str | None = None
    location: Location | None = None
    usings: tuple[UsingDirective, ...] = ()

    @property
    def is_static(self) -> bool:
        return "static" in self.modifiers

    @property
    def is_const(self) -> bool:
        return "const" in self.modifiers

    @property
    def is_readonly(self) -> bool:
        return "readonly" in self.modifiers
