import logging
from xml.sax.saxutils import escape

from autonotify.core.diagnostics import TYPE_NOT_TOP_LEVEL
from autonotify.core.grouping import PropertySpec, TypeGroup
from autonotify.core.resolver import DiagnosticSink
from autonotify.core.symbols import TypeSymbol

logger = logging.getLogger(__name__)

HEADER = "// <auto-generated/>"
_INDENT = "    "
_EVENT_ARGS = "global::System.ComponentModel.PropertyChangedEventArgs"
_EVENT_HANDLER = "global::System.ComponentModel.PropertyChangedEventHandler"


class _SourceWriter:
    def __init__(self) -> None:
        self._lines: list[str] = []
        self._depth = 0

    def line(self, text: str = "") -> None:
        self._lines.append(f"{_INDENT * self._depth}{text}" if text else "")

    def open(self, text: str) -> None:
        self.line(text)
        self.line("{")
        self._depth += 1

    def close(self) -> None:
        self._depth -= 1
        self.line("}")

    def getvalue(self) -> str:
        return "\n".join(self._lines) + "\n"


def _write_property(writer: _SourceWriter, spec: PropertySpec) -> None:
    if spec.doc_comment and spec.doc_comment.strip():
        writer.line("/// <summary>")
        writer.line(f"/// {escape(spec.doc_comment)}")
        writer.line("/// </summary>")
    writer.open(f"public {spec.type} {spec.name}")
    writer.line(f"get => this.{spec.backing_field};")
    writer.open("set")
    writer.line(f"this.{spec.backing_field} = value;")
    writer.line(f"this.PropertyChanged?.Invoke(this, new {_EVENT_ARGS}(nameof({spec.name})));")
    writer.close()
    writer.close()


def render_type_group(
    group: TypeGroup,
    notify_symbol: TypeSymbol,
    report: DiagnosticSink | None = None,
) -> str | None:
    """Render the partial declaration adding notifiable properties to ``group.containing_type``.

    Returns None for types nested in another type; those cannot be extended from a
    separate top-level fragment.
    """
    symbol = group.containing_type
    if not symbol.is_top_level:
        logger.debug("Skipping nested type %s", symbol.to_display_string())
        if report is not None:
            report(TYPE_NOT_TOP_LEVEL.create(symbol.locations[0] if symbol.locations else None, symbol.to_display_string()))
        return None

    writer = _SourceWriter()
    writer.line(HEADER)
    if symbol.namespace:
        writer.open(f"namespace {symbol.namespace}")
    for using in group.usings:
        writer.line(using.text)
    if group.usings:
        writer.line()

    writer.open(
        f"partial {symbol.kind} {symbol.name}{symbol.type_parameters} : global::{notify_symbol.to_display_string()}"
    )
    body_written = False
    if notify_symbol not in symbol.interfaces:
        writer.line(f"public event {_EVENT_HANDLER} PropertyChanged;")
        body_written = True
    for spec in group.members:
        if body_written:
            writer.line()
        _write_property(writer, spec)
        body_written = True
    writer.close()

    if symbol.namespace:
        writer.close()
    return writer.getvalue()
