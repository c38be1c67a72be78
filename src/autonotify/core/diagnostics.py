from dataclasses import dataclass

from autonotify.core.symbols import Location
from autonotify.models import Diagnostic, Severity


@dataclass(frozen=True)
class DiagnosticDescriptor:
    id: str
    severity: Severity
    message_format: str

    def create(self, location: Location | None, *args: object) -> Diagnostic:
        return Diagnostic(
            id=self.id,
            severity=self.severity,
            message=self.message_format.format(*args),
            path=location.path if location else None,
            line=location.line if location else None,
            column=location.column if location else None,
        )


GENERATION_FAILED = DiagnosticDescriptor(
    "ANG000",
    "error",
    "Generating notifiable properties for '{0}' failed: {1}",
)
TYPE_NOT_TOP_LEVEL = DiagnosticDescriptor(
    "ANG001",
    "warning",
    "Type '{0}' must be declared directly in a namespace to generate notifiable properties",
)
DUPLICATE_MARKER = DiagnosticDescriptor(
    "ANG002",
    "warning",
    "Field '{0}' carries {1} NotifiableProperty attributes; only the first is used",
)
UNSUPPORTED_FIELD = DiagnosticDescriptor(
    "ANG003",
    "warning",
    "Field '{0}' is {1} and cannot back a notifiable property",
)
DUPLICATE_FRAGMENT_KEY = DiagnosticDescriptor(
    "ANG004",
    "warning",
    "Generated source '{0}' for '{1}' collides with '{2}'; enable qualified keys to generate both",
)
DUPLICATE_QUALIFIED_FRAGMENT_KEY = DiagnosticDescriptor(
    "ANG004",
    "warning",
    "Generated source '{0}' for '{1}' collides with '{2}'; rename one of the types to generate both",
)
NON_CONSTANT_PROPERTY_NAME = DiagnosticDescriptor(
    "ANG005",
    "warning",
    "PropertyName of field '{0}' is not a constant string; the field is skipped",
)
CONFLICTING_USING_ALIAS = DiagnosticDescriptor(
    "ANG006",
    "warning",
    "Using alias '{0}' names '{1}' and '{2}' in different parts of '{3}'; no properties can be generated for it",
)
