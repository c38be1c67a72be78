from typing import Literal

from pydantic import BaseModel, ConfigDict

Severity = Literal["info", "warning", "error"]


class Diagnostic(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    severity: Severity
    message: str
    path: str | None = None
    line: int | None = None
    column: int | None = None

    def __str__(self) -> str:
        where = ""
        if self.path is not None:
            where = f"{self.path}:{(self.line or 0) + 1}:{(self.column or 0) + 1}: "
        return f"{where}{self.severity} {self.id}: {self.message}"


class GeneratedFragment(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    text: str


class GenerationResult(BaseModel):
    fragments: list[GeneratedFragment] = []
    diagnostics: list[Diagnostic] = []

    @property
    def has_errors(self) -> bool:
        return any(diagnostic.severity == "error" for diagnostic in self.diagnostics)

    def fragment(self, key: str) -> GeneratedFragment | None:
        return next((fragment for fragment in self.fragments if fragment.key == key), None)

    @property
    def keys(self) -> list[str]:
        return [fragment.key for fragment in self.fragments]
