"""Shared fixtures and helpers for tests."""

from collections.abc import Callable

import pytest

from autonotify.core.compilation import Compilation
from autonotify.core.generator import bind_compilation
from autonotify.core.syntax import SyntaxTree, parse_source


# ---------------------------------------------------------------------------
# Auto-marker: every test here runs in-process without external services
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_tree() -> Callable[..., SyntaxTree]:
    """Parse a C# snippet; the path defaults to a per-call placeholder."""
    counter = iter(range(1_000_000))

    def _make(source: str, path: str | None = None) -> SyntaxTree:
        return parse_source(source, path or f"Source{next(counter)}.cs")

    return _make


@pytest.fixture
def bound_compilation() -> Callable[..., Compilation]:
    """Build a compilation with the marker declaration merged in, as a generation pass sees it."""

    def _bind(*trees: SyntaxTree) -> Compilation:
        compilation, _, _ = bind_compilation(Compilation(trees))
        return compilation

    return _bind
