"""Unit tests for generator options."""

import pytest

from autonotify.config import GeneratorOptions, load_options


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("AUTONOTIFY_QUALIFIED_KEYS", raising=False)
    monkeypatch.delenv("AUTONOTIFY_REFERENCES", raising=False)


def test_defaults() -> None:
    assert load_options() == GeneratorOptions()
    assert GeneratorOptions().qualified_keys is False
    assert GeneratorOptions().extra_references == ()


@pytest.mark.parametrize(
    ("value", "expected"),
    [("1", True), ("TRUE", True), (" yes ", True), ("on", True), ("0", False), ("nope", False)],
)
def test_qualified_keys_from_env(monkeypatch: pytest.MonkeyPatch, value: str, expected: bool) -> None:
    monkeypatch.setenv("AUTONOTIFY_QUALIFIED_KEYS", value)

    assert load_options().qualified_keys is expected


def test_references_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTONOTIFY_REFERENCES", "My.Lib.IThing=interface, ,My.Lib.Base")

    assert load_options().extra_references == ("My.Lib.IThing=interface", "My.Lib.Base")


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTONOTIFY_QUALIFIED_KEYS", "1")
    monkeypatch.setenv("AUTONOTIFY_REFERENCES", "A.B")

    options = load_options(qualified_keys=False, extra_references=("C.D",))

    assert options.qualified_keys is False
    assert options.extra_references == ("C.D",)


def test_none_overrides_are_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTONOTIFY_QUALIFIED_KEYS", "true")

    assert load_options(qualified_keys=None, extra_references=None).qualified_keys is True
