"""Unit tests for property name derivation."""

import pytest

from autonotify.core.naming import derive_property_name


@pytest.mark.parametrize(
    ("identifier", "expected"),
    [
        ("_value", "Value"),
        ("__value", "Value"),
        ("value", "Value"),
        ("_userName", "UserName"),
        ("_x", "X"),
        ("x", "X"),
        ("_", ""),
        ("___", ""),
        ("", ""),
        ("_Value", "Value"),
        ("_1st", "1st"),
        ("_émile", "émile"),
        ("_a_b", "A_b"),
    ],
)
def test_derives_name_from_identifier(identifier: str, expected: str) -> None:
    assert derive_property_name(identifier) == expected


@pytest.mark.parametrize("identifier", ["_value", "_", "", "Value"])
def test_override_is_returned_verbatim(identifier: str) -> None:
    assert derive_property_name(identifier, "DisplayName") == "DisplayName"


def test_empty_override_is_still_an_override() -> None:
    """An explicit empty name wins over derivation; the caller drops it."""
    assert derive_property_name("_value", "") == ""


def test_none_override_falls_back_to_derivation() -> None:
    assert derive_property_name("_value", None) == "Value"


def test_rest_of_name_is_unchanged() -> None:
    assert derive_property_name("_hTTPClient") == "HTTPClient"
    assert derive_property_name("_camelCaseName") == "CamelCaseName"
