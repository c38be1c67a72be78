"""End-to-end tests for one generation pass over in-memory sources."""

import pytest

from autonotify.config import GeneratorOptions
from autonotify.core import generator
from autonotify.core.attribute import ATTRIBUTE_SOURCE, ATTRIBUTE_SOURCE_KEY
from autonotify.core.driver import generate_sources
from autonotify.core.generator import fragment_key, reference_table
from autonotify.core.symbols import TypeSymbol

SETTER_RAISE = (
    "this.PropertyChanged?.Invoke(this, new global::System.ComponentModel.PropertyChangedEventArgs(nameof({0})));"
)


def _view_model(body: str, name: str = "FooViewModel", namespace: str = "Sample", bases: str = "") -> str:
    return f"""
using AutoNotify;
using System.ComponentModel;

namespace {namespace}
{{
    public partial class {name}{bases}
    {{
{body}
    }}
}}
"""


def test_marker_declaration_is_always_published_first() -> None:
    result = generate_sources({"Empty.cs": "namespace Sample { class Foo {} }"})

    assert result.keys == [ATTRIBUTE_SOURCE_KEY]
    assert result.fragments[0].text == ATTRIBUTE_SOURCE
    assert result.diagnostics == []


def test_no_sources_still_publishes_marker() -> None:
    result = generate_sources({})

    assert result.keys == [ATTRIBUTE_SOURCE_KEY]


def test_field_without_override_gets_derived_property() -> None:
    result = generate_sources({"Foo.cs": _view_model("        [NotifiableProperty] private int _value;")})

    fragment = result.fragment("FooViewModel_autoNotify")
    assert fragment is not None
    assert "public int Value" in fragment.text
    assert "get => this._value;" in fragment.text
    assert SETTER_RAISE.format("Value") in fragment.text
    assert result.keys == [ATTRIBUTE_SOURCE_KEY, "FooViewModel_autoNotify"]


def test_property_name_override() -> None:
    result = generate_sources(
        {"Foo.cs": _view_model('        [NotifiableProperty(PropertyName = "DisplayName")] private string _name;')}
    )

    fragment = result.fragment("FooViewModel_autoNotify")
    assert fragment is not None
    assert "public string DisplayName" in fragment.text
    assert " Name\n" not in fragment.text
    assert SETTER_RAISE.format("DisplayName") in fragment.text


def test_single_underscore_field_yields_empty_partial() -> None:
    result = generate_sources({"Foo.cs": _view_model("        [NotifiableProperty] private int _;")})

    fragment = result.fragment("FooViewModel_autoNotify")
    assert fragment is not None
    assert "partial class FooViewModel : global::System.ComponentModel.INotifyPropertyChanged" in fragment.text
    assert "get =>" not in fragment.text


def test_existing_interface_gets_no_second_event() -> None:
    source = _view_model(
        "        public event PropertyChangedEventHandler PropertyChanged;\n"
        "        [NotifiableProperty] private int _value;",
        bases=" : INotifyPropertyChanged",
    )

    result = generate_sources({"Foo.cs": source})

    fragment = result.fragment("FooViewModel_autoNotify")
    assert fragment is not None
    assert "public event" not in fragment.text
    assert "public int Value" in fragment.text


def test_interface_declared_on_another_partial_part() -> None:
    result = generate_sources(
        {
            "Part1.cs": _view_model("", bases=" : INotifyPropertyChanged"),
            "Part2.cs": _view_model("        [NotifiableProperty] private int _value;"),
        }
    )

    fragment = result.fragment("FooViewModel_autoNotify")
    assert fragment is not None
    assert "public event" not in fragment.text


def test_unrelated_types_get_independent_fragments_in_discovery_order() -> None:
    result = generate_sources(
        {
            "Second.cs": _view_model("        [NotifiableProperty] private int _b;", name="Bar"),
            "First.cs": _view_model("        [NotifiableProperty] private int _a;", name="Foo"),
        }
    )

    assert result.keys == [ATTRIBUTE_SOURCE_KEY, "Bar_autoNotify", "Foo_autoNotify"]
    bar = result.fragment("Bar_autoNotify")
    foo = result.fragment("Foo_autoNotify")
    assert bar is not None and foo is not None
    assert "public int B" in bar.text and "public int A" not in bar.text
    assert "public int A" in foo.text and "public int B" not in foo.text


def test_generation_is_idempotent() -> None:
    sources = {
        "Foo.cs": _view_model(
            "        /// <summary>The count.</summary>\n"
            "        [NotifiableProperty] private int _count;\n"
            "        [NotifiableProperty] private string _label;"
        )
    }

    assert generate_sources(sources) == generate_sources(sources)


def test_same_named_attribute_in_other_namespace_is_ignored() -> None:
    source = """
namespace Elsewhere
{
    class NotifiablePropertyAttribute : System.Attribute {}

    partial class Foo
    {
        [NotifiableProperty] private int _value;
    }
}
"""

    result = generate_sources({"Foo.cs": source})

    assert result.keys == [ATTRIBUTE_SOURCE_KEY]


def test_nested_type_is_reported_and_skipped() -> None:
    source = """
using AutoNotify;

namespace Sample
{
    partial class Outer
    {
        partial class Inner
        {
            [NotifiableProperty] private int _value;
        }
    }
}
"""

    result = generate_sources({"Nested.cs": source})

    assert result.keys == [ATTRIBUTE_SOURCE_KEY]
    assert [diagnostic.id for diagnostic in result.diagnostics] == ["ANG001"]
    assert not result.has_errors


def test_key_collision_skips_later_type() -> None:
    sources = {
        "A.cs": _view_model("        [NotifiableProperty] private int _a;", name="Foo", namespace="First"),
        "B.cs": _view_model("        [NotifiableProperty] private int _b;", name="Foo", namespace="Second"),
    }

    result = generate_sources(sources)

    assert result.keys == [ATTRIBUTE_SOURCE_KEY, "Foo_autoNotify"]
    foo = result.fragment("Foo_autoNotify")
    assert foo is not None and "namespace First" in foo.text
    assert [diagnostic.id for diagnostic in result.diagnostics] == ["ANG004"]
    assert "Second.Foo" in result.diagnostics[0].message


def test_qualified_keys_keep_both_types() -> None:
    sources = {
        "A.cs": _view_model("        [NotifiableProperty] private int _a;", name="Foo", namespace="First"),
        "B.cs": _view_model("        [NotifiableProperty] private int _b;", name="Foo", namespace="Second"),
    }

    result = generate_sources(sources, GeneratorOptions(qualified_keys=True))

    assert result.keys == [ATTRIBUTE_SOURCE_KEY, "First.Foo_autoNotify", "Second.Foo_autoNotify"]
    assert result.diagnostics == []


def test_global_namespace_type() -> None:
    source = "using AutoNotify;\n\npartial class Plain\n{\n    [NotifiableProperty] int _value;\n}\n"

    result = generate_sources({"Plain.cs": source})

    fragment = result.fragment("Plain_autoNotify")
    assert fragment is not None
    assert "namespace" not in fragment.text
    assert "using AutoNotify;" in fragment.text


def test_generic_type_keeps_type_parameters() -> None:
    source = """
using AutoNotify;

namespace Sample
{
    partial class Box<T>
    {
        [NotifiableProperty] private T _content;
    }
}
"""

    result = generate_sources({"Box.cs": source})

    fragment = result.fragment("Box_autoNotify")
    assert fragment is not None
    assert "partial class Box<T> : " in fragment.text
    assert "public T Content" in fragment.text


def test_struct_and_file_scoped_namespace() -> None:
    source = """
using AutoNotify;

namespace Sample;

partial struct Point
{
    [NotifiableProperty] private double _x;
}
"""

    result = generate_sources({"Point.cs": source})

    fragment = result.fragment("Point_autoNotify")
    assert fragment is not None
    assert "namespace Sample" in fragment.text
    assert "partial struct Point : " in fragment.text
    assert "public double X" in fragment.text


def test_readonly_field_is_reported_and_skipped() -> None:
    result = generate_sources({"Foo.cs": _view_model("        [NotifiableProperty] private readonly int _value;")})

    fragment = result.fragment("FooViewModel_autoNotify")
    assert fragment is None
    assert [diagnostic.id for diagnostic in result.diagnostics] == ["ANG003"]


def test_doc_summary_is_carried_over() -> None:
    source = _view_model(
        "        /// <summary>\n"
        "        /// Number of <b>open</b> items.\n"
        "        /// </summary>\n"
        "        [NotifiableProperty] private int _open;"
    )

    result = generate_sources({"Foo.cs": source})

    fragment = result.fragment("FooViewModel_autoNotify")
    assert fragment is not None
    assert "/// Number of open items." in fragment.text


class TestFragmentKeys:
    def test_qualified_keys_carry_generic_arity(self) -> None:
        generic = TypeSymbol("Sample.Box`2", name="Box", namespace="Sample", type_parameters="<K, V>")

        assert fragment_key(generic) == "Box_autoNotify"
        assert fragment_key(generic, qualified=True) == "Sample.Box_2_autoNotify"
        assert fragment_key(TypeSymbol("Box`1", name="Box"), qualified=True) == "Box_1_autoNotify"

    def test_simple_and_qualified(self) -> None:
        symbol = TypeSymbol("Sample.Foo", name="Foo", namespace="Sample")

        assert fragment_key(symbol) == "Foo_autoNotify"
        assert fragment_key(symbol, qualified=True) == "Sample.Foo_autoNotify"

    def test_global_namespace_is_never_qualified(self) -> None:
        assert fragment_key(TypeSymbol("Foo", name="Foo"), qualified=True) == "Foo_autoNotify"


@pytest.mark.parametrize(
    ("entries", "expected"),
    [
        ((), {}),
        (("My.Lib.Base",), {"My.Lib.Base": "class"}),
        (("My.Lib.IThing=interface", " My.Lib.Point = struct "), {"My.Lib.IThing": "interface", "My.Lib.Point": "struct"}),
    ],
)
def test_reference_table(entries: tuple[str, ...], expected: dict[str, str]) -> None:
    assert reference_table(entries) == expected


def test_extra_reference_interface_is_recognised() -> None:
    source = """
using AutoNotify;
using My.Lib;

namespace Sample
{
    partial class Foo : IObservable
    {
        [NotifiableProperty] private int _value;
    }
}
"""

    result = generate_sources({"Foo.cs": source}, GeneratorOptions(extra_references=("My.Lib.IObservable=interface",)))

    assert result.fragment("Foo_autoNotify") is not None
    assert result.diagnostics == []


def test_render_failure_is_reported_and_other_types_continue(monkeypatch: pytest.MonkeyPatch) -> None:
    real_render = generator.render_type_group

    def _render(group, notify_symbol, report=None):  # type: ignore[no-untyped-def]
        if group.containing_type.name == "Broken":
            raise RuntimeError("boom")
        return real_render(group, notify_symbol, report)

    monkeypatch.setattr(generator, "render_type_group", _render)
    sources = {
        "Broken.cs": _view_model("        [NotifiableProperty] private int _a;", name="Broken"),
        "Fine.cs": _view_model("        [NotifiableProperty] private int _b;", name="Fine"),
    }

    result = generate_sources(sources)

    assert result.keys == [ATTRIBUTE_SOURCE_KEY, "Fine_autoNotify"]
    assert [diagnostic.id for diagnostic in result.diagnostics] == ["ANG000"]
    assert result.has_errors
    assert "boom" in result.diagnostics[0].message


def test_property_name_from_constant_reference() -> None:
    source = """
using AutoNotify;

namespace Sample
{
    static class Names
    {
        public const string X = "Foo";
    }

    partial class Model
    {
        [NotifiableProperty(PropertyName = Names.X)] private int _v;
    }
}
"""

    result = generate_sources({"Model.cs": source})

    fragment = result.fragment("Model_autoNotify")
    assert fragment is not None
    assert "public int Foo\n" in fragment.text
    assert SETTER_RAISE.format("Foo") in fragment.text
    assert "Names.X" not in fragment.text
    assert result.diagnostics == []


def test_unfoldable_property_name_is_reported_not_emitted() -> None:
    source = _view_model("        [NotifiableProperty(PropertyName = Names.Unknown)] private int _v;")

    result = generate_sources({"Foo.cs": source})

    assert result.fragment("FooViewModel_autoNotify") is None
    assert [diagnostic.id for diagnostic in result.diagnostics] == ["ANG005"]


def test_conflicting_aliases_across_partial_parts_are_reported() -> None:
    sources = {
        "A.cs": "using AutoNotify;\nusing V = System.Int32;\nnamespace N { partial class C { [NotifiableProperty] V _a; } }",
        "B.cs": "using AutoNotify;\nusing V = System.String;\nnamespace N { partial class C { [NotifiableProperty] V _b; } }",
    }

    result = generate_sources(sources)

    assert result.keys == [ATTRIBUTE_SOURCE_KEY]
    assert [diagnostic.id for diagnostic in result.diagnostics] == ["ANG006"]
    assert result.diagnostics[0].path == "B.cs"


def test_matching_usings_across_partial_parts_are_emitted_once() -> None:
    sources = {
        "A.cs": "using AutoNotify;\nusing V = System.Int32;\nnamespace N { partial class C { [NotifiableProperty] V _a; } }",
        "B.cs": "using AutoNotify;\nusing V=System.Int32;\nnamespace N { partial class C { [NotifiableProperty] V _b; } }",
    }

    result = generate_sources(sources)

    fragment = result.fragment("C_autoNotify")
    assert fragment is not None
    assert fragment.text.count("using V") == 1
    assert fragment.text.count("using AutoNotify;") == 1
    assert "public V A" in fragment.text and "public V B" in fragment.text


def test_generic_and_plain_type_with_qualified_keys() -> None:
    source = """
using AutoNotify;

namespace N
{
    partial class C { [NotifiableProperty] private int _a; }
    partial class C<T> { [NotifiableProperty] private T _b; }
}
"""

    result = generate_sources({"C.cs": source}, GeneratorOptions(qualified_keys=True))

    assert result.keys == [ATTRIBUTE_SOURCE_KEY, "N.C_autoNotify", "N.C_1_autoNotify"]
    assert result.diagnostics == []


def test_collision_message_depends_on_key_mode() -> None:
    sources = {
        "A.cs": "using AutoNotify;\nnamespace N { partial class C_1 { [NotifiableProperty] int _a; } }",
        "B.cs": "using AutoNotify;\nnamespace N { partial class C<T> { [NotifiableProperty] int _b; } }",
    }

    qualified = generate_sources(sources, GeneratorOptions(qualified_keys=True))
    simple = generate_sources(
        {
            "A.cs": "using AutoNotify;\nnamespace N { partial class C { [NotifiableProperty] int _a; } }",
            "B.cs": sources["B.cs"],
        }
    )

    assert [diagnostic.id for diagnostic in qualified.diagnostics] == ["ANG004"]
    assert "rename one of the types" in qualified.diagnostics[0].message
    assert "enable qualified keys" not in qualified.diagnostics[0].message
    assert "enable qualified keys" in simple.diagnostics[0].message
