"""
Compilation: symbol binding, inheritance and diagnostics
"""

import pytest

from viewmodel_export.exceptions import CompilationError
from viewmodel_export.resolution import AmbientCatalog, Compilation, TypeRefKind
from viewmodel_export.resolution.diagnostics import (
    CIRCULAR_BASE,
    CIRCULAR_CONSTANT,
    DUPLICATE_TYPE,
    NOT_CONSTANT,
    TYPE_NOT_FOUND,
    Severity,
)
from viewmodel_export.syntax import DeclarationKind


def _compile(parse_unit, *sources, strict=False, ambient=()):
    units = [parse_unit(src, f"/virtual/File{i}.cs") for i, src in enumerate(sources)]
    return Compilation(units, AmbientCatalog(ambient), strict_references=strict).emit()


def _member_types(model, full_name):
    return {m.name: m.type for m in model.get_type(full_name).members}


class TestTypeBinding:
    """Member types bind to resolved references"""

    def test_primitives_and_ambient(self, parse_unit):
        model = _compile(
            parse_unit,
            """
            public class Order
            {
                public int Count { get; set; }
                public Int32 Other { get; set; }
                public bool Paid { get; set; }
                public char Code { get; set; }
                public decimal Total { get; set; }
                public string Note { get; set; }
                public Guid Id { get; set; }
                public DateTime Created { get; set; }
            }
            """,
        )

        types = _member_types(model, "Order")
        assert types["Count"].kind == TypeRefKind.NUMERIC
        assert types["Count"] == types["Other"]
        assert types["Paid"].kind == TypeRefKind.BOOLEAN
        assert types["Code"].kind == TypeRefKind.CHAR
        assert types["Total"].kind == TypeRefKind.DECIMAL
        assert types["Note"].kind == TypeRefKind.STRING
        assert types["Id"].kind == TypeRefKind.GUID
        assert types["Created"].kind == TypeRefKind.EXTERNAL
        assert model.diagnostics == ()

    def test_containers(self, parse_unit):
        model = _compile(
            parse_unit,
            """
            public class Line { }
            public class Order
            {
                public List<Line> Lines { get; set; }
                public Line[] Array { get; set; }
                public Dictionary<string, Line> ByCode { get; set; }
                public int? Maybe { get; set; }
                public Nullable<int> Also { get; set; }
            }
            """,
        )

        types = _member_types(model, "Order")
        assert types["Lines"].kind == TypeRefKind.SEQUENCE
        assert types["Lines"].arguments[0].kind == TypeRefKind.DECLARED
        assert types["Array"].kind == TypeRefKind.ARRAY
        assert types["ByCode"].kind == TypeRefKind.DICTIONARY
        assert types["Maybe"] == types["Also"]

    def test_same_namespace_preferred(self, parse_unit):
        model = _compile(
            parse_unit,
            "namespace A { public class Address { } }",
            "namespace B { public class Address { } public class Order { public Address Home { get; set; } } }",
        )

        assert _member_types(model, "B.Order")["Home"].name == "B.Address"

    def test_type_parameters(self, parse_unit):
        model = _compile(parse_unit, "public class Page<T> { public List<T> Items { get; set; } }")

        page = model.get_type("Page")
        assert page.type_parameters == ("T",)
        assert page.members[0].type.arguments[0].kind == TypeRefKind.TYPE_PARAMETER


class TestDeclarations:
    """Partial merging and inheritance"""

    def test_partial_members_merge(self, parse_unit):
        model = _compile(
            parse_unit,
            "public partial class Order { public int A { get; set; } }",
            "public partial class Order { public int B { get; set; } }",
        )

        assert [m.name for m in model.get_type("Order").members] == ["A", "B"]
        assert len(model) == 1

    def test_inherited_members_after_declared(self, parse_unit):
        model = _compile(
            parse_unit,
            """
            public abstract class Entity { public Guid Id { get; set; } }
            public class Audited : Entity { public DateTime Created { get; set; } }
            public class Order : Audited, IComparable { public int Number { get; set; } }
            """,
        )

        order = model.get_type("Order")
        assert [m.name for m in order.members] == ["Number", "Created", "Id"]
        assert order.members[2].declared_in == "Entity"
        assert order.base_type == "Audited"

    def test_generic_base_substitution(self, parse_unit):
        model = _compile(
            parse_unit,
            """
            public class Line { }
            public class PagedBase<T> { public List<T> Items { get; set; } }
            public class LinePage : PagedBase<Line> { }
            """,
        )

        (items,) = model.get_type("LinePage").members
        assert items.type.arguments[0].name == "Line"

    def test_enum_values_and_underlying(self, parse_unit):
        model = _compile(parse_unit, "public enum Size : byte { Small = 1, Large }")

        size = model.get_type("Size")
        assert size.kind == DeclarationKind.ENUM
        assert size.underlying_type == "byte"
        assert [(v.name, v.value) for v in size.enum_values] == [("Small", 1), ("Large", 2)]

    def test_enum_references_other_enum(self, parse_unit):
        model = _compile(
            parse_unit,
            "public enum Level { Low = (int)Shop.Priority.High + 1, Max = int.MaxValue, Flag = 1 << 31 }",
            "namespace Shop; public enum Priority { Normal, High = 4 }",
        )

        level = model.get_type("Level")
        assert [(v.name, v.value) for v in level.enum_values] == [
            ("Low", 5),
            ("Max", 2**31 - 1),
            ("Flag", -(2**31)),
        ]

    def test_types_in_unit_then_declaration_order(self, parse_unit):
        model = _compile(parse_unit, "public class B { } public class A { }", "public enum C { X }")

        assert [t.name for t in model.get_types()] == ["B", "A", "C"]


class TestDiagnostics:
    """Errors abort; warnings are kept"""

    def test_syntax_error(self, parse_unit):
        with pytest.raises(CompilationError) as exc_info:
            _compile(parse_unit, "public class Order { public int Id { get; set; }")

        assert exc_info.value.errors

    def test_duplicate_type(self, parse_unit):
        with pytest.raises(CompilationError) as exc_info:
            _compile(parse_unit, "public class Order { }", "public class Order { }")

        assert [d.code for d in exc_info.value.errors] == [DUPLICATE_TYPE]

    def test_circular_base(self, parse_unit):
        with pytest.raises(CompilationError) as exc_info:
            _compile(parse_unit, "public class A : B { } public class B : A { }")

        assert {d.code for d in exc_info.value.errors} == {CIRCULAR_BASE}

    def test_non_constant_enum(self, parse_unit):
        with pytest.raises(CompilationError) as exc_info:
            _compile(parse_unit, "public enum E { A = Environment.ProcessorCount }")

        assert [d.code for d in exc_info.value.errors] == [NOT_CONSTANT]

    def test_circular_reference_across_enums(self, parse_unit):
        with pytest.raises(CompilationError) as exc_info:
            _compile(parse_unit, "public enum A { X = B.Y }", "public enum B { Y = A.X }")

        assert [d.code for d in exc_info.value.errors] == [CIRCULAR_CONSTANT]

    def test_all_diagnostics_reported(self, parse_unit):
        with pytest.raises(CompilationError) as exc_info:
            _compile(
                parse_unit,
                "public class Order { } public enum E { A = B, B = A }",
                "public class Order { } public class Customer { public Missing M { get; set; } }",
            )

        codes = [d.code for d in exc_info.value.diagnostics]
        assert DUPLICATE_TYPE in codes
        assert TYPE_NOT_FOUND in codes
        assert len(exc_info.value.errors) == 2

    def test_unknown_reference_is_warning(self, parse_unit):
        model = _compile(parse_unit, "public class Order { public Money Total { get; set; } }")

        (diagnostic,) = model.diagnostics
        assert diagnostic.code == TYPE_NOT_FOUND
        assert diagnostic.severity == Severity.WARNING
        assert _member_types(model, "Order")["Total"].kind == TypeRefKind.EXTERNAL

    def test_unknown_reference_strict(self, parse_unit):
        with pytest.raises(CompilationError) as exc_info:
            _compile(parse_unit, "public class Order { public Money Total { get; set; } }", strict=True)

        assert [d.code for d in exc_info.value.errors] == [TYPE_NOT_FOUND]

    def test_configured_ambient_type(self, parse_unit):
        model = _compile(
            parse_unit,
            "public class Order { public Instant At { get; set; } }",
            strict=True,
            ambient=["NodaTime.Instant"],
        )

        assert model.diagnostics == ()

    def test_diagnostic_rendering(self, parse_unit):
        model = _compile(parse_unit, "public class Order\n{\n    public Money Total { get; set; }\n}")

        assert str(model.diagnostics[0]).startswith("/virtual/File0.cs(3,5): warning CS0246:")
