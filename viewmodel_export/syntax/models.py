"""
Syntax Models - Declaration Layer

Immutable, tree-sitter independent view of the C# declarations found in one
file. Only the shapes needed for discovery and compilation are kept: type
declarations, data members, enum members and constant expressions.
"""

from dataclasses import dataclass
from enum import Enum

from viewmodel_export.models import Span

# ============================================================
# Enums
# ============================================================


class TypeSyntaxKind(str, Enum):
    """Shape of a type reference as written"""

    PREDEFINED = "predefined"  # keyword: int, string, bool
    NAME = "name"  # identifier or qualified name
    GENERIC = "generic"  # List<T>, System.Collections.Generic.Dictionary<K, V>
    ARRAY = "array"  # T[], T[,]
    NULLABLE = "nullable"  # T?
    TUPLE = "tuple"  # (int, string)
    OTHER = "other"  # pointers, function pointers


class DeclarationKind(str, Enum):
    """Type declaration kinds"""

    CLASS = "class"
    STRUCT = "struct"
    RECORD = "record"
    INTERFACE = "interface"
    ENUM = "enum"


class MemberKind(str, Enum):
    """Data member kinds"""

    PROPERTY = "property"
    FIELD = "field"
    PARAMETER = "parameter"  # record positional parameter (compiles to a property)


class ExpressionKind(str, Enum):
    """Constant expression shapes (enum member values)"""

    LITERAL = "literal"
    NAME = "name"
    MEMBER_ACCESS = "member_access"
    UNARY = "unary"
    BINARY = "binary"
    PARENTHESIZED = "parenthesized"
    CAST = "cast"
    UNSUPPORTED = "unsupported"


# ============================================================
# Type references
# ============================================================


@dataclass(frozen=True, slots=True)
class TypeSyntax:
    """
    A type reference as written in source.

    Attributes:
        kind: Reference shape
        text: Verbatim source text
        name: Simple (rightmost) name for PREDEFINED/NAME/GENERIC
        qualifier: Namespace/alias qualifier, if written
        arguments: Generic arguments; the element type for ARRAY/NULLABLE;
            element types for TUPLE
        rank: Dimension count for ARRAY
    """

    kind: TypeSyntaxKind
    text: str
    name: str = ""
    qualifier: str = ""
    arguments: tuple["TypeSyntax", ...] = ()
    rank: int = 1

    @property
    def element(self) -> "TypeSyntax | None":
        """Element type of an array or nullable reference"""
        if self.kind in (TypeSyntaxKind.ARRAY, TypeSyntaxKind.NULLABLE) and self.arguments:
            return self.arguments[0]
        return None

    def __str__(self) -> str:
        return self.text


# ============================================================
# Expressions
# ============================================================


@dataclass(frozen=True, slots=True)
class ExpressionSyntax:
    """
    A (possibly constant) expression.

    Attributes:
        kind: Expression shape
        text: Verbatim source text
        operator: Operator token for UNARY/BINARY
        operands: Sub-expressions (UNARY: 1, BINARY: 2, PARENTHESIZED/CAST: 1,
            MEMBER_ACCESS: the target expression)
        name: Identifier for NAME, member name for MEMBER_ACCESS
        cast_type: Target type for CAST
    """

    kind: ExpressionKind
    text: str
    operator: str = ""
    operands: tuple["ExpressionSyntax", ...] = ()
    name: str = ""
    cast_type: TypeSyntax | None = None


# ============================================================
# Members
# ============================================================


@dataclass(frozen=True, slots=True)
class MemberSyntax:
    """Property, field or record positional parameter"""

    kind: MemberKind
    name: str
    type: TypeSyntax
    modifiers: frozenset[str]
    span: Span
    explicit_interface: bool = False

    @property
    def is_static(self) -> bool:
        return "static" in self.modifiers or "const" in self.modifiers


@dataclass(frozen=True, slots=True)
class EnumMemberSyntax:
    """Enum member with its optional value expression"""

    name: str
    value: ExpressionSyntax | None
    span: Span


# ============================================================
# Declarations
# ============================================================


@dataclass(frozen=True, slots=True)
class TypeDeclarationSyntax:
    """
    One class, struct, record, interface or enum declaration.

    Nested declarations are reported as separate entries; their enclosing
    type names are kept in ``containing_types``.
    """

    kind: DeclarationKind
    name: str
    namespace: str
    file_path: str
    span: Span
    containing_types: tuple[str, ...] = ()
    type_parameters: tuple[str, ...] = ()
    modifiers: frozenset[str] = frozenset()
    bases: tuple[TypeSyntax, ...] = ()
    members: tuple[MemberSyntax, ...] = ()
    enum_members: tuple[EnumMemberSyntax, ...] = ()

    @property
    def is_enum(self) -> bool:
        return self.kind == DeclarationKind.ENUM

    @property
    def is_partial(self) -> bool:
        return "partial" in self.modifiers

    @property
    def full_name(self) -> str:
        """Namespace-qualified name (nested types joined with '.')"""
        parts = [p for p in (self.namespace, *self.containing_types, self.name) if p]
        return ".".join(parts)

    def is_projected(self, member: MemberSyntax) -> bool:
        """
        Whether a member is a public instance data member of this type.

        Interface members are public unless stated otherwise; record
        positional parameters always compile to public properties.
        """
        if member.kind == MemberKind.PARAMETER:
            return True
        if member.is_static or member.explicit_interface:
            return False
        if self.kind == DeclarationKind.INTERFACE:
            return "private" not in member.modifiers and "protected" not in member.modifiers
        return "public" in member.modifiers

    @property
    def projected_members(self) -> tuple[MemberSyntax, ...]:
        return tuple(m for m in self.members if self.is_projected(m))


@dataclass(frozen=True, slots=True)
class SyntaxIssue:
    """A tree-sitter ERROR or missing node"""

    span: Span
    text: str
    missing: bool = False


def simple_type_name(text: str) -> str:
    """
    Reduce a written type name to its simple name.

    ``System.Collections.Generic.List<int>`` → ``List``; ``global::Models.Address`` → ``Address``.
    """
    name = text.strip().split("<", 1)[0]
    name = name.rsplit("::", 1)[-1]
    return name.rsplit(".", 1)[-1].strip()
