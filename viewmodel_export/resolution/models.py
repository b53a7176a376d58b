"""
Resolved Type Models - Semantic Layer

Strongly typed description of compiled types, consumed only by projectors.
Never built directly from syntax: only ``Compilation`` creates these.
"""

from dataclasses import dataclass
from enum import Enum

from viewmodel_export.syntax.models import DeclarationKind, MemberKind

# ============================================================
# Enums
# ============================================================


class TypeRefKind(str, Enum):
    """Resolved type reference categories"""

    BOOLEAN = "boolean"  # System.Boolean
    CHAR = "char"  # System.Char
    NUMERIC = "numeric"  # other primitive numerics (Int32, Double, IntPtr, ...)
    DECIMAL = "decimal"  # System.Decimal
    STRING = "string"  # System.String
    GUID = "guid"  # System.Guid
    ARRAY = "array"  # T[] (any rank)
    SEQUENCE = "sequence"  # generic single-element enumerable (List<T>); no argument for ArrayList
    DICTIONARY = "dictionary"  # Dictionary<K, V>
    NULLABLE = "nullable"  # Nullable<T>, T?
    DECLARED = "declared"  # type defined in the compiled sources
    TYPE_PARAMETER = "type_parameter"  # T of a generic declaration
    EXTERNAL = "external"  # ambient or unknown type outside the compiled sources


# ============================================================
# References
# ============================================================


@dataclass(frozen=True, slots=True)
class TypeRef:
    """
    Resolved type reference.

    Attributes:
        kind: Category
        name: Canonical name (``System.Int32``, ``Shop.Models.Order``) for
            primitives and declared types; simple source name for external
            types and type parameters
        arguments: Generic arguments, or the element/underlying type for
            ARRAY/NULLABLE
        rank: Array rank
    """

    kind: TypeRefKind
    name: str
    arguments: tuple["TypeRef", ...] = ()
    rank: int = 1

    @property
    def element(self) -> "TypeRef | None":
        return self.arguments[0] if self.arguments else None

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    def __str__(self) -> str:
        if self.kind == TypeRefKind.ARRAY:
            return f"{self.element}[{',' * (self.rank - 1)}]"
        if self.kind == TypeRefKind.NULLABLE:
            return f"{self.element}?"
        if self.arguments:
            return f"{self.name}<{', '.join(str(a) for a in self.arguments)}>"
        return self.name


# ============================================================
# Types
# ============================================================


@dataclass(frozen=True, slots=True)
class ResolvedMember:
    """Public instance field or property"""

    name: str
    type: TypeRef
    kind: MemberKind
    declared_in: str  # full name of the declaring type (differs for inherited members)


@dataclass(frozen=True, slots=True)
class EnumValue:
    """Enum member and its integer value"""

    name: str
    value: int


@dataclass(frozen=True, slots=True)
class ResolvedType:
    """
    Compiled description of one type.

    Attributes:
        name: Simple name
        full_name: Namespace-qualified name
        kind: Declaration kind
        type_parameters: Generic parameter names
        members: Public instance members, declared first then inherited
            (most-derived first), each group in declaration order
        enum_values: Ordered (name, value) pairs for enums
        underlying_type: Enum underlying keyword (``int`` unless declared)
        base_type: Resolved base class, if it is a compiled type
    """

    name: str
    full_name: str
    kind: DeclarationKind
    type_parameters: tuple[str, ...] = ()
    members: tuple[ResolvedMember, ...] = ()
    enum_values: tuple[EnumValue, ...] = ()
    underlying_type: str = "int"
    base_type: str | None = None

    @property
    def is_enum(self) -> bool:
        return self.kind == DeclarationKind.ENUM
