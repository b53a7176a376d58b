"""
Ambient Platform Types

Catalogue of the platform (BCL) types a model may reference without defining
them: primitives, well-known value types, collection interfaces and classes.
Lookups are by simple name; qualifiers such as ``System.`` are ignored.
"""

from collections.abc import Iterable

from .models import TypeRefKind

# C# keywords → canonical CLR names
KEYWORDS: dict[str, str] = {
    "bool": "System.Boolean",
    "char": "System.Char",
    "byte": "System.Byte",
    "sbyte": "System.SByte",
    "short": "System.Int16",
    "ushort": "System.UInt16",
    "int": "System.Int32",
    "uint": "System.UInt32",
    "long": "System.Int64",
    "ulong": "System.UInt64",
    "float": "System.Single",
    "double": "System.Double",
    "nint": "System.IntPtr",
    "nuint": "System.UIntPtr",
    "decimal": "System.Decimal",
    "string": "System.String",
    "object": "System.Object",
    "dynamic": "System.Object",
}

# Primitive numerics (CLR IsPrimitive, minus Boolean and Char)
NUMERIC = {
    "Byte",
    "SByte",
    "Int16",
    "UInt16",
    "Int32",
    "UInt32",
    "Int64",
    "UInt64",
    "Single",
    "Double",
    "IntPtr",
    "UIntPtr",
}

SCALARS: dict[str, TypeRefKind] = {
    "Boolean": TypeRefKind.BOOLEAN,
    "Char": TypeRefKind.CHAR,
    "Decimal": TypeRefKind.DECIMAL,
    "String": TypeRefKind.STRING,
    "Guid": TypeRefKind.GUID,
    **{name: TypeRefKind.NUMERIC for name in NUMERIC},
}

# Generic enumerables with exactly one element type argument
GENERIC_SEQUENCES = {
    "IEnumerable",
    "ICollection",
    "IList",
    "IReadOnlyCollection",
    "IReadOnlyList",
    "ISet",
    "IReadOnlySet",
    "List",
    "HashSet",
    "SortedSet",
    "LinkedList",
    "Queue",
    "Stack",
    "Collection",
    "ReadOnlyCollection",
    "ObservableCollection",
    "ConcurrentBag",
    "ConcurrentQueue",
    "ConcurrentStack",
    "BlockingCollection",
    "IProducerConsumerCollection",
    "ImmutableArray",
    "ImmutableList",
    "ImmutableHashSet",
    "ImmutableSortedSet",
    "ImmutableQueue",
    "ImmutableStack",
    "IImmutableList",
    "IImmutableSet",
    "FrozenSet",
}

# Enumerables without an element type argument (System.Collections)
NON_GENERIC_SEQUENCES = {
    "IEnumerable",
    "ICollection",
    "IList",
    "ArrayList",
    "BitArray",
    "Queue",
    "Stack",
}

DICTIONARIES = {
    "Dictionary",
    "IDictionary",
    "IReadOnlyDictionary",
    "SortedDictionary",
    "SortedList",
    "ConcurrentDictionary",
    "ImmutableDictionary",
    "ImmutableSortedDictionary",
    "IImmutableDictionary",
    "FrozenDictionary",
}

# Other well-known platform types; they resolve, and project to their bare name
WELL_KNOWN = {
    "Object",
    "ValueType",
    "Enum",
    "Array",
    "Attribute",
    "Exception",
    "Type",
    "DateTime",
    "DateTimeOffset",
    "DateOnly",
    "TimeOnly",
    "TimeSpan",
    "TimeZoneInfo",
    "Half",
    "Int128",
    "UInt128",
    "BigInteger",
    "Complex",
    "Uri",
    "Version",
    "Tuple",
    "ValueTuple",
    "KeyValuePair",
    "Lazy",
    "Task",
    "ValueTask",
    "Action",
    "Func",
    "Predicate",
    "Memory",
    "ReadOnlyMemory",
    "Stream",
    "Encoding",
    "CultureInfo",
    "Regex",
    "IPAddress",
    "CancellationToken",
    "Hashtable",
    "NameValueCollection",
    "JsonElement",
    "JsonDocument",
    "JsonNode",
    "JsonObject",
    "JsonArray",
    "IEquatable",
    "IComparable",
    "IComparer",
    "IEqualityComparer",
    "IFormattable",
    "ICloneable",
    "IDisposable",
    "IAsyncDisposable",
    "IAsyncEnumerable",
    "INotifyPropertyChanged",
    "INotifyCollectionChanged",
    "IValidatableObject",
}

# Enum underlying types and their value ranges
ENUM_RANGES: dict[str, tuple[int, int]] = {
    "byte": (0, 2**8 - 1),
    "sbyte": (-(2**7), 2**7 - 1),
    "short": (-(2**15), 2**15 - 1),
    "ushort": (0, 2**16 - 1),
    "int": (-(2**31), 2**31 - 1),
    "uint": (0, 2**32 - 1),
    "long": (-(2**63), 2**63 - 1),
    "ulong": (0, 2**64 - 1),
}

CLR_TO_KEYWORD = {
    "Byte": "byte",
    "SByte": "sbyte",
    "Int16": "short",
    "UInt16": "ushort",
    "Int32": "int",
    "UInt32": "uint",
    "Int64": "long",
    "UInt64": "ulong",
}


def integral_keyword(text: str) -> str | None:
    """Normalise an integral type (``byte`` or ``System.Byte``) to its keyword"""
    simple = text.rsplit(".", 1)[-1].strip()
    if simple in ENUM_RANGES:
        return simple
    return CLR_TO_KEYWORD.get(simple)


class AmbientCatalog:
    """
    Platform type lookup.

    Example:
        catalog = AmbientCatalog(extra=["NodaTime.Instant"])
        catalog.scalar_kind("Int32")     # TypeRefKind.NUMERIC
        catalog.is_sequence("List", 1)   # True
        catalog.is_known("Instant")      # True
    """

    def __init__(self, extra: Iterable[str] = ()):
        """
        Args:
            extra: Additional external type names accepted without a warning
        """
        self._extra = {name.rsplit(".", 1)[-1] for name in extra if name}

    def keyword(self, text: str) -> str | None:
        """Canonical CLR name for a C# keyword"""
        return KEYWORDS.get(text)

    def scalar_kind(self, simple_name: str) -> TypeRefKind | None:
        return SCALARS.get(simple_name)

    def is_sequence(self, simple_name: str, arity: int) -> bool:
        if arity == 1:
            return simple_name in GENERIC_SEQUENCES
        return arity == 0 and simple_name in NON_GENERIC_SEQUENCES

    def is_dictionary(self, simple_name: str, arity: int) -> bool:
        return arity == 2 and simple_name in DICTIONARIES

    def is_nullable(self, simple_name: str, arity: int) -> bool:
        return arity == 1 and simple_name == "Nullable"

    def is_known(self, simple_name: str) -> bool:
        """Whether the name denotes any catalogued platform (or configured) type"""
        return (
            simple_name in SCALARS
            or simple_name in GENERIC_SEQUENCES
            or simple_name in NON_GENERIC_SEQUENCES
            or simple_name in DICTIONARIES
            or simple_name in WELL_KNOWN
            or simple_name == "Nullable"
            or simple_name in self._extra
        )

    def enum_underlying(self, text: str) -> str | None:
        """Normalise an enum base (``byte`` or ``System.Byte``) to its keyword"""
        return integral_keyword(text)
