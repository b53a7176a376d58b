"""
Resolution Layer

Compiles retained syntax into a semantic model and exposes the resolved
shape of each wanted type.
"""

from .ambient import AmbientCatalog
from .compilation import Compilation, CompiledModel
from .constants import EnumConstantEvaluator, parse_integer_literal
from .diagnostics import Diagnostic, Severity
from .models import EnumValue, ResolvedMember, ResolvedType, TypeRef, TypeRefKind
from .resolver import TypeResolver

__all__ = [
    "AmbientCatalog",
    "Compilation",
    "CompiledModel",
    "Diagnostic",
    "EnumConstantEvaluator",
    "EnumValue",
    "ResolvedMember",
    "ResolvedType",
    "Severity",
    "TypeRef",
    "TypeRefKind",
    "TypeResolver",
    "parse_integer_literal",
]
