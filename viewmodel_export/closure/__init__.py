"""
Closure Layer

Discovers the transitive set of types (and the files defining them) needed to
project the requested models.
"""

from .builder import ClosureBuilder, ClosureResult, ClosureState
from .visitor import DependencyVisitor, leaf_type_names

__all__ = [
    "ClosureBuilder",
    "ClosureResult",
    "ClosureState",
    "DependencyVisitor",
    "leaf_type_names",
]
