"""
Projection Layer

Renders resolved types as target-language declarations.
"""

from .base import DeclarationWriter, ProjectedDeclaration
from .typescript import TypeScriptWriter, to_camel_case

__all__ = [
    "DeclarationWriter",
    "ProjectedDeclaration",
    "TypeScriptWriter",
    "to_camel_case",
]
