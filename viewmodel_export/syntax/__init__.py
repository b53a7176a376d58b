"""
Syntax Layer

Lightweight declaration models produced by the C# reader and the walker used
to traverse them.
"""

from .models import (
    DeclarationKind,
    EnumMemberSyntax,
    ExpressionKind,
    ExpressionSyntax,
    MemberKind,
    MemberSyntax,
    SyntaxIssue,
    TypeDeclarationSyntax,
    TypeSyntax,
    TypeSyntaxKind,
    simple_type_name,
)
from .walker import SyntaxWalker

__all__ = [
    "DeclarationKind",
    "EnumMemberSyntax",
    "ExpressionKind",
    "ExpressionSyntax",
    "MemberKind",
    "MemberSyntax",
    "SyntaxIssue",
    "SyntaxWalker",
    "TypeDeclarationSyntax",
    "TypeSyntax",
    "TypeSyntaxKind",
    "simple_type_name",
]
