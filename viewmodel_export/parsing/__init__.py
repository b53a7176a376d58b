"""
Parsing Layer

Tree-sitter based parsing infrastructure for C# sources.

Components:
- parser_registry: Language parser management
- source_file: Source file representation
- ast_tree: AST tree wrapper with convenient traversal methods
- csharp_reader: Tree-sitter tree → declaration syntax models
- unit: ParsedUnit (one parsed corpus file)
"""

from .ast_tree import AstTree
from .csharp_reader import CSharpSyntaxReader
from .parser_registry import ParserRegistry, get_registry
from .source_file import SourceFile
from .unit import ParsedUnit

__all__ = [
    "ParserRegistry",
    "get_registry",
    "SourceFile",
    "AstTree",
    "CSharpSyntaxReader",
    "ParsedUnit",
]
