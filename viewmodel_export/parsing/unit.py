"""
Parsed Unit

One corpus file parsed into syntax: the tree-sitter AST plus the declaration
models read from it. Units are immutable and are parsed at most once per run.
"""

from dataclasses import dataclass
from pathlib import Path

from viewmodel_export.syntax.models import SyntaxIssue, TypeDeclarationSyntax

from .ast_tree import AstTree
from .csharp_reader import CSharpSyntaxReader
from .source_file import SourceFile


@dataclass(frozen=True)
class ParsedUnit:
    """
    Parsed representation of one source file.

    Attributes:
        path: File path the unit came from
        ast: Tree-sitter AST wrapper
        declarations: Type declarations in document order (nested types flattened)
        syntax_issues: ERROR / missing nodes found by the parser
    """

    path: str
    ast: AstTree
    declarations: tuple[TypeDeclarationSyntax, ...]
    syntax_issues: tuple[SyntaxIssue, ...]

    @classmethod
    def from_source(cls, source: SourceFile) -> "ParsedUnit":
        """
        Parse a source file.

        Args:
            source: Loaded source file

        Returns:
            ParsedUnit
        """
        ast = AstTree.parse(source)
        reader = CSharpSyntaxReader(ast)
        return cls(
            path=source.file_path,
            ast=ast,
            declarations=reader.read(),
            syntax_issues=reader.read_issues(),
        )

    @classmethod
    def parse(cls, path: str | Path) -> "ParsedUnit":
        """
        Read and parse a file from disk.

        Raises:
            OSError: If the file cannot be read
        """
        return cls.from_source(SourceFile.from_file(path))

    @classmethod
    def from_content(cls, path: str, content: str) -> "ParsedUnit":
        """Parse in-memory content (tests, synthetic corpora)"""
        return cls.from_source(SourceFile.from_content(path, content))

    @property
    def has_errors(self) -> bool:
        return bool(self.syntax_issues)

    def __repr__(self) -> str:
        return f"ParsedUnit(path={self.path!r}, declarations={len(self.declarations)})"
