"""
AST Tree wrapper for Tree-sitter
"""

from tree_sitter import Node as TSNode
from tree_sitter import Tree as TSTree

from viewmodel_export.exceptions import ParsingError
from viewmodel_export.models import Span

from .parser_registry import get_registry
from .source_file import SourceFile


class AstTree:
    """
    Wrapper for Tree-sitter AST.

    Provides convenient methods for traversing and analyzing the AST.
    """

    def __init__(self, source: SourceFile, tree: TSTree, source_bytes: bytes):
        """
        Initialize AST tree.

        Args:
            source: Source file
            tree: Tree-sitter tree
            source_bytes: Exact bytes handed to the parser (node offsets index into these)
        """
        self.source = source
        self.tree = tree
        self._root = tree.root_node
        self._bytes = source_bytes

    @classmethod
    def parse(cls, source: SourceFile) -> "AstTree":
        """
        Parse source file into AST.

        Tree-sitter always produces a tree; malformed input shows up as ERROR
        and missing nodes rather than as an exception.

        Args:
            source: Source file to parse

        Returns:
            AstTree instance

        Raises:
            ParsingError: If no parser is available for the language
        """
        registry = get_registry()
        parser = registry.get_parser(source.language)

        if parser is None:
            raise ParsingError(f"Language not supported: {source.language}", {"file": source.file_path})

        source_bytes = source.content.encode(source.encoding)
        tree = parser.parse(source_bytes)

        if tree is None:
            raise ParsingError(f"Failed to parse file: {source.file_path}")

        return cls(source, tree, source_bytes)

    @property
    def root(self) -> TSNode:
        """Get root node"""
        return self._root

    def get_text(self, node: TSNode) -> str:
        """
        Get text content of a node.

        Args:
            node: Tree-sitter node

        Returns:
            Node text
        """
        return self._bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def get_span(self, node: TSNode) -> Span:
        """
        Convert Tree-sitter node to Span.

        Args:
            node: Tree-sitter node

        Returns:
            Span (1-indexed lines, 0-indexed columns)
        """
        # Tree-sitter uses 0-indexed lines
        return Span(
            start_line=node.start_point[0] + 1,
            start_col=node.start_point[1],
            end_line=node.end_point[0] + 1,
            end_col=node.end_point[1],
        )

    def get_errors(self, node: TSNode | None = None) -> list[TSNode]:
        """
        Get all error nodes.

        Children of an ERROR node are not reported separately.

        Args:
            node: Starting node (defaults to root)

        Returns:
            List of error nodes
        """
        if node is None:
            node = self._root

        errors = []
        stack = [node]
        while stack:
            current = stack.pop()
            if current.type == "ERROR" or current.is_missing:
                errors.append(current)
                continue
            if current.has_error:
                stack.extend(reversed(current.children))
        return errors

    def __repr__(self) -> str:
        return f"AstTree(file={self.source.file_path}, language={self.source.language})"
