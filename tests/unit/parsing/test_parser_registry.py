"""
Parser registry and AST wrapper
"""

import pytest

from viewmodel_export.exceptions import ParsingError
from viewmodel_export.parsing import AstTree, ParserRegistry, SourceFile, get_registry


@pytest.fixture
def registry():
    return ParserRegistry()


class TestParserRegistry:
    """Language registration and lookup"""

    def test_csharp_parser_available(self, registry):
        assert registry.get_parser("csharp") is not None

    @pytest.mark.parametrize("alias", ["cs", "c_sharp", "c#"])
    def test_aliases(self, registry, alias):
        assert registry.get_parser(alias) is not None

    def test_unknown_language(self, registry):
        assert registry.get_parser("cobol") is None

    def test_global_registry_is_shared(self):
        assert get_registry() is get_registry()


class TestAstTree:
    """Tree-sitter wrapper"""

    def test_parse_and_text(self):
        source = SourceFile.from_content("/virtual/A.cs", "public class A { }")
        ast = AstTree.parse(source)

        (declaration,) = ast.root.named_children
        assert declaration.type == "class_declaration"
        assert ast.get_text(declaration) == "public class A { }"
        assert ast.get_errors() == []

    def test_span_is_one_based(self):
        source = SourceFile.from_content("/virtual/A.cs", "\npublic class A { }")
        ast = AstTree.parse(source)

        span = ast.get_span(ast.root.named_children[0])
        assert span.start_line == 2
        assert span.start_col == 0

    def test_errors_reported(self):
        source = SourceFile.from_content("/virtual/A.cs", "public class A { public int X { get; set; }")
        ast = AstTree.parse(source)

        assert ast.get_errors()

    def test_unsupported_language_raises(self):
        source = SourceFile.from_content("/virtual/A.cob", "IDENTIFICATION DIVISION.", language="cobol")
        with pytest.raises(ParsingError):
            AstTree.parse(source)
