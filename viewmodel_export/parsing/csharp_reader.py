"""
C# Syntax Reader

Converts a tree-sitter-c-sharp tree into declaration syntax models.
"""

try:
    from tree_sitter import Node as TSNode
except ImportError:
    TSNode = None

from viewmodel_export.syntax.models import (
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
)

from .ast_tree import AstTree

# C#-specific Tree-sitter node types
TYPE_DECLARATIONS = {
    "class_declaration": DeclarationKind.CLASS,
    "struct_declaration": DeclarationKind.STRUCT,
    "record_declaration": DeclarationKind.RECORD,
    "record_struct_declaration": DeclarationKind.RECORD,
    "interface_declaration": DeclarationKind.INTERFACE,
    "enum_declaration": DeclarationKind.ENUM,
}

# Nodes whose children are read as if they were written in the parent scope
PASS_THROUGH = {
    "declaration_list",
    "preproc_if",
    "preproc_elif",
    "preproc_else",
    "preproc_region",
    "ERROR",
}

LITERAL_TYPES = {
    "integer_literal",
    "real_literal",
    "character_literal",
    "boolean_literal",
    "string_literal",
    "verbatim_string_literal",
    "null_literal",
}


class CSharpSyntaxReader:
    """
    Reads type declarations out of a C# AST.

    Example:
        ast = AstTree.parse(SourceFile.from_file("Models/Order.cs"))
        declarations = CSharpSyntaxReader(ast).read()
    """

    def __init__(self, ast: AstTree):
        self._ast = ast
        self._declarations: list[TypeDeclarationSyntax] = []

    def read(self) -> tuple[TypeDeclarationSyntax, ...]:
        """
        Read all type declarations, nested ones included, in document order.

        Returns:
            Declarations (outer types precede the types nested in them)
        """
        self._declarations = []
        self._read_scope(self._ast.root, namespace="", containing=())
        return tuple(self._declarations)

    def read_issues(self) -> tuple[SyntaxIssue, ...]:
        """Collect ERROR and missing nodes"""
        issues = []
        for node in self._ast.get_errors():
            text = self._ast.get_text(node).strip()
            if node.is_missing:
                text = node.type
            issues.append(SyntaxIssue(span=self._ast.get_span(node), text=text[:40], missing=node.is_missing))
        return tuple(issues)

    # ============================================================
    # Scopes
    # ============================================================

    def _read_scope(self, node: TSNode, namespace: str, containing: tuple[str, ...]) -> None:
        """Read namespace members (compilation unit, namespace body, nested type body)"""
        current_namespace = namespace

        for child in node.children:
            if not child.is_named:
                continue

            if child.type == "namespace_declaration":
                name = self._field_text(child, "name")
                body = self._field(child, "body") or self._first_of_type(child, "declaration_list")
                if body is not None:
                    self._read_scope(body, _join(namespace, name), containing)

            elif child.type == "file_scoped_namespace_declaration":
                # `namespace X;` applies to every following sibling
                current_namespace = _join(namespace, self._field_text(child, "name"))
                self._read_scope(child, current_namespace, containing)

            elif child.type in TYPE_DECLARATIONS:
                self._read_type_declaration(child, current_namespace, containing)

            elif child.type in PASS_THROUGH:
                self._read_scope(child, current_namespace, containing)

    # ============================================================
    # Declarations
    # ============================================================

    def _read_type_declaration(self, node: TSNode, namespace: str, containing: tuple[str, ...]) -> None:
        kind = TYPE_DECLARATIONS[node.type]
        name_node = self._field(node, "name") or self._first_of_type(node, "identifier")
        if name_node is None:
            return
        name = self._ast.get_text(name_node)

        type_parameters: tuple[str, ...] = ()
        bases: list[TypeSyntax] = []
        parameters: list[MemberSyntax] = []
        body = None

        for child in node.children:
            if child.type == "type_parameter_list":
                type_parameters = self._read_type_parameters(child)
            elif child.type == "base_list":
                bases.extend(self._read_base_list(child))
            elif child.type == "parameter_list" and kind == DeclarationKind.RECORD:
                parameters.extend(self._read_record_parameters(child))
            elif child.type in ("declaration_list", "enum_member_declaration_list"):
                body = child

        members: list[MemberSyntax] = list(parameters)
        enum_members: list[EnumMemberSyntax] = []
        nested: list[TSNode] = []

        if body is not None:
            if kind == DeclarationKind.ENUM:
                enum_members = self._read_enum_members(body)
            else:
                self._read_members(body, members, nested)

        self._declarations.append(
            TypeDeclarationSyntax(
                kind=kind,
                name=name,
                namespace=namespace,
                file_path=self._ast.source.file_path,
                span=self._ast.get_span(node),
                containing_types=containing,
                type_parameters=type_parameters,
                modifiers=self._modifiers(node),
                bases=tuple(bases),
                members=tuple(members),
                enum_members=tuple(enum_members),
            ),
        )

        for child in nested:
            self._read_type_declaration(child, namespace, (*containing, name))

    def _read_type_parameters(self, node: TSNode) -> tuple[str, ...]:
        names = []
        for child in node.named_children:
            if child.type != "type_parameter":
                continue
            ident = self._field(child, "name") or self._first_of_type(child, "identifier")
            names.append(self._ast.get_text(ident if ident is not None else child))
        return tuple(names)

    def _read_base_list(self, node: TSNode) -> list[TypeSyntax]:
        bases = []
        for child in node.named_children:
            if child.type in ("argument_list", "comment"):
                continue
            if child.type == "primary_constructor_base_type":
                child = self._field(child, "type") or child.named_children[0]
            bases.append(self.read_type(child))
        return bases

    def _read_record_parameters(self, node: TSNode) -> list[MemberSyntax]:
        members = []
        for child in node.named_children:
            if child.type != "parameter":
                continue
            type_node = self._field(child, "type")
            name_node = self._field(child, "name")
            if type_node is None or name_node is None:
                continue
            members.append(
                MemberSyntax(
                    kind=MemberKind.PARAMETER,
                    name=self._ast.get_text(name_node),
                    type=self.read_type(type_node),
                    modifiers=frozenset({"public"}),
                    span=self._ast.get_span(child),
                )
            )
        return members

    def _read_members(self, body: TSNode, members: list[MemberSyntax], nested: list[TSNode]) -> None:
        for child in body.named_children:
            if child.type == "property_declaration":
                member = self._read_property(child)
                if member is not None:
                    members.append(member)
            elif child.type == "field_declaration":
                members.extend(self._read_fields(child))
            elif child.type in TYPE_DECLARATIONS:
                nested.append(child)
            elif child.type in PASS_THROUGH:
                self._read_members(child, members, nested)

    def _read_property(self, node: TSNode) -> MemberSyntax | None:
        type_node = self._field(node, "type")
        name_node = self._field(node, "name")
        if type_node is None or name_node is None:
            return None

        return MemberSyntax(
            kind=MemberKind.PROPERTY,
            name=self._ast.get_text(name_node),
            type=self.read_type(type_node),
            modifiers=self._modifiers(node),
            span=self._ast.get_span(node),
            explicit_interface=self._first_of_type(node, "explicit_interface_specifier") is not None,
        )

    def _read_fields(self, node: TSNode) -> list[MemberSyntax]:
        declaration = self._first_of_type(node, "variable_declaration")
        if declaration is None:
            return []
        type_node = self._field(declaration, "type")
        if type_node is None:
            return []

        type_syntax = self.read_type(type_node)
        modifiers = self._modifiers(node)
        fields = []
        for declarator in declaration.named_children:
            if declarator.type != "variable_declarator":
                continue
            name_node = self._field(declarator, "name") or self._first_of_type(declarator, "identifier")
            if name_node is None:
                continue
            fields.append(
                MemberSyntax(
                    kind=MemberKind.FIELD,
                    name=self._ast.get_text(name_node),
                    type=type_syntax,
                    modifiers=modifiers,
                    span=self._ast.get_span(declarator),
                )
            )
        return fields

    def _read_enum_members(self, body: TSNode) -> list[EnumMemberSyntax]:
        members = []
        for child in body.named_children:
            if child.type in PASS_THROUGH:
                members.extend(self._read_enum_members(child))
                continue
            if child.type != "enum_member_declaration":
                continue

            name_node = self._field(child, "name") or self._first_of_type(child, "identifier")
            if name_node is None:
                continue
            value_node = self._field(child, "value")
            if value_node is None:
                value_node = self._node_after_equals(child)

            members.append(
                EnumMemberSyntax(
                    name=self._ast.get_text(name_node),
                    value=self.read_expression(value_node) if value_node is not None else None,
                    span=self._ast.get_span(child),
                )
            )
        return members

    # ============================================================
    # Types
    # ============================================================

    def read_type(self, node: TSNode) -> TypeSyntax:
        """
        Convert a type node into TypeSyntax.

        Args:
            node: Any tree-sitter type node

        Returns:
            TypeSyntax (OTHER for shapes that carry no projectable structure)
        """
        text = self._ast.get_text(node)
        node_type = node.type

        if node_type == "predefined_type":
            return TypeSyntax(kind=TypeSyntaxKind.PREDEFINED, text=text, name=text)

        if node_type == "identifier":
            return TypeSyntax(kind=TypeSyntaxKind.NAME, text=text, name=text)

        if node_type in ("qualified_name", "alias_qualified_name"):
            qualifier = self._field(node, "qualifier") or self._field(node, "alias")
            name_node = self._field(node, "name")
            named = node.named_children
            if qualifier is None and named:
                qualifier = named[0]
            if name_node is None and named:
                name_node = named[-1]
            if name_node is None:
                return TypeSyntax(kind=TypeSyntaxKind.OTHER, text=text, name=text)
            inner = self.read_type(name_node)
            return TypeSyntax(
                kind=inner.kind,
                text=text,
                name=inner.name,
                qualifier=self._ast.get_text(qualifier) if qualifier is not None else "",
                arguments=inner.arguments,
            )

        if node_type == "generic_name":
            ident = self._field(node, "name") or self._first_of_type(node, "identifier")
            arg_list = self._first_of_type(node, "type_argument_list")
            arguments = tuple(self.read_type(arg) for arg in arg_list.named_children) if arg_list else ()
            return TypeSyntax(
                kind=TypeSyntaxKind.GENERIC,
                text=text,
                name=self._ast.get_text(ident) if ident is not None else text.split("<", 1)[0],
                arguments=arguments,
            )

        if node_type == "array_type":
            element = self._field(node, "type") or node.named_children[0]
            rank_node = self._field(node, "rank") or self._first_of_type(node, "array_rank_specifier")
            rank = self._ast.get_text(rank_node).count(",") + 1 if rank_node is not None else 1
            return TypeSyntax(kind=TypeSyntaxKind.ARRAY, text=text, arguments=(self.read_type(element),), rank=rank)

        if node_type == "nullable_type":
            element = self._field(node, "type") or node.named_children[0]
            return TypeSyntax(kind=TypeSyntaxKind.NULLABLE, text=text, arguments=(self.read_type(element),))

        if node_type == "tuple_type":
            elements = []
            for child in node.named_children:
                element = self._field(child, "type") if child.type == "tuple_element" else child
                if element is not None:
                    elements.append(self.read_type(element))
            return TypeSyntax(kind=TypeSyntaxKind.TUPLE, text=text, arguments=tuple(elements))

        if node_type in ("type", "ref_type", "scoped_type") and node.named_children:
            inner = self._field(node, "type") or node.named_children[-1]
            return self.read_type(inner)

        return TypeSyntax(kind=TypeSyntaxKind.OTHER, text=text, name=text)

    # ============================================================
    # Expressions
    # ============================================================

    def read_expression(self, node: TSNode) -> ExpressionSyntax:
        """Convert an expression node into ExpressionSyntax"""
        text = self._ast.get_text(node)
        node_type = node.type

        if node_type in LITERAL_TYPES:
            return ExpressionSyntax(kind=ExpressionKind.LITERAL, text=text, name=node_type)

        if node_type == "identifier":
            return ExpressionSyntax(kind=ExpressionKind.NAME, text=text, name=text)

        if node_type == "member_access_expression":
            target = self._field(node, "expression")
            name_node = self._field(node, "name")
            if target is None or name_node is None:
                return ExpressionSyntax(kind=ExpressionKind.UNSUPPORTED, text=text)
            return ExpressionSyntax(
                kind=ExpressionKind.MEMBER_ACCESS,
                text=text,
                name=self._ast.get_text(name_node),
                operands=(self.read_expression(target),),
            )

        if node_type == "prefix_unary_expression" and node.named_children:
            operator = node.children[0]
            return ExpressionSyntax(
                kind=ExpressionKind.UNARY,
                text=text,
                operator=self._ast.get_text(operator),
                operands=(self.read_expression(node.named_children[-1]),),
            )

        if node_type == "binary_expression":
            left = self._field(node, "left")
            right = self._field(node, "right")
            operator = self._field(node, "operator")
            if left is None or right is None or operator is None:
                return ExpressionSyntax(kind=ExpressionKind.UNSUPPORTED, text=text)
            return ExpressionSyntax(
                kind=ExpressionKind.BINARY,
                text=text,
                operator=self._ast.get_text(operator),
                operands=(self.read_expression(left), self.read_expression(right)),
            )

        if node_type == "parenthesized_expression" and node.named_children:
            return ExpressionSyntax(
                kind=ExpressionKind.PARENTHESIZED,
                text=text,
                operands=(self.read_expression(node.named_children[0]),),
            )

        if node_type == "cast_expression":
            type_node = self._field(node, "type")
            value = self._field(node, "value")
            if type_node is None or value is None:
                return ExpressionSyntax(kind=ExpressionKind.UNSUPPORTED, text=text)
            return ExpressionSyntax(
                kind=ExpressionKind.CAST,
                text=text,
                cast_type=self.read_type(type_node),
                operands=(self.read_expression(value),),
            )

        return ExpressionSyntax(kind=ExpressionKind.UNSUPPORTED, text=text)

    # ============================================================
    # Utility Methods
    # ============================================================

    def _field(self, node: TSNode, name: str) -> TSNode | None:
        return node.child_by_field_name(name)

    def _field_text(self, node: TSNode, name: str) -> str:
        child = self._field(node, name)
        return self._ast.get_text(child) if child is not None else ""

    def _first_of_type(self, node: TSNode, child_type: str) -> TSNode | None:
        for child in node.children:
            if child.type == child_type:
                return child
        return None

    def _modifiers(self, node: TSNode) -> frozenset[str]:
        return frozenset(self._ast.get_text(child) for child in node.children if child.type == "modifier")

    def _node_after_equals(self, node: TSNode) -> TSNode | None:
        seen_equals = False
        for child in node.children:
            if child.type == "=":
                seen_equals = True
            elif seen_equals and child.is_named:
                return child
        return None


def _join(namespace: str, name: str) -> str:
    if not namespace:
        return name
    if not name:
        return namespace
    return f"{namespace}.{name}"
