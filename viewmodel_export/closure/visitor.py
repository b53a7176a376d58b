"""
Dependency Visitor

Extracts, for the wanted declarations of one parsed unit, the type names that
must also be resolved to recreate those declarations in the target language.
"""

from collections.abc import Set

from viewmodel_export.parsing.unit import ParsedUnit
from viewmodel_export.syntax.models import (
    MemberSyntax,
    TypeDeclarationSyntax,
    TypeSyntax,
    TypeSyntaxKind,
    simple_type_name,
)
from viewmodel_export.syntax.walker import SyntaxWalker

# Shapes that only wrap other types; they are unwrapped, never required themselves
CONTAINER_KINDS = {
    TypeSyntaxKind.GENERIC,
    TypeSyntaxKind.ARRAY,
    TypeSyntaxKind.NULLABLE,
    TypeSyntaxKind.TUPLE,
}


def leaf_type_names(type_syntax: TypeSyntax) -> list[str]:
    """
    Collect the non-container names inside a type reference.

    ``List<Dictionary<string, OrderLine>>`` → ``["string", "OrderLine"]``.
    Each step descends into a strictly smaller child node, so any nesting
    depth terminates.

    Args:
        type_syntax: Type reference as written

    Returns:
        Leaf names in source order (verbatim text, duplicates kept)
    """
    if type_syntax.kind not in CONTAINER_KINDS:
        return [type_syntax.text]

    names: list[str] = []
    for argument in type_syntax.arguments:
        names.extend(leaf_type_names(argument))
    return names


class DependencyVisitor(SyntaxWalker):
    """
    Visitor that collects the types required by the wanted declarations of a unit.

    Required types are:
    - the leaf types of every projected member (public instance property,
      field, record parameter) of a wanted class-like declaration;
    - the leaf types of its base list, plus the name of a generic base
      (base class members are flattened in);
    - the name of every wanted declaration defined here, so the defining file
      is retained even when the type has nothing to follow (enums, empty classes).

    The wanted set is read, never modified.
    """

    def __init__(self, wanted: Set[str]):
        """
        Args:
            wanted: Names of the wanted types as written in source (qualified
                names match on their simple name)
        """
        if wanted is None:
            raise ValueError("wanted must not be None")
        self._wanted = {simple_type_name(name) for name in wanted}
        self.required_types: set[str] = set()

    @classmethod
    def collect(cls, wanted: Set[str], unit: ParsedUnit) -> set[str]:
        """
        Run the visitor over one unit.

        Args:
            wanted: Current wanted set
            unit: Parsed unit

        Returns:
            Required type names (empty if the unit defines no wanted declaration)
        """
        visitor = cls(wanted)
        visitor.walk(unit.declarations)
        return visitor.required_types

    def _is_wanted(self, declaration: TypeDeclarationSyntax) -> bool:
        return declaration.name in self._wanted

    def visit_type(self, declaration: TypeDeclarationSyntax) -> None:
        # Only concern ourselves with our desired models
        if not self._is_wanted(declaration):
            return

        self.required_types.add(declaration.name)
        for base in declaration.bases:
            # A generic base class is flattened in, so its own declaration is required too
            if base.kind == TypeSyntaxKind.GENERIC:
                self.required_types.add(base.name)
            self._add_leaves(declaration, base)

        super().visit_type(declaration)

    def visit_enum(self, declaration: TypeDeclarationSyntax) -> None:
        if self._is_wanted(declaration):
            self.required_types.add(declaration.name)

    def visit_property(self, owner: TypeDeclarationSyntax, member: MemberSyntax) -> None:
        self._add_member_types(owner, member)

    def visit_field(self, owner: TypeDeclarationSyntax, member: MemberSyntax) -> None:
        self._add_member_types(owner, member)

    def _add_member_types(self, owner: TypeDeclarationSyntax, member: MemberSyntax) -> None:
        if owner.is_projected(member):
            self._add_leaves(owner, member.type)

    def _add_leaves(self, owner: TypeDeclarationSyntax, type_syntax: TypeSyntax) -> None:
        # Type parameters of the owner are placeholders, not types to resolve
        for name in leaf_type_names(type_syntax):
            if name not in owner.type_parameters:
                self.required_types.add(name)
