"""
Syntax Walker

Polymorphic traversal over declaration models. Subclasses override the
``visit_*`` hooks they care about; the default implementation descends from
declarations into their members and does nothing else.
"""

from collections.abc import Iterable

from .models import MemberKind, MemberSyntax, TypeDeclarationSyntax


class SyntaxWalker:
    """Walks type declarations and their data members."""

    def walk(self, declarations: Iterable[TypeDeclarationSyntax]) -> None:
        for declaration in declarations:
            self.visit_declaration(declaration)

    def visit_declaration(self, declaration: TypeDeclarationSyntax) -> None:
        """Dispatch on declaration kind"""
        if declaration.is_enum:
            self.visit_enum(declaration)
        else:
            self.visit_type(declaration)

    def visit_type(self, declaration: TypeDeclarationSyntax) -> None:
        """Class, struct, record or interface"""
        for member in declaration.members:
            self.visit_member(declaration, member)

    def visit_enum(self, declaration: TypeDeclarationSyntax) -> None:
        pass

    def visit_member(self, owner: TypeDeclarationSyntax, member: MemberSyntax) -> None:
        """Dispatch on member kind"""
        if member.kind == MemberKind.FIELD:
            self.visit_field(owner, member)
        else:
            self.visit_property(owner, member)

    def visit_property(self, owner: TypeDeclarationSyntax, member: MemberSyntax) -> None:
        pass

    def visit_field(self, owner: TypeDeclarationSyntax, member: MemberSyntax) -> None:
        pass
