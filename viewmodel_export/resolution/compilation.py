"""
Compilation - Semantic Model

Binds the declarations of the retained units into a semantic model:
symbols, resolved member types, flattened inheritance and enum values.
Projection only ever reads the ``CompiledModel`` produced here.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from viewmodel_export.exceptions import CompilationError
from viewmodel_export.infra.logging import get_logger
from viewmodel_export.models import Span
from viewmodel_export.parsing.unit import ParsedUnit
from viewmodel_export.syntax.models import (
    DeclarationKind,
    TypeDeclarationSyntax,
    TypeSyntax,
    TypeSyntaxKind,
)

from .ambient import AmbientCatalog
from .constants import EnumConstantEvaluator
from .diagnostics import (
    CIRCULAR_BASE,
    DUPLICATE_TYPE,
    MISSING_TOKEN,
    SYNTAX_ERROR,
    TYPE_NOT_FOUND,
    Diagnostic,
    Severity,
)
from .models import EnumValue, ResolvedMember, ResolvedType, TypeRef, TypeRefKind

logger = get_logger(__name__)

BASE_CLASS_KINDS = {DeclarationKind.CLASS, DeclarationKind.RECORD, DeclarationKind.STRUCT}


@dataclass
class _Symbol:
    """A declared type; partial declarations share one symbol"""

    full_name: str
    name: str
    namespace: str
    kind: DeclarationKind
    declarations: list[TypeDeclarationSyntax] = field(default_factory=list)
    members: list[ResolvedMember] = field(default_factory=list)
    base: TypeRef | None = None

    @property
    def first(self) -> TypeDeclarationSyntax:
        return self.declarations[0]

    @property
    def type_parameters(self) -> tuple[str, ...]:
        return self.first.type_parameters


class CompiledModel:
    """
    Read-only result of a successful compilation.

    Types are kept in unit order, then declaration order within a unit.
    """

    def __init__(self, types: Iterable[ResolvedType], diagnostics: Iterable[Diagnostic] = ()):
        self._types = tuple(types)
        self._by_full_name = {t.full_name: t for t in self._types}
        self.diagnostics = tuple(diagnostics)

    def get_types(self) -> Iterator[ResolvedType]:
        """Iterate every resolved type"""
        return iter(self._types)

    def get_type(self, full_name: str) -> ResolvedType | None:
        return self._by_full_name.get(full_name)

    def __len__(self) -> int:
        return len(self._types)


class Compilation:
    """
    Compiles parsed units against the ambient platform catalogue.

    Example:
        compilation = Compilation(closure.units, AmbientCatalog())
        model = compilation.emit()          # raises CompilationError on errors
        for resolved in model.get_types():
            ...
    """

    def __init__(
        self,
        units: Iterable[ParsedUnit],
        catalog: AmbientCatalog | None = None,
        strict_references: bool = False,
    ):
        """
        Args:
            units: Retained units, in retention order
            catalog: Platform types; defaults to the built-in catalogue
            strict_references: Report unknown type names as errors instead of warnings
        """
        self.units = tuple(units)
        self.catalog = catalog or AmbientCatalog()
        self.strict_references = strict_references
        self.diagnostics: list[Diagnostic] = []
        self._symbols: dict[str, _Symbol] = {}
        self._by_name: dict[str, list[_Symbol]] = {}

    def emit(self) -> CompiledModel:
        """
        Run every compilation step.

        Returns:
            CompiledModel

        Raises:
            CompilationError: If any error diagnostic was produced (carries all diagnostics)
        """
        self.diagnostics = []
        self._symbols = {}
        self._by_name = {}

        self._check_syntax()
        self._declare()
        self._bind_members()
        self._bind_bases()
        enum_values = self._evaluate_enums()

        errors = [d for d in self.diagnostics if d.is_error]
        if errors:
            logger.error(
                "compilation_failed",
                errors=len(errors),
                warnings=len(self.diagnostics) - len(errors),
            )
            raise CompilationError(self.diagnostics)

        for diagnostic in self.diagnostics:
            logger.warning("compilation_warning", code=diagnostic.code, diagnostic=str(diagnostic))

        types = [self._resolved(symbol, enum_values) for symbol in self._symbols.values()]
        logger.debug("compilation_complete", types=len(types), units=len(self.units))
        return CompiledModel(types, self.diagnostics)

    # ============================================================
    # Steps
    # ============================================================

    def _check_syntax(self) -> None:
        for unit in self.units:
            for issue in unit.syntax_issues:
                if issue.missing:
                    self._error(MISSING_TOKEN, f"'{issue.text}' expected", unit.path, issue.span)
                else:
                    self._error(SYNTAX_ERROR, f"Invalid expression term '{issue.text}'", unit.path, issue.span)

    def _declare(self) -> None:
        for unit in self.units:
            for declaration in unit.declarations:
                full_name = declaration.full_name
                existing = self._symbols.get(full_name)

                if existing is None:
                    symbol = _Symbol(
                        full_name=full_name,
                        name=declaration.name,
                        namespace=declaration.namespace,
                        kind=declaration.kind,
                        declarations=[declaration],
                    )
                    self._symbols[full_name] = symbol
                    self._by_name.setdefault(declaration.name, []).append(symbol)
                    continue

                if declaration.is_partial and existing.first.is_partial and existing.kind == declaration.kind:
                    existing.declarations.append(declaration)
                    continue

                container = ".".join(p for p in (declaration.namespace, *declaration.containing_types) if p)
                self._error(
                    DUPLICATE_TYPE,
                    f"The namespace '{container or '<global namespace>'}' already contains a definition for '{declaration.name}'",
                    declaration.file_path,
                    declaration.span,
                )

    def _bind_members(self) -> None:
        for symbol in self._symbols.values():
            if symbol.kind == DeclarationKind.ENUM:
                continue
            for declaration in symbol.declarations:
                for member in declaration.projected_members:
                    symbol.members.append(
                        ResolvedMember(
                            name=member.name,
                            type=self.bind(member.type, declaration, member.span),
                            kind=member.kind,
                            declared_in=symbol.full_name,
                        )
                    )

    def _bind_bases(self) -> None:
        for symbol in self._symbols.values():
            if symbol.kind == DeclarationKind.ENUM:
                continue
            for declaration in symbol.declarations:
                for base in declaration.bases:
                    ref = self.bind(base, declaration, declaration.span)
                    if symbol.kind == DeclarationKind.INTERFACE or symbol.base is not None:
                        continue
                    if ref.kind != TypeRefKind.DECLARED:
                        continue
                    target = self._symbols.get(ref.name)
                    if target is not None and target.kind in BASE_CLASS_KINDS:
                        symbol.base = ref

        for symbol in self._symbols.values():
            chain = self._base_chain(symbol)
            if chain is None:
                cycle = self._cycle_names(symbol)
                self._error(
                    CIRCULAR_BASE,
                    f"Circular base type dependency involving '{cycle[0]}' and '{cycle[-1]}'",
                    symbol.first.file_path,
                    symbol.first.span,
                )

    def _evaluate_enums(self) -> dict[str, tuple[EnumValue, ...]]:
        evaluators: dict[str, EnumConstantEvaluator] = {}

        def evaluator_for(symbol: _Symbol) -> EnumConstantEvaluator:
            evaluator = evaluators.get(symbol.full_name)
            if evaluator is None:
                namespace = symbol.namespace

                def resolve_member(target: str, member: str) -> int | None:
                    qualifier, _, name = target.rpartition(".")
                    other = self._lookup(name.strip(), 0, qualifier.strip(), namespace)
                    if other is None or other.kind != DeclarationKind.ENUM:
                        return None
                    return evaluator_for(other).value_of(member)

                evaluator = EnumConstantEvaluator(symbol.first, self._underlying(symbol), resolve_member)
                evaluators[symbol.full_name] = evaluator
            return evaluator

        values: dict[str, tuple[EnumValue, ...]] = {}
        for symbol in self._symbols.values():
            if symbol.kind != DeclarationKind.ENUM:
                continue
            evaluator = evaluator_for(symbol)
            evaluated = evaluator.evaluate()
            self.diagnostics.extend(evaluator.diagnostics)
            if evaluated is not None:
                values[symbol.full_name] = evaluated
        return values

    # ============================================================
    # Type binding
    # ============================================================

    def bind(self, type_syntax: TypeSyntax, context: TypeDeclarationSyntax, span: Span | None = None) -> TypeRef:
        """
        Bind a written type to a resolved reference.

        Lookup order: type parameters, keywords, declared types (same
        namespace first), ambient catalogue. Unknown names are reported
        and kept as external references.
        """
        kind = type_syntax.kind

        if kind == TypeSyntaxKind.PREDEFINED:
            clr_name = self.catalog.keyword(type_syntax.name or type_syntax.text)
            scalar = self.catalog.scalar_kind(clr_name.rsplit(".", 1)[-1]) if clr_name else None
            if scalar is None:
                return TypeRef(TypeRefKind.EXTERNAL, type_syntax.text)
            return TypeRef(scalar, clr_name)

        if kind == TypeSyntaxKind.ARRAY:
            return TypeRef(
                TypeRefKind.ARRAY,
                "",
                (self.bind(type_syntax.arguments[0], context, span),),
                rank=type_syntax.rank,
            )

        if kind == TypeSyntaxKind.NULLABLE:
            return TypeRef(TypeRefKind.NULLABLE, "", (self.bind(type_syntax.arguments[0], context, span),))

        if kind == TypeSyntaxKind.TUPLE:
            # (int, string) is System.ValueTuple<int, string>
            elements = tuple(self.bind(a, context, span) for a in type_syntax.arguments)
            return TypeRef(TypeRefKind.EXTERNAL, "ValueTuple", elements)

        if kind == TypeSyntaxKind.OTHER:
            return TypeRef(TypeRefKind.EXTERNAL, type_syntax.text)

        return self._bind_named(type_syntax, context, span)

    def _bind_named(self, type_syntax: TypeSyntax, context: TypeDeclarationSyntax, span: Span | None) -> TypeRef:
        name = type_syntax.name
        arity = len(type_syntax.arguments)
        arguments = tuple(self.bind(a, context, span) for a in type_syntax.arguments)

        if arity == 0 and not type_syntax.qualifier and name in context.type_parameters:
            return TypeRef(TypeRefKind.TYPE_PARAMETER, name)

        symbol = self._lookup(name, arity, type_syntax.qualifier, context.namespace)
        if symbol is not None:
            return TypeRef(TypeRefKind.DECLARED, symbol.full_name, arguments)

        catalog = self.catalog
        if arity == 0:
            scalar = catalog.scalar_kind(name)
            if scalar is not None:
                return TypeRef(scalar, f"System.{name}")
        if catalog.is_nullable(name, arity):
            return TypeRef(TypeRefKind.NULLABLE, "", arguments)
        if catalog.is_sequence(name, arity):
            return TypeRef(TypeRefKind.SEQUENCE, name, arguments)
        if catalog.is_dictionary(name, arity):
            return TypeRef(TypeRefKind.DICTIONARY, name, arguments)
        if catalog.is_known(name):
            return TypeRef(TypeRefKind.EXTERNAL, name, arguments)

        self._report(
            Severity.ERROR if self.strict_references else Severity.WARNING,
            TYPE_NOT_FOUND,
            f"The type or namespace name '{name}' could not be found "
            "(are you missing a using directive or an assembly reference?)",
            context.file_path,
            span,
        )
        return TypeRef(TypeRefKind.EXTERNAL, name, arguments)

    def _lookup(self, name: str, arity: int, qualifier: str, namespace: str) -> _Symbol | None:
        candidates = [s for s in self._by_name.get(name, ()) if len(s.type_parameters) == arity]
        if not candidates:
            return None
        if qualifier:
            qualified = [s for s in candidates if s.full_name.endswith(f"{qualifier}.{name}")]
            return qualified[0] if qualified else None
        for symbol in candidates:
            if symbol.namespace == namespace:
                return symbol
        return candidates[0]

    # ============================================================
    # Inheritance
    # ============================================================

    def _base_chain(self, symbol: _Symbol) -> list[tuple[_Symbol, TypeRef]] | None:
        """Base classes from nearest to farthest, or None if the chain is circular"""
        chain: list[tuple[_Symbol, TypeRef]] = []
        seen = {symbol.full_name}
        current = symbol
        while current.base is not None:
            base = self._symbols[current.base.name]
            if base.full_name in seen:
                return None
            seen.add(base.full_name)
            chain.append((base, current.base))
            current = base
        return chain

    def _cycle_names(self, symbol: _Symbol) -> list[str]:
        names = [symbol.name]
        current = symbol
        while current.base is not None:
            current = self._symbols[current.base.name]
            if current.full_name == symbol.full_name or current.name in names:
                break
            names.append(current.name)
        return names

    def _inherited_members(self, symbol: _Symbol) -> list[ResolvedMember]:
        chain = self._base_chain(symbol) or []
        members: list[ResolvedMember] = []
        substitution: dict[str, TypeRef] = {}
        for base, ref in chain:
            # Map the base's type parameters to the arguments written in the derived base list
            arguments = tuple(_substitute(a, substitution) for a in ref.arguments)
            substitution = dict(zip(base.type_parameters, arguments, strict=False))
            for member in base.members:
                members.append(
                    ResolvedMember(
                        name=member.name,
                        type=_substitute(member.type, substitution),
                        kind=member.kind,
                        declared_in=member.declared_in,
                    )
                )
        return members

    # ============================================================
    # Results
    # ============================================================

    def _resolved(self, symbol: _Symbol, enum_values: dict[str, tuple[EnumValue, ...]]) -> ResolvedType:
        if symbol.kind == DeclarationKind.ENUM:
            return ResolvedType(
                name=symbol.name,
                full_name=symbol.full_name,
                kind=symbol.kind,
                enum_values=enum_values.get(symbol.full_name, ()),
                underlying_type=self._underlying(symbol),
            )
        return ResolvedType(
            name=symbol.name,
            full_name=symbol.full_name,
            kind=symbol.kind,
            type_parameters=symbol.type_parameters,
            members=(*symbol.members, *self._inherited_members(symbol)),
            base_type=symbol.base.name if symbol.base else None,
        )

    def _underlying(self, symbol: _Symbol) -> str:
        bases = symbol.first.bases
        if bases:
            return self.catalog.enum_underlying(bases[0].text) or "int"
        return "int"

    def _error(self, code: str, message: str, path: str, span: Span | None) -> None:
        self._report(Severity.ERROR, code, message, path, span)

    def _report(self, severity: Severity, code: str, message: str, path: str, span: Span | None) -> None:
        self.diagnostics.append(Diagnostic(severity=severity, code=code, message=message, path=path, span=span))


def _substitute(ref: TypeRef, substitution: dict[str, TypeRef]) -> TypeRef:
    """Replace type parameters in a reference"""
    if not substitution:
        return ref
    if ref.kind == TypeRefKind.TYPE_PARAMETER:
        return substitution.get(ref.name, ref)
    if not ref.arguments:
        return ref
    return TypeRef(ref.kind, ref.name, tuple(_substitute(a, substitution) for a in ref.arguments), ref.rank)
