"""
TypeScript Projection

Renders resolved types as TypeScript ``export interface`` / ``export enum``
declarations.
"""

from collections.abc import Iterable

from viewmodel_export.config import Settings, get_settings
from viewmodel_export.resolution.models import ResolvedType, TypeRef, TypeRefKind

from .base import DeclarationWriter, ProjectedDeclaration

SCALAR_TYPES = {
    TypeRefKind.BOOLEAN: "boolean",
    TypeRefKind.CHAR: "string",
    TypeRefKind.NUMERIC: "number",
    TypeRefKind.DECIMAL: "number",
    TypeRefKind.STRING: "string",
    TypeRefKind.GUID: "string",
}


def to_camel_case(name: str) -> str:
    """
    Lower-case the first character of a member name.

    Names shorter than two characters are lower-cased entirely; the rest of
    the name is left untouched (``URL`` → ``uRL``).
    """
    if not name:
        return name
    if len(name) < 2:
        return name.lower()
    return name[0].lower() + name[1:]


class TypeScriptWriter(DeclarationWriter):
    """
    Projects resolved types to TypeScript.

    Example:
        writer = TypeScriptWriter(resolved_types)
        block = writer.process(order).text
        # export interface IOrder {
        #     id: string;
        # }
    """

    def __init__(self, resolved_types: Iterable[ResolvedType] = (), settings: Settings | None = None):
        """
        Args:
            resolved_types: Types being emitted in the same file; references to
                them use their projected identifiers
            settings: Naming and override settings
        """
        self.settings = settings or get_settings()
        self._known = {t.full_name: t for t in resolved_types}

    @property
    def extension(self) -> str:
        return "ts"

    def name(self, resolved: ResolvedType) -> str:
        if resolved.is_enum:
            return resolved.name
        return f"{self.settings.interface_prefix}{resolved.name}"

    def process(self, resolved: ResolvedType) -> ProjectedDeclaration:
        if resolved is None:
            raise ValueError("resolved type is required")

        text = self._build_enum(resolved) if resolved.is_enum else self._build_interface(resolved)
        return ProjectedDeclaration(
            identifier=self.name(resolved),
            source_name=resolved.full_name,
            text=text,
            kind=resolved.kind.value,
        )

    # ============================================================
    # Blocks
    # ============================================================

    def _build_interface(self, resolved: ResolvedType) -> str:
        indent = self.settings.indent
        header = self.name(resolved)
        if resolved.type_parameters:
            header += f"<{', '.join(resolved.type_parameters)}>"

        lines = [f"export interface {header} {{"]
        for member in resolved.members:
            lines.append(f"{indent}{to_camel_case(member.name)}: {self.map_type(member.type)};")
        lines.append("}")
        return "\n".join(lines) + "\n"

    def _build_enum(self, resolved: ResolvedType) -> str:
        indent = self.settings.indent
        lines = [f"export enum {self.name(resolved)} {{"]
        for value in resolved.enum_values:
            lines.append(f"{indent}{value.name} = {value.value},")
        lines.append("}")
        return "\n".join(lines) + "\n"

    # ============================================================
    # Types
    # ============================================================

    def map_type(self, ref: TypeRef) -> str:
        """Map a resolved reference to a TypeScript type expression"""
        kind = ref.kind

        if kind == TypeRefKind.ARRAY:
            return f"{self.map_type(ref.arguments[0])}[]"
        if kind == TypeRefKind.NULLABLE:
            return self.map_type(ref.arguments[0])
        if kind == TypeRefKind.TYPE_PARAMETER:
            return ref.name

        override = self.settings.type_overrides.get(ref.simple_name)
        if override is not None:
            return override

        if kind in SCALAR_TYPES:
            return SCALAR_TYPES[kind]

        if kind == TypeRefKind.SEQUENCE:
            if not ref.arguments:
                return "any[]"
            return f"{self.map_type(ref.arguments[0])}[]"

        if kind == TypeRefKind.DICTIONARY:
            key, value = ref.arguments
            return f"Record<{self.map_type(key)}, {self.map_type(value)}>"

        name = ref.simple_name
        if kind == TypeRefKind.DECLARED and ref.name in self._known:
            name = self.name(self._known[ref.name])
        return name + self._arguments(ref)

    def _arguments(self, ref: TypeRef) -> str:
        if not ref.arguments:
            return ""
        return f"<{', '.join(self.map_type(a) for a in ref.arguments)}>"
