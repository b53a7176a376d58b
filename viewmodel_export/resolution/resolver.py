"""
Type Resolver

Facade over ``Compilation``: compiles the retained units and keeps the
resolved types whose simple names are wanted.
"""

from collections.abc import Iterable

from viewmodel_export.config import Settings, get_settings
from viewmodel_export.infra.logging import get_logger
from viewmodel_export.parsing.unit import ParsedUnit
from viewmodel_export.syntax.models import simple_type_name

from .ambient import AmbientCatalog
from .compilation import Compilation, CompiledModel
from .models import ResolvedType

logger = get_logger(__name__)


class TypeResolver:
    """
    Resolves wanted type names to compiled type descriptions.

    Example:
        resolver = TypeResolver(settings)
        resolved = resolver.resolve(closure.units, closure.wanted)
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.catalog = AmbientCatalog(self.settings.ambient_types)

    def compile(self, units: Iterable[ParsedUnit]) -> CompiledModel:
        """
        Compile units into a semantic model.

        Raises:
            CompilationError: If the units do not compile
        """
        compilation = Compilation(units, self.catalog, strict_references=self.settings.strict_references)
        return compilation.emit()

    def resolve(self, units: Iterable[ParsedUnit], wanted: Iterable[str]) -> list[ResolvedType]:
        """
        Resolve the wanted types defined in the units.

        Args:
            units: Retained units, in retention order
            wanted: Wanted type names (qualified or simple)

        Returns:
            Resolved types in unit order, then declaration order. Wanted names
            with no definition in the units are left out.

        Raises:
            CompilationError: If the units do not compile
        """
        return self.select(self.compile(units), wanted)

    def select(self, model: CompiledModel, wanted: Iterable[str]) -> list[ResolvedType]:
        """Keep the compiled types whose simple names are wanted, in model order"""
        names = {simple_type_name(name) for name in wanted}
        resolved = [t for t in model.get_types() if t.name in names]

        logger.info(
            "types_resolved",
            wanted=len(names),
            resolved=len(resolved),
            unresolved=len(names - {t.name for t in resolved}),
        )
        return resolved
