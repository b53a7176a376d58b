"""
Closure Builder

Grows the wanted-type set and the set of retained parsed units until a fixed
point: no pass over the corpus discovers a new type name or retains a new unit.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from viewmodel_export.corpus import SourceCorpus
from viewmodel_export.exceptions import ConfigurationError
from viewmodel_export.infra.logging import get_logger
from viewmodel_export.parsing.unit import ParsedUnit

from .visitor import DependencyVisitor

logger = get_logger(__name__)


@dataclass
class ClosureState:
    """
    Mutable state of one closure run.

    Invariant: every path in ``included`` has exactly one unit in ``units``;
    retained units are never dropped or re-parsed.

    Attributes:
        wanted: Wanted type names (grows monotonically)
        units: Retained units in retention order
        included: Paths of retained units
        version: Bumped every time ``wanted`` grows
    """

    wanted: set[str]
    units: list[ParsedUnit] = field(default_factory=list)
    included: set[str] = field(default_factory=set)
    version: int = 0
    _visited_at: dict[str, int] = field(default_factory=dict)
    _cache: dict[str, ParsedUnit | None] = field(default_factory=dict)

    def merge(self, names: Iterable[str]) -> set[str]:
        """
        Add names to the wanted set.

        Returns:
            The names that were not wanted before
        """
        new = set(names) - self.wanted
        if new:
            self.wanted |= new
            self.version += 1
        return new

    def retain(self, unit: ParsedUnit) -> None:
        if unit.path in self.included:
            return
        self.units.append(unit)
        self.included.add(unit.path)

    def is_current(self, path: str) -> bool:
        """Whether path was already visited against the current wanted set"""
        return self._visited_at.get(path) == self.version

    def mark_visited(self, path: str, version: int) -> None:
        self._visited_at[path] = version


@dataclass(frozen=True)
class ClosureResult:
    """Fixed point of a closure run"""

    wanted: frozenset[str]
    units: tuple[ParsedUnit, ...]
    passes: int

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(unit.path for unit in self.units)


class ClosureBuilder:
    """
    Fixed-point closure over a source corpus.

    Each pass visits, in corpus order, every file whose last visit happened
    against a smaller wanted set. Files are parsed at most once; a file whose
    visit reports required types is retained (whether it defines a wanted type
    or only references one) and its names are merged into the live wanted set,
    so later files in the same pass already see them. Retained units are also
    re-visited after the wanted set grows, because a type declared in an
    already retained file may become wanted later.

    Example:
        corpus = SourceCorpus.discover("Models/")
        result = ClosureBuilder(corpus).build({"Order"})
        result.wanted   # {"Order", "Guid", "OrderLine", ...}
    """

    def __init__(
        self,
        corpus: SourceCorpus,
        parse: Callable[[str], ParsedUnit] = ParsedUnit.parse,
    ):
        """
        Args:
            corpus: Files to consider, in enumeration order
            parse: Parser for one path (replaceable for synthetic corpora)
        """
        self._corpus = corpus
        self._parse = parse

    def build(self, models: Iterable[str]) -> ClosureResult:
        """
        Compute the closure of the requested models.

        Args:
            models: Requested model type names

        Returns:
            ClosureResult with the final wanted set and retained units

        Raises:
            ConfigurationError: If no model names are requested
        """
        seed = {name.strip() for name in models if name and name.strip()}
        if not seed:
            raise ConfigurationError("At least one model name is required")

        state = ClosureState(wanted=set(seed))
        passes = 0

        while True:
            passes += 1
            retained_before = len(state.units)
            version_before = state.version

            for path in self._corpus:
                self._visit(state, path)

            logger.debug(
                "closure_pass_complete",
                passes=passes,
                retained=len(state.units),
                wanted=len(state.wanted),
            )

            # Fixed point: nothing retained and nothing discovered
            if len(state.units) == retained_before and state.version == version_before:
                break

        logger.info(
            "closure_complete",
            passes=passes,
            retained=len(state.units),
            wanted=len(state.wanted),
            scanned=len(self._corpus),
        )

        return ClosureResult(wanted=frozenset(state.wanted), units=tuple(state.units), passes=passes)

    def _visit(self, state: ClosureState, path: str) -> None:
        if state.is_current(path):
            return

        unit = self._load(state, path)
        visited_version = state.version
        state.mark_visited(path, visited_version)
        if unit is None:
            return

        required = DependencyVisitor.collect(state.wanted, unit)
        if not required:
            return

        new = state.merge(required)
        if path not in state.included:
            state.retain(unit)
            logger.debug("unit_retained", path=path, new_types=sorted(new))
        elif new:
            logger.debug("unit_revisited", path=path, new_types=sorted(new))

    def _load(self, state: ClosureState, path: str) -> ParsedUnit | None:
        """Parse a path once; unreadable files are skipped for the whole run"""
        if path in state._cache:
            return state._cache[path]

        try:
            unit = self._parse(path)
        except OSError as e:
            logger.warning("source_unreadable", path=path, error=str(e))
            unit = None

        state._cache[path] = unit
        return unit
