"""
Model Exporter

Runs one export: corpus discovery, closure, compilation, projection and
output, in that order. Nothing is written unless every step succeeds.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from viewmodel_export.closure.builder import ClosureBuilder, ClosureResult
from viewmodel_export.config import Settings, get_settings
from viewmodel_export.corpus import SourceCorpus
from viewmodel_export.exceptions import ConfigurationError
from viewmodel_export.infra.logging import add_context, clear_context, get_logger
from viewmodel_export.output.assembler import OutputAssembler
from viewmodel_export.projection.base import DeclarationWriter, ProjectedDeclaration
from viewmodel_export.projection.typescript import TypeScriptWriter
from viewmodel_export.resolution.diagnostics import Diagnostic
from viewmodel_export.resolution.models import ResolvedType
from viewmodel_export.resolution.resolver import TypeResolver

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExportResult:
    """
    Outcome of an export run.

    Attributes:
        text: Assembled output file content
        declarations: Projected blocks in output order
        closure: Closure fixed point the run resolved against
        diagnostics: Warnings reported by the compilation
        path: Written file, or None for a render-only run
    """

    text: str
    declarations: tuple[ProjectedDeclaration, ...]
    closure: ClosureResult
    diagnostics: tuple[Diagnostic, ...] = ()
    path: Path | None = None


class ModelExporter:
    """
    Exports a set of C# models and their dependencies as one TypeScript file.

    Example:
        exporter = ModelExporter({"Order"}, "src/Models", "web/src/api")
        result = exporter.export()
        result.path   # web/src/api/SharedModels.ts
    """

    def __init__(
        self,
        models: Iterable[str],
        input_dir: str | Path,
        output_dir: str | Path,
        settings: Settings | None = None,
    ):
        """
        Args:
            models: Requested model type names (at least one)
            input_dir: Root of the C# source tree
            output_dir: Existing directory receiving the output file
            settings: Run settings (defaults to the process settings)

        Raises:
            ConfigurationError: If no models are given or a directory is invalid
        """
        self.models = {name.strip() for name in models if name and name.strip()}
        if not self.models:
            raise ConfigurationError("At least one model name is required")

        self.input_dir = Path(input_dir)
        self.output_dir = Path(output_dir)
        if not self.input_dir.is_dir():
            raise ConfigurationError("Input directory does not exist", {"input_dir": str(self.input_dir)})
        if not self.output_dir.is_dir():
            raise ConfigurationError("Output directory does not exist", {"output_dir": str(self.output_dir)})

        self.settings = settings or get_settings()
        self.resolver = TypeResolver(self.settings)
        self.assembler = OutputAssembler()

    def render(self) -> ExportResult:
        """
        Run every step except writing.

        Raises:
            CompilationError: If the retained sources do not compile
        """
        add_context(models=sorted(self.models))
        try:
            corpus = SourceCorpus.discover(self.input_dir)
            logger.info("corpus_discovered", input_dir=str(self.input_dir), files=len(corpus))

            closure = ClosureBuilder(corpus).build(self.models)
            model = self.resolver.compile(closure.units)
            resolved = self.resolver.select(model, closure.wanted)

            writer = self.create_writer(resolved)
            declarations = tuple(writer.process_all(resolved))
            text = self.assembler.assemble(declarations)
            return ExportResult(
                text=text,
                declarations=declarations,
                closure=closure,
                diagnostics=model.diagnostics,
            )
        finally:
            clear_context("models")

    def export(self) -> ExportResult:
        """
        Render and write the output file.

        Returns:
            ExportResult with the written path

        Raises:
            CompilationError: If the retained sources do not compile (nothing is written)
            OutputError: If the output file cannot be written
        """
        result = self.render()
        writer_extension = self.create_writer(()).extension
        path = self.assembler.write(result.text, self.output_dir, self.settings.output_basename, writer_extension)
        return ExportResult(
            text=result.text,
            declarations=result.declarations,
            closure=result.closure,
            diagnostics=result.diagnostics,
            path=path,
        )

    def create_writer(self, resolved: Iterable[ResolvedType]) -> DeclarationWriter:
        """Projector for this run; references to resolved types use their projected names"""
        return TypeScriptWriter(resolved, self.settings)
