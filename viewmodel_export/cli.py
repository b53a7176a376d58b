"""
viewmodel-export CLI

Exports C# model classes, and every type they depend on, as TypeScript
declarations.

Examples:
    viewmodel-export -m Order -i src/Models -o web/src/api
    viewmodel-export -m Order -m Customer -i src -o out --log-format json
"""

import typer
from rich.console import Console
from rich.table import Table

from viewmodel_export.config import get_settings
from viewmodel_export.exceptions import CompilationError, ConfigurationError, OutputError
from viewmodel_export.exporter import ModelExporter
from viewmodel_export.infra.logging import setup_logging

app = typer.Typer(name="viewmodel-export", help="Export C# view models to TypeScript", add_completion=False)
console = Console()
err_console = Console(stderr=True)


@app.command()
def export(
    models: list[str] = typer.Option(..., "--model", "-m", help="Model type name (repeatable)"),
    input_dir: str = typer.Option(..., "--input-dir", "-i", help="Root directory of the C# sources"),
    output_dir: str = typer.Option(..., "--output-dir", "-o", help="Directory receiving the output file"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level (DEBUG, INFO, ...)"),
    log_format: str | None = typer.Option(None, "--log-format", help="Log renderer: console/json"),
):
    """
    Export the requested models and their dependencies into one TypeScript file.
    """
    settings = get_settings()
    updates = {}
    if log_level:
        updates["log_level"] = log_level.upper()
    if log_format:
        if log_format not in ("console", "json"):
            err_console.print(f"[red]❌ Invalid log format: {log_format}[/red]")
            raise typer.Exit(2)
        updates["log_format"] = log_format
    if updates:
        settings = settings.model_copy(update=updates)

    setup_logging(level=settings.log_level, format=settings.log_format)

    try:
        exporter = ModelExporter(models, input_dir, output_dir, settings=settings)
        result = exporter.export()
    except ConfigurationError as e:
        err_console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(2) from None
    except CompilationError as e:
        for diagnostic in e.diagnostics:
            console.print(str(diagnostic), markup=False, highlight=False)
        err_console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(1) from None
    except OutputError as e:
        err_console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1) from None

    for diagnostic in result.diagnostics:
        err_console.print(f"[yellow]{diagnostic}[/yellow]", highlight=False)

    table = Table(title=f"Exported {len(result.declarations)} declaration(s)")
    table.add_column("Identifier", style="cyan")
    table.add_column("Kind")
    table.add_column("Source")
    for declaration in result.declarations:
        table.add_row(declaration.identifier, declaration.kind, declaration.source_name)
    console.print(table)
    console.print(f"[green]✅ Wrote {result.path}[/green]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
