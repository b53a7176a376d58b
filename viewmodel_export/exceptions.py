"""
ViewModel Export Exception Hierarchy

Standardised exceptions for consistent error handling.

Usage guide:
    1. Recoverable problems (unreadable corpus files, unknown references) → log and continue
    2. Unrecoverable problems (compilation errors) → raise, report everything
    3. External failures (filesystem, parser loading) → wrap in a custom exception

Example:
    try:
        path.write_text(text)
    except OSError as e:
        raise OutputError("Could not write output file", {"path": str(path)}) from e
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from viewmodel_export.resolution.diagnostics import Diagnostic


class ViewModelExportError(Exception):
    """Base exception for all viewmodel-export errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize error.

        Args:
            message: Human-readable error message
            details: Optional additional details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class ConfigurationError(ViewModelExportError):
    """Invalid run configuration (no models requested, missing directories)."""

    pass


class ParsingError(ViewModelExportError):
    """Source parsing infrastructure failures."""

    pass


class CompilationError(ViewModelExportError):
    """
    The retained sources could not be compiled into a type model.

    Carries every diagnostic produced by the compilation, not just the first.
    """

    def __init__(self, diagnostics: "list[Diagnostic]", message: str | None = None):
        errors = [d for d in diagnostics if d.is_error]
        super().__init__(
            message or f"Compilation failed with {len(errors)} error(s)",
            {"errors": len(errors), "diagnostics": len(diagnostics)},
        )
        self.diagnostics = list(diagnostics)

    @property
    def errors(self) -> "list[Diagnostic]":
        """Error-severity diagnostics only"""
        return [d for d in self.diagnostics if d.is_error]


class OutputError(ViewModelExportError):
    """Output file could not be written."""

    pass
