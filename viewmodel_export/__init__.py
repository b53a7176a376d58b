"""
viewmodel-export

Projects C# model classes, and the closure of types they reference, into
TypeScript declarations.
"""

from viewmodel_export.exceptions import (
    CompilationError,
    ConfigurationError,
    OutputError,
    ParsingError,
    ViewModelExportError,
)
from viewmodel_export.exporter import ExportResult, ModelExporter

__version__ = "0.1.0"

__all__ = [
    "CompilationError",
    "ConfigurationError",
    "ExportResult",
    "ModelExporter",
    "OutputError",
    "ParsingError",
    "ViewModelExportError",
    "__version__",
]
