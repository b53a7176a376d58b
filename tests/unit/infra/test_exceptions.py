"""
Exception hierarchy
"""

import pytest

from viewmodel_export.exceptions import (
    CompilationError,
    ConfigurationError,
    OutputError,
    ParsingError,
    ViewModelExportError,
)
from viewmodel_export.resolution.diagnostics import Diagnostic, Severity


class TestExceptionHierarchy:
    """All errors share one base"""

    @pytest.mark.parametrize("error_class", [ConfigurationError, ParsingError, OutputError])
    def test_subclasses(self, error_class):
        assert issubclass(error_class, ViewModelExportError)

    def test_details_in_str(self):
        error = OutputError("Could not write output file", {"path": "/out/SharedModels.ts"})

        assert str(error) == "Could not write output file (details: {'path': '/out/SharedModels.ts'})"

    def test_plain_message(self):
        assert str(ConfigurationError("no models")) == "no models"


class TestCompilationError:
    """Carries every diagnostic"""

    def test_errors_and_warnings(self):
        diagnostics = [
            Diagnostic(Severity.WARNING, "CS0246", "missing"),
            Diagnostic(Severity.ERROR, "CS0101", "duplicate"),
        ]

        error = CompilationError(diagnostics)

        assert error.diagnostics == diagnostics
        assert [d.code for d in error.errors] == ["CS0101"]
        assert error.message == "Compilation failed with 1 error(s)"
        assert isinstance(error, ViewModelExportError)
