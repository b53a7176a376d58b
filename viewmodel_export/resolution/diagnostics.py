"""
Compilation diagnostics
"""

from dataclasses import dataclass
from enum import Enum

from viewmodel_export.models import Span


class Severity(str, Enum):
    """Diagnostic severity"""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """
    One compilation message.

    Rendered the way C# compilers print them:
    ``Models/Order.cs(12,5): error CS0246: The type or namespace name 'Adress' could not be found``
    """

    severity: Severity
    code: str
    message: str
    path: str = ""
    span: Span | None = None

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def __str__(self) -> str:
        location = ""
        if self.path:
            location = f"{self.path}{self.span if self.span else ''}: "
        return f"{location}{self.severity.value} {self.code}: {self.message}"


# Diagnostic codes
SYNTAX_ERROR = "CS1525"
MISSING_TOKEN = "CS1003"
TYPE_NOT_FOUND = "CS0246"
DUPLICATE_TYPE = "CS0101"
CIRCULAR_BASE = "CS0146"
CIRCULAR_CONSTANT = "CS0110"
NOT_CONSTANT = "CS0133"
CONSTANT_OVERFLOW = "CS0031"
