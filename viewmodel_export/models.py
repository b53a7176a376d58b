"""
Minimal shared models.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Span:
    """
    Source code location (immutable).

    Attributes:
        start_line: Starting line number (1-indexed)
        start_col: Starting column (0-indexed)
        end_line: Ending line number (1-indexed)
        end_col: Ending column (0-indexed)
    """

    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def __str__(self) -> str:
        # Column is reported 1-indexed, the way compilers print locations
        return f"({self.start_line},{self.start_col + 1})"
