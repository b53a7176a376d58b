"""
Source File representation
"""

from dataclasses import dataclass
from pathlib import Path

from .parser_registry import CSHARP


@dataclass
class SourceFile:
    """
    Represents a corpus file offered to the parser.

    Attributes:
        file_path: Absolute path of the file
        content: File content as string
        language: Language the content is parsed as
        encoding: Encoding used to hand the content to the parser
    """

    file_path: str
    content: str
    language: str = CSHARP
    encoding: str = "utf-8"

    @classmethod
    def from_file(cls, file_path: str | Path, language: str = CSHARP) -> "SourceFile":
        """
        Load a file from disk.

        Any file is accepted: a UTF-8 BOM is stripped and undecodable bytes are
        replaced, so binary or non-source files simply parse into error nodes.

        Args:
            file_path: Path to file
            language: Language override

        Returns:
            SourceFile instance

        Raises:
            OSError: If the file cannot be read
        """
        path = Path(file_path)
        content = path.read_bytes().decode("utf-8-sig", errors="replace")

        return cls(
            file_path=str(path),
            content=content,
            language=language,
        )

    @classmethod
    def from_content(cls, file_path: str, content: str, language: str = CSHARP) -> "SourceFile":
        """
        Create source file from content string.

        Args:
            file_path: File path used for diagnostics
            content: Source code content
            language: Programming language

        Returns:
            SourceFile instance
        """
        return cls(file_path=file_path, content=content, language=language)
