"""
Output Assembler

Joins projected declaration blocks into one file and writes it.
"""

from collections.abc import Iterable
from pathlib import Path

from viewmodel_export.exceptions import OutputError
from viewmodel_export.infra.logging import get_logger
from viewmodel_export.projection.base import ProjectedDeclaration

logger = get_logger(__name__)


class OutputAssembler:
    """
    Assembles and writes the single output file.

    Example:
        assembler = OutputAssembler()
        text = assembler.assemble(declarations)
        path = assembler.write(text, "out", "SharedModels", "ts")
    """

    separator = "\n"

    def assemble(self, declarations: Iterable[ProjectedDeclaration]) -> str:
        """
        Join blocks in order, separated by one blank line.

        Returns:
            File content; empty when there are no declarations
        """
        return self.separator.join(d.text for d in declarations)

    def path_for(self, output_dir: str | Path, basename: str, extension: str) -> Path:
        return Path(output_dir) / f"{basename}.{extension}"

    def write(self, text: str, output_dir: str | Path, basename: str, extension: str) -> Path:
        """
        Write the assembled text, replacing any previous file.

        Returns:
            Path of the written file

        Raises:
            OutputError: If the file cannot be written
        """
        path = self.path_for(output_dir, basename, extension)
        try:
            path.write_text(text, encoding="utf-8", newline="\n")
        except OSError as e:
            raise OutputError("Could not write output file", {"path": str(path), "error": str(e)}) from e

        logger.info("export_written", path=str(path), bytes=len(text.encode("utf-8")))
        return path
