"""
Source Corpus

Recursive, deterministic enumeration of the files under an input directory.
No extension filter is applied: every file is offered to the parser.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from viewmodel_export.exceptions import ConfigurationError


@dataclass(frozen=True)
class SourceCorpus:
    """
    Ordered collection of absolute file paths.

    Files of a directory come first (sorted by name), then each
    sub-directory (sorted by name), recursively.
    """

    paths: tuple[str, ...]

    @classmethod
    def discover(cls, root: str | Path) -> "SourceCorpus":
        """
        Enumerate every file below root.

        Args:
            root: Input directory

        Returns:
            SourceCorpus

        Raises:
            ConfigurationError: If root is not an existing directory
        """
        root = Path(root).resolve()
        if not root.is_dir():
            raise ConfigurationError(f"Input directory does not exist: {root}", {"input_dir": str(root)})

        return cls(paths=tuple(str(p) for p in _search(root)))

    @classmethod
    def of(cls, paths: Sequence[str | Path]) -> "SourceCorpus":
        """Build a corpus from an explicit path list (order preserved)"""
        return cls(paths=tuple(str(p) for p in paths))

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths)

    def __len__(self) -> int:
        return len(self.paths)


def _search(root: Path) -> Iterator[Path]:
    """Recursively gather file paths from the given root."""
    entries = sorted(root.iterdir(), key=lambda p: p.name)

    for entry in entries:
        if entry.is_file():
            yield entry

    for entry in entries:
        if entry.is_dir() and not entry.is_symlink():
            yield from _search(entry)
