"""
Declaration Writer Base

Interface implemented by every target-language projector.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from viewmodel_export.resolution.models import ResolvedType


@dataclass(frozen=True, slots=True)
class ProjectedDeclaration:
    """
    One declaration rendered in the target language.

    Attributes:
        identifier: Target-language name (``IOrder``, ``OrderStatus``)
        source_name: Full name of the source type
        text: Rendered block, newline terminated
        kind: Source declaration kind (``class``, ``enum``, ...)
    """

    identifier: str
    source_name: str
    text: str
    kind: str


class DeclarationWriter(ABC):
    """
    Abstract base class for projectors.

    A writer turns one resolved type into one declaration block; assembling
    blocks into a file is the output layer's job.
    """

    @abstractmethod
    def process(self, resolved: ResolvedType) -> ProjectedDeclaration:
        """
        Render a resolved type.

        Args:
            resolved: Compiled type description

        Returns:
            ProjectedDeclaration
        """
        raise NotImplementedError

    @abstractmethod
    def name(self, resolved: ResolvedType) -> str:
        """Target-language identifier for a resolved type"""
        raise NotImplementedError

    @property
    @abstractmethod
    def extension(self) -> str:
        """Output file extension, without the dot"""
        raise NotImplementedError

    def process_all(self, types: list[ResolvedType]) -> list[ProjectedDeclaration]:
        """Render types in order"""
        return [self.process(t) for t in types]
