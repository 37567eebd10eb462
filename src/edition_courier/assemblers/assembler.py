"""Base class for edition assemblers."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import date

from schemas.artifact import PageArtifact
from schemas.document import MergedDocument


class Assembler(ABC):
    """Abstract base class for edition assemblers.

    Assemblers combine the per-page artifacts of a run into a single
    document, keeping the order in which the artifacts are given.
    """

    @abstractmethod
    def merge(
        self, artifacts: Sequence[PageArtifact], edition_date: date
    ) -> MergedDocument:
        """Combine page artifacts into one document.

        Args:
            artifacts: Page artifacts in output order
            edition_date: Publication date of the edition

        Returns:
            MergedDocument with the combined payload
        """
        pass
