"""Page artifact and run result domain objects."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .edition import Edition


class ArtifactStatus(str, Enum):
    """Acquisition status of a single page export."""

    OK = "ok"
    MISMATCH = "mismatch"
    FAILED = "failed"


@dataclass(frozen=True)
class PageArtifact:
    """The exported bytes for one page of an edition.

    Attributes:
        page_index: 1-based page number within the edition
        status: Acquisition status
        payload: Exported PDF bytes (only for status ok)
        path: Where the payload was persisted on disk
        error: Reason the page was not acquired, if any
    """

    page_index: int
    status: ArtifactStatus
    payload: bytes | None = None
    path: Path | None = None
    error: str | None = None

    @classmethod
    def ok(cls, page_index: int, payload: bytes, path: Path | None = None) -> "PageArtifact":
        return cls(page_index=page_index, status=ArtifactStatus.OK, payload=payload, path=path)

    @classmethod
    def mismatch(cls, page_index: int, error: str) -> "PageArtifact":
        return cls(page_index=page_index, status=ArtifactStatus.MISMATCH, error=error)

    @property
    def is_ok(self) -> bool:
        return self.status is ArtifactStatus.OK


@dataclass
class RunResult:
    """Ordered page artifacts acquired for one edition.

    Artifacts are appended in ascending page order as the sequencer walks
    the edition; nothing is reordered or filled in afterwards.

    Attributes:
        edition: The edition being acquired
        requested: Number of pages the viewer reported
        artifacts: One artifact per visited page, in page order
    """

    edition: Edition
    requested: int
    artifacts: list[PageArtifact] = field(default_factory=list)

    def append(self, artifact: PageArtifact) -> None:
        """Record the artifact for the next page.

        Raises:
            ValueError: If the page index does not follow the previous one,
                or more pages would be acquired than were requested
        """
        if self.artifacts and artifact.page_index <= self.artifacts[-1].page_index:
            raise ValueError(
                f"Page {artifact.page_index} recorded after page "
                f"{self.artifacts[-1].page_index}"
            )
        if artifact.page_index < 1 or artifact.page_index > self.requested:
            raise ValueError(
                f"Page {artifact.page_index} is outside 1..{self.requested}"
            )
        self.artifacts.append(artifact)

    @property
    def acquired(self) -> list[PageArtifact]:
        return [a for a in self.artifacts if a.is_ok]

    @property
    def mismatched(self) -> list[int]:
        return [a.page_index for a in self.artifacts if a.status is ArtifactStatus.MISMATCH]

    @property
    def is_complete(self) -> bool:
        return len(self.acquired) == self.requested
