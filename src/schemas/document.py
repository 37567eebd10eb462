"""Merged document and distribution outcome domain objects."""

from dataclasses import dataclass, replace
from datetime import date
from pathlib import Path
from typing import Literal


@dataclass(frozen=True)
class MergedDocument:
    """All acquired pages of an edition combined into one PDF.

    Attributes:
        edition_date: Publication date of the edition
        payload: Serialized PDF bytes
        page_count: Number of pages inside the PDF
        source_pages: Edition page indices merged, in output order
        path: Where the document was written, once written
    """

    edition_date: date
    payload: bytes
    page_count: int
    source_pages: tuple[int, ...] = ()
    path: Path | None = None

    @property
    def filename(self) -> str:
        if self.path is not None:
            return self.path.name
        return f"{self.edition_date.isoformat()}_odiya_news.pdf"

    def written_to(self, path: Path) -> "MergedDocument":
        return replace(self, path=path)


@dataclass(frozen=True)
class DistributionOutcome:
    """Result of delivering a merged document to a messaging channel.

    Attributes:
        status: "success" or "failure"
        remote_id: Identifier assigned by the remote service on success
        reason: Why delivery failed
    """

    status: Literal["success", "failure"]
    remote_id: str | None = None
    reason: str | None = None

    @classmethod
    def success(cls, remote_id: str | None) -> "DistributionOutcome":
        return cls(status="success", remote_id=remote_id)

    @classmethod
    def failure(cls, reason: str) -> "DistributionOutcome":
        return cls(status="failure", reason=reason)

    @property
    def is_success(self) -> bool:
        return self.status == "success"
