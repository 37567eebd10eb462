"""Edition domain object."""

from dataclasses import dataclass, replace
from datetime import date


@dataclass(frozen=True)
class Edition:
    """Represents one day's issue of the newspaper in the page-flip viewer.

    The page count is unknown until a viewer session has been established,
    so an Edition starts without one and is replaced by a copy carrying the
    count once it has been read.

    Attributes:
        date: Publication date of the issue
        base_url: Root URL of the page-flip viewer
        total_pages: Number of pages in the issue, once discovered
    """

    date: date
    base_url: str
    total_pages: int | None = None

    @property
    def date_str(self) -> str:
        return self.date.isoformat()

    @property
    def viewer_url(self) -> str:
        """URL of the first page of this edition in the viewer."""
        return f"{self.base_url.rstrip('/')}/{self.date_str}/1"

    def with_page_count(self, total_pages: int) -> "Edition":
        """Return a copy of this edition with its page count fixed.

        Raises:
            ValueError: If the count is negative or conflicts with one already read
        """
        if total_pages < 0:
            raise ValueError(f"Page count cannot be negative: {total_pages}")
        if self.total_pages is not None and self.total_pages != total_pages:
            raise ValueError(
                f"Edition {self.date_str} already has {self.total_pages} pages"
            )
        return replace(self, total_pages=total_pages)
