"""Output directory holding per-page and merged PDFs for a run."""

import logging
from pathlib import Path

from .exceptions import CleanupError

logger = logging.getLogger(__name__)

MERGED_SUFFIX = "odiya_news"


class OutputDirectory:
    """Names and cleans the files a run writes.

    Per-page exports are written as ``<date>_page-<n>.pdf`` and the merged
    edition as ``<date>_odiya_news.pdf``. The directory is emptied before a
    run starts and again after a successful distribution.

    Example:
        output = OutputDirectory(Path("./downloads"))
        output.ensure()
        path = output.page_path("2026-10-19", 3)
    """

    def __init__(self, root: Path):
        self.root = root

    def __repr__(self) -> str:
        return f"OutputDirectory('{self.root}')"

    def ensure(self) -> Path:
        """Create the directory if it does not exist yet."""
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    def page_path(self, date_str: str, page_index: int) -> Path:
        return self.root / f"{date_str}_page-{page_index}.pdf"

    def merged_path(self, date_str: str) -> Path:
        return self.root / f"{date_str}_{MERGED_SUFFIX}.pdf"

    def write_page(self, date_str: str, page_index: int, payload: bytes) -> Path:
        """Persist the export for one page and return where it was written."""
        path = self.page_path(date_str, page_index)
        path.write_bytes(payload)
        return path

    def clear(self) -> list[str]:
        """Delete every file in the directory, best effort.

        Deletion failures are logged and skipped so that cleanup never masks
        the outcome of the run.

        Returns:
            Names of the files that were deleted
        """
        if not self.root.is_dir():
            return []

        deleted: list[str] = []
        for path in sorted(self.root.iterdir()):
            if not path.is_file():
                continue
            try:
                path.unlink()
            except OSError as e:
                logger.error(str(CleanupError(path, str(e))))
                continue
            deleted.append(path.name)
            logger.debug(f"Deleted: {path.name}")

        if deleted:
            logger.info(f"Cleaned {len(deleted)} files from {self.root}")
        return deleted
