"""Export of a single page from the page-flip viewer."""

import logging

from edition_courier.exceptions import PageMismatch
from edition_courier.workspace import OutputDirectory
from schemas.artifact import PageArtifact
from schemas.edition import Edition

from .session import ViewerSession

logger = logging.getLogger(__name__)


class ExportFetcher:
    """Selects one page in the viewer and captures its PDF export.

    A viewer that renders a different page than the one requested is not an
    error: the page is recorded as a mismatch and the caller moves on.
    Timeouts raised by the session are not caught here.

    Attributes:
        output: Where page exports are persisted
    """

    def __init__(self, output: OutputDirectory):
        self.output = output

    async def fetch_page(
        self,
        session: ViewerSession,
        edition: Edition,
        page_index: int,
        total_pages: int,
    ) -> PageArtifact:
        """Acquire one page of the edition.

        Args:
            session: Viewer session already showing the edition
            edition: The edition being acquired
            page_index: 1-based page to export
            total_pages: Page count of the edition, for progress logging

        Returns:
            An ok artifact carrying the exported bytes, or a mismatch artifact

        Raises:
            ExportTimeout: If the viewer does not render or export in time
        """
        logger.info(f"Processing page {page_index}/{total_pages}...")

        selected = await session.select_page(page_index)
        if selected != str(page_index):
            mismatch = PageMismatch(page_index, selected)
            logger.error(str(mismatch))
            return PageArtifact.mismatch(page_index, str(mismatch))

        payload = await session.export_current_page()
        path = self.output.write_page(edition.date_str, page_index, payload)

        logger.info(f"Page {page_index} downloaded successfully ({len(payload)} bytes)")
        return PageArtifact.ok(page_index, payload, path)
