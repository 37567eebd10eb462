"""Sequential acquisition of every page of an edition."""

import logging

from schemas.artifact import RunResult
from schemas.edition import Edition

from .fetcher import ExportFetcher
from .session import ViewerSession

logger = logging.getLogger(__name__)


class PageSequencer:
    """Walks an edition page by page through the export fetcher.

    Pages are visited strictly in order, one at a time: the viewer has a
    single selected page, so two exports in flight would overwrite each
    other's selection.
    """

    def __init__(self, fetcher: ExportFetcher):
        self.fetcher = fetcher

    async def run(self, session: ViewerSession, edition: Edition) -> RunResult:
        """Acquire pages 1..N of the edition.

        Args:
            session: Viewer session already showing the edition
            edition: Edition with its page count set

        Returns:
            RunResult with one artifact per page, in page order

        Raises:
            ValueError: If the edition's page count is unknown
            ExportTimeout: If any page times out; the run ends there
        """
        if edition.total_pages is None:
            raise ValueError(f"Edition {edition.date_str} has no page count")

        total = edition.total_pages
        result = RunResult(edition=edition, requested=total)

        for page_index in range(1, total + 1):
            artifact = await self.fetcher.fetch_page(session, edition, page_index, total)
            result.append(artifact)

        acquired = len(result.acquired)
        if acquired < total:
            logger.warning(
                f"Downloaded {acquired} pages out of {total} total pages"
            )
        logger.info(f"Download complete! Total files: {acquired}")

        return result
