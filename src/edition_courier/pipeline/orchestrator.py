"""Pipeline orchestrator for one edition run.

Wires the viewer, assembler and distributor together: acquire every page of
the day's edition, merge them into one PDF and share it into Slack.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import date

from edition_courier.assemblers import PDFAssembler
from edition_courier.clients import SlackClient
from edition_courier.config import CourierConfig
from edition_courier.distributors import SlackDistributor
from edition_courier.viewer import (
    ExportFetcher,
    NavigationRetryController,
    PageSequencer,
    PlaywrightSession,
    ViewerSession,
)
from edition_courier.viewer.navigator import Sleep
from edition_courier.workspace import OutputDirectory
from schemas.artifact import RunResult
from schemas.document import DistributionOutcome, MergedDocument
from schemas.edition import Edition

logger = logging.getLogger(__name__)


class Orchestrator:
    """End-to-end run for a single edition.

    Stages, in order:
    1. Empty the output directory
    2. Open a viewer session and navigate to the edition (with retries)
    3. Read the page count and acquire every page in order
    4. Release the session, whatever happened in 2-3
    5. Merge the acquired pages and write the merged PDF
    6. Share the merged PDF into Slack
    7. Empty the output directory again, only if sharing succeeded

    Errors in stages 2, 3 and 5 propagate to the caller. A failed delivery
    is returned as an outcome, leaving the files on disk for inspection.

    Attributes:
        config: Run configuration
        output: Output directory for page and merged PDFs
    """

    def __init__(
        self,
        config: CourierConfig,
        session_factory: Callable[[], ViewerSession] | None = None,
        slack_client: SlackClient | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.config = config
        self.output = OutputDirectory(config.output_dir)
        self.session_factory = session_factory or (
            lambda: PlaywrightSession.from_config(config)
        )
        self.navigator = NavigationRetryController.from_config(config, sleep=sleep)
        self.sequencer = PageSequencer(ExportFetcher(self.output))
        self.assembler = PDFAssembler()
        self._slack_client = slack_client

    def run(self, edition_date: date) -> DistributionOutcome:
        """Acquire, merge and distribute the edition for a date.

        Args:
            edition_date: Publication date of the edition

        Returns:
            The distribution outcome

        Raises:
            NavigationError: If the viewer never became usable
            ExportTimeout: If a page did not render or export in time
            MergeError: If the acquired pages could not be merged
        """
        edition = Edition(date=edition_date, base_url=self.config.base_url)
        logger.info(f"Date: {edition.date_str}")
        logger.info(f"URL: {edition.viewer_url}")

        self.output.clear()
        self.output.ensure()

        result = asyncio.run(self.acquire(edition))
        document = self.assemble(result)
        outcome = self.distribute(document)

        if outcome.is_success:
            logger.info(f"PDF sent successfully to Slack! File ID: {outcome.remote_id}")
            self.output.clear()
        else:
            logger.error(f"Failed to send PDF to Slack: {outcome.reason}")

        return outcome

    async def acquire(self, edition: Edition) -> RunResult:
        """Acquire every page of the edition in one viewer session.

        The session is closed on every exit path, including failed
        navigation and timed-out pages.
        """
        session = self.session_factory()
        try:
            await session.open()
            await self.navigator.establish_session(session, edition)

            total = await session.page_count()
            edition = edition.with_page_count(total)
            logger.info(f"Total pages in this issue: {total}")

            return await self.sequencer.run(session, edition)
        finally:
            await session.close()

    def assemble(self, result: RunResult) -> MergedDocument:
        """Merge the run's acquired pages and write the merged PDF."""
        date_str = result.edition.date_str
        document = self.assembler.merge(result.artifacts, result.edition.date)
        return self.assembler.write(document, self.output.merged_path(date_str))

    def distribute(self, document: MergedDocument) -> DistributionOutcome:
        """Share the merged PDF into the configured Slack channel."""
        logger.info("Sending PDF to Slack...")
        if self._slack_client is not None:
            distributor = SlackDistributor(self._slack_client)
            return distributor.distribute(document, self.config.slack_channel_id)

        with SlackClient(self.config.slack_client_config()) as client:
            distributor = SlackDistributor(client)
            return distributor.distribute(document, self.config.slack_channel_id)
