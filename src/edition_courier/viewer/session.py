"""Viewer sessions: the capability used to drive the page-flip viewer.

The sequencer and fetcher only ever talk to a ``ViewerSession``. How a page
is selected (which control, which DOM event) and how an export is captured
stays behind this interface, in ``PlaywrightSession``.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from edition_courier.config import CourierConfig, ViewerSelectors
from edition_courier.exceptions import ExportTimeout

logger = logging.getLogger(__name__)


class ViewerSession(ABC):
    """Abstract live connection to the page-flip viewer.

    A session holds one page of mutable viewer state (the selected page), so
    its operations must be awaited one at a time.
    """

    async def __aenter__(self) -> "ViewerSession":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @abstractmethod
    async def open(self) -> None:
        """Acquire the underlying remote resources."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying remote resources."""
        pass

    @abstractmethod
    async def navigate(self, url: str, timeout: float) -> None:
        """Load the viewer at url, returning once the network is idle."""
        pass

    @abstractmethod
    async def has_page_control(self) -> bool:
        """Whether the page-selection control is present."""
        pass

    @abstractmethod
    async def page_count(self) -> int:
        """Number of pages offered by the page-selection control."""
        pass

    @abstractmethod
    async def select_page(self, page_index: int) -> str | None:
        """Select a page, wait for it to render and read the selection back.

        Returns:
            The value the page-selection control holds after rendering

        Raises:
            ExportTimeout: If the page does not render in time (stage "render")
        """
        pass

    @abstractmethod
    async def export_current_page(self) -> bytes:
        """Trigger the export of the selected page and return its bytes.

        Raises:
            ExportTimeout: If the export control or the download does not
                appear in time (stage "export" or "download")
        """
        pass


class PlaywrightSession(ViewerSession):
    """Viewer session backed by a headless Chromium driven by Playwright.

    Example:
        async with PlaywrightSession.from_config(config) as session:
            await session.navigate(edition.viewer_url, timeout=60)
            total = await session.page_count()
    """

    def __init__(
        self,
        selectors: ViewerSelectors | None = None,
        headless: bool = True,
        render_timeout: float = 30.0,
        export_timeout: float = 30.0,
        download_timeout: float = 60.0,
    ):
        self.selectors = selectors or ViewerSelectors()
        self.headless = headless
        self.render_timeout = render_timeout
        self.export_timeout = export_timeout
        self.download_timeout = download_timeout

        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None
        self._current_page: int = 0

    @classmethod
    def from_config(cls, config: CourierConfig) -> "PlaywrightSession":
        return cls(
            selectors=config.selectors,
            headless=config.headless,
            render_timeout=config.render_timeout,
            export_timeout=config.export_timeout,
            download_timeout=config.download_timeout,
        )

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("Session is not open")
        return self._page

    async def open(self) -> None:
        if self._page is not None:
            return
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(headless=self.headless)
        self._context = await self._browser.new_context(accept_downloads=True)
        self._page = await self._context.new_page()
        logger.debug("Browser session opened")

    async def close(self) -> None:
        browser, playwright = self._browser, self._playwright
        self._playwright = None
        self._browser = None
        self._context = None
        self._page = None

        try:
            if browser is not None:
                await browser.close()
        finally:
            if playwright is not None:
                await playwright.stop()
        if browser is not None or playwright is not None:
            logger.debug("Browser session closed")

    async def navigate(self, url: str, timeout: float) -> None:
        await self.page.goto(url, wait_until="networkidle", timeout=timeout * 1000)

    async def has_page_control(self) -> bool:
        return await self.page.query_selector(self.selectors.page_select) is not None

    async def page_count(self) -> int:
        count = await self.page.eval_on_selector(
            self.selectors.page_select,
            "select => select.options.length",
        )
        return int(count)

    async def select_page(self, page_index: int) -> str | None:
        self._current_page = page_index

        # The viewer only re-renders on a change event, not on a value write.
        await self.page.eval_on_selector(
            self.selectors.page_select,
            """(select, value) => {
                select.value = value;
                select.dispatchEvent(new Event("change"));
            }""",
            str(page_index),
        )

        try:
            await self.page.wait_for_selector(
                self.selectors.page_ready, timeout=self.render_timeout * 1000
            )
        except PlaywrightTimeoutError as e:
            raise ExportTimeout(page_index, "render", self.render_timeout) from e

        return await self.page.eval_on_selector(
            self.selectors.page_select,
            "select => select.value",
        )

    async def export_current_page(self) -> bytes:
        page_index = self._current_page

        try:
            await self.page.wait_for_selector(
                self.selectors.export_button, timeout=self.export_timeout * 1000
            )
        except PlaywrightTimeoutError as e:
            raise ExportTimeout(page_index, "export", self.export_timeout) from e

        try:
            async with self.page.expect_download(
                timeout=self.download_timeout * 1000
            ) as download_info:
                await self.page.click(self.selectors.export_button)
            download = await download_info.value
        except PlaywrightTimeoutError as e:
            raise ExportTimeout(page_index, "download", self.download_timeout) from e

        download_path = await download.path()
        return Path(download_path).read_bytes()
