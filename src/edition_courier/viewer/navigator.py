"""Bounded-retry navigation to the edition in the page-flip viewer."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from edition_courier.config import CourierConfig
from edition_courier.exceptions import NavigationError
from schemas.edition import Edition

from .session import ViewerSession

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class NavigationRetryController:
    """Brings a viewer session to a usable state for an edition.

    The viewer renders its controls client-side after the page has loaded,
    sometimes slowly. Each attempt therefore loads the edition URL, waits a
    fixed settling delay and only then checks for the page-selection control.
    A missing control counts as a failed attempt, exactly like a navigation
    timeout.

    The controller never opens or closes the session; whoever opened it
    releases it.

    Attributes:
        max_attempts: Navigation attempts before giving up
        navigation_timeout: Seconds allowed for each page load
        settle_delay: Seconds to wait after load before checking controls
        retry_delay: Seconds to wait between attempts
    """

    def __init__(
        self,
        max_attempts: int = 3,
        navigation_timeout: float = 60.0,
        settle_delay: float = 2.0,
        retry_delay: float = 5.0,
        sleep: Sleep = asyncio.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.navigation_timeout = navigation_timeout
        self.settle_delay = settle_delay
        self.retry_delay = retry_delay
        self._sleep = sleep

    @classmethod
    def from_config(
        cls, config: CourierConfig, sleep: Sleep = asyncio.sleep
    ) -> "NavigationRetryController":
        return cls(
            max_attempts=config.max_navigation_attempts,
            navigation_timeout=config.navigation_timeout,
            settle_delay=config.settle_delay,
            retry_delay=config.retry_delay,
            sleep=sleep,
        )

    async def establish_session(
        self, session: ViewerSession, edition: Edition
    ) -> ViewerSession:
        """Navigate the session to the edition, retrying transient failures.

        Args:
            session: An open viewer session
            edition: The edition to load

        Returns:
            The same session, now showing the edition's first page

        Raises:
            NavigationError: If no attempt produced a usable viewer
        """
        url = edition.viewer_url
        last_error: Exception | None = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                await self._attempt(session, url)
                logger.info(f"Viewer ready for {edition.date_str} (attempt {attempt})")
                return session
            except Exception as e:
                last_error = e
                logger.warning(
                    f"Navigation attempt {attempt}/{self.max_attempts} failed: {e}"
                )
                if attempt < self.max_attempts:
                    await self._sleep(self.retry_delay)

        raise NavigationError(self.max_attempts, url) from last_error

    async def _attempt(self, session: ViewerSession, url: str) -> None:
        """Run one navigation attempt, raising on any failure."""
        logger.debug(f"Navigating to {url}")
        await session.navigate(url, self.navigation_timeout)
        await self._sleep(self.settle_delay)

        if not await session.has_page_control():
            raise LookupError("Page selection control not found after load")
