"""
Owns the single long-lived headless browser shared by all render requests.

The `BrowserSupervisor` starts the Playwright driver and a Chromium instance
lazily on the first request (or eagerly at startup), hands the same `Browser`
to every caller, and closes it once on shutdown. Launching is serialized with
an `asyncio.Lock` so that concurrent first requests share one launch.
"""
import asyncio
from typing import List, Optional, TYPE_CHECKING

from playwright.async_api import async_playwright, Browser, Playwright

from prerender_service.core.exceptions import BrowserLaunchError
from prerender_service.core.logger import get_logger

if TYPE_CHECKING:
    from prerender_service.core.config import ConfigurationManager

logger = get_logger(__name__)


class BrowserSupervisor:
    """
    Lazily launched, process-wide Chromium handle.

    Attributes:
        headless (bool): Whether Chromium runs headless.
        launch_args (List[str]): Command-line switches passed to Chromium.
        playwright (Optional[Playwright]): The running Playwright driver, if any.
        browser (Optional[Browser]): The launched browser, if any.
        launch_count (int): Number of successful launches since construction.
    """
    DEFAULT_HEADLESS = True
    # The service runs in a restricted container: Chromium's own sandbox is unavailable,
    # and site isolation is disabled to keep the per-process memory footprint low.
    DEFAULT_LAUNCH_ARGS = (
        "--no-sandbox",
        "--disable-setuid-sandbox",
        "--disable-dev-shm-usage",
        "--disable-gpu",
        "--disable-features=IsolateOrigins,site-per-process",
    )

    def __init__(self, config: Optional['ConfigurationManager'] = None):
        """
        Initializes the supervisor without launching anything.

        Args:
            config (Optional[ConfigurationManager]): Source of
                `components.browser_supervisor.headless` and `.launch_args`.
                If None, defaults are used.
        """
        if config:
            self.headless: bool = bool(config.get('components.browser_supervisor.headless', self.DEFAULT_HEADLESS))
            self.launch_args: List[str] = list(config.get('components.browser_supervisor.launch_args', self.DEFAULT_LAUNCH_ARGS))
        else:
            self.headless = self.DEFAULT_HEADLESS
            self.launch_args = list(self.DEFAULT_LAUNCH_ARGS)

        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.launch_count = 0
        self._lock = asyncio.Lock()

        logger.info(f"BrowserSupervisor configured: headless={self.headless}, args={self.launch_args}")

    @property
    def is_running(self) -> bool:
        """True when a launched browser is still connected."""
        return self.browser is not None and self.browser.is_connected()

    async def ensure_running(self) -> Browser:
        """
        Returns the shared browser, launching it first if necessary.

        Callers arriving while a launch is in flight wait on the lock and then
        observe the freshly published handle instead of launching again.

        Returns:
            Browser: The shared Playwright browser.

        Raises:
            BrowserLaunchError: If Playwright or Chromium fails to start. The handle is
                                left unset so the next call attempts a new launch.
        """
        if self.is_running:
            return self.browser

        async with self._lock:
            if self.is_running:
                return self.browser

            if self.browser is not None or self.playwright is not None:
                logger.warning("Browser is no longer connected. Releasing the stale handle before relaunching.")
                await self._release()

            await self._launch()
            return self.browser

    async def _launch(self) -> None:
        logger.info("Launching headless chromium browser.")
        playwright: Optional[Playwright] = None
        try:
            playwright = await async_playwright().start()
            browser = await playwright.chromium.launch(headless=self.headless, args=self.launch_args)
        except Exception as e:
            logger.error(f"Failed to initialize Playwright or launch chromium: {e}", exc_info=True)
            if playwright:
                try:
                    await playwright.stop()
                except Exception as stop_e:
                    logger.error(f"Error stopping Playwright after failed launch: {stop_e}", exc_info=True)
            raise BrowserLaunchError(f"Failed to initialize Playwright or launch browser chromium: {e}", original_exception=e)

        self.playwright = playwright
        self.browser = browser
        self.launch_count += 1
        logger.info(f"Chromium browser launched successfully (launch #{self.launch_count}).")

    async def _release(self) -> None:
        if self.browser:
            try:
                await self.browser.close()
                logger.info("Browser closed successfully.")
            except Exception as e:
                logger.error(f"Error closing browser: {e}", exc_info=True)
        if self.playwright:
            try:
                await self.playwright.stop()
                logger.info("Playwright stopped successfully.")
            except Exception as e:
                logger.error(f"Error stopping Playwright: {e}", exc_info=True)

        self.browser = None
        self.playwright = None

    async def shutdown(self) -> None:
        """
        Closes the browser and stops the Playwright driver.

        Safe to call when nothing was launched or after a previous shutdown;
        the browser is never closed twice.
        """
        async with self._lock:
            if self.browser is None and self.playwright is None:
                logger.debug("BrowserSupervisor.shutdown called with no browser running.")
                return
            logger.info("Shutting down browser supervisor.")
            await self._release()
