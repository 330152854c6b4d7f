"""
Per-request browsing contexts on the shared browser.

Each call to `BrowsingContextManager.render` opens an isolated `BrowserContext`
(own cookies, storage and JS realm), blocks layout-only sub-resources, waits for
network quiescence, cleans the resulting DOM and closes the context on every
exit path.
"""
from typing import Optional, TYPE_CHECKING

from playwright.async_api import Browser, BrowserContext, Page
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from prerender_service.components.extractor.content_cleaner import ContentCleaner
from prerender_service.components.renderer.resource_filter import BLOCKED_RESOURCE_TYPES, ResourceFilter
from prerender_service.core.exceptions import ExtractorError, NavigationError, NavigationTimeoutError, RendererError
from prerender_service.core.logger import get_logger
from prerender_service.core.models import RenderedPage

if TYPE_CHECKING:
    from prerender_service.core.config import ConfigurationManager

logger = get_logger(__name__)

DEFAULT_NAVIGATION_TIMEOUT_MS = 20000
DEFAULT_WAIT_UNTIL = "networkidle"


class BrowsingContextManager:
    """
    Renders one URL per call in a fresh, disposable browsing context.

    Attributes:
        navigation_timeout_ms (int): Deadline for `page.goto` to reach `wait_until`.
        wait_until (str): Playwright load state that counts as "settled".
        blocked_resource_types (frozenset): Resource types aborted by the route handler.
        cleaner (ContentCleaner): Noise-element remover applied to the settled DOM.
    """
    def __init__(self, config: Optional['ConfigurationManager'] = None, cleaner: Optional[ContentCleaner] = None):
        if config:
            self.navigation_timeout_ms = int(config.get('components.browsing_context.navigation_timeout_ms', DEFAULT_NAVIGATION_TIMEOUT_MS))
            self.wait_until = config.get('components.browsing_context.wait_until', DEFAULT_WAIT_UNTIL)
            self.blocked_resource_types = frozenset(config.get('components.browsing_context.blocked_resource_types', BLOCKED_RESOURCE_TYPES))
        else:
            self.navigation_timeout_ms = DEFAULT_NAVIGATION_TIMEOUT_MS
            self.wait_until = DEFAULT_WAIT_UNTIL
            self.blocked_resource_types = BLOCKED_RESOURCE_TYPES
        self.cleaner = cleaner or ContentCleaner(config)

    async def render(self, browser: Browser, url: str) -> RenderedPage:
        """
        Navigates a new context to `url` and returns the cleaned page.

        Args:
            browser (Browser): The shared browser from `BrowserSupervisor.ensure_running()`.
            url (str): Absolute http(s) URL to render.

        Returns:
            RenderedPage: Cleaned body markup plus title and final URL.

        Raises:
            NavigationTimeoutError: If the page does not settle before the deadline.
            NavigationError: If navigation fails for any other reason.
            RendererError: If the context cannot be created or the DOM cannot be read.
            ExtractorError: If the rendered document cannot be cleaned.
        """
        context: Optional[BrowserContext] = None
        logger.info(f"Rendering {url} (wait_until={self.wait_until}, timeout={self.navigation_timeout_ms}ms)")

        try:
            try:
                context = await browser.new_context()
                page: Page = await context.new_page()
            except PlaywrightError as e:
                raise RendererError(f"Failed to open browsing context: {e}")

            # Must be installed before goto so that the first sub-resources are filtered too.
            resource_filter = ResourceFilter(self.blocked_resource_types)
            await page.route("**/*", resource_filter.handle_route)

            try:
                await page.goto(url, wait_until=self.wait_until, timeout=self.navigation_timeout_ms)
            except PlaywrightTimeoutError:
                logger.warning(f"Navigation to {url} timed out after {self.navigation_timeout_ms}ms.")
                raise NavigationTimeoutError(url, self.navigation_timeout_ms)
            except PlaywrightError as e:
                raise NavigationError(url, str(e))

            try:
                document = await page.content()
                title = await page.title()
            except PlaywrightError as e:
                raise RendererError(f"Failed to read rendered DOM for '{url}': {e}")

            logger.debug(
                f"{url} settled: {resource_filter.blocked_count} sub-resources blocked, "
                f"{resource_filter.allowed_count} allowed."
            )
            html = self.cleaner.clean(document)
            return RenderedPage(url=url, final_url=page.url or url, title=title or None, html=html)
        except (RendererError, ExtractorError) as e:
            logger.error(f"Render of {url} failed: {e}", exc_info=True)
            raise
        finally:
            if context:
                try:
                    await context.close()
                    logger.debug(f"Browsing context for {url} closed.")
                except Exception as e:
                    logger.error(f"Error closing browsing context for '{url}': {e}", exc_info=True)
