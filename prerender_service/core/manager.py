import time
from typing import Optional, TYPE_CHECKING

from prerender_service.components.converter.markdown_converter import MarkdownConverter
from prerender_service.components.extractor.readability_extractor import ReadabilityExtractor
from prerender_service.components.renderer.browser_supervisor import BrowserSupervisor
from prerender_service.components.renderer.context_manager import BrowsingContextManager
from prerender_service.core.exceptions import BrowserLaunchError
from prerender_service.core.logger import get_logger
from prerender_service.core.models import (
    ExtractionMode,
    HTML_CONTENT_TYPE,
    MARKDOWN_CONTENT_TYPE,
    OutputFormat,
    RenderRequest,
    RenderResult,
)

if TYPE_CHECKING:
    from prerender_service.core.config import ConfigurationManager

logger = get_logger(__name__)


class RenderManager:
    """
    Orchestrates a render request across the pipeline components.

    The manager owns the `BrowserSupervisor` (and through it the shared browser)
    and routes the rendered page through the readability extractor and the
    Markdown converter as the request's selectors demand. Errors from any stage
    propagate unchanged; nothing is retried.
    """
    def __init__(
        self,
        config: Optional['ConfigurationManager'] = None,
        supervisor: Optional[BrowserSupervisor] = None,
        context_manager: Optional[BrowsingContextManager] = None,
        extractor: Optional[ReadabilityExtractor] = None,
        converter: Optional[MarkdownConverter] = None,
    ):
        """
        Initializes the RenderManager and its components. Nothing is launched here.

        Args:
            config (Optional[ConfigurationManager]): Configuration passed to every
                component built by default.
            supervisor, context_manager, extractor, converter: Pre-built components,
                mainly for tests. Each defaults to a new instance configured from `config`.
        """
        self.config = config
        self.supervisor = supervisor or BrowserSupervisor(config=config)
        self.context_manager = context_manager or BrowsingContextManager(config=config)
        self.extractor = extractor or ReadabilityExtractor(config=config)
        self.converter = converter or MarkdownConverter()
        self.launch_on_startup = bool(config.get('components.browser_supervisor.launch_on_startup', False)) if config else False

    async def startup(self) -> None:
        """
        Launches the browser eagerly when `launch_on_startup` is configured.

        A failed launch is logged and does not stop the service; the handle stays
        unset and the next render attempts the launch again.
        """
        if self.launch_on_startup:
            logger.info("Eager browser launch requested by configuration.")
            try:
                await self.supervisor.ensure_running()
            except BrowserLaunchError as e:
                logger.error(f"Eager browser launch failed, deferring to first render: {e}", exc_info=True)

    async def shutdown(self) -> None:
        await self.supervisor.shutdown()

    async def render(self, request: RenderRequest) -> RenderResult:
        """
        Renders `request.url` and returns the payload selected by the request.

        | output_format | extraction_mode | body                          |
        |---------------|-----------------|-------------------------------|
        | html          | raw             | cleaned body markup           |
        | html          | readable        | readability article HTML      |
        | markdown      | raw             | Markdown of cleaned markup    |
        | markdown      | readable        | Markdown of the article HTML  |

        Raises:
            BrowserLaunchError, NavigationError, NavigationTimeoutError, RendererError,
            ExtractorError, ConverterError: Propagated from the failing stage.
        """
        started = time.monotonic()
        logger.info(
            f"Render requested: url={request.url} format={request.output_format.value} "
            f"mode={request.extraction_mode.value}"
        )

        browser = await self.supervisor.ensure_running()
        page = await self.context_manager.render(browser, request.url)

        html = page.html
        if request.extraction_mode == ExtractionMode.READABLE:
            article = self.extractor.extract_readable(page.html, page.final_url, fallback_title=page.title)
            html = article.content

        if request.output_format == OutputFormat.MARKDOWN:
            result = RenderResult(content_type=MARKDOWN_CONTENT_TYPE, body=self.converter.convert(html))
        else:
            result = RenderResult(content_type=HTML_CONTENT_TYPE, body=html)

        logger.info(f"Render of {request.url} completed in {time.monotonic() - started:.2f}s ({len(result.body)} chars).")
        return result
